"""Use-cases that talk to the outside world."""
