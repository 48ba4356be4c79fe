"""End-to-end smoke runner for a live toolhub server."""
