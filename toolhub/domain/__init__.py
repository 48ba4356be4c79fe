"""Pure domain logic: word counting, UUID generation, tool status.

No FastAPI/HTTP concerns live here so the same code serves the API, the
smoke runner and the unit tests.
"""
__all__ = ["words", "uuids", "status"]
