"""HTTP routes and request/response schemas."""
from .routes import router

__all__ = ["router"]
