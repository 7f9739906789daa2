"""FastAPI dependencies."""
from api.dependencies.auth import require_admin

__all__ = ["require_admin"]
