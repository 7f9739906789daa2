"""API route modules."""
from api.routes import auth, questions, results

__all__ = ["auth", "questions", "results"]
