"""
API routes package.
"""
from mockprep.api import health, questions

__all__ = ["health", "questions"]
