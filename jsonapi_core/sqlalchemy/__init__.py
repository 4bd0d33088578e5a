"""SQLAlchemy helpers for JSON:API."""

from .normalizer import SQLAlchemyNormalizer

__all__ = ["SQLAlchemyNormalizer"]
