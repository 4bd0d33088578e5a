"""Normalizer: object graphs to documents and documents to params."""

from .base import Normalizer

__all__ = ["Normalizer"]
