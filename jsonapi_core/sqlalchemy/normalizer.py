"""Normalizer for SQLAlchemy mapped instances."""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import InstanceState
from sqlalchemy.orm.attributes import NO_VALUE

from jsonapi_core.normalizer.base import Normalizer


class SQLAlchemyNormalizer(Normalizer):
    """Render mapped instances without ever emitting a lazy load.

    Relationships that were not loaded by the query (``selectinload``,
    ``joinedload``, an earlier access...) are left out of the resource object
    and of ``included``. Result objects such as ``session.scalars(...)`` render
    as collections.
    """

    def is_loaded(self, data: Any, key: str) -> bool:
        try:
            state = inspect(data)
        except NoInspectionAvailable:
            return super().is_loaded(data, key)
        if key not in state.attrs:
            return True
        return state.attrs[key].loaded_value is not NO_VALUE

    def is_collection(self, value: Any) -> bool:
        # A mapped instance is one resource even when its class is iterable.
        if isinstance(inspect(value, raiseerr=False), InstanceState):
            return False
        return super().is_collection(value)
