"""Typed failures raised while parsing or validating JSON:API input."""

from __future__ import annotations

from typing import Any


class JSONAPIError(Exception):
    """Base class for failures that map onto a JSON:API error object."""

    status: str = "400"
    title: str = "Bad Request"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> str:
        return self.message

    @property
    def source(self) -> dict[str, str] | None:
        return None

    @property
    def links(self) -> dict[str, str] | None:
        return None


class InvalidDocument(JSONAPIError):
    """A request or response document does not follow the JSON:API grammar."""

    title = "Invalid Document"

    def __init__(
        self,
        message: str,
        *,
        pointer: str | None = None,
        reference: str | None = None,
    ) -> None:
        super().__init__(message)
        self.pointer = pointer
        self.reference = reference

    @property
    def source(self) -> dict[str, str] | None:
        if self.pointer is None:
            return None
        return {"pointer": self.pointer}

    @property
    def links(self) -> dict[str, str] | None:
        if self.reference is None:
            return None
        return {"about": self.reference}


class InvalidQuery(JSONAPIError):
    """A query parameter value was rejected for a resource type."""

    title = "Invalid Query Parameter"

    def __init__(self, *, type: str, param: str, value: Any) -> None:
        super().__init__(f"invalid parameter {param}={value} for type {type}")
        self.type = type
        self.param = param
        self.value = value

    @property
    def source(self) -> dict[str, str]:
        return {"parameter": self.param}


class InvalidHeader(JSONAPIError):
    """A request header failed JSON:API content negotiation."""

    title = "Invalid Header"

    def __init__(
        self,
        *,
        header: str,
        message: str,
        status: str,
        reference: str | None = None,
    ) -> None:
        super().__init__(message)
        self.header = header
        self.status = status
        self.reference = reference

    @property
    def source(self) -> dict[str, str]:
        return {"header": self.header}

    @property
    def links(self) -> dict[str, str] | None:
        if self.reference is None:
            return None
        return {"about": self.reference}
