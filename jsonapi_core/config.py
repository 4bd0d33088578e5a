"""Per-API configuration for JSON:API rendering and parsing."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict


class FieldCase(str, Enum):
    """How field names are cased on the wire."""

    CAMELIZE = "camelize"
    DASHERIZE = "dasherize"
    UNDERSCORE = "underscore"


class JSONAPISettings(BaseModel):
    """Settings shared by every request handled through one API instance.

    Attributes:
        case: Case mode applied to attribute and relationship names crossing the wire.
        version: JSON:API version advertised in the ``jsonapi`` object.
        include_allowlist: Optional include tree restricting which relationship paths
            clients may request with ``include``.
        client_generated_ids: Reject inbound resource objects that carry no ``id``.
        jsonapi_object: Emit the top-level ``jsonapi`` member on rendered documents.
    """

    model_config = ConfigDict(frozen=True)

    case: FieldCase = FieldCase.CAMELIZE
    version: Literal["1.0", "1.1"] = "1.0"
    include_allowlist: Optional[dict[str, Any]] = None
    client_generated_ids: bool = False
    jsonapi_object: bool = False
