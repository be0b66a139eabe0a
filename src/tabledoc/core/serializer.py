"""JSON serialization of resolved documents."""

import base64
import json
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from pydantic import Field

from tabledoc.models.base import TableDocBaseModel
from tabledoc.models import Table
from tabledoc.core.registry import RelationRegistry


class SerializerOptions(TableDocBaseModel):
    """Options passed to the JSON encoder."""

    indent: Optional[int] = Field(
        default=None, ge=0, description="Indentation width, compact output if None"
    )
    ensure_ascii: bool = Field(
        default=False, description="Escape non-ASCII characters"
    )
    sort_keys: bool = Field(
        default=False, description="Sort document keys instead of keeping build order"
    )


def encode_value(value: Any) -> Any:
    """Convert cell values the json module cannot encode natively."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonSerializer:
    """Serializes the documents resolved from a root table to JSON text."""

    def __init__(self, options: Optional[SerializerOptions] = None):
        self.options = options or SerializerOptions()

    def serialize(self, registry: RelationRegistry, table: Table) -> str:
        """Resolve ``table`` through ``registry`` and encode the documents.

        Raises:
            ValueError: If a cell holds NaN or an infinite float
        """
        documents = registry.resolve(table)

        return json.dumps(
            documents,
            indent=self.options.indent,
            ensure_ascii=self.options.ensure_ascii,
            sort_keys=self.options.sort_keys,
            allow_nan=False,
            default=encode_value,
        )
