"""Relation resolution and serialization for tabledoc."""

from tabledoc.core.builder import Document, DocumentBuilder
from tabledoc.core.registry import CycleCheck, RelationRegistry
from tabledoc.core.serializer import JsonSerializer, SerializerOptions

__all__ = [
    "Document",
    "DocumentBuilder",
    "CycleCheck",
    "RelationRegistry",
    "JsonSerializer",
    "SerializerOptions",
]
