"""Base models for tabledoc."""

from pydantic import BaseModel, ConfigDict


class TableDocBaseModel(BaseModel):
    """Base model for configuration and value objects."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
    )


class TableDocEntityModel(TableDocBaseModel):
    """Base model for entities compared by identity.

    Two tables with the same name, columns and rows are still two different
    tables, so equality and hashing fall back to object identity instead of
    pydantic's field comparison.
    """

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)
