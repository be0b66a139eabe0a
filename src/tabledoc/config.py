"""Profile configuration for tabledoc.

A profile is a TOML file naming the CSV tables to load, the relations between
them, the root table and the JSON output options.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import toml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from tabledoc.core.registry import CycleCheck
from tabledoc.core.serializer import SerializerOptions
from tabledoc.models import Cardinality


class TableSource(BaseModel):
    """Where to load a table from."""

    model_config = ConfigDict(extra="forbid")

    path: Path = Field(description="CSV file, relative to the profile directory")
    encoding: str = Field(default="utf-8-sig", description="File encoding")
    delimiter: str = Field(default=",", description="Field delimiter")


class RelationConfig(BaseModel):
    """A relation between two tables of the profile."""

    model_config = ConfigDict(extra="forbid")

    parent: str = Field(description="Parent table name")
    child: str = Field(description="Child table name")
    output_key: str = Field(description="Document key for the embedded value")
    cardinality: Cardinality = Field(
        default=Cardinality.ARRAY, description="single or array"
    )
    on: List[str] = Field(
        default_factory=list,
        description="Join column pairs written as 'parent_column=child_column'",
    )

    @field_validator("on")
    @classmethod
    def validate_join_pairs(cls, value: List[str]) -> List[str]:
        for pair in value:
            parent, sep, child = pair.partition("=")
            if not sep or not parent.strip() or not child.strip():
                raise ValueError(
                    f"Join pair '{pair}' must look like 'parent_column=child_column'"
                )
        return value

    def join_pairs(self) -> List[Tuple[str, str]]:
        """Return the join pairs as (parent column, child column) names."""
        pairs = []
        for pair in self.on:
            parent, _, child = pair.partition("=")
            pairs.append((parent.strip(), child.strip()))
        return pairs


class ProfileConfig(BaseModel):
    """Configuration stored in a profile TOML file."""

    model_config = ConfigDict(extra="forbid")

    root: Optional[str] = Field(default=None, description="Root table name")
    tables: Dict[str, TableSource] = Field(
        default_factory=dict, description="Table sources by table name"
    )
    relations: List[RelationConfig] = Field(
        default_factory=list, description="Relations in registration order"
    )
    cycle_check: CycleCheck = Field(
        default="full", description="'full' or 'reverse' cycle detection"
    )
    max_depth: Optional[int] = Field(
        default=None, ge=0, description="Nesting limit while building documents"
    )
    output: SerializerOptions = Field(
        default_factory=SerializerOptions, description="JSON output options"
    )


class Config:
    """Loads a tabledoc profile."""

    def __init__(self, profile_path: Union[str, Path]):
        """Initialize config loader.

        Args:
            profile_path: Path to the profile TOML file
        """
        self.profile_path = Path(profile_path)
        self.base_dir = self.profile_path.parent
        self._config: Optional[ProfileConfig] = None

    @property
    def exists(self) -> bool:
        """Check if the profile file exists."""
        return self.profile_path.exists()

    def load(self) -> ProfileConfig:
        """Load the profile from disk, with environment variable overrides."""
        if not self.exists:
            raise FileNotFoundError(f"Profile not found at {self.profile_path}")

        with open(self.profile_path, "r") as f:
            data = toml.load(f)

        self._apply_env_overrides(data)

        self._config = ProfileConfig(**data)
        return self._config

    def _apply_env_overrides(self, data: Dict[str, Any]) -> None:
        """Apply environment variable overrides to configuration data."""
        if env_root := os.environ.get("TABLEDOC_ROOT"):
            data["root"] = env_root

        output = data.setdefault("output", {})

        if env_indent := os.environ.get("TABLEDOC_INDENT"):
            output["indent"] = int(env_indent)

        if env_ascii := os.environ.get("TABLEDOC_ENSURE_ASCII"):
            output["ensure_ascii"] = env_ascii.lower() in ("1", "true", "yes", "on")

