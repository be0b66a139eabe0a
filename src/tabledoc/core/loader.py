"""Build a relation registry from a profile."""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from tabledoc.config import Config, ProfileConfig
from tabledoc.core.registry import RelationRegistry
from tabledoc.exceptions import InvalidReferenceError
from tabledoc.io.csv_loader import load_csv
from tabledoc.models import Relation, Table


logger = logging.getLogger(__name__)


def _lookup_table(registry: RelationRegistry, name: str) -> Table:
    try:
        return registry.get_table(name)
    except KeyError:
        raise InvalidReferenceError(f"Relation references unknown table '{name}'")


def build_registry(
    profile: ProfileConfig, base_dir: Optional[Union[str, Path]] = None
) -> RelationRegistry:
    """Load the profile's tables and register its relations.

    Args:
        profile: Loaded profile configuration
        base_dir: Directory relative table paths are resolved against

    Returns:
        Registry holding every profile table and relation

    Raises:
        InvalidReferenceError: If a relation names an unknown table or column
    """
    base_dir = Path(base_dir) if base_dir else Path.cwd()
    registry = RelationRegistry(
        cycle_check=profile.cycle_check, max_depth=profile.max_depth
    )

    for name, source in profile.tables.items():
        path = source.path if source.path.is_absolute() else base_dir / source.path
        registry.add_table(
            load_csv(path, name, encoding=source.encoding, delimiter=source.delimiter)
        )

    for relation_config in profile.relations:
        parent = _lookup_table(registry, relation_config.parent)
        child = _lookup_table(registry, relation_config.child)
        relation = Relation(
            parent, child, relation_config.output_key, relation_config.cardinality
        )

        for parent_name, child_name in relation_config.join_pairs():
            try:
                parent_column = parent.column(parent_name)
                child_column = child.column(child_name)
            except KeyError as e:
                raise InvalidReferenceError(
                    f"Relation '{relation_config.output_key}': {e.args[0]}"
                )
            relation.add_join_column(parent_column, child_column)

        registry.add_relation(relation)

    logger.debug(
        f"Built registry with {len(registry.tables)} table(s) and "
        f"{len(registry.relations)} relation(s)"
    )
    return registry


def load_profile(profile_path: Union[str, Path]) -> Tuple[ProfileConfig, RelationRegistry]:
    """Load a profile file and build its registry."""
    config = Config(profile_path)
    profile = config.load()
    return profile, build_registry(profile, config.base_dir)
