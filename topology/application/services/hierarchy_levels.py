"""Hierarchy level table: per-level metadata driving the one parametrized façade.

Replaces per-level copies of the same create/get/delete/list flow. Each
entry names the type tag stamped on new entities, the store that holds
them, the parent level, and the zero-value constructor of the view.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from topology.application.dtos.topology import (
    Building,
    LevelView,
    Room,
    Territory,
    TopologyDevice,
)
from topology.domain.enums import EntityKind, HierarchyLevel
from topology.domain.exceptions import ValidationException
from topology.domain.value_objects import EntityId


@dataclass(frozen=True)
class LevelSpec:
    """Metadata for one hierarchy level."""

    level: HierarchyLevel
    entity_kind: EntityKind
    parent: HierarchyLevel | None
    view_factory: Callable[[], LevelView]

    @property
    def expected_type(self) -> str:
        return self.level.value

    @property
    def depth(self) -> int:
        """Number of ancestors (0 for territories)."""
        return _ORDER.index(self.level)


_ORDER: tuple[HierarchyLevel, ...] = (
    HierarchyLevel.TERRITORY,
    HierarchyLevel.BUILDING,
    HierarchyLevel.ROOM,
    HierarchyLevel.DEVICE,
)

LEVELS: dict[HierarchyLevel, LevelSpec] = {
    HierarchyLevel.TERRITORY: LevelSpec(
        HierarchyLevel.TERRITORY, EntityKind.ASSET, None, Territory
    ),
    HierarchyLevel.BUILDING: LevelSpec(
        HierarchyLevel.BUILDING, EntityKind.ASSET, HierarchyLevel.TERRITORY, Building
    ),
    HierarchyLevel.ROOM: LevelSpec(
        HierarchyLevel.ROOM, EntityKind.ASSET, HierarchyLevel.BUILDING, Room
    ),
    HierarchyLevel.DEVICE: LevelSpec(
        HierarchyLevel.DEVICE, EntityKind.DEVICE, HierarchyLevel.ROOM, TopologyDevice
    ),
}


def level_spec(level: HierarchyLevel) -> LevelSpec:
    return LEVELS[level]


def typed_chain(ids: Sequence[str]) -> list[EntityId]:
    """Type a root-first chain of raw ids by position (territory, building, room, device).

    Raises ValidationException when the chain is empty, longer than the
    hierarchy, or contains a blank id.
    """
    if not ids:
        raise ValidationException("Chain must contain at least one id", field="chain")
    if len(ids) > len(_ORDER):
        raise ValidationException(
            f"Chain is deeper than the hierarchy ({len(ids)} > {len(_ORDER)})",
            field="chain",
        )
    typed: list[EntityId] = []
    for position, raw in enumerate(ids):
        spec = LEVELS[_ORDER[position]]
        try:
            typed.append(EntityId(spec.entity_kind, raw))
        except ValueError as e:
            raise ValidationException(str(e), field="chain") from e
    return typed
