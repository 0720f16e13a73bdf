"""Domain value objects for the Topology service.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass

from topology.domain.enums import EntityKind


@dataclass(frozen=True)
class EntityId:
    """Typed entity identifier.

    The kind decides which store (assets or devices) owns the id, so the
    same raw id string is never looked up in the wrong store.
    """

    kind: EntityKind
    id: str

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValueError("Entity id must be a non-empty string")

    @classmethod
    def asset(cls, value: str) -> "EntityId":
        return cls(EntityKind.ASSET, value)

    @classmethod
    def device(cls, value: str) -> "EntityId":
        return cls(EntityKind.DEVICE, value)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"
