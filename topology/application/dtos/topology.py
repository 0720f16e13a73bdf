"""Level views: narrow per-level projections of generic entities.

A closed set of frozen variants. Each class called with no arguments is
its own zero-value constructor, which is what the level table hands to
the projection when it needs a fresh instance of a variant.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LevelView:
    """Base view: identifier (absent before creation) and display name."""

    name: str = ""
    id: str | None = None

    @property
    def has_id(self) -> bool:
        return bool(self.id)

    @property
    def declared_type(self) -> str | None:
        """Explicit type tag carried by the view; only devices may declare one."""
        return None


@dataclass(frozen=True)
class Territory(LevelView):
    """Root of the hierarchy."""


@dataclass(frozen=True)
class Building(LevelView):
    """Contained by a territory."""


@dataclass(frozen=True)
class Room(LevelView):
    """Contained by a building."""


@dataclass(frozen=True)
class TopologyDevice(LevelView):
    """Device placed in a room; lives in the device store, not the asset store."""

    type: str | None = None

    @property
    def declared_type(self) -> str | None:
        return self.type
