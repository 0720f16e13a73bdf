"""Application DTOs (no ORM dependency)."""

from topology.application.dtos.entity import EntityDraft, EntityResult, EntitySearchQuery
from topology.application.dtos.paging import PageData, PageLink
from topology.application.dtos.relation import RelationResult
from topology.application.dtos.security import Principal
from topology.application.dtos.topology import (
    Building,
    LevelView,
    Room,
    Territory,
    TopologyDevice,
)

__all__ = [
    "Building",
    "EntityDraft",
    "EntityResult",
    "EntitySearchQuery",
    "LevelView",
    "PageData",
    "PageLink",
    "Principal",
    "RelationResult",
    "Room",
    "Territory",
    "TopologyDevice",
]
