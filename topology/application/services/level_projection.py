"""Level projection: generic entity ↔ narrow level view.

Pure data transformation. Customer and tenant fields never leak into a
view; a view only ever carries id and name.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TypeVar

from topology.application.dtos.entity import EntityDraft, EntityResult
from topology.application.dtos.paging import PageData
from topology.application.dtos.topology import LevelView
from topology.application.services.hierarchy_levels import level_spec
from topology.domain.enums import HierarchyLevel
from topology.domain.exceptions import MalformedEntityException, TypeMismatchException

V = TypeVar("V", bound=LevelView)


class LevelProjection:
    """Maps entities to level views and level views to entity drafts."""

    def to_view(self, entity: EntityResult, level: HierarchyLevel) -> LevelView:
        """Project entity into a fresh view of the level's variant."""
        return self.assign(level_spec(level).view_factory(), entity)

    def assign(self, prototype: V, entity: EntityResult) -> V:
        """Return a new view of the same variant as prototype, populated from entity.

        Raises MalformedEntityException if the entity has no identifier.
        """
        if not entity.id:
            raise MalformedEntityException(entity.entity_type)
        return replace(prototype, id=entity.id, name=entity.name)

    def from_view(self, view: LevelView, expected_type: str) -> EntityDraft:
        """Convert a view to a draft stamped with expected_type.

        A view with an id yields an update draft (id carried through); a view
        without one yields a create draft. Raises TypeMismatchException when
        the view declares a type other than expected_type.
        """
        declared = view.declared_type
        if declared is not None and declared != expected_type:
            raise TypeMismatchException(expected_type, declared)
        return EntityDraft(
            id=view.id if view.has_id else None,
            name=view.name,
            entity_type=expected_type,
        )

    def to_page(self, prototype: V, page: PageData[EntityResult]) -> PageData[V]:
        """Project every entity of a page; paging totals are kept."""
        return page.map(lambda entity: self.assign(prototype, entity))
