"""LevelProjection: entity to view, view to draft."""

import pytest

from topology.application.dtos.entity import EntityResult
from topology.application.dtos.paging import PageData, PageLink
from topology.application.dtos.topology import Building, Room, Territory, TopologyDevice
from topology.application.services.level_projection import LevelProjection
from topology.domain.enums import EntityKind, HierarchyLevel
from topology.domain.exceptions import MalformedEntityException, TypeMismatchException


def _entity(
    entity_id: str = "a1",
    name: str = "HQ",
    entity_type: str = "Building",
    kind: EntityKind = EntityKind.ASSET,
) -> EntityResult:
    return EntityResult(
        id=entity_id,
        tenant_id="t1",
        entity_kind=kind,
        entity_type=entity_type,
        name=name,
        customer_id="c1",
    )


@pytest.fixture
def projection() -> LevelProjection:
    return LevelProjection()


class TestToView:
    @pytest.mark.parametrize(
        "level, view_cls",
        [
            (HierarchyLevel.TERRITORY, Territory),
            (HierarchyLevel.BUILDING, Building),
            (HierarchyLevel.ROOM, Room),
            (HierarchyLevel.DEVICE, TopologyDevice),
        ],
    )
    def test_round_trip_keeps_id_and_name(self, projection, level, view_cls) -> None:
        """Projecting then converting back yields the same id and name, stamped with the level type."""
        view = projection.to_view(_entity(entity_type=level.value), level)
        assert type(view) is view_cls
        assert (view.id, view.name) == ("a1", "HQ")
        draft = projection.from_view(view, level.value)
        assert (draft.id, draft.name, draft.entity_type) == ("a1", "HQ", level.value)

    def test_view_carries_no_tenant_or_customer(self, projection) -> None:
        view = projection.to_view(_entity(), HierarchyLevel.BUILDING)
        assert not hasattr(view, "tenant_id")
        assert not hasattr(view, "customer_id")

    def test_entity_without_id_is_malformed(self, projection) -> None:
        with pytest.raises(MalformedEntityException):
            projection.to_view(_entity(entity_id=""), HierarchyLevel.ROOM)

    def test_assign_returns_new_instance_of_prototype_variant(self, projection) -> None:
        prototype = Room()
        view = projection.assign(prototype, _entity(entity_type="Room"))
        assert type(view) is Room
        assert view is not prototype
        assert prototype.id is None


class TestFromView:
    def test_view_without_id_yields_create_draft(self, projection) -> None:
        draft = projection.from_view(Territory(name="North"), "Territory")
        assert draft.is_new
        assert draft.entity_type == "Territory"

    def test_blank_id_is_treated_as_absent(self, projection) -> None:
        assert projection.from_view(Room(name="Lab", id=""), "Room").is_new

    def test_type_stamping_is_idempotent(self, projection) -> None:
        first = projection.from_view(Building(name="HQ"), "Building")
        view = projection.to_view(_entity(entity_type=first.entity_type), HierarchyLevel.BUILDING)
        second = projection.from_view(view, "Building")
        assert second.entity_type == first.entity_type == "Building"

    def test_device_matching_declared_type_accepted(self, projection) -> None:
        draft = projection.from_view(TopologyDevice(name="Meter", type="Device"), "Device")
        assert draft.entity_type == "Device"

    def test_device_conflicting_declared_type_rejected(self, projection) -> None:
        with pytest.raises(TypeMismatchException) as exc_info:
            projection.from_view(TopologyDevice(name="Meter", type="default"), "Device")
        assert exc_info.value.details == {"expected_type": "Device", "actual_type": "default"}


def test_to_page_projects_every_item_and_keeps_totals(projection) -> None:
    page = PageData.of(
        [_entity("a1", "One"), _entity("a2", "Two")],
        total_elements=3,
        page_link=PageLink(page_size=2),
    )
    views = projection.to_page(Building(), page)
    assert [v.id for v in views.data] == ["a1", "a2"]
    assert all(type(v) is Building for v in views.data)
    assert views.total_elements == 3
    assert views.has_next is True
