"""Hierarchy API: thin routes delegating to HierarchyService.

Paths nest the containment chain root-first; every id in a path is
proven against the relation store before the leaf is touched.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from topology.api.v1.dependencies import (
    get_hierarchy_service,
    get_hierarchy_service_for_write,
    get_page_link,
)
from topology.application.dtos.paging import PageData, PageLink
from topology.application.dtos.topology import (
    Building,
    LevelView,
    Room,
    Territory,
    TopologyDevice,
)
from topology.application.use_cases.topology import HierarchyService
from topology.domain.enums import HierarchyLevel
from topology.schemas.topology import (
    DeviceSaveRequest,
    LevelResponse,
    LevelSaveRequest,
    PageResponse,
)

router = APIRouter()

ReadService = Annotated[HierarchyService, Depends(get_hierarchy_service)]
WriteService = Annotated[HierarchyService, Depends(get_hierarchy_service_for_write)]
OptionalPageLink = Annotated[PageLink | None, Depends(get_page_link)]

LevelListing = list[LevelResponse] | PageResponse[LevelResponse]


def _saved(response: Response, body: LevelSaveRequest) -> None:
    """Creation answers 201 (route default); an update answers 200."""
    if body.id:
        response.status_code = 200


def _listing(
    items: list[LevelView] | PageData[LevelView], schema: type[LevelResponse]
) -> list[LevelResponse] | PageResponse[LevelResponse]:
    if isinstance(items, PageData):
        return PageResponse[schema](
            data=[schema.model_validate(v) for v in items.data],
            total_pages=items.total_pages,
            total_elements=items.total_elements,
            has_next=items.has_next,
        )
    return [schema.model_validate(v) for v in items]


async def _children(
    svc: HierarchyService,
    level: HierarchyLevel,
    chain: list[str],
    page_link: PageLink | None,
) -> list[LevelView] | PageData[LevelView]:
    if page_link is None:
        return await svc.list_children(level, chain)
    return await svc.list_children_page(level, chain, page_link)


# Territories


@router.get("/territories", response_model=LevelListing)
async def list_territories(svc: ReadService, page_link: OptionalPageLink):
    """List the tenant's territories (paged when page_size is given)."""
    if page_link is None:
        return _listing(await svc.list_territories(), LevelResponse)
    return _listing(await svc.list_territories_page(page_link), LevelResponse)


@router.post("/territory", response_model=LevelResponse, status_code=201)
async def save_territory(body: LevelSaveRequest, response: Response, svc: WriteService):
    """Create a territory, or rename it when body.id is set."""
    _saved(response, body)
    view = await svc.save(
        HierarchyLevel.TERRITORY, [], Territory(id=body.id, name=body.name)
    )
    return LevelResponse.model_validate(view)


@router.get("/territory/{territory_id}", response_model=LevelResponse)
async def get_territory(territory_id: str, svc: ReadService):
    view = await svc.get(HierarchyLevel.TERRITORY, [territory_id])
    return LevelResponse.model_validate(view)


@router.delete("/territory/{territory_id}", status_code=204)
async def delete_territory(territory_id: str, svc: WriteService) -> None:
    """Delete a territory and its incident edges. Its buildings become unreachable."""
    await svc.delete(HierarchyLevel.TERRITORY, [territory_id])


# Buildings


@router.post("/territory/{territory_id}/building", response_model=LevelResponse, status_code=201)
async def save_building(
    territory_id: str, body: LevelSaveRequest, response: Response, svc: WriteService
):
    """Create a building in the territory, or rename it when body.id is set."""
    _saved(response, body)
    view = await svc.save(
        HierarchyLevel.BUILDING, [territory_id], Building(id=body.id, name=body.name)
    )
    return LevelResponse.model_validate(view)


@router.get("/territory/{territory_id}/buildings", response_model=LevelListing)
async def list_buildings(territory_id: str, svc: ReadService, page_link: OptionalPageLink):
    items = await _children(svc, HierarchyLevel.BUILDING, [territory_id], page_link)
    return _listing(items, LevelResponse)


@router.get("/territory/{territory_id}/building/{building_id}", response_model=LevelResponse)
async def get_building(territory_id: str, building_id: str, svc: ReadService):
    view = await svc.get(HierarchyLevel.BUILDING, [territory_id, building_id])
    return LevelResponse.model_validate(view)


@router.delete("/territory/{territory_id}/building/{building_id}", status_code=204)
async def delete_building(territory_id: str, building_id: str, svc: WriteService) -> None:
    await svc.delete(HierarchyLevel.BUILDING, [territory_id, building_id])


# Rooms


@router.post(
    "/territory/{territory_id}/building/{building_id}/room",
    response_model=LevelResponse,
    status_code=201,
)
async def save_room(
    territory_id: str,
    building_id: str,
    body: LevelSaveRequest,
    response: Response,
    svc: WriteService,
):
    """Create a room in the building, or rename it when body.id is set."""
    _saved(response, body)
    view = await svc.save(
        HierarchyLevel.ROOM,
        [territory_id, building_id],
        Room(id=body.id, name=body.name),
    )
    return LevelResponse.model_validate(view)


@router.get("/territory/{territory_id}/building/{building_id}/rooms", response_model=LevelListing)
async def list_rooms(
    territory_id: str, building_id: str, svc: ReadService, page_link: OptionalPageLink
):
    items = await _children(svc, HierarchyLevel.ROOM, [territory_id, building_id], page_link)
    return _listing(items, LevelResponse)


@router.get(
    "/territory/{territory_id}/building/{building_id}/room/{room_id}",
    response_model=LevelResponse,
)
async def get_room(territory_id: str, building_id: str, room_id: str, svc: ReadService):
    view = await svc.get(HierarchyLevel.ROOM, [territory_id, building_id, room_id])
    return LevelResponse.model_validate(view)


@router.delete(
    "/territory/{territory_id}/building/{building_id}/room/{room_id}", status_code=204
)
async def delete_room(
    territory_id: str, building_id: str, room_id: str, svc: WriteService
) -> None:
    await svc.delete(HierarchyLevel.ROOM, [territory_id, building_id, room_id])


# Devices


@router.post(
    "/territory/{territory_id}/building/{building_id}/room/{room_id}/device",
    response_model=LevelResponse,
    status_code=201,
)
async def save_device(
    territory_id: str,
    building_id: str,
    room_id: str,
    body: DeviceSaveRequest,
    response: Response,
    svc: WriteService,
):
    """Place a new device in the room, or rename it when body.id is set."""
    _saved(response, body)
    view = await svc.save(
        HierarchyLevel.DEVICE,
        [territory_id, building_id, room_id],
        TopologyDevice(id=body.id, name=body.name, type=body.type),
    )
    return LevelResponse.model_validate(view)


@router.get(
    "/territory/{territory_id}/building/{building_id}/room/{room_id}/devices",
    response_model=LevelListing,
)
async def list_devices(
    territory_id: str,
    building_id: str,
    room_id: str,
    svc: ReadService,
    page_link: OptionalPageLink,
):
    chain = [territory_id, building_id, room_id]
    if page_link is None:
        return _listing(await svc.list_devices(chain), LevelResponse)
    return _listing(await svc.list_devices_page(chain, page_link), LevelResponse)


@router.get(
    "/territory/{territory_id}/building/{building_id}/room/{room_id}/device/{device_id}",
    response_model=LevelResponse,
)
async def get_device(
    territory_id: str, building_id: str, room_id: str, device_id: str, svc: ReadService
):
    view = await svc.get(
        HierarchyLevel.DEVICE, [territory_id, building_id, room_id, device_id]
    )
    return LevelResponse.model_validate(view)


@router.delete(
    "/territory/{territory_id}/building/{building_id}/room/{room_id}/device/{device_id}",
    status_code=204,
)
async def delete_device(
    territory_id: str,
    building_id: str,
    room_id: str,
    device_id: str,
    svc: WriteService,
) -> None:
    await svc.delete(
        HierarchyLevel.DEVICE, [territory_id, building_id, room_id, device_id]
    )
