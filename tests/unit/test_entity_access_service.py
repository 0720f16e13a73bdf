"""EntityAccessService: tenant and customer checks per operation."""

import pytest

from topology.application.dtos.security import Principal
from topology.application.services.entity_access_service import EntityAccessService
from topology.domain.enums import EntityKind, Operation
from topology.domain.exceptions import AuthorizationException, ResourceNotFoundException
from topology.domain.value_objects import EntityId

from tests.conftest import CUSTOMER_ID, OTHER_TENANT_ID, TENANT_ID
from tests.fakes import make_stores


@pytest.fixture
def seeded(stores):
    own = stores.assets.seed(TENANT_ID, "Mine", "Territory", customer_id=CUSTOMER_ID)
    shared = stores.assets.seed(TENANT_ID, "Tenant-wide", "Territory")
    foreign = stores.assets.seed(OTHER_TENANT_ID, "Theirs", "Territory")
    return own, shared, foreign


def _checker(stores, principal: Principal) -> EntityAccessService:
    return EntityAccessService(
        principal, {EntityKind.ASSET: stores.assets, EntityKind.DEVICE: stores.devices}
    )


@pytest.mark.parametrize("operation", list(Operation))
async def test_tenant_admin_may_do_everything(stores, seeded, admin, operation) -> None:
    own, shared, _ = seeded
    checker = _checker(stores, admin)
    assert (await checker.check(own.entity_id, operation)).id == own.id
    assert (await checker.check(shared.entity_id, operation)).id == shared.id


async def test_other_tenant_entity_is_not_found(stores, seeded, admin) -> None:
    """Entities of another tenant are invisible, not merely forbidden."""
    _, _, foreign = seeded
    with pytest.raises(ResourceNotFoundException):
        await _checker(stores, admin).check(foreign.entity_id, Operation.READ)


async def test_unknown_id_is_not_found(stores, admin) -> None:
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await _checker(stores, admin).check(EntityId.asset("nope"), Operation.READ)
    assert exc_info.value.details == {"resource_type": "asset", "resource_id": "nope"}


async def test_device_ids_are_resolved_in_device_store(stores, admin) -> None:
    """An asset id looked up as a device is not found."""
    asset = stores.assets.seed(TENANT_ID, "Room", "Room")
    device = stores.devices.seed(TENANT_ID, "Meter", "Device")
    checker = _checker(stores, admin)
    assert (await checker.check(EntityId.device(device.id), Operation.READ)).id == device.id
    with pytest.raises(ResourceNotFoundException):
        await checker.check(EntityId.device(asset.id), Operation.READ)


class TestCustomerUser:
    async def test_may_read_and_write_own(self, stores, seeded, customer_user) -> None:
        own, _, _ = seeded
        checker = _checker(stores, customer_user)
        await checker.check(own.entity_id, Operation.READ)
        await checker.check(own.entity_id, Operation.WRITE)

    async def test_may_not_delete(self, stores, seeded, customer_user) -> None:
        own, _, _ = seeded
        with pytest.raises(AuthorizationException):
            await _checker(stores, customer_user).check(own.entity_id, Operation.DELETE)

    async def test_may_not_read_unassigned(self, stores, seeded, customer_user) -> None:
        _, shared, _ = seeded
        with pytest.raises(AuthorizationException):
            await _checker(stores, customer_user).check(shared.entity_id, Operation.READ)


async def test_tenant_mismatch_in_store_result_is_forbidden(admin) -> None:
    """A store that returns a foreign-tenant row is not trusted."""
    stores = make_stores(TENANT_ID)
    foreign = stores.assets.seed(OTHER_TENANT_ID, "Theirs", "Territory")

    class LeakyStore:
        async def get_by_id(self, tenant_id, entity_id):
            return foreign

    checker = EntityAccessService(admin, {EntityKind.ASSET: LeakyStore()})
    with pytest.raises(AuthorizationException):
        await checker.check(foreign.entity_id, Operation.READ)
