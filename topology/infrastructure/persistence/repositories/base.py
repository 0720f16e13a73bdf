"""Base repository: generic CRUD, tenant scoping and store fault translation."""

import logging
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from topology.domain.exceptions import StoreUnavailableException
from topology.infrastructure.persistence.database import Base

logger = logging.getLogger(__name__)

R = TypeVar("R")
ModelType = TypeVar("ModelType", bound=Base)

# Driver and pool failures; constraint and programming errors still propagate as-is.
_STORE_FAULTS = (
    OperationalError,
    InterfaceError,
    PoolTimeoutError,
    TimeoutError,
    ConnectionError,
)


@contextmanager
def store_errors(store: str) -> Iterator[None]:
    """Re-raise connectivity and timeout faults as StoreUnavailableException."""
    try:
        yield
    except _STORE_FAULTS as e:
        logger.warning("%s store unavailable: %s", store, e)
        raise StoreUnavailableException(store, str(e)) from e


def guarded(
    method: Callable[..., Awaitable[R]],
) -> Callable[..., Awaitable[R]]:
    """Run a repository coroutine method inside store_errors(self.store_name)."""

    @wraps(method)
    async def wrapper(self: "TenantScopedRepository[Any]", *args: Any, **kwargs: Any) -> R:
        with store_errors(self.store_name):
            return await method(self, *args, **kwargs)

    return wrapper


class BaseRepository(Generic[ModelType]):
    """Base repository with create and delete; lookups are tenant-scoped in subclasses."""

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record; server defaults are loaded back."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.flush()


class TenantScopedRepository(BaseRepository[ModelType]):
    """Repository bound to one tenant; every query filters on tenant_id."""

    store_name = "sql"

    def __init__(self, db: AsyncSession, model: type[ModelType], tenant_id: str) -> None:
        super().__init__(db, model)
        self._tenant_id = tenant_id

    @property
    def tenant_id(self) -> str:
        return self._tenant_id

    def _owns(self, tenant_id: str) -> bool:
        return tenant_id == self._tenant_id
