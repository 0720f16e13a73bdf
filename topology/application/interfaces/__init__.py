"""Application interfaces (ports). Infrastructure implements these."""

from topology.application.interfaces.repositories import (
    IEntityRepository,
    IRelationRepository,
)
from topology.application.interfaces.services import IEntityAccessChecker

__all__ = [
    "IEntityAccessChecker",
    "IEntityRepository",
    "IRelationRepository",
]
