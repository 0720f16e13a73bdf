"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from topology.domain.enums import (
    EntityKind,
    HierarchyLevel,
    Operation,
    RelationType,
    RelationTypeGroup,
    SearchDirection,
    SortOrder,
)
from topology.domain.exceptions import (
    AuthorizationException,
    ChainCheckFailedException,
    ContainmentChainBrokenException,
    MalformedEntityException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    StoreUnavailableException,
    TopologyException,
    TypeMismatchException,
    ValidationException,
)
from topology.domain.value_objects import EntityId

__all__ = [
    # Enums
    "EntityKind",
    "HierarchyLevel",
    "Operation",
    "RelationType",
    "RelationTypeGroup",
    "SearchDirection",
    "SortOrder",
    # Exceptions
    "AuthorizationException",
    "ChainCheckFailedException",
    "ContainmentChainBrokenException",
    "MalformedEntityException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "StoreUnavailableException",
    "TopologyException",
    "TypeMismatchException",
    "ValidationException",
    # Value objects
    "EntityId",
]
