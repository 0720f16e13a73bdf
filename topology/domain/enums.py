"""Domain enumerations for the Topology service.

Enums represent fixed sets of domain values (hierarchy levels, entity
kinds, relation types and search parameters).
"""

from enum import Enum


class HierarchyLevel(str, Enum):
    """Level of a node in the Territory → Building → Room → Device hierarchy.

    The value doubles as the type tag stamped on entities created at that level.
    """

    TERRITORY = "Territory"
    BUILDING = "Building"
    ROOM = "Room"
    DEVICE = "Device"

    @classmethod
    def values(cls) -> list[str]:
        """Return all level type tags as strings."""
        return [level.value for level in cls]


class EntityKind(str, Enum):
    """Which generic store holds an entity."""

    ASSET = "asset"
    DEVICE = "device"


class RelationType(str, Enum):
    """Relation types used by the hierarchy. Contains is the only containment edge."""

    CONTAINS = "Contains"


class RelationTypeGroup(str, Enum):
    """Relation group; hierarchy edges live in the tenant's common group."""

    COMMON = "COMMON"


class SearchDirection(str, Enum):
    """Direction of a relation traversal from the anchor entity."""

    FROM = "FROM"
    TO = "TO"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class Operation(str, Enum):
    """Operation checked by the entity access checker."""

    READ = "read"
    WRITE = "write"
    DELETE = "delete"
