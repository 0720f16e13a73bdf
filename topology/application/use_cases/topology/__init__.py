"""Topology use cases."""

from topology.application.use_cases.topology.hierarchy_service import HierarchyService

__all__ = ["HierarchyService"]
