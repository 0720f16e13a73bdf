"""Application use cases: one entry point per workflow."""

from topology.application.use_cases.topology import HierarchyService

__all__ = ["HierarchyService"]
