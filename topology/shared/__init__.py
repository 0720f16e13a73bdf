"""Shared utilities: telemetry and id generation. No business logic."""

from topology.shared.utils import generate_cuid, utc_now

__all__ = ["generate_cuid", "utc_now"]
