"""DTO for the caller on whose behalf hierarchy operations run."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """Tenant (and optionally customer) the request acts for.

    Without customer_id the caller is a tenant administrator; with it, a
    customer user limited to entities assigned to that customer.
    """

    tenant_id: str
    customer_id: str | None = None

    @property
    def is_customer_user(self) -> bool:
        return self.customer_id is not None
