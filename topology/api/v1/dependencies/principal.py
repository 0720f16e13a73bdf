"""Caller identity dependencies: tenant and customer from request headers."""

from __future__ import annotations

from fastapi import HTTPException, Request

from topology.application.dtos.security import Principal
from topology.core.config import get_settings
from topology.core.identifiers import is_valid_identifier_format

_FORMAT_HINT = "use alphanumeric, hyphen, underscore; max 64 characters"


def get_tenant_id(request: Request) -> str:
    """Return the tenant id from the tenant header; 400 when missing or malformed."""
    name = get_settings().tenant_header_name
    value = request.headers.get(name)
    if not value:
        raise HTTPException(status_code=400, detail=f"Missing required header: {name}")
    if not is_valid_identifier_format(value):
        raise HTTPException(
            status_code=400, detail=f"Invalid tenant ID format ({_FORMAT_HINT})"
        )
    return value


def get_principal(request: Request) -> Principal:
    """Build the request principal.

    Without the customer header the caller acts as tenant administrator;
    with it, as a user of that customer.
    """
    tenant_id = get_tenant_id(request)
    name = get_settings().customer_header_name
    customer_id = request.headers.get(name) or None
    if customer_id is not None and not is_valid_identifier_format(customer_id):
        raise HTTPException(
            status_code=400, detail=f"Invalid customer ID format ({_FORMAT_HINT})"
        )
    return Principal(tenant_id=tenant_id, customer_id=customer_id)
