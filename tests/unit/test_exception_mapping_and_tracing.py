"""Error code to HTTP status mapping and the traced decorator."""

from unittest.mock import MagicMock

import pytest

from topology.core.exception_handlers import status_for
from topology.domain.exceptions import (
    ChainCheckFailedException,
    ContainmentChainBrokenException,
    ResourceNotFoundException,
    TypeMismatchException,
)
from topology.shared.telemetry.tracing import _record_error, _set_safe_span_attrs, traced


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ResourceNotFoundException("asset", "a1"), 404),
        (ContainmentChainBrokenException("a1", "a2"), 404),
        (ChainCheckFailedException("a1", "a2", "timeout"), 503),
        (TypeMismatchException("Building", "Room"), 409),
    ],
)
def test_status_for_domain_errors(exc, status) -> None:
    assert status_for(exc.error_code) == status


def test_unmapped_code_is_400() -> None:
    assert status_for("SOMETHING_ELSE") == 400
    assert status_for(None) == 400


def test_only_allowlisted_arguments_become_span_attributes() -> None:
    span = MagicMock()
    _set_safe_span_attrs(span, {"level": "Room", "chain": ["a1"], "page_size": 5, "page": None})
    span.set_attribute.assert_any_call("arg.level", "Room")
    span.set_attribute.assert_any_call("arg.page_size", "5")
    assert span.set_attribute.call_count == 2


def test_error_code_is_recorded() -> None:
    span = MagicMock()
    _record_error(span, TypeMismatchException("Building", "Room"))
    span.set_attribute.assert_called_once_with("error.code", "TYPE_MISMATCH")
    span.record_exception.assert_called_once()


async def test_traced_async_passes_result_and_errors_through() -> None:
    @traced("test.op")
    async def op(level: str, fail: bool = False) -> str:
        if fail:
            raise ResourceNotFoundException("asset", level)
        return level

    assert await op("Room") == "Room"
    with pytest.raises(ResourceNotFoundException):
        await op("Room", fail=True)


def test_traced_sync() -> None:
    @traced()
    def add(a: int, b: int) -> int:
        return a + b

    assert add(1, 2) == 3
    assert add.__name__ == "add"
