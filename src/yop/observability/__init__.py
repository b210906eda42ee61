"""Observabilidade: request id YOP como correlation_id nos logs."""

from yop.observability.correlation import (
    generate_request_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

__all__ = [
    "generate_request_id",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]
