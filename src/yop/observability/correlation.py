"""Propagação do request id YOP para os logs.

Cada chamada do cliente vincula seu request id ao contexto atual;
o CorrelationIdFilter o injeta como correlation_id em cada log.
Usa ContextVar para ser thread/async-safe.

Uso:
    token = set_correlation_id(request.request_id)
    try:
        # executar chamada
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("yop_correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_request_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_request_id() -> str:
    """Gera um novo request id (UUID v4)."""
    return str(uuid.uuid4())
