"""Testes para propagação do request id nos logs."""

from __future__ import annotations

import asyncio
import uuid

import pytest

from yop.observability import (
    generate_request_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)


class TestCorrelationId:
    """Testes para o ContextVar de correlation_id."""

    def test_default_is_empty(self) -> None:
        """Fora de uma chamada o valor é vazio."""
        assert get_correlation_id() == ""

    def test_set_and_reset(self) -> None:
        """reset restaura o valor anterior."""
        token = set_correlation_id("req-1")
        assert get_correlation_id() == "req-1"
        reset_correlation_id(token)
        assert get_correlation_id() == ""

    def test_set_without_value_generates_uuid(self) -> None:
        """Sem valor gera um UUID novo."""
        token = set_correlation_id()
        try:
            assert uuid.UUID(get_correlation_id()).version == 4
        finally:
            reset_correlation_id(token)

    def test_generate_request_id_unique(self) -> None:
        """Ids gerados não se repetem."""
        assert len({generate_request_id() for _ in range(100)}) == 100

    @pytest.mark.asyncio
    async def test_isolated_between_tasks(self) -> None:
        """Cada task enxerga apenas o próprio id."""

        async def worker(value: str) -> str:
            token = set_correlation_id(value)
            try:
                await asyncio.sleep(0.01)
                return get_correlation_id()
            finally:
                reset_correlation_id(token)

        results = await asyncio.gather(worker("a"), worker("b"), worker("c"))
        assert results == ["a", "b", "c"]
