"""Pipe de bytes assíncrono e limitado entre produtor e transporte.

O produtor escreve blocos; o transporte consome o pipe como corpo do
request (AsyncIterable[bytes]). Fechar o lado de escrita, com ou sem
erro, sinaliza fim de corpo ao leitor, que nunca fica bloqueado.
"""

from __future__ import annotations

import asyncio
from collections import deque

from yop.errors import TransportError


class ClosedPipeError(TransportError):
    """Escrita em pipe já fechado."""


class BytePipe:
    """Canal de blocos de bytes com capacidade limitada.

    Args:
        max_chunks: Blocos em trânsito antes de ``write`` aguardar o leitor.
    """

    def __init__(self, max_chunks: int = 4) -> None:
        if max_chunks < 1:
            raise ValueError("max_chunks deve ser >= 1")
        self._max_chunks = max_chunks
        self._chunks: deque[bytes] = deque()
        self._closed = False
        self._error: BaseException | None = None
        self._readable = asyncio.Event()
        self._writable = asyncio.Event()
        self._writable.set()

    @property
    def closed(self) -> bool:
        return self._closed

    async def write(self, chunk: bytes) -> None:
        """Enfileira um bloco, aguardando espaço se o pipe estiver cheio.

        Raises:
            ClosedPipeError: Se o pipe foi fechado
        """
        if not chunk:
            return
        while len(self._chunks) >= self._max_chunks and not self._closed:
            self._writable.clear()
            await self._writable.wait()
        if self._closed:
            raise ClosedPipeError("pipe_closed") from self._error
        self._chunks.append(chunk)
        self._readable.set()

    def close(self, error: BaseException | None = None) -> None:
        """Fecha o pipe; com ``error`` o leitor recebe essa exceção.

        Chamadas repetidas são ignoradas (o primeiro fechamento vence).
        """
        if self._closed:
            return
        self._closed = True
        self._error = error
        self._readable.set()
        self._writable.set()

    def __aiter__(self) -> BytePipe:
        return self

    async def __anext__(self) -> bytes:
        while True:
            if self._error is not None:
                raise self._error
            if self._chunks:
                chunk = self._chunks.popleft()
                self._writable.set()
                return chunk
            if self._closed:
                raise StopAsyncIteration
            self._readable.clear()
            await self._readable.wait()
