"""Serializador multipart/form-data incremental.

Escreve partes diretamente num destino assíncrono (ex: BytePipe) para que
arquivos grandes nunca precisem residir inteiros em memória.
"""

from __future__ import annotations

import secrets
from typing import Protocol

from yop.constants import YOP_HTTP_CONTENT_TYPE_MULTIPART

_CRLF = b"\r\n"


class AsyncByteSink(Protocol):
    """Destino dos bytes serializados."""

    async def write(self, chunk: bytes) -> None: ...


def _escape_quotes(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


class MultipartWriter:
    """Escreve um corpo multipart parte a parte.

    Uso:
        writer = MultipartWriter(pipe)
        await writer.write_field("merchantNo", "10001")
        await writer.create_form_file("file", "report.pdf")
        await writer.write(b"...")
        await writer.close()
    """

    def __init__(self, sink: AsyncByteSink, boundary: str | None = None) -> None:
        self._sink = sink
        self.boundary = boundary or secrets.token_hex(16)
        self._has_parts = False
        self._closed = False

    @property
    def content_type(self) -> str:
        return f"{YOP_HTTP_CONTENT_TYPE_MULTIPART}; boundary={self.boundary}"

    async def _start_part(self, headers: list[str]) -> None:
        if self._closed:
            raise ValueError("multipart writer já fechado")
        delimiter = f"--{self.boundary}".encode("ascii")
        prefix = _CRLF + delimiter if self._has_parts else delimiter
        header_block = "".join(f"{line}\r\n" for line in headers).encode("utf-8")
        await self._sink.write(prefix + _CRLF + header_block + _CRLF)
        self._has_parts = True

    async def write_field(self, name: str, value: str) -> None:
        await self._start_part([f'Content-Disposition: form-data; name="{_escape_quotes(name)}"'])
        await self._sink.write(value.encode("utf-8"))

    async def create_form_file(
        self,
        field_name: str,
        filename: str,
        content_type: str = "application/octet-stream",
    ) -> None:
        """Abre a parte de arquivo; o conteúdo segue via ``write``."""
        await self._start_part(
            [
                "Content-Disposition: form-data; "
                f'name="{_escape_quotes(field_name)}"; filename="{_escape_quotes(filename)}"',
                f"Content-Type: {content_type}",
            ]
        )

    async def write(self, chunk: bytes) -> None:
        await self._sink.write(chunk)

    async def close(self) -> None:
        """Escreve o delimitador final."""
        if self._closed:
            return
        self._closed = True
        closing = f"--{self.boundary}--".encode("ascii") + _CRLF
        await self._sink.write(_CRLF + closing if self._has_parts else closing)
