"""Upload multipart a partir de uma URL de origem.

O conteúdo baixado é copiado para o corpo multipart através de um
BytePipe: um produtor escreve campos e arquivo enquanto o transporte
lê a outra ponta, sem bufferizar o arquivo inteiro.
"""

from __future__ import annotations

import logging
import posixpath
from email.message import Message
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit

import httpx

from yop.constants import CONTENT_TYPE_FILENAMES, DEFAULT_UPLOAD_FILENAME
from yop.errors import TransportError
from yop.utils.encoding import multipart_field_values

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from yop.http.multipart import MultipartWriter
    from yop.http.pipe import BytePipe

logger = logging.getLogger(__name__)

_DEGENERATE_NAMES = frozenset({"", ".", "..", "/"})


def filename_from_content_disposition(disposition: str | None) -> str | None:
    """Extrai filename de Content-Disposition (aceita filename e filename*)."""
    if not disposition:
        return None
    message = Message()
    message["content-disposition"] = disposition
    raw_name = message.get_filename()
    if not raw_name:
        return None
    # descarta diretórios enviados pela origem
    name = posixpath.basename(raw_name.replace("\\", "/")).strip()
    return None if name in _DEGENERATE_NAMES else name


def filename_from_url(source_url: str) -> str | None:
    """Basename do path da URL; None para valores degenerados."""
    path = unquote(urlsplit(source_url).path)
    name = posixpath.basename(path)
    return None if name in _DEGENERATE_NAMES else name


def filename_from_content_type(content_type: str | None) -> str:
    """Nome padrão pelo Content-Type (ex: image/png -> image.png)."""
    lowered = (content_type or "").lower()
    for marker, filename in CONTENT_TYPE_FILENAMES:
        if marker in lowered:
            return filename
    return DEFAULT_UPLOAD_FILENAME


def resolve_upload_filename(
    filename: str | None,
    source_url: str,
    headers: Mapping[str, str],
) -> str:
    """Determina o nome do arquivo enviado.

    Ordem: nome do chamador > Content-Disposition > basename da URL >
    tabela de Content-Type > "file".
    """
    if filename:
        return filename
    return (
        filename_from_content_disposition(headers.get("content-disposition"))
        or filename_from_url(source_url)
        or filename_from_content_type(headers.get("content-type"))
    )


async def produce_multipart_body(
    pipe: BytePipe,
    writer: MultipartWriter,
    params: Mapping[str, Sequence[str]],
    field_name: str,
    filename: str,
    source: httpx.Response,
    chunk_size: int,
) -> None:
    """Produtor: campos de formulário, depois o arquivo copiado da origem.

    Sempre fecha o pipe; em caso de falha o leitor recebe o erro.
    """
    try:
        for name, value in multipart_field_values(params):
            await writer.write_field(name, value)
        await writer.create_form_file(field_name, filename)
        copied = 0
        async for chunk in source.aiter_bytes(chunk_size):
            await writer.write(chunk)
            copied += len(chunk)
        await writer.close()
    except httpx.HTTPError as exc:
        logger.warning("yop_upload_copy_failed", extra={"error_type": type(exc).__name__})
        pipe.close(TransportError(f"copy file failed: {exc}"))
        return
    except TransportError as exc:
        pipe.close(exc)
        return
    except BaseException as exc:
        pipe.close(TransportError(f"copy file failed: {type(exc).__name__}"))
        raise

    logger.debug("yop_upload_copy_completed", extra={"bytes_copied": copied})
    pipe.close()
