"""Construção do request HTTP a partir da YopRequest assinada.

Três formatos, nesta precedência:
1. multipart/form-data: quando há arquivos (apenas POST)
2. POST com payload bruto: payload no corpo (JSON), parâmetros na URL
3. sem payload: parâmetros no corpo form-urlencoded (POST) ou na URL

Headers do chamador são aplicados por último e sempre prevalecem.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from yop.constants import (
    CONTENT_TYPE,
    YOP_HTTP_CONTENT_TYPE_FORM,
    YOP_HTTP_CONTENT_TYPE_JSON,
)
from yop.errors import PreconditionError, TransportError
from yop.utils.encoding import encode_form_body, encode_parameters, multipart_field_values

if TYPE_CHECKING:
    from yop.request import YopRequest

logger = logging.getLogger(__name__)

MULTIPART_POST_ONLY = "ContentType:multipart/form-data only support Post Request"


def check_for_multipart(request: YopRequest) -> bool:
    """Retorna True se a requisição é multipart.

    Raises:
        PreconditionError: Arquivos anexados a método diferente de POST
    """
    is_multipart = request.has_files
    if is_multipart and not request.is_post:
        logger.error(
            "yop_multipart_requires_post",
            extra={"http_method": request.http_method, "api_uri": request.api_uri},
        )
        raise PreconditionError(MULTIPART_POST_ONLY)
    return is_multipart


def get_content_type(request: YopRequest) -> str:
    """JSON apenas para POST com payload; qualquer outro caso usa form."""
    if request.is_post and request.content:
        return YOP_HTTP_CONTENT_TYPE_JSON
    return YOP_HTTP_CONTENT_TYPE_FORM


def build_http_request(
    client: httpx.AsyncClient,
    request: YopRequest,
    timeout: float,
) -> httpx.Request:
    """Serializa a requisição no formato de fio adequado.

    Args:
        client: Cliente HTTP compartilhado (só usado para montar o request)
        request: Requisição completada e assinada
        timeout: Prazo em segundos aplicado às fases do httpx

    Returns:
        httpx.Request pronto para envio

    Raises:
        PreconditionError: Multipart com método diferente de POST
        TransportError: Falha ao montar as partes multipart
    """
    if check_for_multipart(request):
        http_request = _build_multipart_request(client, request, timeout)
    else:
        http_request = _build_simple_request(client, request, timeout)

    for name, value in request.headers.items():
        http_request.headers[name] = value
    return http_request


def _build_multipart_request(
    client: httpx.AsyncClient,
    request: YopRequest,
    timeout: float,
) -> httpx.Request:
    # httpx serializa todos os campos de `data` antes das partes de `files`
    data: dict[str, list[str]] = {}
    for name, value in multipart_field_values(request.params):
        data.setdefault(name, []).append(value)
    files = [
        (field_name, (upload.filename, upload.content, upload.content_type))
        for field_name, upload in request.files.items()
    ]
    try:
        return client.build_request(
            "POST",
            request.url,
            data=data,
            files=files,
            timeout=timeout,
        )
    except (OSError, TypeError, ValueError) as exc:
        raise TransportError(f"multipart_build_failed: {exc}") from exc


def _build_simple_request(
    client: httpx.AsyncClient,
    request: YopRequest,
    timeout: float,
) -> httpx.Request:
    url = request.url
    encoded_params = encode_parameters(request.params)
    params_in_uri = not request.is_post or bool(request.content)
    if encoded_params and params_in_uri:
        url = f"{url}?{encoded_params}"

    body: bytes | None = None
    if request.is_post:
        if request.content:
            body = request.content.encode("utf-8")
        else:
            body = encode_form_body(request.params).encode("utf-8")

    return client.build_request(
        request.http_method,
        url,
        content=body,
        headers={CONTENT_TYPE: get_content_type(request)},
        timeout=timeout,
    )
