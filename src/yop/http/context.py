"""Montagem do contexto da requisição antes da assinatura.

Preenche identidade, endpoint, âncora de confiança e headers padrão.
Só completa campos vazios: valores definidos pelo chamador prevalecem.
Nunca falha.
"""

from __future__ import annotations

import logging
import platform
from typing import TYPE_CHECKING

from yop.constants import (
    SDK_LANG,
    SDK_VERSION,
    USER_AGENT_HEADER_KEY,
    YOP_APPKEY_HEADER_KEY,
    YOP_REQUEST_ID,
    YOS_API_PREFIX,
)
from yop.observability import generate_request_id
from yop.request import CertType

if TYPE_CHECKING:
    from yop.config.settings import YopSettings
    from yop.request import YopRequest

logger = logging.getLogger(__name__)


def build_user_agent() -> str:
    """User-Agent: ``python/{sdk}/{os}/{versão python}``. Apenas observabilidade."""
    return "/".join((SDK_LANG, SDK_VERSION, platform.system().lower(), platform.python_version()))


def resolve_server_root(request: YopRequest, settings: YopSettings) -> str:
    """APIs de arquivo (/yos) usam o servidor YOS; demais, o gateway."""
    if request.api_uri.startswith(YOS_API_PREFIX):
        return settings.yos_server_root
    return settings.server_root


def init_request(request: YopRequest, settings: YopSettings) -> None:
    """Completa a requisição in-place.

    - Gera um request id novo a cada chamada (nunca reutilizado)
    - Resolve server_root, app_id e chave privada quando vazios
    - Instala a chave pública padrão da plataforma quando vazia
    - Adiciona headers padrão (request id, appkey, user-agent)

    Args:
        request: Requisição do chamador
        settings: Credenciais e endpoints padrão
    """
    request.request_id = generate_request_id()

    if not request.server_root:
        request.server_root = resolve_server_root(request, settings)
    if not request.app_id:
        request.app_id = settings.app_key
    if not request.isv_private_key:
        request.isv_private_key = settings.isv_private_key
    if not request.platform_pub_key.value:
        request.platform_pub_key.value = settings.platform_public_key
        request.platform_pub_key.cert_type = CertType.RSA2048

    add_standard_headers(request)
    logger.info(
        "yop_request_initialized",
        extra={
            "correlation_id": request.request_id,
            "http_method": request.http_method,
            "api_uri": request.api_uri,
        },
    )


def add_standard_headers(request: YopRequest) -> None:
    """Headers padrão mesclados aos do chamador (nunca os apaga)."""
    request.headers[YOP_REQUEST_ID] = request.request_id
    request.headers[YOP_APPKEY_HEADER_KEY] = request.app_id
    request.headers.setdefault(USER_AGENT_HEADER_KEY, build_user_agent())
