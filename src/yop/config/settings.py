"""Settings do cliente YOP.

Credenciais e endpoints carregados de variáveis de ambiente.
Valores por requisição (YopRequest) sempre têm precedência.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from yop.constants import (
    DEFAULT_SERVER_ROOT,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_UPLOAD_CHUNK_SIZE,
    DEFAULT_UPLOAD_PIPE_DEPTH,
    DEFAULT_YOS_SERVER_ROOT,
    YOP_PLATFORM_PUBLIC_KEY,
)


@dataclass(frozen=True)
class YopSettings:
    """Configurações do cliente YOP.

    Attributes:
        app_key: AppKey do ISV (header x-yop-appkey)
        isv_private_key: Chave privada RSA do ISV (DER base64 ou PEM)
        platform_public_key: Chave pública da plataforma para verificar respostas
        server_root: URL base do gateway
        yos_server_root: URL base do servidor de arquivos (APIs /yos)
        request_timeout_seconds: Prazo total padrão por chamada
        upload_chunk_size: Tamanho de bloco ao copiar uploads por URL
        upload_pipe_depth: Blocos em trânsito no pipe de upload
        log_level: Nível de log do SDK
    """

    # Credenciais
    app_key: str = ""
    isv_private_key: str = ""
    platform_public_key: str = YOP_PLATFORM_PUBLIC_KEY

    # Endpoints
    server_root: str = DEFAULT_SERVER_ROOT
    yos_server_root: str = DEFAULT_YOS_SERVER_ROOT

    # Timeouts
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    # Upload por URL
    upload_chunk_size: int = DEFAULT_UPLOAD_CHUNK_SIZE
    upload_pipe_depth: int = DEFAULT_UPLOAD_PIPE_DEPTH

    log_level: str = "INFO"

    def validate(self) -> list[str]:
        """Valida configurações mínimas.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.app_key:
            errors.append("YOP_APP_KEY não configurado")

        if not self.isv_private_key:
            errors.append("YOP_ISV_PRIVATE_KEY não configurado")

        if not self.server_root.startswith(("http://", "https://")):
            errors.append("YOP_SERVER_ROOT deve ser uma URL http(s)")

        if self.request_timeout_seconds <= 0:
            errors.append("YOP_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.upload_chunk_size <= 0:
            errors.append("YOP_UPLOAD_CHUNK_SIZE deve ser > 0")

        if self.upload_pipe_depth < 1:
            errors.append("YOP_UPLOAD_PIPE_DEPTH deve ser >= 1")

        return errors


def _load_from_env() -> YopSettings:
    """Carrega YopSettings a partir de variáveis de ambiente."""
    return YopSettings(
        app_key=os.getenv("YOP_APP_KEY", ""),
        isv_private_key=os.getenv("YOP_ISV_PRIVATE_KEY", ""),
        platform_public_key=os.getenv("YOP_PLATFORM_PUBLIC_KEY", YOP_PLATFORM_PUBLIC_KEY),
        server_root=os.getenv("YOP_SERVER_ROOT", DEFAULT_SERVER_ROOT).rstrip("/"),
        yos_server_root=os.getenv("YOP_YOS_SERVER_ROOT", DEFAULT_YOS_SERVER_ROOT).rstrip("/"),
        request_timeout_seconds=float(
            os.getenv("YOP_REQUEST_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        ),
        upload_chunk_size=int(os.getenv("YOP_UPLOAD_CHUNK_SIZE", str(DEFAULT_UPLOAD_CHUNK_SIZE))),
        upload_pipe_depth=int(os.getenv("YOP_UPLOAD_PIPE_DEPTH", str(DEFAULT_UPLOAD_PIPE_DEPTH))),
        log_level=os.getenv("YOP_LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_yop_settings() -> YopSettings:
    """Retorna instância cacheada de YopSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
