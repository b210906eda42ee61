"""Modelo da requisição lógica YOP.

A requisição é montada pelo chamador, completada por ``init_request``,
assinada pelo signer e consumida uma única vez pelo transporte.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO

from yop.constants import GET_HTTP_METHOD, POST_HTTP_METHOD


class CertType(str, Enum):
    """Tipos de chave suportados pela plataforma."""

    RSA2048 = "RSA2048"


@dataclass
class PlatformPublicKey:
    """Âncora de confiança usada para verificar as respostas.

    Attributes:
        value: Chave pública (DER em base64 ou PEM). Vazio = usar padrão.
        cert_type: Tipo da chave.
    """

    value: str = ""
    cert_type: CertType = CertType.RSA2048


@dataclass(frozen=True)
class UploadFile:
    """Arquivo anexado a uma requisição multipart."""

    filename: str
    content: bytes | BinaryIO
    content_type: str = "application/octet-stream"


@dataclass
class YopRequest:
    """Requisição lógica para a API YOP.

    Attributes:
        http_method: Método HTTP (GET, POST, ...)
        api_uri: Caminho da API (ex: /rest/v1.0/trade/order)
        server_root: URL base. Vazio = resolvido por init_request
        app_id: AppKey do ISV. Vazio = lido das settings
        isv_private_key: Chave privada do ISV. Vazio = lida das settings
        params: Parâmetros multi-valorados (nome -> lista de valores)
        content: Payload JSON bruto (POST)
        files: Arquivos para multipart (nome do campo -> arquivo)
        headers: Headers adicionais; aplicados por último no request HTTP
        timeout: Prazo total em segundos. 0 = padrão
        platform_pub_key: Âncora de confiança fixada para esta chamada
        request_id: Preenchido por init_request a cada chamada
    """

    http_method: str = GET_HTTP_METHOD
    api_uri: str = ""
    server_root: str = ""
    app_id: str = ""
    isv_private_key: str = ""
    params: dict[str, list[str]] = field(default_factory=dict)
    content: str = ""
    files: dict[str, UploadFile] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float = 0.0
    platform_pub_key: PlatformPublicKey = field(default_factory=PlatformPublicKey)
    request_id: str = ""

    def __post_init__(self) -> None:
        self.http_method = self.http_method.upper()

    def add_param(self, name: str, value: object) -> None:
        """Acrescenta valor ao parâmetro (nunca substitui valores anteriores)."""
        self.params.setdefault(name, []).append(str(value))

    def add_file(self, field_name: str, upload: UploadFile) -> None:
        self.files[field_name] = upload

    def set_content(self, content: str) -> None:
        self.content = content

    @property
    def is_post(self) -> bool:
        return self.http_method == POST_HTTP_METHOD

    @property
    def has_files(self) -> bool:
        return bool(self.files)

    @property
    def url(self) -> str:
        """URL completa sem query string."""
        return self.server_root + self.api_uri
