"""Modelos de resposta e contexto da cadeia de verificação."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from yop.constants import YOP_RESPONSE_REQUEST_ID, YOP_SIGN_HEADER_KEY

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from yop.auth.protocols import Signer
    from yop.request import YopRequest


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Resposta HTTP bruta, imutável após o recebimento."""

    status_code: int
    headers: Mapping[str, str]
    content: bytes

    @classmethod
    def from_httpx(cls, response: httpx.Response, content: bytes) -> RawResponse:
        # httpx.Headers já é case-insensitive
        return cls(status_code=response.status_code, headers=response.headers, content=content)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")


@dataclass
class YopResponseMetadata:
    """Metadados de protocolo capturados da resposta."""

    yop_sign: str = ""
    yop_request_id: str = ""


@dataclass
class YopResponse:
    """Resposta entregue ao chamador após a cadeia aceitar.

    Attributes:
        content: Corpo bruto
        metadata: Assinatura e request id do servidor
        result: Corpo JSON decodificado (preenchido pelo JsonResponseAnalyzer)
    """

    content: bytes
    metadata: YopResponseMetadata = field(default_factory=YopResponseMetadata)
    result: Any = None

    @classmethod
    def from_raw(cls, raw: RawResponse) -> YopResponse:
        metadata = YopResponseMetadata(
            yop_sign=raw.headers.get(YOP_SIGN_HEADER_KEY, ""),
            yop_request_id=raw.headers.get(YOP_RESPONSE_REQUEST_ID, ""),
        )
        return cls(content=raw.content, metadata=metadata)


@dataclass
class ResponseContext:
    """Contexto compartilhado por referência entre os analyzers."""

    signer: Signer
    response: YopResponse
    request: YopRequest
