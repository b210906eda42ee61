"""Exceções do SDK YOP.

Hierarquia única para que o chamador trate qualquer falha com
``except YopError``. Nenhuma exceção carrega chaves, assinaturas ou corpos.
"""

from __future__ import annotations


class YopError(Exception):
    """Base de todas as falhas do SDK."""


class PreconditionError(YopError, ValueError):
    """Requisição inválida detectada antes de qualquer IO de rede."""


class SigningError(YopError):
    """Falha ao assinar a requisição (credencial ausente/malformada)."""


class TransportError(YopError):
    """Falha de DNS, conexão, escrita ou leitura HTTP."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportTimeoutError(TransportError):
    """Prazo total da chamada expirou."""


class DownloadError(YopError):
    """Origem do upload por URL respondeu com status de erro."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class ChainVerificationError(YopError):
    """Rejeição de um analyzer da cadeia de verificação da resposta."""


class ServiceError(ChainVerificationError):
    """Erro de negócio ou de plataforma devolvido pela YOP."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: str | None = None,
        sub_code: str | None = None,
        sub_message: str | None = None,
        request_id: str | None = None,
        doc_url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.sub_code = sub_code
        self.sub_message = sub_message
        self.request_id = request_id
        self.doc_url = doc_url


class SignatureVerificationError(ChainVerificationError):
    """Assinatura da resposta ausente ou inválida."""


class ResponseFormatError(ChainVerificationError):
    """Corpo da resposta não corresponde ao formato declarado."""
