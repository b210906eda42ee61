"""Contrato do signer consumido pelo cliente e pela cadeia de analyzers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from yop.request import YopRequest
    from yop.response import ResponseContext


class Signer(Protocol):
    """Assina a requisição de saída e verifica a resposta de entrada.

    Uma instância é criada por chamada e guarda o material da assinatura,
    que a cadeia de verificação pode consultar.
    """

    def sign_request(self, request: YopRequest) -> None:
        """Adiciona headers de autenticação. Levanta SigningError."""
        ...

    def verify_response(self, context: ResponseContext) -> None:
        """Verifica a assinatura da resposta. Levanta SignatureVerificationError."""
        ...
