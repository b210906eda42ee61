"""Verificação da assinatura X-Yop-Sign das respostas de sucesso."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from yop.response import RawResponse, ResponseContext


class SignatureCheckAnalyzer:
    """Delega ao signer da chamada; ausência de assinatura é rejeição."""

    def analyze(self, context: ResponseContext, raw: RawResponse) -> None:
        if not raw.is_success:
            return
        context.signer.verify_response(context)
