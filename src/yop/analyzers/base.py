"""Contrato dos analyzers e execução da cadeia de verificação."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from yop.errors import ChainVerificationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from yop.response import RawResponse, ResponseContext

logger = logging.getLogger(__name__)


class ResponseAnalyzer(Protocol):
    """Etapa da cadeia: inspeciona/transforma a resposta ou a rejeita."""

    def analyze(self, context: ResponseContext, raw: RawResponse) -> None:
        """Levanta ChainVerificationError para rejeitar a resposta."""
        ...


def run_analyzer_chain(
    chain: Sequence[ResponseAnalyzer],
    context: ResponseContext,
    raw: RawResponse,
) -> None:
    """Executa os analyzers em ordem, parando na primeira rejeição.

    Args:
        chain: Analyzers na ordem registrada
        context: Contexto compartilhado (signer, resposta, requisição)
        raw: Resposta HTTP bruta

    Raises:
        ChainVerificationError: Rejeição de qualquer analyzer. Exceções
            inesperadas também rejeitam a resposta.
    """
    for analyzer in chain:
        name = type(analyzer).__name__
        try:
            analyzer.analyze(context, raw)
        except ChainVerificationError as exc:
            logger.warning(
                "yop_response_rejected",
                extra={
                    "analyzer": name,
                    "error_type": type(exc).__name__,
                    "status_code": raw.status_code,
                },
            )
            raise
        except Exception as exc:
            logger.error(
                "yop_analyzer_failed",
                extra={"analyzer": name, "error_type": type(exc).__name__},
            )
            raise ChainVerificationError(f"analyzer {name} failed: {exc}") from exc
