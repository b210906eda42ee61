"""Mapeia respostas não-2xx para ServiceError."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from yop.errors import ServiceError

if TYPE_CHECKING:
    from yop.response import RawResponse, ResponseContext


def _parse_error_body(content: bytes) -> dict[str, Any] | None:
    try:
        payload = json.loads(content or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


class ErrorResponseAnalyzer:
    """Rejeita respostas de erro antes da verificação de assinatura.

    Assim erros de protocolo/negócio não são confundidos com falhas
    de autenticação da resposta.
    """

    def analyze(self, context: ResponseContext, raw: RawResponse) -> None:
        if raw.is_success:
            return

        request_id = context.response.metadata.yop_request_id or context.request.request_id
        payload = _parse_error_body(raw.content)
        if not payload or "code" not in payload:
            raise ServiceError(
                f"YOP platform unavailable (status {raw.status_code})",
                status_code=raw.status_code,
                request_id=request_id,
            )

        code = str(payload.get("code"))
        message = str(payload.get("message") or "unknown error")
        raise ServiceError(
            f"YOP error {code}: {message}",
            status_code=raw.status_code,
            code=code,
            sub_code=payload.get("subCode"),
            sub_message=payload.get("subMessage"),
            request_id=payload.get("requestId") or request_id,
            doc_url=payload.get("docUrl"),
        )
