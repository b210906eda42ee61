"""Decodifica corpos JSON em YopResponse.result."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from yop.constants import YOP_HTTP_CONTENT_TYPE_JSON
from yop.errors import ResponseFormatError

if TYPE_CHECKING:
    from yop.response import RawResponse, ResponseContext


class JsonResponseAnalyzer:
    """Preenche ``result``; corpo declarado JSON e inválido é rejeitado."""

    def analyze(self, context: ResponseContext, raw: RawResponse) -> None:
        if YOP_HTTP_CONTENT_TYPE_JSON not in raw.content_type.lower() or not raw.content:
            return
        try:
            context.response.result = json.loads(raw.content)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ResponseFormatError("invalid_json_response") from exc
