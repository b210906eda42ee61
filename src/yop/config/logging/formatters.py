"""Formatter JSON dos logs do SDK.

Todo registro sai com:
- correlation_id (request id YOP da chamada em curso)
- service
- sdk (linguagem/versão, igual ao x-yop-sdk-version)
- asctime, level, logger, message

Campos extras com credenciais ou assinaturas são mascarados antes da
serialização, mesmo quando passados via ``extra``.
"""

from __future__ import annotations

from typing import Any, Final

from pythonjsonlogger.json import JsonFormatter

from yop.constants import SDK_LANG, SDK_VERSION

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

SDK_FIELD: Final[str] = "sdk"

REDACTED_VALUE: Final[str] = "[REDACTED]"

# Comparados em minúsculas, com "-" normalizado para "_"
SENSITIVE_LOG_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "authorization",
        "isv_private_key",
        "private_key",
        "secret_key",
        "signature",
        "x_yop_sign",
        "yop_sign",
    }
)


def _is_sensitive(field: str) -> bool:
    return field.lower().replace("-", "_") in SENSITIVE_LOG_FIELDS


class YopJsonFormatter(JsonFormatter):
    """JsonFormatter com identificação do SDK e máscara de credenciais."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        static_fields = {SDK_FIELD: f"{SDK_LANG}/{SDK_VERSION}"}
        static_fields.update(kwargs.pop("static_fields", None) or {})
        super().__init__(*args, static_fields=static_fields, **kwargs)

    def process_log_record(self, log_record: dict[str, Any]) -> dict[str, Any]:
        for field in log_record:
            if _is_sensitive(field):
                log_record[field] = REDACTED_VALUE
        return super().process_log_record(log_record)


def create_json_formatter() -> YopJsonFormatter:
    """Cria o formatter JSON do SDK.

    Returns:
        YopJsonFormatter configurado para logs estruturados.

    Exemplo de output:
        {
            "asctime": "2026-10-19T10:30:00",
            "level": "INFO",
            "logger": "yop.client",
            "message": "yop_request_completed",
            "correlation_id": "0f8c...-uuid",
            "service": "yop_sdk",
            "sdk": "python/4.3.0"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return YopJsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )
