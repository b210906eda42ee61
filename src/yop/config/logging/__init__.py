"""Configuração de logging estruturado (JSON) do SDK.

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime
- sdk
"""

from yop.config.logging.config import configure_logging
from yop.config.logging.filters import CorrelationIdFilter
from yop.config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    SENSITIVE_LOG_FIELDS,
    YopJsonFormatter,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "SENSITIVE_LOG_FIELDS",
    "CorrelationIdFilter",
    "YopJsonFormatter",
    "configure_logging",
    "create_json_formatter",
]
