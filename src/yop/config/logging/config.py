"""Configuração centralizada de logging do SDK.

Uso:
    import logging

    from yop.config.logging import configure_logging

    # Na inicialização da aplicação que usa o SDK
    configure_logging()  # nível de YOP_LOG_LEVEL

    # Em qualquer módulo
    logger = logging.getLogger(__name__)
    logger.info("yop_request_completed", extra={"status_code": 200})

O request id de cada chamada YOP é injetado como correlation_id.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from yop.config.logging.filters import CorrelationIdFilter
from yop.config.logging.formatters import create_json_formatter
from yop.config.settings import get_yop_settings
from yop.observability import get_correlation_id

if TYPE_CHECKING:
    from collections.abc import Callable

# Níveis de log válidos
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Nome padrão do serviço
DEFAULT_SERVICE_NAME = "yop_sdk"


def configure_logging(
    level: str | None = None,
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado.

    Deve ser chamada uma vez na inicialização da aplicação.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Padrão: YOP_LOG_LEVEL das settings.
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id do contexto
            atual. Padrão: request id YOP da chamada em curso.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level = level or get_yop_settings().log_level
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    formatter = create_json_formatter()

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(formatter)
    handler.addFilter(
        CorrelationIdFilter(service_name, correlation_id_getter or get_correlation_id)
    )

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]
