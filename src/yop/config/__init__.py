"""Configuração do SDK: settings e logging estruturado."""

from .settings import YopSettings, get_yop_settings

__all__ = [
    "YopSettings",
    "get_yop_settings",
]
