"""Codificação determinística de parâmetros.

Usada tanto na assinatura (string canônica) quanto na serialização
do request HTTP, garantindo que ambos vejam os mesmos bytes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote, urlencode

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

# RFC 3986: apenas não-reservados ficam sem escape
_UNRESERVED = "-_.~"


def percent_encode(value: str) -> str:
    """Escapa valor conforme RFC 3986 (espaço vira %20, nunca '+')."""
    return quote(value, safe=_UNRESERVED)


def iter_params(params: Mapping[str, Sequence[str]]) -> Iterator[tuple[str, str]]:
    """Itera pares (nome, valor) ordenados por nome, preservando todos os valores."""
    for name in sorted(params):
        for value in params[name]:
            yield name, value


def encode_parameters(params: Mapping[str, Sequence[str]]) -> str:
    """Gera query string canônica: nomes ordenados, nome e valor escapados.

    Args:
        params: Parâmetros multi-valorados

    Returns:
        ``a=1&a=2&b=x%20y`` ou string vazia
    """
    return "&".join(
        f"{percent_encode(name)}={percent_encode(value)}" for name, value in iter_params(params)
    )


def encode_form_body(params: Mapping[str, Sequence[str]]) -> str:
    """Gera corpo x-www-form-urlencoded.

    Cada valor é escapado (RFC 3986) antes da codificação de formulário,
    como a plataforma espera; um decoder padrão devolve o valor escapado.
    """
    return urlencode([(name, percent_encode(value)) for name, value in iter_params(params)])


def multipart_field_values(params: Mapping[str, Sequence[str]]) -> list[tuple[str, str]]:
    """Pares (campo, valor escapado) para campos de formulário multipart."""
    return [(name, percent_encode(value)) for name, value in iter_params(params)]
