"""Cadeia de verificação das respostas YOP.

A ordem é parte do contrato: erros da plataforma são classificados antes
da verificação de assinatura, e só respostas verificadas são decodificadas.
"""

from .base import ResponseAnalyzer, run_analyzer_chain
from .error_response import ErrorResponseAnalyzer
from .json_body import JsonResponseAnalyzer
from .signature import SignatureCheckAnalyzer

DEFAULT_ANALYZER_CHAIN: tuple[ResponseAnalyzer, ...] = (
    ErrorResponseAnalyzer(),
    SignatureCheckAnalyzer(),
    JsonResponseAnalyzer(),
)

__all__ = [
    "DEFAULT_ANALYZER_CHAIN",
    "ErrorResponseAnalyzer",
    "JsonResponseAnalyzer",
    "ResponseAnalyzer",
    "SignatureCheckAnalyzer",
    "run_analyzer_chain",
]
