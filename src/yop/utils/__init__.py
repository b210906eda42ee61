"""Utilitários de codificação compartilhados."""

from .encoding import (
    encode_form_body,
    encode_parameters,
    iter_params,
    multipart_field_values,
    percent_encode,
)

__all__ = [
    "encode_form_body",
    "encode_parameters",
    "iter_params",
    "multipart_field_values",
    "percent_encode",
]
