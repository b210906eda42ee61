"""Assinatura de requisições e verificação de respostas YOP."""

from .keys import KeyFormatError, load_private_key, load_public_key
from .protocols import Signer
from .signer import RsaSigner

__all__ = [
    "KeyFormatError",
    "RsaSigner",
    "Signer",
    "load_private_key",
    "load_public_key",
]
