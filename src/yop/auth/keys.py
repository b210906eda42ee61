"""Carga de chaves RSA do ISV e da plataforma.

A YOP distribui chaves como DER em base64 (sem cabeçalhos PEM);
ambos os formatos são aceitos.
"""

from __future__ import annotations

import base64
import binascii
from functools import lru_cache

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

_PEM_MARKER = "-----BEGIN"


class KeyFormatError(ValueError):
    """Material de chave ausente, malformado ou de tipo não suportado."""


def _decode_base64(raw_value: str) -> bytes:
    value = "".join(raw_value.split())
    padded = value + ("=" * (-len(value) % 4))
    try:
        return base64.b64decode(padded, validate=True)
    except (ValueError, binascii.Error):
        try:
            return base64.urlsafe_b64decode(padded)
        except (ValueError, binascii.Error) as exc:
            raise KeyFormatError(f"Invalid base64 key: {exc}") from exc


@lru_cache(maxsize=16)
def load_private_key(private_key: str) -> RSAPrivateKey:
    """Carrega chave privada RSA do ISV.

    Args:
        private_key: PKCS#8 em PEM ou DER base64

    Returns:
        Chave privada RSA

    Raises:
        KeyFormatError: Se a chave for inválida ou não for RSA
    """
    if not private_key or not private_key.strip():
        raise KeyFormatError("missing_private_key")

    try:
        if _PEM_MARKER in private_key:
            key = serialization.load_pem_private_key(private_key.encode("utf-8"), password=None)
        else:
            key = serialization.load_der_private_key(_decode_base64(private_key), password=None)
    except KeyFormatError:
        raise
    except (ValueError, TypeError) as exc:
        raise KeyFormatError(f"Invalid private key: {exc}") from exc

    if not isinstance(key, RSAPrivateKey):
        raise KeyFormatError(f"Unsupported private key type: {type(key).__name__}")
    return key


@lru_cache(maxsize=16)
def load_public_key(public_key: str) -> RSAPublicKey:
    """Carrega chave pública RSA (âncora de confiança da plataforma).

    Raises:
        KeyFormatError: Se a chave for inválida ou não for RSA
    """
    if not public_key or not public_key.strip():
        raise KeyFormatError("missing_public_key")

    try:
        if _PEM_MARKER in public_key:
            key = serialization.load_pem_public_key(public_key.encode("utf-8"))
        else:
            key = serialization.load_der_public_key(_decode_base64(public_key))
    except KeyFormatError:
        raise
    except (ValueError, TypeError) as exc:
        raise KeyFormatError(f"Invalid public key: {exc}") from exc

    if not isinstance(key, RSAPublicKey):
        raise KeyFormatError(f"Unsupported public key type: {type(key).__name__}")
    return key
