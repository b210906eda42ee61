"""Configuração do pytest para o SDK YOP."""

import base64
import json
import re
import sys
from pathlib import Path

import httpx
import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric import rsa

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from yop.auth.keys import load_private_key  # noqa: E402
from yop.config.settings import YopSettings  # noqa: E402

SERVER_ROOT = "https://sandbox.yop.test/yop-center"
YOS_SERVER_ROOT = "https://yos.yop.test/yop-center"
APP_KEY = "app_10080000000"

_RESPONSE_WHITESPACE = re.compile(r"[ \t\r\n]")


def _generate_key_pair() -> tuple[str, str]:
    """Retorna (privada PKCS#8 DER base64, pública SPKI DER base64)."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_der = private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_der = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(private_der).decode("ascii"), base64.b64encode(public_der).decode("ascii")


def sign_response_body(private_key_value: str, content: bytes) -> str:
    """Gera X-Yop-Sign como a plataforma: RSA-SHA256 do corpo sem espaços."""
    private_key = load_private_key(private_key_value)
    signed_content = _RESPONSE_WHITESPACE.sub("", content.decode("utf-8")).encode("utf-8")
    raw_signature = private_key.sign(signed_content, padding.PKCS1v15(), hashes.SHA256())
    return base64.urlsafe_b64encode(raw_signature).decode("ascii").rstrip("=") + "$SHA256"


@pytest.fixture(scope="session")
def isv_keys() -> tuple[str, str]:
    """Par de chaves do ISV (assina requisições)."""
    return _generate_key_pair()


@pytest.fixture(scope="session")
def platform_keys() -> tuple[str, str]:
    """Par de chaves da plataforma (assina respostas)."""
    return _generate_key_pair()


@pytest.fixture
def settings(isv_keys: tuple[str, str], platform_keys: tuple[str, str]) -> YopSettings:
    return YopSettings(
        app_key=APP_KEY,
        isv_private_key=isv_keys[0],
        platform_public_key=platform_keys[1],
        server_root=SERVER_ROOT,
        yos_server_root=YOS_SERVER_ROOT,
        request_timeout_seconds=5.0,
        upload_chunk_size=4,
        upload_pipe_depth=2,
    )


@pytest.fixture
def sign_body():
    """Assinador de corpos de resposta (lado plataforma)."""
    return sign_response_body


@pytest.fixture
def signed_response(platform_keys: tuple[str, str]):
    """Fábrica de respostas JSON assinadas pela plataforma."""

    def _build(payload: object, status_code: int = 200, sign: bool = True) -> httpx.Response:
        body = json.dumps(payload, indent=2).encode("utf-8")
        headers = {
            "content-type": "application/json;charset=UTF-8",
            "x-yop-request-id": "srv-req-001",
        }
        if sign:
            headers["x-yop-sign"] = sign_response_body(platform_keys[0], body)
        return httpx.Response(status_code, content=body, headers=headers)

    return _build
