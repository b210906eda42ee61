"""Assinatura RSA2048/SHA256 (protocolo yop-auth-v3).

String canônica assinada:

    yop-auth-v3/{appKey}/{timestamp}/{expiration}
    {METHOD}
    {api_uri}
    {query string canônica}
    {headers canônicos}

O header Authorization resultante tem o formato
``YOP-RSA2048-SHA256 {authString}/{signedHeaders}/{assinatura}$SHA256``.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import logging
import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from yop.auth.keys import KeyFormatError, load_private_key, load_public_key
from yop.constants import (
    AUTHORIZATION,
    DEFAULT_EXPIRATION_SECONDS,
    SIGN_DIGEST_SUFFIX,
    SIGNED_HEADERS,
    YOP_AUTH_VERSION,
    YOP_CONTENT_SHA256,
    YOP_RSA_SIGN_PROTOCOL,
)
from yop.errors import SignatureVerificationError, SigningError
from yop.utils.encoding import encode_parameters, percent_encode

if TYPE_CHECKING:
    from collections.abc import Callable

    from yop.request import YopRequest
    from yop.response import ResponseContext

logger = logging.getLogger(__name__)

# Espaços removidos do corpo antes de verificar a assinatura da resposta
_RESPONSE_WHITESPACE = re.compile(r"[ \t\r\n]")


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _b64url_decode(value: str) -> bytes:
    padded = value + ("=" * (-len(value) % 4))
    return base64.urlsafe_b64decode(padded)


def compute_content_sha256(request: YopRequest) -> str:
    """Hash hex do conteúdo assinado.

    - POST com payload bruto: hash do payload
    - POST sem payload (form ou multipart): hash dos parâmetros canônicos
    - demais métodos: hash de string vazia
    """
    if request.is_post and request.content:
        material = request.content
    elif request.is_post:
        material = encode_parameters(request.params)
    else:
        material = ""
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


def canonical_query_string(request: YopRequest) -> str:
    """Query string assinada: só existe quando os parâmetros vão na URL."""
    if request.is_post and not request.content:
        return ""
    return encode_parameters(request.params)


def canonical_headers(headers: dict[str, str]) -> tuple[str, str]:
    """Retorna (headers canônicos, lista de headers assinados).

    Apenas os headers de SIGNED_HEADERS presentes participam.
    """
    lowered = {name.lower(): value for name, value in headers.items()}
    names = sorted(name for name in SIGNED_HEADERS if name in lowered)
    lines = [f"{name}:{percent_encode(lowered[name].strip())}" for name in names]
    return "\n".join(lines), ";".join(names)


class RsaSigner:
    """Signer RSA do ISV; uma instância por chamada.

    Após ``sign_request`` guarda ``auth_string``, ``canonical_request`` e
    ``signature`` para consulta pela cadeia de verificação.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        expiration_seconds: int = DEFAULT_EXPIRATION_SECONDS,
    ) -> None:
        self._clock = clock or _utc_now
        self._expiration_seconds = expiration_seconds
        self.auth_string: str | None = None
        self.canonical_request: str | None = None
        self.signature: str | None = None

    def sign_request(self, request: YopRequest) -> None:
        """Assina a requisição e adiciona os headers de autenticação.

        Args:
            request: Requisição já completada por init_request

        Raises:
            SigningError: Credencial ausente/malformada ou falha ao assinar
        """
        if not request.app_id:
            raise SigningError("missing_app_key")

        try:
            private_key = load_private_key(request.isv_private_key)
        except KeyFormatError as exc:
            raise SigningError(f"Invalid ISV private key: {exc}") from exc

        timestamp = self._clock().strftime("%Y-%m-%dT%H:%M:%SZ")
        auth_string = f"{YOP_AUTH_VERSION}/{request.app_id}/{timestamp}/{self._expiration_seconds}"

        request.headers[YOP_CONTENT_SHA256] = compute_content_sha256(request)
        headers_block, signed_headers = canonical_headers(request.headers)

        canonical_request = "\n".join(
            (
                auth_string,
                request.http_method,
                request.api_uri,
                canonical_query_string(request),
                headers_block,
            )
        )

        try:
            raw_signature = private_key.sign(
                canonical_request.encode("utf-8"),
                padding.PKCS1v15(),
                hashes.SHA256(),
            )
        except (ValueError, TypeError) as exc:
            raise SigningError(f"Request signing failed: {exc}") from exc

        signature = _b64url_encode(raw_signature) + SIGN_DIGEST_SUFFIX
        request.headers[AUTHORIZATION] = (
            f"{YOP_RSA_SIGN_PROTOCOL} {auth_string}/{signed_headers}/{signature}"
        )

        self.auth_string = auth_string
        self.canonical_request = canonical_request
        self.signature = signature
        logger.debug(
            "yop_request_signed",
            extra={"api_uri": request.api_uri, "signed_headers": signed_headers},
        )

    def verify_response(self, context: ResponseContext) -> None:
        """Verifica X-Yop-Sign contra a âncora de confiança da requisição.

        Raises:
            SignatureVerificationError: Assinatura ausente, malformada ou inválida
        """
        yop_sign = context.response.metadata.yop_sign
        if not yop_sign:
            raise SignatureVerificationError("missing_response_signature")

        try:
            public_key = load_public_key(context.request.platform_pub_key.value)
        except KeyFormatError as exc:
            raise SignatureVerificationError(f"Invalid platform public key: {exc}") from exc

        try:
            body = context.response.content.decode("utf-8")
            signature = _b64url_decode(yop_sign.removesuffix(SIGN_DIGEST_SUFFIX))
        except (UnicodeDecodeError, ValueError, binascii.Error) as exc:
            raise SignatureVerificationError("malformed_response_signature") from exc

        signed_content = _RESPONSE_WHITESPACE.sub("", body).encode("utf-8")
        try:
            public_key.verify(signature, signed_content, padding.PKCS1v15(), hashes.SHA256())
        except InvalidSignature as exc:
            raise SignatureVerificationError("invalid_response_signature") from exc

