"""SDK Python da YOP (YeePay Open Platform).

Responsabilidades:
- Montagem e assinatura (RSA2048/SHA256) das requisições de saída
- Serialização simples, form-urlencoded e multipart (inclusive streaming por URL)
- Verificação das respostas por uma cadeia ordenada de analyzers
"""

from .client import YopClient
from .errors import (
    ChainVerificationError,
    DownloadError,
    PreconditionError,
    ResponseFormatError,
    ServiceError,
    SignatureVerificationError,
    SigningError,
    TransportError,
    TransportTimeoutError,
    YopError,
)
from .request import CertType, PlatformPublicKey, UploadFile, YopRequest
from .response import YopResponse, YopResponseMetadata

__all__ = [
    "CertType",
    "ChainVerificationError",
    "DownloadError",
    "PlatformPublicKey",
    "PreconditionError",
    "ResponseFormatError",
    "ServiceError",
    "SignatureVerificationError",
    "SigningError",
    "TransportError",
    "TransportTimeoutError",
    "UploadFile",
    "YopClient",
    "YopError",
    "YopRequest",
    "YopResponse",
    "YopResponseMetadata",
]
