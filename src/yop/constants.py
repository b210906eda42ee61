"""Constantes do protocolo YOP."""

from __future__ import annotations

SDK_VERSION = "4.3.0"
SDK_LANG = "python"

# Headers de saída
YOP_REQUEST_ID = "x-yop-request-id"
YOP_APPKEY_HEADER_KEY = "x-yop-appkey"
YOP_CONTENT_SHA256 = "x-yop-content-sha256"
USER_AGENT_HEADER_KEY = "user-agent"
AUTHORIZATION = "Authorization"
CONTENT_TYPE = "Content-Type"

# Headers de entrada
YOP_SIGN_HEADER_KEY = "X-Yop-Sign"
YOP_RESPONSE_REQUEST_ID = "X-Yop-Request-Id"

# Content types
YOP_HTTP_CONTENT_TYPE_JSON = "application/json"
YOP_HTTP_CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
YOP_HTTP_CONTENT_TYPE_MULTIPART = "multipart/form-data"

POST_HTTP_METHOD = "POST"
GET_HTTP_METHOD = "GET"

# Endpoints padrão
DEFAULT_SERVER_ROOT = "https://openapi.yeepay.com/yop-center"
DEFAULT_YOS_SERVER_ROOT = "https://yos.yeepay.com/yop-center"
YOS_API_PREFIX = "/yos"

DEFAULT_TIMEOUT_SECONDS = 10.0

# Protocolo de assinatura v3
YOP_RSA_SIGN_PROTOCOL = "YOP-RSA2048-SHA256"
YOP_AUTH_VERSION = "yop-auth-v3"
DEFAULT_EXPIRATION_SECONDS = 1800
SIGN_DIGEST_SUFFIX = "$SHA256"
SIGNED_HEADERS = (YOP_APPKEY_HEADER_KEY, YOP_CONTENT_SHA256, YOP_REQUEST_ID)

# Chave pública da plataforma (RSA2048, DER em base64)
YOP_PLATFORM_PUBLIC_KEY = (
    "MIIBIjANBgkqhkiG9w0BAQEFAAOCAQ8AMIIBCgKCAQEA6p0XWjscY+gsyqKRhw9MeLsEmhFdBRhT"
    "2emOck/F1Omw38ZWhJxh9kDfs5HzFJMrVozgU+SJFDONxs8UB0wMILKRmqfLcfClG9MyCNuJkkfm"
    "0HFQv1hRGdOvZPXj3Bckuwa7FrEXBRYUhK7vJ40afumspthmse6bs6mZxNn/mALZ2X07uznOrrc2"
    "rk41Y2HftduxZw6T4EmtWuN2x4CZ8gwSyPAW5ZzZJLQ6tZDojBK4GZTAGhnn3bg5bBsBlw2+FLkC"
    "QBuDsJVsFPiGh/b6K/+zGTvWyUcu+LUj2MejYQELDO3i2vQXVDk7lVi2/TcUYefvIcssnzsfCfja"
    "orxsuwIDAQAB"
)

# Upload por URL
DEFAULT_UPLOAD_CHUNK_SIZE = 64 * 1024
DEFAULT_UPLOAD_PIPE_DEPTH = 4
DEFAULT_UPLOAD_FILENAME = "file"

# Extensão padrão por Content-Type (ordem importa: primeiro match vence)
CONTENT_TYPE_FILENAMES: tuple[tuple[str, str], ...] = (
    ("text/plain", "file.txt"),
    ("application/pdf", "file.pdf"),
    ("application/zip", "file.zip"),
    ("image/jpeg", "image.jpg"),
    ("image/gif", "image.gif"),
    ("image/png", "image.png"),
    ("audio/ogg", "audio.ogg"),
    ("audio/mpeg", "audio.mp3"),
    ("video/mp4", "video.mp4"),
    ("video/webm", "video.webm"),
)
