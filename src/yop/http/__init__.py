"""Montagem, serialização e streaming dos requests HTTP YOP."""

from .builder import build_http_request, check_for_multipart, get_content_type
from .context import build_user_agent, init_request
from .multipart import MultipartWriter
from .pipe import BytePipe, ClosedPipeError
from .upload import resolve_upload_filename

__all__ = [
    "BytePipe",
    "ClosedPipeError",
    "MultipartWriter",
    "build_http_request",
    "build_user_agent",
    "check_for_multipart",
    "get_content_type",
    "init_request",
    "resolve_upload_filename",
]
