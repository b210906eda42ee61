"""Testes para build_http_request (simples, form e multipart)."""

from __future__ import annotations

import json
from urllib.parse import parse_qs, unquote

import httpx
import pytest

from yop.constants import (
    YOP_HTTP_CONTENT_TYPE_FORM,
    YOP_HTTP_CONTENT_TYPE_JSON,
)
from yop.errors import PreconditionError
from yop.http.builder import (
    MULTIPART_POST_ONLY,
    build_http_request,
    check_for_multipart,
    get_content_type,
)
from yop.request import UploadFile, YopRequest

SERVER_ROOT = "https://sandbox.yop.test/yop-center"


def _request(method: str, **kwargs: object) -> YopRequest:
    return YopRequest(
        http_method=method,
        api_uri="/rest/v1.0/test",
        server_root=SERVER_ROOT,
        **kwargs,  # type: ignore[arg-type]
    )


class TestContentType:
    """Testes para get_content_type e check_for_multipart."""

    def test_json_only_for_post_with_content(self) -> None:
        """POST com payload usa JSON."""
        assert get_content_type(_request("POST", content="{}")) == YOP_HTTP_CONTENT_TYPE_JSON

    def test_form_for_everything_else(self) -> None:
        """POST sem payload e GET usam form."""
        assert get_content_type(_request("POST")) == YOP_HTTP_CONTENT_TYPE_FORM
        assert get_content_type(_request("GET")) == YOP_HTTP_CONTENT_TYPE_FORM
        assert get_content_type(_request("GET", content="{}")) == YOP_HTTP_CONTENT_TYPE_FORM

    def test_multipart_requires_post(self) -> None:
        """Arquivos com GET levantam PreconditionError."""
        request = _request("GET")
        request.add_file("file", UploadFile(filename="a.txt", content=b"x"))
        with pytest.raises(PreconditionError, match=MULTIPART_POST_ONLY):
            check_for_multipart(request)

    def test_multipart_detection(self) -> None:
        """POST com arquivos é multipart; sem arquivos não é."""
        request = _request("POST")
        assert check_for_multipart(request) is False
        request.add_file("file", UploadFile(filename="a.txt", content=b"x"))
        assert check_for_multipart(request) is True


class TestBuildHttpRequest:
    """Testes para os três formatos de fio."""

    @pytest.mark.asyncio
    async def test_get_params_in_query(self) -> None:
        """GET: parâmetros ordenados e escapados na URL, sem corpo."""
        request = _request("GET")
        request.add_param("b", "x y")
        request.add_param("a", "1")
        async with httpx.AsyncClient() as client:
            http_request = build_http_request(client, request, 5.0)

        assert http_request.method == "GET"
        assert str(http_request.url) == f"{SERVER_ROOT}/rest/v1.0/test?a=1&b=x%20y"
        assert http_request.content == b""
        assert http_request.headers["content-type"] == YOP_HTTP_CONTENT_TYPE_FORM

    @pytest.mark.asyncio
    async def test_post_form_body(self) -> None:
        """POST sem payload: todos os valores no corpo form, URL sem query."""
        request = _request("POST")
        request.add_param("ids", "1")
        request.add_param("ids", "2")
        request.add_param("name", "a b")
        async with httpx.AsyncClient() as client:
            http_request = build_http_request(client, request, 5.0)

        assert str(http_request.url) == f"{SERVER_ROOT}/rest/v1.0/test"
        assert http_request.headers["content-type"] == YOP_HTTP_CONTENT_TYPE_FORM
        fields = parse_qs(http_request.content.decode())
        assert fields["ids"] == ["1", "2"]
        assert [unquote(v) for v in fields["name"]] == ["a b"]

    @pytest.mark.asyncio
    async def test_post_json_body_params_in_query(self) -> None:
        """POST com payload: JSON no corpo, parâmetros na URL."""
        payload = json.dumps({"orderId": "o-1"})
        request = _request("POST", content=payload)
        request.add_param("ver", "1")
        async with httpx.AsyncClient() as client:
            http_request = build_http_request(client, request, 5.0)

        assert str(http_request.url) == f"{SERVER_ROOT}/rest/v1.0/test?ver=1"
        assert http_request.headers["content-type"] == YOP_HTTP_CONTENT_TYPE_JSON
        assert json.loads(http_request.content) == {"orderId": "o-1"}

    @pytest.mark.asyncio
    async def test_caller_headers_win(self) -> None:
        """Headers do chamador prevalecem sobre os calculados."""
        request = _request("POST", headers={"Content-Type": "text/plain", "x-trace": "t1"})
        async with httpx.AsyncClient() as client:
            http_request = build_http_request(client, request, 5.0)

        assert http_request.headers["content-type"] == "text/plain"
        assert http_request.headers["x-trace"] == "t1"

    @pytest.mark.asyncio
    async def test_multipart_fields_before_files(self) -> None:
        """Multipart: campos escapados primeiro, depois os arquivos."""
        request = _request("POST")
        request.add_param("merchantNo", "10080000000")
        request.add_param("note", "a b")
        request.add_file("file", UploadFile(filename="r.txt", content=b"hello", content_type="text/plain"))
        async with httpx.AsyncClient() as client:
            http_request = build_http_request(client, request, 5.0)

        assert http_request.headers["content-type"].startswith("multipart/form-data; boundary=")
        body = http_request.read()
        field_at = body.index(b'name="merchantNo"')
        file_at = body.index(b'filename="r.txt"')
        assert field_at < file_at
        assert b"a%20b" in body
        assert b"hello" in body
        assert "?" not in str(http_request.url)
