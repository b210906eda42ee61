"""Testes de ponta a ponta do YopClient com transporte simulado."""

from __future__ import annotations

import asyncio
import json
from urllib.parse import parse_qs

import httpx
import pytest

from yop import (
    PreconditionError,
    ServiceError,
    SignatureVerificationError,
    SigningError,
    TransportError,
    TransportTimeoutError,
    UploadFile,
    YopClient,
    YopRequest,
)
from yop.config.settings import YopSettings
from yop.observability import get_correlation_id


def _client(settings: YopSettings, http: httpx.AsyncClient) -> YopClient:
    return YopClient(settings, http_client=http)


class TestRequest:
    """Testes para YopClient.request."""

    @pytest.mark.asyncio
    async def test_json_post_round_trip(self, settings: YopSettings, signed_response) -> None:
        """Requisição assinada sai e resposta verificada volta decodificada."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return signed_response({"result": {"orderId": "o-1", "state": "SUCCESS"}})

        request = YopRequest(http_method="POST", api_uri="/rest/v1.0/trade/order")
        request.set_content(json.dumps({"merchantNo": "10080000000"}))

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            response = await _client(settings, http).request(request)

        assert response.result == {"result": {"orderId": "o-1", "state": "SUCCESS"}}
        assert response.metadata.yop_request_id == "srv-req-001"
        assert response.metadata.yop_sign

        sent = seen[0]
        assert str(sent.url) == f"{settings.server_root}/rest/v1.0/trade/order"
        assert sent.headers["content-type"] == "application/json"
        assert sent.headers["authorization"].startswith("YOP-RSA2048-SHA256 yop-auth-v3/")
        assert sent.headers["x-yop-request-id"] == request.request_id
        assert sent.headers["x-yop-appkey"] == settings.app_key
        assert sent.headers["user-agent"].startswith("python/")
        assert json.loads(sent.content) == {"merchantNo": "10080000000"}

    @pytest.mark.asyncio
    async def test_form_post_sends_all_values(self, settings: YopSettings, signed_response) -> None:
        """POST form envia todos os valores de parâmetros multi-valorados."""
        bodies: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(request.content)
            return signed_response({"result": "ok"})

        request = YopRequest(http_method="POST", api_uri="/rest/v1.0/query")
        request.add_param("id", 1)
        request.add_param("id", 2)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            await _client(settings, http).request(request)

        assert parse_qs(bodies[0].decode())["id"] == ["1", "2"]

    @pytest.mark.asyncio
    async def test_files_with_get_never_sent(self, settings: YopSettings) -> None:
        """Arquivos com GET falham antes de qualquer IO."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        request = YopRequest(http_method="GET", api_uri="/rest/v1.0/file")
        request.add_file("file", UploadFile(filename="a.txt", content=b"x"))

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            with pytest.raises(PreconditionError):
                await _client(settings, http).request(request)

        assert calls == []

    @pytest.mark.asyncio
    async def test_signing_failure_never_sent(self, settings: YopSettings) -> None:
        """Falha de assinatura aborta sem enviar nada."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        request = YopRequest(api_uri="/rest/v1.0/test", isv_private_key="not-a-key")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            with pytest.raises(SigningError):
                await _client(settings, http).request(request)

        assert calls == []

    @pytest.mark.asyncio
    async def test_tampered_response_rejected(self, settings: YopSettings, signed_response) -> None:
        """Resposta com corpo alterado não chega ao chamador."""

        def handler(request: httpx.Request) -> httpx.Response:
            original = signed_response({"amount": "10.00"})
            return httpx.Response(
                200,
                content=b'{"amount": "99.00"}',
                headers={
                    "content-type": "application/json",
                    "x-yop-sign": original.headers["x-yop-sign"],
                },
            )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            with pytest.raises(SignatureVerificationError):
                await _client(settings, http).request(YopRequest(api_uri="/rest/v1.0/test"))

    @pytest.mark.asyncio
    async def test_unsigned_success_rejected(self, settings: YopSettings, signed_response) -> None:
        """2xx sem X-Yop-Sign é rejeitado."""

        def handler(request: httpx.Request) -> httpx.Response:
            return signed_response({"result": "ok"}, sign=False)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            with pytest.raises(SignatureVerificationError, match="missing_response_signature"):
                await _client(settings, http).request(YopRequest(api_uri="/rest/v1.0/test"))

    @pytest.mark.asyncio
    async def test_platform_error(self, settings: YopSettings, signed_response) -> None:
        """Erro YOP vira ServiceError."""

        def handler(request: httpx.Request) -> httpx.Response:
            payload = {"code": "40042", "message": "Missing required arguments", "subCode": "isv.arg"}
            return signed_response(payload, status_code=400, sign=False)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            with pytest.raises(ServiceError) as exc_info:
                await _client(settings, http).request(YopRequest(api_uri="/rest/v1.0/test"))

        assert exc_info.value.code == "40042"
        assert exc_info.value.sub_code == "isv.arg"

    @pytest.mark.asyncio
    async def test_connection_error(self, settings: YopSettings) -> None:
        """Falha de conexão vira TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            with pytest.raises(TransportError, match="ConnectError"):
                await _client(settings, http).request(YopRequest(api_uri="/rest/v1.0/test"))

    @pytest.mark.asyncio
    async def test_total_timeout(self, settings: YopSettings, signed_response) -> None:
        """Prazo total expirado vira TransportTimeoutError."""

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return signed_response({})

        request = YopRequest(api_uri="/rest/v1.0/slow", timeout=0.05)
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            with pytest.raises(TransportTimeoutError):
                await _client(settings, http).request(request)

    @pytest.mark.asyncio
    async def test_bytes_upload(self, settings: YopSettings, signed_response) -> None:
        """Upload em memória gera multipart com campos antes do arquivo."""
        bodies: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["content-type"].startswith("multipart/form-data")
            bodies.append(request.read())
            return signed_response({"fileUrl": "yos://file/1"})

        request = YopRequest(http_method="POST", api_uri="/yos/v1.0/sys/upload")
        request.add_param("merchantNo", "10080000000")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            response = await _client(settings, http).multipart_upload_file_by_bytes(
                request, "merQual", "license.png", b"\x89PNG-bytes"
            )

        assert response.result == {"fileUrl": "yos://file/1"}
        assert request.server_root == settings.yos_server_root
        body = bodies[0]
        assert body.index(b'name="merchantNo"') < body.index(b'filename="license.png"')
        assert b"\x89PNG-bytes" in body

    @pytest.mark.asyncio
    async def test_concurrent_calls_are_isolated(self, settings: YopSettings, signed_response) -> None:
        """Chamadas concorrentes no mesmo cliente têm ids próprios."""
        seen_ids: list[str] = []

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0.01)
            seen_ids.append(request.headers["x-yop-request-id"])
            return signed_response({"ok": True})

        requests = [YopRequest(api_uri=f"/rest/v1.0/item/{i}") for i in range(5)]
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            client = _client(settings, http)
            responses = await asyncio.gather(*(client.request(r) for r in requests))

        assert all(r.result == {"ok": True} for r in responses)
        assert sorted(seen_ids) == sorted(r.request_id for r in requests)
        assert len(set(seen_ids)) == 5
        assert get_correlation_id() == ""

    @pytest.mark.asyncio
    async def test_owned_http_client_closed(self, settings: YopSettings) -> None:
        """Cliente HTTP criado internamente é fechado no aclose."""
        client = YopClient(settings)
        async with client:
            pass
        assert client._http.is_closed
