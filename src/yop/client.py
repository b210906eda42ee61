"""Cliente HTTP assinado para a YOP.

Pipeline de cada chamada:
    init_request -> signer.sign_request -> build_http_request
    -> envio sob prazo total -> cadeia de analyzers -> YopResponse

Uma instância de YopClient pode ser compartilhada por chamadas
concorrentes; sua configuração não muda após a construção. Todo estado
de chamada (requisição, signer, resposta) pertence à própria chamada.
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx

from yop.analyzers import DEFAULT_ANALYZER_CHAIN, run_analyzer_chain
from yop.auth.signer import RsaSigner
from yop.config.settings import get_yop_settings
from yop.constants import CONTENT_TYPE, GET_HTTP_METHOD, POST_HTTP_METHOD
from yop.errors import (
    DownloadError,
    PreconditionError,
    TransportError,
    TransportTimeoutError,
)
from yop.http.builder import MULTIPART_POST_ONLY, build_http_request, check_for_multipart
from yop.http.context import init_request
from yop.http.multipart import MultipartWriter
from yop.http.pipe import BytePipe
from yop.http.upload import produce_multipart_body, resolve_upload_filename
from yop.observability import reset_correlation_id, set_correlation_id
from yop.request import UploadFile
from yop.response import RawResponse, ResponseContext, YopResponse

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Sequence
    from types import TracebackType

    from yop.analyzers import ResponseAnalyzer
    from yop.auth.protocols import Signer
    from yop.config.settings import YopSettings
    from yop.request import YopRequest

logger: logging.Logger = logging.getLogger(__name__)


def _translate_http_error(exc: Exception) -> TransportError:
    if isinstance(exc, httpx.TimeoutException):
        return TransportTimeoutError(f"http_timeout: {type(exc).__name__}")
    return TransportError(f"http_transport_error: {type(exc).__name__}: {exc}")


@asynccontextmanager
async def _deadline(timeout: float) -> AsyncIterator[None]:
    """Prazo único e total da chamada (download + upload incluídos)."""
    try:
        async with asyncio.timeout(timeout):
            yield
    except TimeoutError as exc:
        raise TransportTimeoutError(f"request timed out after {timeout}s") from exc


class YopClient:
    """Cliente YOP com assinatura de saída e verificação de entrada.

    Uso:
        async with YopClient() as client:
            request = YopRequest(http_method="POST", api_uri="/rest/v1.0/trade/order")
            request.add_param("merchantNo", "10080000000")
            response = await client.request(request)
    """

    def __init__(
        self,
        settings: YopSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        signer_factory: Callable[[], Signer] = RsaSigner,
        analyzer_chain: Sequence[ResponseAnalyzer] = DEFAULT_ANALYZER_CHAIN,
    ) -> None:
        """Inicializa cliente.

        Args:
            settings: Credenciais/endpoints. Se None, carrega do ambiente.
            http_client: Pool HTTP compartilhado. Se None, o cliente cria e
                fecha o seu próprio.
            signer_factory: Cria um signer novo por chamada
            analyzer_chain: Cadeia de verificação, em ordem fixa
        """
        self._settings = settings or get_yop_settings()
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient()
        self._signer_factory = signer_factory
        self._analyzer_chain: tuple[ResponseAnalyzer, ...] = tuple(analyzer_chain)

    async def __aenter__(self) -> YopClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Libera o pool HTTP (apenas se foi criado por este cliente)."""
        if self._owns_http_client:
            await self._http.aclose()

    async def request(self, request: YopRequest) -> YopResponse:
        """Executa uma chamada simples, form ou multipart em memória.

        Raises:
            PreconditionError: Arquivos com método diferente de POST
            SigningError: Falha de assinatura (nada é enviado)
            TransportError: Falha de rede ou prazo expirado
            ChainVerificationError: Resposta rejeitada pela cadeia
        """
        check_for_multipart(request)
        signer = self._prepare(request)
        timeout = self._resolve_timeout(request)
        token = set_correlation_id(request.request_id)
        started = time.perf_counter()
        try:
            http_request = build_http_request(self._http, request, timeout)
            async with _deadline(timeout):
                raw = await self._send(http_request)
            response = self._verify(signer, request, raw)
            self._log_completed(request, raw, started)
            return response
        finally:
            reset_correlation_id(token)

    async def multipart_upload_file_by_bytes(
        self,
        request: YopRequest,
        field_name: str,
        filename: str,
        data: bytes,
    ) -> YopResponse:
        """Envia ``data`` como arquivo de formulário em ``field_name``."""
        request.add_file(field_name, UploadFile(filename=filename, content=data))
        return await self.request(request)

    async def multipart_upload_file_by_url(
        self,
        request: YopRequest,
        field_name: str,
        filename: str | None,
        source_url: str,
    ) -> YopResponse:
        """Baixa ``source_url`` e o envia como multipart sem bufferizar o arquivo.

        Args:
            request: Requisição POST
            field_name: Campo de formulário do arquivo
            filename: Nome do arquivo; se vazio, é deduzido da origem
            source_url: URL de origem do conteúdo

        Raises:
            PreconditionError: Método diferente de POST
            DownloadError: Origem respondeu com status de erro
            TransportError: Falha de rede ou prazo total expirado
            ChainVerificationError: Resposta rejeitada pela cadeia
        """
        if request.http_method != POST_HTTP_METHOD:
            raise PreconditionError(MULTIPART_POST_ONLY)

        signer = self._prepare(request)
        timeout = self._resolve_timeout(request)
        token = set_correlation_id(request.request_id)
        started = time.perf_counter()
        try:
            async with _deadline(timeout):
                raw = await self._upload_from_url(request, field_name, filename, source_url, timeout)
            response = self._verify(signer, request, raw)
            self._log_completed(request, raw, started)
            return response
        finally:
            reset_correlation_id(token)

    def _prepare(self, request: YopRequest) -> Signer:
        init_request(request, self._settings)
        signer = self._signer_factory()
        signer.sign_request(request)
        return signer

    def _resolve_timeout(self, request: YopRequest) -> float:
        return request.timeout if request.timeout > 0 else self._settings.request_timeout_seconds

    async def _send(self, http_request: httpx.Request) -> RawResponse:
        """Envia e lê o corpo inteiro; a resposta é sempre fechada."""
        try:
            http_response = await self._http.send(http_request, stream=True)
        except TransportError:
            raise
        except (httpx.HTTPError, OSError) as exc:
            raise _translate_http_error(exc) from exc

        try:
            content = await http_response.aread()
        except httpx.HTTPError as exc:
            raise _translate_http_error(exc) from exc
        finally:
            await http_response.aclose()
        return RawResponse.from_httpx(http_response, content)

    async def _upload_from_url(
        self,
        request: YopRequest,
        field_name: str,
        filename: str | None,
        source_url: str,
        timeout: float,
    ) -> RawResponse:
        download_request = self._http.build_request(GET_HTTP_METHOD, source_url, timeout=timeout)
        try:
            download = await self._http.send(download_request, stream=True)
        except (httpx.HTTPError, OSError) as exc:
            raise _translate_http_error(exc) from exc

        try:
            if not download.is_success:
                logger.warning(
                    "yop_upload_source_failed",
                    extra={"status_code": download.status_code},
                )
                raise DownloadError(
                    f"download file failed: {download.status_code}",
                    status_code=download.status_code,
                )

            resolved_name = resolve_upload_filename(filename, source_url, download.headers)
            pipe = BytePipe(self._settings.upload_pipe_depth)
            writer = MultipartWriter(pipe)
            producer = asyncio.create_task(
                produce_multipart_body(
                    pipe,
                    writer,
                    request.params,
                    field_name,
                    resolved_name,
                    download,
                    self._settings.upload_chunk_size,
                )
            )
            try:
                upload_request = self._http.build_request(
                    POST_HTTP_METHOD,
                    request.url,
                    content=pipe,
                    headers={CONTENT_TYPE: writer.content_type},
                    timeout=timeout,
                )
                for name, value in request.headers.items():
                    upload_request.headers[name] = value
                return await self._send(upload_request)
            except BaseException as exc:
                # prazo esgotado ou cancelamento: o leitor vê a causa real
                pipe.close(exc)
                raise
            finally:
                pipe.close(TransportError("upload aborted"))
                if not producer.done():
                    producer.cancel()
                # erro do produtor já chegou ao leitor pela pipe
                await asyncio.gather(producer, return_exceptions=True)
        finally:
            await download.aclose()

    def _verify(self, signer: Signer, request: YopRequest, raw: RawResponse) -> YopResponse:
        response = YopResponse.from_raw(raw)
        context = ResponseContext(signer=signer, response=response, request=request)
        run_analyzer_chain(self._analyzer_chain, context, raw)
        return response

    def _log_completed(self, request: YopRequest, raw: RawResponse, started: float) -> None:
        logger.info(
            "yop_request_completed",
            extra={
                "http_method": request.http_method,
                "api_uri": request.api_uri,
                "status_code": raw.status_code,
                "latency_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
