"""HTTP controller for the generateContent, streamGenerateContent and countTokens methods."""

import asyncio
import platform
from typing import Any, AsyncIterator, Awaitable, Dict, Optional, TypeVar, Union

import httpx

from ..core.exceptions import (
    ClientException,
    InvalidStateException,
    RequestTimeoutException,
    SerializationException,
)
from ..core.logger import get_logger
from ..core.options import RequestOptions
from ..schema.requests import CountTokensRequest, GenerateContentRequest
from ..schema.responses import CountTokensResponse, GenerateContentResponse
from ..serialization import decode_payload, encode, iter_json_array, validate
from ..version import __version__
from .errors import exception_from_details, exception_from_response, parse_error_details

logger = get_logger(__name__)

T = TypeVar("T")

CLIENT_NAME = "generative-ai-client-python"


def full_model_name(name: str) -> str:
    """Return the model path used in URLs.

    Names that already contain a ``/`` are used verbatim, anything else is
    placed under ``models/``: ``gemini-pro`` becomes ``models/gemini-pro``,
    ``tunedModels/my-model`` stays as it is.
    """
    return name if "/" in name else f"models/{name}"


class APIController:
    """
    Sends typed requests to the service and returns typed responses.

    The controller holds no per-call state, so one instance can serve
    concurrent calls. Connection reuse is left to the ``httpx.AsyncClient``.
    Every call either returns a fully decoded response or raises one
    ``GenerativeAIException`` subclass; no call is retried.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        request_options: Optional[RequestOptions] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initializes the controller.

        Args:
            api_key: Key sent in the ``x-goog-api-key`` header.
            model: Model name, e.g. ``gemini-1.5-flash`` or ``tunedModels/my-model``.
            request_options: Timeout, API version and endpoint. Defaults to ``RequestOptions()``.
            http_client: Transport to send requests with. When omitted the controller
                creates one and closes it in ``aclose``.
        """
        if not api_key:
            raise ClientException("An API key is required.")

        self.api_key = api_key
        self.model = full_model_name(model)
        self.request_options = request_options or RequestOptions()

        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.AsyncClient(timeout=None)
        self._headers: Dict[str, str] = {
            "x-goog-api-key": api_key,
            "x-goog-api-client": f"{CLIENT_NAME}/{__version__} gl-python/{platform.python_version()}",
            "Content-Type": "application/json",
        }
        logger.info(
            f"Initialized APIController with model='{self.model}', api_version='{self.request_options.api_version}', "
            f"endpoint='{self.request_options.endpoint}'"
        )

    async def __aenter__(self) -> "APIController":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if the controller created it."""
        if self._owns_client:
            await self._client.aclose()

    def url_for(self, method: str) -> str:
        options = self.request_options
        return f"{options.endpoint}/{options.api_version}/{self.model}:{method}"

    async def generate_content(self, request: GenerateContentRequest) -> GenerateContentResponse:
        """
        Generates a single, complete response.

        Args:
            request: The request. Its ``model`` field is ignored.

        Returns:
            The decoded response. A blocked prompt is returned, not raised.

        Raises:
            RequestTimeoutException: If the response did not arrive before the deadline.
            ClientException: If the service could not be reached.
            ServerException: If the service answered with an error status.
            SerializationException: If the body could not be decoded.
            InvalidStateException: If the response has neither candidates nor prompt feedback.
        """
        body = encode(request.without_model())
        deadline = self._deadline()
        text = await self._post(self.url_for("generateContent"), body, deadline)
        return self._parse_generate_content(text)

    async def generate_content_stream(self, request: GenerateContentRequest) -> AsyncIterator[GenerateContentResponse]:
        """
        Generates a response as a stream of partial responses.

        The request is sent when iteration starts, and the deadline runs from
        that moment until the stream ends. Each element is yielded as soon as
        it has been read completely. Closing the iterator early (``aclose()``,
        ``contextlib.aclosing``) or cancelling the consuming task closes the
        HTTP response.

        Args:
            request: The request. Its ``model`` field is ignored.

        Yields:
            Decoded partial responses, in order.

        Raises:
            RequestTimeoutException: If the stream did not finish before the deadline.
            SerializationException: If an element is malformed or the stream is cut off.
            ClientException, ServerException, InvalidStateException: As for ``generate_content``.
        """
        body = encode(request.without_model())
        deadline = self._deadline()
        url = self.url_for("streamGenerateContent")
        http_request = self._client.build_request(
            "POST", url, content=body, headers=self._headers, timeout=self.request_options.effective_timeout
        )
        logger.debug(f"Streaming POST {url}")

        response = await self._within(self._client.send(http_request, stream=True), deadline)
        try:
            if not response.is_success:
                await self._within(response.aread(), deadline)
                raise exception_from_response(response.status_code, response.text)

            count = 0
            async for element in iter_json_array(self._read_chunks(response, deadline)):
                count += 1
                yield self._parse_generate_content(element)
            logger.debug(f"Stream from {url} completed with {count} responses")
        finally:
            await response.aclose()

    async def count_tokens(self, request: Union[CountTokensRequest, GenerateContentRequest]) -> CountTokensResponse:
        """
        Counts the tokens of a request.

        Args:
            request: A count-tokens request, or a generate-content request that is
                wrapped in the shape expected by the configured API version.

        Returns:
            The token count.

        Raises:
            Same as ``generate_content``, except ``InvalidStateException``.
        """
        if isinstance(request, GenerateContentRequest):
            request = CountTokensRequest.for_api_version(request, self.request_options.api_version)

        body = encode(request.without_model())
        deadline = self._deadline()
        text = await self._post(self.url_for("countTokens"), body, deadline)

        payload = decode_payload(text)
        self._raise_for_embedded_error(payload)
        return validate(payload, CountTokensResponse)

    def _deadline(self) -> float:
        return asyncio.get_running_loop().time() + self.request_options.effective_timeout

    async def _post(self, url: str, body: str, deadline: float) -> str:
        http_request = self._client.build_request(
            "POST", url, content=body, headers=self._headers, timeout=self.request_options.effective_timeout
        )
        logger.debug(f"POST {url}")

        response = await self._within(self._client.send(http_request), deadline)
        if not response.is_success:
            raise exception_from_response(response.status_code, response.text)
        return response.text

    async def _read_chunks(self, response: httpx.Response, deadline: float) -> AsyncIterator[bytes]:
        chunks = response.aiter_bytes()
        while True:
            chunk = await self._within(_next_body_chunk(chunks), deadline)
            if chunk is None:
                return
            yield chunk

    async def _within(self, operation: Awaitable[T], deadline: float) -> T:
        """Await ``operation`` until ``deadline``, translating transport failures.

        On expiry the operation is cancelled, which aborts the underlying HTTP read.
        """
        remaining = deadline - asyncio.get_running_loop().time()
        timeout = self.request_options.effective_timeout
        try:
            return await asyncio.wait_for(operation, max(remaining, 0))
        except asyncio.TimeoutError as e:
            msg = f"Request timed out after {timeout} seconds."
            logger.error(msg)
            raise RequestTimeoutException(msg, cause=e) from e
        except httpx.TimeoutException as e:
            msg = f"Transport timed out: {e}"
            logger.error(msg)
            raise RequestTimeoutException(msg, cause=e) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            msg = f"Could not reach the service: {type(e).__name__}: {e}"
            logger.error(msg)
            raise ClientException(msg, cause=e) from e

    def _parse_generate_content(self, text: str) -> GenerateContentResponse:
        payload = decode_payload(text)
        self._raise_for_embedded_error(payload)
        response = validate(payload, GenerateContentResponse)

        if not response.candidates and response.prompt_feedback is None:
            msg = "Response contained no candidates and no prompt feedback."
            logger.error(msg)
            raise InvalidStateException(msg)
        feedback = response.prompt_feedback
        if feedback is not None and feedback.block_reason is not None:
            logger.warning(f"Prompt was blocked: {feedback.block_reason.value}")
        return response

    @staticmethod
    def _raise_for_embedded_error(payload: Any) -> None:
        details = parse_error_details(payload)
        if details is not None:
            exc = exception_from_details(details)
            logger.error(f"Service reported an error in a successful response: {exc.message}")
            raise exc


async def _next_body_chunk(chunks: AsyncIterator[bytes]) -> Optional[bytes]:
    """Read the next chunk of a successful response body, None at its end.

    A connection dropped while the body is read leaves the response array
    unterminated, so it is reported like any other truncated stream.
    """
    try:
        return await chunks.__anext__()
    except StopAsyncIteration:
        return None
    except (httpx.RemoteProtocolError, httpx.ReadError) as e:
        msg = f"Stream ended before the closing ']' of the response array: {type(e).__name__}: {e}"
        logger.error(msg)
        raise SerializationException(msg, cause=e) from e
