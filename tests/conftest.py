import asyncio
import json
import os
from typing import Any, AsyncIterator, Callable, Iterable, List, Optional

import httpx
import pytest
from dotenv import load_dotenv, find_dotenv

from generative_ai_client import APIController, RequestOptions

# Load environment variables from .env file
# find_dotenv() walks up from the calling file, usecwd also covers runs started from a subdirectory
env_file = find_dotenv(usecwd=True)
if env_file:
    print(f"Loading .env from: {env_file}")
    load_dotenv(env_file)
else:
    print("Warning: No .env file found.")


TEXT_RESPONSE = {
    "candidates": [
        {
            "content": {"role": "model", "parts": [{"text": "Hello there"}]},
            "finishReason": "STOP",
            "index": 0,
            "safetyRatings": [{"category": "HARM_CATEGORY_HARASSMENT", "probability": "NEGLIGIBLE"}],
        }
    ],
    "usageMetadata": {"promptTokenCount": 4, "candidatesTokenCount": 2, "totalTokenCount": 6},
}


def text_response(text: str) -> dict:
    """A minimal successful response whose first candidate says ``text``."""
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}, "index": 0}]}


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


async def chunked(data: bytes, size: int, pause: float = 0.0) -> AsyncIterator[bytes]:
    """Yield ``data`` in pieces of ``size`` bytes."""
    for start in range(0, len(data), size):
        if pause:
            await asyncio.sleep(pause)
        yield data[start : start + size]


def stream_response(elements: Iterable[Any], chunk_size: int = 7) -> httpx.Response:
    """A streaming response carrying ``elements`` as one JSON array, split into small chunks."""
    data = json.dumps(list(elements)).encode("utf-8")
    return httpx.Response(200, content=chunked(data, chunk_size))


def sent_body(request: httpx.Request) -> dict:
    return json.loads(request.content)


@pytest.fixture
def make_controller() -> Callable[..., APIController]:
    """
    Builds controllers whose HTTP traffic goes to a handler instead of the network.

    The handler receives the ``httpx.Request`` and returns an ``httpx.Response``
    (sync or async). Every request seen is appended to ``controller.sent``.
    """

    def factory(
        handler: Callable[[httpx.Request], Any],
        request_options: Optional[RequestOptions] = None,
        model: str = "gemini-pro",
        api_key: str = "test-key",
    ) -> APIController:
        sent: List[httpx.Request] = []

        async def recording_handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            result = handler(request)
            if asyncio.iscoroutine(result):
                result = await result
            return result

        client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
        controller = APIController(api_key=api_key, model=model, request_options=request_options, http_client=client)
        controller.sent = sent  # type: ignore[attr-defined]
        return controller

    return factory


@pytest.fixture(scope="session")
def vcr_config() -> dict[str, Any]:
    return {
        "cassette_library_dir": "tests/cassettes",
        "record_mode": os.getenv("VCR_RECORD_MODE", "once"),
        "match_on": ["method", "path", "query"],
        "filter_headers": [
            "authorization",
            "x-goog-api-key",
            "x-goog-api-client",
        ],
        "filter_query_parameters": ["key"],
        "decode_compressed_response": True,
    }


class RecordingBody(httpx.AsyncByteStream):
    """Response body that records when the response holding it is closed.

    Yields ``chunks`` in order, then either ends, raises ``error`` or stalls.
    """

    def __init__(self, chunks: Iterable[bytes], error: Optional[Exception] = None, stall: bool = False):
        self.chunks = list(chunks)
        self.error = error
        self.stall = stall
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error
        if self.stall:
            await asyncio.sleep(60)

    async def aclose(self) -> None:
        self.closed = True
