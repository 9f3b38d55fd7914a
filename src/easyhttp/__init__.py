"""
easyhttp - a small convenience client over aiohttp.

This package wraps aiohttp with a per-verb interface bound to one base URL.
It supports:

- GET/POST/PUT/DELETE/PATCH/HEAD/OPTIONS with client-held headers and options
- Optional response callbacks (sync or async) applied to the body
- A cookie-jar file read before and written after each request
- Concurrent batches with index-ordered results
- Line-based logging of request lifecycle events to a file and stdout

Transport errors are logged and returned as an empty body by default. Pass
``strict=True`` to raise TransportError instead, or use ``send()`` /
``batch_results()`` to get the status code and error alongside the body.

Example:
    import asyncio
    import json

    from easyhttp import FileHTTPLogger
    from easyhttp import HttpClient
    from easyhttp import Option

    async def main() -> None:
        client = HttpClient(
            "https://httpbin.org/anything",
            headers={"Accept": "application/json"},
            options={Option.MAX_REDIRECTS: 5},
            cookie_file="cookies.jar",
            timeout=10,
            logger=FileHTTPLogger("logs/http.log"),
        )

        body = await client.get({"q": "hello world"})
        data = await client.post({"name": "easyhttp"}, callback=json.loads)

        bodies = await client.async_batch([
            "https://httpbin.org/get",
            {"url": "https://httpbin.org/post", "options": {Option.POST_FIELDS: {"a": "1"}}},
        ])

    asyncio.run(main())
"""

from .client import HttpClient
from .exceptions import EasyHTTPError
from .exceptions import InvalidBatchEntryError
from .exceptions import TransportError
from .http import DEFAULT_LOG_FILE
from .http import BatchExecutor
from .http import FileHTTPLogger
from .http import HTTPLogger
from .http import NullHTTPLogger
from .http import RequestExecutor
from .http import build_request
from .http import build_url
from .http import encode_query
from .types import DEFAULT_OPTIONS
from .types import DEFAULT_TIMEOUT
from .types import BatchEntry
from .types import ClientConfig
from .types import Method
from .types import Option
from .types import OutboundRequest
from .types import RequestResult

__all__ = [
    # Client
    "HttpClient",
    # Types
    "BatchEntry",
    "ClientConfig",
    "Method",
    "Option",
    "OutboundRequest",
    "RequestResult",
    "DEFAULT_OPTIONS",
    "DEFAULT_TIMEOUT",
    # Building and execution
    "BatchExecutor",
    "RequestExecutor",
    "build_request",
    "build_url",
    "encode_query",
    # Logging
    "DEFAULT_LOG_FILE",
    "FileHTTPLogger",
    "HTTPLogger",
    "NullHTTPLogger",
    # Exceptions
    "EasyHTTPError",
    "InvalidBatchEntryError",
    "TransportError",
]
