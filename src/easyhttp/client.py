"""
HttpClient: per-verb request methods over a fixed base URL.
"""

import logging
from collections.abc import Mapping
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .exceptions import InvalidBatchEntryError
from .http import BatchExecutor
from .http import FileHTTPLogger
from .http import HTTPLogger
from .http import RequestExecutor
from .http import build_request
from .http.executor import ResponseCallback
from .types import DEFAULT_OPTIONS
from .types import DEFAULT_TIMEOUT
from .types import BatchEntry
from .types import ClientConfig
from .types import FormData
from .types import Method
from .types import Option
from .types import OptionKey
from .types import Options
from .types import OutboundRequest
from .types import RequestResult
from .types import merge_options
from .types import normalize_option

logger = logging.getLogger(__name__)

BatchInput = BatchEntry | Mapping[str, Any] | str


def _to_batch_entry(index: int, entry: BatchInput) -> BatchEntry:
    """Accept a BatchEntry, a ``{"url": ..., "options": {...}}`` mapping, or a bare URL."""
    if isinstance(entry, BatchEntry):
        return entry
    if isinstance(entry, str):
        return BatchEntry(url=entry)
    url = entry.get("url")
    if not url:
        raise InvalidBatchEntryError(index, "missing 'url'")
    return BatchEntry(url=url, options=dict(entry.get("options") or {}))


class HttpClient:
    """
    Convenience client bound to one base URL.

    Headers, options, cookie file and timeout are held by the client and
    applied to every request; changes take effect from the next request.
    Transport errors are logged and turned into an empty body. Use
    ``strict=True`` to have single calls raise TransportError instead, or
    ``send()`` / ``batch_results()`` to inspect the error value directly.

    Example:
        client = HttpClient("https://httpbin.org/anything", headers={"Accept": "application/json"})
        body = await client.get({"q": "hello world"})
        data = await client.post({"name": "x"}, callback=json.loads)
        bodies = await client.async_batch(["https://a.example", "https://b.example"])
    """

    def __init__(
        self,
        base_url: str,
        headers: Mapping[str, str] | None = None,
        options: Mapping[OptionKey, Any] | None = None,
        cookie_file: Path | str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        logger: HTTPLogger | None = None,
        verify_tls: bool = True,
        strict: bool = False,
        max_concurrency: int | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Target of every verb call. Fixed for the client's lifetime.
            headers: Initial headers
            options: Transport options overriding the defaults
            cookie_file: Cookie jar path, read before and written after each request
            timeout: Overall timeout per request, in seconds
            logger: Shared lifecycle logger. Defaults to a FileHTTPLogger
                    writing ``HttpClient.log``.
            verify_tls: False disables certificate and host name checks
            strict: Raise TransportError from verb calls on transport failure
            max_concurrency: Cap on in-flight batch requests (None = unbounded)
        """
        defaults: Options = dict(DEFAULT_OPTIONS)
        if not verify_tls:
            defaults[Option.VERIFY_TLS] = False
            defaults[Option.VERIFY_HOST] = False

        self._config = ClientConfig(
            base_url=base_url,
            headers=dict(headers or {}),
            options=merge_options(defaults, options),
            cookie_file=Path(cookie_file) if cookie_file is not None else None,
            timeout=float(timeout),
        )
        self._logger: HTTPLogger = logger if logger is not None else FileHTTPLogger()
        self._executor = RequestExecutor(self._logger, strict=strict)
        self._batch = BatchExecutor(self._executor, self._logger, max_concurrency=max_concurrency)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def headers(self) -> dict[str, str]:
        """Copy of the effective headers."""
        return dict(self._config.headers)

    @property
    def transport_options(self) -> Options:
        """Copy of the effective transport options."""
        return dict(self._config.options)

    @property
    def cookie_file(self) -> Path | None:
        return self._config.cookie_file

    @property
    def timeout(self) -> float:
        return self._config.timeout

    @property
    def logger(self) -> HTTPLogger:
        return self._logger

    @property
    def strict(self) -> bool:
        return self._executor.strict

    def add_header(self, name: str, value: str) -> None:
        """Set a header. Names are case-sensitive; the last write wins."""
        self._config.headers[name] = value

    def add_option(self, key: OptionKey, value: Any) -> None:
        """Set a transport option, replacing any previous value."""
        self._config.options[normalize_option(key)] = value

    def set_cookie_file(self, cookie_file: Path | str | None) -> None:
        """Use a new cookie jar path from the next request on. None disables the jar."""
        self._config.cookie_file = Path(cookie_file) if cookie_file is not None else None

    def set_timeout(self, timeout: float) -> None:
        self._config.timeout = float(timeout)

    def build(
        self,
        method: Method | str | None = None,
        params: FormData | None = None,
        data: Any = None,
        overrides: Mapping[OptionKey, Any] | None = None,
        url: str | None = None,
    ) -> OutboundRequest:
        """Resolve the request a call would send, without sending it."""
        return build_request(self._config, method, params=params, data=data, overrides=overrides, url=url)

    # -------------------------------------------------------------------------
    # Verbs
    # -------------------------------------------------------------------------

    async def get(self, params: FormData | None = None, callback: ResponseCallback | None = None) -> Any:
        """
        Send a GET request.

        Args:
            params: Query parameters, URL-encoded onto the base URL
            callback: Optional transform applied to the response body

        Returns:
            Response body, or the callback's result
        """
        return await self._executor.execute(self.build(Method.GET, params=params), callback)

    async def post(self, data: FormData, callback: ResponseCallback | None = None) -> Any:
        """Send a POST request with ``data`` as the form body."""
        return await self._executor.execute(self.build(Method.POST, data=data), callback)

    async def put(self, data: FormData, callback: ResponseCallback | None = None) -> Any:
        """Send a PUT request with ``data`` as the form body."""
        return await self._executor.execute(self.build(Method.PUT, data=data), callback)

    async def delete(self, callback: ResponseCallback | None = None) -> Any:
        return await self._executor.execute(self.build(Method.DELETE), callback)

    async def patch(self, data: FormData, callback: ResponseCallback | None = None) -> Any:
        """Send a PATCH request with ``data`` as the form body."""
        return await self._executor.execute(self.build(Method.PATCH, data=data), callback)

    async def head(self, callback: ResponseCallback | None = None) -> Any:
        """Send a HEAD request. The body is never fetched, so the result is empty."""
        return await self._executor.execute(self.build(Method.HEAD), callback)

    async def options(self, callback: ResponseCallback | None = None) -> Any:
        return await self._executor.execute(self.build(Method.OPTIONS), callback)

    async def send(
        self,
        method: Method | str,
        params: FormData | None = None,
        data: Any = None,
    ) -> RequestResult:
        """
        Send a request and return the full result.

        Unlike the verb methods this never raises on transport failure and
        keeps the status code and error description.
        """
        return await self._executor.run(self.build(method, params=params, data=data))

    # -------------------------------------------------------------------------
    # Batch
    # -------------------------------------------------------------------------

    async def batch_results(self, requests: Sequence[BatchInput]) -> list[RequestResult]:
        """
        Run independent requests concurrently and return every result.

        Each entry is a URL plus optional option overrides layered over the
        client's options. The method comes from the entry's options
        (custom_method, post_fields, no_body), defaulting to GET.

        Raises:
            InvalidBatchEntryError: If an entry has no URL
        """
        entries = [_to_batch_entry(i, entry) for i, entry in enumerate(requests)]
        built = [self.build(overrides=entry.options, url=entry.url) for entry in entries]
        logger.debug(f"Dispatching batch of {len(built)} requests")
        return await self._batch.run(built)

    async def async_batch(self, requests: Sequence[BatchInput]) -> list[str]:
        """Run a batch and return the bodies by index (empty on transport error)."""
        results = await self.batch_results(requests)
        return [result.body for result in results]
