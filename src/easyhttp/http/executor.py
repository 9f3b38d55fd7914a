"""
Perform one OutboundRequest with aiohttp and normalize the outcome.
"""

import inspect
import logging
import ssl
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import aiohttp

from ..exceptions import TransportError
from ..types import Option
from ..types import OutboundRequest
from ..types import RequestResult
from .logger import HTTPLogger

logger = logging.getLogger(__name__)

# Failures below HTTP. aiohttp also raises ValueError/TypeError for malformed
# URLs and unknown request arguments; those are reported the same way.
TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (
    aiohttp.ClientError,
    TimeoutError,
    OSError,
    ValueError,
    TypeError,
)

ResponseCallback = Callable[[str], Any]


def describe_error(error: BaseException) -> str:
    """One-line description of a transport failure."""
    message = str(error)
    if message:
        return f"{type(error).__name__}: {message}"
    return type(error).__name__


def _ssl_setting(request: OutboundRequest) -> ssl.SSLContext | bool:
    """Translate verify_tls/verify_host into aiohttp's ``ssl`` argument."""
    if not request.option(Option.VERIFY_TLS, True):
        return False
    if not request.option(Option.VERIFY_HOST, True):
        context = ssl.create_default_context()
        context.check_hostname = False
        return context
    return True


def _extra_kwargs(request: OutboundRequest) -> dict[str, Any]:
    """Option keys outside the vocabulary go to aiohttp untouched."""
    return {key: value for key, value in request.options.items() if not isinstance(key, Option)}


def _load_cookie_jar(path: Path | None) -> aiohttp.CookieJar:
    # unsafe=True accepts cookies from IP-address hosts
    jar = aiohttp.CookieJar(unsafe=True)
    if path is None:
        return jar
    try:
        if path.exists() and path.stat().st_size > 0:
            jar.load(path)
    except Exception as e:
        # CookieJar.load raises arbitrary errors on malformed files
        logger.warning(f"Ignoring unreadable cookie file {path}: {e!r}")
        jar = aiohttp.CookieJar(unsafe=True)
    return jar


def _save_cookie_jar(jar: aiohttp.CookieJar, path: Path | None) -> None:
    if path is None:
        return
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        jar.save(path)
    except OSError as e:
        logger.warning(f"Cannot save cookie file {path}: {e}")


class RequestExecutor:
    """
    Runs single requests through aiohttp.

    Every request gets its own ClientSession and cookie jar, so concurrent
    requests share nothing but the logger and, when configured, the cookie
    file on disk. Concurrent writers to one cookie file race; the last save
    wins.

    Example:
        executor = RequestExecutor(FileHTTPLogger("http.log"))
        body = await executor.execute(request)
    """

    def __init__(self, logger: HTTPLogger, strict: bool = False):
        """
        Initialize the executor.

        Args:
            logger: Destination for lifecycle events
            strict: Raise TransportError from execute() instead of
                    returning an empty body
        """
        self._logger = logger
        self.strict = strict

    async def perform(self, request: OutboundRequest) -> RequestResult:
        """
        Perform the exchange without logging.

        Transport failures are captured in the result, never raised.
        """
        method = request.method_name
        result = RequestResult(method=method, url=request.url)
        start = time.monotonic()

        read_body = request.option(Option.RETURN_BODY, True) and not request.option(Option.NO_BODY, False)
        timeout = aiohttp.ClientTimeout(
            total=request.timeout,
            connect=request.option(Option.CONNECT_TIMEOUT),
        )
        jar = _load_cookie_jar(request.cookie_file)

        try:
            async with aiohttp.ClientSession(timeout=timeout, cookie_jar=jar) as session:
                async with session.request(
                    method,
                    request.url,
                    headers=request.headers,
                    data=request.data,
                    allow_redirects=bool(request.option(Option.FOLLOW_REDIRECTS, True)),
                    max_redirects=int(request.option(Option.MAX_REDIRECTS, 10)),
                    ssl=_ssl_setting(request),
                    **_extra_kwargs(request),
                ) as resp:
                    result.status = resp.status
                    if read_body:
                        result.body = await resp.text(errors="replace")
                _save_cookie_jar(jar, request.cookie_file)
        except TRANSPORT_ERRORS as e:
            result.body = ""
            result.error = describe_error(e)

        result.elapsed = time.monotonic() - start
        return result

    async def run(self, request: OutboundRequest) -> RequestResult:
        """Perform a single request and log its lifecycle. Never raises on transport failure."""
        self._logger.log(f"Sending {request.method_name} request to {request.url}", "DEBUG")

        result = await self.perform(request)

        if result.error is not None:
            self._logger.log(f"Transport error: {result.error}", "ERROR")

        # Logged whatever the status; 4xx/5xx are not errors at this layer
        self._logger.log(f"Response HTTP status code: {result.status}", "DEBUG")
        return result

    async def execute(self, request: OutboundRequest, callback: ResponseCallback | None = None) -> Any:
        """
        Perform a single request and return its body.

        Args:
            request: The resolved request
            callback: Optional transform applied to the body. May be sync
                      or async. Its exceptions propagate.

        Returns:
            The body (empty on transport error), or the callback's result

        Raises:
            TransportError: On transport failure, in strict mode only
        """
        result = await self.run(request)

        if result.error is not None and self.strict:
            raise TransportError(result.method, result.url, result.error)

        if callback is None:
            return result.body

        transformed = callback(result.body)
        if inspect.isawaitable(transformed):
            transformed = await transformed
        return transformed
