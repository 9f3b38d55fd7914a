"""
Core types for the easyhttp client.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from pathlib import Path
from typing import Any

# Form fields sent as a request body, or query parameters for GET
FormData = Mapping[str, Any]


class Method(str, Enum):
    """HTTP methods exposed by the client."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class Option(str, Enum):
    """
    Transport knobs understood by the executor.

    Values are plain strings, so ``options["max_redirects"]`` and
    ``options[Option.MAX_REDIRECTS]`` address the same entry.
    """

    FOLLOW_REDIRECTS = "follow_redirects"
    MAX_REDIRECTS = "max_redirects"
    CONNECT_TIMEOUT = "connect_timeout"  # seconds
    VERIFY_TLS = "verify_tls"
    VERIFY_HOST = "verify_host"
    RETURN_BODY = "return_body"
    CUSTOM_METHOD = "custom_method"
    POST_FIELDS = "post_fields"
    NO_BODY = "no_body"
    COOKIE_FILE = "cookie_file"
    TIMEOUT = "timeout"  # seconds, whole exchange


# Option keys may be vocabulary members or arbitrary aiohttp request kwargs
OptionKey = Option | str
Options = dict[OptionKey, Any]

DEFAULT_OPTIONS: dict[Option, Any] = {
    Option.FOLLOW_REDIRECTS: True,
    Option.MAX_REDIRECTS: 10,
    Option.CONNECT_TIMEOUT: 30.0,
    Option.RETURN_BODY: True,
    Option.VERIFY_TLS: True,
    Option.VERIFY_HOST: True,
}

DEFAULT_TIMEOUT = 60.0


def normalize_option(key: OptionKey) -> OptionKey:
    """Map a string key onto the vocabulary member when there is one."""
    if isinstance(key, Option):
        return key
    try:
        return Option(key)
    except ValueError:
        return key


def merge_options(base: Mapping[OptionKey, Any], overrides: Mapping[OptionKey, Any] | None) -> Options:
    """Overlay ``overrides`` on ``base``; colliding keys are replaced, never merged."""
    merged: Options = {normalize_option(k): v for k, v in base.items()}
    if overrides:
        for key, value in overrides.items():
            merged[normalize_option(key)] = value
    return merged


@dataclass
class ClientConfig:
    """
    Client-held defaults applied to every request.

    The base URL is fixed for the lifetime of a client; headers, options,
    cookie file and timeout may change between requests.
    """

    base_url: str
    headers: dict[str, str] = field(default_factory=dict)
    options: Options = field(default_factory=lambda: dict(DEFAULT_OPTIONS))
    cookie_file: Path | None = None
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class OutboundRequest:
    """A fully resolved request. Built fresh per call and never reused."""

    method: Method | str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = None
    options: Options = field(default_factory=dict)
    cookie_file: Path | None = None
    timeout: float = DEFAULT_TIMEOUT

    def option(self, key: Option, default: Any = None) -> Any:
        """Look up a vocabulary option."""
        return self.options.get(key, default)

    @property
    def method_name(self) -> str:
        return self.method.value if isinstance(self.method, Method) else self.method.upper()


@dataclass
class RequestResult:
    """
    Outcome of one exchange.

    ``status`` is 0 when the transport failed before a status line was
    received, in which case ``body`` is empty and ``error`` holds the
    transport's description.
    """

    method: str
    url: str
    status: int = 0
    body: str = ""
    error: str | None = None
    elapsed: float = 0.0  # seconds

    @property
    def ok(self) -> bool:
        """True unless the transport failed. HTTP error statuses still count as ok."""
        return self.error is None

    @property
    def is_http_error(self) -> bool:
        return self.status >= 400


@dataclass
class BatchEntry:
    """One request of a batch: a target URL plus per-entry option overrides."""

    url: str
    options: Options = field(default_factory=dict)
