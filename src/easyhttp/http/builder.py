"""
Resolve client defaults and call-site arguments into an OutboundRequest.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import quote
from urllib.parse import urlencode

from ..types import ClientConfig
from ..types import FormData
from ..types import Method
from ..types import Option
from ..types import OptionKey
from ..types import OutboundRequest
from ..types import merge_options

_BODY_METHODS = {Method.POST, Method.PUT, Method.PATCH}


def encode_query(params: FormData) -> str:
    """
    Form-encode query parameters.

    Keys and values are percent-encoded (spaces become ``%20``), pairs keep
    the mapping's iteration order, and list or tuple values expand into
    repeated keys.
    """
    return urlencode(list(params.items()), doseq=True, quote_via=quote)


def build_url(base_url: str, params: FormData | None = None) -> str:
    """Append the encoded query string to ``base_url``; empty params leave it unchanged."""
    if not params:
        return base_url
    return f"{base_url}?{encode_query(params)}"


def _method_from_options(options: Mapping[OptionKey, Any]) -> str:
    """Derive the method of an option-only request, as batch entries are."""
    custom = options.get(Option.CUSTOM_METHOD)
    if custom:
        return str(custom).upper()
    if options.get(Option.POST_FIELDS) is not None:
        return Method.POST.value
    if options.get(Option.NO_BODY):
        return Method.HEAD.value
    return Method.GET.value


def build_request(
    config: ClientConfig,
    method: Method | str | None = None,
    params: FormData | None = None,
    data: Any = None,
    overrides: Mapping[OptionKey, Any] | None = None,
    url: str | None = None,
) -> OutboundRequest:
    """
    Build a request from a snapshot of the client config.

    Args:
        config: Client defaults (headers, options, cookie file, timeout)
        method: HTTP method. When None, it is derived from the options
                (custom_method, then post_fields, then no_body, else GET).
        params: Query parameters, GET only
        data: Body fields for POST/PUT/PATCH
        overrides: Options layered over the client's (override keys win)
        url: Target URL instead of the client's base URL (batch entries)

    Returns:
        The resolved OutboundRequest
    """
    options = merge_options(config.options, overrides)

    resolved: Method | str
    if isinstance(method, Method):
        resolved = method
    else:
        name = (method or _method_from_options(options)).upper()
        try:
            resolved = Method(name)
        except ValueError:
            # Nonstandard verb, sent as-is
            resolved = name

    target = url if url is not None else config.base_url
    body: Any = None

    if resolved is Method.GET:
        target = build_url(target, params)
    elif resolved in _BODY_METHODS:
        body = data if data is not None else options.get(Option.POST_FIELDS)
    elif resolved is Method.HEAD:
        options[Option.NO_BODY] = True
    elif not isinstance(resolved, Method):
        body = data if data is not None else options.get(Option.POST_FIELDS)

    cookie_file: Path | None = config.cookie_file
    if Option.COOKIE_FILE in options:
        raw = options[Option.COOKIE_FILE]
        cookie_file = Path(raw) if raw is not None else None

    timeout = config.timeout
    if options.get(Option.TIMEOUT) is not None:
        timeout = float(options[Option.TIMEOUT])

    return OutboundRequest(
        method=resolved,
        url=target,
        headers=dict(config.headers),
        data=body,
        options=options,
        cookie_file=cookie_file,
        timeout=timeout,
    )
