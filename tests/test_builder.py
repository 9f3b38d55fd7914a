"""Tests for request building and client configuration."""

from pathlib import Path

from easyhttp import DEFAULT_OPTIONS
from easyhttp import ClientConfig
from easyhttp import HttpClient
from easyhttp import Method
from easyhttp import NullHTTPLogger
from easyhttp import Option
from easyhttp import build_request
from easyhttp import build_url
from easyhttp import encode_query

BASE = "https://api.example.com/items"


def make_client(**kwargs: object) -> HttpClient:
    return HttpClient(BASE, logger=NullHTTPLogger(), **kwargs)  # type: ignore[arg-type]


class TestQueryEncoding:
    """Test URL building for GET."""

    def test_encodes_params_in_order(self) -> None:
        """Test percent-encoding and ordering of query parameters."""
        assert build_url(BASE, {"a": "1", "b": "x y"}) == f"{BASE}?a=1&b=x%20y"

    def test_empty_params_leave_url_unchanged(self) -> None:
        """Test that empty or missing params don't touch the URL."""
        assert build_url(BASE, {}) == BASE
        assert build_url(BASE, None) == BASE

    def test_reserved_characters_are_encoded(self) -> None:
        """Test that keys and values are both encoded."""
        assert encode_query({"q&x": "a=b/c"}) == "q%26x=a%3Db%2Fc"

    def test_sequence_values_repeat_key(self) -> None:
        """Test that list values expand into repeated keys."""
        assert encode_query({"tag": ["a", "b"]}) == "tag=a&tag=b"


class TestBuildRequest:
    """Test build_request resolution."""

    def test_get_carries_query_and_no_body(self) -> None:
        """Test GET resolution."""
        config = ClientConfig(base_url=BASE)
        request = build_request(config, Method.GET, params={"page": 2}, data={"ignored": "x"})
        assert request.method is Method.GET
        assert request.url == f"{BASE}?page=2"
        assert request.data is None

    def test_body_methods_carry_data(self) -> None:
        """Test POST/PUT/PATCH put data in the body and leave the URL alone."""
        config = ClientConfig(base_url=BASE)
        for method in (Method.POST, Method.PUT, Method.PATCH):
            request = build_request(config, method, data={"name": "x"})
            assert request.url == BASE
            assert request.data == {"name": "x"}

    def test_bodyless_methods(self) -> None:
        """Test DELETE/HEAD/OPTIONS carry no body."""
        config = ClientConfig(base_url=BASE)
        for method in (Method.DELETE, Method.HEAD, Method.OPTIONS):
            request = build_request(config, method, data={"name": "x"})
            assert request.data is None

    def test_head_sets_no_body(self) -> None:
        """Test HEAD tells the transport not to fetch a body."""
        request = build_request(ClientConfig(base_url=BASE), Method.HEAD)
        assert request.option(Option.NO_BODY) is True

    def test_string_method_is_normalized(self) -> None:
        """Test lower-case method names map onto Method."""
        request = build_request(ClientConfig(base_url=BASE), "patch", data={})
        assert request.method is Method.PATCH
        assert request.method_name == "PATCH"

    def test_nonstandard_method_passes_through(self) -> None:
        """Test verbs outside the enum are sent as-is."""
        request = build_request(ClientConfig(base_url=BASE), "purge")
        assert request.method == "PURGE"
        assert request.method_name == "PURGE"

    def test_overrides_win_over_client_options(self) -> None:
        """Test per-call overrides replace client options on collision."""
        config = ClientConfig(base_url=BASE)
        request = build_request(config, Method.GET, overrides={"max_redirects": 2, "verify_tls": False})
        assert request.option(Option.MAX_REDIRECTS) == 2
        assert request.option(Option.VERIFY_TLS) is False
        assert request.option(Option.FOLLOW_REDIRECTS) is True
        # The config itself is untouched
        assert config.options[Option.MAX_REDIRECTS] == 10

    def test_method_derived_from_options(self) -> None:
        """Test method resolution when only options are given."""
        config = ClientConfig(base_url=BASE)
        assert build_request(config).method is Method.GET
        assert build_request(config, overrides={Option.NO_BODY: True}).method is Method.HEAD

        post = build_request(config, overrides={Option.POST_FIELDS: {"a": "1"}})
        assert post.method is Method.POST
        assert post.data == {"a": "1"}

        custom = build_request(config, overrides={Option.CUSTOM_METHOD: "delete"})
        assert custom.method is Method.DELETE

    def test_cookie_file_and_timeout_options(self, tmp_path: Path) -> None:
        """Test that cookie_file and timeout options override the config."""
        config = ClientConfig(base_url=BASE, cookie_file=tmp_path / "a.jar", timeout=60)
        request = build_request(
            config,
            Method.GET,
            overrides={Option.COOKIE_FILE: str(tmp_path / "b.jar"), Option.TIMEOUT: 5},
        )
        assert request.cookie_file == tmp_path / "b.jar"
        assert request.timeout == 5.0

        disabled = build_request(config, Method.GET, overrides={Option.COOKIE_FILE: None})
        assert disabled.cookie_file is None

    def test_unknown_option_keys_are_kept(self) -> None:
        """Test that keys outside the vocabulary survive as plain strings."""
        request = build_request(ClientConfig(base_url=BASE), Method.GET, overrides={"read_bufsize": 1024})
        assert request.options["read_bufsize"] == 1024


class TestClientConfiguration:
    """Test HttpClient configuration calls."""

    def test_defaults(self) -> None:
        """Test the default option set, timeout and cookie file."""
        client = make_client()
        assert client.transport_options == DEFAULT_OPTIONS
        assert client.timeout == 60.0
        assert client.cookie_file is None
        assert client.base_url == BASE

    def test_lenient_tls_variant(self) -> None:
        """Test verify_tls=False disables both certificate and host checks."""
        client = make_client(verify_tls=False)
        assert client.transport_options[Option.VERIFY_TLS] is False
        assert client.transport_options[Option.VERIFY_HOST] is False

    def test_constructor_options_override_defaults(self) -> None:
        """Test caller options replace defaults key by key."""
        client = make_client(options={"max_redirects": 3})
        assert client.transport_options[Option.MAX_REDIRECTS] == 3
        assert client.transport_options[Option.FOLLOW_REDIRECTS] is True

    def test_add_header_last_write_wins(self) -> None:
        """Test header upsert semantics."""
        client = make_client(headers={"Accept": "text/plain"})
        client.add_header("X-Token", "one")
        client.add_header("X-Token", "two")
        client.add_header("x-token", "lower")

        assert client.headers["X-Token"] == "two"
        # Storage is case-sensitive
        assert client.headers["x-token"] == "lower"
        assert client.headers["Accept"] == "text/plain"
        assert client.build(Method.GET).headers["X-Token"] == "two"

    def test_add_option(self) -> None:
        """Test option upsert, by enum member or plain string."""
        client = make_client()
        client.add_option(Option.CONNECT_TIMEOUT, 5)
        client.add_option("connect_timeout", 7)
        assert client.transport_options[Option.CONNECT_TIMEOUT] == 7
        assert client.build(Method.GET).option(Option.CONNECT_TIMEOUT) == 7

    def test_requests_are_snapshots(self) -> None:
        """Test that later configuration changes don't reach built requests."""
        client = make_client()
        before = client.build(Method.GET)
        client.add_header("X-Late", "1")
        client.set_timeout(3)
        client.set_cookie_file("late.jar")

        assert "X-Late" not in before.headers
        assert before.timeout == 60.0
        assert before.cookie_file is None

        after = client.build(Method.GET)
        assert after.headers["X-Late"] == "1"
        assert after.timeout == 3.0
        assert after.cookie_file == Path("late.jar")

    def test_set_cookie_file_none_disables(self) -> None:
        """Test that None turns the cookie jar off."""
        client = make_client(cookie_file="a.jar")
        client.set_cookie_file(None)
        assert client.cookie_file is None
