"""Testes para RequestDispatcher (montagem e envio das requisições)."""

from __future__ import annotations

import json

import httpx
import pytest

from opengraph.api.dispatcher import RequestDispatcher, normalize_headers
from opengraph.api.params import FileRef
from opengraph.infra.json_codec import JsonCodec
from tests.fakes.fake_graph_transport import FakeGraphTransport, json_response


def _dispatcher(
    transport: FakeGraphTransport | None = None,
    token: str | None = "TOKEN123",
    **kwargs: object,
) -> RequestDispatcher:
    return RequestDispatcher(
        transport or FakeGraphTransport(),
        JsonCodec(),
        lambda: token,
        **kwargs,
    )


class TestUri:
    """Testes para resolução de URIs."""

    def test_relative_path(self) -> None:
        assert str(_dispatcher().uri("/me/feed")) == "https://graph.facebook.com/me/feed"

    def test_beta_host(self) -> None:
        uri = _dispatcher(is_beta=True).uri("me")
        assert uri.host == "graph.beta.facebook.com"

    def test_api_version_prefix(self) -> None:
        uri = _dispatcher(api_version="v24.0").uri("/me")
        assert str(uri) == "https://graph.facebook.com/v24.0/me"

    def test_absolute_uri_kept(self) -> None:
        uri = _dispatcher().uri("https://example.com/x?a=1")
        assert str(uri) == "https://example.com/x?a=1"

    def test_video_uri(self) -> None:
        assert _dispatcher().video_uri("/me/videos").host == "graph-video.facebook.com"
        assert _dispatcher(is_beta=True).video_uri().host == "graph-video.beta.facebook.com"


class TestBuildRequest:
    """Testes para build_request."""

    def test_get_sends_params_in_query(self) -> None:
        request = _dispatcher().build_request("get", "/me", {"fields": ["id", "name"]})
        assert request.method == "GET"
        assert request.url.params["fields"] == "id,name"
        assert request.content == b""

    def test_authorization_header(self) -> None:
        request = _dispatcher().build_request("GET", "/me")
        assert request.headers["Authorization"] == "OAuth TOKEN123"

    def test_no_authorization_without_token(self) -> None:
        request = _dispatcher(token=None).build_request("GET", "/me")
        assert "Authorization" not in request.headers

    def test_caller_headers_preserved(self) -> None:
        request = _dispatcher().build_request("GET", "/me", headers=[("X-Custom", "1")])
        assert request.headers["X-Custom"] == "1"

    def test_query_merged_explicit_params_win(self) -> None:
        request = _dispatcher().build_request("GET", "/search?q=old&type=page", {"q": "new"})
        assert dict(request.url.params.items()) == {"q": "new", "type": "page"}

    def test_delete_uses_query(self) -> None:
        request = _dispatcher().build_request("DELETE", "/123", {"reason": "x"})
        assert request.url.params["reason"] == "x"

    def test_post_form_encoded(self) -> None:
        request = _dispatcher().build_request(
            "POST", "/me/feed?a=1", {"message": "olá", "object": {"k": "v"}}
        )
        body = dict(httpx.QueryParams(request.read().decode()).items())
        assert request.url.query == b""
        assert body["message"] == "olá"
        assert body["a"] == "1"
        assert json.loads(body["object"]) == {"k": "v"}
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"

    def test_post_with_source_is_multipart(self) -> None:
        source = FileRef(filename="foto.jpg", content=b"JPEGDATA", content_type="image/jpeg")
        request = _dispatcher().build_request(
            "POST", "/me/photos", {"source": source, "message": "oi"}
        )
        content = request.read()
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b'filename="foto.jpg"' in content
        assert b"JPEGDATA" in content
        assert b'name="message"' in content
        assert request.url.host == "graph.facebook.com"

    def test_video_upload_switches_host(self) -> None:
        source = FileRef(filename="v.mp4", content=b"MP4")
        request = _dispatcher().build_request("POST", "/me/videos", {"source": source})
        assert request.url.host == "graph-video.facebook.com"
        assert request.url.path == "/me/videos"


class TestDispatch:
    """Testes para dispatch via transporte."""

    @pytest.mark.asyncio
    async def test_dispatch_forwards_to_transport(self) -> None:
        transport = FakeGraphTransport()
        transport.queue(json_response({"id": "1"}))
        raw = await _dispatcher(transport).dispatch("POST", "/me/feed", {"message": "oi"})

        assert raw.status_code == 200
        sent = transport.requests[0]
        assert sent.method == "POST"
        assert str(sent.url) == "https://graph.facebook.com/me/feed"
        assert sent.form() == {"message": "oi"}
        assert sent.header("Authorization") == "OAuth TOKEN123"
        assert sent.header("Content-Length") is None
        assert sent.header("Host") is None

    def test_normalize_headers_from_mapping(self) -> None:
        assert normalize_headers({"A": "1"}) == [("A", "1")]
        assert normalize_headers(None) == []
