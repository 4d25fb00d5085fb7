"""Testes para classify_response e GraphResponse."""

from __future__ import annotations

import pytest

from opengraph.api.graph_errors import is_permanent_error, parse_graph_error
from opengraph.api.response import classify_response
from opengraph.utils.errors import GraphHttpError, ProtocolError


class TestClassifyResponse:
    """Testes para classificação de respostas."""

    def test_not_modified_with_empty_body(self) -> None:
        response = classify_response(304, "Not Modified", (), b"")
        assert response.is_modified is False
        assert response.is_success is False
        assert response.error is None
        assert response.data is None

    def test_success_decodes_json(self) -> None:
        response = classify_response(200, "OK", (), b'{"id": "123", "name": "Ana"}')
        assert response.is_success is True
        assert response.is_modified is True
        assert response.data == {"id": "123", "name": "Ana"}
        assert response.error is None

    def test_graph_error_message(self) -> None:
        response = classify_response(400, "Bad Request", (), '{"error":{"message":"bad"}}')
        assert response.is_success is False
        assert response.error is not None
        assert response.error.message == "bad"

    def test_full_error_object(self) -> None:
        body = (
            '{"error": {"message": "Invalid OAuth access token.", "type": "OAuthException",'
            ' "code": 190, "error_subcode": 463, "fbtrace_id": "AbC"}}'
        )
        response = classify_response(400, "Bad Request", (), body)
        assert response.error is not None
        assert response.error.error_type == "OAuthException"
        assert response.error.error_code == 190
        assert response.error.error_subcode == 463
        assert response.error.fbtrace_id == "AbC"
        assert response.error.is_permanent is True

    def test_error_without_json_body_uses_status(self) -> None:
        response = classify_response(502, "Bad Gateway", (), b"<html>erro</html>")
        assert response.data is None
        assert response.error is not None
        assert response.error.error_type == "HttpError"
        assert response.error.error_code == 502
        assert response.error.message == "Bad Gateway"
        assert response.error.is_permanent is False

    def test_success_with_invalid_json_raises(self) -> None:
        with pytest.raises(ProtocolError) as exc_info:
            classify_response(200, "OK", (), b"not json")
        assert exc_info.value.raw_body == "not json"

    def test_decode_false_keeps_raw_body(self) -> None:
        response = classify_response(200, "OK", (), b"access_token=abc", decode=False)
        assert response.data is None
        assert response.text == "access_token=abc"

    def test_header_lookup_case_insensitive(self) -> None:
        response = classify_response(200, "OK", (("ETag", '"abc"'),), b"{}")
        assert response.header("etag") == '"abc"'
        assert response.etag == '"abc"'
        assert response.header("X-Missing") is None

    def test_to_error(self) -> None:
        response = classify_response(
            500, "Internal Server Error", (), '{"error":{"message":"falha","code":2}}'
        )
        error = response.to_error()
        assert isinstance(error, GraphHttpError)
        assert error.status_code == 500
        assert error.is_retryable is True
        assert "falha" in str(error)


class TestGraphErrors:
    """Testes para helpers de erro."""

    @pytest.mark.parametrize("code", [400, 401, 403, 404, 413])
    def test_permanent_codes(self, code: int) -> None:
        assert is_permanent_error(code, "unknown") is True

    def test_rate_limit_is_transient(self) -> None:
        assert is_permanent_error(429, "unknown") is False

    def test_oauth_exception_is_permanent(self) -> None:
        assert is_permanent_error(190, "OAuthException") is True

    @pytest.mark.parametrize("data", [None, [], {"data": []}, {"error": "texto"}])
    def test_parse_without_error_object(self, data: object) -> None:
        assert parse_graph_error(data) is None

    def test_error_str(self) -> None:
        info = parse_graph_error({"error": {"type": "OAuthException", "code": 190, "message": "x"}})
        assert str(info) == "OAuthException:190\tx"


class TestClassifyUndecodedResponse:
    """Testes para decode=False (respostas de token)."""

    def test_error_body_decoded_even_without_decode(self) -> None:
        body = (
            '{"error": {"message": "Invalid verification code format.",'
            ' "type": "OAuthException", "code": 100}}'
        )
        response = classify_response(400, "Bad Request", (), body, decode=False)
        assert response.error is not None
        assert response.error.message == "Invalid verification code format."
        assert response.error.error_type == "OAuthException"

    def test_error_body_not_json_without_decode(self) -> None:
        response = classify_response(400, "Bad Request", (), "erro", decode=False)
        assert response.error is not None
        assert response.error.message == "Bad Request"
