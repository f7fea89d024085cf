"""Tests for httpx adapters."""

import logging

import httpx

from graph_errors.errors import GraphError
from graph_errors.request_error import INVALID_ERROR_CODE, INVALID_HTTP_STATUS_CODE
from graph_errors.transport import (
    envelope_from_response,
    error_from_exception,
    error_from_response,
)


class TestEnvelopeFromResponse:
    """Test envelope_from_response function."""

    def test_envelope(self, error_response):
        """Test status, body and headers are copied."""
        envelope = envelope_from_response(error_response)

        assert envelope["code"] == 400
        assert envelope["body"] == error_response.text
        assert {"name": "x-fb-trace-id", "value": "AbCdEf123"} in envelope["headers"]


class TestErrorFromResponse:
    """Test error_from_response function."""

    def test_error_response(self, error_response):
        """Test a Graph API error response."""
        error = error_from_response(error_response)

        assert error.request_status_code == 400
        assert error.error_code == 190
        assert error.sub_error_code == 460
        assert error.error_type == "OAuthException"
        assert error.transport is error_response
        assert error.transport.headers["x-fb-trace-id"] == "AbCdEf123"

    def test_success_response(self, graph_request):
        """Test a successful response yields no error."""
        response = httpx.Response(200, json={"id": "4"}, request=graph_request)

        assert error_from_response(response) is None

    def test_plain_text_failure(self, graph_request):
        """Test a plain text failure response."""
        response = httpx.Response(502, text="Bad Gateway", request=graph_request)
        error = error_from_response(response)

        assert error.request_status_code == 502
        assert error.error_code == INVALID_ERROR_CODE
        assert error.request_result_body == {"FACEBOOK_NON_JSON_RESULT": "Bad Gateway"}

    def test_empty_failure(self):
        """Test an empty failure response."""
        error = error_from_response(httpx.Response(503))

        assert error.request_status_code == 503


class TestErrorFromException:
    """Test error_from_exception function."""

    def test_request_error(self, graph_request, caplog):
        """Test an httpx request error keeps its request as transport."""
        caplog.set_level(logging.WARNING, logger="graph_errors.transport")
        exc = httpx.ConnectError("Name or service not known", request=graph_request)

        error = error_from_exception(exc)

        assert error.request_status_code == INVALID_HTTP_STATUS_CODE
        assert error.error_code == INVALID_ERROR_CODE
        assert error.transport is graph_request
        assert type(error.exception) is GraphError
        assert error.exception.__cause__ is exc
        assert error.error_message == "Name or service not known"
        assert "GET https://graph.facebook.com/v19.0/me" in caplog.text

    def test_request_error_without_request(self):
        """Test an httpx error created without a request."""
        error = error_from_exception(httpx.ReadTimeout("timed out"))

        assert error.transport is None
        assert error.error_message == "timed out"

    def test_explicit_transport(self):
        """Test an explicit transport is kept."""
        client = httpx.Client()
        try:
            error = error_from_exception(ValueError("bad payload"), transport=client)
        finally:
            client.close()

        assert error.transport is client

    def test_graph_error_kept(self):
        """Test a GraphError is not wrapped."""
        failure = GraphError("Session closed")

        assert error_from_exception(failure).exception is failure
