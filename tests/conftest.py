"""Pytest fixtures for graph-errors tests."""

import json

import httpx
import pytest


@pytest.fixture
def success_envelope():
    """Envelope of a successful request."""
    return {"code": 200, "body": json.dumps({"data": []})}


@pytest.fixture
def nested_error_body():
    """Response body with a nested error object."""
    return {
        "error": {
            "type": "OAuthException",
            "message": "Invalid token",
            "code": 190,
            "error_subcode": 460,
            "fbtrace_id": "AbCdEf123",
        }
    }


@pytest.fixture
def nested_error_envelope(nested_error_body):
    """Envelope of a request that failed with a nested error object."""
    return {"code": 400, "body": json.dumps(nested_error_body)}


@pytest.fixture
def flat_error_envelope():
    """Envelope of a request that failed with legacy flat error fields."""
    return {
        "code": 404,
        "body": json.dumps(
            {
                "error_code": 803,
                "error_msg": "Object not found",
                "error_reason": "GraphMethodException",
            }
        ),
    }


@pytest.fixture
def batch_results(success_envelope, nested_error_envelope):
    """Per-request envelopes of a batch call, with headers as the batch API sends."""
    return [
        dict(success_envelope, headers=[{"name": "ETag", "value": '"abc"'}]),
        dict(
            nested_error_envelope,
            headers=[{"name": "Cache-Control", "value": "no-store"}],
        ),
        None,
    ]


@pytest.fixture
def graph_request():
    """HTTP request to the Graph API."""
    return httpx.Request("GET", "https://graph.facebook.com/v19.0/me")


@pytest.fixture
def error_response(graph_request, nested_error_body):
    """HTTP response carrying a Graph API error."""
    return httpx.Response(
        400,
        json=nested_error_body,
        headers={"x-fb-trace-id": "AbCdEf123"},
        request=graph_request,
    )
