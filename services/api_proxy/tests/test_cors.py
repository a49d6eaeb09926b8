from fastapi.responses import Response

from services.api_proxy.config import DEFAULT_CORS_ALLOW_HEADERS
from services.api_proxy.core.cors import ALLOWED_METHODS, CorsPolicy


def test_headers_echo_origin():
    headers = CorsPolicy(DEFAULT_CORS_ALLOW_HEADERS).headers_for("https://app.example")

    assert headers == {
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Origin": "https://app.example",
        "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
        "Access-Control-Allow-Headers": DEFAULT_CORS_ALLOW_HEADERS,
    }


def test_headers_without_origin_use_wildcard():
    headers = CorsPolicy("Authorization").headers_for(None)
    assert headers["Access-Control-Allow-Origin"] == "*"


def test_allow_headers_cover_required_names():
    for name in ("Authorization", "Content-Type", "X-Requested-With"):
        assert name in DEFAULT_CORS_ALLOW_HEADERS


def test_preflight_response_is_empty_200():
    response = CorsPolicy("Authorization").preflight_response("https://app.example")

    assert response.status_code == 200
    assert response.body == b""
    assert response.headers["access-control-allow-origin"] == "https://app.example"
    assert response.headers["access-control-allow-methods"] == ALLOWED_METHODS


def test_is_preflight():
    assert CorsPolicy.is_preflight("OPTIONS")
    assert CorsPolicy.is_preflight("options")
    assert not CorsPolicy.is_preflight("GET")


def test_apply_keeps_header_already_on_response():
    response = Response(content=b"x", headers={"Access-Control-Allow-Origin": "https://up"})

    CorsPolicy("Authorization").apply(response, "https://app.example")

    assert response.headers["access-control-allow-origin"] == "https://up"
    assert response.headers["access-control-allow-credentials"] == "true"
