from services.api_proxy.core.headers import (
    RESPONSE_HEADER_DENYLIST,
    filter_response_headers,
    mask_authorization,
)


def test_denylisted_headers_removed_case_insensitively():
    upstream = [
        ("Server", "nginx"),
        ("X-Frame-Options", "DENY"),
        ("Strict-Transport-Security", "max-age=31536000"),
        ("Transfer-Encoding", "chunked"),
        ("Connection", "keep-alive"),
        ("Content-Type", "application/json"),
        ("X-Custom", "kept"),
    ]

    assert filter_response_headers(upstream) == [
        ("Content-Type", "application/json"),
        ("X-Custom", "kept"),
    ]


def test_every_denylisted_name_is_dropped():
    upstream = [(name.upper(), "v") for name in RESPONSE_HEADER_DENYLIST]
    assert filter_response_headers(upstream) == []


def test_repeated_headers_kept_in_order():
    upstream = [("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")]
    assert filter_response_headers(upstream) == upstream


def test_mask_authorization():
    assert mask_authorization("Bearer eyJhbGciOi.secret") == "Bearer ***"
    assert mask_authorization("rawtoken") == "***"
    assert mask_authorization(None) is None
    assert mask_authorization("") is None
