import pytest

from services.api_proxy.core.exceptions import InvalidTargetError
from services.api_proxy.core.normalizer import RequestNormalizer
from services.api_proxy.models import InboundRequest


@pytest.fixture
def normalizer():
    return RequestNormalizer("https://upstream.test/api", "/api/proxy", "path")


class TestRewritePath:
    def test_prefix_only_resolves_to_root(self, normalizer):
        assert normalizer.rewrite_path("/api/proxy") == "/"

    def test_prefix_with_trailing_slash_resolves_to_root(self, normalizer):
        assert normalizer.rewrite_path("/api/proxy/") == "/"

    def test_prefix_is_removed(self, normalizer):
        assert normalizer.rewrite_path("/api/proxy/chat/message") == "/chat/message"

    def test_encoded_characters_are_kept(self, normalizer):
        assert normalizer.rewrite_path("/api/proxy/files/a%2Fb") == "/files/a%2Fb"

    def test_prefix_removed_on_segment_boundary_only(self, normalizer):
        with pytest.raises(InvalidTargetError):
            normalizer.rewrite_path("/api/proxyfoo")

    def test_path_outside_prefix_is_rejected(self, normalizer):
        with pytest.raises(InvalidTargetError) as exc_info:
            normalizer.rewrite_path("/other/chat")

        assert "/api/proxy" in str(exc_info.value)

    def test_empty_path_is_rejected(self, normalizer):
        with pytest.raises(InvalidTargetError):
            normalizer.rewrite_path("")

    def test_encoded_slash_after_prefix_is_a_boundary(self, normalizer):
        assert normalizer.rewrite_path("/api/proxy%2Fchat") == "/chat"
        assert normalizer.rewrite_path("/api/proxy%2fchat/message") == "/chat/message"

    def test_encoded_prefix_characters_are_stripped(self, normalizer):
        assert normalizer.rewrite_path("/api/%70roxy/chat") == "/chat"

    def test_encoded_remainder_is_kept_raw(self, normalizer):
        assert normalizer.rewrite_path("/api/%70roxy/files/a%2Fb") == "/files/a%2Fb"


class TestRewriteQuery:
    def test_routing_artifact_is_dropped(self, normalizer):
        assert normalizer.rewrite_query("path=/chat/message&limit=10") == "limit=10"

    def test_only_artifact_yields_empty_query(self, normalizer):
        assert normalizer.rewrite_query("path=%2Fchat") == ""

    def test_repeated_artifact_is_dropped(self, normalizer):
        assert normalizer.rewrite_query("path=a&x=1&path=b") == "x=1"

    def test_order_and_repeats_preserved(self, normalizer):
        assert normalizer.rewrite_query("b=2&a=1&b=3") == "b=2&a=1&b=3"

    def test_blank_values_preserved(self, normalizer):
        assert normalizer.rewrite_query("flag=&limit=10") == "flag=&limit=10"

    def test_values_unchanged(self, normalizer):
        assert normalizer.rewrite_query("q=hello+world&tag=%23x") == "q=hello+world&tag=%23x"

    def test_custom_artifact_name(self):
        normalizer = RequestNormalizer("https://upstream.test", "/proxy", "route")
        assert normalizer.rewrite_query("route=x&path=y") == "path=y"


class TestTargetUrl:
    def test_root_without_query(self, normalizer):
        inbound = InboundRequest(method="GET", path="/api/proxy")
        assert normalizer.target_url(inbound) == "https://upstream.test/api/"

    def test_no_trailing_question_mark(self, normalizer):
        inbound = InboundRequest(
            method="GET", path="/api/proxy/chat/message", query_string="path=/chat/message"
        )
        assert normalizer.target_url(inbound) == "https://upstream.test/api/chat/message"

    def test_query_appended(self, normalizer):
        inbound = InboundRequest(
            method="GET",
            path="/api/proxy/chat/message",
            query_string="path=/chat/message&limit=10",
        )
        assert normalizer.target_url(inbound) == "https://upstream.test/api/chat/message?limit=10"

    def test_base_url_trailing_slash_not_doubled(self):
        normalizer = RequestNormalizer("https://upstream.test/api/", "/api/proxy/")
        inbound = InboundRequest(method="GET", path="/api/proxy/users")
        assert normalizer.target_url(inbound) == "https://upstream.test/api/users"
