"""Tests for the HTTP chat gateway client."""

import json

import httpx
import pytest

from customer_sim.config import GatewayConfig
from customer_sim.gateway.chat_client import HttpChatGateway
from customer_sim.gateway.transport import GatewayError, join_url
from customer_sim.schemas.conversation_schema import ChatMessage, Role
from customer_sim.schemas.gateway_schema import ChatRequest

BASE_URL = "http://gateway.test"


def make_gateway(handler, **overrides) -> HttpChatGateway:
    config = GatewayConfig(base_url=BASE_URL, **overrides)
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpChatGateway(config, client=client)


def make_request() -> ChatRequest:
    return ChatRequest(
        message="The restaurant staff just said: \"Hello\"",
        model="gpt-4o-mini",
        context=[
            ChatMessage(role=Role.SYSTEM, content="You are a customer."),
            ChatMessage(role=Role.ASSISTANT, content="Hello! A table please."),
        ],
    )


def completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def sse(*frames: str) -> bytes:
    return "".join(f"data: {frame}\n\n" for frame in frames).encode()


class TestJoinUrl:
    def test_joins_with_single_slash(self):
        assert join_url("http://a.test/", "/api/chat") == "http://a.test/api/chat"

    def test_absolute_path_wins(self):
        assert join_url("http://a.test", "https://b.test/chat") == "https://b.test/chat"


class TestComplete:
    @pytest.mark.asyncio
    async def test_posts_wire_body_and_returns_first_choice(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=completion('{"response": "Hi"}'))

        gateway = make_gateway(handler)
        content = await gateway.complete(make_request())

        assert content == '{"response": "Hi"}'
        assert str(seen[0].url) == f"{BASE_URL}/api/chat"
        body = json.loads(seen[0].content)
        assert body["model"] == "gpt-4o-mini"
        assert body["message"].startswith("The restaurant staff just said")
        assert body["context"] == [
            {"role": "system", "content": "You are a customer."},
            {"role": "assistant", "content": "Hello! A table please."},
        ]

    @pytest.mark.asyncio
    async def test_groq_provider_uses_groq_path(self):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json=completion("ok"))

        await make_gateway(handler).complete(make_request(), provider="groq")
        assert seen == ["/api/chat/groq"]

    @pytest.mark.asyncio
    async def test_empty_choices_give_empty_text(self):
        gateway = make_gateway(lambda request: httpx.Response(200, json={"choices": []}))
        assert await gateway.complete(make_request()) == ""

    @pytest.mark.asyncio
    async def test_error_status_raises_with_detail(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "Upstream failed", "message": "quota"})

        with pytest.raises(GatewayError) as exc_info:
            await make_gateway(handler).complete(make_request())
        assert exc_info.value.status_code == 500
        assert "Upstream failed" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self):
        gateway = make_gateway(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(GatewayError, match="non-JSON"):
            await gateway.complete(make_request())

    @pytest.mark.asyncio
    async def test_unexpected_shape_raises(self):
        gateway = make_gateway(lambda request: httpx.Response(200, json={"choices": "nope"}))
        with pytest.raises(GatewayError, match="unexpected body"):
            await gateway.complete(make_request())

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(GatewayError, match="request failed"):
            await make_gateway(handler).complete(make_request())

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(GatewayError, match="timed out"):
            await make_gateway(handler).complete(make_request())

    @pytest.mark.asyncio
    async def test_failure_below_httpx_raises_gateway_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise OverflowError("port must be 0-65535")

        with pytest.raises(GatewayError, match="port must be") as exc_info:
            await make_gateway(handler).complete(make_request())
        assert isinstance(exc_info.value.__cause__, OverflowError)


class TestStreaming:
    @pytest.mark.asyncio
    async def test_fragments_are_reassembled(self):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, content=sse(
                json.dumps({"content": '{"response": '}),
                json.dumps({"content": '"Hi"}'}),
                "[DONE]",
            ))

        content = await make_gateway(handler).complete_streaming(make_request())
        assert content == '{"response": "Hi"}'
        assert seen == ["/api/chat/stream"]

    @pytest.mark.asyncio
    async def test_frames_after_done_are_ignored(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=sse(
                json.dumps({"content": "Hello"}), "[DONE]", json.dumps({"content": " late"}),
            ))

        assert await make_gateway(handler).complete_streaming(make_request()) == "Hello"

    @pytest.mark.asyncio
    async def test_non_data_and_bad_frames_are_skipped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            body = b": keep-alive\n\n" + sse("not json", json.dumps({"content": "ok"}), "[DONE]")
            return httpx.Response(200, content=body)

        assert await make_gateway(handler).complete_streaming(make_request()) == "ok"

    @pytest.mark.asyncio
    async def test_error_frame_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=sse(
                json.dumps({"content": "Hel"}),
                json.dumps({"error": "Streaming failed", "message": "rate limited"}),
            ))

        with pytest.raises(GatewayError, match="rate limited"):
            await make_gateway(handler).complete_streaming(make_request())

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        gateway = make_gateway(lambda request: httpx.Response(503, json={"error": "down"}))
        with pytest.raises(GatewayError) as exc_info:
            await gateway.complete_streaming(make_request())
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_failure_below_httpx_raises_gateway_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise OverflowError("port must be 0-65535")

        with pytest.raises(GatewayError, match="Chat stream failed"):
            await make_gateway(handler).complete_streaming(make_request())

    @pytest.mark.asyncio
    async def test_complete_uses_stream_when_enabled(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/chat/stream"
            return httpx.Response(200, content=sse(json.dumps({"content": "streamed"}), "[DONE]"))

        gateway = make_gateway(handler, use_streaming=True)
        assert await gateway.complete(make_request()) == "streamed"


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(
            lambda request: httpx.Response(200, json=completion("ok"))
        ))
        async with HttpChatGateway(GatewayConfig(base_url=BASE_URL), client=client):
            pass
        assert not client.is_closed
        await client.aclose()
