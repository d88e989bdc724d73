"""
Unit tests for GeminiClient.

The Gemini endpoint is simulated with httpx.MockTransport serving a scripted
sequence of responses; the retry engine sleeps through a recorder.
"""

import json

import httpx
import pytest

from casting_director.llm.exceptions import LLMNonRetryableError
from casting_director.llm.gemini_client import GeminiClient
from casting_director.retry.exceptions import RetryExhausted
from casting_director.retry.outcomes import FailureKind

MODEL = "gemini-2.5-flash"
SCHEMA = {"type": "OBJECT", "properties": {"fee": {"type": "NUMBER"}}}


class ScriptedGemini:
    """
    MockTransport handler replaying a script of responses.
    
    Each script item is an int (status with an error body), a dict (200 with
    that JSON body), a str (200 with that raw body) or an exception instance
    (raised as a transport failure).
    """
    
    def __init__(self, script):
        self.script = list(script)
        self.requests = []
    
    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.script[len(self.requests) - 1]
        if isinstance(item, Exception):
            raise item
        if isinstance(item, int):
            return httpx.Response(item, json={"error": {"code": item, "message": "scripted"}})
        if isinstance(item, dict):
            return httpx.Response(200, json=item)
        return httpx.Response(200, text=item)


@pytest.fixture
async def make_client(retry_engine):
    clients = []
    
    def _make(handler):
        http_client = httpx.AsyncClient(
            base_url="https://gemini.test",
            transport=httpx.MockTransport(handler),
        )
        client = GeminiClient(
            api_key="test-api-key",
            base_url="https://gemini.test",
            retry_engine=retry_engine,
            http_client=http_client,
        )
        clients.append(client)
        return client
    
    yield _make
    
    for client in clients:
        await client.close()


async def call(client):
    return await client.call(
        model=MODEL,
        prompt="Estimate the fee for 'Tom Hanks'.",
        system_instructions="You are a talent agent.",
        response_schema=SCHEMA,
    )


async def test_success_returns_parsed_object(make_client, make_envelope, recording_sleep):
    handler = ScriptedGemini([make_envelope({"fee": 20000000, "popularity": "A-List"})])
    client = make_client(handler)
    
    result = await call(client)
    
    assert result == {"fee": 20000000, "popularity": "A-List"}
    assert len(handler.requests) == 1
    assert recording_sleep.delays == []


async def test_request_shape(make_client, make_envelope):
    handler = ScriptedGemini([make_envelope({"fee": 1})])
    client = make_client(handler)
    
    await call(client)
    
    request = handler.requests[0]
    assert request.method == "POST"
    assert request.url.path == f"/v1beta/models/{MODEL}:generateContent"
    assert request.url.params["key"] == "test-api-key"
    body = json.loads(request.content)
    assert body == {
        "contents": [{"parts": [{"text": "Estimate the fee for 'Tom Hanks'."}]}],
        "systemInstruction": {"parts": [{"text": "You are a talent agent."}]},
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": SCHEMA,
        },
    }


async def test_server_errors_then_success(make_client, make_envelope, recording_sleep):
    handler = ScriptedGemini([500, 500, make_envelope({"fee": 3})])
    client = make_client(handler)
    
    result = await call(client)
    
    assert result == {"fee": 3}
    assert len(handler.requests) == 3
    assert recording_sleep.delays[0] >= 2.0
    assert recording_sleep.delays[1] >= 4.0


async def test_every_attempt_sends_identical_payload(make_client, make_envelope):
    handler = ScriptedGemini([502, 429, make_envelope({"fee": 3})])
    client = make_client(handler)
    
    await call(client)
    
    bodies = [request.content for request in handler.requests]
    assert len(bodies) == 3
    assert bodies[0] == bodies[1] == bodies[2]


async def test_bad_request_is_not_retried(make_client, recording_sleep):
    handler = ScriptedGemini([400])
    client = make_client(handler)
    
    with pytest.raises(LLMNonRetryableError) as exc_info:
        await call(client)
    
    assert exc_info.value.status_code == 400
    assert str(exc_info.value) == "HTTP error! status: 400 (non-retryable)"
    assert len(handler.requests) == 1
    assert recording_sleep.delays == []


@pytest.mark.parametrize("status_code", [401, 403, 404])
async def test_other_client_errors_are_terminal(make_client, status_code):
    handler = ScriptedGemini([status_code])
    client = make_client(handler)
    
    with pytest.raises(LLMNonRetryableError):
        await call(client)
    
    assert len(handler.requests) == 1


async def test_rate_limit_is_retried(make_client, make_envelope, recording_sleep):
    handler = ScriptedGemini([429, make_envelope({"fee": 7})])
    client = make_client(handler)
    
    result = await call(client)
    
    assert result == {"fee": 7}
    assert len(handler.requests) == 2
    assert recording_sleep.delays == [2.0]


async def test_six_server_errors_exhaust(make_client, recording_sleep):
    handler = ScriptedGemini([500] * 6)
    client = make_client(handler)
    
    with pytest.raises(RetryExhausted) as exc_info:
        await call(client)
    
    assert len(handler.requests) == 6
    assert len(recording_sleep.delays) == 5
    assert "after 6 attempts" in str(exc_info.value)
    assert exc_info.value.last_failure.status_code == 500


async def test_six_network_errors_exhaust(make_client, recording_sleep):
    handler = ScriptedGemini([httpx.ConnectError("connection refused")] * 6)
    client = make_client(handler)
    
    with pytest.raises(RetryExhausted) as exc_info:
        await call(client)
    
    assert len(handler.requests) == 6
    assert exc_info.value.last_failure.kind is FailureKind.NETWORK_ERROR
    assert exc_info.value.last_failure.status_code is None


async def test_service_unavailable_backs_off_longer(make_client, make_envelope, recording_sleep):
    handler = ScriptedGemini([503, make_envelope({"fee": 1})])
    client = make_client(handler)
    
    await call(client)
    
    assert recording_sleep.delays == [3.0]


async def test_malformed_envelope_is_retried(make_client, make_envelope, recording_sleep):
    handler = ScriptedGemini([{"candidates": []}, make_envelope({"fee": 5})])
    client = make_client(handler)
    
    result = await call(client)
    
    assert result == {"fee": 5}
    assert len(handler.requests) == 2
    assert recording_sleep.delays == [2.0]


async def test_non_json_model_text_is_retried(make_client, make_envelope):
    handler = ScriptedGemini([make_envelope("not json {"), make_envelope({"fee": 5})])
    client = make_client(handler)
    
    result = await call(client)
    
    assert result == {"fee": 5}
    assert len(handler.requests) == 2


async def test_non_json_body_exhausts_as_malformed(make_client):
    handler = ScriptedGemini(["<html>upstream proxy</html>"] * 6)
    client = make_client(handler)
    
    with pytest.raises(RetryExhausted) as exc_info:
        await call(client)
    
    assert exc_info.value.last_failure.kind is FailureKind.MALFORMED_RESPONSE


async def test_health_check_ok(make_client):
    def handler(request):
        assert request.url.path == "/v1beta/models"
        assert request.url.params["pageSize"] == "1"
        return httpx.Response(200, json={"models": []})
    
    client = make_client(handler)
    
    assert await client.health_check() is True


async def test_health_check_failure(make_client):
    def handler(request):
        raise httpx.ConnectError("unreachable")
    
    client = make_client(handler)
    
    assert await client.health_check() is False


async def test_health_check_invalid_key(make_client):
    client = make_client(lambda request: httpx.Response(403))
    
    assert await client.health_check() is False


async def test_close_closes_http_client(make_client):
    client = make_client(ScriptedGemini([]))
    
    await client.close()
    
    assert client._client.is_closed


def test_from_settings(test_settings):
    client = GeminiClient.from_settings(test_settings)
    
    assert client.api_key == "test-api-key"
    assert client.base_url == "https://gemini.test"
    assert client.timeout == 5
    assert client.retry_engine.policy.max_attempts == 6


async def test_unfollowed_redirect_is_retried(make_client, make_envelope, recording_sleep):
    handler = ScriptedGemini([307, make_envelope({"fee": 9})])
    client = make_client(handler)
    
    result = await call(client)
    
    assert result == {"fee": 9}
    assert len(handler.requests) == 2
    assert recording_sleep.delays == [2.0]


async def test_redirect_is_followed():
    def handler(request):
        if request.url.path.startswith("/v1beta/"):
            return httpx.Response(307, headers={"Location": "/moved" + request.url.path})
        body = {"candidates": [{"content": {"parts": [{"text": '{"fee": 4}'}]}}]}
        return httpx.Response(200, json=body)
    
    http_client = httpx.AsyncClient(
        base_url="https://gemini.test",
        transport=httpx.MockTransport(handler),
        follow_redirects=True,
    )
    async with GeminiClient(api_key="k", base_url="https://gemini.test", http_client=http_client) as client:
        assert await call(client) == {"fee": 4}


async def test_default_http_client_follows_redirects():
    client = GeminiClient(api_key="k")
    
    http_client = await client._get_client()
    
    assert http_client.follow_redirects is True
    await client.close()
