import json

import httpx
import pytest

from services.classify.generator import OllamaGenerator
from shared.errors import GenerationError


def make_generator(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return OllamaGenerator(ollama_url="http://ollama:11434/", model="test-model", client=client)


def test_generate_posts_prompt_and_schema():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"response": '{"ok": true}'})

    generator = make_generator(handler)
    text = generator.generate("classify this", schema={"type": "object"})

    assert text == '{"ok": true}'
    assert seen["url"] == "http://ollama:11434/api/generate"
    assert seen["body"]["model"] == "test-model"
    assert seen["body"]["prompt"] == "classify this"
    assert seen["body"]["stream"] is False
    assert seen["body"]["format"] == {"type": "object"}


def test_format_omitted_without_schema():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"response": "hi"})

    make_generator(handler).generate("hello")
    assert "format" not in seen["body"]


def test_http_error_status():
    generator = make_generator(lambda request: httpx.Response(503, json={"error": "busy"}))
    with pytest.raises(GenerationError) as exc:
        generator.generate("x")
    assert exc.value.status_code == 503
    assert not exc.value.timed_out


def test_timeout():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(GenerationError) as exc:
        make_generator(handler).generate("x")
    assert exc.value.timed_out


def test_connection_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(GenerationError):
        make_generator(handler).generate("x")


def test_non_json_body():
    generator = make_generator(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(GenerationError):
        generator.generate("x")


@pytest.mark.parametrize("body", [["oops"], {"response": {"a": 1}}, {"done": True}])
def test_unexpected_reply_shape(body):
    generator = make_generator(lambda request: httpx.Response(200, json=body))
    with pytest.raises(GenerationError) as exc:
        generator.generate("x")
    assert not exc.value.timed_out
