import requests

import substation_backend.llm_engine as llm_module
from substation_backend.chat import GREETING, MISSING_KEY_REPLY, ChatAssistant
from substation_backend.config import MIN_CHAT_TIMEOUT_S, chat_timeout
from substation_backend.llm_engine import SYSTEM_PROMPT


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return self._payload


def test_transcript_starts_with_greeting(clock) -> None:
    assistant = ChatAssistant(clock)
    assert len(assistant.messages) == 1
    assert assistant.messages[0].role == "assistant"
    assert assistant.messages[0].message == GREETING
    assert assistant.messages[0].timestamp == "14:15"


def test_blank_message_is_ignored(clock) -> None:
    assistant = ChatAssistant(clock)
    assert assistant.send("   ") == []
    assert len(assistant.messages) == 1


def test_missing_key_short_circuits_without_network(clock, monkeypatch) -> None:
    monkeypatch.setenv("CHAT_MODE", "llm")
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)

    def unexpected_post(*args, **kwargs):
        raise AssertionError("no request expected without an API key")

    monkeypatch.setattr(llm_module.requests, "post", unexpected_post)

    assistant = ChatAssistant(clock)
    question, answer = assistant.send("Arrester insulator is cracked")

    assert question.role == "technician"
    assert question.message == "Arrester insulator is cracked"
    assert answer.role == "assistant"
    assert answer.message == MISSING_KEY_REPLY


def test_successful_reply_is_appended(clock, monkeypatch) -> None:
    monkeypatch.setenv("CHAT_MODE", "llm")
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-test")
    monkeypatch.setenv("CHAT_TIMEOUT_S", "5")
    captured = {}

    def fake_post(url, headers, json, timeout):
        captured.update(url=url, headers=headers, json=json, timeout=timeout)
        return FakeResponse({"choices": [{"message": {"content": "Check the **fuse** first."}}]})

    monkeypatch.setattr(llm_module.requests, "post", fake_post)

    assistant = ChatAssistant(clock)
    _, answer = assistant.send("Breaker will not close")

    assert answer.message == "Check the **fuse** first."
    assert len(assistant.messages) == 3
    assert captured["url"] == "https://api.deepseek.com/v1/chat/completions"
    assert captured["headers"]["Authorization"] == "Bearer sk-test"
    assert captured["timeout"] == 5.0
    assert captured["json"]["model"] == "deepseek-chat"
    assert captured["json"]["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "Breaker will not close"},
    ]


def test_empty_completion_falls_back_to_placeholder(clock, monkeypatch) -> None:
    monkeypatch.setenv("CHAT_MODE", "llm")
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-test")
    monkeypatch.setattr(
        llm_module.requests, "post", lambda *args, **kwargs: FakeResponse({"choices": []})
    )

    _, answer = ChatAssistant(clock).send("Anything?")
    assert answer.message == "No response from AI."


def test_network_failure_becomes_inline_error(clock, monkeypatch) -> None:
    monkeypatch.setenv("CHAT_MODE", "llm")
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-test")

    def failing_post(*args, **kwargs):
        raise requests.exceptions.ConnectTimeout("timed out")

    monkeypatch.setattr(llm_module.requests, "post", failing_post)

    assistant = ChatAssistant(clock)
    _, answer = assistant.send("Transformer is humming")

    assert answer.role == "assistant"
    assert answer.message.startswith("Error: Failed to connect to AI service.")
    assert "timed out" in answer.message


def test_http_error_status_becomes_inline_error(clock, monkeypatch) -> None:
    monkeypatch.setenv("CHAT_MODE", "llm")
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-test")
    monkeypatch.setattr(
        llm_module.requests, "post", lambda *args, **kwargs: FakeResponse({}, status_code=401)
    )

    _, answer = ChatAssistant(clock).send("Hello")
    assert answer.message.startswith("Error: Failed to connect to AI service.")


def test_scripted_mode_answers_by_keyword(clock, monkeypatch) -> None:
    monkeypatch.setenv("CHAT_MODE", "scripted")
    assistant = ChatAssistant(clock)

    _, fault = assistant.send("The relay looks broken")
    _, inspect = assistant.send("Should I inspect the busbar?")
    _, replace = assistant.send("Do we replace it?")
    _, other = assistant.send("Hello")

    assert "abnormal current readings" in fault.message
    assert "multimeter" in inspect.message
    assert "Replacement is recommended" in replace.message
    assert "more detailed information" in other.message
    assert len(assistant.messages) == 9


def test_non_positive_timeout_is_clamped(clock, monkeypatch) -> None:
    monkeypatch.setenv("CHAT_MODE", "llm")
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-test")
    monkeypatch.setenv("CHAT_TIMEOUT_S", "0")
    captured = {}

    def fake_post(url, headers, json, timeout):
        captured["timeout"] = timeout
        return FakeResponse({"choices": [{"message": {"content": "ok"}}]})

    monkeypatch.setattr(llm_module.requests, "post", fake_post)

    assert chat_timeout() == MIN_CHAT_TIMEOUT_S
    monkeypatch.setenv("CHAT_TIMEOUT_S", "-5")
    assert chat_timeout() == MIN_CHAT_TIMEOUT_S

    _, answer = ChatAssistant(clock).send("Hello")
    assert answer.message == "ok"
    assert captured["timeout"] == MIN_CHAT_TIMEOUT_S
