import anyio
import pytest

from elevix.config import settings
from elevix.errors import FlowError, LLMUnavailableError
from elevix.services.llm_service import LLMService, extract_json_object


def test_extracts_plain_json():
	assert extract_json_object('{"ai_response": "Hi", "is_quiz_over": false}') == {
		"ai_response": "Hi",
		"is_quiz_over": False,
	}


def test_extracts_fenced_json_with_prose():
	text = 'Sure! Here is the result:\n```json\n{"explanation": "prints 3"}\n```\nLet me know.'
	assert extract_json_object(text) == {"explanation": "prints 3"}


def test_extracts_braces_inside_prose():
	text = 'Result -> {"overall_score": 72, "summary": "Solid"} (end)'
	assert extract_json_object(text)["overall_score"] == 72


@pytest.mark.parametrize("text", ["", "   ", "no json here", "[1, 2, 3]"])
def test_rejects_replies_without_an_object(text):
	with pytest.raises(FlowError):
		extract_json_object(text)


def test_complete_json_without_key_is_unavailable(monkeypatch):
	monkeypatch.setattr(settings, "llm_provider", "groq")
	monkeypatch.setattr(settings, "groq_api_key", None)
	service = LLMService()
	assert service.enabled is False

	async def call():
		await service.complete_json("system", "user")

	with pytest.raises(LLMUnavailableError):
		anyio.run(call)


def test_unknown_provider_is_disabled(monkeypatch):
	monkeypatch.setattr(settings, "llm_provider", "carrier-pigeon")
	assert LLMService().enabled is False


def test_health_reports_provider(client, monkeypatch):
	monkeypatch.setattr(settings, "groq_api_key", None)
	monkeypatch.setattr(settings, "llm_provider", "groq")
	response = client.get("/health")
	assert response.status_code == 200
	body = response.json()
	assert body["status"] == "ok"
	assert body["llm"] == {"provider": "groq", "enabled": False}
