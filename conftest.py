from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from elevix.config import settings
from elevix.main import app
from elevix.services.llm_service import llm_service
from elevix.services.performance_store import performance_store
from elevix.services.session_manager import session_manager
from elevix.services.user_store import user_store
from elevix.utils.audit import auditor


class ScriptedLLM:
	"""Stands in for the provider: returns queued JSON replies in order and records each call."""

	def __init__(self) -> None:
		self.replies: List[Any] = []
		self.calls: List[Dict[str, str]] = []

	def queue(self, *replies: Any) -> None:
		self.replies.extend(replies)

	async def complete_json(self, system_prompt: str, user_content: str, *, temperature: Optional[float] = None) -> Dict[str, Any]:
		self.calls.append({"system": system_prompt, "user": user_content})
		if not self.replies:
			raise AssertionError("unexpected LLM call")
		reply = self.replies.pop(0)
		if isinstance(reply, Exception):
			raise reply
		return dict(reply)


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
	monkeypatch.setattr(settings, "data_dir", str(tmp_path))
	monkeypatch.setattr(settings, "api_key", None)
	performance_store.configure(str(tmp_path))
	user_store.configure(str(tmp_path))
	session_manager.configure(str(tmp_path))
	auditor.configure(None)
	yield tmp_path


@pytest.fixture
def llm(monkeypatch):
	fake = ScriptedLLM()
	monkeypatch.setattr(llm_service, "complete_json", fake.complete_json)
	return fake


@pytest.fixture
def client():
	return TestClient(app)
