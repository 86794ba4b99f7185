from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

import anyio
from groq import Groq
try:
	import google.generativeai as genai
except Exception:
	genai = None

from elevix.config import settings
from elevix.errors import FlowError, LLMUnavailableError


logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def extract_json_object(text: str) -> Dict[str, Any]:
	"""Pull the first JSON object out of a model reply.

	Models wrap JSON in ```json fences or add a sentence before it even when told not to,
	so fenced blocks are tried first, then the outermost brace span.
	"""
	if not text or not text.strip():
		raise FlowError("Model returned an empty response.")

	candidates: List[str] = [m.strip() for m in _FENCE_RE.findall(text)]
	start = text.find("{")
	end = text.rfind("}")
	if start != -1 and end > start:
		candidates.append(text[start:end + 1])
	candidates.append(text.strip())

	for blob in candidates:
		try:
			data = json.loads(blob)
		except ValueError:
			continue
		if isinstance(data, dict):
			return data
	raise FlowError("Model response did not contain a JSON object.")


class LLMService:
	def __init__(self) -> None:
		self._client: Groq | None = None

	def _ensure_client(self):
		provider = (settings.llm_provider or "groq").lower()
		if provider == "groq":
			api_key = settings.groq_api_key
			if not api_key:
				self._client = None
				return None
			if self._client is None or not isinstance(self._client, Groq):
				self._client = Groq(api_key=api_key)
			return self._client
		elif provider == "gemini":
			if genai is None:
				return None
			api_key = settings.gemini_api_key
			if not api_key:
				return None
			# For gemini we return a configured module handle to keep usage simple
			genai.configure(api_key=api_key)
			return genai
		else:
			return None

	@property
	def enabled(self) -> bool:
		provider = (settings.llm_provider or "groq").lower()
		if provider == "groq":
			return bool(settings.groq_api_key)
		if provider == "gemini":
			return genai is not None and bool(settings.gemini_api_key)
		return False

	async def complete_json(self, system_prompt: str, user_content: str, *, temperature: Optional[float] = None) -> Dict[str, Any]:
		"""Send one system+user exchange and return the reply parsed as a JSON object."""
		client = self._ensure_client()
		if client is None:
			raise LLMUnavailableError(f"LLM provider '{settings.llm_provider}' is not configured.")

		provider = (settings.llm_provider or "groq").lower()
		temp = settings.flow_temperature if temperature is None else temperature
		max_tokens = settings.flow_max_tokens

		def _call() -> str:
			if provider == "groq":
				resp = client.chat.completions.create(
					model=settings.groq_model,
					messages=[
						{"role": "system", "content": system_prompt},
						{"role": "user", "content": user_content},
					],
					temperature=temp,
					max_tokens=max_tokens,
					response_format={"type": "json_object"},
				)
				return resp.choices[0].message.content or ""
			# Gemini: single prompt, system text first
			gmodel = client.GenerativeModel(
				settings.gemini_model,
				generation_config={
					"temperature": temp,
					"max_output_tokens": max_tokens,
					"response_mime_type": "application/json",
				},
			)
			full_prompt = (system_prompt + "\n\n" + user_content).strip()
			resp = gmodel.generate_content(full_prompt)
			return getattr(resp, "text", None) or (resp.candidates[0].content.parts[0].text if getattr(resp, "candidates", None) else "")

		raw = await anyio.to_thread.run_sync(_call)
		logger.debug("LLM reply (%s chars) from %s", len(raw or ""), provider)
		return extract_json_object(raw)


llm_service = LLMService()
