from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from elevix.errors import FlowError
from elevix.schemas import ChatMessage
from elevix.services.llm_service import llm_service
from elevix.utils.audit import auditor


logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)

NO_HISTORY = "(No previous conversation history)"


def render_history(chat_history: Optional[List[ChatMessage]]) -> str:
	if not chat_history:
		return NO_HISTORY
	return "\n".join(f"{m.role}: {m.content}" for m in chat_history)


def output_contract(output_model: Type[BaseModel]) -> str:
	schema = json.dumps(output_model.model_json_schema(), indent=2)
	return (
		"\n\nRespond with ONE JSON object and nothing else. Use exactly these keys "
		"(omit optional keys that do not apply, never invent others):\n" + schema
	)


async def run_flow(
	name: str,
	output_model: Type[OutputT],
	system_prompt: str,
	user_content: str,
	*,
	empty_message: str,
	finalize: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
) -> OutputT:
	"""Call the model once, apply the flow's defaulting pass, and validate the result."""
	data = await llm_service.complete_json(system_prompt + output_contract(output_model), user_content)
	data = {k: v for k, v in data.items() if v is not None}
	if not data:
		raise FlowError(empty_message)
	if finalize is not None:
		data = finalize(data)
	try:
		output = output_model.model_validate(data)
	except ValidationError as e:
		logger.warning("%s: model output failed validation: %s", name, e)
		raise FlowError(empty_message) from e
	await auditor.log("flow", flow=name)
	return output
