from __future__ import annotations

from typing import Any, Dict

from pydantic import TypeAdapter, ValidationError

from elevix.schemas import AptitudeTutorInput, AptitudeTutorOutput
from elevix.services.flows.base import render_history, run_flow


MAX_QUESTIONS_PER_SESSION = 3

_FLAG = TypeAdapter(bool)

APTITUDE_TUTOR_PROMPT = (
	"You are an expert AI Aptitude Tutor. The user wants to practice '{aptitude_type}'.{topic_line}\n"
	"You run a short quiz of up to {max_questions} questions per session. 'questions_asked' is how many "
	"questions you have asked so far. Cumulative scores are tracked by the calling system, not by you.\n\n"
	"1. STARTING: if the user's message is a greeting (\"Start\", \"Hi\", \"Begin\", \"Let's go\") or questions_asked is 0:\n"
	"   - Greet the user warmly and ask the first question for '{aptitude_type}'{topic_clause}. "
	"Without a specific topic, pick a fundamental one.\n"
	"   - is_question = true, updated_questions_asked = 1, is_quiz_over = false. No answer_score.\n"
	"2. ANSWERING: if the user answers the previous question (not a hint request or topic change):\n"
	"   - detailed_feedback starts with \"Correct!\", \"Partially Correct.\" or \"Not quite.\" followed by a "
	"step-by-step solution. Be encouraging.\n"
	"   - answer_score from 0 (completely wrong) to 10 (perfect).\n"
	"   - updated_questions_asked = questions_asked + 1.\n"
	"   - If updated_questions_asked < {max_questions}: ask the next question in ai_response, is_question = true, "
	"is_quiz_over = false.\n"
	"   - Otherwise: is_quiz_over = true, is_question = false, ai_response is a short concluding remark and "
	"detailed_feedback covers the final answer. average_session_score is computed by the calling system.\n"
	"3. HINTS: give the hint in ai_response (detailed_feedback may elaborate), restate the active question, "
	"is_question = true, updated_questions_asked = questions_asked, no answer_score.\n"
	"Keep a professional, encouraging tone.\n\n"
	"Rules: updated_questions_asked is always present. If is_quiz_over is true, is_question is false. "
	"answer_score only when the user submitted an answer."
)


def build_prompt(data: AptitudeTutorInput) -> str:
	topic = data.current_topic
	return APTITUDE_TUTOR_PROMPT.format(
		aptitude_type=data.aptitude_type,
		topic_line=f"\nThey are focusing on the topic: '{topic}'." if topic else "",
		topic_clause=f" and '{topic}'" if topic else "",
		max_questions=MAX_QUESTIONS_PER_SESSION,
	)


def build_user_content(data: AptitudeTutorInput) -> str:
	return (
		"Previous conversation history:\n"
		f"{render_history(data.chat_history)}\n\n"
		f"User's latest message: {data.user_message}\n"
		f"Number of questions already asked by AI in this session: {data.questions_asked}"
	)


async def tutor_aptitude_question(data: AptitudeTutorInput) -> AptitudeTutorOutput:
	def finalize(out: Dict[str, Any]) -> Dict[str, Any]:
		raw = out.setdefault("is_quiz_over", False)
		try:
			is_over = _FLAG.validate_python(raw)
		except ValidationError:
			# left as-is so output validation rejects the reply
			return out
		out["is_quiz_over"] = is_over
		out.setdefault("is_question", not is_over)
		out.setdefault("updated_questions_asked", data.questions_asked or 0)
		return out

	return await run_flow(
		"aptitude_tutor",
		AptitudeTutorOutput,
		build_prompt(data),
		build_user_content(data),
		empty_message="AI failed to produce an output for aptitude tutor.",
		finalize=finalize,
	)
