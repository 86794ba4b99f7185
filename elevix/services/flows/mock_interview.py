from __future__ import annotations

from typing import Any, Dict

from elevix.schemas import MockInterviewInput, MockInterviewOutput
from elevix.services.flows.base import render_history, run_flow


TOTAL_INTERVIEW_QUESTIONS = 4

MOCK_INTERVIEW_PROMPT = (
	"You are an expert AI Interviewer running a mock interview for '{interview_type}'. Ask insightful questions, "
	"give constructive feedback and keep it realistic. The interview has about {total} questions; question_count "
	"tells you how many you have asked.\n\n"
	"1. At the start (\"Start Interview\" or similar, or question_count is 0): a brief opening statement and the "
	"first question for '{interview_type}'. Increment the count.\n"
	"2. After each answer: brief qualitative feedback in answer_feedback (no per-question score), then the next "
	"question in ai_response. Increment the count.\n"
	"3. If the user is unsure, rephrase or give a small hint, but draw out their own thinking first.\n"
	"4. Stay professional, encouraging and neutral.\n"
	"5. After the answer to question {total}, or when the user asks to stop: feedback on that answer in "
	"answer_feedback, is_interview_over = true, an overall_feedback summary of strengths and areas to improve, "
	"interview_score from 0 (very poor) to 10 (excellent), and a closing remark in ai_response.\n"
	"6. current_question_count is the new total of questions asked.\n\n"
	"is_interview_over stays false until the end; when true, overall_feedback and interview_score are required. "
	"Do not exceed {total} questions unless answers were too brief to assess. Behavioral interviews use "
	"situational (STAR) questions; technical ones probe concepts and problem solving in that technology."
)


async def conduct_mock_interview(data: MockInterviewInput) -> MockInterviewOutput:
	def finalize(out: Dict[str, Any]) -> Dict[str, Any]:
		out.setdefault("is_interview_over", False)
		out.setdefault("current_question_count", data.question_count)
		return out

	user_content = (
		"Previous conversation:\n"
		f"{render_history(data.chat_history)}\n\n"
		f"User's latest message: {data.user_message}\n"
		f"Current question count by AI: {data.question_count}"
	)
	return await run_flow(
		"mock_interview",
		MockInterviewOutput,
		MOCK_INTERVIEW_PROMPT.format(interview_type=data.interview_type, total=TOTAL_INTERVIEW_QUESTIONS),
		user_content,
		empty_message="AI failed to produce an output for the mock interview.",
		finalize=finalize,
	)
