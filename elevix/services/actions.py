"""Server actions: validate a request, run one flow, record finished sessions.

Validation failures raise ``ActionError`` with the user-facing message. Anything
else that goes wrong is logged and replaced by a generic message so provider
errors never leak to clients.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from elevix.errors import ActionError
from elevix.schemas import (
	AptitudeEntry,
	AptitudeTutorInput,
	AptitudeTutorOutput,
	AptitudeTutorRequest,
	CodeRunnerInput,
	CodeRunnerOutput,
	InterviewEntry,
	MockInterviewInput,
	MockInterviewOutput,
	MockInterviewRequest,
	PerformanceSummary,
	ResumeFeedbackInput,
	ResumeFeedbackOutput,
	SoftSkillEntry,
	SoftSkillQuizInput,
	SoftSkillQuizOutput,
	SoftSkillQuizRequest,
	StoreResult,
	UserPerformanceData,
)
from elevix.services.flows.aptitude_tutor import tutor_aptitude_question
from elevix.services.flows.code_runner import run_code_and_get_feedback
from elevix.services.flows.mock_interview import conduct_mock_interview
from elevix.services.flows.resume_feedback import MAX_RESUME_CHARS, MIN_RESUME_CHARS, get_resume_feedback
from elevix.services.flows.soft_skill_quiz import get_soft_skill_quiz_response
from elevix.services.performance_store import performance_store, summarize, today
from elevix.utils.audit import auditor


logger = logging.getLogger(__name__)

MAX_HISTORY_MESSAGES = 20
MAX_APTITUDE_MESSAGE_CHARS = 1000
MAX_INTERVIEW_MESSAGE_CHARS = 2000
MAX_TARGET_ROLE_CHARS = 100
MAX_CODE_SNIPPET_CHARS = 5000

ASSIST_FAILED = "An unexpected error occurred while assisting you."
REQUEST_FAILED = "An unexpected error occurred while processing your request."


def session_average(previous_scores: Optional[List[float]], last_score: Optional[float]) -> float:
	"""Mean of every answer scored in a session, one decimal; 0 when nothing was scored."""
	scores = list(previous_scores or [])
	if last_score is not None:
		scores.append(last_score)
	if not scores:
		return 0.0
	return round(sum(scores) / len(scores), 1)


async def handle_aptitude_tutor_interaction(payload: AptitudeTutorRequest) -> AptitudeTutorOutput:
	if not payload.aptitude_type or not payload.user_message or not payload.username:
		raise ActionError("Aptitude type, user message, and username are required.")
	if len(payload.user_message) > MAX_APTITUDE_MESSAGE_CHARS:
		raise ActionError(f"Your message is too long (max {MAX_APTITUDE_MESSAGE_CHARS} characters).")
	if payload.chat_history and len(payload.chat_history) > MAX_HISTORY_MESSAGES:
		raise ActionError("Chat history is too extensive.")

	try:
		result = await tutor_aptitude_question(AptitudeTutorInput(
			aptitude_type=payload.aptitude_type,
			current_topic=payload.current_topic,
			user_message=payload.user_message,
			chat_history=payload.chat_history,
			questions_asked=payload.questions_asked,
		))

		if result.is_quiz_over:
			if result.average_session_score is None:
				average = session_average(payload.previous_scores, result.answer_score)
				result = result.model_copy(update={"average_session_score": average})
			await performance_store.append(payload.username, aptitude_entry=AptitudeEntry(
				aptitude_type=payload.aptitude_type,
				topic=payload.current_topic or "General",
				score=result.average_session_score,
				date=today(),
			))
			await auditor.log(
				"session_complete",
				kind="aptitude",
				username=payload.username,
				score=result.average_session_score,
			)
		return result
	except Exception:
		logger.exception("Error in aptitude tutor interaction")
		raise ActionError(ASSIST_FAILED, 500)


async def handle_get_quiz_response(payload: SoftSkillQuizRequest) -> SoftSkillQuizOutput:
	if not payload.soft_skill_topic or not payload.user_message or not payload.username:
		raise ActionError("Topic, user message, and username are required.")

	try:
		result = await get_soft_skill_quiz_response(SoftSkillQuizInput(
			soft_skill_topic=payload.soft_skill_topic,
			user_message=payload.user_message,
			chat_history=payload.chat_history,
		))

		if result.is_quiz_over and result.final_score is not None and result.total_questions is not None:
			await performance_store.append(payload.username, soft_skill_entry=SoftSkillEntry(
				topic=payload.soft_skill_topic,
				final_score=result.final_score,
				total_questions=result.total_questions,
				date=today(),
			))
			await auditor.log(
				"session_complete",
				kind="soft_skill",
				username=payload.username,
				score=result.final_score,
			)
		return result
	except Exception:
		logger.exception("Error in soft skill quiz response")
		raise ActionError(REQUEST_FAILED, 500)


async def handle_conduct_mock_interview(payload: MockInterviewRequest) -> MockInterviewOutput:
	if not payload.interview_type or not payload.user_message or not payload.username:
		raise ActionError("Interview type, user message, and username are required.")
	if len(payload.user_message) > MAX_INTERVIEW_MESSAGE_CHARS:
		raise ActionError(f"Your message is too long. Please keep it under {MAX_INTERVIEW_MESSAGE_CHARS} characters.")
	if payload.chat_history and len(payload.chat_history) > MAX_HISTORY_MESSAGES:
		raise ActionError("Chat history is too long.")

	try:
		result = await conduct_mock_interview(MockInterviewInput(
			interview_type=payload.interview_type,
			user_message=payload.user_message,
			chat_history=payload.chat_history,
			question_count=payload.question_count,
		))

		if result.is_interview_over and result.interview_score is not None:
			await performance_store.append(payload.username, interview_entry=InterviewEntry(
				type=payload.interview_type,
				score=result.interview_score,
				overall_feedback=result.overall_feedback,
				date=today(),
			))
			await auditor.log(
				"session_complete",
				kind="interview",
				username=payload.username,
				score=result.interview_score,
			)
		return result
	except Exception:
		logger.exception("Error in mock interview turn")
		raise ActionError(REQUEST_FAILED, 500)


async def get_resume_feedback_action(payload: ResumeFeedbackInput) -> ResumeFeedbackOutput:
	text = (payload.resume_text or "").strip()
	if len(text) < MIN_RESUME_CHARS:
		raise ActionError("Resume text is too short. Please provide substantial content for effective feedback.")
	if len(text) > MAX_RESUME_CHARS:
		raise ActionError("Resume text is too long. Please provide a resume under 15,000 characters.")
	if payload.target_role and len(payload.target_role) > MAX_TARGET_ROLE_CHARS:
		raise ActionError(f"Target role is too long (max {MAX_TARGET_ROLE_CHARS} characters).")

	try:
		return await get_resume_feedback(payload)
	except Exception:
		logger.exception("Error getting resume feedback")
		raise ActionError("An unexpected error occurred while analyzing your resume.", 500)


async def run_code_action(payload: CodeRunnerInput) -> CodeRunnerOutput:
	snippet = (payload.code_snippet or "").strip()
	if not snippet:
		raise ActionError("Code snippet cannot be empty.")
	if len(snippet) > MAX_CODE_SNIPPET_CHARS:
		raise ActionError(f"Code snippet is too long. Please provide a snippet under {MAX_CODE_SNIPPET_CHARS} characters.")
	if payload.language is not None and not payload.language.strip():
		payload = payload.model_copy(update={"language": None})

	try:
		return await run_code_and_get_feedback(payload)
	except Exception:
		logger.exception("Error in code runner")
		raise ActionError("An unexpected error occurred while analyzing your code.", 500)


async def get_my_performance_data(username: str) -> UserPerformanceData:
	if not username:
		raise ActionError("User not identified. Please log in.")
	try:
		return await performance_store.get(username)
	except Exception:
		logger.exception("Error fetching performance data for dashboard")
		raise ActionError("Could not load your performance data.", 500)


async def get_my_performance_summary(username: str) -> PerformanceSummary:
	data = await get_my_performance_data(username)
	return summarize(username, data)


async def reset_my_performance_data(username: str) -> StoreResult:
	if not username:
		return StoreResult(success=False, message="User not identified. Please log in.")
	try:
		result = await performance_store.reset(username)
	except Exception:
		logger.exception("Error resetting performance data for dashboard")
		return StoreResult(success=False, message="An error occurred while resetting your statistics.")
	if result.success:
		await auditor.log("performance_reset", username=username)
		return StoreResult(success=True, message="Your dashboard statistics have been reset.")
	return StoreResult(success=False, message=result.message or "Failed to reset statistics.")
