from __future__ import annotations

from typing import Any, Dict

from elevix.errors import FlowError
from elevix.schemas import ResumeFeedbackInput, ResumeFeedbackOutput
from elevix.services.flows.base import run_flow


MIN_RESUME_CHARS = 50
MAX_RESUME_CHARS = 15000

RESUME_FEEDBACK_PROMPT = (
	"You are an expert AI Resume Analyzer and Career Coach. Analyze the resume thoroughly.\n"
	"{role_line}\n\n"
	"Provide:\n"
	"1. overall_score: 0-100, weighing clarity, impact, relevance to the target role and professional standards.\n"
	"2. summary: 2-3 sentences with the key findings.\n"
	"3. strengths: 2-4 specific strengths.\n"
	"4. areas_for_improvement: 3-5 actionable suggestions, each with the resume section (Experience, Skills, "
	"Education, Projects, Contact Information, Summary/Objective...), the suggestion, and optionally an "
	"importance of High, Medium or Low.\n"
	"5. formatting_and_structure_feedback: 2-3 points on layout, consistency, white space, length, readability.\n"
	"6. ats_friendliness: brief comment on Applicant Tracking System compatibility; keyword relevance when a "
	"target role is given, otherwise general parseability.\n\n"
	"Be practical, professional and balanced: highlight positives as well as areas for growth."
)


def build_prompt(data: ResumeFeedbackInput) -> str:
	if data.target_role:
		role_line = f"The user is targeting a role as a '{data.target_role}'. Tailor your feedback towards this role."
	else:
		role_line = "No specific target role provided, so give general feedback for a professional resume."
	return RESUME_FEEDBACK_PROMPT.format(role_line=role_line)


def _finalize(out: Dict[str, Any]) -> Dict[str, Any]:
	out.setdefault("overall_score", 0)
	out.setdefault("summary", "No summary provided.")
	out.setdefault("strengths", [])
	out.setdefault("areas_for_improvement", [])
	out.setdefault("formatting_and_structure_feedback", [])
	return out


async def get_resume_feedback(data: ResumeFeedbackInput) -> ResumeFeedbackOutput:
	if len(data.resume_text) < MIN_RESUME_CHARS:
		raise FlowError("Resume text is too short to analyze effectively.")
	if len(data.resume_text) > MAX_RESUME_CHARS:
		raise FlowError(f"Resume text is too long. Please keep it under {MAX_RESUME_CHARS} characters.")

	return await run_flow(
		"resume_feedback",
		ResumeFeedbackOutput,
		build_prompt(data),
		f"Resume Text:\n{data.resume_text}",
		empty_message="AI failed to generate feedback. Please try again.",
		finalize=_finalize,
	)
