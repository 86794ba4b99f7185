from __future__ import annotations

from typing import Any, Dict

from elevix.schemas import SoftSkillQuizInput, SoftSkillQuizOutput
from elevix.services.flows.base import render_history, run_flow


TOTAL_QUIZ_QUESTIONS = 3

SOFT_SKILL_QUIZ_PROMPT = (
	"You are an AI quiz master for soft skills. The current topic is '{topic}'.\n"
	"You conduct a quiz of exactly {total} questions; report that number in total_questions on every reply.\n\n"
	"- Ask one question at a time; questions and closing remarks go in ai_response.\n"
	"- When the user answers: give brief constructive feedback in question_feedback and state the score in "
	"that text (e.g. \"That's an insightful way to look at it. Score: 9/10.\"); put the 0-10 score in answer_score; "
	"then ask the next question.\n"
	"- At the start (no history, or a greeting such as \"hi\", \"start quiz\", \"Start the quiz\") ask the first "
	"question only. No feedback or score yet.\n"
	"- Hint requests get a small hint in ai_response and are not scored.\n"
	"- Vague answers get a request for a specific example and are not scored until clarified.\n"
	"- Stay conversational, encouraging and friendly.\n"
	"- After the answer to question {total}: give feedback and answer_score for it, set is_quiz_over = true, "
	"set final_score to the sum of all {total} answer scores (max {max_score}), write a quiz_summary of strengths "
	"and areas for improvement, and close in ai_response.\n\n"
	"Use the conversation to work out the current question number. is_quiz_over is false until the quiz ends. "
	"Never ask more than {total} questions."
)


def build_prompt(data: SoftSkillQuizInput) -> str:
	return SOFT_SKILL_QUIZ_PROMPT.format(
		topic=data.soft_skill_topic,
		total=TOTAL_QUIZ_QUESTIONS,
		max_score=TOTAL_QUIZ_QUESTIONS * 10,
	)


async def get_soft_skill_quiz_response(data: SoftSkillQuizInput) -> SoftSkillQuizOutput:
	def finalize(out: Dict[str, Any]) -> Dict[str, Any]:
		out.setdefault("is_quiz_over", False)
		out.setdefault("total_questions", TOTAL_QUIZ_QUESTIONS)
		return out

	user_content = (
		"Previous conversation:\n"
		f"{render_history(data.chat_history)}\n\n"
		f"User's latest message: {data.user_message}"
	)
	return await run_flow(
		"soft_skill_quiz",
		SoftSkillQuizOutput,
		build_prompt(data),
		user_content,
		empty_message="AI failed to generate a response for the soft skill quiz.",
		finalize=finalize,
	)
