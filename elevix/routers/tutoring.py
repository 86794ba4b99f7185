from fastapi import APIRouter

from elevix import catalog
from elevix.schemas import (
	AptitudeTutorOutput,
	AptitudeTutorRequest,
	CodeRunnerInput,
	CodeRunnerOutput,
	MockInterviewOutput,
	MockInterviewRequest,
	SoftSkillQuizOutput,
	SoftSkillQuizRequest,
)
from elevix.services import actions


router = APIRouter()


@router.get("/catalog")
async def get_catalog():
	return catalog.as_dict()


@router.post("/aptitude/tutor", response_model=AptitudeTutorOutput)
async def aptitude_tutor(payload: AptitudeTutorRequest):
	return await actions.handle_aptitude_tutor_interaction(payload)


@router.post("/soft-skills/quiz", response_model=SoftSkillQuizOutput)
async def soft_skill_quiz(payload: SoftSkillQuizRequest):
	return await actions.handle_get_quiz_response(payload)


@router.post("/mock-interviews/turn", response_model=MockInterviewOutput)
async def mock_interview_turn(payload: MockInterviewRequest):
	return await actions.handle_conduct_mock_interview(payload)


@router.post("/technical/run-code", response_model=CodeRunnerOutput)
async def run_code(payload: CodeRunnerInput):
	return await actions.run_code_action(payload)
