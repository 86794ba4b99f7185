from typing import Optional

from fastapi import APIRouter, HTTPException

from elevix.schemas import (
	PracticeSessionOut,
	SessionList,
	SessionMessageIn,
	SessionSummary,
	StartSessionIn,
)
from elevix.services.session_manager import PracticeSession, session_manager


router = APIRouter()

NOT_FOUND = "Session not found. Start one via POST /api/practice/session and reuse its session_id."


def _out(state: PracticeSession) -> PracticeSessionOut:
	return PracticeSessionOut.model_validate(state, from_attributes=True)


@router.post("/practice/session", response_model=PracticeSessionOut)
async def start_session(payload: StartSessionIn):
	state = await session_manager.start(payload.kind, payload.username, payload.subject, payload.current_topic)
	return _out(state)


@router.get("/practice/sessions", response_model=SessionList)
async def list_sessions(username: Optional[str] = None):
	items = [
		SessionSummary(
			session_id=s.session_id,
			kind=s.kind,
			subject=s.subject,
			last_update=s.last_update,
			is_over=s.is_over,
		)
		for s in await session_manager.list_sessions(username)
	]
	return SessionList(items=items)


@router.post("/practice/{session_id}/message", response_model=PracticeSessionOut)
async def send_message(session_id: str, payload: SessionMessageIn):
	try:
		state = await session_manager.send(session_id, payload.message)
	except KeyError:
		raise HTTPException(status_code=404, detail=NOT_FOUND)
	return _out(state)


@router.get("/practice/{session_id}", response_model=PracticeSessionOut)
async def get_session(session_id: str):
	try:
		state = await session_manager.get_required(session_id)
	except KeyError:
		raise HTTPException(status_code=404, detail=NOT_FOUND)
	return _out(state)


@router.delete("/practice/{session_id}")
async def delete_session(session_id: str):
	deleted = await session_manager.delete_session(session_id)
	if not deleted:
		raise HTTPException(status_code=404, detail="Session not found")
	return {"status": "ok", "deleted": True}
