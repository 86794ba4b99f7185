from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Dict, List, Optional
import uuid
import asyncio
import json
import logging
from pathlib import Path

from elevix.config import settings
from elevix.errors import ActionError
from elevix.schemas import (
	AptitudeTutorRequest,
	ChatMessage,
	MockInterviewRequest,
	SoftSkillQuizRequest,
)
from elevix.services import actions


logger = logging.getLogger(__name__)

OPENING_MESSAGES = {
	"aptitude": "Start",
	"soft_skill": "Start the quiz",
	"interview": "Start Interview",
}
APTITUDE_TYPES = ("Quantitative Aptitude", "Logical Reasoning", "Verbal Ability")


def _now() -> datetime:
	return datetime.now(timezone.utc)


def _format_score(score: float) -> str:
	return f"{score:g}"


@dataclass
class PracticeSession:
	session_id: str
	kind: str
	username: str
	subject: str
	current_topic: Optional[str] = None
	messages: List[dict] = field(default_factory=list)
	questions_asked: int = 0
	answer_scores: List[float] = field(default_factory=list)
	is_over: bool = False
	final_score: Optional[float] = None
	average_score: Optional[float] = None
	summary: Optional[str] = None
	total_questions: Optional[int] = None
	last_update: datetime = field(default_factory=_now)

	def history(self) -> List[ChatMessage]:
		# Feedback bubbles ("system") stay in the transcript but are not replayed to the model
		turns = [ChatMessage(role=m["role"], content=m["content"]) for m in self.messages if m["role"] in ("user", "assistant")]
		return turns[-actions.MAX_HISTORY_MESSAGES:]


class SessionManager:
	"""Server-side practice sessions: transcript, question counter and scores per session."""

	def __init__(self, data_dir: Optional[str] = None) -> None:
		self._lock = asyncio.Lock()
		self.configure(data_dir or settings.data_dir)

	def configure(self, data_dir: str) -> None:
		self._sessions: Dict[str, PracticeSession] = {}
		self._turn_locks: Dict[str, asyncio.Lock] = {}
		self._data_dir = Path(data_dir) / "sessions"
		self._data_dir.mkdir(parents=True, exist_ok=True)
		self._load_all()

	def _session_path(self, session_id: str) -> Path:
		return self._data_dir / f"{session_id}.json"

	def _serialize(self, state: PracticeSession) -> dict:
		data = asdict(state)
		data["last_update"] = state.last_update.isoformat()
		return data

	def _deserialize(self, data: dict) -> PracticeSession:
		try:
			last_dt = datetime.fromisoformat(data.get("last_update") or "")
		except ValueError:
			last_dt = _now()
		return PracticeSession(
			session_id=data["session_id"],
			kind=data["kind"],
			username=data["username"],
			subject=data["subject"],
			current_topic=data.get("current_topic"),
			messages=list(data.get("messages", [])),
			questions_asked=int(data.get("questions_asked", 0)),
			answer_scores=list(data.get("answer_scores", [])),
			is_over=bool(data.get("is_over", False)),
			final_score=data.get("final_score"),
			average_score=data.get("average_score"),
			summary=data.get("summary"),
			total_questions=data.get("total_questions"),
			last_update=last_dt,
		)

	def _load_all(self) -> None:
		for p in self._data_dir.glob("*.json"):
			try:
				with p.open("r", encoding="utf-8") as f:
					state = self._deserialize(json.load(f))
			except (OSError, ValueError, KeyError):
				logger.warning("Skipping unreadable session file %s", p)
				continue
			self._sessions[state.session_id] = state

	def _save(self, state: PracticeSession) -> None:
		path = self._session_path(state.session_id)
		try:
			with path.open("w", encoding="utf-8") as f:
				json.dump(self._serialize(state), f, ensure_ascii=False, indent=2)
		except OSError as e:
			# The in-memory session stays usable; only a restart would lose it
			logger.error("Failed to persist session %s: %s", state.session_id, e)

	async def start(self, kind: str, username: str, subject: str, current_topic: Optional[str] = None) -> PracticeSession:
		if kind == "aptitude" and subject not in APTITUDE_TYPES:
			raise ActionError(f"Unknown aptitude type '{subject}'.")
		state = PracticeSession(
			session_id=str(uuid.uuid4()),
			kind=kind,
			username=username,
			subject=subject,
			current_topic=current_topic,
		)
		await self._play_turn(state, OPENING_MESSAGES[kind], record_user=False)
		async with self._lock:
			self._sessions[state.session_id] = state
			self._save(state)
		return state

	def _turn_lock(self, session_id: str) -> asyncio.Lock:
		return self._turn_locks.setdefault(session_id, asyncio.Lock())

	async def send(self, session_id: str, message: str) -> PracticeSession:
		await self.get_required(session_id)
		# One turn at a time per session; a sender that queued behind the final turn sees the session over
		async with self._turn_lock(session_id):
			state = await self.get_required(session_id)
			if state.is_over:
				raise ActionError("This session is already over. Start a new one.", 409)
			if not message.strip():
				raise ActionError("Message cannot be empty.")
			await self._play_turn(state, message, record_user=True)
			self._save(state)
			return state

	async def _play_turn(self, state: PracticeSession, message: str, *, record_user: bool) -> None:
		# Nothing is appended until the action succeeds, so a failed turn can simply be retried
		history = state.history()
		new_messages: List[dict] = []
		if record_user:
			new_messages.append({"role": "user", "content": message})

		if state.kind == "aptitude":
			result = await actions.handle_aptitude_tutor_interaction(AptitudeTutorRequest(
				aptitude_type=state.subject,
				current_topic=state.current_topic,
				user_message=message,
				chat_history=history,
				questions_asked=state.questions_asked,
				username=state.username,
				previous_scores=state.answer_scores,
			))
			score = result.answer_score
			if result.detailed_feedback:
				suffix = f"\nScore: {_format_score(score)}/10" if score is not None else ""
				new_messages.append({"role": "system", "content": result.detailed_feedback + suffix, "score": score})
			if result.ai_response:
				new_messages.append({"role": "assistant", "content": result.ai_response})
			state.questions_asked = result.updated_questions_asked
			if score is not None:
				state.answer_scores.append(score)
			state.is_over = result.is_quiz_over
			if result.is_quiz_over:
				state.average_score = result.average_session_score

		elif state.kind == "soft_skill":
			result = await actions.handle_get_quiz_response(SoftSkillQuizRequest(
				soft_skill_topic=state.subject,
				user_message=message,
				chat_history=history,
				username=state.username,
			))
			if result.question_feedback:
				new_messages.append({"role": "system", "content": result.question_feedback, "score": result.answer_score})
			if result.ai_response:
				new_messages.append({"role": "assistant", "content": result.ai_response})
			if result.answer_score is not None:
				state.answer_scores.append(result.answer_score)
			state.is_over = result.is_quiz_over
			# one question per scored answer, plus the open one while the quiz runs
			state.questions_asked = len(state.answer_scores) + (0 if state.is_over else 1)
			state.final_score = result.final_score if result.final_score is not None else state.final_score
			state.summary = result.quiz_summary or state.summary
			state.total_questions = result.total_questions or state.total_questions

		elif state.kind == "interview":
			result = await actions.handle_conduct_mock_interview(MockInterviewRequest(
				interview_type=state.subject,
				user_message=message,
				chat_history=history,
				question_count=state.questions_asked,
				username=state.username,
			))
			if result.answer_feedback:
				new_messages.append({"role": "system", "content": result.answer_feedback})
			if result.ai_response:
				new_messages.append({"role": "assistant", "content": result.ai_response})
			state.is_over = result.is_interview_over
			if result.current_question_count is not None:
				state.questions_asked = result.current_question_count
			state.final_score = result.interview_score if result.interview_score is not None else state.final_score
			state.summary = result.overall_feedback or state.summary

		else:
			raise ActionError(f"Unknown session kind '{state.kind}'.")

		state.messages.extend(new_messages)
		state.last_update = _now()

	async def get(self, session_id: str) -> Optional[PracticeSession]:
		return self._sessions.get(session_id)

	async def get_required(self, session_id: str) -> PracticeSession:
		state = await self.get(session_id)
		if state is None:
			raise KeyError("session not found")
		return state

	async def list_sessions(self, username: Optional[str] = None) -> List[PracticeSession]:
		items = [s for s in self._sessions.values() if username is None or s.username == username]
		# Newest first
		items.sort(key=lambda s: s.last_update, reverse=True)
		return items

	async def delete_session(self, session_id: str) -> bool:
		async with self._lock:
			state = self._sessions.pop(session_id, None)
			self._turn_locks.pop(session_id, None)
			path = self._session_path(session_id)
			try:
				path.unlink(missing_ok=True)
			except OSError as e:
				logger.error("Failed to remove session file %s: %s", path, e)
			return state is not None


session_manager = SessionManager()
