from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime


AptitudeType = Literal["Quantitative Aptitude", "Logical Reasoning", "Verbal Ability"]
SessionKind = Literal["aptitude", "soft_skill", "interview"]


class ChatMessage(BaseModel):
	role: Literal["user", "assistant"]
	content: str


# --- Aptitude tutor ---

class AptitudeTutorInput(BaseModel):
	aptitude_type: AptitudeType = Field(..., description="The main category of aptitude to focus on")
	current_topic: Optional[str] = Field(default=None, description="Topic within the aptitude type; the tutor picks one if missing")
	user_message: str = Field(..., description="An answer, a hint request, or a greeting")
	chat_history: Optional[List[ChatMessage]] = None
	questions_asked: int = Field(default=0, ge=0, description="Questions already asked by the tutor this session")


class AptitudeTutorOutput(BaseModel):
	ai_response: str
	detailed_feedback: Optional[str] = None
	is_question: bool = True
	is_quiz_over: bool = False
	updated_questions_asked: int = Field(..., ge=0)
	answer_score: Optional[float] = Field(default=None, ge=0, le=10)
	average_session_score: Optional[float] = Field(default=None, ge=0, le=10)


class AptitudeTutorRequest(AptitudeTutorInput):
	username: str = ""
	previous_scores: Optional[List[float]] = Field(
		default=None,
		description="Answer scores already earned this session; used to average the session when it ends",
	)


# --- Soft-skill quiz ---

class SoftSkillQuizInput(BaseModel):
	soft_skill_topic: str = Field(..., description='e.g. "Effective Communication"')
	user_message: str
	chat_history: Optional[List[ChatMessage]] = None


class SoftSkillQuizOutput(BaseModel):
	ai_response: str
	is_quiz_over: bool = False
	question_feedback: Optional[str] = None
	answer_score: Optional[float] = Field(default=None, ge=0, le=10)
	final_score: Optional[float] = None
	quiz_summary: Optional[str] = None
	total_questions: Optional[int] = None


class SoftSkillQuizRequest(SoftSkillQuizInput):
	username: str = ""


# --- Mock interview ---

class MockInterviewInput(BaseModel):
	interview_type: str = Field(..., description='e.g. "Behavioral", "Technical - JavaScript"')
	user_message: str
	chat_history: Optional[List[ChatMessage]] = None
	question_count: int = Field(default=0, ge=0)


class MockInterviewOutput(BaseModel):
	ai_response: str
	is_interview_over: bool = False
	answer_feedback: Optional[str] = None
	overall_feedback: Optional[str] = None
	interview_score: Optional[float] = Field(default=None, ge=0, le=10)
	current_question_count: Optional[int] = None


class MockInterviewRequest(MockInterviewInput):
	username: str = ""


# --- Resume feedback ---

class ResumeFeedbackInput(BaseModel):
	resume_text: str
	target_role: Optional[str] = None


class ImprovementArea(BaseModel):
	section: str
	suggestion: str
	importance: Optional[Literal["High", "Medium", "Low"]] = None


class ResumeFeedbackOutput(BaseModel):
	overall_score: float = Field(..., ge=0, le=100)
	summary: str
	strengths: List[str]
	areas_for_improvement: List[ImprovementArea]
	formatting_and_structure_feedback: List[str]
	ats_friendliness: Optional[str] = None


# --- Code runner ---

class CodeRunnerInput(BaseModel):
	code_snippet: str
	language: Optional[str] = Field(default=None, description='e.g. "javascript", "python", "sql"')


class StaticSignals(BaseModel):
	parse_ok: bool
	uses_recursion: bool
	uses_memoization: bool
	loop_nesting_depth: int
	function_count: int
	comment_density: float
	estimated_time_complexity_hint: Optional[str] = None


class CodeRunnerReply(BaseModel):
	"""The part of the code runner result written by the model."""
	explanation: str
	simulated_output: Optional[str] = None
	suggestions: Optional[str] = None
	is_executable: Optional[bool] = None


class CodeRunnerOutput(CodeRunnerReply):
	static_signals: Optional[StaticSignals] = None


# --- Users and performance ---

class Credentials(BaseModel):
	username: str = ""
	password: str = ""


class User(BaseModel):
	id: str
	username: str
	password: str  # plaintext; demo store only


class AuthResult(BaseModel):
	success: bool
	message: str
	username: Optional[str] = None


class SoftSkillEntry(BaseModel):
	topic: str
	final_score: float
	total_questions: int
	date: str


class AptitudeEntry(BaseModel):
	aptitude_type: str
	topic: Optional[str] = "General"
	score: float
	date: str


class InterviewEntry(BaseModel):
	type: str
	score: float
	overall_feedback: Optional[str] = None
	date: str


class UserPerformanceData(BaseModel):
	soft_skills_history: List[SoftSkillEntry] = Field(default_factory=list)
	aptitude_history: List[AptitudeEntry] = Field(default_factory=list)
	interview_history: List[InterviewEntry] = Field(default_factory=list)


class StoreResult(BaseModel):
	success: bool
	message: Optional[str] = None


class HistoryStats(BaseModel):
	sessions: int
	average_score: Optional[float] = None
	completion_percent: float = 0.0


class PerformanceSummary(BaseModel):
	username: str
	soft_skills: HistoryStats
	aptitude: HistoryStats
	interviews: HistoryStats


# --- Practice sessions ---

class StartSessionIn(BaseModel):
	kind: SessionKind
	username: str = Field(..., min_length=1)
	subject: str = Field(..., min_length=1, description="Aptitude type, soft-skill topic, or interview type")
	current_topic: Optional[str] = None


class SessionMessageIn(BaseModel):
	message: str


class TranscriptMessage(BaseModel):
	role: Literal["user", "assistant", "system"]
	content: str
	score: Optional[float] = None


class PracticeSessionOut(BaseModel):
	session_id: str
	kind: SessionKind
	username: str
	subject: str
	current_topic: Optional[str] = None
	messages: List[TranscriptMessage]
	questions_asked: int
	answer_scores: List[float]
	is_over: bool
	final_score: Optional[float] = None
	average_score: Optional[float] = None
	summary: Optional[str] = None
	total_questions: Optional[int] = None
	last_update: datetime


class SessionSummary(BaseModel):
	session_id: str
	kind: SessionKind
	subject: str
	last_update: datetime
	is_over: bool


class SessionList(BaseModel):
	items: List[SessionSummary]
