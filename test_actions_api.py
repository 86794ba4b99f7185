import pytest

from elevix.errors import LLMUnavailableError


RESUME = "Jane Doe - Software Engineer. 5 years building Python APIs, led a team of 4, shipped billing."


def _history(n):
	return [{"role": "user" if i % 2 else "assistant", "content": f"turn {i}"} for i in range(n)]


# --- resume ---

@pytest.mark.parametrize("text", ["", "too short", "x" * 49, "   " + "x" * 40 + "    "])
def test_resume_too_short(client, llm, text):
	response = client.post("/api/resume/feedback", json={"resume_text": text})
	assert response.status_code == 400
	assert response.json() == {
		"error": "Resume text is too short. Please provide substantial content for effective feedback."
	}
	assert llm.calls == []


def test_resume_too_long(client, llm):
	response = client.post("/api/resume/feedback", json={"resume_text": "x" * 15001})
	assert response.status_code == 400
	assert response.json()["error"] == "Resume text is too long. Please provide a resume under 15,000 characters."


def test_resume_target_role_too_long(client, llm):
	response = client.post("/api/resume/feedback", json={"resume_text": RESUME, "target_role": "r" * 101})
	assert response.json()["error"] == "Target role is too long (max 100 characters)."


def test_resume_boundaries_are_accepted(client, llm):
	llm.queue({"overall_score": 50, "summary": "ok"}, {"overall_score": 55, "summary": "ok"})
	assert client.post("/api/resume/feedback", json={"resume_text": "x" * 50}).status_code == 200
	assert client.post("/api/resume/feedback", json={"resume_text": "x" * 15000}).status_code == 200


def test_resume_feedback_success(client, llm):
	llm.queue({
		"overall_score": 78,
		"summary": "Strong technical profile.",
		"strengths": ["Quantified impact", "Clear skills section"],
		"areas_for_improvement": [{"section": "Experience", "suggestion": "Add metrics to billing work", "importance": "High"}],
		"formatting_and_structure_feedback": ["Consistent fonts"],
		"ats_friendliness": "Parses cleanly.",
	})
	response = client.post("/api/resume/feedback", json={"resume_text": RESUME, "target_role": "Backend Engineer"})
	assert response.status_code == 200
	body = response.json()
	assert body["overall_score"] == 78
	assert body["areas_for_improvement"][0]["importance"] == "High"


def test_resume_upload_text_file(client, llm):
	llm.queue({"overall_score": 70, "summary": "Good."})
	response = client.post(
		"/api/resume/upload",
		files={"file": ("resume.txt", RESUME.encode("utf-8"), "text/plain")},
		data={"target_role": "Backend Engineer"},
	)
	assert response.status_code == 200
	assert response.json()["overall_score"] == 70
	assert "Jane Doe" in llm.calls[0]["user"]


def test_resume_upload_empty_file(client, llm):
	response = client.post("/api/resume/upload", files={"file": ("resume.txt", b"   ", "text/plain")})
	assert response.status_code == 400


def test_llm_failure_surfaces_generic_message(client, llm):
	llm.queue(LLMUnavailableError("provider 'groq' is not configured"))
	response = client.post("/api/resume/feedback", json={"resume_text": RESUME})
	assert response.status_code == 500
	assert response.json() == {"error": "An unexpected error occurred while analyzing your resume."}


# --- code runner ---

def test_code_snippet_required(client, llm):
	response = client.post("/api/technical/run-code", json={"code_snippet": "   \n"})
	assert response.status_code == 400
	assert response.json()["error"] == "Code snippet cannot be empty."


def test_code_snippet_too_long(client, llm):
	response = client.post("/api/technical/run-code", json={"code_snippet": "a" * 5001})
	assert response.json()["error"] == "Code snippet is too long. Please provide a snippet under 5000 characters."


def test_blank_language_is_treated_as_unspecified(client, llm):
	llm.queue({"explanation": "Logs 3", "simulated_output": "3", "is_executable": True})
	response = client.post("/api/technical/run-code", json={"code_snippet": "console.log(1 + 2)", "language": "  "})
	assert response.status_code == 200
	assert response.json()["static_signals"] is None
	assert "'unspecified'" in llm.calls[0]["system"]


# --- aptitude ---

def test_aptitude_requires_username(client, llm):
	response = client.post("/api/aptitude/tutor", json={
		"aptitude_type": "Verbal Ability",
		"user_message": "Start",
	})
	assert response.status_code == 400
	assert response.json()["error"] == "Aptitude type, user message, and username are required."


def test_aptitude_message_too_long(client, llm):
	response = client.post("/api/aptitude/tutor", json={
		"aptitude_type": "Verbal Ability",
		"user_message": "a" * 1001,
		"username": "asha",
	})
	assert response.json()["error"] == "Your message is too long (max 1000 characters)."


def test_aptitude_history_too_long(client, llm):
	response = client.post("/api/aptitude/tutor", json={
		"aptitude_type": "Verbal Ability",
		"user_message": "B",
		"username": "asha",
		"chat_history": _history(21),
	})
	assert response.json()["error"] == "Chat history is too extensive."


def test_aptitude_unknown_type_is_rejected(client, llm):
	response = client.post("/api/aptitude/tutor", json={
		"aptitude_type": "Astrology",
		"user_message": "Start",
		"username": "asha",
	})
	assert response.status_code == 422


def test_aptitude_mid_quiz_records_nothing(client, llm):
	llm.queue({"ai_response": "Next: 15% of 80?", "detailed_feedback": "Correct!", "answer_score": 10, "updated_questions_asked": 2})
	response = client.post("/api/aptitude/tutor", json={
		"aptitude_type": "Quantitative Aptitude",
		"user_message": "30",
		"username": "asha",
		"questions_asked": 1,
	})
	assert response.status_code == 200
	assert response.json()["is_question"] is True
	assert client.get("/api/dashboard/asha/performance").json()["aptitude_history"] == []


def test_aptitude_string_false_flag_records_nothing(client, llm):
	llm.queue({"ai_response": "Next question", "is_quiz_over": "false", "updated_questions_asked": 2, "answer_score": 7})
	response = client.post("/api/aptitude/tutor", json={
		"aptitude_type": "Verbal Ability",
		"user_message": "B",
		"username": "asha",
		"questions_asked": 1,
	})
	assert response.status_code == 200
	assert response.json()["is_quiz_over"] is False
	assert client.get("/api/dashboard/asha/performance").json()["aptitude_history"] == []


def test_aptitude_quiz_over_records_computed_average(client, llm):
	llm.queue({
		"ai_response": "That's the end of this short practice session! Well done.",
		"detailed_feedback": "Partially Correct. ...",
		"is_quiz_over": True,
		"updated_questions_asked": 3,
		"answer_score": 5,
	})
	response = client.post("/api/aptitude/tutor", json={
		"aptitude_type": "Quantitative Aptitude",
		"user_message": "12 km/h",
		"username": "asha",
		"questions_asked": 2,
		"previous_scores": [10, 8],
	})
	body = response.json()
	assert body["is_quiz_over"] is True
	assert body["is_question"] is False
	assert body["average_session_score"] == 7.7

	history = client.get("/api/dashboard/asha/performance").json()["aptitude_history"]
	assert len(history) == 1
	assert history[0]["aptitude_type"] == "Quantitative Aptitude"
	assert history[0]["topic"] == "General"
	assert history[0]["score"] == 7.7


# --- soft skills ---

def test_soft_skill_requires_fields(client, llm):
	response = client.post("/api/soft-skills/quiz", json={"soft_skill_topic": "", "user_message": "hi", "username": "asha"})
	assert response.json()["error"] == "Topic, user message, and username are required."


def test_soft_skill_quiz_over_is_recorded(client, llm):
	llm.queue({
		"ai_response": "Thanks for taking the quiz!",
		"is_quiz_over": True,
		"question_feedback": "Great example. Score: 9/10.",
		"answer_score": 9,
		"final_score": 24,
		"quiz_summary": "Strong listener.",
	})
	response = client.post("/api/soft-skills/quiz", json={
		"soft_skill_topic": "Effective Communication",
		"user_message": "I summarize what I heard before replying.",
		"username": "asha",
	})
	assert response.status_code == 200
	entry = client.get("/api/dashboard/asha/performance").json()["soft_skills_history"][0]
	assert entry["topic"] == "Effective Communication"
	assert entry["final_score"] == 24
	assert entry["total_questions"] == 3


# --- mock interview ---

def test_interview_message_too_long(client, llm):
	response = client.post("/api/mock-interviews/turn", json={
		"interview_type": "Behavioral",
		"user_message": "a" * 2001,
		"username": "asha",
	})
	assert response.json()["error"] == "Your message is too long. Please keep it under 2000 characters."


def test_interview_history_too_long(client, llm):
	response = client.post("/api/mock-interviews/turn", json={
		"interview_type": "Behavioral",
		"user_message": "Done",
		"username": "asha",
		"chat_history": _history(21),
	})
	assert response.json()["error"] == "Chat history is too long."


def test_interview_over_without_score_is_not_recorded(client, llm):
	llm.queue({"ai_response": "Thank you.", "is_interview_over": True, "overall_feedback": "Good."})
	client.post("/api/mock-interviews/turn", json={"interview_type": "Case Study", "user_message": "end", "username": "asha"})
	assert client.get("/api/dashboard/asha/performance").json()["interview_history"] == []


def test_interview_over_is_recorded(client, llm):
	llm.queue({
		"ai_response": "That concludes our mock interview.",
		"is_interview_over": True,
		"answer_feedback": "Clear STAR structure.",
		"overall_feedback": "Confident and concise.",
		"interview_score": 8,
		"current_question_count": 4,
	})
	response = client.post("/api/mock-interviews/turn", json={
		"interview_type": "Behavioral",
		"user_message": "We cut latency by 40%.",
		"username": "asha",
		"question_count": 4,
	})
	assert response.status_code == 200
	entry = client.get("/api/dashboard/asha/performance").json()["interview_history"][0]
	assert entry == {"type": "Behavioral", "score": 8, "overall_feedback": "Confident and concise.", "date": entry["date"]}


# --- dashboard ---

def test_dashboard_summary_and_reset(client, llm):
	client.post("/api/auth/signup", json={"username": "asha", "password": "secret1"})
	llm.queue({"ai_response": "Bye", "is_interview_over": True, "overall_feedback": "Fine.", "interview_score": 6})
	client.post("/api/mock-interviews/turn", json={"interview_type": "Behavioral", "user_message": "end", "username": "asha"})

	summary = client.get("/api/dashboard/asha/summary").json()
	assert summary["interviews"] == {"sessions": 1, "average_score": 6.0, "completion_percent": 60.0}

	response = client.delete("/api/dashboard/asha/performance")
	assert response.json() == {"success": True, "message": "Your dashboard statistics have been reset."}
	assert client.get("/api/dashboard/asha/performance").json()["interview_history"] == []


def test_dashboard_reset_unknown_user(client):
	response = client.delete("/api/dashboard/ghost/performance")
	assert response.json() == {"success": False, "message": "No performance data found for this user to reset."}


def test_catalog(client):
	body = client.get("/api/catalog").json()
	assert "Behavioral" in body["interview_types"]
	assert [s["aptitude_type"] for s in body["aptitude_sections"]] == [
		"Quantitative Aptitude", "Logical Reasoning", "Verbal Ability",
	]
	assert len(body["soft_skill_topics"]) == 6
