from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from elevix.schemas import ResumeFeedbackInput, ResumeFeedbackOutput
from elevix.services import actions
from elevix.utils.audit import auditor
from elevix.utils.text_extract import extract_upload_text


router = APIRouter()


@router.post("/resume/feedback", response_model=ResumeFeedbackOutput)
async def resume_feedback(payload: ResumeFeedbackInput):
	return await actions.get_resume_feedback_action(payload)


@router.post("/resume/upload", response_model=ResumeFeedbackOutput)
async def resume_upload(
	file: UploadFile = File(...),
	target_role: Optional[str] = Form(default=None),
):
	data = await file.read()
	text = extract_upload_text(file.filename or "", file.content_type or "", data)
	if not text.strip():
		raise HTTPException(status_code=400, detail="Uploaded file appears empty or unreadable.")

	await auditor.log("resume_upload", filename=file.filename, bytes=len(data))
	return await actions.get_resume_feedback_action(ResumeFeedbackInput(resume_text=text, target_role=target_role or None))
