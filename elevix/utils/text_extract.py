from __future__ import annotations

import logging
from io import BytesIO


logger = logging.getLogger(__name__)


def extract_text_from_pdf(data: bytes) -> str:
	"""Extract resume text from PDF bytes.

	PyPDF2 first (fast on text PDFs), then pdfminer.six for layouts PyPDF2
	cannot read. Returns an empty string when neither yields text.
	"""
	try:
		from PyPDF2 import PdfReader
		reader = PdfReader(BytesIO(data))
		parts = [page.extract_text() or "" for page in reader.pages]
		text = "\n".join(p for p in parts if p)
		if text.strip():
			return text
	except Exception as e:
		logger.info("PyPDF2 could not read upload, falling back to pdfminer: %s", e)

	try:
		from pdfminer.high_level import extract_text
		return extract_text(BytesIO(data)) or ""
	except Exception as e:
		logger.warning("pdfminer could not read upload: %s", e)
		return ""


def extract_upload_text(filename: str, content_type: str, data: bytes) -> str:
	"""Text for a .txt, .md or .pdf upload; anything else is read as UTF-8."""
	name = (filename or "").lower()
	ctype = (content_type or "").lower()
	if name.endswith(".pdf") or ctype == "application/pdf":
		return extract_text_from_pdf(data)
	return data.decode("utf-8", errors="ignore")
