from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Header, HTTPException, status

from elevix.config import settings


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
	scheme, _, token = (authorization or "").partition(" ")
	if scheme.lower() != "bearer" or not token.strip():
		return None
	return token.strip()


async def verify_api_key(authorization: Optional[str] = Header(default=None)) -> None:
	"""Guard /api routes with a shared bearer key when one is configured.

	This protects the deployment, not individual users; user login is the plaintext demo store.
	"""
	if not settings.api_key:
		return
	token = _bearer_token(authorization)
	if token is None:
		raise HTTPException(
			status_code=status.HTTP_401_UNAUTHORIZED,
			detail="Missing API key",
			headers={"WWW-Authenticate": "Bearer"},
		)
	if not secrets.compare_digest(token, settings.api_key):
		raise HTTPException(
			status_code=status.HTTP_401_UNAUTHORIZED,
			detail="Invalid API key",
			headers={"WWW-Authenticate": "Bearer"},
		)
