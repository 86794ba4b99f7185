from fastapi import APIRouter

from elevix.schemas import AuthResult, Credentials
from elevix.services.user_store import user_store
from elevix.utils.audit import auditor


router = APIRouter()


@router.post("/auth/signup", response_model=AuthResult)
async def signup(payload: Credentials):
	result = await user_store.signup(payload)
	if result.success:
		await auditor.log("signup", username=payload.username)
	return result


@router.post("/auth/login", response_model=AuthResult)
async def login(payload: Credentials):
	return await user_store.login(payload)
