from fastapi import APIRouter

from elevix.schemas import PerformanceSummary, StoreResult, UserPerformanceData
from elevix.services import actions


router = APIRouter()


@router.get("/dashboard/{username}/performance", response_model=UserPerformanceData)
async def get_performance(username: str):
	return await actions.get_my_performance_data(username)


@router.delete("/dashboard/{username}/performance", response_model=StoreResult)
async def reset_performance(username: str):
	return await actions.reset_my_performance_data(username)


@router.get("/dashboard/{username}/summary", response_model=PerformanceSummary)
async def get_summary(username: str):
	return await actions.get_my_performance_summary(username)
