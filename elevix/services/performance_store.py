from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from elevix.config import settings
from elevix.errors import StoreError
from elevix.schemas import (
	AptitudeEntry,
	HistoryStats,
	InterviewEntry,
	PerformanceSummary,
	SoftSkillEntry,
	StoreResult,
	UserPerformanceData,
)


logger = logging.getLogger(__name__)

PERFORMANCE_FILE = "user_performance.json"


def today() -> str:
	return datetime.now(timezone.utc).date().isoformat()


class PerformanceStore:
	"""Per-user session history kept in one JSON object keyed by username.

	Every change rewrites the whole file. The lock only serializes writers inside
	this process; separate worker processes can still interleave.
	"""

	def __init__(self, data_dir: Optional[str] = None) -> None:
		self._lock = asyncio.Lock()
		self.configure(data_dir or settings.data_dir)

	def configure(self, data_dir: str) -> None:
		self._path = Path(data_dir) / PERFORMANCE_FILE

	@property
	def path(self) -> Path:
		return self._path

	def _read_all(self) -> Dict[str, dict]:
		try:
			with self._path.open("r", encoding="utf-8") as f:
				data = json.load(f)
		except FileNotFoundError:
			self._write_all({})
			return {}
		except (OSError, ValueError):
			logger.exception("Error reading %s", self._path)
			return {}
		if not isinstance(data, dict):
			logger.error("%s does not hold a JSON object; treating it as empty", self._path)
			return {}
		return data

	def _write_all(self, data: Dict[str, dict]) -> None:
		try:
			self._path.parent.mkdir(parents=True, exist_ok=True)
			with self._path.open("w", encoding="utf-8") as f:
				json.dump(data, f, ensure_ascii=False, indent=2)
		except OSError as e:
			logger.error("Failed to save user performance data: %s", e)
			raise StoreError("Could not save user performance data.") from e

	async def get(self, username: str) -> UserPerformanceData:
		raw = self._read_all().get(username)
		if raw is None:
			return UserPerformanceData()
		return UserPerformanceData.model_validate(raw)

	async def ensure(self, username: str) -> None:
		async with self._lock:
			data = self._read_all()
			if username not in data:
				data[username] = UserPerformanceData().model_dump()
				self._write_all(data)

	async def append(
		self,
		username: str,
		*,
		soft_skill_entry: Optional[SoftSkillEntry] = None,
		aptitude_entry: Optional[AptitudeEntry] = None,
		interview_entry: Optional[InterviewEntry] = None,
	) -> StoreResult:
		if not username:
			return StoreResult(success=False, message="Username is required.")

		async with self._lock:
			data = self._read_all()
			current = UserPerformanceData.model_validate(data.get(username) or {})
			if soft_skill_entry is not None:
				current.soft_skills_history.append(soft_skill_entry)
			if aptitude_entry is not None:
				current.aptitude_history.append(aptitude_entry)
			if interview_entry is not None:
				current.interview_history.append(interview_entry)
			data[username] = current.model_dump()
			self._write_all(data)
		return StoreResult(success=True)

	async def reset(self, username: str) -> StoreResult:
		if not username:
			return StoreResult(success=False, message="Username is required.")

		async with self._lock:
			data = self._read_all()
			if username not in data:
				return StoreResult(success=False, message="No performance data found for this user to reset.")
			data[username] = UserPerformanceData().model_dump()
			self._write_all(data)
		return StoreResult(success=True, message="Performance data reset successfully.")


def _mean(values: List[float]) -> Optional[float]:
	if not values:
		return None
	return sum(values) / len(values)


def _clamp_percent(value: float) -> float:
	return min(100.0, max(0.0, round(value, 1)))


def summarize(username: str, data: UserPerformanceData) -> PerformanceSummary:
	"""Dashboard figures: soft skills as a percentage, aptitude and interviews out of 10."""
	soft_pcts = [
		(e.final_score / (e.total_questions * 10)) * 100 if e.total_questions > 0 else 0.0
		for e in data.soft_skills_history
	]
	soft_avg = _mean(soft_pcts)
	apt_avg = _mean([e.score for e in data.aptitude_history])
	int_avg = _mean([e.score for e in data.interview_history])

	return PerformanceSummary(
		username=username,
		soft_skills=HistoryStats(
			sessions=len(data.soft_skills_history),
			average_score=round(soft_avg, 1) if soft_avg is not None else None,
			completion_percent=_clamp_percent(soft_avg) if soft_avg is not None else 0.0,
		),
		aptitude=HistoryStats(
			sessions=len(data.aptitude_history),
			average_score=round(apt_avg, 1) if apt_avg is not None else None,
			completion_percent=_clamp_percent(apt_avg * 10) if apt_avg is not None else 0.0,
		),
		interviews=HistoryStats(
			sessions=len(data.interview_history),
			average_score=round(int_avg, 1) if int_avg is not None else None,
			completion_percent=_clamp_percent(int_avg * 10) if int_avg is not None else 0.0,
		),
	)


performance_store = PerformanceStore()
