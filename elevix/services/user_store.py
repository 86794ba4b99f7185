from __future__ import annotations

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from elevix.config import settings
from elevix.errors import StoreError
from elevix.schemas import AuthResult, Credentials, User
from elevix.services.performance_store import PerformanceStore, performance_store


logger = logging.getLogger(__name__)

USERS_FILE = "users.json"
MIN_USERNAME_CHARS = 3
MIN_PASSWORD_CHARS = 6


def validate_credentials(credentials: Credentials) -> List[str]:
	errors: List[str] = []
	if len(credentials.username) < MIN_USERNAME_CHARS:
		errors.append(f"Username must be at least {MIN_USERNAME_CHARS} characters long.")
	if len(credentials.password) < MIN_PASSWORD_CHARS:
		errors.append(f"Password must be at least {MIN_PASSWORD_CHARS} characters long.")
	return errors


class UserStore:
	"""Flat JSON list of users. Passwords are stored as given; this is a demo store, not auth."""

	def __init__(self, performance: PerformanceStore, data_dir: Optional[str] = None) -> None:
		self._performance = performance
		self._lock = asyncio.Lock()
		self.configure(data_dir or settings.data_dir)

	def configure(self, data_dir: str) -> None:
		self._path = Path(data_dir) / USERS_FILE

	def _read(self) -> List[User]:
		try:
			with self._path.open("r", encoding="utf-8") as f:
				raw = json.load(f)
		except FileNotFoundError:
			self._write([])
			return []
		except (OSError, ValueError):
			logger.exception("Error reading %s", self._path)
			return []
		try:
			return [User.model_validate(u) for u in raw]
		except (TypeError, ValidationError):
			logger.error("Ignoring malformed user list in %s", self._path)
			return []

	def _write(self, users: List[User]) -> None:
		try:
			self._path.parent.mkdir(parents=True, exist_ok=True)
			with self._path.open("w", encoding="utf-8") as f:
				json.dump([u.model_dump() for u in users], f, ensure_ascii=False, indent=2)
		except OSError as e:
			logger.error("Failed to save users: %s", e)
			raise StoreError("Could not save user data.") from e

	async def get_users(self) -> List[User]:
		return self._read()

	async def save_users(self, users: List[User]) -> None:
		async with self._lock:
			self._write(users)

	async def find(self, username: str) -> Optional[User]:
		return next((u for u in await self.get_users() if u.username == username), None)

	async def signup(self, credentials: Credentials) -> AuthResult:
		errors = validate_credentials(credentials)
		if errors:
			return AuthResult(success=False, message=", ".join(errors))

		async with self._lock:
			users = await self.get_users()
			if any(u.username == credentials.username for u in users):
				return AuthResult(success=False, message="Username already exists.")
			users.append(User(
				id=str(int(time.time() * 1000)),
				username=credentials.username,
				password=credentials.password,
			))
			self._write(users)

		await self._performance.ensure(credentials.username)
		logger.info("New user signed up: %s", credentials.username)
		return AuthResult(success=True, message="Signup successful! You can now log in.")

	async def login(self, credentials: Credentials) -> AuthResult:
		errors = validate_credentials(credentials)
		if errors:
			return AuthResult(success=False, message=", ".join(errors))

		user = await self.find(credentials.username)
		if user is None or user.password != credentials.password:
			return AuthResult(success=False, message="Invalid username or password.")
		return AuthResult(success=True, message="Login successful!", username=user.username)


user_store = UserStore(performance_store)
