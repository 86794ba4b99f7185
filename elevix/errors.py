from __future__ import annotations


class ActionError(Exception):
	"""A server action refused or failed; rendered to clients as ``{"error": message}``."""

	def __init__(self, message: str, status_code: int = 400) -> None:
		super().__init__(message)
		self.message = message
		self.status_code = status_code


class FlowError(Exception):
	"""The model produced nothing usable for a flow."""


class LLMUnavailableError(FlowError):
	"""No provider client could be built from the current settings."""


class StoreError(Exception):
	"""A JSON data file could not be written."""
