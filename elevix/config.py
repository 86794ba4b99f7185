from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List
from dotenv import load_dotenv


# Ensure .env is loaded eagerly
load_dotenv(dotenv_path=".env")


class Settings(BaseSettings):
	# Server
	host: str = "0.0.0.0"
	port: int = 8000
	cors_allow_origins: List[str] = [
		"http://localhost:3000",
		"http://localhost:9002",
		"http://127.0.0.1:3000",
		"http://127.0.0.1:9002",
	]

	# Auth
	api_key: str | None = None  # simple bearer key if provided

	# LLM Provider Selection
	llm_provider: str = "groq"  # options: groq, gemini

	# Groq
	groq_api_key: str | None = None
	groq_model: str = "llama-3.3-70b-versatile"

	# Google Gemini
	gemini_api_key: str | None = None
	gemini_model: str = "models/gemini-2.0-flash"

	# Flow generation
	flow_temperature: float = 0.4
	flow_max_tokens: int = 1500

	# Storage
	data_dir: str = "data"  # users.json, user_performance.json, sessions/

	# Logging
	log_level: str = "INFO"
	analytics_path: str | None = None  # e.g., logs/events.jsonl

	@field_validator("flow_temperature")
	@classmethod
	def clamp_temperature(cls, v: float) -> float:
		return max(0.0, min(1.0, v))

	@field_validator("llm_provider")
	@classmethod
	def normalize_provider(cls, v: str) -> str:
		return (v or "groq").strip().lower()

	@field_validator("data_dir")
	@classmethod
	def require_data_dir(cls, v: str) -> str:
		if not v or not v.strip():
			raise ValueError("data_dir must not be empty")
		return v.strip()

	@field_validator("cors_allow_origins", mode="before")
	@classmethod
	def parse_cors_origins(cls, v):
		# Allow environment variable override
		if isinstance(v, str):
			return [origin.strip() for origin in v.split(",") if origin.strip()]
		return v

	class Config:
		env_file = ".env"
		env_file_encoding = "utf-8"


settings = Settings()
