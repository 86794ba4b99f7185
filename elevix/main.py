from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from elevix.config import settings
from elevix.errors import ActionError
from elevix.utils.logging import configure_logging
from elevix.routers.auth import router as auth_router
from elevix.routers.tutoring import router as tutoring_router
from elevix.routers.resume import router as resume_router
from elevix.routers.dashboard import router as dashboard_router
from elevix.routers.sessions import router as sessions_router
from elevix.utils.audit import auditor
from elevix.utils.security import verify_api_key
from elevix.services.llm_service import llm_service


configure_logging()
auditor.configure(settings.analytics_path)
app = FastAPI(title="Elévix AI Training Backend", version="0.1.0")

# CORS
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_allow_origins,
	# Wildcard origins require credentials to be False per CORS spec
	allow_credentials=False if settings.cors_allow_origins == ["*"] else True,
	allow_methods=["*"],
	allow_headers=["*"],
	max_age=3600,
)


@app.exception_handler(ActionError)
async def action_error_handler(request: Request, exc: ActionError) -> JSONResponse:
	return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.get("/health")
async def health() -> JSONResponse:
	return JSONResponse({
		"status": "ok",
		"version": app.version,
		"llm": {"provider": settings.llm_provider, "enabled": llm_service.enabled}
	})


# Routers
_guarded = [Depends(verify_api_key)]
app.include_router(auth_router, prefix="/api", tags=["auth"], dependencies=_guarded)
app.include_router(tutoring_router, prefix="/api", tags=["tutoring"], dependencies=_guarded)
app.include_router(resume_router, prefix="/api", tags=["resume"], dependencies=_guarded)
app.include_router(dashboard_router, prefix="/api", tags=["dashboard"], dependencies=_guarded)
app.include_router(sessions_router, prefix="/api", tags=["practice"], dependencies=_guarded)


def run() -> None:
	import uvicorn

	uvicorn.run("elevix.main:app", host=settings.host, port=settings.port)
