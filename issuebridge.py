# =============================================================================
# SeerrIssue  |  Issue reporting for Overseerr / Jellyseerr
# =============================================================================
from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from typing import Literal, Optional
from contextlib import asynccontextmanager
from datetime import datetime
from loguru import logger

from seerr_issue import config
from seerr_issue.form import ReportDialog
from seerr_issue.models import SubmissionState
from seerr_issue.overseerr import issue_url
from seerr_issue.utils import format_uptime

VERSION = "0.1"

MediaType = Literal["movie", "tv"]


# Lifespan event handler
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Lifespan startup: Initializing SeerrIssue...")
    if not config.OVERSEERR_API_BASE_URL or not config.OVERSEERR_API_KEY:
        logger.warning("Overseerr is not configured. Report endpoints will fail until /reload-env succeeds.")
    try:
        logger.info("Lifespan startup complete. Yielding to application...")
        yield
    finally:
        logger.info("Lifespan shutdown: Shutting down SeerrIssue...")

# Initialize FastAPI app with lifespan
app = FastAPI(lifespan=lifespan)


def _user_id(request: Request) -> Optional[int]:
    """Viewer to report as: X-Api-User header, else OVERSEERR_API_USER."""
    header = request.headers.get("X-Api-User")
    if header is None:
        return config.OVERSEERR_API_USER
    try:
        return int(header)
    except ValueError:
        raise HTTPException(status_code=400, detail="X-Api-User must be a user id")


def _open_dialog(media_type: str, tmdb_id: int, user_id: Optional[int]) -> ReportDialog:
    dialog = ReportDialog(media_type, tmdb_id, user_id)
    if not dialog.load():
        raise HTTPException(status_code=503, detail=dialog.options())
    return dialog


@app.get("/status")
async def get_status():
    """Return status information about the running SeerrIssue service."""
    uptime_seconds, uptime_str = format_uptime(config.START_TIME)
    return {
        "status": "running",
        "version": VERSION,
        "uptime_seconds": uptime_seconds,
        "uptime": uptime_str,
        "start_time": config.START_TIME.isoformat(),
        "current_time": datetime.now().isoformat(),
        "overseerr_configured": bool(config.OVERSEERR_API_BASE_URL and config.OVERSEERR_API_KEY),
    }


@app.get("/report/{media_type}/{tmdb_id}")
def get_report_options(media_type: MediaType, tmdb_id: int, request: Request):
    """Options and default values of the report dialog for a title."""
    dialog = _open_dialog(media_type, tmdb_id, _user_id(request))
    return dialog.options()


@app.post("/report/{media_type}/{tmdb_id}")
async def submit_report(media_type: MediaType, tmdb_id: int, request: Request):
    try:
        raw_payload = await request.json()
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError
        logger.error(f"Report body is not valid JSON: {e}")
        raise HTTPException(status_code=400, detail="Request body must be JSON")

    try:
        values = SubmissionState.model_validate(raw_payload)
    except ValidationError as e:
        logger.error(f"Report validation error: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    # Overseerr calls block, keep them off the event loop
    return await run_in_threadpool(_submit_report, media_type, tmdb_id, _user_id(request), values)


def _submit_report(media_type: str, tmdb_id: int, user_id: Optional[int], values: SubmissionState):
    dialog = _open_dialog(media_type, tmdb_id, user_id)
    errors = dialog.apply(values)
    if errors:
        return JSONResponse(status_code=422, content={"status": "invalid", "errors": errors})
    logger.info(f"Received issue report for {media_type} {tmdb_id}: {dialog.form.state.selected_issue_type.name}")

    result = dialog.submit()
    if result.errors:
        return JSONResponse(status_code=422, content={"status": "invalid", "errors": result.errors})
    if not result.success:
        # Values are echoed back so the client can retry without re-entering them
        return JSONResponse(status_code=502, content={
            "status": "error",
            "message": "Something went wrong while submitting the issue.",
            "error": result.error,
            "values": dialog.form.state.model_dump(mode='json', by_alias=True),
        })

    issue = result.issue
    logger.success(f"Issue report for {dialog.media.title} submitted successfully!")
    return JSONResponse(status_code=201, content={
        "status": "success",
        "title": dialog.media.title,
        "issue": issue.model_dump(mode='json', by_alias=True),
        "url": issue_url(issue.id),
    })


@app.post("/reload-env")
async def reload_environment():
    """
    Reload environment variables from the .env file.
    This endpoint can be called when environment variables have been changed externally.
    """
    logger.info("Environment reload triggered via API endpoint")
    if not config.load_config(override=True):
        raise HTTPException(status_code=500, detail="Configuration is incomplete after reload")
    logger.info("Environment variables reloaded successfully")
    return {"status": "success", "message": "Environment variables reloaded successfully"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8778)
