"""
FastAPI Web Application - RevTags Review Drafter
=================================================

JSON API behind the "Draft review with AI" button.
Every error response has the shape {"error": "..."}.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, BaseModel, Field, ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from revtags.application import ReviewDrafter, ReviewDraftError, new_request
from revtags.domain import PROFILES
from revtags.infrastructure.config import get_settings
from revtags.infrastructure.llm import GenerationClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class DraftRequest(BaseModel):
    """Body of POST /api/draft. Every field is optional here; employee is checked by hand."""
    employee: Optional[str] = None
    business: Optional[str] = None
    business_type: Optional[str] = Field(default=None, alias="businessType")
    service_notes: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("serviceNotes", "extra"),
    )


def get_drafter() -> ReviewDrafter:
    return ReviewDrafter(GenerationClient())


# ── Lifespan ───────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    for issue in get_settings().validate():
        logger.warning(issue)
    logger.info(f"Loaded {len(PROFILES)} draft profiles")
    yield


app = FastAPI(title="RevTags", description="AI review drafting for local businesses", lifespan=lifespan)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    detail = "Method not allowed" if exc.status_code == 405 else exc.detail
    return JSONResponse({"error": detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.post("/api/draft")
async def draft_review(request: Request, drafter: ReviewDrafter = Depends(get_drafter)):
    try:
        payload = await request.json()
    except ValueError:
        payload = {}

    if not isinstance(payload, dict):
        payload = {}

    try:
        body = DraftRequest.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid request body")

    try:
        draft_request = new_request(
            body.employee,
            business=body.business,
            service_notes=body.service_notes,
            business_type=body.business_type,
        )
        result = await run_in_threadpool(drafter.draft, draft_request)
    except ReviewDraftError as e:
        if e.status_code >= 500:
            logger.error(f"Draft failed: {e.message[:200]}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Unexpected draft error: {e}")
        raise HTTPException(status_code=500, detail="AI generation failed")

    logger.info(f"Draft for {draft_request.employee}: {result.outcome.value} after {result.attempts} attempt(s)")
    return {"review": result.review}


@app.get("/api/profiles")
async def api_list_profiles():
    return [
        {"id": profile.id.value, "label": profile.label}
        for profile in PROFILES.values()
    ]


@app.get("/health")
async def health():
    return {"status": "ok"}
