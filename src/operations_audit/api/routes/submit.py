"""Submission endpoint."""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...models import AnswerSet, ContactInfo, SubmissionPayload
from ...submission import RelaySubmitter, SubmissionError


router = APIRouter()

ALLOWED_METHODS = "GET, POST"


class SubmitRequest(BaseModel):
    """Request body for a pre-audit submission."""

    answers: dict[str, Any] = Field(default_factory=dict)
    contact: dict[str, Any] = Field(default_factory=dict)


@router.get("/submit")
async def submit_status(request: Request):
    """Health probe for the submit endpoint.

    Returns:
        Whether both Telegram secrets are configured
    """
    relay = request.app.state.relay
    return {
        "ok": True,
        "message": "Submit API is running",
        "telegramConfigured": relay.is_configured,
    }


@router.post("/submit")
async def submit(request: Request, body: SubmitRequest | None = None):
    """Accept a submission and relay it to the operator channel.

    Lenient policy always answers 200 with `sent` telling whether the
    notification went out. Strict policy answers 500 when a configured
    relay fails to deliver.
    """
    body = body or SubmitRequest()
    config = request.app.state.config

    try:
        answers = AnswerSet.from_dict(body.answers)
    except ValueError as e:
        return JSONResponse(status_code=422, content={"ok": False, "error": str(e)})

    payload = SubmissionPayload.capture(answers, ContactInfo.from_dict(body.contact))
    submitter = RelaySubmitter(request.app.state.relay, policy=config.delivery_policy)

    try:
        sent = await submitter.submit(payload)
    except SubmissionError:
        return JSONResponse(
            status_code=500,
            content={"ok": False, "error": "Failed to deliver submission"},
        )

    return {"ok": True, "sent": sent}

