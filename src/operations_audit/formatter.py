"""Notification text for a completed pre-audit.

The output always has the same shape: a contact block followed by one block
per question in catalogue order. Anything missing or empty is rendered as the
placeholder, so operators can tell "skipped" from "not sent".
"""

from typing import Any

from .models import QUESTIONS, SubmissionPayload

PLACEHOLDER = "—"
HEADER = "🔔 New Pre-Audit Submission"


def _render(value: Any) -> str:
    if value is None:
        return PLACEHOLDER
    if isinstance(value, (list, tuple)):
        text = ", ".join(str(v) for v in value if str(v))
    else:
        text = str(value)
    return text if text.strip() else PLACEHOLDER


def format_submission(payload: SubmissionPayload) -> str:
    """Format a submission for the operator channel.

    Args:
        payload: Snapshot of answers and contact details

    Returns:
        Multi-line notification text (no trailing whitespace)
    """
    contact = payload.contact or {}
    answers = payload.answers or {}

    lines = [
        HEADER,
        "",
        "——— Contact ———",
        f"Name: {_render(contact.get('firstName'))}",
        f"Email: {_render(contact.get('email'))}",
        f"Phone: {_render(contact.get('phone'))}",
        f"Company: {_render(contact.get('company'))}",
        "",
    ]

    for number, question in enumerate(QUESTIONS, start=1):
        lines.append(f"——— Step {number}: {question.label} ———")
        lines.append(_render(answers.get(question.id)))
        lines.append("")

    return "\n".join(lines).rstrip()
