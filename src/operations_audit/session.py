"""Per-visitor wizard session.

This tracks everything a single visitor does in the pre-audit: the current
step, answers, contact details, submission status, and the short-lived
scheduled callbacks (loading auto-advance, celebration, splash). Nothing here
is persisted; a reset or a new session starts from scratch.

All mutation happens synchronously from user actions on one event loop.
Scheduled callbacks are asyncio tasks owned by the session and cancelled on
reset() and close().
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Literal

from .config import AuditConfig
from .models import (
    MAX_SELECTIONS,
    QUESTION_STEPS,
    AnswerSet,
    ContactInfo,
    Question,
    QuestionKind,
    Step,
    SubmissionPayload,
    SubmissionStatus,
    get_question,
)
from .navigation import DISABLED_STEPS, TransitionTable
from .submission import GENERIC_FAILURE_MESSAGE, SubmissionError, Submitter
from .validation import contact_error, format_phone_display, phone_digits

logger = logging.getLogger(__name__)

MAX_SELECTIONS_MESSAGE = f"You can select up to {MAX_SELECTIONS} areas."

ExitOutcome = Literal["leave", "confirm", "ignored"]


class WizardSession:
    """State and navigation for one pass through the pre-audit."""

    def __init__(
        self,
        submitter: Submitter,
        config: AuditConfig | None = None,
        transitions: TransitionTable | None = None,
    ):
        """Initialize a wizard session.

        Args:
            submitter: Target that receives the final submission
            config: Timings and policy; defaults are used when omitted
            transitions: Step graph; the default graph is used when omitted
        """
        self.submitter = submitter
        self.config = config or AuditConfig()
        self.transitions = transitions or TransitionTable()

        self.step: Step = "intro"
        self.answers = AnswerSet()
        self.contact = ContactInfo()
        self.status: SubmissionStatus = "idle"
        self.error: str | None = None
        self.delivered: bool | None = None

        self.exit_pending = False
        self.celebrating = False
        self.splash = False

        self._celebration_fired = False
        self._generation = 0
        self._tasks: dict[str, asyncio.Task] = {}

    @property
    def accepts_input(self) -> bool:
        """User input is locked while the loading screen is shown."""
        return self.step != "loading"

    @property
    def is_question_step(self) -> bool:
        return self.step in QUESTION_STEPS

    @property
    def progress(self) -> tuple[int, int, float] | None:
        """(number, total, percent) on question steps, None elsewhere."""
        if not self.is_question_step:
            return None
        number = QUESTION_STEPS.index(self.step) + 1
        total = len(QUESTION_STEPS)
        return number, total, number / total * 100

    @property
    def phone_display(self) -> str:
        return format_phone_display(self.contact.phone)

    @property
    def current_question(self) -> Question | None:
        if not self.is_question_step:
            return None
        return get_question(self.step)

    @property
    def pending_tasks(self) -> list[str]:
        """Names of scheduled callbacks that have not fired yet."""
        return [name for name, task in self._tasks.items() if not task.done()]

    def can_advance(self, step: Step | None = None) -> bool:
        """Whether the Next control is enabled on a step.

        Args:
            step: Step to check, defaults to the current step
        """
        step = step or self.step
        if step == "loading" or not self.transitions.allows(step, "next"):
            return False

        if step in QUESTION_STEPS:
            question = get_question(step)
            if question.kind == "text":
                return True
            return self.answers.is_answered(question.id)

        if step == "contact":
            if self.status == "submitting":
                return False
            return contact_error(self.contact) is None

        return True

    def go_to(self, step: Step) -> None:
        """Jump to a step unconditionally and clear any error.

        Raises:
            ValueError: If the step is disabled in this flow
        """
        if step in DISABLED_STEPS:
            raise ValueError(f"Step {step!r} is disabled")

        previous = self.step
        self.step = step
        self.error = None

        if previous == "loading" and step != "loading":
            self._cancel("auto_advance")

        if step == "loading":
            self._schedule("auto_advance", self.config.loading_delay, self._auto_advance)

        if step == "contact" and not self._celebration_fired:
            self._celebration_fired = True
            self.celebrating = True
            self._schedule(
                "celebration", self.config.celebration_duration, self._end_celebration
            )

        logger.debug(f"Wizard step {previous} -> {step}")

    def advance(self) -> bool:
        """Move forward if the current step allows it.

        On the contact step this only proceeds once the submission has
        completed; use submit() to send it.

        Returns:
            True if the step changed
        """
        if not self.accepts_input:
            return False
        if self.step == "contact" and self.status != "submitted":
            return False
        if self.step != "contact" and not self.can_advance():
            return False

        target = self.transitions.target(self.step, "next")
        if target is None:
            return False
        self.go_to(target)
        return True

    def retreat(self) -> bool:
        """Move back one step. Returns True if the step changed."""
        if not self.accepts_input:
            return False
        target = self.transitions.target(self.step, "previous")
        if target is None:
            return False
        self.go_to(target)
        return True

    def skip(self) -> bool:
        """Skip the current question without validation."""
        if not self.accepts_input:
            return False
        target = self.transitions.target(self.step, "skip")
        if target is None:
            return False
        self.go_to(target)
        return True

    def _auto_advance(self) -> None:
        target = self.transitions.target(self.step, "timeout")
        if target is not None:
            self.go_to(target)

    def _end_celebration(self) -> None:
        self.celebrating = False

    def _question_for(self, kind: QuestionKind) -> Question:
        question = self.current_question
        if question is None or question.kind != kind:
            raise ValueError(f"Step {self.step!r} has no {kind} question")
        return question

    def select(self, value: str) -> bool:
        """Pick an option on the current single-select question."""
        if not self.accepts_input:
            return False
        question = self._question_for("single")
        self.answers.set_choice(question.id, value)
        return True

    def toggle_multi(self, value: str) -> bool:
        """Add or remove an option on the current multi-select question.

        A fourth selection is refused: the existing selections stay as they
        are and a user-visible error is set.

        Returns:
            False if the toggle was refused
        """
        if not self.accepts_input:
            return False
        question = self._question_for("multi")
        self.error = None
        if not self.answers.toggle(question.id, value):
            self.error = MAX_SELECTIONS_MESSAGE
            return False
        return True

    def set_text(self, value: str) -> bool:
        """Update the current free-text answer."""
        if not self.accepts_input:
            return False
        question = self._question_for("text")
        self.answers.set_text(question.id, value)
        return True

    def set_contact(
        self,
        first_name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        company: str | None = None,
    ) -> bool:
        """Update contact fields. Phone input keeps digits only, at most 10."""
        if not self.accepts_input:
            return False
        if first_name is not None:
            self.contact.first_name = first_name
        if email is not None:
            self.contact.email = email
        if phone is not None:
            self.contact.phone = phone_digits(phone)
        if company is not None:
            self.contact.company = company
        return True

    def set_consent(self, consent: bool) -> bool:
        if not self.accepts_input:
            return False
        self.contact.consent = consent
        return True

    async def submit(self) -> bool:
        """Validate the contact step and hand the submission off once.

        Validation stops at the first failing rule and surfaces its message.
        Calls made while a submission is in flight are ignored, and a
        completed submission is never sent again.

        Returns:
            True if the session moved on to the final step
        """
        if self.step != "contact":
            return False
        if self.status == "submitting":
            return False

        if self.status == "submitted":
            return self.advance()

        error = contact_error(self.contact)
        if error:
            self.error = error
            return False

        self.error = None
        self.status = "submitting"
        generation = self._generation
        payload = SubmissionPayload.capture(self.answers, self.contact)

        try:
            delivered = await self.submitter.submit(payload)
        except SubmissionError as e:
            if generation == self._generation:
                self.status = "error"
                self.error = e.message
            return False
        except Exception as e:
            logger.error(f"Submission failed unexpectedly: {e!r}")
            if generation == self._generation:
                self.status = "error"
                self.error = GENERIC_FAILURE_MESSAGE
            return False

        if generation != self._generation:
            # Session was reset while the request was in flight
            return False

        self.status = "submitted"
        self.delivered = delivered
        if not delivered:
            logger.info("Submission accepted but not delivered to the operator channel")

        if self.step != "contact":
            return False
        return self.advance()

    def request_exit(self) -> ExitOutcome:
        """Handle the Exit control.

        Returns:
            "leave" on the intro step (host navigates away, nothing reset),
            "confirm" when a confirmation is now pending,
            "ignored" where exit is not offered
        """
        if self.step == "intro":
            return "leave"
        if self.step in ("done", "loading"):
            return "ignored"
        self.exit_pending = True
        return "confirm"

    def cancel_exit(self) -> None:
        self.exit_pending = False

    def confirm_exit(self) -> None:
        """Discard all progress after the user confirmed exiting."""
        if self.exit_pending:
            self.reset()

    def reset(self) -> None:
        """Clear all state back to the intro step and cancel scheduled work."""
        for name in list(self._tasks):
            self._cancel(name)

        self._generation += 1
        self.step = "intro"
        self.answers.clear()
        self.contact = ContactInfo()
        self.status = "idle"
        self.error = None
        self.delivered = None
        self.exit_pending = False
        self.celebrating = False
        self.splash = False
        self._celebration_fired = False

    def start(self) -> None:
        """Show the opening splash for the configured duration."""
        self.splash = True
        self._schedule("splash", self.config.splash_duration, self._end_splash)

    def _end_splash(self) -> None:
        self.splash = False

    async def close(self) -> None:
        """Cancel every scheduled callback owned by this session."""
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def _schedule(self, name: str, delay: float, callback: Callable[[], None]) -> None:
        """Run callback once after delay seconds, replacing any task of the same name."""
        self._cancel(name)

        async def _run() -> None:
            await asyncio.sleep(delay)
            if self._tasks.get(name) is task:
                del self._tasks[name]
            callback()

        task = asyncio.create_task(_run(), name=f"wizard-{name}")
        self._tasks[name] = task

    def _cancel(self, name: str) -> None:
        task = self._tasks.pop(name, None)
        if task is not None and not task.done():
            task.cancel()
