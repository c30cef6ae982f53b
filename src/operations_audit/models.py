"""Data models for the operations pre-audit wizard."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from .validation import phone_digits


Step = Literal[
    "intro",
    "q1",
    "q2",
    "q3",
    "q4",
    "q5",
    "q6",
    "q7",
    "q8",
    "q9",
    "loading",
    "results",
    "contact",
    "final",
    "done",
]

Action = Literal[
    "next",  # Next / Unlock Results / Done
    "previous",
    "skip",
    "timeout",  # loading screen auto-advance
]

QuestionKind = Literal["single", "multi", "text"]

SubmissionStatus = Literal["idle", "submitting", "submitted", "error"]

DeliveryPolicy = Literal["lenient", "strict"]


STEPS: tuple[Step, ...] = (
    "intro",
    "q1",
    "q2",
    "q3",
    "q4",
    "q5",
    "q6",
    "q7",
    "q8",
    "q9",
    "loading",
    "results",
    "contact",
    "final",
    "done",
)

ACTIONS: tuple[Action, ...] = ("next", "previous", "skip", "timeout")

QUESTION_STEPS: tuple[Step, ...] = ("q1", "q2", "q3", "q4", "q5", "q6", "q7", "q8", "q9")

MAX_SELECTIONS = 3


@dataclass(frozen=True)
class Question:
    """A single question in the pre-audit."""

    id: str
    label: str  # Operator-facing label used in notifications
    prompt: str
    kind: QuestionKind = "single"
    options: tuple[str, ...] = ()


QUESTIONS: tuple[Question, ...] = (
    Question(
        id="q1",
        label="Operations setup",
        prompt="How would you describe your current operations setup?",
        options=(
            "Mostly manual, heavy human involvement",
            "Some systems in place, but they don’t talk to each other",
            "Fairly automated, but fragile or inconsistent",
            "Custom systems already in place",
            "Not sure",
        ),
    ),
    Question(
        id="q2",
        label="Inefficient areas",
        prompt="Which areas of your business feel the most inefficient right now?",
        kind="multi",
        options=(
            "Lead intake / inquiries",
            "Pricing or quoting",
            "Scheduling / logistics",
            "Internal admin or reporting",
            "Customer follow-ups",
            "Data scattered across tools",
            "Website or customer-facing systems",
        ),
    ),
    Question(
        id="q3",
        label="Custom tools",
        prompt="Do you currently rely on any custom tools or internal software?",
        options=(
            "No, mostly off-the-shelf tools",
            "Some custom logic (spreadsheets, scripts, automations)",
            "Yes, internal tools or custom software",
            "We’re currently building something",
        ),
    ),
    Question(
        id="q4",
        label="Pricing/quoting importance",
        prompt="How important is accurate pricing or quoting to your business?",
        options=(
            "Critical. Pricing mistakes cost us real money.",
            "Important, but mostly manual today",
            "Somewhat important",
            "Not relevant",
        ),
    ),
    Question(
        id="q5",
        label="When something breaks",
        prompt="When something breaks or needs improvement, how is it usually handled?",
        options=(
            "We patch it manually",
            "We rely on outside vendors",
            "We have internal technical help",
            "We usually leave it as-is",
        ),
    ),
    Question(
        id="q6",
        label="Ideal system (optional)",
        prompt="If the right system existed, what would you want it to do?",
        kind="text",
    ),
    Question(
        id="q7",
        label="Open to custom systems",
        prompt="Are you open to investing in custom systems if there is clear ROI?",
        options=("Yes", "Possibly, depending on scope", "Not at this time"),
    ),
    Question(
        id="q8",
        label="Company size",
        prompt="Roughly how big is your company today?",
        options=("1–5 people", "6–15 people", "16–50 people", "50+ people"),
    ),
    Question(
        id="q9",
        label="Revenue range",
        prompt=(
            "To help us understand scope, what revenue range best describes "
            "your business today?"
        ),
        options=(
            "Under $250k",
            "$250k–$1M",
            "$1M–$5M",
            "$5M–$10M",
            "$10M+",
            "Prefer not to answer",
        ),
    ),
)

QUESTIONS_BY_ID: dict[str, Question] = {q.id: q for q in QUESTIONS}


def get_question(question_id: str) -> Question:
    """Look up a question by id.

    Raises:
        KeyError: If the id is not part of the catalogue
    """
    return QUESTIONS_BY_ID[question_id]


AnswerValue = str | list[str]


class AnswerSet:
    """In-progress answers keyed by question id.

    Single-select and free-text answers are strings. The multi-select answer
    is a list kept in the order options were added and never longer than
    MAX_SELECTIONS.
    """

    def __init__(self) -> None:
        self._values: dict[str, AnswerValue] = {}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnswerSet):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"AnswerSet({self._values!r})"

    def get(self, question_id: str) -> AnswerValue | None:
        value = self._values.get(question_id)
        if isinstance(value, list):
            return list(value)
        return value

    def selections(self, question_id: str) -> list[str]:
        """Current multi-select values, in selection order."""
        value = self._values.get(question_id)
        return list(value) if isinstance(value, list) else []

    def set_choice(self, question_id: str, value: str) -> None:
        """Set a single-select answer.

        Raises:
            ValueError: If the question is not single-select or the option is unknown
        """
        question = get_question(question_id)
        if question.kind != "single":
            raise ValueError(f"{question_id} is not a single-select question")
        if value not in question.options:
            raise ValueError(f"Unknown option for {question_id}: {value!r}")
        self._values[question_id] = value

    def set_text(self, question_id: str, value: str) -> None:
        question = get_question(question_id)
        if question.kind != "text":
            raise ValueError(f"{question_id} is not a free-text question")
        self._values[question_id] = value

    def toggle(self, question_id: str, value: str) -> bool:
        """Add or remove a multi-select value.

        Returns:
            False if adding would exceed MAX_SELECTIONS (nothing changes),
            True otherwise
        """
        question = get_question(question_id)
        if question.kind != "multi":
            raise ValueError(f"{question_id} is not a multi-select question")

        current = self.selections(question_id)
        if value in current:
            current.remove(value)
        elif len(current) >= MAX_SELECTIONS:
            return False
        else:
            current.append(value)
        self._values[question_id] = current
        return True

    def is_answered(self, question_id: str) -> bool:
        return bool(self._values.get(question_id))

    def clear(self) -> None:
        self._values.clear()

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire shape: every question id, empty when unset."""
        result: dict[str, Any] = {}
        for question in QUESTIONS:
            if question.kind == "multi":
                result[question.id] = self.selections(question.id)
            else:
                result[question.id] = self._values.get(question.id, "")
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnswerSet":
        """Build from a wire mapping.

        Unknown keys are ignored. Values are taken as sent (no option
        checking) since they arrive from a client that already rendered
        the options.

        Raises:
            ValueError: If a value is neither a string nor a list, or a
                multi-select answer holds more than MAX_SELECTIONS values
        """
        answers = cls()
        for question in QUESTIONS:
            value = data.get(question.id)
            if value is None:
                continue
            if not isinstance(value, (str, list)):
                raise ValueError(f"{question.id} must be a string or a list of strings")
            if question.kind == "multi":
                items = [value] if isinstance(value, str) else [str(v) for v in value]
                selections = list(dict.fromkeys(i for i in items if i))
                if len(selections) > MAX_SELECTIONS:
                    raise ValueError(
                        f"{question.id} allows at most {MAX_SELECTIONS} selections"
                    )
                answers._values[question.id] = selections
            elif isinstance(value, list):
                answers._values[question.id] = ", ".join(str(v) for v in value)
            else:
                answers._values[question.id] = value
        return answers


@dataclass
class ContactInfo:
    """Contact details captured on the contact step."""

    first_name: str = ""
    email: str = ""
    phone: str = ""  # Digits only, at most 10
    company: str = ""
    consent: bool = False

    def __post_init__(self) -> None:
        self.phone = phone_digits(self.phone)

    def to_dict(self) -> dict[str, str]:
        """Convert to the wire shape (consent is not transmitted)."""
        return {
            "firstName": self.first_name,
            "email": self.email,
            "phone": self.phone,
            "company": self.company,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContactInfo":
        return cls(
            first_name=str(data.get("firstName") or ""),
            email=str(data.get("email") or ""),
            phone=str(data.get("phone") or ""),
            company=str(data.get("company") or ""),
        )


@dataclass(frozen=True)
class SubmissionPayload:
    """Immutable snapshot of a completed pre-audit."""

    answers: dict[str, Any] = field(default_factory=dict)
    contact: dict[str, str] = field(default_factory=dict)

    @classmethod
    def capture(cls, answers: AnswerSet, contact: ContactInfo) -> "SubmissionPayload":
        """Snapshot the live session state."""
        return cls(answers=answers.to_dict(), contact=contact.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {"answers": self.answers, "contact": self.contact}
