"""Operations pre-audit: wizard session, submission formatter and Telegram relay."""

from .config import AuditConfig, TelegramConfig
from .formatter import format_submission
from .models import AnswerSet, ContactInfo, SubmissionPayload
from .relay import RelayResult, TelegramRelay
from .session import WizardSession

__all__ = [
    "AnswerSet",
    "AuditConfig",
    "ContactInfo",
    "RelayResult",
    "SubmissionPayload",
    "TelegramConfig",
    "TelegramRelay",
    "WizardSession",
    "format_submission",
]
