"""Operations audit configuration loader."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import yaml

from .models import DeliveryPolicy

DELIVERY_POLICIES = ("lenient", "strict")


@dataclass
class TelegramConfig:
    """Credentials and endpoint for the operator notification channel."""

    bot_token: str | None = None
    chat_id: str | None = None
    api_base: str = "https://api.telegram.org"
    timeout: float = 10.0

    @property
    def is_configured(self) -> bool:
        """Both secrets present."""
        return bool(self.bot_token) and bool(self.chat_id)

    @property
    def send_message_url(self) -> str:
        return f"{self.api_base.rstrip('/')}/bot{self.bot_token}/sendMessage"


@dataclass
class AuditConfig:
    """Main configuration for the pre-audit service."""

    telegram: TelegramConfig = field(default_factory=TelegramConfig)

    # lenient: delivery failures still answer 200 {ok, sent: false}
    # strict: delivery failures answer 500 {ok: false, error}
    delivery_policy: DeliveryPolicy = "lenient"

    # Wizard timings, in seconds
    loading_delay: float = 5.0
    celebration_duration: float = 1.3
    splash_duration: float = 1.5

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.delivery_policy not in DELIVERY_POLICIES:
            raise ValueError(
                f"delivery_policy must be one of {DELIVERY_POLICIES}, "
                f"got {self.delivery_policy!r}"
            )

    @classmethod
    def load(
        cls,
        config_path: str = "config/audit.yaml",
        environ: Mapping[str, str] | None = None,
    ) -> "AuditConfig":
        """Load config from a YAML file and secrets from the environment.

        Args:
            config_path: Path to config file (relative or absolute)
            environ: Environment mapping, defaults to os.environ

        Returns:
            Loaded configuration
        """
        env = os.environ if environ is None else environ

        data: dict = {}
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                data = yaml.safe_load(f) or {}

        telegram_data = data.get("telegram", {}) or {}
        submit_data = data.get("submit", {}) or {}
        wizard_data = data.get("wizard", {}) or {}
        server_data = data.get("server", {}) or {}

        telegram = TelegramConfig(
            # Secrets are never read from the YAML file
            bot_token=env.get("TELEGRAM_BOT_TOKEN") or None,
            chat_id=env.get("TELEGRAM_CHAT_ID") or None,
            api_base=telegram_data.get("api_base", "https://api.telegram.org"),
            timeout=float(telegram_data.get("timeout", 10.0)),
        )

        return cls(
            telegram=telegram,
            delivery_policy=submit_data.get("delivery_policy", "lenient"),
            loading_delay=float(wizard_data.get("loading_delay", 5.0)),
            celebration_duration=float(wizard_data.get("celebration_duration", 1.3)),
            splash_duration=float(wizard_data.get("splash_duration", 1.5)),
            host=server_data.get("host", "0.0.0.0"),
            port=int(server_data.get("port", 3000)),
            cors_origins=list(server_data.get("cors_origins", []) or []),
        )
