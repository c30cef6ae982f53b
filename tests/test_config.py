import pytest

from operations_audit.config import AuditConfig, TelegramConfig


def test_load_missing_file_uses_defaults(tmp_path) -> None:
    config = AuditConfig.load(str(tmp_path / "missing.yaml"), environ={})

    assert config.delivery_policy == "lenient"
    assert config.loading_delay == 5.0
    assert config.telegram.is_configured is False


def test_secrets_come_from_environment(tmp_path) -> None:
    config = AuditConfig.load(
        str(tmp_path / "missing.yaml"),
        environ={"TELEGRAM_BOT_TOKEN": "123:abc", "TELEGRAM_CHAT_ID": "-10042"},
    )

    assert config.telegram.is_configured is True
    assert config.telegram.send_message_url == "https://api.telegram.org/bot123:abc/sendMessage"


def test_empty_secret_counts_as_missing(tmp_path) -> None:
    config = AuditConfig.load(
        str(tmp_path / "missing.yaml"),
        environ={"TELEGRAM_BOT_TOKEN": "123:abc", "TELEGRAM_CHAT_ID": ""},
    )
    assert config.telegram.chat_id is None
    assert config.telegram.is_configured is False


def test_load_yaml(tmp_path) -> None:
    path = tmp_path / "audit.yaml"
    path.write_text(
        "telegram:\n"
        "  api_base: http://relay.local/\n"
        "  timeout: 3\n"
        "submit:\n"
        "  delivery_policy: strict\n"
        "wizard:\n"
        "  loading_delay: 0.5\n"
        "server:\n"
        "  port: 8123\n"
        "  cors_origins: [\"https://example.com\"]\n"
    )

    config = AuditConfig.load(str(path), environ={"TELEGRAM_BOT_TOKEN": "t", "TELEGRAM_CHAT_ID": "c"})

    assert config.delivery_policy == "strict"
    assert config.loading_delay == 0.5
    assert config.celebration_duration == 1.3
    assert config.port == 8123
    assert config.cors_origins == ["https://example.com"]
    assert config.telegram.timeout == 3.0
    assert config.telegram.send_message_url == "http://relay.local/bott/sendMessage"


def test_yaml_secrets_are_ignored(tmp_path) -> None:
    path = tmp_path / "audit.yaml"
    path.write_text("telegram:\n  bot_token: leaked\n  chat_id: '1'\n")

    config = AuditConfig.load(str(path), environ={})
    assert config.telegram.bot_token is None


def test_invalid_policy_raises(tmp_path) -> None:
    path = tmp_path / "audit.yaml"
    path.write_text("submit:\n  delivery_policy: sometimes\n")

    with pytest.raises(ValueError):
        AuditConfig.load(str(path), environ={})


def test_telegram_config_requires_both_secrets() -> None:
    assert TelegramConfig(bot_token="t").is_configured is False
    assert TelegramConfig(chat_id="c").is_configured is False
    assert TelegramConfig(bot_token="t", chat_id="c").is_configured is True
