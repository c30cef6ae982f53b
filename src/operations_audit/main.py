"""Main entry point for the operations pre-audit service."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import AuditConfig
from .formatter import format_submission
from .models import AnswerSet, ContactInfo, SubmissionPayload


def run_server(config: AuditConfig, log_level: str = "info") -> None:
    """Serve the submission API until interrupted.

    Args:
        config: Loaded configuration (secrets already resolved)
        log_level: Log level for uvicorn
    """
    import uvicorn

    from .api import create_app

    if config.telegram.is_configured:
        print("Telegram relay configured")
    else:
        print("Warning: TELEGRAM_BOT_TOKEN or TELEGRAM_CHAT_ID not set; submissions will not be delivered")
    print(f"Delivery policy: {config.delivery_policy}")
    print(f"Submit API available at http://{config.host}:{config.port}/api/submit")

    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=log_level)


def preview(payload_path: str) -> str:
    """Render the notification text for a saved submission body.

    Args:
        payload_path: JSON file shaped like the POST /api/submit body

    Returns:
        The text that would be sent to the operator channel
    """
    data = json.loads(Path(payload_path).read_text()) or {}
    payload = SubmissionPayload.capture(
        AnswerSet.from_dict(data.get("answers") or {}),
        ContactInfo.from_dict(data.get("contact") or {}),
    )
    return format_submission(payload)


def cli() -> None:
    """Command-line interface entry point."""
    parser = argparse.ArgumentParser(
        description="Operations pre-audit - submission API and Telegram relay",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve the submit API
  operations-audit serve --config config/audit.yaml

  # Show what the operator would receive for a saved submission
  operations-audit preview submission.json

Environment variables:
  TELEGRAM_BOT_TOKEN  Bot token used in the sendMessage URL.
  TELEGRAM_CHAT_ID    Chat that receives submissions.
  Without both, submissions are accepted but not delivered.
"""
    )

    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Log level (default: info)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the submit API")
    serve_parser.add_argument(
        "--config",
        default="config/audit.yaml",
        help="Path to config file (default: config/audit.yaml)"
    )
    serve_parser.add_argument("--host", help="Bind address (overrides config)")
    serve_parser.add_argument("--port", type=int, help="Port (overrides config)")
    serve_parser.add_argument(
        "--policy",
        choices=["lenient", "strict"],
        help="Delivery failure policy (overrides config)"
    )

    preview_parser = subparsers.add_parser("preview", help="Print notification text for a payload")
    preview_parser.add_argument("payload", help="JSON file with answers and contact")

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    if args.command == "preview":
        try:
            print(preview(args.payload))
        except (OSError, ValueError) as e:
            print(f"Error: could not render {args.payload}: {e}")
            sys.exit(1)
        return

    config = AuditConfig.load(args.config)
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port
    if args.policy:
        config.delivery_policy = args.policy

    run_server(config, log_level=args.log_level)


if __name__ == "__main__":
    cli()
