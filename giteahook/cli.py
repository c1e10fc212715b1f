"""Command-line interface for working with Gitea webhook deliveries.

Commands:
- sign: print the X-Gitea-Signature value for a payload file
- verify: run a payload file through the verifier and print the decoded payload
"""

import argparse
import sys
from pathlib import Path

import structlog

from giteahook.webhooks.errors import WebhookError
from giteahook.webhooks.security import EVENT_HEADER, SIGNATURE_HEADER, generate_signature
from giteahook.webhooks.verifier import VerifierConfig, WebhookRequest, WebhookVerifier

logger = structlog.get_logger(__name__)


def sign_command(args: argparse.Namespace) -> int:
    """Print the signature Gitea would send for a payload file."""
    body = Path(args.file).read_bytes()
    print(generate_signature(body, args.secret))
    return 0


def verify_command(args: argparse.Namespace) -> int:
    """Verify and decode a payload file as if it had been delivered."""
    body = Path(args.file).read_bytes()

    headers = {EVENT_HEADER: args.event}
    if args.signature:
        headers[SIGNATURE_HEADER] = args.signature

    verifier = WebhookVerifier(VerifierConfig(secret=args.secret or None))
    events = args.events.split(",") if args.events else [args.event]

    try:
        payload = verifier.verify_and_decode(
            WebhookRequest.from_bytes("POST", headers, body),
            *events,
        )
    except WebhookError as e:
        logger.error("verification_failed", code=e.code, error=e.message)
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    print(payload.model_dump_json(indent=2, by_alias=True))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Gitea webhook tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Sign command
    sign_parser = subparsers.add_parser("sign", help="Compute a delivery signature")
    sign_parser.add_argument(
        "file",
        help="Path to the JSON payload",
    )
    sign_parser.add_argument(
        "--secret",
        required=True,
        help="Webhook secret",
    )

    # Verify command
    verify_parser = subparsers.add_parser("verify", help="Verify and decode a payload")
    verify_parser.add_argument(
        "file",
        help="Path to the JSON payload",
    )
    verify_parser.add_argument(
        "--event",
        required=True,
        help="Event kind, as sent in the X-Gitea-Event header",
    )
    verify_parser.add_argument(
        "--events",
        help="Comma-separated event kinds to accept (defaults to --event)",
    )
    verify_parser.add_argument(
        "--secret",
        help="Webhook secret (signature is not checked if omitted)",
    )
    verify_parser.add_argument(
        "--signature",
        help="Signature, as sent in the X-Gitea-Signature header",
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "sign":
        return sign_command(args)
    elif args.command == "verify":
        return verify_command(args)

    return 1


if __name__ == "__main__":
    sys.exit(main())
