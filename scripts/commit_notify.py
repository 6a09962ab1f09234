"""Push notification CLI invoked from the notifications workflow."""

from __future__ import annotations

import argparse
import json
import sys

from pydantic import ValidationError

from commit_notifier import __version__
from commit_notifier.config import NotifierSettings, SettingsError
from commit_notifier.delivery import DeliveryError, TelegramNotifier
from commit_notifier.git import GitRunner, GitRunnerError
from commit_notifier.message import render_message
from commit_notifier.notifier import (
    build_outputs,
    collect_record,
    configure_logging,
    create_notifier,
    create_runner,
    notify,
    should_notify,
    write_outputs,
)


def load_settings() -> NotifierSettings:
    return NotifierSettings()


def load_runner(settings: NotifierSettings) -> GitRunner:
    """Construct a GitRunner using the provided settings."""

    return create_runner(settings)


def load_notifier(settings: NotifierSettings) -> TelegramNotifier:
    """Construct the Telegram client; raises SettingsError without credentials."""

    return create_notifier(settings)


def cmd_outputs(args: argparse.Namespace, settings: NotifierSettings) -> int:
    try:
        runner = load_runner(settings)
        record = collect_record(settings, runner)
    except GitRunnerError as exc:
        print(f"git unavailable: {exc}", file=sys.stderr)
        return 1

    outputs = build_outputs(record)
    if args.json:
        print(json.dumps(outputs, indent=2))
    else:
        write_outputs(outputs, settings.github_output)
    return 0


def cmd_send(args: argparse.Namespace, settings: NotifierSettings) -> int:
    if args.dry_run:
        try:
            record = collect_record(settings, load_runner(settings))
        except GitRunnerError as exc:
            print(f"git unavailable: {exc}", file=sys.stderr)
            return 1
        print(render_message(record.decoded()))
        return 0

    if not should_notify(settings):
        return 0

    try:
        sender = load_notifier(settings)
        notify(settings, runner=load_runner(settings), sender=sender)
    except SettingsError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    except GitRunnerError as exc:
        print(f"git unavailable: {exc}", file=sys.stderr)
        return 1
    except DeliveryError as exc:
        print(f"Delivery failed: {exc}", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Send a Telegram notification describing the pushed commit."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    outputs = sub.add_parser("outputs", help="Emit git_stat, sha_short and git_branch step outputs")
    outputs.add_argument("--json", action="store_true", help="Print outputs as JSON instead")
    outputs.set_defaults(func=cmd_outputs)

    send = sub.add_parser("send", help="Render the message and deliver it")
    send.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the rendered message without delivering it",
    )
    send.set_defaults(func=cmd_send)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings()
    except ValidationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        raise SystemExit(1)
    configure_logging(settings.log_level)
    exit_code = args.func(args, settings)
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
