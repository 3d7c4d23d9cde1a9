"""
CLI 入口点

run：启动中继；check：离线检查一条消息能否分发以及将触发的下游操作。
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional

from consentrelay import __version__
from consentrelay.application.parsing import extract_consent, parse
from consentrelay.core.errors import ConfigError


def create_parser() -> argparse.ArgumentParser:
    """创建 CLI 参数解析器"""
    parser = argparse.ArgumentParser(
        prog="consent-relay",
        description="Relay consent-gated MTB files from Kafka to the registry",
    )

    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    run_parser = subparsers.add_parser("run", help="Consume and relay messages until interrupted")
    run_parser.add_argument("--config", "-c", help="YAML config file (environment variables take precedence)")

    check_parser = subparsers.add_parser("check", help="Check whether a message body can be dispatched")
    check_parser.add_argument("file", help="File holding the message body, or - for stdin")

    parser.add_argument("--version", "-v", action="store_true", help="显示版本")

    return parser


def _read_message(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as fh:
        return fh.read()


def check_message(raw: bytes) -> int:
    parsed = parse(raw)
    if not parsed.is_ok():
        print(f"not dispatchable: {parsed.error()}")
        return 1

    request = parsed.unwrap()
    consent = extract_consent(request.content)
    if not consent.is_ok():
        print(f"not dispatchable: {consent.error()}")
        return 1

    record = consent.unwrap()
    operation = "submit" if record.is_active else f"delete {record.subject_id}"
    print(f"dispatchable: request {request.request_id} -> {operation}")
    return 0


def _run(config_path: Optional[str]) -> int:
    from consentrelay.bootstrap import run_relay
    from consentrelay.config import load_settings
    from consentrelay.infrastructure.logging import configure_logging

    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level)
    try:
        asyncio.run(run_relay(settings))
    except KeyboardInterrupt:
        pass
    return 0


def run_cli(args: Optional[list] = None) -> int:
    """
    运行 CLI

    Args:
        args: 命令行参数（默认使用 sys.argv）

    Returns:
        退出码
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.version:
        print(f"consent-relay v{__version__}")
        return 0

    if parsed.command == "run":
        return _run(parsed.config)

    if parsed.command == "check":
        try:
            raw = _read_message(parsed.file)
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        return check_message(raw)

    parser.print_help()
    return 0


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
