"""Ship lines read from stdin to a Logs Data Platform stream.

    echo "hello OVH logs" | ovhlogs --protocol tls
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List, Sequence, TextIO

from .client import OvhLogs
from .config.loader import load_configuration
from .core.entry import Entry
from .core.errors import OvhLogsError
from .core.levels import ensure_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ovhlogs", description="Send stdin to an OVH logs stream as GELF entries.")
    parser.add_argument("--token", help="stream token (default: OVHLOGS_TOKEN)")
    parser.add_argument("--protocol", choices=["udp", "tcp", "tls"], help="transport protocol")
    parser.add_argument("--compression", choices=["none", "gzip", "zlib"], help="payload compression")
    parser.add_argument("--level", help="syslog level name or number for every entry")
    parser.add_argument("--host", help="value of the GELF host field")
    parser.add_argument("--endpoint", help="collector hostname")
    parser.add_argument("--all", action="store_true", dest="all_lines", help="send every line instead of the first")
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    client: Dict[str, Any] = {"async": False}
    if args.token:
        client["token"] = args.token
    if args.protocol:
        client["protocol"] = args.protocol
    if args.compression:
        client["compression"] = args.compression
    overrides: Dict[str, Any] = {"client": client}
    if args.endpoint:
        overrides["endpoint"] = {"host": args.endpoint}
    defaults: Dict[str, Any] = {}
    if args.host:
        defaults["host"] = args.host
    if args.level:
        defaults["level"] = args.level
    if defaults:
        overrides["defaults"] = defaults
    return overrides


def _lines(stream: TextIO, all_lines: bool) -> List[str]:
    if all_lines:
        return [line.rstrip("\r\n") for line in stream if line.strip()]
    # The first line goes out even when empty or missing.
    return [stream.readline().rstrip("\r\n")]


def main(argv: Sequence[str] | None = None, stdin: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        if args.level:
            ensure_level(args.level)
        client = OvhLogs(load_configuration(_overrides(args)))
    except (OvhLogsError, ValueError) as exc:
        print(f"ovhlogs: {exc}", file=sys.stderr)
        return 1

    level = client.config.defaults.level
    try:
        for line in _lines(stdin or sys.stdin, args.all_lines):
            client.send(Entry(full_message=line, level=level))
    except OvhLogsError as exc:
        print(f"ovhlogs: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
