# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""alive CLI."""

from __future__ import annotations

import argparse
import re
import sys
from dataclasses import replace
from itertools import islice
from pathlib import Path

from ..check import render_table
from ..config import CheckSettings, load_check_settings, parse_timeout_ms
from ..errors import AliveError, InputError
from ..log import setup_logging
from ..runtime import Alive

USAGE = """alive

usage:
  alive check <url> [url...] [timeoutms]
  alive file <path> [timeoutms]
  alive serve [port] [timeoutms]
"""

_DIGITS_RE = re.compile(r"[0-9]+")


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {raw!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {raw!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="alive", description="Concurrent HTTP/HTTPS reachability checks")
    commands = parser.add_subparsers(dest="command")

    check = commands.add_parser("check", help="Check URLs given on the command line")
    check.add_argument("targets", nargs="*", help="URLs to check, optionally followed by a timeout in milliseconds")
    check.add_argument("--workers", type=_positive_int, default=None, help="Maximum concurrent probes")

    file_cmd = commands.add_parser("file", help="Check URLs listed one per line in a file")
    file_cmd.add_argument("path", nargs="?", default=None, help="File of URLs; blank lines and # comments are skipped")
    file_cmd.add_argument("timeout", nargs="?", default=None, help="Timeout in milliseconds")
    file_cmd.add_argument("--workers", type=_positive_int, default=None, help="Maximum concurrent probes")

    serve = commands.add_parser("serve", help="Serve checks over HTTP")
    serve.add_argument("port", nargs="?", default=None, help="Port to listen on")
    serve.add_argument("timeout", nargs="?", default=None, help="Default timeout in milliseconds")

    commands.add_parser("help", help="Show usage")
    return parser


def split_targets(args: list[str], default_timeout: float) -> tuple[list[str], float]:
    """Split a trailing all-digit token off as a timeout override (returned in seconds)."""
    if not args:
        raise InputError("missing urls")
    timeout = default_timeout
    targets = list(args)
    last = targets[-1].strip()
    if _DIGITS_RE.fullmatch(last):
        timeout = parse_timeout_ms(last)
        targets = targets[:-1]
    if not targets:
        raise InputError("missing urls")
    return targets, timeout


def load_targets(path: str | Path) -> list[str]:
    """Read newline-delimited targets, skipping blanks and `#` comments; sorted and unique."""
    text = Path(path).read_text(encoding="utf-8")
    unique: set[str] = set()
    for line in text.splitlines():
        item = line.strip()
        if not item or item.startswith("#"):
            continue
        unique.add(item)
    return sorted(unique)


def _parse_port(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    text = raw.strip()
    if not _DIGITS_RE.fullmatch(text) or not 0 < int(text) < 65536:
        raise InputError(f"invalid port: {raw}")
    return int(text)


def _settings(args: argparse.Namespace) -> CheckSettings:
    settings = load_check_settings()
    workers = getattr(args, "workers", None)
    if workers is not None:
        settings = replace(settings, concurrency=workers)
    return settings


def _run_check(args: argparse.Namespace) -> int:
    settings = _settings(args)
    targets, timeout = split_targets(args.targets, settings.timeout)
    with Alive(settings=settings) as alive:
        outcomes = alive.check(targets, timeout)
    sys.stdout.write(render_table(outcomes))
    return 0


def _run_file(args: argparse.Namespace) -> int:
    if not args.path:
        raise InputError("missing file path")
    settings = _settings(args)
    timeout = settings.timeout if args.timeout is None else parse_timeout_ms(args.timeout)
    targets = load_targets(args.path)
    if not targets:
        raise InputError("no urls in file")
    with Alive(settings=settings) as alive:
        outcomes = alive.check(targets, timeout)
    sys.stdout.write(render_table(outcomes))
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    from ..server import serve

    settings = _settings(args)
    port = _parse_port(args.port, settings.port)
    if args.timeout is not None:
        settings = replace(settings, timeout_ms=round(parse_timeout_ms(args.timeout) * 1000))
    serve(replace(settings, port=port))
    return 0


_HANDLERS = {
    "check": _run_check,
    "file": _run_file,
    "serve": _run_serve,
}


def _positional_targets(tokens: list[str]) -> list[str]:
    """Put `check` options before a `--` so targets that start with `-` stay positional."""
    options: list[str] = []
    targets: list[str] = []
    items = iter(tokens)
    for token in items:
        if token in ("-h", "--help") or token.startswith("--workers="):
            options.append(token)
        elif token == "--workers":
            options.append(token)
            options.extend(islice(items, 1))
        elif token == "--":
            targets.extend(items)
        else:
            targets.append(token)
    return [*options, "--", *targets]


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    tokens = list(sys.argv[1:] if argv is None else argv)
    if not tokens or tokens[0] == "help":
        sys.stdout.write(USAGE)
        return 0

    mode = tokens[0]
    if mode not in _HANDLERS and not mode.startswith("-"):
        print(f"error: unknown mode: {mode}", file=sys.stderr)
        return 1
    if mode == "check":
        tokens = [mode, *_positional_targets(tokens[1:])]

    args = build_parser().parse_args(tokens)
    handler = _HANDLERS.get(args.command)
    if handler is None:
        sys.stdout.write(USAGE)
        return 0

    try:
        return handler(args)
    except (AliveError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
