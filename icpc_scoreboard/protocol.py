"""Line protocol tokenizer.

Turns one text command into the dict consumed by apply_command():

    ADDTEAM name
    START DURATION d PROBLEM p        (or START d p)
    SUBMIT X BY team WITH verdict AT t
    FLUSH | FREEZE | SCROLL | END
    QUERY_RANKING team
    QUERY_SUBMISSION team WHERE PROBLEM=x AND STATUS=y

Values stay strings; ValidatedCmd coerces and checks them.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator

from .types import CommandPayload

logger = logging.getLogger(__name__)

_BARE = {"FLUSH", "FREEZE", "SCROLL", "END"}


def _expect(tokens: list[str], pos: int, keyword: str) -> None:
    if len(tokens) <= pos or tokens[pos] != keyword:
        raise ValueError(f"expected {keyword} at position {pos} in {' '.join(tokens)!r}")


def _filter_value(token: str, key: str) -> str:
    prefix = f"{key}="
    if not token.startswith(prefix):
        raise ValueError(f"expected {prefix}<value>, got {token!r}")
    return token[len(prefix):]


def parse_line(line: str) -> CommandPayload | None:
    """Parse one protocol line; returns None for blank lines.

    Raises:
        ValueError: unknown command keyword or wrong argument layout
    """
    tokens = line.split()
    if not tokens:
        return None
    ctype, args = tokens[0], tokens[1:]

    if ctype in _BARE:
        return {"type": ctype}

    if ctype in {"ADDTEAM", "QUERY_RANKING"}:
        if len(args) != 1:
            raise ValueError(f"{ctype} takes exactly one team name")
        return {"type": ctype, "team": args[0]}

    if ctype == "START":
        if len(args) == 4:
            _expect(args, 0, "DURATION")
            _expect(args, 2, "PROBLEM")
            return {"type": ctype, "duration": args[1], "problem_count": args[3]}
        if len(args) == 2 and args[0] != "DURATION":
            return {"type": ctype, "duration": args[0], "problem_count": args[1]}
        raise ValueError("START expects DURATION d PROBLEM p")

    if ctype == "SUBMIT":
        if len(args) != 7:
            raise ValueError("SUBMIT expects X BY team WITH verdict AT time")
        _expect(args, 1, "BY")
        _expect(args, 3, "WITH")
        _expect(args, 5, "AT")
        return {
            "type": ctype,
            "problem": args[0],
            "team": args[2],
            "status": args[4],
            "time": args[6],
        }

    if ctype == "QUERY_SUBMISSION":
        if len(args) != 5:
            raise ValueError("QUERY_SUBMISSION expects team WHERE PROBLEM=x AND STATUS=y")
        _expect(args, 1, "WHERE")
        _expect(args, 3, "AND")
        return {
            "type": ctype,
            "team": args[0],
            "problem": _filter_value(args[2], "PROBLEM"),
            "status": _filter_value(args[4], "STATUS"),
        }

    raise ValueError(f"unknown command {ctype!r}")


def iter_commands(lines: Iterable[str]) -> Iterator[CommandPayload]:
    """Yield parsed commands, skipping blank and malformed lines."""
    for lineno, line in enumerate(lines, start=1):
        try:
            cmd = parse_line(line)
        except ValueError as exc:
            logger.warning(f"Skipping line {lineno}: {exc}")
            continue
        if cmd is not None:
            yield cmd
