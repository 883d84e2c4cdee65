"""Type definitions for protocol commands."""
from __future__ import annotations

from typing import Optional, TypedDict


class CommandPayload(TypedDict, total=False):
    """
    TypedDict for command payloads sent to apply_command().

    Fields vary by command type; values may still be raw strings straight
    from the line protocol (validation coerces them).
    """
    # Common
    type: str

    # ADDTEAM / SUBMIT / QUERY_RANKING / QUERY_SUBMISSION
    team: Optional[str]

    # SUBMIT (letter) / QUERY_SUBMISSION (letter or ALL)
    problem: Optional[str]
    status: Optional[str]
    time: Optional[int | str]

    # START
    duration: Optional[int | str]
    problem_count: Optional[int | str]
