"""Core contest state transitions (no I/O).

This module owns the live ICPC contest: team registration, submission
ingestion, flush/freeze/scroll of the scoreboard, and the two queries.

Architecture:
- ContestState is the single owner of every Team (name-keyed dict plus the
  registration-ordered list); nothing else mutates Team/ProblemStatus
- Operations on ContestState raise ContestError for precondition and lookup
  failures, and silently drop out-of-window submissions
- apply_command() takes (state, cmd) and returns a CommandOutcome carrying the
  protocol output lines, so callers never see exceptions
- Standings are materialized on demand by standings.rank_teams(); the last
  flush/freeze/scroll board is kept as a snapshot for QUERY_RANKING

Command types:
- ADDTEAM: Register a team (only before START)
- START: Fix problem count, size every team's problem list
- SUBMIT: Log a submission; update status unless frozen
- FLUSH: Recompute standings and store the snapshot
- FREEZE: Hide every unsolved problem until SCROLL
- SCROLL: Reveal frozen problems bottom-up, report overtakes
- QUERY_RANKING / QUERY_SUBMISSION: Read-only lookups
- END: Close the contest; the caller stops feeding commands
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .scroll import ScrollEngine, ScrollResult
from .standings import (
    ProblemStatus,
    Submission,
    Team,
    problem_index,
    rank_teams,
    render_scoreboard,
)
from .validation import ALL, InputSanitizer

logger = logging.getLogger(__name__)

MSG_ADD_OK = "[Info]Add successfully."
MSG_ADD_STARTED = "[Error]Add failed: competition has started."
MSG_ADD_DUPLICATE = "[Error]Add failed: duplicated team name."
MSG_START_OK = "[Info]Competition starts."
MSG_START_STARTED = "[Error]Start failed: competition has started."
MSG_FLUSH_OK = "[Info]Flush scoreboard."
MSG_FREEZE_OK = "[Info]Freeze scoreboard."
MSG_FREEZE_FROZEN = "[Error]Freeze failed: scoreboard has been frozen."
MSG_SCROLL_OK = "[Info]Scroll scoreboard."
MSG_SCROLL_NOT_FROZEN = "[Error]Scroll failed: scoreboard has not been frozen."
MSG_RANKING_OK = "[Info]Complete query ranking."
MSG_RANKING_UNKNOWN = "[Error]Query ranking failed: cannot find the team."
MSG_RANKING_FROZEN = (
    "[Warning]Scoreboard is frozen. The ranking may be inaccurate until it were scrolled."
)
MSG_SUBMISSION_OK = "[Info]Complete query submission."
MSG_SUBMISSION_UNKNOWN = "[Error]Query submission failed: cannot find the team."
MSG_SUBMISSION_NONE = "Cannot find any submission."
MSG_END_OK = "[Info]Competition ends."


class ContestError(ValueError):
    """Precondition or lookup failure reported back to the command issuer."""

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass
class ValidationError:
    """Represents a rejected command (pure core)."""

    kind: str
    message: str | None = None


@dataclass
class CommandOutcome:
    """Result of applying a protocol command."""

    lines: List[str]
    cmd_payload: Dict[str, Any]
    error: ValidationError | None = None
    stop: bool = False


@dataclass
class ContestState:
    teams: Dict[str, Team] = field(default_factory=dict)
    team_list: List[Team] = field(default_factory=list)
    started: bool = False
    ended: bool = False
    is_frozen: bool = False
    duration: int = 0
    problem_count: int = 0
    snapshot: Tuple[str, ...] | None = None

    @property
    def active(self) -> bool:
        return self.started and not self.ended

    def _require_team(self, name: str, kind: str, message: str) -> Team:
        team = self.teams.get(name)
        if team is None:
            raise ContestError(kind, message)
        return team

    def add_team(self, name: str) -> Team:
        if self.started:
            raise ContestError("already_started", MSG_ADD_STARTED)
        if name in self.teams:
            raise ContestError("duplicate_team", MSG_ADD_DUPLICATE)
        team = Team(name=name)
        self.teams[name] = team
        self.team_list.append(team)
        logger.debug(f"Registered team {name}")
        return team

    def start(self, duration: int, problem_count: int) -> None:
        if self.started:
            raise ContestError("already_started", MSG_START_STARTED)
        self.duration = duration
        self.problem_count = problem_count
        for team in self.team_list:
            team.reset_problems(problem_count)
        self.started = True
        logger.debug(
            f"Contest started: {len(self.team_list)} teams, {problem_count} problems, "
            f"duration {duration}"
        )

    def submit(self, problem: int, team_name: str, status: str, time: int) -> bool:
        """Ingest one submission; returns False when it was dropped."""
        team = self.teams.get(team_name)
        if not self.active or team is None or not 0 <= problem < self.problem_count:
            logger.debug(
                f"Dropped submission {team_name}/{problem} at {time} "
                f"(active={self.active})"
            )
            return False

        submission = Submission(problem=problem, status=status, time=time)
        team.submissions.append(submission)
        prob_status: ProblemStatus = team.problems[problem]

        if self.is_frozen:
            if not prob_status.solved:
                prob_status.submissions_after_freeze += 1
                prob_status.is_frozen = True
        elif not prob_status.solved:
            if submission.accepted:
                prob_status.solved = True
                prob_status.solved_time = time
            else:
                prob_status.wrong_before += 1
        return True

    def standings(self) -> List[Team]:
        return rank_teams(self.team_list)

    def _take_snapshot(self, ordered: List[Team]) -> None:
        self.snapshot = tuple(team.name for team in ordered)

    def flush(self) -> List[Team] | None:
        if not self.active:
            return None
        ordered = self.standings()
        self._take_snapshot(ordered)
        return ordered

    def freeze(self) -> bool:
        if not self.active:
            return False
        if self.is_frozen:
            raise ContestError("already_frozen", MSG_FREEZE_FROZEN)
        # Snapshot the pre-freeze board before hiding anything.
        self.flush()
        self.is_frozen = True
        for team in self.team_list:
            for prob_status in team.problems:
                if not prob_status.solved:
                    prob_status.is_frozen = True
        logger.debug("Scoreboard frozen")
        return True

    def scroll(self) -> ScrollResult | None:
        if not self.active:
            return None
        if not self.is_frozen:
            raise ContestError("not_frozen", MSG_SCROLL_NOT_FROZEN)
        result = ScrollEngine(self.team_list).run()
        self.is_frozen = False
        # The pre-reveal board stays the snapshot until the next FLUSH.
        self.snapshot = tuple(row.team_name for row in result.before)
        return result

    def query_ranking(self, team_name: str) -> int:
        """1-based position in the last snapshot (alphabetical without one)."""
        self._require_team(team_name, "unknown_team", MSG_RANKING_UNKNOWN)
        order = self.snapshot
        if order is None:
            order = tuple(sorted(self.teams))
        return order.index(team_name) + 1

    def query_submission(self, team_name: str, problem: str, status: str) -> Submission | None:
        team = self._require_team(team_name, "unknown_team", MSG_SUBMISSION_UNKNOWN)
        for sub in reversed(team.submissions):
            if problem != ALL and sub.letter != problem:
                continue
            if status != ALL and sub.status != status:
                continue
            return sub
        return None

    def end(self) -> bool:
        if not self.active:
            return False
        self.ended = True
        logger.debug("Contest ended")
        return True


def default_state() -> ContestState:
    """Create a fresh, not yet started contest."""
    return ContestState()


def _apply_transition(state: ContestState, cmd: Dict[str, Any]) -> List[str]:
    """Dispatch a validated command and collect its protocol output."""
    ctype = cmd["type"]
    lines: List[str] = []

    if ctype == "ADDTEAM":
        state.add_team(cmd["team"])
        lines.append(MSG_ADD_OK)

    elif ctype == "START":
        state.start(cmd["duration"], cmd["problem_count"])
        lines.append(MSG_START_OK)

    elif ctype == "SUBMIT":
        state.submit(problem_index(cmd["problem"]), cmd["team"], cmd["status"], cmd["time"])

    elif ctype == "FLUSH":
        if state.flush() is not None:
            lines.append(MSG_FLUSH_OK)

    elif ctype == "FREEZE":
        if state.freeze():
            lines.append(MSG_FREEZE_OK)

    elif ctype == "SCROLL":
        result = state.scroll()
        if result is not None:
            lines.append(MSG_SCROLL_OK)
            lines.extend(row.render() for row in result.before)
            lines.extend(change.render() for change in result.changes)
            lines.extend(row.render() for row in result.after)

    elif ctype == "QUERY_RANKING":
        rank = state.query_ranking(cmd["team"])
        lines.append(MSG_RANKING_OK)
        if state.is_frozen:
            lines.append(MSG_RANKING_FROZEN)
        lines.append(f"[{cmd['team']}] NOW AT RANKING [{rank}]")

    elif ctype == "QUERY_SUBMISSION":
        sub = state.query_submission(cmd["team"], cmd["problem"], cmd["status"])
        lines.append(MSG_SUBMISSION_OK)
        if sub is None:
            lines.append(MSG_SUBMISSION_NONE)
        else:
            lines.append(f"[{cmd['team']}] [{sub.letter}] [{sub.status}] [{sub.time}]")

    elif ctype == "END":
        if state.end():
            lines.append(MSG_END_OK)

    return lines


def apply_command(state: ContestState, cmd: Dict[str, Any]) -> CommandOutcome:
    """Apply one protocol command to the contest.

    Args:
        state: Contest to mutate in place
        cmd: Command dict with 'type' plus command-specific fields

    Returns:
        CommandOutcome with the output lines, the validated payload, the
        rejection (if any) and whether the caller should stop reading input
    """
    try:
        validated = InputSanitizer.validate_and_sanitize_cmd(dict(cmd))
    except ValueError as exc:
        # Malformed submissions are feed violations and stay silent.
        return CommandOutcome(
            lines=[],
            cmd_payload=dict(cmd),
            error=ValidationError(kind="invalid_command", message=str(exc)),
            stop=cmd.get("type") == "END",
        )

    payload = validated.model_dump(exclude_none=True)
    try:
        lines = _apply_transition(state, payload)
    except ContestError as exc:
        logger.debug(f"{payload['type']} rejected: {exc.kind}")
        return CommandOutcome(
            lines=[exc.message],
            cmd_payload=payload,
            error=ValidationError(kind=exc.kind, message=exc.message),
        )
    return CommandOutcome(lines=lines, cmd_payload=payload, stop=payload["type"] == "END")


def scoreboard_lines(state: ContestState) -> List[str]:
    """Render the live board (frozen cells shown as W/S)."""
    return render_scoreboard(state.standings())


__all__ = [
    "CommandOutcome",
    "ContestError",
    "ContestState",
    "ValidationError",
    "apply_command",
    "default_state",
    "scoreboard_lines",
]
