"""Freeze/scroll resolution (bottom-up reveal of frozen results).

The scroll repeatedly picks the lowest-ranked team that still has a frozen
problem, reveals its earliest frozen problem from the submission log, and
re-ranks the whole board. Every reveal that lifts the team records a
RankChange naming the team it overtook.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .standings import (
    RankingRow,
    Team,
    problem_letter,
    rank_teams,
    to_rows,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankChange:
    team_name: str
    passed_team_name: str
    solved_count: int
    penalty_time: int

    def render(self) -> str:
        return (
            f"{self.team_name} {self.passed_team_name} "
            f"{self.solved_count} {self.penalty_time}"
        )


@dataclass(frozen=True)
class RevealStep:
    team_name: str
    problem: int
    old_rank: int
    new_rank: int
    solved: bool


@dataclass(frozen=True)
class ScrollResult:
    before: tuple[RankingRow, ...]
    changes: tuple[RankChange, ...]
    steps: tuple[RevealStep, ...]
    after: tuple[RankingRow, ...]


def reveal_problem(team: Team, index: int) -> bool:
    """Resolve one frozen problem from the team's submission log.

    Returns True when the problem turns out solved.
    """
    status = team.problems[index]
    wrong = 0
    solved_time = None
    for sub in team.submissions_for(index):
        if sub.accepted:
            solved_time = sub.time
            break
        wrong += 1
    status.wrong_before = max(status.wrong_before, wrong)
    if solved_time is not None and not status.solved:
        status.solved = True
        status.solved_time = solved_time
    status.is_frozen = False
    status.submissions_after_freeze = 0
    return status.solved


def _next_reveal(ordered: Sequence[Team]) -> tuple[int, Team, int] | None:
    for pos in range(len(ordered) - 1, -1, -1):
        frozen = ordered[pos].frozen_problems()
        if frozen:
            return pos, ordered[pos], frozen[0]
    return None


class ScrollEngine:
    """Drive reveal + re-rank cycles over a frozen team list."""

    def __init__(self, teams: Sequence[Team]):
        self._teams = list(teams)

    def run(self) -> ScrollResult:
        ordered = rank_teams(self._teams)
        before = to_rows(ordered)
        changes: list[RankChange] = []
        steps: list[RevealStep] = []

        while True:
            pick = _next_reveal(ordered)
            if pick is None:
                break
            old_pos, team, index = pick
            solved = reveal_problem(team, index)
            reordered = rank_teams(ordered)
            new_pos = reordered.index(team)
            steps.append(
                RevealStep(
                    team_name=team.name,
                    problem=index,
                    old_rank=old_pos + 1,
                    new_rank=new_pos + 1,
                    solved=solved,
                )
            )
            if new_pos < old_pos:
                # The overtaken team held this position before the reveal.
                passed = ordered[new_pos]
                changes.append(
                    RankChange(
                        team_name=team.name,
                        passed_team_name=passed.name,
                        solved_count=team.solved_count,
                        penalty_time=team.penalty_time,
                    )
                )
                logger.debug(
                    f"Reveal {team.name}/{problem_letter(index)}: "
                    f"{old_pos + 1} -> {new_pos + 1}, passed {passed.name}"
                )
            ordered = reordered

        logger.debug(f"Scroll finished: {len(steps)} reveals, {len(changes)} changes")
        return ScrollResult(
            before=before,
            changes=tuple(changes),
            steps=tuple(steps),
            after=to_rows(ordered),
        )
