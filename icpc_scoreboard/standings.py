"""ICPC standings engine (per-problem status, derived totals, tie-break order).

Single source of truth for ranking across flush/freeze/scroll/query:
- Comparator: more solved > less penalty > earlier slowest solves > name.
- Derived totals are recomputed from ProblemStatus, never patched in place.
- Frozen problems are invisible to the ranking until revealed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)

WRONG_ATTEMPT_PENALTY = 20
ACCEPTED = "Accepted"


def problem_letter(index: int) -> str:
    return chr(ord("A") + index)


def problem_index(letter: str) -> int:
    return ord(letter) - ord("A")


@dataclass
class ProblemStatus:
    wrong_before: int = 0
    solved: bool = False
    solved_time: int = -1
    is_frozen: bool = False
    submissions_after_freeze: int = 0

    @property
    def counts(self) -> bool:
        """True when the result is visible to the standings."""
        return self.solved and not self.is_frozen

    def token(self) -> str:
        """Scoreboard cell: '+', '+N', '-N', '.', or 'W/S' while frozen."""
        if self.is_frozen:
            return f"{self.wrong_before}/{self.submissions_after_freeze}"
        if self.solved:
            return "+" if self.wrong_before == 0 else f"+{self.wrong_before}"
        return "." if self.wrong_before == 0 else f"-{self.wrong_before}"


@dataclass(frozen=True)
class Submission:
    problem: int
    status: str
    time: int

    @property
    def accepted(self) -> bool:
        return self.status == ACCEPTED

    @property
    def letter(self) -> str:
        return problem_letter(self.problem)


@dataclass
class Team:
    name: str
    problems: list[ProblemStatus] = field(default_factory=list)
    submissions: list[Submission] = field(default_factory=list)
    solved_count: int = 0
    penalty_time: int = 0

    def reset_problems(self, problem_count: int) -> None:
        self.problems = [ProblemStatus() for _ in range(problem_count)]

    def visible_solve_times(self) -> list[int]:
        """Solve times of counted problems, slowest first."""
        return sorted(
            (status.solved_time for status in self.problems if status.counts),
            reverse=True,
        )

    def recompute(self) -> None:
        self.solved_count, self.penalty_time = compute_totals(self.problems)

    def frozen_problems(self) -> list[int]:
        return [idx for idx, status in enumerate(self.problems) if status.is_frozen]

    def submissions_for(self, index: int) -> list[Submission]:
        return [sub for sub in self.submissions if sub.problem == index]


@dataclass(frozen=True)
class RankingRow:
    team_name: str
    rank: int
    solved_count: int
    penalty_time: int
    cells: tuple[str, ...]

    def render(self) -> str:
        head = f"{self.team_name} {self.rank} {self.solved_count} {self.penalty_time}"
        if not self.cells:
            return head
        return f"{head} {' '.join(self.cells)}"


def compute_totals(problems: Iterable[ProblemStatus]) -> tuple[int, int]:
    """Return (solved_count, penalty_time) over visible solved problems."""
    solved = 0
    penalty = 0
    for status in problems:
        if not status.counts:
            continue
        solved += 1
        penalty += WRONG_ATTEMPT_PENALTY * status.wrong_before + status.solved_time
    return solved, penalty


def standings_key(team: Team) -> tuple:
    # Descending solve times compared with smaller-first, so plain tuple order works.
    return (
        -team.solved_count,
        team.penalty_time,
        tuple(team.visible_solve_times()),
        team.name,
    )


def compare_teams(a: Team, b: Team) -> int:
    """Three-way comparator: negative when ``a`` ranks ahead of ``b``."""
    if a.solved_count != b.solved_count:
        return -1 if a.solved_count > b.solved_count else 1
    if a.penalty_time != b.penalty_time:
        return -1 if a.penalty_time < b.penalty_time else 1
    for time_a, time_b in zip(a.visible_solve_times(), b.visible_solve_times()):
        if time_a != time_b:
            return -1 if time_a < time_b else 1
    if a.name != b.name:
        return -1 if a.name < b.name else 1
    return 0


def rank_teams(teams: Iterable[Team]) -> list[Team]:
    """Recompute every team and return them best first."""
    ordered = list(teams)
    for team in ordered:
        team.recompute()
    ordered.sort(key=standings_key)
    return ordered


def to_rows(ordered: Sequence[Team]) -> tuple[RankingRow, ...]:
    return tuple(
        RankingRow(
            team_name=team.name,
            rank=pos,
            solved_count=team.solved_count,
            penalty_time=team.penalty_time,
            cells=tuple(status.token() for status in team.problems),
        )
        for pos, team in enumerate(ordered, start=1)
    )


def render_scoreboard(ordered: Sequence[Team]) -> list[str]:
    return [row.render() for row in to_rows(ordered)]
