from .contest import (
    CommandOutcome,
    ContestError,
    ContestState,
    ValidationError,
    apply_command,
    default_state,
    scoreboard_lines,
)
from .types import CommandPayload
from .validation import ALL, CommandLimits, InputSanitizer, ValidatedCmd
from .standings import (
    ACCEPTED,
    WRONG_ATTEMPT_PENALTY,
    ProblemStatus,
    RankingRow,
    Submission,
    Team,
    compare_teams,
    compute_totals,
    problem_index,
    problem_letter,
    rank_teams,
    render_scoreboard,
    standings_key,
)
from .scroll import RankChange, RevealStep, ScrollEngine, ScrollResult, reveal_problem
from .protocol import iter_commands, parse_line

__all__ = [
    "CommandOutcome",
    "CommandPayload",
    "ContestError",
    "ContestState",
    "ValidationError",
    "apply_command",
    "default_state",
    "scoreboard_lines",
    "ALL",
    "CommandLimits",
    "InputSanitizer",
    "ValidatedCmd",
    "ACCEPTED",
    "WRONG_ATTEMPT_PENALTY",
    "ProblemStatus",
    "RankingRow",
    "Submission",
    "Team",
    "compare_teams",
    "compute_totals",
    "problem_index",
    "problem_letter",
    "rank_teams",
    "render_scoreboard",
    "standings_key",
    "RankChange",
    "RevealStep",
    "ScrollEngine",
    "ScrollResult",
    "reveal_problem",
    "iter_commands",
    "parse_line",
]
