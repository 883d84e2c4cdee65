"""
Input validation schemas using Pydantic v2
Validates parsed protocol commands before they reach the contest state
"""

import logging
import re
from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

ALL = "ALL"

COMMAND_TYPES = {
    "ADDTEAM",
    "START",
    "SUBMIT",
    "FLUSH",
    "FREEZE",
    "SCROLL",
    "QUERY_RANKING",
    "QUERY_SUBMISSION",
    "END",
}

_TEAM_NAME_RE = re.compile(r"^[^\s\x00-\x1f\x7f]+$")
_PROBLEM_RE = re.compile(r"^[A-Z]$")


class CommandLimits:
    """Bounds applied to protocol input"""

    MAX_PROBLEMS = 26


# ==================== VALIDATOR FUNCTIONS ====================


class ValidatedCmd(BaseModel):
    """Parsed protocol command with per-type field checks"""

    type: str = Field(..., min_length=1, max_length=20, description="Command type")

    team: Optional[str] = Field(None, min_length=1, description="Team name")
    problem: Optional[str] = Field(None, description="Problem letter or ALL")
    status: Optional[str] = Field(None, min_length=1, description="Verdict or ALL")
    time: Optional[int] = Field(None, ge=0, description="Submission timestamp")

    # START fields
    duration: Optional[int] = Field(None, ge=0)
    problem_count: Optional[int] = Field(
        None, ge=1, le=CommandLimits.MAX_PROBLEMS, description="Number of problems"
    )

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Validate command type is one of allowed types"""
        if v not in COMMAND_TYPES:
            raise ValueError(f"type must be one of {sorted(COMMAND_TYPES)}, got {v}")
        return v

    @field_validator("team")
    @classmethod
    def validate_team_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not _TEAM_NAME_RE.match(v):
            raise ValueError("team name must not contain whitespace or control characters")
        return v

    @field_validator("problem")
    @classmethod
    def validate_problem(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == ALL:
            return v
        if not _PROBLEM_RE.match(v):
            raise ValueError(f"problem must be a single letter A-Z or {ALL}, got {v}")
        return v

    @model_validator(mode="after")
    def validate_command_fields(self) -> Self:
        """Validate required fields based on command type"""
        cmd_type = self.type

        if cmd_type in {"ADDTEAM", "QUERY_RANKING"}:
            if self.team is None:
                raise ValueError(f"{cmd_type} requires team")

        elif cmd_type == "START":
            if self.problem_count is None:
                raise ValueError("START requires problem_count")
            if self.duration is None:
                raise ValueError("START requires duration")

        elif cmd_type == "SUBMIT":
            if self.team is None or self.problem is None:
                raise ValueError("SUBMIT requires team and problem")
            if self.problem == ALL:
                raise ValueError("SUBMIT problem must be a letter")
            if self.status is None or self.status == ALL:
                raise ValueError("SUBMIT requires a verdict")
            if self.time is None:
                raise ValueError("SUBMIT requires time")

        elif cmd_type == "QUERY_SUBMISSION":
            if self.team is None:
                raise ValueError("QUERY_SUBMISSION requires team")
            if self.problem is None or self.status is None:
                raise ValueError("QUERY_SUBMISSION requires problem and status filters")

        return self

    model_config = ConfigDict(extra="forbid")


class InputSanitizer:
    """Utility class for input sanitization"""

    @staticmethod
    def sanitize_string(value: str, max_length: int | None = None) -> str:
        """Sanitize string input (truncate only when max_length is given)"""
        if not isinstance(value, str):
            value = str(value)

        value = value.strip()
        if max_length is not None:
            value = value[:max_length]
        value = value.replace("\0", "")

        return value

    @staticmethod
    def validate_and_sanitize_cmd(cmd_dict: dict) -> ValidatedCmd:
        """
        Validate and sanitize command dictionary

        Returns:
            ValidatedCmd: Validated command object

        Raises:
            ValueError: If validation fails
        """
        cleaned = {
            key: InputSanitizer.sanitize_string(value) if isinstance(value, str) else value
            for key, value in cmd_dict.items()
        }
        try:
            return ValidatedCmd(**cleaned)
        except Exception as e:
            logger.warning(f"Command validation failed: {e}")
            raise ValueError(f"Invalid command: {str(e)}")


# ==================== EXPORT ====================

__all__ = [
    "ALL",
    "COMMAND_TYPES",
    "CommandLimits",
    "ValidatedCmd",
    "InputSanitizer",
]
