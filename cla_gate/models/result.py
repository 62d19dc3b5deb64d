from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from cla_gate.models.error import ErrorKind


class EvaluationResult(BaseModel):
    """Human commit authors and the subset of them missing from the allow-list."""

    authors: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.missing

    @property
    def kind(self) -> Optional[ErrorKind]:
        """MISSING_SIGNATURES for a failed result, None when it passed."""
        return None if self.passed else ErrorKind.MISSING_SIGNATURES

    def missing_output(self) -> str:
        return ", ".join(f"@{login}" for login in self.missing)

    def failure_message(self) -> str:
        return f"Missing CLA signatures for {len(self.missing)} contributor(s)"
