"""
Derived Models

Everything the engine hands to the presentation layer, plus the
validation result models used by the form validator. None of these are
persisted.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENGINE OUTPUTS
# =============================================================================

class DaySummary(BaseModel):
    """Takings for one local calendar day."""
    model_config = ConfigDict(frozen=True)

    day: date
    total: float = Field(ge=0)
    count: int = Field(ge=0)


class GoalProjection(BaseModel):
    """
    Progress towards the period goal and the pace still required.

    When goal_met is True the goal is crushed and units_needed_per_day is 0;
    the UI shows a distinct state instead of "0 cuts needed".
    """
    model_config = ConfigDict(frozen=True)

    progress_percent: float = Field(ge=0, le=100)
    remaining: float = Field(ge=0)
    units_needed_total: float = Field(ge=0)
    units_needed_per_day: int = Field(ge=0)
    days_remaining: int = Field(ge=1)
    goal_met: bool


class DashboardView(BaseModel):
    """Every figure the dashboard renders for one (Snapshot, now) pair."""
    model_config = ConfigDict(frozen=True)

    now: datetime
    day_start: datetime

    # Today
    gross_today: float
    tips_today: float
    services_today: float
    cash_today: float
    card_today: float
    transactions_today: int

    # Fixed costs
    daily_burn: float
    net_today: float
    burn_display: int = Field(description="Daily burn rounded up")
    net_display: int = Field(description="Net today rounded down")

    # Goal period
    period_start: Optional[datetime] = None
    period_total: float = 0.0
    days_remaining: Optional[int] = None
    projection: Optional[GoalProjection] = None

    # Price simulator
    simulator_increment: int = 0
    projected_yearly_gain: float = 0.0


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in user-entered form data."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'not_a_number', 'out_of_range')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """Outcome of validating one form submission."""

    form: str = Field(
        ...,
        description="Which form was validated"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    def messages(self) -> list[str]:
        return [issue.message for issue in self.issues]
