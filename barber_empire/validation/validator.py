"""
Form Input Validation

DESIGN DECISION: Raw form input is validated HERE, before it becomes a
Command. The engine assumes well-typed, already-validated values and
never raises on its own, so anything a user can type wrong must be caught
at this boundary.

Rules follow the dashboard forms:
- empty name or amount: rejected
- non-numeric amount: rejected
- transaction and expense amounts must be positive
- a goal amount of 0 is accepted (the projector treats it as met)

IMPORTANT: Validation NEVER silently fixes input, except for the price
slider, whose position is clamped to its range.
"""

import math
from datetime import datetime
from typing import Any, Optional

from barber_empire.models.ledger import (
    SIMULATOR_MAX,
    SIMULATOR_MIN,
    ExpenseFrequency,
    GoalCadence,
    PaymentChannel,
    TransactionCategory,
)
from barber_empire.models.views import ValidationIssue, ValidationResult
from barber_empire.transitions import (
    AddExpense,
    AddTransaction,
    CompleteOnboarding,
    UpdateGoal,
)


MAX_NAME_LENGTH = 100


def clamp_simulator_value(
    raw: Any,
    minimum: int = SIMULATOR_MIN,
    maximum: int = SIMULATOR_MAX,
) -> int:
    """Slider position as an int within [minimum, maximum]."""
    try:
        value = int(float(raw))
    except (TypeError, ValueError, OverflowError):
        return minimum
    return max(minimum, min(maximum, value))


class FormValidator:
    """
    Turns raw form values into Commands.

    Every public method returns (command, result). The command is None
    whenever the result has errors.
    """

    def _parse_amount(
        self,
        field: str,
        raw: Any,
        issues: list[ValidationIssue],
        allow_zero: bool = False,
    ) -> Optional[float]:
        """Parse a user-typed amount, recording an issue if it is unusable."""
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            issues.append(ValidationIssue(
                field=field,
                issue_type="missing",
                message="Amount is required",
                suggested_fix="Enter an amount",
            ))
            return None

        try:
            value = float(raw.strip() if isinstance(raw, str) else raw)
        except (TypeError, ValueError):
            value = math.nan

        if not math.isfinite(value):
            issues.append(ValidationIssue(
                field=field,
                issue_type="not_a_number",
                message=f"'{raw}' is not a number",
                suggested_fix="Enter digits only, e.g. 35 or 35.50",
            ))
            return None

        if value < 0 or (value == 0 and not allow_zero):
            bound = "zero or more" if allow_zero else "greater than zero"
            issues.append(ValidationIssue(
                field=field,
                issue_type="out_of_range",
                message=f"Amount must be {bound}",
            ))
            return None

        return value

    def _parse_name(
        self,
        field: str,
        raw: Any,
        issues: list[ValidationIssue],
    ) -> Optional[str]:
        name = raw.strip() if isinstance(raw, str) else ""
        if not name:
            issues.append(ValidationIssue(
                field=field,
                issue_type="missing",
                message="Name is required",
            ))
            return None
        if len(name) > MAX_NAME_LENGTH:
            issues.append(ValidationIssue(
                field=field,
                issue_type="too_long",
                message=f"Name must be at most {MAX_NAME_LENGTH} characters",
            ))
            return None
        return name

    def _parse_choice(
        self,
        field: str,
        raw: Any,
        choices: type,
        issues: list[ValidationIssue],
    ):
        try:
            return choices(raw)
        except ValueError:
            allowed = ", ".join(c.value for c in choices)
            issues.append(ValidationIssue(
                field=field,
                issue_type="invalid_choice",
                message=f"'{raw}' is not one of: {allowed}",
            ))
            return None

    def transaction_form(
        self,
        raw_amount: Any,
        channel: Any,
        now: datetime,
        category: Any = TransactionCategory.SERVICE,
    ) -> tuple[Optional[AddTransaction], ValidationResult]:
        """Validate a cash/card/tip entry stamped at `now`."""
        issues: list[ValidationIssue] = []

        amount = self._parse_amount("amount", raw_amount, issues)
        parsed_channel = self._parse_choice("channel", channel, PaymentChannel, issues)
        parsed_category = self._parse_choice(
            "category",
            TransactionCategory.SERVICE if category is None else category,
            TransactionCategory,
            issues,
        )

        result = ValidationResult(form="transaction", issues=issues)
        if result.has_errors:
            return None, result

        return AddTransaction(
            amount=amount,
            channel=parsed_channel,
            category=parsed_category,
            timestamp=now,
        ), result

    def expense_form(
        self,
        raw_name: Any,
        raw_amount: Any,
        frequency: Any,
    ) -> tuple[Optional[AddExpense], ValidationResult]:
        """Validate a new recurring expense."""
        issues: list[ValidationIssue] = []

        name = self._parse_name("name", raw_name, issues)
        amount = self._parse_amount("amount", raw_amount, issues)
        parsed_frequency = self._parse_choice("frequency", frequency, ExpenseFrequency, issues)

        result = ValidationResult(form="expense", issues=issues)
        if result.has_errors:
            return None, result

        return AddExpense(
            name=name,
            amount=amount,
            frequency=parsed_frequency,
        ), result

    def _goal_fields(
        self,
        raw_name: Any,
        cadence: Any,
        raw_amount: Any,
        issues: list[ValidationIssue],
    ) -> tuple[Optional[str], Optional[GoalCadence], Optional[float]]:
        name = self._parse_name("name", raw_name, issues)
        parsed_cadence = self._parse_choice("cadence", cadence, GoalCadence, issues)
        amount = self._parse_amount("goal_amount", raw_amount, issues, allow_zero=True)

        if amount == 0:
            issues.append(ValidationIssue(
                field="goal_amount",
                issue_type="degenerate",
                message="A goal of 0 is always reached",
                severity="warning",
            ))
        return name, parsed_cadence, amount

    def onboarding_form(
        self,
        raw_name: Any,
        cadence: Any,
        raw_amount: Any,
    ) -> tuple[Optional[CompleteOnboarding], ValidationResult]:
        """Validate the first-run setup form."""
        issues: list[ValidationIssue] = []
        name, parsed_cadence, amount = self._goal_fields(raw_name, cadence, raw_amount, issues)

        result = ValidationResult(form="onboarding", issues=issues)
        if result.has_errors:
            return None, result

        return CompleteOnboarding(
            name=name,
            cadence=parsed_cadence,
            goal_amount=amount,
        ), result

    def settings_form(
        self,
        raw_name: Any,
        cadence: Any,
        raw_amount: Any,
    ) -> tuple[Optional[UpdateGoal], ValidationResult]:
        """Validate the goal settings form. All three fields are required."""
        issues: list[ValidationIssue] = []
        name, parsed_cadence, amount = self._goal_fields(raw_name, cadence, raw_amount, issues)

        result = ValidationResult(form="settings", issues=issues)
        if result.has_errors:
            return None, result

        return UpdateGoal(
            name=name,
            cadence=parsed_cadence,
            goal_amount=amount,
        ), result

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """One line per issue, errors first."""
        if not result.issues:
            return "✅ Looks good."

        lines = []
        for issue in sorted(result.issues, key=lambda i: i.severity != "error"):
            icon = "❌" if issue.severity == "error" else "⚠️"
            lines.append(f"{icon} {issue.message}")
            if issue.suggested_fix:
                lines.append(f"   💡 {issue.suggested_fix}")
        return "\n".join(lines)
