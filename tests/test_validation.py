"""
Tests for form input validation.
"""

import pytest
from datetime import datetime, timedelta, timezone

from barber_empire.models.ledger import (
    ExpenseFrequency,
    GoalCadence,
    PaymentChannel,
    TransactionCategory,
)
from barber_empire.transitions import (
    AddExpense,
    AddTransaction,
    CompleteOnboarding,
    UpdateGoal,
)
from barber_empire.validation import FormValidator, clamp_simulator_value


NOW = datetime(2024, 6, 12, 15, 0, tzinfo=timezone(timedelta(hours=-5)))


@pytest.fixture
def validator() -> FormValidator:
    return FormValidator()


def issue_types(result) -> list[str]:
    return [issue.issue_type for issue in result.issues]


class TestTransactionForm:
    """Tests for the cash/card/tip entry form."""

    def test_valid_entry(self, validator):
        command, result = validator.transaction_form("35.50", "card", NOW)
        assert result.is_valid
        assert isinstance(command, AddTransaction)
        assert command.amount == 35.5
        assert command.channel == PaymentChannel.CARD
        assert command.category == TransactionCategory.SERVICE
        assert command.timestamp == NOW

    def test_tip_entry(self, validator):
        command, _ = validator.transaction_form(" 10 ", PaymentChannel.CASH, NOW, category="tip")
        assert command.category == TransactionCategory.TIP

    def test_numeric_input_accepted(self, validator):
        command, _ = validator.transaction_form(20, "cash", NOW)
        assert command.amount == 20

    @pytest.mark.parametrize("raw,expected", [
        ("", "missing"),
        ("   ", "missing"),
        (None, "missing"),
        ("abc", "not_a_number"),
        ("12,50", "not_a_number"),
        ("nan", "not_a_number"),
        ("inf", "not_a_number"),
        ("0", "out_of_range"),
        ("-5", "out_of_range"),
    ])
    def test_rejected_amounts(self, validator, raw, expected):
        """Test unusable amounts never become a command."""
        command, result = validator.transaction_form(raw, "cash", NOW)
        assert command is None
        assert result.has_errors
        assert issue_types(result) == [expected]

    def test_unknown_channel(self, validator):
        command, result = validator.transaction_form("35", "bitcoin", NOW)
        assert command is None
        assert issue_types(result) == ["invalid_choice"]

    def test_collects_every_issue(self, validator):
        _, result = validator.transaction_form("", "cheque", NOW, category="product")
        assert result.error_count == 3


class TestExpenseForm:
    """Tests for the recurring expense form."""

    def test_valid_expense(self, validator):
        command, result = validator.expense_form(" Chair Rental ", "200", "weekly")
        assert result.is_valid
        assert isinstance(command, AddExpense)
        assert command.name == "Chair Rental"
        assert command.amount == 200
        assert command.frequency == ExpenseFrequency.WEEKLY

    def test_empty_name(self, validator):
        command, result = validator.expense_form("  ", "200", "weekly")
        assert command is None
        assert [i.field for i in result.issues] == ["name"]

    def test_name_too_long(self, validator):
        command, result = validator.expense_form("x" * 101, "200", "daily")
        assert command is None
        assert issue_types(result) == ["too_long"]

    def test_zero_cost_rejected(self, validator):
        command, result = validator.expense_form("Chair", "0", "daily")
        assert command is None
        assert issue_types(result) == ["out_of_range"]

    def test_unknown_frequency(self, validator):
        command, result = validator.expense_form("Chair", "10", "monthly")
        assert command is None
        assert issue_types(result) == ["invalid_choice"]


class TestGoalForms:
    """Tests for onboarding and settings forms."""

    def test_onboarding(self, validator):
        command, result = validator.onboarding_form("The King", "weekly", "1500")
        assert result.is_valid
        assert result.issues == []
        assert command == CompleteOnboarding(
            name="The King", cadence=GoalCadence.WEEKLY, goal_amount=1500
        )

    def test_zero_goal_allowed_with_warning(self, validator):
        """Test a zero goal passes but is flagged."""
        command, result = validator.onboarding_form("The King", "monthly", "0")
        assert command is not None
        assert command.goal_amount == 0
        assert result.is_valid
        assert issue_types(result) == ["degenerate"]
        assert result.issues[0].severity == "warning"

    def test_negative_goal_rejected(self, validator):
        command, result = validator.onboarding_form("The King", "monthly", "-100")
        assert command is None
        assert issue_types(result) == ["out_of_range"]

    def test_onboarding_requires_name_and_amount(self, validator):
        command, result = validator.onboarding_form("", "weekly", "")
        assert command is None
        assert sorted(i.field for i in result.issues) == ["goal_amount", "name"]

    def test_settings_form(self, validator):
        command, result = validator.settings_form("Fade Master", GoalCadence.MONTHLY, "6000")
        assert result.is_valid
        assert isinstance(command, UpdateGoal)
        assert command.name == "Fade Master"
        assert command.cadence == GoalCadence.MONTHLY
        assert command.goal_amount == 6000

    def test_settings_form_invalid_cadence(self, validator):
        command, result = validator.settings_form("Fade Master", "daily", "6000")
        assert command is None
        assert issue_types(result) == ["invalid_choice"]


class TestSimulatorClamp:
    """Tests for the price slider clamp."""

    @pytest.mark.parametrize("raw,expected", [
        (0, 0),
        (10, 10),
        (20, 20),
        (25, 20),
        (-1, 0),
        ("7", 7),
        (7.9, 7),
        ("abc", 0),
        (None, 0),
    ])
    def test_clamp(self, raw, expected):
        assert clamp_simulator_value(raw) == expected

    def test_custom_bounds(self):
        assert clamp_simulator_value(50, maximum=30) == 30

    def test_stored_value_above_configured_max(self):
        """Test a stored slider position is pulled into a lowered slider range."""
        assert clamp_simulator_value(15, maximum=10) == 10


class TestSummary:
    """Tests for the user-facing summary."""

    def test_summary_lists_errors(self, validator):
        _, result = validator.transaction_form("abc", "cash", NOW)
        summary = validator.get_user_friendly_summary(result)
        assert "'abc' is not a number" in summary
        assert "💡" in summary

    def test_summary_when_clean(self, validator):
        _, result = validator.expense_form("Chair", "10", "daily")
        assert validator.get_user_friendly_summary(result) == "✅ Looks good."


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
