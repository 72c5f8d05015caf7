"""
Tests for pure state transitions.
"""

import pytest
from datetime import datetime, timedelta, timezone

from barber_empire.models.ledger import (
    Expense,
    ExpenseFrequency,
    Goal,
    GoalCadence,
    PaymentChannel,
    Snapshot,
    Transaction,
    TransactionCategory,
)
from barber_empire.transitions import (
    AddExpense,
    AddTransaction,
    CompleteOnboarding,
    InvalidTransitionError,
    RemoveExpense,
    ResetAll,
    ResetDay,
    SetSimulatorValue,
    UpdateGoal,
    apply_command,
    next_id,
)


TZ = timezone(timedelta(hours=-5))
NOW = datetime(2024, 6, 12, 15, 0, tzinfo=TZ)


@pytest.fixture
def onboarded() -> Snapshot:
    return Snapshot(goal=Goal(name="The King", cadence="weekly", goal_amount=1500))


class TestOnboarding:
    """Tests for the onboarding transition."""

    def test_complete_onboarding(self):
        snapshot = apply_command(
            Snapshot.empty(),
            CompleteOnboarding(name="The King", cadence=GoalCadence.MONTHLY, goal_amount=6000),
        )
        assert snapshot.is_onboarded is True
        assert snapshot.goal.name == "The King"
        assert snapshot.goal.cadence == GoalCadence.MONTHLY
        assert snapshot.goal.goal_amount == 6000
        assert snapshot.goal.simulator_value == 0

    def test_onboarding_is_irreversible(self, onboarded):
        """Test a second onboarding is rejected."""
        with pytest.raises(InvalidTransitionError):
            apply_command(
                onboarded,
                CompleteOnboarding(name="Someone", cadence="weekly", goal_amount=1),
            )

    def test_onboarding_keeps_existing_log(self):
        before = Snapshot(transactions=[
            Transaction(id=1, amount=35, channel="cash", timestamp=NOW),
        ])
        after = apply_command(
            before, CompleteOnboarding(name="The King", cadence="weekly", goal_amount=100)
        )
        assert after.transactions == before.transactions


class TestGoalCommands:
    """Tests for goal and simulator updates."""

    def test_update_goal_partial(self, onboarded):
        """Test unspecified goal fields are kept."""
        after = apply_command(onboarded, UpdateGoal(goal_amount=2000))
        assert after.goal.goal_amount == 2000
        assert after.goal.name == "The King"
        assert after.goal.cadence == GoalCadence.WEEKLY

    def test_update_goal_all_fields(self, onboarded):
        after = apply_command(
            onboarded,
            UpdateGoal(name="Fade Master", cadence="monthly", goal_amount=0),
        )
        assert after.goal == Goal(name="Fade Master", cadence="monthly", goal_amount=0)

    def test_update_goal_keeps_simulator_value(self, onboarded):
        snapshot = apply_command(onboarded, SetSimulatorValue(value=7))
        after = apply_command(snapshot, UpdateGoal(name="Fade Master"))
        assert after.goal.simulator_value == 7

    def test_update_goal_requires_onboarding(self):
        with pytest.raises(InvalidTransitionError):
            apply_command(Snapshot.empty(), UpdateGoal(goal_amount=10))

    @pytest.mark.parametrize("value,expected", [(0, 0), (5, 5), (20, 20), (25, 20), (-3, 0)])
    def test_simulator_value_is_clamped(self, onboarded, value, expected):
        after = apply_command(onboarded, SetSimulatorValue(value=value))
        assert after.goal.simulator_value == expected

    def test_simulator_requires_onboarding(self):
        with pytest.raises(InvalidTransitionError):
            apply_command(Snapshot.empty(), SetSimulatorValue(value=5))


class TestTransactionCommands:
    """Tests for appending transactions."""

    def test_add_transaction(self, onboarded):
        after = apply_command(
            onboarded,
            AddTransaction(amount=35, channel=PaymentChannel.CARD, timestamp=NOW),
        )
        assert len(after.transactions) == 1
        txn = after.transactions[0]
        assert txn.id == 1
        assert txn.amount == 35
        assert txn.channel == PaymentChannel.CARD
        assert txn.category == TransactionCategory.SERVICE
        assert txn.timestamp == NOW

    def test_ids_are_monotonic(self, onboarded):
        """Test entries added in the same instant still get distinct ids."""
        snapshot = onboarded
        for _ in range(3):
            snapshot = apply_command(
                snapshot,
                AddTransaction(amount=10, channel="cash", category="tip", timestamp=NOW),
            )
        assert [t.id for t in snapshot.transactions] == [1, 2, 3]

    def test_input_snapshot_unchanged(self, onboarded):
        """Test a transition never modifies its input."""
        apply_command(onboarded, AddTransaction(amount=35, channel="cash", timestamp=NOW))
        assert onboarded.transactions == ()

    def test_add_transaction_rejects_zero(self):
        with pytest.raises(ValueError):
            AddTransaction(amount=0, channel="cash", timestamp=NOW)

    def test_next_id_after_gaps(self):
        expenses = [
            Expense(id=1, name="A", amount=1, frequency="daily"),
            Expense(id=5, name="B", amount=1, frequency="daily"),
        ]
        assert next_id(expenses) == 6
        assert next_id([]) == 1


class TestExpenseCommands:
    """Tests for adding and removing expenses."""

    def test_add_and_remove_expense(self, onboarded):
        snapshot = apply_command(
            onboarded, AddExpense(name="Chair Rental", amount=200, frequency="weekly")
        )
        snapshot = apply_command(
            snapshot, AddExpense(name="Supplies", amount=15, frequency=ExpenseFrequency.DAILY)
        )
        assert [e.id for e in snapshot.expenses] == [1, 2]

        snapshot = apply_command(snapshot, RemoveExpense(expense_id=1))
        assert [e.name for e in snapshot.expenses] == ["Supplies"]

    def test_ids_not_reused_after_remove(self, onboarded):
        snapshot = apply_command(onboarded, AddExpense(name="A", amount=1, frequency="daily"))
        snapshot = apply_command(snapshot, AddExpense(name="B", amount=1, frequency="daily"))
        snapshot = apply_command(snapshot, RemoveExpense(expense_id=1))
        snapshot = apply_command(snapshot, AddExpense(name="C", amount=1, frequency="daily"))
        assert [e.id for e in snapshot.expenses] == [2, 3]

    def test_remove_unknown_expense_is_noop(self, onboarded):
        after = apply_command(onboarded, RemoveExpense(expense_id=42))
        assert after == onboarded


class TestResets:
    """Tests for day and full resets."""

    def test_reset_day_removes_today_only(self, onboarded):
        snapshot = onboarded.model_copy(update={"transactions": (
            Transaction(id=1, amount=100, channel="cash", timestamp=NOW - timedelta(days=1)),
            Transaction(id=2, amount=35, channel="cash", timestamp=NOW.replace(hour=0, minute=0)),
            Transaction(id=3, amount=35, channel="card", timestamp=NOW.replace(hour=9)),
        )})
        after = apply_command(snapshot, ResetDay(now=NOW))
        assert [t.id for t in after.transactions] == [1]
        assert after.goal == onboarded.goal

    def test_reset_day_compares_instants(self, onboarded):
        # 04:30 UTC on the 12th is still the 11th at UTC-5
        yesterday_local = datetime(2024, 6, 12, 4, 30, tzinfo=timezone.utc)
        snapshot = onboarded.model_copy(update={"transactions": (
            Transaction(id=1, amount=100, channel="cash", timestamp=yesterday_local),
        )})
        after = apply_command(snapshot, ResetDay(now=NOW))
        assert len(after.transactions) == 1

    def test_reset_day_accepts_naive_now(self, onboarded):
        """Test a naive `now` is read as local time."""
        snapshot = onboarded.model_copy(update={"transactions": (
            Transaction(
                id=1,
                amount=100,
                channel="cash",
                timestamp=datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc),
            ),
            Transaction(id=2, amount=35, channel="cash", timestamp=datetime(2024, 6, 12, 9, 0)),
        )})
        command = ResetDay(now=datetime(2024, 6, 12, 15, 0))
        assert command.now.tzinfo is not None
        after = apply_command(snapshot, command)
        assert [t.id for t in after.transactions] == [1]

    def test_reset_all(self, onboarded):
        snapshot = apply_command(onboarded, AddExpense(name="A", amount=1, frequency="daily"))
        assert apply_command(snapshot, ResetAll()) == Snapshot.empty()

    def test_unknown_command(self):
        with pytest.raises(TypeError):
            apply_command(Snapshot.empty(), object())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
