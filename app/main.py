"""
Streamlit Frontend for Barber Empire

The dashboard a barber keeps open between clients.

DESIGN PRINCIPLES:
1. One tap to log money in
2. Every figure comes from LedgerService.dashboard()
3. Forms go through FormValidator; nothing unvalidated reaches the ledger
4. Destructive resets ask for confirmation
"""

import streamlit as st

from barber_empire.models.ledger import (
    ExpenseFrequency,
    GoalCadence,
    PaymentChannel,
    TransactionCategory,
)
from barber_empire.models.views import DashboardView
from barber_empire.orchestrator import LedgerService, create_app_components
from barber_empire.transitions import RemoveExpense, SetSimulatorValue
from barber_empire.validation import FormValidator, clamp_simulator_value


# Page configuration
st.set_page_config(
    page_title="Barber Empire",
    page_icon="💈",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 6px;
    }
    .big-number {
        font-size: 3em;
        font-weight: bold;
        color: #ffffff;
    }
    .gold {
        color: #D4AF37;
    }
    .burn {
        color: #ff4444;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_service() -> LedgerService:
    """Get or create the ledger service (cached)."""
    try:
        return create_app_components(use_storage=True)
    except Exception as e:
        st.error(f"Failed to open local storage: {e}")
        return create_app_components(use_storage=False)


def show_validation(validator: FormValidator, result) -> None:
    if result.has_errors:
        st.error(validator.get_user_friendly_summary(result))
    elif result.issues:
        st.warning(validator.get_user_friendly_summary(result))


def main():
    """Main application entry point."""
    service = get_service()
    validator = FormValidator()

    snapshot = service.snapshot()
    if not snapshot.is_onboarded:
        render_onboarding(service, validator)
        return

    view = service.dashboard()

    st.caption("WELCOME")
    st.title(snapshot.goal.name.upper())

    render_today(service, validator, view)
    render_goal(view)
    render_expenses(service, validator, view)
    render_simulator(service, view)

    with st.expander("📅 Earnings History"):
        render_history(service)
    with st.expander("⚙️ Settings"):
        render_settings(service, validator)
    with st.expander("🧨 Reset"):
        render_reset(service)


def render_onboarding(service: LedgerService, validator: FormValidator):
    """First-run setup: name and goal."""
    st.title("💈 Barber Empire")
    st.markdown("Set up your financial command center.")

    with st.form("onboarding"):
        name = st.text_input("Your Name / Nickname", placeholder="Ex: The King")
        cadence = st.radio(
            "Goal Type",
            options=list(GoalCadence),
            format_func=lambda c: c.value.upper(),
            horizontal=True,
        )
        amount = st.text_input("Goal Amount ($)", placeholder="Ex: 1500")
        submitted = st.form_submit_button("LAUNCH MY EMPIRE 👑", type="primary")

    if submitted:
        command, result = validator.onboarding_form(name, cadence, amount)
        show_validation(validator, result)
        if command is not None:
            service.apply(command)
            st.rerun()


def render_today(service: LedgerService, validator: FormValidator, view: DashboardView):
    """Today's gross and the entry buttons."""
    st.markdown("#### Today's Gross")
    st.markdown(
        f'<span class="big-number">${view.gross_today:,.0f}</span>',
        unsafe_allow_html=True,
    )
    st.caption(
        f"Cash ${view.cash_today:,.0f} · Card ${view.card_today:,.0f} · "
        f"Tips ${view.tips_today:,.0f} · {view.transactions_today} entries"
    )

    amount = st.text_input("Amount ($)", key="entry_amount", placeholder="0")
    col1, col2, col3 = st.columns(3)
    entry = None
    with col1:
        if st.button("💵 CASH"):
            entry = (PaymentChannel.CASH, TransactionCategory.SERVICE)
    with col2:
        if st.button("💳 CARD"):
            entry = (PaymentChannel.CARD, TransactionCategory.SERVICE)
    with col3:
        if st.button("🙏 TIP"):
            entry = (PaymentChannel.CASH, TransactionCategory.TIP)

    if entry is not None:
        channel, category = entry
        command, result = validator.transaction_form(
            amount, channel, service.now(), category=category
        )
        show_validation(validator, result)
        if command is not None:
            service.apply(command)
            st.rerun()


def render_goal(view: DashboardView):
    """Period progress and the pace still required."""
    projection = view.projection
    if projection is None:
        return

    st.markdown("---")
    st.markdown(f"#### Goal Progress · {round(projection.progress_percent)}%")
    st.progress(int(projection.progress_percent) / 100)
    col1, col2 = st.columns(2)
    col1.caption(f"Progress: ${view.period_total:,.0f}")
    col2.caption(f"{projection.days_remaining} days left")

    if projection.goal_met:
        st.success("🏆 GOAL CRUSHED")
    else:
        st.info(f"✂️ {projection.units_needed_per_day} cuts/day needed to hit the target")


def render_expenses(service: LedgerService, validator: FormValidator, view: DashboardView):
    """Daily burn, net today and the expense list."""
    st.markdown("---")
    col1, col2 = st.columns(2)
    col1.markdown("Daily Burn")
    col1.markdown(f'<span class="burn">-${view.burn_display}</span>', unsafe_allow_html=True)
    col2.markdown("Net Today")
    sign = "+" if view.net_today >= 0 else ""
    col2.markdown(f"**{sign}{view.net_display:,}**")

    with st.form("expense", clear_on_submit=True):
        name = st.text_input("Name", placeholder="Ex: Chair Rental")
        amount = st.text_input("$ Cost")
        frequency = st.selectbox(
            "Frequency",
            options=list(ExpenseFrequency),
            index=1,
            format_func=lambda f: f.value.title(),
        )
        submitted = st.form_submit_button("ADD EXPENSE")

    if submitted:
        command, result = validator.expense_form(name, amount, frequency)
        show_validation(validator, result)
        if command is not None:
            service.apply(command)
            st.rerun()

    for expense in service.snapshot().expenses:
        col1, col2 = st.columns([4, 1])
        col1.markdown(f"{expense.name} · ${expense.amount:,.2f}/{expense.frequency.value}")
        if col2.button("🗑️", key=f"remove_expense_{expense.id}"):
            service.apply(RemoveExpense(expense_id=expense.id))
            st.rerun()


def render_simulator(service: LedgerService, view: DashboardView):
    """Price raise simulator."""
    settings = service.engine_settings
    st.markdown("---")
    st.markdown("#### Price Raise Simulator")
    value = st.slider(
        "Raise ($)",
        min_value=0,
        max_value=settings.simulator_max_increment,
        step=1,
        value=clamp_simulator_value(
            view.simulator_increment, maximum=settings.simulator_max_increment
        ),
    )
    value = clamp_simulator_value(value, maximum=settings.simulator_max_increment)
    if value != view.simulator_increment:
        service.apply(SetSimulatorValue(value=value))
        st.rerun()

    st.metric("Extra Yearly Profit", f"+${view.projected_yearly_gain:,.0f}")
    st.caption(
        f"*Est: {settings.assumed_daily_volume} cuts/day x "
        f"{settings.working_days_per_year} working days"
    )


def render_history(service: LedgerService):
    days = service.history()
    if not days:
        st.info("No days recorded yet.")
        return
    for summary in days:
        col1, col2 = st.columns([3, 1])
        col1.markdown(f"**{summary.day.strftime('%A, %d %b').upper()}**")
        col1.caption(f"{summary.count} transactions")
        col2.markdown(f"**${summary.total:,.0f}**")


def render_settings(service: LedgerService, validator: FormValidator):
    goal = service.snapshot().goal
    with st.form("settings"):
        name = st.text_input("Name", value=goal.name)
        cadence = st.radio(
            "Goal Type",
            options=list(GoalCadence),
            index=list(GoalCadence).index(goal.cadence),
            format_func=lambda c: c.value.upper(),
            horizontal=True,
        )
        amount = st.text_input("Goal Amount ($)", value=f"{goal.goal_amount:g}")
        submitted = st.form_submit_button("SAVE CHANGES")

    if submitted:
        command, result = validator.settings_form(name, cadence, amount)
        show_validation(validator, result)
        if command is not None:
            service.apply(command)
            st.rerun()


def render_reset(service: LedgerService):
    confirm = st.checkbox("I understand this cannot be undone")
    col1, col2 = st.columns(2)
    if col1.button("Reset Current Day", disabled=not confirm):
        service.reset_day()
        st.rerun()
    if col2.button("Reset All (Factory Reset)", disabled=not confirm):
        service.reset_all()
        st.rerun()


if __name__ == "__main__":
    main()
