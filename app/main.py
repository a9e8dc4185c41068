"""
Streamlit Frontend for the Debt & Expense Tracker

This is the rendering layer. It owns everything the core deliberately
does not: formatting, charts, confirmation prompts and HTML escaping.

DESIGN PRINCIPLES:
1. Read through get_snapshot()/get_aggregates(), write through the
   tracker's mutation methods, never touch the ledger directly
2. Show every outcome message the tracker returns
3. Escape user text (descriptions, categories) before it goes into markup
4. Destructive actions need an explicit confirmation
"""

import html
from datetime import date

import plotly.graph_objects as go
import streamlit as st

from debt_tracker.audit import create_correlation_id
from debt_tracker.config import get_settings
from debt_tracker.models.ledger import ExpenseDraft, KnownCategory, PaymentDraft
from debt_tracker.models.summary import LedgerAggregates, MutationOutcome
from debt_tracker.orchestrator import LedgerTracker, create_app_components


# Page configuration
st.set_page_config(
    page_title="Debt & Expense Tracker",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .category-item {
        display: flex;
        justify-content: space-between;
        padding: 8px 12px;
        border-bottom: 1px solid #eee;
    }
    .category-color {
        display: inline-block;
        width: 12px;
        height: 12px;
        border-radius: 3px;
        margin-right: 8px;
    }
    .big-number {
        font-size: 2em;
        font-weight: bold;
        color: #283618;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_components() -> LedgerTracker:
    """Get or create the tracker (cached for the server process)."""
    try:
        tracker, warning = create_app_components(use_storage=True)
    except Exception as e:
        if get_settings().app.debug_mode:
            st.error(f"Failed to initialize storage: {e}")
        else:
            st.error("Failed to initialize storage, changes will not be saved")
        tracker, warning = create_app_components(use_storage=False)
    if warning:
        st.session_state.load_warning = warning
    return tracker


def money(amount: float) -> str:
    symbol = get_settings().app.currency_symbol
    return f"{symbol}{amount:,.2f}"


def show_outcome(outcome: MutationOutcome) -> None:
    """Turn a tracker outcome into a notification."""
    if outcome.success:
        st.success(outcome.message)
    elif outcome.applied:
        st.warning(f"{outcome.message}. Your changes may be lost on reload.")
    else:
        st.error(outcome.message)


def defer_outcome(outcome: MutationOutcome) -> None:
    """Keep an outcome across st.rerun() so main() can show it afterwards."""
    st.session_state.pending_outcome = outcome


def main():
    """Main application entry point."""
    tracker = get_components()

    warning = st.session_state.pop("load_warning", None)
    if warning:
        st.warning(warning)

    pending = st.session_state.pop("pending_outcome", None)
    if pending is not None:
        show_outcome(pending)

    st.sidebar.title("💸 Debt & Expense Tracker")
    app_settings = get_settings().app
    if app_settings.debug_mode:
        st.sidebar.caption(f"Environment: {app_settings.app_environment}")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "➕ Add Expense", "🧾 Expense Summary", "🏦 Debt Payment", "⚙️ Settings"],
        index=0,
    )

    if page == "📊 Dashboard":
        render_dashboard(tracker)
    elif page == "➕ Add Expense":
        render_add_expense(tracker)
    elif page == "🧾 Expense Summary":
        render_expense_summary(tracker)
    elif page == "🏦 Debt Payment":
        render_debt_payment(tracker)
    elif page == "⚙️ Settings":
        render_settings(tracker)


# =============================================================================
# CHARTS
# =============================================================================

def budget_chart(aggregates: LedgerAggregates) -> go.Figure:
    slices = aggregates.budget_distribution
    fig = go.Figure(
        go.Pie(
            labels=[s.label for s in slices],
            values=[s.value for s in slices],
            marker={"colors": [s.color for s in slices], "line": {"color": "#fefae0", "width": 2}},
            hole=0.55,
            sort=False,
        )
    )
    fig.update_layout(margin={"t": 10, "b": 10, "l": 10, "r": 10}, height=320)
    return fig


def category_chart(aggregates: LedgerAggregates) -> go.Figure:
    categories = list(aggregates.category_breakdown)
    fig = go.Figure(
        go.Bar(
            x=categories,
            y=[aggregates.category_breakdown[c] for c in categories],
            marker={"color": "#606c38", "line": {"color": "#283618", "width": 1}},
        )
    )
    fig.update_layout(
        margin={"t": 10, "b": 10, "l": 10, "r": 10},
        height=320,
        yaxis={"rangemode": "tozero", "tickprefix": get_settings().app.currency_symbol},
    )
    return fig


# =============================================================================
# PAGES
# =============================================================================

def render_dashboard(tracker: LedgerTracker):
    st.title("📊 Dashboard")
    aggregates = tracker.get_aggregates()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Monthly Salary", money(aggregates.salary))
    col2.metric("Total Expenses", money(aggregates.total_expenses))
    col3.metric("Remaining Debt", money(aggregates.remaining_debt))
    col4.metric("Remaining Budget", money(aggregates.remaining_budget))

    st.subheader("Debt Progress")
    st.progress(min(aggregates.debt_paid_percentage, 100.0) / 100)
    st.caption(
        f"Paid {money(aggregates.total_debt_paid)} "
        f"({aggregates.debt_paid_percentage:.1f}%) · Remaining {money(aggregates.remaining_debt)}"
    )

    left, right = st.columns(2)
    with left:
        st.subheader("Budget Distribution")
        if aggregates.budget_distribution:
            st.plotly_chart(budget_chart(aggregates), use_container_width=True)
        else:
            st.info("Nothing to show yet.")
    with right:
        st.subheader("Spending by Category")
        if aggregates.category_breakdown:
            st.plotly_chart(category_chart(aggregates), use_container_width=True)
        else:
            st.info("No expenses to categorize.")


def render_add_expense(tracker: LedgerTracker):
    st.title("➕ Add Expense")
    app_settings = get_settings().app

    presets = app_settings.quick_add_list
    if presets:
        st.markdown("**Quick add**")
        columns = st.columns(len(presets))
        for column, (category, amount) in zip(columns, presets):
            if column.button(f"{category} {money(amount)}", key=f"preset-{category}"):
                st.session_state.expense_category = category
                st.session_state.expense_amount = amount

    categories = [c.value for c in KnownCategory]
    preset_category = st.session_state.get("expense_category")
    with st.form("expense-form", clear_on_submit=True):
        category = st.selectbox(
            "Category *",
            options=categories,
            index=categories.index(preset_category) if preset_category in categories else 0,
        )
        amount = st.number_input(
            f"Amount ({app_settings.currency_symbol}) *",
            value=float(st.session_state.get("expense_amount", 0.0)),
            step=1.0,
            format="%.2f",
        )
        expense_date = st.date_input("Date *", value=date.today())
        description = st.text_input("Description (optional)")
        submitted = st.form_submit_button("Add Expense", type="primary")

    if submitted:
        outcome = tracker.add_expense(
            ExpenseDraft(
                category=category,
                amount=amount,
                date=expense_date,
                description=description,
            ),
            correlation_id=create_correlation_id(),
        )
        show_outcome(outcome)
        if outcome.applied:
            st.session_state.pop("expense_category", None)
            st.session_state.pop("expense_amount", None)

    st.subheader("Recent Expenses")
    recent = tracker.get_aggregates().recent_expenses
    if not recent:
        st.info("No recent expenses")
    for expense in recent:
        st.markdown(
            f"<div class='category-item'><span>{html.escape(expense.category)}</span>"
            f"<span>{html.escape(money(expense.amount))}</span></div>",
            unsafe_allow_html=True,
        )


def render_expense_summary(tracker: LedgerTracker):
    st.title("🧾 Expense Summary")
    aggregates = tracker.get_aggregates()

    if not aggregates.has_expenses:
        st.info("No expenses recorded yet.")
        return

    for expense in aggregates.expenses_by_date:
        cols = st.columns([2, 2, 2, 4, 1])
        cols[0].write(expense.date.strftime("%b %d, %Y"))
        cols[1].write(expense.category)
        cols[2].write(money(expense.amount))
        cols[3].write(expense.description or "-")
        if cols[4].button("🗑️", key=f"delete-expense-{expense.id}"):
            defer_outcome(tracker.delete_expense(expense.id))
            st.rerun()

    st.subheader("Category Breakdown")
    for category, amount in aggregates.category_breakdown.items():
        color = aggregates.category_colors.get(category, "#606c38")
        st.markdown(
            f"<div class='category-item'><span><span class='category-color' "
            f"style='background-color: {html.escape(color)}'></span>{html.escape(category)}</span>"
            f"<span>{html.escape(money(amount))}</span></div>",
            unsafe_allow_html=True,
        )


def render_debt_payment(tracker: LedgerTracker):
    st.title("🏦 Debt Payment")
    ledger_settings = get_settings().ledger

    with st.form("payment-form"):
        amount = st.number_input(
            "Payment amount *",
            value=float(ledger_settings.default_payment_amount),
            step=100.0,
            format="%.2f",
        )
        payment_date = st.date_input("Date *", value=date.today())
        submitted = st.form_submit_button("Make Payment", type="primary")

    if submitted:
        show_outcome(tracker.add_payment(
            PaymentDraft(amount=amount, date=payment_date),
            correlation_id=create_correlation_id(),
        ))

    st.subheader("Payment History")
    aggregates = tracker.get_aggregates()
    if not aggregates.has_payments:
        st.info("No payments recorded yet.")
        return

    for payment in aggregates.payments_by_date:
        cols = st.columns([3, 3, 1])
        cols[0].write(payment.date.strftime("%b %d, %Y"))
        cols[1].write(money(payment.amount))
        if cols[2].button("🗑️", key=f"delete-payment-{payment.id}"):
            defer_outcome(tracker.delete_payment(payment.id))
            st.rerun()


def render_settings(tracker: LedgerTracker):
    st.title("⚙️ Settings")
    snapshot = tracker.get_snapshot()

    col1, col2 = st.columns(2)
    with col1:
        salary = st.number_input("Monthly salary", value=float(snapshot.salary), step=500.0)
        if st.button("Update Salary"):
            show_outcome(tracker.set_salary(salary))
    with col2:
        debt = st.number_input("Initial debt", value=float(snapshot.initial_debt), step=1000.0)
        if st.button("Update Debt"):
            show_outcome(tracker.set_initial_debt(debt))

    st.markdown("---")
    exported = tracker.get_export()
    st.download_button(
        "⬇️ Export Data",
        data=exported,
        file_name=get_settings().app.export_filename,
        mime="application/json",
        on_click=tracker.record_export,
        args=(exported,),
    )

    st.markdown("---")
    st.subheader("Danger Zone")
    confirm_reset = st.checkbox(
        "I understand this clears all expenses and debt payments for the current month"
    )
    if st.button("Reset Month", disabled=not confirm_reset):
        show_outcome(tracker.reset_month())

    confirm_clear = st.checkbox("I understand this clears ALL data and cannot be undone")
    if st.button("Clear All Data", type="primary", disabled=not confirm_clear):
        show_outcome(tracker.clear_all())


if __name__ == "__main__":
    main()
