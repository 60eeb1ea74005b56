"""
Streamlit Frontend for Personal Bank

The dashboard a single user works with: two balances, a savings goal and
the recent history, with a form for every action.

DESIGN PRINCIPLES:
1. Locked until the fixed login succeeds
2. Amounts are typed as text and validated by the ledger, not the widget
3. Errors are shown right under the form that caused them
4. Every accepted action is saved before the page re-renders

Two layouts:
- Desktop: every card on one page
- Mobile: one page at a time (recent, checking, savings, goals)
"""

from decimal import Decimal
from typing import Optional

import streamlit as st

from personal_bank.config import get_settings
from personal_bank.ledger import (
    LedgerService,
    checking_history,
    find_transaction,
    goal_history,
    goal_progress,
    recent_activity,
    savings_history,
    total_balance,
)
from personal_bank.models import Account, Ledger, OperationResult, Transaction, TransferDirection
from personal_bank.orchestrator import create_app_components
from personal_bank.services import (
    AssetCache,
    ImportFormatError,
    StorageError,
    export_filename,
    export_ledger,
    import_ledger,
)
from personal_bank.auth import SessionGate


CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "INR": "₹", "JPY": "¥"}
MOBILE_PAGES = {
    "recent": "🏠 Recent",
    "checking": "💳 Checking",
    "savings": "🏦 Savings",
    "goals": "🎯 Goals",
}

# Page configuration
st.set_page_config(
    page_title="My Personal Bank",
    page_icon="🏦",
    layout="wide",
    initial_sidebar_state="collapsed",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .balance-card {
        padding: 16px 20px;
        background-color: #f5f7fa;
        border-radius: 12px;
        border-left: 5px solid #1f3a5f;
        margin: 6px 0 12px 0;
    }
    .card-title {
        font-weight: 600;
        color: #1f3a5f;
    }
    .card-subtitle {
        color: #6b7785;
        font-size: 0.9em;
    }
    .big-number {
        font-size: 2.2em;
        font-weight: bold;
        color: #2c3e50;
    }
    .empty-state {
        padding: 18px;
        text-align: center;
        color: #6b7785;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_components() -> tuple[LedgerService, SessionGate, AssetCache]:
    """Get or create application components (cached)."""
    try:
        return create_app_components()
    except StorageError as e:
        st.error(f"Failed to open local storage, changes will not be saved: {e}")
        return create_app_components(use_disk=False)


def format_money(amount: Decimal) -> str:
    currency = get_settings().app.currency
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def render_logo(assets: AssetCache) -> None:
    svg = assets.fetch("/images/logo.svg")
    if svg:
        st.markdown(svg.decode("utf-8"), unsafe_allow_html=True)


def show_result(key: str) -> None:
    """Show the outcome of the last submit of form `key`, once."""
    outcome = st.session_state.pop(f"result_{key}", None)
    if outcome is None:
        return
    success, message = outcome
    if success:
        st.success(message or "Saved.")
    else:
        st.error(message)


def remember_result(key: str, result: OperationResult, success_message: str) -> None:
    st.session_state[f"result_{key}"] = (
        result.success,
        success_message if result.success else result.message,
    )


# =============================================================================
# LOGIN
# =============================================================================

def render_login(session_gate: SessionGate, assets: AssetCache) -> None:
    """Render the locked state: a sign-in form."""
    _, center, _ = st.columns([1, 2, 1])
    with center:
        render_logo(assets)
        st.title("My Personal Bank")
        st.markdown("Sign in to your account")

        with st.form("login", clear_on_submit=False):
            username = st.text_input("Username", placeholder="Please enter username")
            password = st.text_input("Password", type="password", placeholder="Please enter password")
            submitted = st.form_submit_button("Sign in", type="primary")

        if submitted:
            result = session_gate.login(username, password)
            if result.success:
                st.rerun()
            else:
                st.error(result.message)


# =============================================================================
# CARDS
# =============================================================================

def render_balance_card(title: str, subtitle: str, amount: Decimal) -> None:
    st.markdown(f"""
    <div class="balance-card">
        <div class="card-title">{title}</div>
        <div class="card-subtitle">{subtitle}</div>
        <div class="big-number">{format_money(amount)}</div>
    </div>
    """, unsafe_allow_html=True)


def render_transfer_form(service: LedgerService) -> None:
    key = "transfer"
    with st.form(key, clear_on_submit=True):
        direction = st.radio(
            "Direction",
            options=list(TransferDirection),
            format_func=lambda d: f"{d.source.label} → {d.target.label}",
            horizontal=True,
        )
        amount = st.text_input("Amount", placeholder="0.00")
        if st.form_submit_button("Transfer", type="primary"):
            remember_result(key, service.transfer(direction, amount), "Transfer complete.")
            st.rerun()
    show_result(key)


def render_pay_bills_form(service: LedgerService) -> None:
    key = "pay_bills"
    with st.form(key, clear_on_submit=True):
        description = st.text_input("Bill", placeholder="e.g. Electricity")
        amount = st.text_input("Amount", placeholder="0.00")
        if st.form_submit_button("Pay bill", type="primary"):
            remember_result(key, service.pay_bill(description, amount), "Bill paid.")
            st.rerun()
    show_result(key)


def render_add_money_form(service: LedgerService) -> None:
    key = "add_money"
    with st.form(key, clear_on_submit=True):
        amount = st.text_input("Amount", placeholder="0.00")
        if st.form_submit_button("Add money", type="primary"):
            remember_result(key, service.add_money(amount), "Money added to savings.")
            st.rerun()
    show_result(key)


def render_set_goal_form(service: LedgerService) -> None:
    key = "set_goal"
    with st.form(key, clear_on_submit=True):
        amount = st.text_input("Goal amount", placeholder="0.00")
        if st.form_submit_button("Save goal", type="primary"):
            remember_result(key, service.set_goal(amount), "Savings goal saved.")
            st.rerun()
    show_result(key)


def render_edit_balance_form(service: LedgerService, account: Account) -> None:
    key = f"edit_{account.value}"
    with st.form(key, clear_on_submit=True):
        amount = st.text_input(
            f"New {account.label.lower()} balance",
            placeholder=f"{service.ledger.balance(account):.2f}",
        )
        if st.form_submit_button("Save balance", type="primary"):
            remember_result(key, service.edit_balance(account, amount), "Balance updated.")
            st.rerun()
    show_result(key)


def render_checking_card(service: LedgerService) -> None:
    render_balance_card("Checking", "Everyday spending", service.ledger.checking_balance)
    with st.expander("↔️ Transfer"):
        render_transfer_form(service)
    with st.expander("🧾 Pay bills"):
        render_pay_bills_form(service)
    with st.expander("✏️ Edit balance"):
        render_edit_balance_form(service, Account.CHECKING)


def render_savings_card(service: LedgerService) -> None:
    render_balance_card("Savings", "Emergency fund", service.ledger.savings_balance)
    with st.expander("➕ Add money"):
        render_add_money_form(service)
    with st.expander("🎯 Set goal"):
        render_set_goal_form(service)
    with st.expander("✏️ Edit balance"):
        render_edit_balance_form(service, Account.SAVINGS)


def render_goal_card(service: LedgerService) -> None:
    progress = goal_progress(service.ledger)
    st.markdown("#### Savings goal")
    if progress is None:
        st.markdown('<div class="card-subtitle">No goal set</div>', unsafe_allow_html=True)
        return
    st.markdown(f"Target: **{format_money(progress.goal)}** · {progress.display_percent}%")
    st.progress(progress.percent / 100)
    st.caption(f"{format_money(progress.saved)} of {format_money(progress.goal)}")
    if progress.is_reached:
        st.success("Goal reached!")


# =============================================================================
# HISTORY
# =============================================================================

def render_history(
    title: str,
    transactions: list[Transaction],
    ledger: Ledger,
    key: str,
    empty_hint: str,
    show_category: bool = False,
) -> None:
    """Render a history table with a details view."""
    st.markdown(f"#### {title}")
    if not transactions:
        st.markdown(f"""
        <div class="empty-state">
            <div>📄 No history yet</div>
            <div>{empty_hint}</div>
        </div>
        """, unsafe_allow_html=True)
        return

    rows = []
    for t in transactions:
        row = {"Date": t.date.isoformat(), "Description": t.description}
        if show_category:
            row["Category"] = t.category.value
        row["Amount"] = format_money(t.amount)
        rows.append(row)
    st.dataframe(rows, hide_index=True, use_container_width=True)

    selected = st.selectbox(
        "View transaction",
        options=[None] + [t.id for t in transactions],
        format_func=lambda tx_id: "—" if tx_id is None else _transaction_label(ledger, tx_id),
        key=f"details_{key}",
    )
    if selected:
        render_transaction_details(find_transaction(ledger, selected))


def _transaction_label(ledger: Ledger, tx_id: str) -> str:
    t = find_transaction(ledger, tx_id)
    return f"{t.date.isoformat()} · {t.description}" if t else tx_id


def render_transaction_details(transaction: Optional[Transaction]) -> None:
    if transaction is None:
        return
    with st.container(border=True):
        st.markdown(f"**{transaction.description}**")
        st.markdown(f"Amount: {format_money(transaction.amount)}")
        st.markdown(f"Date: {transaction.date.isoformat()}")
        st.markdown(f"Category: {transaction.category.value}")
        st.markdown(f"Account: {transaction.scope.value.title()}")
        st.caption(f"ID: {transaction.id}")


def render_recent(service: LedgerService) -> None:
    limit = get_settings().app.recent_activity_limit
    recent = recent_activity(service.ledger, limit)
    render_history(
        f"Recent activity · last {len(recent)}" if recent else "Recent activity",
        recent,
        service.ledger,
        key="recent",
        empty_hint="Transfers, bills and deposits will appear here",
        show_category=True,
    )


# =============================================================================
# LAYOUTS
# =============================================================================

def render_desktop(service: LedgerService) -> None:
    st.markdown("Total balance")
    st.markdown(f'<div class="big-number">{format_money(total_balance(service.ledger))}</div>',
                unsafe_allow_html=True)
    st.markdown("---")

    col1, col2, col3 = st.columns(3)
    with col1:
        render_checking_card(service)
    with col2:
        render_savings_card(service)
    with col3:
        render_goal_card(service)

    st.markdown("---")
    render_recent(service)


def render_mobile(service: LedgerService) -> None:
    page = st.radio(
        "Page",
        options=list(MOBILE_PAGES),
        format_func=MOBILE_PAGES.get,
        horizontal=True,
        label_visibility="collapsed",
        key="mobile_page",
    )

    ledger = service.ledger
    if page == "recent":
        render_balance_card("Total balance", "Checking + savings", total_balance(ledger))
        render_recent(service)
    elif page == "checking":
        render_checking_card(service)
        render_history(
            "History", checking_history(ledger), ledger, key="checking",
            empty_hint="Transfers, bill payments, and edits will appear here",
        )
    elif page == "savings":
        render_savings_card(service)
        render_history(
            "History", savings_history(ledger), ledger, key="savings",
            empty_hint="Adds, transfers, goals, and edits will appear here",
        )
    elif page == "goals":
        render_goal_card(service)
        render_history(
            "Goal changes", goal_history(ledger), ledger, key="goals",
            empty_hint="Goal updates will appear here",
        )


# =============================================================================
# SETTINGS
# =============================================================================

def render_settings(service: LedgerService, session_gate: SessionGate) -> bool:
    """Render the sidebar. Returns True if the mobile layout is selected."""
    user = session_gate.current_user()
    st.sidebar.title("🏦 My Personal Bank")
    if user:
        st.sidebar.markdown(f"Signed in as **{user.name}**")
    if st.sidebar.button("Logout"):
        session_gate.logout()
        st.rerun()

    st.sidebar.markdown("---")
    layout = get_settings().app.layout
    if layout == "auto":
        mobile = st.sidebar.toggle("Compact (mobile) layout", value=False)
    else:
        mobile = layout == "mobile"

    st.sidebar.markdown("### Data")
    st.sidebar.download_button(
        "Export data (JSON)",
        data=export_ledger(service.ledger),
        file_name=export_filename(),
        mime="application/json",
    )

    uploaded = st.sidebar.file_uploader("Import data (JSON)", type=["json"])
    if uploaded is not None and st.sidebar.button("Replace current data"):
        try:
            service.replace(import_ledger(uploaded.getvalue()))
            st.rerun()
        except ImportFormatError as e:
            st.sidebar.error(f"Could not import: {e}")

    confirm = st.sidebar.checkbox(
        "I understand this will reset all balances, transactions, and goals"
    )
    if st.sidebar.button("Clear all data", disabled=not confirm):
        service.clear_all_data()
        st.rerun()

    return mobile


def main():
    """Main application entry point."""
    service, session_gate, assets = get_components()

    if session_gate.current_user() is None:
        render_login(session_gate, assets)
        st.stop()

    # Pick up writes made from another tab
    service.reload()

    render_logo(assets)
    st.title("My Personal Bank")
    st.caption("Secure dashboard")

    try:
        mobile = render_settings(service, session_gate)
        if mobile:
            render_mobile(service)
        else:
            render_desktop(service)
    except StorageError as e:
        st.error(f"Could not save your changes: {e}")


if __name__ == "__main__":
    main()
