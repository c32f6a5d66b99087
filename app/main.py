"""
Streamlit Frontend for Scheduled Payments

The form, history list and calendar the user works with.

DESIGN PRINCIPLES:
1. The page holds no payment data of its own - it asks the flow
2. Every validation or storage problem is shown, never swallowed
3. Views are re-derived after every change

The page only calls the core through SchedulePaymentFlow:
- submit() on "Schedule Payment"
- history() / marked_dates() for rendering
- select_day() when a calendar day is picked
"""

import asyncio
import calendar
from datetime import date

import streamlit as st

from scheduled_payments.models.payment import (
    DEFAULT_CATEGORY,
    DEFAULT_FREQUENCY,
    PaymentCategory,
    PaymentDraft,
    PaymentFrequency,
    format_payment_date,
)
from scheduled_payments.orchestrator import SchedulePaymentFlow, create_app_components
from scheduled_payments.services.storage import StorageError


# Page configuration
st.set_page_config(
    page_title="Scheduled Payments",
    page_icon="📅",
    layout="centered",
)

# Custom CSS for payment cards and calendar dots
st.markdown("""
<style>
    .payment-item {
        padding: 10px;
        border: 1px solid #ccc;
        border-radius: 5px;
        margin: 5px 0;
    }
    .marked-day {
        color: blue;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_flow() -> SchedulePaymentFlow:
    """Get or create the schedule flow (cached for the server lifetime)."""
    flow, _ = create_app_components(persistent=True)
    return flow


def render_payment(fields: dict[str, str]) -> None:
    lines = "".join(f"<div>{label}: {value}</div>" for label, value in fields.items())
    st.markdown(f'<div class="payment-item">{lines}</div>', unsafe_allow_html=True)


def render_form(flow: SchedulePaymentFlow) -> None:
    """Render the schedule form."""
    st.header("📝 Schedule a Payment")

    draft = st.session_state.get("draft") or PaymentDraft.blank()
    categories = list(PaymentCategory)
    frequencies = list(PaymentFrequency)

    with st.form("schedule_form", clear_on_submit=False):
        title = st.text_input("Title", value=draft.title)
        amount = st.text_input("Amount", value=draft.amount)
        picked = st.date_input(
            "Select Date",
            value=date.fromisoformat(draft.date) if draft.date else None,
        )
        category = st.selectbox(
            "Category:",
            options=categories,
            index=categories.index(draft.category or DEFAULT_CATEGORY),
            format_func=lambda c: c.value,
        )
        frequency = st.selectbox(
            "Frequency:",
            options=frequencies,
            index=frequencies.index(draft.frequency or DEFAULT_FREQUENCY),
            format_func=lambda f: f.value,
        )
        notes = st.text_input("Notes / Description", value=draft.notes)
        submitted = st.form_submit_button("Schedule Payment")

    if not submitted:
        return

    values = {
        "title": title,
        "amount": amount,
        "date": format_payment_date(picked) if picked else "",
        "category": category,
        "frequency": frequency,
        "notes": notes,
    }
    try:
        scheduled, message, next_draft = run_async(flow.submit(values))
    except StorageError as e:
        flow.report_error(e, action="submit")
        st.error(f"Payment added but could not be saved: {e}")
        return

    st.session_state.draft = next_draft
    if scheduled:
        st.success(message)
        st.rerun()
    else:
        st.error(message)


def render_history(flow: SchedulePaymentFlow) -> None:
    """Render every scheduled payment."""
    st.header("📜 Scheduled Payments History:")
    payments = flow.history()
    if not payments:
        st.info("No payments scheduled yet.")
        return
    for payment in payments:
        render_payment(payment.to_display_dict())


def render_calendar(flow: SchedulePaymentFlow) -> None:
    """Render a month grid with marked days and the selected day's payments."""
    st.header("📅 Payment Calendar:")

    selected = st.date_input("Pick a day", value=date.today(), key="calendar_day")
    marked = flow.marked_dates()

    weeks = calendar.monthcalendar(selected.year, selected.month)
    header = "| " + " | ".join(calendar.day_abbr) + " |"
    rows = [header, "|" + "---|" * 7]
    for week in weeks:
        cells = []
        for day in week:
            if day == 0:
                cells.append(" ")
                continue
            key = format_payment_date(date(selected.year, selected.month, day))
            cells.append(f"**{day}** •" if key in marked else str(day))
        rows.append("| " + " | ".join(cells) + " |")
    st.markdown("\n".join(rows))

    day_key = format_payment_date(selected)
    st.subheader(f"🗓 Payments on {day_key}:")
    payments = flow.select_day(day_key)
    if not payments:
        st.write("No payments scheduled.")
        return
    for payment in payments:
        render_payment(payment.to_display_dict(include_date=False))


def main():
    """Main application entry point."""
    flow = get_flow()

    try:
        run_async(flow.start())
    except StorageError as e:
        flow.report_error(e, action="start")
        st.error(f"Saved payments could not be loaded: {e}")
        st.stop()

    render_form(flow)
    render_history(flow)
    render_calendar(flow)


if __name__ == "__main__":
    main()
