"""
Streamlit Front End for splitledger

A browser view of the same command interface the console offers.

Every action on this page is a command line sent through the
LedgerSession, so the page can never do anything the console can't.
Snapshots live in an in-memory store: `save` offers the document as a
download and uploading a snapshot file runs `load` on it.
"""

from typing import Optional

import streamlit as st

from splitledger.commands import USAGE, CommandParser
from splitledger.config import get_settings, validate_all_settings
from splitledger.models.ledger import format_amount
from splitledger.orchestrator import CommandOutcome, LedgerSession, create_session
from splitledger.services.storage import InMemorySnapshotStorage


# Page configuration
st.set_page_config(
    page_title="splitledger",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded",
)

UPLOAD_LOCATION = "uploaded-snapshot.json"


def get_session() -> tuple[LedgerSession, InMemorySnapshotStorage]:
    """One ledger per browser session."""
    if "ledger_session" not in st.session_state:
        storage = InMemorySnapshotStorage()
        st.session_state.ledger_storage = storage
        st.session_state.ledger_session = create_session(
            get_settings().ledger,
            storage=storage,
        )
        st.session_state.history = []
    return st.session_state.ledger_session, st.session_state.ledger_storage


def run_command(session: LedgerSession, line: str) -> Optional[CommandOutcome]:
    try:
        outcome = session.execute(line)
    except Exception as e:
        # Already logged by the session
        if get_settings().app.debug_mode:
            st.exception(e)
        else:
            st.error(f"Error running `{line}`: {str(e)}")
        return None
    st.session_state.history.append((line, outcome))
    return outcome


def main():
    """Main application entry point."""
    session, storage = get_session()

    st.sidebar.title("💸 splitledger")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["⌨️ Commands", "📊 Balances", "🧾 Tasks", "💾 Snapshot", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.code(USAGE, language="text")

    if page == "⌨️ Commands":
        render_command_page(session)
    elif page == "📊 Balances":
        render_balances_page(session)
    elif page == "🧾 Tasks":
        render_tasks_page(session)
    elif page == "💾 Snapshot":
        render_snapshot_page(session, storage)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_command_page(session: LedgerSession):
    """Command box plus the transcript of this browser session."""
    st.title("⌨️ Commands")

    with st.form("command", clear_on_submit=True):
        line = st.text_input(
            "Command",
            placeholder="pay Alice Dinner 30.00",
            help="Verbs: " + ", ".join(CommandParser().verbs),
        )
        submitted = st.form_submit_button("Run", type="primary")

    if submitted and line.strip():
        run_command(session, line)

    for line, outcome in reversed(st.session_state.history):
        st.markdown(f"`{line}`")
        if outcome.output:
            st.code(outcome.output, language="text")
        if not outcome.success:
            st.error(outcome.error_message)


def render_balances_page(session: LedgerSession):
    st.title("📊 Balances")

    lines = session.reporter.summary()
    if not lines:
        st.info("No participants yet. Try `add Alice Bob` on the Commands page.")
        return

    st.dataframe(
        [
            {"Participant": line.name, "Owes": format_amount(line.balance)}
            for line in lines
        ],
        use_container_width=True,
        hide_index=True,
    )

    names = [line.name for line in lines]
    selected = st.selectbox("Details for", names)
    if selected:
        st.code(session.reporter.render_participant(selected), language="text")


def render_tasks_page(session: LedgerSession):
    st.title("🧾 Tasks")

    tasks = list(session.store.tasks)
    if not tasks:
        st.info("No tasks yet. Try `pay Alice Dinner 30.00` on the Commands page.")
        return

    reports = [session.reporter.task_report(name) for name in tasks]
    st.dataframe(
        [
            {
                "Task": report.name,
                "Paid by": report.owner,
                "Cost": format_amount(report.cost),
                "Share": format_amount(report.share),
                "Participants": ", ".join(report.participants),
            }
            for report in reports
        ],
        use_container_width=True,
        hide_index=True,
    )


def render_snapshot_page(session: LedgerSession, storage: InMemorySnapshotStorage):
    st.title("💾 Snapshot")

    outcome = session.execute("save")
    st.download_button(
        "Download snapshot",
        data=outcome.output,
        file_name="ledger.json",
        mime="application/json",
        disabled=not outcome.success,
    )

    st.markdown("---")
    uploaded = st.file_uploader("Load a snapshot", type=["json"])
    if uploaded is not None and st.button("Load", type="primary"):
        try:
            document = uploaded.read().decode("utf-8")
        except UnicodeDecodeError:
            st.error("The file is not UTF-8 text.")
            return
        storage.write_document(UPLOAD_LOCATION, document)
        outcome = run_command(session, f"load {UPLOAD_LOCATION}")
        if outcome is None:
            return
        if outcome.success:
            st.success("Snapshot loaded.")
        else:
            st.error(outcome.error_message)


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    status = validate_all_settings()
    for name in ("ledger", "logging", "app"):
        if status.get(name, False):
            st.success(f"✅ {name} settings OK")
        else:
            st.error(f"❌ {name} settings - {status.get(f'{name}_error')}")

    settings = get_settings()
    ledger = settings.ledger
    st.markdown(f"Environment: **{settings.app.app_environment}**")
    st.markdown(f"Association policy: **{ledger.association_policy.value}**")
    st.markdown(
        "Settings are read from `SPLITLEDGER_*` environment variables "
        "or a `.env` file."
    )


if __name__ == "__main__":
    main()
