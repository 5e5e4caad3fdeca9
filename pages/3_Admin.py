# pages/3_Admin.py
import hmac
import os
import streamlit as st
from config import ADMIN_CODE, ADMIN_USER, configure_logging
from utils.accounting import StepLedger
from utils.admin import audit_frame, day_entries, search_records
from utils.db import get_store
from utils.images import from_data_url

st.set_page_config(page_title="Admin", page_icon="🛠️", layout="wide")

def require_admin():
    if st.session_state.get("is_admin"):
        return True
    with st.form("admin_login"):
        user = st.text_input("Username")
        code = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Unlock Admin")
        if submitted:
            # Prefer Streamlit Secrets or env var over config fallback
            env_code = os.getenv("ADMIN_CODE") or ADMIN_CODE
            if not env_code:
                st.error("Admin code not configured. Set ENV var ADMIN_CODE or config.ADMIN_CODE.")
                return False
            if user == ADMIN_USER and hmac.compare_digest(code, env_code):
                st.session_state["is_admin"] = True
                st.success("Admin unlocked.")
                return True
            else:
                st.error("Incorrect username or password.")
                return False
    return False

def flash(message):
    st.session_state["admin_flash"] = message

def show_flash():
    message = st.session_state.pop("admin_flash", None)
    if message:
        st.success(message)

def confirm_buttons(key, on_confirm):
    c1, c2 = st.columns(2)
    if c1.button("Confirm", key=f"yes_{key}", type="primary"):
        on_confirm()
        st.session_state.pop("confirm", None)
        st.rerun()
    if c2.button("Cancel", key=f"no_{key}"):
        st.session_state.pop("confirm", None)
        st.rerun()

def day_card(ledger, student_id, day, entry):
    steps = entry.steps if entry else 0
    st.markdown(f"**📅 {day}** · 👟 {steps:,} steps")
    if entry and entry.img:
        try:
            _, payload = from_data_url(entry.img)
            st.image(payload, width=160)
        except ValueError:
            st.caption("Screenshot could not be decoded.")
    else:
        st.caption("No screenshot")

    key = f"day:{student_id}:{day}"
    if st.session_state.get("confirm") == key:
        st.warning(f"Remove {day} ({steps:,} steps)?")

        def do_remove():
            removed = ledger.retract(student_id, day)
            if removed is None:
                flash(f"{day} was already removed.")
            else:
                flash(f"Day {day} ({removed:,} steps) removed. Total updated.")

        confirm_buttons(key, do_remove)
    elif st.button("Remove day", key=f"rm_{key}"):
        st.session_state["confirm"] = key
        st.rerun()

def student_panel(ledger, student_id, record):
    label = f"{record.name} · {student_id} · {record.campus} · {record.session} · {record.total_steps:,} steps"
    with st.expander(label):
        entries = day_entries(record)
        cols = st.columns(4)
        for i, (day, entry) in enumerate(entries):
            with cols[i % 4]:
                day_card(ledger, student_id, day, entry)

        st.divider()
        key = f"student:{student_id}"
        if st.session_state.get("confirm") == key:
            st.warning(f"Delete {record.name} and all {len(entries)} day(s)? This cannot be undone.")

            def do_delete():
                if ledger.delete_student(student_id):
                    flash(f'"{record.name}" has been removed successfully.')
                else:
                    flash(f'"{record.name}" was already removed.')

            confirm_buttons(key, do_delete)
        elif st.button("Delete student", key=f"rm_{key}"):
            st.session_state["confirm"] = key
            st.rerun()

def main():
    configure_logging()
    st.title("🛠️ Admin")

    if not require_admin():
        st.stop()

    if st.button("Log out"):
        st.session_state["is_admin"] = False
        st.rerun()

    show_flash()
    ledger = StepLedger(get_store())

    c1, c2 = st.columns([3, 1])
    with c1:
        query = st.text_input("Search by name, student ID or campus")
    with c2:
        day = st.date_input("Submitted on", value=None)

    rows = search_records(ledger.snapshot(), query=query, date=day)
    st.caption(f"{len(rows)} student(s)")
    if not rows:
        st.info("No matching students.")
        return

    st.dataframe(audit_frame(rows), use_container_width=True, hide_index=True)
    for student_id, record in rows:
        student_panel(ledger, student_id, record)

if __name__ == "__main__":
    main()
