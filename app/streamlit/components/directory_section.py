"""
"New message" directory component.
Search box, role filter buttons and the filtered list of users to message.
"""
import time

import streamlit as st
from services.chat_session import call_action, get_controller, run_action

from app.config import get_settings
from app.utils.helpers import classify_role


def _on_search_change():
    controller = get_controller()
    call_action(controller.set_search_query, st.session_state.directory_search)


def render_directory_section(state):
    """
    Render the directory toggle and, when open, the search dropdown.

    Args:
        state: ChatViewState snapshot
    """
    controller = get_controller()
    settings = get_settings()

    if st.button("✉️ New message", key="directory_toggle", use_container_width=True):
        call_action(controller.toggle_directory)
        st.rerun()

    if not state.directory_open:
        return

    with st.container(border=True):
        st.text_input(
            "Search users",
            value=state.search_query,
            key="directory_search",
            placeholder="Searching..." if state.searching else "Search by name, email, or department...",
            on_change=_on_search_change,
            label_visibility="collapsed",
        )

        columns = st.columns(len(settings.role_filters))
        for column, role in zip(columns, settings.role_filters):
            with column:
                if st.button(
                    role.title(),
                    key=f"role_filter_{role}",
                    type="primary" if state.role_filter == role else "secondary",
                ):
                    call_action(controller.set_role_filter, role)
                    st.rerun()

        if state.searching:
            with st.spinner("Searching users..."):
                time.sleep(settings.search_debounce_seconds)
            st.rerun()

        if not state.filtered_users:
            st.caption(call_action(controller.directory_empty_text))
            st.caption("Try searching by name, email, or department")
            return

        for user in state.filtered_users:
            role = classify_role(user.role)
            if st.button(
                f"{user.name} · {role.value.title()}",
                key=f"directory_user_{user.id}",
                use_container_width=True,
                help=f"{user.email}" + (f" · {user.department}" if user.department else ""),
            ):
                run_action(lambda c, u=user: c.select_counterpart(u))
                st.session_state.pop("directory_search", None)
                st.rerun()
