"""
Conversation list component for the Streamlit app.
Shows existing conversations with unread badges and last message preview.
"""
import streamlit as st
from services.chat_session import call_action, get_controller, run_action

from app.utils.helpers import classify_role, format_relative_time, message_preview


def render_conversation_list(state):
    """
    Render the sidebar list of conversations.

    Args:
        state: ChatViewState snapshot
    """
    st.markdown(f"### Conversations ({len(state.conversations)})")
    if state.total_unread:
        st.caption(f"{state.total_unread} unread")
    if state.conversations_loading and not state.initial_loading:
        st.caption("Refreshing...")

    if state.initial_loading:
        st.caption("Loading conversations...")
        return

    if not state.conversations:
        st.caption("No conversations yet. Start a new one!")
        return

    controller = get_controller()
    selected_id = state.selected_user.id if state.selected_user else None

    for conversation in state.conversations:
        user = conversation.user
        label = user.name
        if conversation.unread_count:
            label = f"{label}  🔵 {conversation.unread_count}"

        clicked = st.button(
            label,
            key=f"conversation_{user.id}",
            use_container_width=True,
            type="primary" if user.id == selected_id else "secondary",
        )

        last = conversation.last_message
        role = classify_role(user.role)
        caption = f":gray[{role.value.title()}]"
        if last is not None:
            caption += f" · {message_preview(last.message)} · {format_relative_time(last.timestamp)}"
        st.caption(caption)

        if clicked:
            # Clicking outside the directory dropdown dismisses it
            call_action(controller.handle_pointer_down, False)
            run_action(lambda c, u=user: c.select_counterpart(u))
            st.session_state.pop("directory_search", None)
            st.rerun()
