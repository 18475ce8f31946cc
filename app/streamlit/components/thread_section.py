"""
Thread component for the Streamlit app.
Message history with the selected counterpart and the compose bar.
"""
import streamlit as st
import streamlit.components.v1 as components
from config.settings import THREAD_HEIGHT
from services.chat_session import call_action, get_controller, run_action

from app.utils.helpers import classify_role, format_relative_time


def _inject_scroll_js():
    """Scroll the thread container to the newest message."""
    js = """
    <script>
    (function() {
        setTimeout(function() {
            var container = window.parent.document.querySelector('.st-key-chat_thread');
            if (container) {
                container.scrollTo({top: container.scrollHeight, behavior: 'smooth'});
            }
        }, 100);
    })();
    </script>
    """
    components.html(js, height=0, scrolling=False)


def render_thread_section(state):
    """
    Render the active thread, or a placeholder when nobody is selected.

    Args:
        state: ChatViewState snapshot
    """
    controller = get_controller()

    if state.selected_user is None:
        st.info("Select a conversation or start a new one to begin chatting.")
        return

    user = state.selected_user
    role = classify_role(user.role)
    st.markdown(f"### {user.name}")
    st.markdown(f"<span style='color:{role.color}'>{role.value.title()}</span>"
                + (f" · {user.department}" if user.department else ""),
                unsafe_allow_html=True)

    thread = st.container(height=THREAD_HEIGHT, border=True, key="chat_thread")
    with thread:
        if state.thread_loading:
            st.caption("Loading messages...")
        elif state.thread_load_failed:
            st.caption("Could not load this conversation.")
            if st.button("Retry", key="retry_history"):
                call_action(controller.handle_pointer_down, False)
                run_action(lambda c, u=user: c.select_counterpart(u))
                st.rerun()
        elif not state.messages:
            st.caption("No messages yet. Start the conversation!")
        for message in state.messages:
            own = controller.is_own_message(message)
            with st.chat_message("user" if own else "assistant"):
                st.markdown(message.message)
                st.caption(format_relative_time(message.timestamp))

    if call_action(controller.consume_scroll_request):
        _inject_scroll_js()

    with st.form("compose_form", clear_on_submit=False, border=False):
        text_col, send_col = st.columns([6, 1])
        with text_col:
            st.text_input(
                "Message",
                value=state.compose_text,
                key="compose_text",
                placeholder="Type your message...",
                disabled=state.sending,
                label_visibility="collapsed",
            )
        with send_col:
            submitted = st.form_submit_button("Send", disabled=state.sending, use_container_width=True)

    if submitted:
        # Interacting with the thread dismisses the directory dropdown
        call_action(controller.handle_pointer_down, False)
        call_action(controller.set_compose_text, st.session_state.compose_text)
        run_action(lambda c: c.send_message())
        # Reflect the controller's compose value (cleared on success, kept on failure)
        st.session_state.pop("compose_text", None)
        st.rerun()
