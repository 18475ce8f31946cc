"""
Main Streamlit application for Campus Chat.
Conversations and the "new message" directory on the left, the active thread
in the center.
"""
import logging
import sys
from pathlib import Path

# Add project root to Python path so the app package resolves under `streamlit run`
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import streamlit as st
from components.conversation_list import render_conversation_list
from components.directory_section import render_directory_section
from components.thread_section import render_thread_section
from config.settings import PAGE_CONFIG
from services.chat_session import show_pending_toasts, snapshot

from app.config import get_settings
from app.services.session_context import SessionContext


def configure_logging():
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main():
    """
    Main application entry point.
    """
    configure_logging()
    st.set_page_config(**PAGE_CONFIG)

    st.markdown("""
        <style>
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
        .app-title {
            font-size: 2rem;
            font-weight: 700;
            margin-bottom: 0.25rem;
        }
        </style>
    """, unsafe_allow_html=True)

    settings = get_settings()
    if not SessionContext.from_settings(settings).is_authenticated:
        st.warning("No signed-in user configured (CURRENT_USER_ID). Messages cannot be attributed to you.")

    state = snapshot()

    st.markdown('<div class="app-title">Messages</div>', unsafe_allow_html=True)
    st.caption("Chat with students, professors, alumni and staff")

    with st.sidebar:
        render_directory_section(state)
        st.divider()
        render_conversation_list(state)

    render_thread_section(state)
    show_pending_toasts()


if __name__ == "__main__":
    main()
