"""
Configuration settings for the Streamlit application.
"""

# Page configuration for Streamlit
PAGE_CONFIG = {
    "page_title": "Campus Chat - Messages",
    "page_icon": "💬",
    "layout": "wide",
    "initial_sidebar_state": "expanded",
}

# Seconds the page waits on the controller loop before giving up on a call
CONTROLLER_CALL_TIMEOUT = 60

# Height of the scrollable thread container (px)
THREAD_HEIGHT = 480

# Toast icons per notification level
TOAST_ICONS = {
    "success": "✅",
    "info": "ℹ️",
    "warning": "⚠️",
    "error": "❌",
}
