"""
Streamlit runner for the chat client.

Usage:
    python run.py

Environment variables (set in .env file):
    API_BASE_URL=http://localhost:8080 - Chat backend
    API_TOKEN=... - Bearer token for the backend
    CURRENT_USER_ID=u123 - Signed-in user
    DEBUG=true - Enable debug logging
"""

import sys
from pathlib import Path

from streamlit.web import cli as stcli

from app.config import get_settings

if __name__ == "__main__":
    settings = get_settings()

    print(f"Starting {settings.app_name}...")
    print(f"Chat API: {settings.api_base_url}")
    print(f"Signed in as: {settings.current_user_id or '(nobody)'}")
    print(f"Debug Mode: {settings.debug}")

    app_path = Path(__file__).parent / "app" / "streamlit" / "app.py"
    sys.argv = ["streamlit", "run", str(app_path)]
    sys.exit(stcli.main())
