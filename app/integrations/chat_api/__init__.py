# Chat backend integration module
from app.integrations.chat_api.client import ChatAPIClient, ChatAPIError
from app.integrations.chat_api.transport import ChatTransport

__all__ = ["ChatAPIClient", "ChatAPIError", "ChatTransport"]
