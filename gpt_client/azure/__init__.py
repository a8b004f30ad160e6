"""
Azure-hosted chat-completion client package.

Exports:
- AzureChatClient: ``ask`` / ``ask_stream`` against one deployment
- AzureChatClientBuilder: validated construction
"""

from .client import AzureChatClient, AzureChatClientBuilder

__all__ = ["AzureChatClient", "AzureChatClientBuilder"]
