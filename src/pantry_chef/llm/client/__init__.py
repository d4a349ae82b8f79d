"""Chat client implementations."""

from pantry_chef.llm.client.openai import OpenAIChatClient
from pantry_chef.llm.client.protocol import ChatClientProtocol
from pantry_chef.llm.client.proxy import ProxyChatClient


__all__ = [
    "ChatClientProtocol",
    "OpenAIChatClient",
    "ProxyChatClient",
]
