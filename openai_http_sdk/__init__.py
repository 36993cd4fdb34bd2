"""
openai-http-sdk

A small synchronous client for the OpenAI HTTP API: chat, vision, images,
speech, transcription and the assistants workflow.
"""

__version__ = "0.1.0"

from .client import OpenAIClient
from .config import Config, CredentialStore, Credentials
from .types import (
 TERMINAL_RUN_STATUSES,
 Assistant,
 Message,
 Run,
 Thread,
 ToolType,
 Voice,
)
from .exceptions import (
 OpenAISDKError,
 ConfigurationError,
 InputError,
 APIError,
 InvalidResponseError,
)

__all__ = [
 "OpenAIClient",
 "Config",
 "CredentialStore",
 "Credentials",
 "TERMINAL_RUN_STATUSES",
 "Assistant",
 "Message",
 "Run",
 "Thread",
 "ToolType",
 "Voice",
 "OpenAISDKError",
 "ConfigurationError",
 "InputError",
 "APIError",
 "InvalidResponseError",
]
