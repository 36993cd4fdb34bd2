"""
openai_http_sdk/chat.py

Chat completion, single-prompt queries, vision queries and multi-turn
chat sessions with token-based history trimming.
"""
import json
import logging
from typing import List, Dict, Optional, Any, Union, TYPE_CHECKING
from pathlib import Path

from .exceptions import InvalidResponseError
from .types import ChatMessage, ImageUrlPart, Role, TextPart
from .utils import count_tokens, require_file

if TYPE_CHECKING:
 from .client import OpenAIClient

logger = logging.getLogger(__name__)

def extract_content(payload: Any) -> str:
 """Returns ``choices[0].message.content`` or raises InvalidResponseError."""
 try:
  content = payload["choices"][0]["message"]["content"]
 except (KeyError, IndexError, TypeError) as e:
  raise InvalidResponseError("Response has no choices[0].message.content.", body=payload) from e
 if not isinstance(content, str) or not content.strip():
  raise InvalidResponseError("Response message content is empty.", body=payload)
 return content

def _system_override(overrides: Optional[str]) -> Optional[str]:
 """Reads ``system_prompt`` from a caller-supplied JSON blob. Bad JSON is logged and ignored."""
 if not overrides:
  return None
 try:
  data = json.loads(overrides)
 except json.JSONDecodeError as e:
  logger.error(f"Could not parse overrides JSON, using the default system prompt: {e}")
  return None
 if not isinstance(data, dict):
  logger.error("Overrides JSON must be an object; using the default system prompt.")
  return None
 value = data.get("system_prompt")
 if value is not None and not isinstance(value, str):
  logger.error("Overrides 'system_prompt' must be a string; using the default system prompt.")
  return None
 return value

# --- ChatSession Class ---

class ChatSession:
 """
 Manages an individual chat session, storing message history and handling
 context window trimming.
 """
 def __init__(self, client: 'OpenAIClient', model: Optional[str] = None, system_prompt: Optional[str] = None):
  self.client = client
  self.config = client.config
  self.model = model or self.config.chat_model
  self.history: List[Dict[str, str]] = []
  self.max_history_tokens = self.config.get("max_history_tokens", 4096)

  if system_prompt:
   self.history.append({"role": "system", "content": system_prompt})

 def _trim_history(self):
  """
  Trims the conversation history to stay within the `max_history_tokens` limit.
  It always preserves the system prompt (if any) and the latest message.
  """
  total_tokens = sum(count_tokens(msg["content"]) for msg in self.history)

  if total_tokens <= self.max_history_tokens:
   return

  system_prompt = None
  if self.history and self.history[0]["role"] == "system":
   system_prompt = self.history.pop(0)

  while total_tokens > self.max_history_tokens and len(self.history) > 1:
   removed_message = self.history.pop(0)
   total_tokens -= count_tokens(removed_message["content"])

  if system_prompt:
   self.history.insert(0, system_prompt)

  logger.debug(f"History trimmed to {total_tokens} tokens to fit within the {self.max_history_tokens} limit.")

 def generate(self, msg: str, **kwargs: Any) -> str:
  """Sends a message with the running history and records the reply."""
  self.history.append({"role": "user", "content": msg})
  self._trim_history()

  try:
   response_text = self.client.chat.create(self.history, model=self.model, **kwargs)
  except Exception:
   # Drop the unanswered turn so the next call does not repeat it.
   self.history.pop()
   raise

  self.history.append({"role": "assistant", "content": response_text})
  return response_text

 def get_history(self) -> List[Dict[str, str]]:
  """Returns the current chat history."""
  return self.history

# --- ChatModule Class ---

class ChatModule:
 """Module for chat completion calls."""
 def __init__(self, client: 'OpenAIClient'):
  self.client = client
  self.config = client.config

 def create(
  self,
  messages: List[Union[ChatMessage, Dict[str, Any]]],
  model: Optional[str] = None,
  max_tokens: Optional[int] = None,
  temperature: Optional[float] = None,
 ) -> str:
  """
  Posts a message list to the chat-completions endpoint.

  :return: ``choices[0].message.content`` of the response.
  :raises InvalidResponseError: If the content is missing or empty.
  """
  payload_messages = [m.to_dict() if isinstance(m, ChatMessage) else m for m in messages]
  final_model = model or self.config.chat_model

  if logger.isEnabledFor(logging.DEBUG):
   prompt_tokens = sum(
    count_tokens(m["content"]) for m in payload_messages if isinstance(m.get("content"), str)
   )
   logger.debug(f"Chat completion with model '{final_model}', ~{prompt_tokens} prompt tokens")

  body = {
   "model": final_model,
   "messages": payload_messages,
   "max_tokens": max_tokens if max_tokens is not None else self.config.max_tokens,
   "temperature": temperature if temperature is not None else self.config.temperature,
  }
  response = self.client.executor.request("POST", "chat/completions", "organization", json_body=body)
  return extract_content(response)

 def complete(
  self,
  prompt: str,
  system_prompt: Optional[str] = None,
  overrides: Optional[str] = None,
  **kwargs: Any,
 ) -> str:
  """
  Asks a single question with a system prompt in front of it.

  :param prompt: The user message.
  :param system_prompt: System text; defaults to ``config.system_prompt``.
  :param overrides: Optional JSON object whose ``system_prompt`` key replaces the system text.
  """
  system_text = _system_override(overrides) or system_prompt or self.config.system_prompt
  messages = [
   ChatMessage(Role.SYSTEM, system_text),
   ChatMessage(Role.USER, prompt),
  ]
  return self.create(messages, **kwargs)

 def query(self, prompt: str, **kwargs: Any) -> str:
  """Sends ``prompt`` as the only (system-role) message."""
  return self.create([ChatMessage(Role.SYSTEM, prompt)], **kwargs)

 def vision(self, prompt: str, image_path: Union[str, Path], model: Optional[str] = None, **kwargs: Any) -> str:
  """
  Asks a question about a local image.

  :raises InputError: If ``image_path`` does not exist. No request is made.
  """
  image_file = require_file(image_path, "Image file")
  image_part = ImageUrlPart.from_png_bytes(image_file.read_bytes())
  message = ChatMessage(Role.USER, [TextPart(prompt), image_part])
  return self.create([message], model=model or self.config.vision_model, **kwargs)
