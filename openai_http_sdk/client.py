"""
openai_http_sdk/client.py

The main client class that wires configuration, credentials and transport
into the SDK's modules.
"""
import random
from pathlib import Path
from typing import Optional, Any, Union

import httpx

from .config import Config, CredentialStore
from .transport import HttpExecutor
from .chat import ChatModule, ChatSession
from .images import ImageModule
from .audio import AudioModule
from .assistants import AssistantsModule
from .engines import EnginesModule
from . import utils

class OpenAIClient:
 """
 The main entry point for openai-http-sdk.

 Every operation reads its credentials from ``credentials`` (a
 :class:`CredentialStore`, backed by the process environment unless another
 mapping is supplied) and fails with ConfigurationError before any request
 when they are missing.
 """
 def __init__(
  self,
  config_path: Optional[str] = None,
  credentials: Optional[CredentialStore] = None,
  http_client: Optional[httpx.Client] = None,
  rng: Optional[random.Random] = None,
  **kwargs: Any,
 ):
  # 1. Initialize configuration
  self.config = Config(config_path, **kwargs)

  # 2. Setup logging based on config
  utils.setup_logging(self.config.log_level)

  # 3. Shared collaborators
  self.credentials = credentials or CredentialStore()
  self.executor = HttpExecutor(self.config, self.credentials, http_client)
  # Voice and multipart boundary selection; seed it for reproducible requests.
  self.rng = rng or random.Random()

  # 4. Initialize modules, passing a reference to this client instance
  self.chat = ChatModule(self)
  self.images = ImageModule(self)
  self.audio = AudioModule(self)
  self.assistants = AssistantsModule(self)
  self.engines = EnginesModule(self)

 def new_chat(self, model: Optional[str] = None, system_prompt: Optional[str] = None) -> ChatSession:
  """
  Creates a new, isolated chat session with its own history.

  :param model: The model to use for this session. Overrides ``config.chat_model``.
  :param system_prompt: An initial prompt to set the assistant's behavior.
  """
  return ChatSession(self, model, system_prompt)

 def generate_image(self, prompt: str, destination: Union[str, Path] = "image.png", **kwargs: Any) -> Path:
  """
  Generates an image from a text prompt and saves it as PNG.

  :return: The normalized path of the saved image.
  :raises APIError: If generation or the download fails.
  """
  return self.images.generate(prompt, destination, **kwargs)

 def transcribe_audio(self, audio_path: Union[str, Path], **kwargs: Any) -> str:
  """
  Transcribes an audio file into text.

  :raises InputError: If the file does not exist.
  :raises APIError: If the request fails.
  """
  return self.audio.transcribe(audio_path, **kwargs)

 def text_to_speech(self, text: str, destination: Union[str, Path], **kwargs: Any) -> Path:
  """
  Converts text into speech and writes it to ``destination``.

  :raises APIError: If synthesis fails.
  """
  return self.audio.text_to_speech(text, destination, **kwargs)

 def close(self):
  self.executor.close()

 def __enter__(self) -> "OpenAIClient":
  return self

 def __exit__(self, *exc_info):
  self.close()
