"""
openai_http_sdk/config.py

Settings for the SDK and the credential store backed by environment variables.
"""
import os
import json
import getpass
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any, Callable, MutableMapping

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

TOKEN_ENV = "OPENAI_API_TOKEN"
ORG_ENV = "OPENAI_ORG_ID"

# Never taken from a config file.
_SECRET_KEYS = {"token", "api_token", "api_key", "organization_id", "org_id"}

class Config:
 """
 Manages the SDK's non-secret settings.
 Priority order:
 1. Keyword arguments during OpenAIClient initialization (highest).
 2. Settings from a JSON config file, when a path is given.
 3. Default values defined here (lowest).
 """
 def __init__(self, config_path: Optional[str] = None, **kwargs: Any):
  # --- Default Settings ---
  # Logging
  self.log_level: str = "INFO"

  # Network
  self.base_url: str = "https://api.openai.com/v1"
  self.timeout: Optional[float] = None # httpx default
  self.assistants_beta: str = "assistants=v2"

  # Chat
  self.chat_model: str = "gpt-4o"
  self.vision_model: str = "gpt-4o"
  self.max_tokens: int = 1024
  self.temperature: float = 0.7
  self.system_prompt: str = "You are a helpful assistant."
  self.max_history_tokens: int = 4096

  # Media
  self.image_model: str = "dall-e-3"
  self.image_quality: str = "standard"
  self.image_size: str = "1024x1024"
  self.tts_model: str = "tts-1"
  self.stt_model: str = "whisper-1"

  # Assistants and status checks
  self.assistant_model: str = "gpt-4o"
  self.status_model: str = "gpt-3.5-turbo-instruct"

  # --- Load from file ---
  if config_path:
   self._load_from_file(config_path)

  # --- Override from kwargs (highest priority) ---
  for key, value in kwargs.items():
   if hasattr(self, key):
    setattr(self, key, value)

 def _load_from_file(self, config_path: str):
  """Loads settings from a .json file if it exists."""
  if not os.path.exists(config_path):
   logger.warning(f"Configuration file not found: {config_path}")
   return

  try:
   with open(config_path, 'r', encoding='utf-8') as f:
    config_data = json.load(f)
  except (IOError, json.JSONDecodeError) as e:
   logger.error(f"Failed to load or parse config file {config_path}: {e}")
   return

  for key, value in config_data.items():
   if key in _SECRET_KEYS:
    logger.warning(f"Ignoring credential key '{key}' in {config_path}; use {TOKEN_ENV}/{ORG_ENV}.")
    continue
   if hasattr(self, key):
    setattr(self, key, value)

 def get(self, key: str, default: Any = None) -> Any:
  """Safely gets a configuration value."""
  return getattr(self, key, default)

@dataclass(frozen=True)
class Credentials:
 token: str
 organization_id: str

def _is_blank(value: Optional[str]) -> bool:
 return value is None or not value.strip()

class CredentialStore:
 """
 Reads and writes the API token and organization id in an environment mapping.

 The mapping defaults to ``os.environ``; pass a plain dict to keep tests
 and embedded uses isolated from the process environment.
 """
 def __init__(
  self,
  environ: Optional[MutableMapping[str, str]] = None,
  token_prompt: Optional[Callable[[str], str]] = None,
  org_prompt: Optional[Callable[[str], str]] = None,
 ):
  self.environ = os.environ if environ is None else environ
  self._token_prompt = token_prompt or getpass.getpass
  self._org_prompt = org_prompt or input

 @property
 def token(self) -> Optional[str]:
  return self.environ.get(TOKEN_ENV)

 @property
 def organization_id(self) -> Optional[str]:
  return self.environ.get(ORG_ENV)

 def set_credentials(self, token: Optional[str] = None, org_id: Optional[str] = None) -> bool:
  """
  Stores both credentials, prompting for any that are missing.

  :param token: The API token. Prompted for (hidden input) when blank.
  :param org_id: The organization id. Prompted for when blank.
  :return: The result of :meth:`check_credentials` after storing, or False
           if a value was still blank after prompting.
  """
  if _is_blank(token):
   token = self._token_prompt("OpenAI API token: ")
  if _is_blank(token):
   logger.error("No API token provided; credentials not stored.")
   return False

  if _is_blank(org_id):
   org_id = self._org_prompt("OpenAI organization id: ")
  if _is_blank(org_id):
   logger.error("No organization id provided; credentials not stored.")
   return False

  self.environ[TOKEN_ENV] = token.strip()
  self.environ[ORG_ENV] = org_id.strip()
  logger.info("Credentials stored.")
  return self.check_credentials()

 def check_credentials(self) -> bool:
  """Returns True only when both credentials are present and non-blank."""
  ok = True
  if _is_blank(self.token):
   logger.error(f"{TOKEN_ENV} is not set.")
   ok = False
  if _is_blank(self.organization_id):
   logger.error(f"{ORG_ENV} is not set.")
   ok = False
  return ok

 def clear_credentials(self) -> Dict[str, bool]:
  """
  Removes both credentials. An already absent value counts as removed.
  Returns the per-variable outcome.
  """
  results: Dict[str, bool] = {}
  for name in (TOKEN_ENV, ORG_ENV):
   try:
    self.environ.pop(name, None)
    results[name] = name not in self.environ
   except (OSError, TypeError) as e:
    logger.error(f"Failed to remove {name}: {e}")
    results[name] = False
    continue
   if results[name]:
    logger.info(f"Removed {name}.")
   else:
    logger.error(f"{name} is still set after removal.")
  return results

 def require(self) -> Credentials:
  """Returns the stored credentials or raises ConfigurationError."""
  if not self.check_credentials():
   raise ConfigurationError(f"Credentials are missing. Set {TOKEN_ENV} and {ORG_ENV} first.")
  return Credentials(token=self.token.strip(), organization_id=self.organization_id.strip())
