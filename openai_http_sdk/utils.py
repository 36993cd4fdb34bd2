"""
openai_http_sdk/utils.py

Shared helpers: logging setup, local path handling, multipart encoding
and token counting.
"""
import os
import sys
import random
import string
import logging
import subprocess
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple, Union

import tiktoken

from .exceptions import InputError

logger = logging.getLogger(__name__)

# --- Logging Setup ---

def setup_logging(level: str = "INFO"):
  """
  Configures basic logging for the SDK.
  Avoids adding duplicate handlers if logging is already configured.
  """
  log_level = getattr(logging, str(level).upper(), logging.INFO)
  root_logger = logging.getLogger("openai_http_sdk")
  root_logger.setLevel(log_level)

  if not any(type(h) is logging.StreamHandler for h in root_logger.handlers):
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
      "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
      datefmt="%Y-%m-%d %H:%M:%S"
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.propagate = False

# --- Local Files ---

def require_file(path: Union[str, Path], what: str = "File") -> Path:
  """Returns ``path`` as a Path, or raises InputError if it is not an existing file."""
  resolved = Path(path).expanduser()
  if not resolved.is_file():
    logger.error(f"{what} not found: {resolved}")
    raise InputError(f"{what} not found: {resolved}")
  return resolved

def normalize_image_path(path: Union[str, Path], create_parents: bool = True) -> Path:
  """
  Resolves where a generated image is written.

  Relative paths are anchored at the current working directory, the suffix
  is forced to ``.png`` and, unless ``create_parents`` is False, missing
  parent directories are created.
  Applying it to its own result returns the same path.
  """
  target = Path(path).expanduser()
  if not target.is_absolute():
    target = Path.cwd() / target
  if target.suffix.lower() != ".png":
    target = target.with_suffix(".png")
  if create_parents:
    target.parent.mkdir(parents=True, exist_ok=True)
  return target

def open_with_default_app(path: Union[str, Path]):
  """Opens a file with whatever the OS associates with it."""
  path = str(path)
  if sys.platform.startswith("win"):
    os.startfile(path)  # type: ignore[attr-defined]
  elif sys.platform == "darwin":
    subprocess.Popen(["open", path])
  else:
    subprocess.Popen(["xdg-open", path])

# --- Multipart Encoding ---

_BOUNDARY_CHARS = string.ascii_letters + string.digits

def make_boundary(rng: Optional[random.Random] = None) -> str:
  rng = rng or random.Random()
  return "----OpenAIHttpSdkBoundary" + "".join(rng.choice(_BOUNDARY_CHARS) for _ in range(16))

def build_multipart(
  file_bytes: bytes,
  filename: str,
  model: str,
  boundary: str,
  file_content_type: str = "audio/wav",
) -> Tuple[bytes, str]:
  """
  Builds a two-part multipart/form-data body: the file, then the model name.
  The file bytes are embedded unchanged.

  :return: The body and the matching Content-Type header value.
  """
  delimiter = f"--{boundary}".encode("latin-1")
  crlf = b"\r\n"
  # Header values go through latin-1 so every byte maps to one character.
  file_header = (
    f'Content-Disposition: form-data; name="file"; filename="{filename}"\r\n'
    f"Content-Type: {file_content_type}\r\n\r\n"
  ).encode("latin-1", errors="replace")
  model_header = b'Content-Disposition: form-data; name="model"\r\n\r\n'

  body = b"".join([
    delimiter, crlf, file_header, file_bytes, crlf,
    delimiter, crlf, model_header, model.encode("utf-8"), crlf,
    delimiter, b"--", crlf,
  ])
  return body, f"multipart/form-data; boundary={boundary}"

# --- Token Counting ---

@lru_cache(maxsize=1)
def get_encoding():
  # cl100k_base covers the chat models this SDK targets.
  return tiktoken.get_encoding("cl100k_base")

def count_tokens(text: str) -> int:
  """Counts tokens in a string with tiktoken."""
  if not text:
    return 0
  return len(get_encoding().encode(text))
