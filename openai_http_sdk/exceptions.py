"""
openai_http_sdk/exceptions.py

Defines the SDK's exceptions, one class per failure category.
"""
from typing import Any, Optional

class OpenAISDKError(Exception):
 """Base exception for all SDK errors."""
 pass

class ConfigurationError(OpenAISDKError):
 """Raised when a required credential is missing or blank. No request is made."""
 pass

class InputError(OpenAISDKError):
 """
 Raised when caller input is unusable before any request is built:
 a local file that does not exist, an unknown tool type or voice, an empty id.
 """
 pass

class APIError(OpenAISDKError):
 """
 Raised when a request fails: a non-2xx status, a transport failure,
 or a body that is not valid JSON. The underlying detail is kept.
 """
 def __init__(
  self,
  message: str,
  status_code: Optional[int] = None,
  body: Any = None,
  last_exception: Optional[Exception] = None,
 ):
  self.status_code = status_code
  self.body = body
  self.last_exception = last_exception
  full_message = f"[{status_code}] {message}" if status_code else message
  super().__init__(full_message)

class InvalidResponseError(APIError):
 """
 Raised when the provider answered successfully but the payload lacks the
 field the operation needs, or that field is empty.
 """
 def __init__(self, message: str, body: Any = None):
  super().__init__(message, body=body)
