"""
openai_http_sdk/engines.py

Engine listing and a minimal connectivity check against the legacy
completions endpoint.
"""
import logging
from typing import Any, Dict, List, TYPE_CHECKING

from .exceptions import APIError, InvalidResponseError

if TYPE_CHECKING:
    from .client import OpenAIClient

logger = logging.getLogger(__name__)


class EnginesModule:
    def __init__(self, client: 'OpenAIClient'):
        self.client = client
        self.config = client.config

    def list(self) -> List[Dict[str, Any]]:
        """Returns the provider's engine list. Sent with the bearer header only."""
        response = self.client.executor.request("GET", "engines", "bearer")
        data = response.get("data") if isinstance(response, dict) else None
        if not isinstance(data, list):
            raise InvalidResponseError("Engine list response has no data array.", body=response)
        return data

    def check_status(self) -> bool:
        """
        Sends a one-token completion to confirm the token and organization work.
        Failures are logged and reported as False.
        """
        body = {"model": self.config.status_model, "prompt": "ping", "max_tokens": 1}
        try:
            self.client.executor.request("POST", "completions", "organization", json_body=body)
        except APIError as e:
            logger.error(f"Status check failed: {e}")
            return False
        logger.info("Status check succeeded.")
        return True
