"""
openai_http_sdk/transport.py

Issues authenticated HTTP requests against the provider and maps responses
to parsed JSON or to SDK exceptions.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import httpx

from .config import Config, CredentialStore
from .exceptions import APIError

logger = logging.getLogger(__name__)

SCOPES = ("bearer", "organization", "assistants")


class HttpExecutor:
    """
    Performs one blocking request per call. Nothing is retried or cached.

    Header scopes:
    - ``bearer``: Authorization only (engine listing).
    - ``organization``: Authorization, OpenAI-Organization and a JSON content type.
    - ``assistants``: Authorization, OpenAI-Beta and a JSON content type.
    """
    def __init__(self, config: Config, credentials: CredentialStore, http_client: Optional[httpx.Client] = None):
        self.config = config
        self.credentials = credentials
        self._owns_client = http_client is None
        if http_client is None:
            # Without an explicit timeout httpx applies its own default.
            http_client = httpx.Client(timeout=config.timeout) if config.timeout is not None else httpx.Client()
        self.http = http_client

    def url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def headers(self, scope: str) -> Dict[str, str]:
        if scope not in SCOPES:
            raise ValueError(f"Unknown header scope: {scope!r}")
        creds = self.credentials.require()
        headers = {"Authorization": f"Bearer {creds.token}"}
        if scope == "organization":
            headers["OpenAI-Organization"] = creds.organization_id
            headers["Content-Type"] = "application/json"
        elif scope == "assistants":
            headers["OpenAI-Beta"] = self.config.assistants_beta
            headers["Content-Type"] = "application/json"
        return headers

    def request(
        self,
        method: str,
        path: str,
        scope: str,
        json_body: Any = None,
        content: Optional[bytes] = None,
        content_type: Optional[str] = None,
    ) -> Any:
        """
        Sends a request to ``base_url/path`` and returns the decoded JSON body.

        :param json_body: A JSON-serializable body, or None.
        :param content: Raw bytes (multipart uploads). Needs ``content_type``.
        :raises APIError: On a non-2xx status, a transport error or a non-JSON body.
        """
        headers = self.headers(scope)
        if content_type:
            headers["Content-Type"] = content_type
        url = self.url(path)
        logger.debug(f"{method} {url}")

        kwargs: Dict[str, Any] = {"headers": headers}
        if content is not None:
            kwargs["content"] = content
        elif json_body is not None:
            kwargs["json"] = json_body

        try:
            response = self.http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise APIError(f"Request to {path} failed: {e}", last_exception=e) from e

        self._raise_for_status(response, path)

        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            logger.error(f"{method} {url} returned a non-JSON body: {e}")
            raise APIError(
                f"Response from {path} is not valid JSON.",
                status_code=response.status_code,
                body=response.text,
                last_exception=e,
            ) from e

    def download(
        self,
        method: str,
        url: str,
        destination: Union[str, Path],
        scope: Optional[str] = None,
        json_body: Any = None,
    ) -> Path:
        """
        Streams a response body straight into ``destination``.

        ``url`` may be absolute (a generated image link, fetched without
        credentials when ``scope`` is None) or a path under ``base_url``.
        """
        destination = Path(destination)
        headers = self.headers(scope) if scope else {}
        if not url.startswith(("http://", "https://")):
            url = self.url(url)
        logger.debug(f"{method} {url} -> {destination}")

        # Credential-less links (generated images) may redirect to storage.
        kwargs: Dict[str, Any] = {"headers": headers, "follow_redirects": scope is None}
        if json_body is not None:
            kwargs["json"] = json_body

        # Bytes land in a sibling file that only replaces destination once complete.
        partial = destination.with_name(destination.name + ".part")
        try:
            with self.http.stream(method, url, **kwargs) as response:
                if not response.is_success:
                    response.read()
                    self._raise_for_status(response, url)
                with open(partial, "wb") as f:
                    for chunk in response.iter_bytes():
                        f.write(chunk)
            partial.replace(destination)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise APIError(f"Download from {url} failed: {e}", last_exception=e) from e
        finally:
            if partial.exists():
                partial.unlink()

        logger.info(f"Saved {destination}")
        return destination

    @staticmethod
    def _raise_for_status(response: httpx.Response, target: str):
        if response.is_success:
            return
        body = response.text
        logger.error(f"{target} returned HTTP {response.status_code}: {body}")
        raise APIError(f"Request to {target} was rejected: {body}", status_code=response.status_code, body=body)

    def close(self):
        if self._owns_client:
            self.http.close()

    def __enter__(self) -> "HttpExecutor":
        return self

    def __exit__(self, *exc_info):
        self.close()
