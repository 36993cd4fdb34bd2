"""
openai_http_sdk/images.py

Handles image generation and saving the generated image locally.
"""
import logging
from pathlib import Path
from typing import Optional, Union, TYPE_CHECKING

from .exceptions import InvalidResponseError
from .utils import normalize_image_path

if TYPE_CHECKING:
    from .client import OpenAIClient

logger = logging.getLogger(__name__)


class ImageModule:
    """Module for generating images."""
    def __init__(self, client: 'OpenAIClient'):
        self.client = client
        self.config = client.config

    def create(
        self,
        prompt: str,
        model: Optional[str] = None,
        quality: Optional[str] = None,
        size: Optional[str] = None,
    ) -> str:
        """
        Requests one image and returns its URL without downloading it.

        :raises InvalidResponseError: If the response carries no ``data[0].url``.
        """
        body = {
            "model": model or self.config.image_model,
            "prompt": prompt,
            "n": 1,
            "quality": quality or self.config.image_quality,
            "size": size or self.config.image_size,
        }
        logger.debug(f"Generating image with model '{body['model']}' ({body['size']}, {body['quality']})")
        response = self.client.executor.request("POST", "images/generations", "organization", json_body=body)

        try:
            url = response["data"][0]["url"]
        except (KeyError, IndexError, TypeError) as e:
            raise InvalidResponseError("Image response has no data[0].url.", body=response) from e
        if not url:
            raise InvalidResponseError("Image response has an empty URL.", body=response)
        return url

    def generate(
        self,
        prompt: str,
        destination: Union[str, Path] = "image.png",
        model: Optional[str] = None,
        quality: Optional[str] = None,
        size: Optional[str] = None,
    ) -> Path:
        """
        Generates an image and downloads it.

        The destination is normalized first: relative paths resolve against
        the working directory and the suffix becomes ``.png``. Missing parent
        directories are created only once the provider has returned a URL.

        :return: The path the image was written to.
        """
        target = normalize_image_path(destination, create_parents=False)
        url = self.create(prompt, model=model, quality=quality, size=size)
        target.parent.mkdir(parents=True, exist_ok=True)
        return self.client.executor.download("GET", url, target)
