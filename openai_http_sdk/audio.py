"""
openai_http_sdk/audio.py

Handles speech synthesis and audio transcription.
"""
import logging
from pathlib import Path
from typing import Optional, Union, TYPE_CHECKING

from .exceptions import InputError, InvalidResponseError
from .types import Voice
from .utils import build_multipart, make_boundary, open_with_default_app, require_file

if TYPE_CHECKING:
    from .client import OpenAIClient

logger = logging.getLogger(__name__)


class AudioModule:
    """Module for audio tasks (transcription and synthesis)."""
    def __init__(self, client: 'OpenAIClient'):
        self.client = client
        self.config = client.config

    # --- Text-to-Speech ---

    def text_to_speech(
        self,
        text: str,
        destination: Union[str, Path],
        voice: Optional[Union[str, Voice]] = None,
        model: Optional[str] = None,
        open_file: bool = False,
    ) -> Path:
        """
        Synthesizes ``text`` and streams the audio into ``destination``.

        :param voice: One of :class:`Voice`. Picked at random when omitted.
        :param open_file: Launch the result with the OS default player.
        """
        destination = Path(destination)
        if not destination.parent.is_dir():
            logger.error(f"Output directory not found: {destination.parent}")
            raise InputError(f"Output directory not found: {destination.parent}")
        chosen = Voice.parse(voice) if voice else self.client.rng.choice(list(Voice))
        body = {
            "model": model or self.config.tts_model,
            "input": text,
            "voice": chosen.value,
        }
        logger.debug(f"Synthesizing speech with voice '{chosen.value}'")
        path = self.client.executor.download(
            "POST", "audio/speech", destination, scope="organization", json_body=body
        )
        if open_file:
            open_with_default_app(path)
        return path

    # --- Transcription ---

    def transcribe(self, audio_path: Union[str, Path], model: Optional[str] = None) -> str:
        """
        Uploads an audio file and returns the recognized text.

        :raises InputError: If ``audio_path`` does not exist. No request is made.
        :raises InvalidResponseError: If the response carries no ``text``.
        """
        audio_file = require_file(audio_path, "Audio file")
        final_model = model or self.config.stt_model

        body, content_type = build_multipart(
            audio_file.read_bytes(),
            audio_file.name,
            final_model,
            boundary=make_boundary(self.client.rng),
        )
        logger.debug(f"Transcribing {audio_file.name} with model '{final_model}'")
        response = self.client.executor.request(
            "POST", "audio/transcriptions", "organization", content=body, content_type=content_type
        )

        text = response.get("text") if isinstance(response, dict) else None
        if not isinstance(text, str):
            raise InvalidResponseError("Transcription response has no text.", body=response)
        return text
