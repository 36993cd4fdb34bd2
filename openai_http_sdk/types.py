"""
openai_http_sdk/types.py

Typed request and response structures. Payloads are decoded from plain JSON
only at the transport boundary; everything past it works with these.
"""
import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from .exceptions import InputError, InvalidResponseError

# Statuses after which a run never changes again. The provider may add
# statuses; anything not listed here is treated as still running.
TERMINAL_RUN_STATUSES = frozenset({"completed", "failed", "cancelled", "expired"})


class ToolType(str, Enum):
    """Capability granted to an assistant."""
    CODE_INTERPRETER = "code_interpreter"
    FUNCTION = "function"
    FILE_SEARCH = "file_search"

    @classmethod
    def parse(cls, value: Union[str, "ToolType"]) -> "ToolType":
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(t.value for t in cls)
            raise InputError(f"Unknown tool type {value!r}; expected one of: {allowed}") from None

    def descriptor(self) -> Dict[str, Any]:
        if self is ToolType.FUNCTION:
            return {
                "type": "function",
                "function": {
                    "name": "placeholder_function",
                    "parameters": {"type": "object", "properties": {}},
                },
            }
        return {"type": self.value}


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"

    @classmethod
    def parse(cls, value: Union[str, "Role"]) -> "Role":
        try:
            return cls(value)
        except ValueError:
            raise InputError(f"Unknown message role {value!r}") from None


class Voice(str, Enum):
    """Voices accepted by the speech endpoint."""
    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"

    @classmethod
    def parse(cls, value: Union[str, "Voice"]) -> "Voice":
        try:
            return cls(value)
        except ValueError:
            raise InputError(f"Unknown voice {value!r}") from None


# --- Message content parts ---

@dataclass(frozen=True)
class TextPart:
    text: str

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise InputError("Text part must hold a string.")

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ImageUrlPart:
    url: str

    def __post_init__(self):
        if not self.url:
            raise InputError("Image part needs a URL.")

    @classmethod
    def from_png_bytes(cls, data: bytes) -> "ImageUrlPart":
        encoded = base64.b64encode(data).decode("ascii")
        return cls(url=f"data:image/png;base64,{encoded}")

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "image_url", "image_url": {"url": self.url}}


ContentPart = Union[TextPart, ImageUrlPart]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: Union[str, Sequence[ContentPart]]

    def to_dict(self) -> Dict[str, Any]:
        if isinstance(self.content, str):
            content: Any = self.content
        else:
            content = [part.to_dict() for part in self.content]
        return {"role": Role.parse(self.role).value, "content": content}


# --- Assistant workflow resources ---

def _require_id(payload: Any, kind: str) -> str:
    if not isinstance(payload, dict) or not payload.get("id"):
        raise InvalidResponseError(f"{kind} response has no id.", body=payload)
    return payload["id"]


@dataclass
class Assistant:
    id: str
    name: Optional[str] = None
    instructions: Optional[str] = None
    model: Optional[str] = None
    tools: List[Dict[str, Any]] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, payload: Any) -> "Assistant":
        return cls(
            id=_require_id(payload, "Assistant"),
            name=payload.get("name"),
            instructions=payload.get("instructions"),
            model=payload.get("model"),
            tools=list(payload.get("tools") or []),
            raw=payload,
        )


@dataclass
class Thread:
    id: str
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, payload: Any) -> "Thread":
        return cls(id=_require_id(payload, "Thread"), raw=payload)


@dataclass
class Message:
    id: str
    thread_id: Optional[str]
    role: str
    content: Any
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, payload: Any) -> "Message":
        return cls(
            id=_require_id(payload, "Message"),
            thread_id=payload.get("thread_id"),
            role=payload.get("role", ""),
            content=payload.get("content"),
            raw=payload,
        )

    @property
    def text(self) -> str:
        """Concatenated text of the message's text parts."""
        if isinstance(self.content, str):
            return self.content
        chunks = []
        for part in self.content or []:
            if part.get("type") != "text":
                continue
            value = part.get("text")
            # assistants=v2 nests the string under text.value
            if isinstance(value, dict):
                value = value.get("value")
            if value:
                chunks.append(value)
        return "\n".join(chunks)


@dataclass
class Run:
    id: str
    thread_id: Optional[str]
    assistant_id: Optional[str]
    status: str
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, payload: Any) -> "Run":
        run_id = _require_id(payload, "Run")
        status = payload.get("status")
        if not status:
            raise InvalidResponseError("Run response has no status.", body=payload)
        return cls(
            id=run_id,
            thread_id=payload.get("thread_id"),
            assistant_id=payload.get("assistant_id"),
            status=status,
            raw=payload,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_RUN_STATUSES
