"""
openai_http_sdk/assistants.py

The assistant / thread / message / run workflow.

A typical conversation::

    assistant = client.assistants.create_assistant("Answer briefly.", "Helper", "code_interpreter")
    thread = client.assistants.create_thread()
    client.assistants.add_message(thread.id, "user", "What is 2+2?")
    run = client.assistants.create_run(thread.id, assistant.id)
    while not run.is_terminal:
        time.sleep(1)
        run = client.assistants.get_run_result(thread.id, run.id)
    messages = client.assistants.get_thread_messages(thread.id)

The polling loop belongs to the caller, who chooses the interval, the
timeout and how to cancel. A run is finished once its status is in
``TERMINAL_RUN_STATUSES`` (completed, failed, cancelled, expired); any
other status, including ones the provider adds later, means poll again.
"""
import logging
from typing import List, Optional, Union, TYPE_CHECKING

from .exceptions import InputError, InvalidResponseError
from .types import Assistant, Message, Role, Run, Thread, ToolType

if TYPE_CHECKING:
    from .client import OpenAIClient

logger = logging.getLogger(__name__)


def _require_id(value: str, what: str) -> str:
    if not value or not str(value).strip():
        raise InputError(f"{what} is required.")
    return value


class AssistantsModule:
    """
    Client side of the provider's assistants protocol.

    Holds no state between calls; every resource is addressed by the id the
    provider returned, so a restarted process can resume with ids alone.
    """
    def __init__(self, client: 'OpenAIClient'):
        self.client = client
        self.config = client.config

    def _call(self, method: str, path: str, body=None):
        return self.client.executor.request(method, path, "assistants", json_body=body)

    def create_assistant(
        self,
        instructions: str,
        name: str,
        tool_type: Union[str, ToolType],
        model: Optional[str] = None,
    ) -> Assistant:
        """
        Creates a persistent assistant.

        :param tool_type: ``code_interpreter``, ``function`` or ``file_search``.
        :raises InputError: For any other tool type, before a request is built.
        """
        tool = ToolType.parse(tool_type)
        body = {
            "instructions": instructions,
            "name": name,
            "tools": [tool.descriptor()],
            "model": model or self.config.assistant_model,
        }
        assistant = Assistant.from_dict(self._call("POST", "assistants", body))
        logger.info(f"Created assistant {assistant.id} ({tool.value})")
        return assistant

    def create_thread(self) -> Thread:
        """Creates an empty conversation thread."""
        thread = Thread.from_dict(self._call("POST", "threads"))
        logger.info(f"Created thread {thread.id}")
        return thread

    def add_message(self, thread_id: str, role: Union[str, Role], content: str) -> Message:
        """Appends a message to a thread. Calling it twice appends twice."""
        _require_id(thread_id, "thread_id")
        body = {"role": Role.parse(role).value, "content": content}
        message = Message.from_dict(self._call("POST", f"threads/{thread_id}/messages", body))
        logger.debug(f"Added message {message.id} to thread {thread_id}")
        return message

    def create_run(self, thread_id: str, assistant_id: str) -> Run:
        """Starts processing a thread with an assistant."""
        _require_id(thread_id, "thread_id")
        _require_id(assistant_id, "assistant_id")
        run = Run.from_dict(self._call("POST", f"threads/{thread_id}/runs", {"assistant_id": assistant_id}))
        logger.info(f"Started run {run.id} on thread {thread_id} (status: {run.status})")
        return run

    def get_run_result(self, thread_id: str, run_id: str) -> Run:
        """Fetches the current snapshot of a run. Read-only."""
        _require_id(thread_id, "thread_id")
        _require_id(run_id, "run_id")
        run = Run.from_dict(self._call("GET", f"threads/{thread_id}/runs/{run_id}"))
        logger.debug(f"Run {run_id} status: {run.status}")
        return run

    def get_thread_messages(self, thread_id: str) -> List[Message]:
        """Returns the thread's messages in the order the provider lists them."""
        _require_id(thread_id, "thread_id")
        response = self._call("GET", f"threads/{thread_id}/messages")
        data = response.get("data") if isinstance(response, dict) else None
        if not isinstance(data, list):
            raise InvalidResponseError("Message list response has no data array.", body=response)
        return [Message.from_dict(item) for item in data]
