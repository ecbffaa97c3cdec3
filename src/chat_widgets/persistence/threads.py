"""Storage of conversation threads.

This module defines the ``ThreadStore`` interface used by the chat service
and a thread-safe in-memory implementation suitable for tests and local
development.
"""

import threading
import uuid
from abc import ABC, abstractmethod

from chat_widgets.errors import ThreadNotFoundError
from chat_widgets.models.base import ThreadId
from chat_widgets.models.turn import ChatTurn
from chat_widgets.models.widgets import RecyclableWidget
from chat_widgets.observability.logging import get_logger

logger = get_logger(__name__)


class ThreadStore(ABC):
    """Interface for persisting the turns of conversation threads."""

    @abstractmethod
    def create_thread(self) -> ThreadId:
        """Creates an empty thread.

        Returns:
            The identifier of the new thread.
        """
        pass  # pragma: no cover

    @abstractmethod
    def thread_exists(self, thread_id: ThreadId) -> bool:
        pass  # pragma: no cover

    @abstractmethod
    def append_turn(self, thread_id: ThreadId, turn: ChatTurn) -> ChatTurn:
        """Appends a turn to a thread.

        Widgets on the turn that implement ``RecyclableWidget`` are recycled
        once the turn is stored.

        Args:
            thread_id: The thread to append to.
            turn: The turn to store. Its ``thread_id`` is set to ``thread_id``.

        Returns:
            The stored turn.

        Raises:
            ThreadNotFoundError: If the thread does not exist.
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_turns(self, thread_id: ThreadId) -> list[ChatTurn]:
        """Lists the turns of a thread, oldest first.

        Raises:
            ThreadNotFoundError: If the thread does not exist.
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete_thread(self, thread_id: ThreadId) -> bool:
        """Deletes a thread.

        Returns:
            True if the thread existed.
        """
        pass  # pragma: no cover


class InMemoryThreadStore(ThreadStore):
    """Thread-safe, ephemeral implementation of ``ThreadStore``."""

    def __init__(self):
        self._lock = threading.Lock()
        self._threads: dict[ThreadId, list[ChatTurn]] = {}

    def create_thread(self) -> ThreadId:
        thread_id = uuid.uuid4().hex
        with self._lock:
            self._threads[thread_id] = []
        return thread_id

    def thread_exists(self, thread_id: ThreadId) -> bool:
        return thread_id in self._threads

    def append_turn(self, thread_id: ThreadId, turn: ChatTurn) -> ChatTurn:
        if turn.thread_id != thread_id:
            turn = turn.model_copy(update={"thread_id": thread_id})
        with self._lock:
            if thread_id not in self._threads:
                raise ThreadNotFoundError(thread_id)
            self._threads[thread_id].append(turn)

        for widget in turn.widgets or ():
            if isinstance(widget, RecyclableWidget):
                try:
                    widget.recycle()
                except Exception as e:
                    logger.warning(
                        f"Failed to recycle '{widget.type}' widget in thread {thread_id}: {str(e)}"
                    )
        return turn

    def get_turns(self, thread_id: ThreadId) -> list[ChatTurn]:
        turns = self._threads.get(thread_id)
        if turns is None:
            raise ThreadNotFoundError(thread_id)
        return list(turns)

    def delete_thread(self, thread_id: ThreadId) -> bool:
        with self._lock:
            return self._threads.pop(thread_id, None) is not None
