import logging
from typing import ClassVar

import pytest

from chat_widgets.errors import ThreadNotFoundError
from chat_widgets.models.enums import ChatRole
from chat_widgets.models.turn import ChatTurn
from chat_widgets.models.widgets import ButtonWidget, ChatWidget, RecyclableWidget
from chat_widgets.persistence.threads import InMemoryThreadStore
from chat_widgets.serialization.codec import WidgetCodec


class CountdownWidget(ChatWidget, RecyclableWidget):
    recycled: ClassVar[list] = []

    seconds: int

    def recycle(self) -> None:
        CountdownWidget.recycled.append(self.action)


class BrokenWidget(ChatWidget, RecyclableWidget):
    def recycle(self) -> None:
        raise RuntimeError("cannot recycle")


class TestInMemoryThreadStore:
    def setup_method(self):
        self.store = InMemoryThreadStore()
        CountdownWidget.recycled.clear()

    def test_create_thread(self):
        thread_id = self.store.create_thread()
        assert len(thread_id) == 32
        assert self.store.thread_exists(thread_id)
        assert self.store.get_turns(thread_id) == []
        assert self.store.create_thread() != thread_id

    def test_append_and_get(self):
        thread_id = self.store.create_thread()
        stored = self.store.append_turn(thread_id, ChatTurn(role=ChatRole.USER, content="hi"))
        assert stored.thread_id == thread_id
        assert self.store.get_turns(thread_id) == [stored]

    def test_turns_in_order(self):
        thread_id = self.store.create_thread()
        for text in ("one", "two", "three"):
            self.store.append_turn(thread_id, ChatTurn(role=ChatRole.USER, content=text))
        assert [t.content for t in self.store.get_turns(thread_id)] == ["one", "two", "three"]

    def test_get_turns_returns_copy(self):
        thread_id = self.store.create_thread()
        self.store.get_turns(thread_id).append("junk")
        assert self.store.get_turns(thread_id) == []

    def test_unknown_thread(self):
        with pytest.raises(ThreadNotFoundError):
            self.store.get_turns("missing")
        with pytest.raises(ThreadNotFoundError):
            self.store.append_turn("missing", ChatTurn(role=ChatRole.USER, content="hi"))
        assert not self.store.thread_exists("missing")

    def test_delete_thread(self):
        thread_id = self.store.create_thread()
        assert self.store.delete_thread(thread_id) is True
        assert self.store.delete_thread(thread_id) is False
        assert not self.store.thread_exists(thread_id)

    def test_recyclable_widgets_recycled_on_append(self):
        thread_id = self.store.create_thread()
        turn = ChatTurn(
            role=ChatRole.ASSISTANT,
            content="Starting",
            widgets=(
                CountdownWidget(label="Timer", action="timer", seconds=10),
                ButtonWidget(label="Stop", action="stop"),
            ),
        )
        self.store.append_turn(thread_id, turn)
        assert CountdownWidget.recycled == ["timer"]

    def test_recycle_failure_does_not_abort_append(self, caplog):
        thread_id = self.store.create_thread()
        turn = ChatTurn(
            role=ChatRole.ASSISTANT,
            content="Oops",
            widgets=(BrokenWidget(label="B", action="b"),),
        )
        with caplog.at_level(logging.WARNING):
            self.store.append_turn(thread_id, turn)
        assert len(self.store.get_turns(thread_id)) == 1
        assert any("cannot recycle" in r.getMessage() for r in caplog.records)


class TestChatTurn:
    def test_to_payload_injects_widget_types(self):
        turn = ChatTurn(
            role=ChatRole.ASSISTANT,
            content="Here:",
            widgets=(ButtonWidget(label="Retry", action="retry"),),
            thread_id="t1",
        )
        assert turn.to_payload(WidgetCodec()) == {
            "role": "assistant",
            "content": "Here:",
            "widgets": [{"type": "button", "label": "Retry", "action": "retry"}],
            "threadId": "t1",
        }

    def test_to_payload_without_widgets(self):
        turn = ChatTurn(role=ChatRole.USER, content="hi")
        assert turn.to_payload(WidgetCodec())["widgets"] is None
