"""ModelStore registration semantics."""

from __future__ import annotations

from chat_runtime.base.models import ModelDescriptor
from chat_runtime.runtime import ChatWrapper, ModelStore, load_model
from chat_runtime.tests.utils import FakeChat


def test_register_get_remove() -> None:
    store = ModelStore()
    chat = FakeChat()
    store.register("a", chat)
    assert "a" in store
    assert store.get("a") is chat
    assert store.get("missing") is None
    assert store.remove("a") is chat
    assert len(store) == 0


def test_register_replaces_existing(log_events) -> None:
    store = ModelStore()
    store.register("a", FakeChat("one"))
    replacement = FakeChat("two")
    store.register("a", replacement)
    assert store.get("a") is replacement
    assert [e["replaced"] for e in log_events.named("model.registered")] == [False, True]


def test_names_are_sorted() -> None:
    store = ModelStore()
    for name in ("zeta", "alpha", "mid"):
        store.register(name, FakeChat())
    assert store.names() == ["alpha", "mid", "zeta"]


def test_load_model_registers_wrapped_model() -> None:
    store = ModelStore()
    descriptor = ModelDescriptor.model_validate({"name": "assistant", "from": "openai:gpt-4o"})
    chat = load_model(store, descriptor, {"openai_api_key": "k"})
    assert isinstance(chat, ChatWrapper)
    assert store.get("assistant") is chat
