"""Local and Hugging Face backends with the heavy runtimes replaced by fakes."""

from __future__ import annotations

import threading
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from chat_runtime.base.errors import FailedToLoadModel
from chat_runtime.base.factory import build_adapter, resolve_selector
from chat_runtime.base.models import ModelDescriptor
from chat_runtime.huggingface import loaders as hf_loaders
from chat_runtime.local import loaders as local_loaders
from chat_runtime.local import runtime_imports
from chat_runtime.local.llama_cpp_chat import LlamaCppChat
from chat_runtime.local.transformers_chat import TransformersChat, _CancelGeneration
from chat_runtime.tests.utils import user_request


def _build(payload: Dict[str, Any], params=None):
    descriptor = ModelDescriptor.model_validate(payload)
    return build_adapter(resolve_selector(descriptor), descriptor, params or {})


class FakeLlama:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    def create_chat_completion(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if kwargs.get("stream"):
            return iter(
                [
                    {"id": "c1", "object": "chat.completion.chunk", "created": 1, "model": "x",
                     "choices": [{"index": 0, "delta": {"role": "assistant"}}]},
                    {"id": "c1", "object": "chat.completion.chunk", "created": 1, "model": "x",
                     "choices": [{"index": 0, "delta": {"content": "Hi"}}]},
                    {"id": "c1", "object": "chat.completion.chunk", "created": 1, "model": "x",
                     "choices": [{"index": 0, "delta": {"content": "!"}, "finish_reason": "stop"}]},
                ]
            )
        return {
            "id": "c0",
            "object": "chat.completion",
            "created": 1,
            "model": "/models/tiny.gguf",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": "Hi!"}, "finish_reason": "stop"}],
            "usage": {"prompt_tokens": 4, "completion_tokens": 2, "total_tokens": 6},
        }

    def tokenize(self, text: bytes, add_bos: bool = False) -> List[int]:
        return list(range(len(text.split())))


def test_llama_cpp_chat_request_maps_sampling_fields() -> None:
    llm = FakeLlama()
    chat = LlamaCppChat("tiny", llm)
    resp = chat.chat_request(user_request("hello there", temperature=0.4, stop="END", max_tokens=16))
    assert resp.model == "tiny"
    assert resp.first_text() == "Hi!"
    call = llm.calls[0]
    assert call["messages"] == [{"role": "user", "content": "hello there"}]
    assert call["max_tokens"] == 16
    assert call["stop"] == ["END"]
    assert call["temperature"] == 0.4


def test_llama_cpp_stream_appends_usage_when_requested() -> None:
    chat = LlamaCppChat("tiny", FakeLlama())
    req = user_request("hello there", stream=True, stream_options={"include_usage": True})
    chunks = list(chat.chat_stream(req))
    assert "".join(c.delta_text() or "" for c in chunks) == "Hi!"
    usage = chunks[-1].usage
    assert usage is not None
    assert usage.prompt_tokens == 2
    assert usage.completion_tokens == 2
    assert chunks[-1].choices == []


def test_paused_llama_cpp_stream_does_not_block_requests() -> None:
    chat = LlamaCppChat("tiny", FakeLlama())
    stream = chat.chat_stream(user_request("hello there", stream=True))
    next(stream)

    answered = threading.Event()

    def ask() -> None:
        chat.chat_request(user_request("again"))
        answered.set()

    worker = threading.Thread(target=ask, daemon=True)
    worker.start()
    worker.join(timeout=2)
    assert answered.is_set()

    rest = list(stream)
    assert "".join(c.delta_text() or "" for c in rest) == "Hi!"


def test_file_source_routes_gguf_to_llama_cpp(monkeypatch) -> None:
    seen: Dict[str, Any] = {}

    def fake_from_gguf(path, *, model_id=None, chat_template=None, n_ctx=0):
        seen.update(path=path, chat_template=chat_template)
        return LlamaCppChat(path, FakeLlama())

    monkeypatch.setattr(local_loaders.LlamaCppChat, "from_gguf", staticmethod(fake_from_gguf))
    adapter = _build({"name": "local", "from": "file:/models/tiny.gguf"}, {"chat_template": "{{ x }}"})
    assert isinstance(adapter, LlamaCppChat)
    assert seen == {"path": "/models/tiny.gguf", "chat_template": "{{ x }}"}


def test_file_source_passes_declared_files(monkeypatch) -> None:
    seen: Dict[str, Any] = {}

    def fake_create(weights, config_path, tokenizer_path, tokenizer_config_path, chat_template):
        seen.update(weights=weights, config=config_path, tokenizer=tokenizer_path)
        return LlamaCppChat("fake", FakeLlama())

    monkeypatch.setattr(local_loaders, "create_local_model", fake_create)
    _build(
        {
            "name": "local",
            "from": "file",
            "files": [
                {"path": "/m/model.safetensors"},
                {"path": "/m/config.json", "type": "config"},
                {"path": "/m/tokenizer.json", "type": "tokenizer"},
            ],
        }
    )
    assert seen == {
        "weights": ["/m/model.safetensors"],
        "config": "/m/config.json",
        "tokenizer": "/m/tokenizer.json",
    }


def test_missing_model_directory_is_a_load_failure(tmp_path) -> None:
    missing = tmp_path / "nope" / "model.safetensors"
    with pytest.raises(FailedToLoadModel, match="does not exist"):
        local_loaders.create_local_model([str(missing)])


def test_huggingface_prefers_gguf_file(monkeypatch, log_events) -> None:
    seen: Dict[str, Any] = {}

    def fake_gguf(model_id, gguf_path, hf_token=None):
        seen.update(model_id=model_id, path=gguf_path, token=hf_token)
        return LlamaCppChat(model_id, FakeLlama())

    monkeypatch.setattr(hf_loaders, "create_hf_with_gguf", fake_gguf)
    adapter = _build(
        {
            "name": "qwen",
            "from": "huggingface:huggingface.co/Qwen/Qwen2.5-0.5B-Instruct-GGUF",
            "files": [{"path": "qwen2.5-0.5b-instruct-q4_k_m.gguf"}],
        },
        {"hf_token": "hf_secret"},
    )
    assert adapter.model_id == "Qwen/Qwen2.5-0.5B-Instruct-GGUF"
    assert seen == {
        "model_id": "Qwen/Qwen2.5-0.5B-Instruct-GGUF",
        "path": "qwen2.5-0.5b-instruct-q4_k_m.gguf",
        "token": "hf_secret",
    }
    assert log_events.named("model.load.gguf_selected")


def test_huggingface_checkpoint_without_gguf(monkeypatch) -> None:
    seen: Dict[str, Any] = {}

    def fake_model(model_id, model_type=None, hf_token=None):
        seen.update(model_id=model_id, model_type=model_type)
        return LlamaCppChat(model_id, FakeLlama())

    monkeypatch.setattr(hf_loaders, "create_hf_model", fake_model)
    _build({"name": "phi", "from": "hf:microsoft/phi-2"}, {"model_type": "phi"})
    assert seen == {"model_id": "microsoft/phi-2", "model_type": "phi"}


def test_missing_runtime_is_reported_as_load_failure(monkeypatch) -> None:
    def fail(name):
        raise ImportError(name)

    monkeypatch.setattr(runtime_imports, "import_module", fail)
    with pytest.raises(FailedToLoadModel, match="llama-cpp-python"):
        runtime_imports.require_module("llama_cpp")


def test_hf_gguf_loader_downloads_then_loads(monkeypatch) -> None:
    downloads: List[Dict[str, Any]] = []
    hub = SimpleNamespace(hf_hub_download=lambda **kw: downloads.append(kw) or "/cache/q.gguf")
    monkeypatch.setattr(hf_loaders, "require_module", lambda name: hub)
    monkeypatch.setattr(
        hf_loaders.LlamaCppChat,
        "from_gguf",
        staticmethod(lambda path, *, model_id=None, **_: LlamaCppChat(model_id or path, FakeLlama())),
    )
    adapter = hf_loaders.create_hf_with_gguf("org/repo", "q.gguf", "tok")
    assert downloads == [{"repo_id": "org/repo", "filename": "q.gguf", "token": "tok"}]
    assert adapter.model_id == "org/repo"


def test_abandoned_transformers_stream_stops_generation() -> None:
    cancel = _CancelGeneration()
    worker = threading.Thread(target=lambda: cancel.requested.wait(timeout=5), daemon=True)
    worker.start()
    chat = TransformersChat("tiny", tokenizer=SimpleNamespace(), model=SimpleNamespace())
    stream = chat._iter_chunks(iter(["Hel", "lo"]), worker, cancel, 3, False)

    assert next(stream).choices[0].delta.role == "assistant"
    assert next(stream).delta_text() == "Hel"
    stream.close()

    assert cancel.requested.is_set()
    assert not worker.is_alive()
