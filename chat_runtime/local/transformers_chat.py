"""TransformersChat: causal language models run with Hugging Face transformers.

Serves both Hub model ids and local safetensors checkouts. Prompts are
rendered with the tokenizer's chat template (an inline ``chat_template``
replaces it). Streaming runs ``model.generate`` on a worker thread feeding a
``TextIteratorStreamer``, the pattern recommended by transformers for
incremental decoding.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Iterator, Optional

from ..base.adapter_base import BaseChatAdapter
from ..base.errors import FailedToLoadModel
from ..base.logging import LogContext, log_event
from ..base.models import (
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    Choice,
    ChunkChoice,
    ChunkDelta,
    Usage,
)
from .generation import chat_messages, max_new_tokens, wants_usage
from .runtime_imports import require_module

# Seconds the consumer waits for the next decoded piece before giving up.
STREAMER_TIMEOUT = 120.0


class _CancelGeneration:
    """Stopping criterion set when the consumer abandons a stream."""

    def __init__(self) -> None:
        self.requested = threading.Event()

    def __call__(self, input_ids: Any, scores: Any, **kwargs: Any) -> bool:
        return self.requested.is_set()


class TransformersChat(BaseChatAdapter):
    """Adapter over a loaded tokenizer / causal LM pair."""

    provider_name = "transformers"

    def __init__(self, model_id: str, tokenizer: Any, model: Any) -> None:
        super().__init__(model_id, "chat_runtime.local")
        self.tokenizer = tokenizer
        self.model = model

    @classmethod
    def from_pretrained(
        cls,
        name_or_path: str,
        *,
        model_type: Optional[str] = None,
        token: Optional[str] = None,
        tokenizer_path: Optional[str] = None,
        chat_template: Optional[str] = None,
        local_files_only: bool = False,
    ) -> "TransformersChat":
        """Load tokenizer and model weights.

        ``model_type`` is checked against the checkpoint's config
        (``AutoConfig.model_type``); a mismatch fails the load.
        """
        transformers = require_module("transformers")
        config = transformers.AutoConfig.from_pretrained(name_or_path, token=token, local_files_only=local_files_only)
        if model_type and getattr(config, "model_type", None) != model_type:
            raise FailedToLoadModel(
                f"Model '{name_or_path}' has model_type '{config.model_type}', expected '{model_type}'",
                model=name_or_path,
            )
        tokenizer = transformers.AutoTokenizer.from_pretrained(
            tokenizer_path or name_or_path, token=token, local_files_only=local_files_only
        )
        if chat_template:
            tokenizer.chat_template = chat_template
        model = transformers.AutoModelForCausalLM.from_pretrained(
            name_or_path, config=config, token=token, local_files_only=local_files_only
        )
        model.eval()
        chat = cls(name_or_path, tokenizer, model)
        log_event(
            chat._logger,
            "model.load.transformers",
            LogContext(provider=cls.provider_name, model=name_or_path),
            model_type=getattr(config, "model_type", None),
            local=local_files_only,
            chat_template=bool(chat_template),
        )
        return chat

    def _encode(self, req: ChatCompletionRequest) -> Any:
        input_ids = self.tokenizer.apply_chat_template(
            chat_messages(req), add_generation_prompt=True, return_tensors="pt"
        )
        return input_ids.to(self.model.device)

    def _generate_kwargs(self, req: ChatCompletionRequest, input_ids: Any) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "input_ids": input_ids,
            "max_new_tokens": max_new_tokens(req),
            "pad_token_id": self.tokenizer.pad_token_id or self.tokenizer.eos_token_id,
        }
        temperature = req.temperature if req.temperature is not None else 0.0
        if temperature > 0:
            kwargs["do_sample"] = True
            kwargs["temperature"] = temperature
            if req.top_p is not None:
                kwargs["top_p"] = req.top_p
        else:
            kwargs["do_sample"] = False
        if req.stop is not None:
            kwargs["stop_strings"] = [req.stop] if isinstance(req.stop, str) else list(req.stop)
            kwargs["tokenizer"] = self.tokenizer
        return kwargs

    def chat_request(self, req: ChatCompletionRequest) -> ChatCompletionResponse:
        torch = require_module("torch")
        input_ids = self._encode(req)
        with torch.inference_mode():
            output = self.model.generate(**self._generate_kwargs(req, input_ids))
        prompt_len = input_ids.shape[-1]
        new_tokens = output[0][prompt_len:]
        text = self.tokenizer.decode(new_tokens, skip_special_tokens=True)
        completion_len = int(new_tokens.shape[-1])
        finish = "length" if completion_len >= max_new_tokens(req) else "stop"
        return ChatCompletionResponse(
            model=self.model_id,
            choices=[Choice(index=0, message=ChatMessage(role="assistant", content=text), finish_reason=finish)],
            usage=Usage.from_counts(int(prompt_len), completion_len),
        )

    def chat_stream(self, req: ChatCompletionRequest) -> Iterator[ChatCompletionChunk]:
        transformers = require_module("transformers")
        input_ids = self._encode(req)
        streamer = transformers.TextIteratorStreamer(
            self.tokenizer, timeout=STREAMER_TIMEOUT, skip_prompt=True, skip_special_tokens=True
        )
        cancel = _CancelGeneration()
        kwargs = self._generate_kwargs(req, input_ids)
        kwargs["streamer"] = streamer
        kwargs["stopping_criteria"] = transformers.StoppingCriteriaList([cancel])
        worker = threading.Thread(target=self.model.generate, kwargs=kwargs, daemon=True)
        worker.start()
        return self._iter_chunks(streamer, worker, cancel, int(input_ids.shape[-1]), wants_usage(req))

    def _iter_chunks(
        self,
        streamer: Any,
        worker: threading.Thread,
        cancel: _CancelGeneration,
        prompt_tokens: int,
        include_usage: bool,
    ) -> Iterator[ChatCompletionChunk]:
        template = ChatCompletionChunk(model=self.model_id)
        pieces = []
        try:
            yield template.model_copy(update={"choices": [ChunkChoice(delta=ChunkDelta(role="assistant"))]})
            for text in streamer:
                if not text:
                    continue
                pieces.append(text)
                yield template.model_copy(update={"choices": [ChunkChoice(delta=ChunkDelta(content=text))]})
        finally:
            cancel.requested.set()
            worker.join(timeout=STREAMER_TIMEOUT)
        yield template.model_copy(update={"choices": [ChunkChoice(delta=ChunkDelta(), finish_reason="stop")]})
        if include_usage:
            completion = len(self.tokenizer.encode("".join(pieces), add_special_tokens=False))
            yield template.model_copy(update={"usage": Usage.from_counts(prompt_tokens, completion)})

    def __repr__(self) -> str:
        return f"TransformersChat(model_id={self.model_id!r})"


__all__ = ["TransformersChat"]
