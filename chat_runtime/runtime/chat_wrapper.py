"""ChatWrapper: runtime policy and instrumentation around any adapter.

Every completion passes through the same pipeline:

- a task-history span ``ai_completion`` is opened with the caller's raw
  request as ``input``;
- the request is prepared (system prompt, model defaults, stream usage);
- the adapter is called and its response (or each streamed chunk) is
  re-labelled with the public model name;
- token usage and the captured output are recorded on the span;
- a completion metric ``(duration, error, labels)`` is emitted.

The wrapper holds no mutable state and is shared by concurrent callers.
Free-text calls (``run``/``stream``), ``health`` and ``as_sql`` pass straight
through to the adapter.

For streams, metrics are recorded when the chunk carrying ``usage`` arrives
(usage accounting is forced on by request preparation). A stream that ends
without such a chunk records no metric; a stream that fails to start records
a failure. The span of a stream ends when the relay finishes, is closed, or is
garbage collected without ever being iterated.
"""

from __future__ import annotations

import json
import time
import weakref
from typing import Any, Iterator, Optional, Sequence, Tuple

from ..base.interfaces import ChatModel, SqlGeneration
from ..base.metrics import CompletionMetricsPayload, MetricsExporter, TelemetryLabels, emit_completion_metrics
from ..base.models import ChatCompletionChunk, ChatCompletionRequest, ChatCompletionResponse, Usage
from ..base.tracing import TaskSpan, start_task_span
from ..config.defaults import COMPLETION_SPAN_NAME
from .request_prep import prepare_request


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


def _close_stream(inner: Iterator[ChatCompletionChunk], span: TaskSpan) -> None:
    close = getattr(inner, "close", None)
    if callable(close):
        close()
    span.end()


class ChatWrapper:
    """Decorator implementing ``ChatModel`` on top of another ``ChatModel``.

    Args:
        public_name: Name the model is registered under; reported as
            ``model`` in every response and chunk.
        chat: The wrapped adapter.
        system_prompt: Optional system message inserted first in every request.
        defaults: Ordered ``(field, value)`` defaults for unset request fields.
        exporter: Metrics sink; the process-wide default when omitted.
    """

    def __init__(
        self,
        public_name: str,
        chat: ChatModel,
        system_prompt: Optional[str] = None,
        defaults: Sequence[Tuple[str, Any]] = (),
        exporter: Optional[MetricsExporter] = None,
    ) -> None:
        self.public_name = public_name
        self.chat = chat
        self.system_prompt = system_prompt
        self.defaults = tuple(defaults)
        self._exporter = exporter

    def prepare_req(self, req: ChatCompletionRequest) -> ChatCompletionRequest:
        return prepare_request(req, self.system_prompt, self.defaults)

    # ----- instrumentation -----
    def _open_span(self, req: ChatCompletionRequest, stream: bool) -> TaskSpan:
        span = start_task_span(COMPLETION_SPAN_NAME, {"stream": stream, "model": req.model})
        try:
            snapshot = req.model_dump_json(exclude_none=True)
        except (TypeError, ValueError) as exc:
            span.log_error("input.serialize_error", exc, public_name=self.public_name)
            snapshot = ""
        span.set_attribute("input", snapshot)
        return span

    def _record_metrics(self, start: float, error: bool, labels: TelemetryLabels) -> None:
        emit_completion_metrics(
            CompletionMetricsPayload(
                model=self.public_name,
                duration_ms=_elapsed_ms(start),
                error=error,
                labels=labels.as_dict(),
            ),
            self._exporter,
        )

    @staticmethod
    def _record_usage(span: TaskSpan, usage: Usage) -> None:
        span.set_attribute("completion_tokens", usage.completion_tokens)
        span.set_attribute("total_tokens", usage.total_tokens)
        span.set_attribute("prompt_tokens", usage.prompt_tokens)

    @staticmethod
    def _record_output(span: TaskSpan, resp: ChatCompletionResponse) -> None:
        try:
            output = json.dumps([c.message.model_dump(mode="json", exclude_none=True) for c in resp.choices])
        except (TypeError, ValueError) as exc:
            span.log_error("output.serialize_error", exc)
            return
        span.set_attribute("captured_output", output)

    # ----- ChatModel -----
    def chat_request(self, req: ChatCompletionRequest) -> ChatCompletionResponse:
        start = time.perf_counter()
        with self._open_span(req, stream=False) as span:
            req = self.prepare_req(req)
            labels = TelemetryLabels.from_request(req)
            if req.metadata:
                span.set_attribute("metadata", req.metadata)
            try:
                resp = self.chat.chat_request(req)
            except Exception as exc:
                span.error("completion.error", exc, public_name=self.public_name)
                self._record_metrics(start, True, labels)
                raise
            if resp.usage is not None:
                self._record_usage(span, resp.usage)
            self._record_output(span, resp)
            resp.model = self.public_name
            self._record_metrics(start, False, labels)
            return resp

    def chat_stream(self, req: ChatCompletionRequest) -> Iterator[ChatCompletionChunk]:
        start = time.perf_counter()
        span = self._open_span(req, stream=True)
        try:
            req = self.prepare_req(req)
            labels = TelemetryLabels.from_request(req)
            if req.metadata:
                span.set_attribute("metadata", req.metadata)
        except Exception:
            span.end()
            raise
        try:
            inner = self.chat.chat_stream(req)
        except Exception as exc:
            span.error("completion.error", exc, public_name=self.public_name)
            self._record_metrics(start, True, labels)
            span.end()
            raise
        relay = self._relay(inner, span, start, labels)
        # A relay dropped before its first next() never reaches its finally block.
        weakref.finalize(relay, _close_stream, inner, span)
        return relay

    def _relay(
        self,
        inner: Iterator[ChatCompletionChunk],
        span: TaskSpan,
        start: float,
        labels: TelemetryLabels,
    ) -> Iterator[ChatCompletionChunk]:
        try:
            for chunk in inner:
                chunk.model = self.public_name
                if chunk.usage is not None:
                    self._record_usage(span, chunk.usage)
                    self._record_metrics(start, False, labels)
                yield chunk
        except Exception as exc:
            span.error("stream.error", exc, public_name=self.public_name)
            raise
        finally:
            _close_stream(inner, span)

    def run(self, prompt: str) -> Optional[str]:
        return self.chat.run(prompt)

    def stream(self, prompt: str) -> Iterator[Optional[str]]:
        return self.chat.stream(prompt)

    def health(self) -> None:
        self.chat.health()

    def as_sql(self) -> Optional[SqlGeneration]:
        return self.chat.as_sql()

    def __repr__(self) -> str:
        return f"ChatWrapper(public_name={self.public_name!r}, chat={self.chat!r})"


__all__ = ["ChatWrapper"]
