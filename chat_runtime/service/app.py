"""OpenAI-compatible HTTP surface over a :class:`ModelStore`.

Routes
------
- ``GET /health``: liveness.
- ``GET /v1/models``: registered public model names.
- ``POST /v1/chat/completions``: chat completion against a registered model.
  Non-streamed requests return the completion JSON. Streamed requests return
  ``text/event-stream`` with one ``data: <chunk json>`` event per chunk,
  terminated by ``data: [DONE]``.

Error mapping
-------------
- Unknown model: 404.
- Malformed body: 422 (FastAPI request validation).
- Adapter failure before any output: 500 with the error message. A failure
  mid-stream is reported as a final ``data: {"error": ...}`` event since the
  status line has already been sent.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Iterator, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from ..base.errors import classify_exception
from ..base.interfaces import ChatModel
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ChatCompletionChunk, ChatCompletionRequest
from ..config.defaults import SERVICE_CORS_DEFAULT_ORIGINS
from ..runtime import ModelStore

_logger = get_logger("chat_runtime.service")

CORS_ORIGINS_ENV = "CHAT_RUNTIME_CORS_ORIGINS"


def _sse_events(chunks: Iterator[ChatCompletionChunk], model: str) -> Iterator[str]:
    try:
        for chunk in chunks:
            yield f"data: {chunk.model_dump_json(exclude_none=True)}\n\n"
    except Exception as exc:  # noqa: BLE001 - reported in-band
        code = classify_exception(exc).value
        log_event(
            _logger,
            "chat.stream.error",
            LogContext(public_name=model),
            level=logging.ERROR,
            error=str(exc),
            code=code,
        )
        yield f"data: {json.dumps({'error': {'message': str(exc), 'code': code}})}\n\n"
    finally:
        close = getattr(chunks, "close", None)
        if callable(close):
            close()
    yield "data: [DONE]\n\n"


def create_app(store: ModelStore, cors_origins: Optional[List[str]] = None) -> FastAPI:
    """Build the FastAPI application serving ``store``."""
    app = FastAPI(title="Chat Runtime", version="0.1.0")

    if cors_origins is None:
        raw = os.getenv(CORS_ORIGINS_ENV, SERVICE_CORS_DEFAULT_ORIGINS)
        cors_origins = [o.strip() for o in raw.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _resolve(name: str) -> ChatModel:
        chat = store.get(name)
        if chat is None:
            raise HTTPException(status_code=404, detail=f"Model '{name}' not found")
        return chat

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"ok": True, "models": len(store)}

    @app.get("/v1/models")
    def list_models() -> Dict[str, Any]:
        return {
            "object": "list",
            "data": [{"id": name, "object": "model", "owned_by": "chat_runtime"} for name in store.names()],
        }

    @app.post("/v1/chat/completions")
    def chat_completions(body: ChatCompletionRequest) -> Any:
        chat = _resolve(body.model)
        try:
            if body.is_streaming():
                chunks = chat.chat_stream(body)
                return StreamingResponse(_sse_events(chunks, body.model), media_type="text/event-stream")
            resp = chat.chat_request(body)
        except Exception as exc:
            log_event(
                _logger,
                "chat.error",
                LogContext(public_name=body.model),
                level=logging.ERROR,
                error=str(exc),
                code=classify_exception(exc).value,
            )
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return resp.model_dump(mode="json", exclude_none=True)

    return app


__all__ = ["create_app"]
