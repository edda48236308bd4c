# trace.py
import uuid
import logging

from fastapi import FastAPI, Request

TRACE_HEADER = "x-trace-id"


def get_or_create_trace_id(existing_trace_id=None):
    """Return existing trace_id or generate a new one."""
    if existing_trace_id:
        return existing_trace_id
    return str(uuid.uuid4())


def install_trace_middleware(app: FastAPI, logger: logging.Logger):
    """Assign every request a trace id and echo it back on the response."""

    @app.middleware("http")
    async def add_trace_id(request: Request, call_next):
        trace_id = get_or_create_trace_id(request.headers.get(TRACE_HEADER))
        request.state.trace_id = trace_id
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"[TRACE {trace_id}] {request.method} {request.url.path} failed: {e!r}")
            raise
        response.headers[TRACE_HEADER] = trace_id
        logger.info(f"[TRACE {trace_id}] {request.method} {request.url.path} -> {response.status_code}")
        return response

    return add_trace_id
