"""
Phoenix Tracing Configuration
Traces inbound messages and every provider call when PHOENIX_API_KEY is set
"""

import os
import inspect
from contextlib import contextmanager
from functools import wraps
from phoenix.otel import register

from config import get_logger

logger = get_logger(__name__)


class TracerWrapper:
    """
    Wrapper around OpenTelemetry Tracer that adds a Phoenix-style .tool()
    decorator for coroutine functions
    """

    def __init__(self, tracer):
        self._tracer = tracer

    def start_as_current_span(self, name, openinference_span_kind=None, **kwargs):
        """Handle openinference_span_kind parameter"""
        attributes = kwargs.get('attributes', {})

        if openinference_span_kind:
            attributes['openinference.span.kind'] = openinference_span_kind

        kwargs['attributes'] = attributes
        return self._tracer.start_as_current_span(name, **kwargs)

    def tool(self, name: str = None, description: str = None):
        """Decorator to trace provider calls"""
        def decorator(func):
            span_name = name or func.__name__
            attributes = {
                "openinference.span.kind": "tool",
                "tool.name": span_name,
                "tool.description": description or "",
            }

            if not inspect.iscoroutinefunction(func):
                raise TypeError(f"{span_name} must be a coroutine function")

            @wraps(func)
            async def wrapper(*args, **kwargs):
                with self._tracer.start_as_current_span(span_name, attributes=attributes) as span:
                    try:
                        result = await func(*args, **kwargs)
                        span.set_attribute("tool.success", True)
                        return result
                    except Exception as e:
                        span.set_attribute("tool.success", False)
                        span.set_attribute("tool.error", str(e))
                        span.record_exception(e)
                        raise
            return wrapper
        return decorator


class DummyTracer:
    """No-op tracer used when Phoenix is not configured"""

    def start_as_current_span(self, *args, **kwargs):
        @contextmanager
        def dummy_span():
            class DummySpan:
                def set_attribute(self, *a, **kw): pass
                def record_exception(self, *a, **kw): pass
                def set_status(self, *a, **kw): pass
            yield DummySpan()
        return dummy_span()

    def tool(self, *args, **kwargs):
        def decorator(func):
            return func
        return decorator


def setup_phoenix_tracing():
    """
    Setup Phoenix tracing.
    register() picks up PHOENIX_API_KEY and PHOENIX_COLLECTOR_ENDPOINT from env.
    """
    project_name = os.getenv("PHOENIX_PROJECT_NAME", "ask-george-sms")

    if not os.getenv("PHOENIX_API_KEY"):
        logger.info("PHOENIX_API_KEY not configured, tracing disabled")
        return DummyTracer()

    try:
        tracer_provider = register(
            protocol="http/protobuf",
            project_name=project_name,
        )
    except Exception:
        logger.exception("Failed to initialize Phoenix tracing, tracing disabled")
        return DummyTracer()

    logger.info("Phoenix tracing initialized for project %s", project_name)
    return TracerWrapper(tracer_provider.get_tracer(__name__))


tracer = setup_phoenix_tracing()

__all__ = ['tracer', 'TracerWrapper', 'DummyTracer']
