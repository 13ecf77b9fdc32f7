"""
OpenTelemetry decorators for instrumenting Pinecone API calls
"""

import functools
from typing import Callable, Optional


def trace_pinecone_api_call(operation: Optional[str] = None):
    """
    Decorator to trace Pinecone API calls.

    The wrapped coroutine must return a ``Success`` or ``Failure`` result.

    Args:
        operation: Description of the API operation
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            from .config import get_tracer, is_telemetry_initialized

            if not is_telemetry_initialized():
                return await func(*args, **kwargs)

            tracer = get_tracer()
            if not tracer:
                return await func(*args, **kwargs)

            from opentelemetry import trace

            span_name = f"pinecone_api.{operation or func.__name__}"

            with tracer.start_as_current_span(span_name) as span:
                try:
                    span.set_attribute("pinecone.operation.type", "api_call")
                    if operation:
                        span.set_attribute("pinecone.operation.name", operation)
                    if 'method' in kwargs:
                        span.set_attribute("pinecone.api.method", kwargs['method'])
                    if 'target' in kwargs:
                        span.set_attribute("pinecone.api.target", type(kwargs['target']).__name__)
                    if 'path' in kwargs:
                        span.set_attribute("pinecone.api.path", kwargs['path'])

                    result = await func(*args, **kwargs)

                    status_code = getattr(result, 'status_code', None)
                    if status_code is not None:
                        span.set_attribute("pinecone.api.status_code", status_code)

                    if not result.ok:
                        span.set_attribute("pinecone.api.has_error", True)
                        span.add_event(
                            name="pinecone_api_error_response",
                            attributes={
                                "pinecone.error.kind": result.kind,
                                "pinecone.error.status_code": status_code if status_code is not None else -1,
                                "pinecone.error.payload": str(result.payload)[:1000],
                            }
                        )
                        span.set_status(trace.Status(trace.StatusCode.ERROR, result.kind))
                    else:
                        span.set_status(trace.Status(trace.StatusCode.OK))
                    return result

                except Exception as e:
                    span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    span.set_attribute("pinecone.api.error_type", type(e).__name__)
                    raise

        return wrapper
    return decorator
