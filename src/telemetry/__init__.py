"""
OpenTelemetry instrumentation package for the Pinecone API client

Provides tracing of outbound Pinecone requests when enabled through
the environment.
"""

from .config import (
    initialize_telemetry,
    get_tracer,
    shutdown_telemetry,
    is_telemetry_enabled,
    is_telemetry_initialized,
    get_telemetry_status
)

from .decorators import trace_pinecone_api_call

__all__ = [
    'initialize_telemetry',
    'get_tracer',
    'shutdown_telemetry',
    'is_telemetry_enabled',
    'is_telemetry_initialized',
    'get_telemetry_status',
    'trace_pinecone_api_call'
]
