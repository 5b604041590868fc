"""OpenTelemetry setup helpers."""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.pymongo import PymongoInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from .settings import get_settings


def setup_otel(app=None, *, instrument_mongo: bool = False) -> bool:
    """Configure OpenTelemetry tracing and optionally instrument FastAPI.

    Returns True when tracing was enabled.
    """
    settings = get_settings()
    if not settings.enabled:
        return False

    resource = Resource.create(attributes={"service.name": settings.service_name})
    provider = TracerProvider(resource=resource, sampler=TraceIdRatioBased(settings.sample_rate))

    exporter = OTLPSpanExporter(endpoint=settings.otlp_endpoint)
    provider.add_span_processor(BatchSpanProcessor(exporter))

    # Set as GLOBAL provider
    trace.set_tracer_provider(provider)

    # Outgoing MongoDB commands (insert/find) show up as child spans.
    if instrument_mongo:
        PymongoInstrumentor().instrument()

    if app is not None:
        FastAPIInstrumentor.instrument_app(app)
    return True
