"""OpenTelemetry spans for client resolution and cache cleanup.

llmhub is a library, so it only ever asks the global tracer provider for a
tracer. Without setup those spans go to the no-op provider. The ``llmhub``
CLI, or a host application, installs a real provider with ``init_tracing``.

Design follows Function Core / Imperative Shell:
- Pure functions: resolve_tracing, service_resource_attributes,
  resolution_attributes, cache_cleanup_attributes
- Imperative shell: init_tracing, get_tracer, shutdown_tracing
"""

from __future__ import annotations

import dataclasses
import os
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
    from opentelemetry.trace import Tracer

SERVICE_NAME = "llmhub"
SERVICE_VERSION = "0.1.0"

LLMHUB_OTEL_EXPORTER_ENV = "LLMHUB_OTEL_EXPORTER"
LLMHUB_OTEL_ENDPOINT_ENV = "LLMHUB_OTEL_ENDPOINT"

RESOLVE_CLIENT_SPAN = "llmhub.resolve_client"
CACHE_CLEANUP_SPAN = "llmhub.cache.cleanup"


class ExporterType(StrEnum):
    """Where finished spans are sent."""

    CONSOLE = "console"
    OTLP_GRPC = "otlp_grpc"
    OTLP_HTTP = "otlp_http"
    NONE = "none"


@dataclasses.dataclass(frozen=True)
class TracingSettings:
    exporter: ExporterType = ExporterType.NONE
    endpoint: str | None = None

    @property
    def enabled(self) -> bool:
        return self.exporter is not ExporterType.NONE


# ---------------------------------------------------------------------------
# Pure functions
# ---------------------------------------------------------------------------


def resolve_tracing(
    exporter: ExporterType | None = None,
    endpoint: str | None = None,
) -> TracingSettings:
    """Combine explicit arguments with ``LLMHUB_OTEL_*`` variables.

    Arguments win over the environment. Tracing stays off unless an
    exporter is named somewhere.

    Raises:
        ValueError: ``LLMHUB_OTEL_EXPORTER`` names no known exporter.
    """
    if exporter is None:
        configured = os.environ.get(LLMHUB_OTEL_EXPORTER_ENV, "").strip().lower()
        try:
            exporter = ExporterType(configured or ExporterType.NONE)
        except ValueError:
            choices = ", ".join(ExporterType)
            msg = f"Invalid {LLMHUB_OTEL_EXPORTER_ENV} value {configured!r}. Expected one of: {choices}"
            raise ValueError(msg) from None

    return TracingSettings(
        exporter=exporter,
        endpoint=endpoint or os.environ.get(LLMHUB_OTEL_ENDPOINT_ENV) or None,
    )


def service_resource_attributes() -> dict[str, str]:
    return {"service.name": SERVICE_NAME, "service.version": SERVICE_VERSION}


def resolution_attributes(
    model: str,
    provider_kind: str,
    client_class: str,
    sub_provider: str | None = None,
) -> dict[str, str]:
    """Build ``llmhub.client.*`` span attributes for one client resolution."""
    attrs = {
        "llmhub.client.model": model,
        "llmhub.client.provider": provider_kind,
        "llmhub.client.class": client_class,
    }
    if sub_provider is not None:
        attrs["llmhub.client.sub_provider"] = sub_provider
    return attrs


def cache_cleanup_attributes(request_id: str, deleted: int) -> dict[str, str | int]:
    """Build ``llmhub.cache.*`` span attributes for a request-scoped cleanup."""
    return {
        "llmhub.cache.request_id": request_id,
        "llmhub.cache.deleted_entries": deleted,
    }


# ---------------------------------------------------------------------------
# Imperative shell
# ---------------------------------------------------------------------------


def _span_processor(settings: TracingSettings) -> SpanProcessor | None:
    from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor

    kwargs = {"endpoint": settings.endpoint} if settings.endpoint else {}

    match settings.exporter:
        case ExporterType.CONSOLE:
            from opentelemetry.sdk.trace.export import ConsoleSpanExporter

            return SimpleSpanProcessor(ConsoleSpanExporter())
        case ExporterType.OTLP_GRPC:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

            return BatchSpanProcessor(OTLPSpanExporter(**kwargs))
        case ExporterType.OTLP_HTTP:
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
                OTLPSpanExporter as HTTPSpanExporter,
            )

            return BatchSpanProcessor(HTTPSpanExporter(**kwargs))
    return None


def _create_tracer_provider(settings: TracingSettings) -> TracerProvider:
    """Build a provider for *settings* without registering it."""
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider

    provider = TracerProvider(resource=Resource.create(service_resource_attributes()))
    processor = _span_processor(settings)
    if processor is not None:
        provider.add_span_processor(processor)
    return provider


def init_tracing(settings: TracingSettings | None = None) -> TracerProvider:
    """Register a tracer provider for *settings* as the global one.

    A provider registered earlier is shut down first, so repeated calls
    (one per CLI invocation under test, for instance) do not leak exporters.
    """
    from opentelemetry import trace

    provider = _create_tracer_provider(settings or resolve_tracing())

    previous = trace.get_tracer_provider()
    if hasattr(previous, "shutdown"):
        previous.shutdown()

    # set_tracer_provider only accepts the first provider of a process.
    once = trace._TRACER_PROVIDER_SET_ONCE
    with once._lock:
        once._done = False
    trace.set_tracer_provider(provider)
    return provider


def get_tracer(name: str = SERVICE_NAME) -> Tracer:
    from opentelemetry import trace

    return trace.get_tracer(name)


def shutdown_tracing() -> None:
    """Flush and stop the global provider. Safe when none was installed."""
    from opentelemetry import trace

    provider = trace.get_tracer_provider()
    if hasattr(provider, "shutdown"):
        provider.shutdown()
