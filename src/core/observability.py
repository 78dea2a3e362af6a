"""OpenTelemetry tracing for the Items API.

``setup_tracing`` installs the tracer provider and ``instrument_app`` hooks
FastAPI and SQLAlchemy into it. The service wraps each operation in
``trace_operation`` (``items.create``, ``items.update``, ...) and the error
handlers tag the active span through ``add_span_attributes``.

Finished spans go to one of three places, chosen by ``exporter_type``:
Loguru (``console``), an OTLP/gRPC collector (``otlp``), or nowhere
(``none``).
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Final

from loguru import logger
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import ReadableSpan, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    SpanExporter,
    SpanExportResult,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from src.core.context import RequestContext
from src.core.exceptions import ItemsApiError

if TYPE_CHECKING:
    from collections.abc import Generator, Sequence

    from fastapi import FastAPI

    from src.core.config import Settings

TRACER_NAME: Final[str] = "src.items"
DEFAULT_OTLP_ENDPOINT: Final[str] = "http://localhost:4317"
# Probes and documentation pages produce no spans
EXCLUDED_URLS: Final[str] = "/health,/docs,/redoc,/openapi.json"

type AttributeValue = str | int | float | bool


class LoguruSpanExporter(SpanExporter):
    """Write each finished span as a Loguru debug record."""

    @staticmethod
    def _duration_ms(span: ReadableSpan) -> int | None:
        if span.start_time and span.end_time:
            return (span.end_time - span.start_time) // 1_000_000
        return None

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        """Log every span that has a context."""
        for span in spans:
            context = span.get_span_context()
            if not context:
                continue
            logger.bind(
                trace_id=f"0x{context.trace_id:032x}",
                span_id=f"0x{context.span_id:016x}",
                correlation_id=(span.attributes or {}).get("correlation_id"),
                duration_ms=self._duration_ms(span),
                status=span.status.status_code.name,
            ).debug("Span {} finished", span.name)
        return SpanExportResult.SUCCESS


def get_span_exporter(settings: Settings) -> SpanExporter | None:
    """Build the exporter named by ``exporter_type``.

    Returns:
        SpanExporter | None: The exporter, or None when spans are not exported.
    """
    config = settings.observability_config
    match config.exporter_type:
        case "console":
            return LoguruSpanExporter()
        case "otlp":
            endpoint = config.exporter_endpoint or DEFAULT_OTLP_ENDPOINT
            logger.info("Exporting spans to {}", endpoint)
            # Plain-text gRPC is only acceptable against a local collector
            return OTLPSpanExporter(
                endpoint=endpoint,
                insecure=settings.environment == "development",
            )
        case _:
            logger.info("Span export disabled")
            return None


def setup_tracing(settings: Settings) -> None:
    """Install the process-wide tracer provider, unless tracing is disabled."""
    config = settings.observability_config
    if not config.enable_tracing:
        logger.info("Tracing disabled by configuration")
        return

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": settings.app_name,
                "service.version": settings.app_version,
                "deployment.environment": settings.environment,
            }
        ),
        sampler=TraceIdRatioBased(config.trace_sample_rate),
    )
    if exporter := get_span_exporter(settings):
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    logger.info(
        "Tracing configured",
        exporter_type=config.exporter_type,
        sample_rate=config.trace_sample_rate,
    )


def instrument_app(app: FastAPI, settings: Settings) -> None:
    """Create server spans for requests and client spans for SQL statements.

    Args:
        app: Application to instrument.
        settings: Application settings; nothing happens when tracing is off.
    """
    if not settings.observability_config.enable_tracing:
        return

    FastAPIInstrumentor.instrument_app(
        app,
        excluded_urls=EXCLUDED_URLS,
        server_request_hook=add_correlation_id_to_span,
    )

    # The SQLAlchemy hook is global; a second app in the process reuses it
    sql_instrumentor = SQLAlchemyInstrumentor()
    if not sql_instrumentor.is_instrumented_by_opentelemetry:
        sql_instrumentor.instrument()

    logger.info("Request and database spans enabled")


def add_correlation_id_to_span(span: trace.Span, scope: dict[str, Any]) -> None:
    """Server request hook tagging the span with the request's identifiers."""
    if correlation_id := RequestContext.get_correlation_id():
        span.set_attribute("correlation_id", correlation_id)

    headers = dict(scope.get("headers", []))
    if request_id := headers.get(b"x-request-id", b"").decode("latin-1"):
        span.set_attribute("request_id", request_id)


def add_span_attributes(**attributes: AttributeValue) -> None:
    """Set attributes on the active span when it is being recorded."""
    span = trace.get_current_span()
    if not span.is_recording():
        return
    for key, value in attributes.items():
        span.set_attribute(key, value)


def _mark_failed(span: trace.Span, exc: BaseException) -> None:
    span.record_exception(exc)
    span.set_status(Status(StatusCode.ERROR, type(exc).__name__))


@contextmanager
def trace_operation(name: str, **attributes: AttributeValue) -> Generator[trace.Span]:
    """Run the block inside a child span named ``name``.

    Expected domain errors (missing items, rejected input) leave the span
    status unset and only tag it with the error kind; anything else is
    recorded on the span and marks it as failed.

    Args:
        name: Span name, e.g. ``items.update``.
        **attributes: Attributes set on the span before the block runs.

    Yields:
        trace.Span: The active span.
    """
    tracer = trace.get_tracer(TRACER_NAME)
    with tracer.start_as_current_span(
        name, record_exception=False, set_status_on_exception=False
    ) as span:
        if correlation_id := RequestContext.get_correlation_id():
            attributes = {**attributes, "correlation_id": correlation_id}
        for key, value in attributes.items():
            span.set_attribute(key, value)
        try:
            yield span
        except ItemsApiError as exc:
            span.set_attribute("error.kind", exc.kind.value)
            if not exc.is_expected:
                _mark_failed(span, exc)
            raise
        except Exception as exc:
            _mark_failed(span, exc)
            raise
