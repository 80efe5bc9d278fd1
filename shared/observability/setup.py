import logging

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

from shared.config import settings

# Scrapes and probes would drown out real traffic in the request metrics
UNMEASURED_ROUTES = ["/metrics", "/api/health"]


def add_otel_ids(logger, log_method, event_dict):
    """Stamps the active trace/span ids on a log line, when tracing is on."""
    span = trace.get_current_span()
    if span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = trace.format_trace_id(ctx.trace_id)
        event_dict["span_id"] = trace.format_span_id(ctx.span_id)
    return event_dict


def configure_logging(service_name: str):
    # Readable lines while developing, one JSON object per line everywhere else
    if settings.ENVIRONMENT == "development":
        renderers = [structlog.dev.ConsoleRenderer()]
    else:
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_otel_ids,
            *renderers,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.LOG_LEVEL)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service=service_name)


def configure_tracing(app: FastAPI, service_name: str):
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))
    trace.set_tracer_provider(provider)
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.OTLP_ENDPOINT, insecure=True)))

    FastAPIInstrumentor.instrument_app(app, excluded_urls=",".join(UNMEASURED_ROUTES))
    HTTPXClientInstrumentor().instrument()


def configure_metrics(app: FastAPI):
    Instrumentator(
        should_group_status_codes=False,
        excluded_handlers=UNMEASURED_ROUTES,
    ).instrument(app).expose(app, include_in_schema=False)


def setup_observability(app: FastAPI, service_name: str):
    """
    Logging and /metrics for the API, plus OTLP tracing when OTEL_ENABLED.
    Call once per process, right after the app is created.
    """
    configure_logging(service_name)
    if settings.OTEL_ENABLED:
        configure_tracing(app, service_name)
    configure_metrics(app)
