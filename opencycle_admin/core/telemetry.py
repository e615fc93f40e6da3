import os
from fastapi import FastAPI
from loguru import logger
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.psycopg2 import Psycopg2Instrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

_instrumented = False


def setup_telemetry(app: FastAPI) -> bool:
    """
    Export traces and metrics over OTLP when `OTEL_EXPORTER_OTLP_ENDPOINT` is set.

    The app, SQLAlchemy and psycopg2 are instrumented at most once per process, so the
    analytics queries show up as child spans of the dashboard request. Setup errors are
    logged and swallowed.

    Returns:
        bool: Whether telemetry is active.
    """
    global _instrumented

    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not endpoint:
        logger.info("OTEL_EXPORTER_OTLP_ENDPOINT not set, telemetry disabled")
        return False
    try:
        resource = Resource.create(
            {
                "service.name": os.getenv("OTEL_SERVICE_NAME", "opencycle-admin"),
                "deployment.environment": os.getenv("ENVIRONMENT", "development"),
            }
        )
        insecure = os.getenv("OTEL_EXPORTER_OTLP_INSECURE", "false").lower() == "true"

        tracer_provider = TracerProvider(resource=resource)
        tracer_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=insecure))
        )
        trace.set_tracer_provider(tracer_provider)

        reader = PeriodicExportingMetricReader(
            OTLPMetricExporter(endpoint=endpoint, insecure=insecure)
        )
        metrics.set_meter_provider(
            MeterProvider(resource=resource, metric_readers=[reader])
        )

        if not _instrumented:
            FastAPIInstrumentor.instrument_app(app, excluded_urls="/health")
            SQLAlchemyInstrumentor().instrument(enable_commenter=True)  # type: ignore
            Psycopg2Instrumentor().instrument(  # type: ignore
                enable_commenter=True, skip_dep_check=True
            )
            _instrumented = True

        logger.info("Trace and metric export enabled")
        return True
    except Exception as e:
        logger.error(f"Telemetry setup failed: {e}")
        return False
