"""Structured logging and OpenTelemetry tracing for the bot's functions."""
import json
import logging
import traceback
import uuid
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Dict, Mapping, Optional

from opentelemetry import trace
from opentelemetry.exporter.cloud_trace import CloudTraceSpanExporter
from opentelemetry.instrumentation.requests import RequestsInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from .config import Config


class StructuredLogger:
    """Structured logger emitting one JSON object per line."""

    def __init__(self, service_name: str):
        self.service_name = service_name
        self.logger = self._setup_logger()

    def _setup_logger(self):
        logger = logging.getLogger(self.service_name)
        logger.setLevel(logging.INFO)
        logger.handlers = []

        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)

        return logger

    def _get_trace_context(self) -> Dict[str, str]:
        span = trace.get_current_span()
        if span and span.is_recording():
            span_context = span.get_span_context()
            return {
                "trace_id": format(span_context.trace_id, '032x'),
                "span_id": format(span_context.span_id, '016x')
            }
        return {}

    def _build_log_entry(self, message: str, level: str, correlation_id: Optional[str] = None, **extra) -> Dict[str, Any]:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "severity": level,
            "service": self.service_name,
            "message": message,
        }

        entry.update(self._get_trace_context())

        if correlation_id:
            entry["correlation_id"] = correlation_id

        entry.update(extra)
        return entry

    def _emit(self, level: int, entry: Dict[str, Any]):
        self.logger.log(level, json.dumps(entry, default=str))

    def info(self, message: str, **kwargs):
        """Log INFO level."""
        self._emit(logging.INFO, self._build_log_entry(message, "INFO", **kwargs))

    def warning(self, message: str, **kwargs):
        """Log WARNING level."""
        self._emit(logging.WARNING, self._build_log_entry(message, "WARNING", **kwargs))

    def error(self, message: str, error: Optional[BaseException] = None, **kwargs):
        """Log ERROR level, attaching exception details when given."""
        if error:
            kwargs["error"] = {
                "type": type(error).__name__,
                "message": str(error),
                "stacktrace": traceback.format_exc()
            }
        self._emit(logging.ERROR, self._build_log_entry(message, "ERROR", **kwargs))


class JsonFormatter(logging.Formatter):
    """Pass pre-built JSON through, wrap anything else."""

    def format(self, record):
        if isinstance(record.msg, str) and record.msg.startswith('{'):
            return record.msg

        return json.dumps({
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "severity": record.levelname,
            "message": record.getMessage(),
        })


class TracingManager:
    """OpenTelemetry tracing manager."""

    def __init__(self, service_name: str, environment: str = "production"):
        self.service_name = service_name
        self.environment = environment
        self.tracer = self._setup_tracer()

    def _setup_tracer(self):
        resource = Resource.create({
            "service.name": self.service_name,
            "service.namespace": "leetcode-bot",
            "deployment.environment": self.environment,
        })

        tracer_provider = TracerProvider(resource=resource)

        # Cloud Trace is only reachable from a deployed function
        if not Config.LOCAL_DEV:
            try:
                exporter = CloudTraceSpanExporter(project_id=Config.GCP_PROJECT_ID)
                tracer_provider.add_span_processor(BatchSpanProcessor(exporter))
            except Exception as e:
                logging.getLogger(self.service_name).warning(
                    "Could not setup Cloud Trace exporter: %s", e
                )

        trace.set_tracer_provider(tracer_provider)
        return trace.get_tracer(self.service_name)

    def instrument_requests(self):
        """Auto-instrument outbound calls made with requests."""
        try:
            RequestsInstrumentor().instrument()
        except Exception as e:
            logging.getLogger(self.service_name).warning("Could not instrument requests: %s", e)


_tracing: Optional[TracingManager] = None


def init_observability(service_name: str, environment: str = None):
    """Initialize logging and tracing for a module.

    The tracer provider is process-wide, so it is only set up by the first
    caller; later callers get their own logger and the shared manager.

    Args:
        service_name: Name used for the logger
        environment: Environment name (defaults to Config.ENVIRONMENT)

    Returns:
        tuple: (logger, tracing_manager)
    """
    global _tracing

    if environment is None:
        environment = Config.ENVIRONMENT

    logger = StructuredLogger(service_name)

    if _tracing is None:
        _tracing = TracingManager(Config.SERVICE_NAME, environment)
        _tracing.instrument_requests()
        logger.info("Observability initialized", service=service_name, environment=environment)

    return logger, _tracing


def traced_function(operation_name: Optional[str] = None):
    """Decorator to run a function inside an OpenTelemetry span.

    Usage:
        @traced_function("fetch_question")
        def fetch():
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            tracer = trace.get_tracer(__name__)
            op_name = operation_name or func.__name__

            with tracer.start_as_current_span(op_name) as span:
                span.set_attribute("function.name", func.__name__)
                span.set_attribute("function.module", func.__module__)

                try:
                    result = func(*args, **kwargs)
                    span.set_attribute("function.status", "success")
                    return result
                except Exception as e:
                    span.set_attribute("function.status", "error")
                    span.set_attribute("error.type", type(e).__name__)
                    span.set_attribute("error.message", str(e))
                    span.record_exception(e)
                    raise

        return wrapper
    return decorator


def get_correlation_id(headers: Optional[Mapping[str, str]] = None) -> str:
    """Get or generate a correlation ID.

    Checks, case-insensitively:
    1. X-Correlation-ID header
    2. X-Request-ID header
    3. Generates new UUID if neither is present
    """
    if headers:
        lowered = {str(k).lower(): v for k, v in headers.items()}
        correlation_id = lowered.get('x-correlation-id') or lowered.get('x-request-id')
        if correlation_id:
            return correlation_id
    return str(uuid.uuid4())
