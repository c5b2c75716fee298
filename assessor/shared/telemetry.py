import logging
import sys
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

from prometheus_client import REGISTRY, Counter, Histogram

# --- Context for Correlation IDs ---
correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="system")

# --- Prometheus Metric Definitions ---
DURATION_METRIC = "assessor_method_duration_seconds"
FALLBACK_METRIC = "assessor_scoring_fallbacks"

METHOD_DURATION: Histogram
SCORING_FALLBACKS: Counter


def _registered(name: str) -> Any:
    # Streamlit re-executes modules on rerun; reuse what is already registered.
    return REGISTRY._names_to_collectors[name]


try:
    METHOD_DURATION = Histogram(
        DURATION_METRIC, "Time spent in method", ["component", "method"]
    )
except ValueError:
    METHOD_DURATION = cast(Histogram, _registered(DURATION_METRIC))

try:
    SCORING_FALLBACKS = Counter(
        FALLBACK_METRIC, "Scoring calls answered with a neutral score", ["reason"]
    )
except ValueError:
    SCORING_FALLBACKS = cast(Counter, _registered(FALLBACK_METRIC + "_total"))

# --- Type Definitions for Decorator ---
P = ParamSpec("P")
R = TypeVar("R")


def measure_time(
    metric_name: str, component: str | None = None
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator for timing calls + logging.

    On methods the component label and logger come from `self`
    (its class name and its `telemetry` attribute). Free functions
    pass `component` explicitly and get a Telemetry of that name.
    """
    fixed_telemetry = Telemetry(component) if component else None

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start = time.perf_counter()

            if fixed_telemetry is not None:
                label = fixed_telemetry.component
                telemetry: Telemetry | None = fixed_telemetry
            else:
                self_obj: Any = args[0] if args else None
                label = self_obj.__class__.__name__ if self_obj else "Unknown"
                telemetry = getattr(self_obj, "telemetry", None)

            method = func.__name__
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start
                METHOD_DURATION.labels(component=label, method=method).observe(
                    duration
                )
                if telemetry:
                    telemetry.log_error(
                        f"💥 Failed: {metric_name}",
                        e,
                        duration_ms=round(duration * 1000, 2),
                    )
                raise

            duration = time.perf_counter() - start
            METHOD_DURATION.labels(component=label, method=method).observe(duration)
            if telemetry:
                telemetry.log_info(
                    f"⏱️ {metric_name}", duration_ms=round(duration * 1000, 2)
                )
            return result

        return wrapper

    return decorator


class Telemetry:
    """
    Facade for Logs, Metrics, and Tracing.
    """

    def __init__(self, component_name: str) -> None:
        self.component = component_name
        self.logger: logging.Logger
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Initializes the logger. Safe to call multiple times."""
        self.logger = logging.getLogger(self.component)

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            formatter = logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def __getstate__(self) -> dict[str, Any]:
        """Pickling: Save everything EXCEPT the logger."""
        state = self.__dict__.copy()
        state.pop("logger", None)
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        """Unpickling: Restore state and re-create logger."""
        self.__dict__.update(state)
        self._setup_logger()

    @staticmethod
    def start_trace() -> str:
        c_id = str(uuid.uuid4())[:8]
        correlation_id_ctx.set(c_id)
        return c_id

    @staticmethod
    def get_trace_id() -> str:
        return correlation_id_ctx.get()

    @staticmethod
    def record_fallback(reason: str) -> None:
        SCORING_FALLBACKS.labels(reason=reason).inc()

    def log_info(self, event: str, **kwargs: Any) -> None:
        self.logger.info(f"[{self.get_trace_id()}] {event} | {kwargs}")

    def log_warning(self, event: str, **kwargs: Any) -> None:
        self.logger.warning(f"[{self.get_trace_id()}] ⚠️ {event} | {kwargs}")

    def log_error(self, event: str, error: Exception, **kwargs: Any) -> None:
        msg = f"[{self.get_trace_id()}] ❌ {event} | Error: {str(error)} | {kwargs}"
        self.logger.error(msg, exc_info=True)
