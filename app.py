import os
import logging
import streamlit as st

# --- OTel & Observability Imports ---
from opentelemetry import trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource

# --- OTel Logging Imports ---
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter

# --- Prometheus Import ---
from prometheus_client import start_http_server

# --- Application Imports ---
from assessor.config import AppConfig
from assessor.fsm import InterviewState
from assessor.interview.adapters.db_manager import DatabaseManager
from assessor.interview.adapters.file_bank_store import FileQuestionBankStore
from assessor.interview.adapters.github_source import GitHubQuestionSource
from assessor.interview.adapters.llm_scorer import LLMScoringService
from assessor.interview.adapters.sqlite_history_repository import SQLiteHistoryRepository
from assessor.interview.application.service import InterviewService
from assessor.interview.presentation.state_provider import StreamlitStateProvider
from assessor.interview.presentation.viewmodel import InterviewViewModel
from assessor.interview.presentation.views import (
    components,
    interview_view,
    library_view,
    review_view,
    setup_view,
)


# --- 1. Configure Observability ---
def configure_observability():
    """
    Sends traces and logs over OTLP when the OTEL env vars are set.
    Starts a background Prometheus server for metrics.
    """
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    headers = os.getenv("OTEL_EXPORTER_OTLP_HEADERS")

    if not endpoint or not headers:
        logging.warning("OTEL env vars not set. Telemetry stays local.")
    else:
        resource = Resource.create({"service.name": AppConfig.SERVICE_NAME})

        # --- A. TRACING SETUP ---
        trace_provider = TracerProvider(resource=resource)
        trace_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, headers=headers)))
        trace.set_tracer_provider(trace_provider)

        # --- B. LOGGING SETUP ---
        logger_provider = LoggerProvider(resource=resource)
        logger_provider.add_log_record_processor(BatchLogRecordProcessor(OTLPLogExporter(endpoint=endpoint, headers=headers)))
        set_logger_provider(logger_provider)
        logging.getLogger().addHandler(LoggingHandler(level=logging.INFO, logger_provider=logger_provider))

    # --- C. METRICS SETUP (Prometheus) ---
    port = int(os.getenv("ASSESSOR_METRICS_PORT", "8000"))
    try:
        start_http_server(port)
        logging.info(f"✅ Prometheus metrics server started on port {port}")
    except OSError:
        logging.warning(f"Prometheus port {port} already in use (likely Streamlit reload). Skipping.")


# --- 2. Bootstrap Application ---
if "observability_configured" not in st.session_state:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')
    configure_observability()
    st.session_state.observability_configured = True


# --- 3. Dependency Injection (Composition Root) ---
@st.cache_resource
def get_adapters():
    history = SQLiteHistoryRepository(DatabaseManager(AppConfig.DB_PATH))
    banks = FileQuestionBankStore(AppConfig.BANKS_DIR)
    remote = GitHubQuestionSource()
    scorer = LLMScoringService()
    return history, banks, remote, scorer


def get_service() -> InterviewService:
    # One service per browser session; adapters are shared
    if "interview_service" not in st.session_state:
        history, banks, remote, scorer = get_adapters()
        st.session_state.interview_service = InterviewService(scorer, history, banks, remote)
    return st.session_state.interview_service


def main():
    st.set_page_config(page_title=AppConfig.APP_TITLE, layout="centered")
    components.apply_styles()

    _, banks, remote, _ = get_adapters()
    service = get_service()
    state_provider = StreamlitStateProvider()
    vm = InterviewViewModel(service, state_provider)

    # --- 4. Sidebar ---
    page, do_reset = components.render_sidebar(state_provider.get('page', 'Interview'))
    state_provider.set('page', page)

    if do_reset:
        vm.reset()
        st.rerun()

    if page == "Question Banks":
        library_view.render_banks(banks)
        return
    if page == "History":
        library_view.render_history(service)
        return

    # --- 5. Main Router (FSM) ---
    state = vm.current_state

    if state == InterviewState.SETUP:
        setup_view.render(vm, banks, remote)
    elif state == InterviewState.IN_PROGRESS:
        interview_view.render(vm)
    elif state == InterviewState.REVIEW:
        review_view.render(vm)
    elif state == InterviewState.COMPLETED:
        review_view.render_completed(vm)
    elif state == InterviewState.EMPTY_STATE:
        setup_view.render_empty(vm)


if __name__ == "__main__":
    main()
