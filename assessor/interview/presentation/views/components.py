import streamlit as st

from assessor.config import AppConfig, Difficulty, InterviewLevel
from assessor.interview.domain.models import Question, ScoreSummary, StarterQuestion
from assessor.shared.telemetry import Telemetry


def apply_styles():
    st.markdown("""
        <style>
            .block-container { padding-top: 2rem !important; }
            .stat-box { padding: 10px; background-color: #f0f2f6; border-radius: 5px; text-align: center; font-weight: bold; }
            .question-text { font-size: 1.2rem; font-weight: 600; margin-bottom: 1rem; }
        </style>
    """, unsafe_allow_html=True)


def render_sidebar(current_page: str) -> tuple[str, bool]:
    st.sidebar.header(f"🎤 {AppConfig.APP_TITLE}")

    pages = ["Interview", "Question Banks", "History"]
    page = st.sidebar.radio("Page", pages, index=pages.index(current_page) if current_page in pages else 0)

    reset = st.sidebar.button("Discard session")

    with st.sidebar.expander("🕵️‍♂️ Telemetry"):
        st.caption("Trace ID: " + Telemetry.get_trace_id())

    return page, reset


def render_progress(current: int, total: int, level: InterviewLevel):
    col1, col2 = st.columns(2)
    col1.markdown(f'<div class="stat-box">🎯 {level.label}</div>', unsafe_allow_html=True)
    col2.markdown(f'<div class="stat-box">📋 Question {current}/{total}</div>', unsafe_allow_html=True)
    st.progress(current / total if total else 0.0)


def render_question_header(question: Question | StarterQuestion):
    if isinstance(question, Question):
        difficulty: Difficulty = question.difficulty
        st.caption(f"{difficulty.icon} {difficulty.label} • Week {question.week_number or '-'} • {question.source or ''}")
    else:
        st.caption("👋 Warm-up")
    st.markdown(f'<div class="question-text">{question.text}</div>', unsafe_allow_html=True)


def render_summary_metrics(summary: ScoreSummary):
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Average", f"{summary.average_score} / 5")
    col2.metric("Technical", f"{summary.technical_score} / 5")
    col3.metric("Soft Skills", f"{summary.soft_skill_score} / 5")
    col4.metric("Answered", f"{summary.completed_questions} ({summary.skipped_questions} skipped)")
