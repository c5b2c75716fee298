import streamlit as st

from assessor.config import AppConfig
from assessor.interview.presentation.viewmodel import InterviewViewModel
from assessor.interview.presentation.views import components


def render(vm: InterviewViewModel) -> None:
    session = vm.session
    if session is None:
        st.error("No interview to review.")
        return

    st.title(f"📝 Review: {session.candidate_name or 'Candidate'}")
    summary = vm.summary()
    components.render_summary_metrics(summary)

    if vm.notice:
        st.warning(vm.notice)

    # 1. Per-question validation
    for question in session.all_questions():
        assessment = session.assessments[question.id]
        label = "⏭️ skipped" if assessment.did_not_get_to else f"{assessment.effective_score() or '-'}/5"
        with st.expander(f"{question.text[:80]} · {label}"):
            if assessment.did_not_get_to:
                st.caption("The interview did not get to this question.")
                continue
            score = st.slider(
                "Score",
                1,
                5,
                value=assessment.effective_score() or AppConfig.NEUTRAL_SCORE,
                key=f"score-{question.id}",
            )
            feedback = st.text_area(
                "Feedback", value=assessment.effective_feedback() or "", key=f"fb-{question.id}"
            )
            if st.button("✅ Validate", key=f"validate-{question.id}"):
                vm.validate_score(question.id, score, feedback)
                st.rerun()

    # 2. Overall feedback
    st.subheader("Overall assessment")
    if st.button("🤖 Draft overall feedback"):
        with st.spinner("Writing summary..."):
            vm.generate_summary()
        st.rerun()

    col1, col2 = st.columns(2)
    technical = col1.number_input(
        "Technical score", 0.0, 5.0,
        value=float(session.overall_technical_score or summary.technical_score), step=0.1,
    )
    soft = col2.number_input(
        "Soft-skill score", 0.0, 5.0,
        value=float(session.overall_soft_skill_score or summary.soft_skill_score), step=0.1,
    )
    technical_text = st.text_area("Technical feedback", value=session.technical_feedback or "")
    soft_text = st.text_area("Soft-skill feedback", value=session.soft_skill_feedback or "")

    col_back, col_save = st.columns(2)
    if col_back.button("⬅️ Back to interview", use_container_width=True):
        vm.back_to_interview()
        st.rerun()
    if col_save.button("💾 Complete & save", type="primary", use_container_width=True):
        vm.save_overall(technical, soft, technical_text, soft_text)
        vm.complete_review()
        st.rerun()


def render_completed(vm: InterviewViewModel) -> None:
    st.balloons()
    st.success("Interview saved to history. 🏆")
    if st.button("🎤 New interview", type="primary"):
        vm.reset()
        st.rerun()
