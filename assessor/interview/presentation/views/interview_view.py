import streamlit as st

from assessor.interview.domain.models import AssessmentStatus, Question
from assessor.interview.presentation.viewmodel import InterviewViewModel
from assessor.interview.presentation.views import components

SOFT_SKILL_LABELS = {
    "clearly_spoken": "Clearly spoken",
    "eye_contact": "Eye contact",
    "confidence": "Confidence",
    "structured_thinking": "Structured thinking",
}


def render(vm: InterviewViewModel) -> None:
    session = vm.session
    question = vm.current_question
    assessment = vm.current_assessment
    if session is None or question is None or assessment is None:
        st.error("No active interview.")
        return

    current, total = vm.progress()
    components.render_progress(current, total, session.level)
    components.render_question_header(question)

    # 1. Keywords (technical questions only)
    if isinstance(question, Question):
        if question.keywords:
            st.subheader("Keywords")
            cols = st.columns(3)
            for i, keyword in enumerate(question.keywords):
                hit = keyword in assessment.keywords_hit
                if cols[i % 3].checkbox(keyword, value=hit, key=f"kw-{question.id}-{keyword}") != hit:
                    vm.toggle_keyword(keyword)
        if question.model_answer:
            with st.expander("📖 Model answer"):
                st.markdown(question.model_answer)
    else:
        st.subheader("Guidelines")
        for guideline in question.guidelines:
            st.markdown(f"- {guideline}")

    # 2. Soft skills
    st.subheader("Soft skills")
    cols = st.columns(4)
    for col, (skill, label) in zip(cols, SOFT_SKILL_LABELS.items()):
        current_value = getattr(assessment.soft_skills, skill)
        if col.checkbox(label, value=current_value, key=f"ss-{question.id}-{skill}") != current_value:
            vm.toggle_soft_skill(skill)

    # 3. Notes
    notes = st.text_area("Interviewer notes", value=assessment.interviewer_notes, key=f"notes-{question.id}")
    if notes != assessment.interviewer_notes:
        vm.save_notes(notes)

    skipped = st.checkbox("Did not get to this question", value=assessment.did_not_get_to, key=f"skip-{question.id}")
    if skipped != assessment.did_not_get_to:
        vm.skip_current(skipped)

    # 4. Scoring
    if assessment.status in (AssessmentStatus.READY, AssessmentStatus.VALIDATED):
        st.info(f"🤖 Suggested score: {assessment.llm_score}/5\n\n{assessment.llm_feedback}")

    st.markdown("---")
    col_prev, col_score, col_next = st.columns(3)
    if col_prev.button("⬅️ Previous", disabled=current <= 1, use_container_width=True):
        vm.previous_question()
        st.rerun()

    if col_score.button("🤖 Score answer", disabled=assessment.did_not_get_to, use_container_width=True):
        with st.spinner("Scoring..."):
            vm.score_current()
        st.rerun()

    if current < total:
        if col_next.button("Next ➡️", type="primary", use_container_width=True):
            vm.next_question()
            st.rerun()
    elif col_next.button("🏁 Finish", type="primary", use_container_width=True):
        vm.finish_interview()
        st.rerun()
