import streamlit as st

from assessor.interview.application.service import InterviewService
from assessor.interview.domain.errors import AssessorError
from assessor.interview.domain.ports import IQuestionBankStore
from assessor.interview.domain.scoring import calculate_aggregate_scores


def render_banks(banks: IQuestionBankStore) -> None:
    st.title("📚 Question Banks")

    upload = st.file_uploader("Upload a markdown question bank", type=["md"])
    if upload is not None and st.button("Save bank", type="primary"):
        try:
            bank = banks.save_bank(upload.name, upload.getvalue().decode("utf-8"))
        except UnicodeDecodeError:
            st.error(f"{upload.name} is not UTF-8 text.")
        except (AssessorError, OSError) as e:
            st.error(f"Could not save {upload.name}: {e}")
        else:
            st.success(f"Saved {bank.filename} ({bank.question_count} questions)")

    for bank in banks.list_banks():
        col1, col2 = st.columns([4, 1])
        col1.markdown(f"**{bank.name}** · {bank.question_count} questions, {bank.size} bytes")
        if col2.button("🗑️", key=f"del-{bank.filename}"):
            try:
                banks.delete_bank(bank.filename)
            except AssessorError as e:
                st.error(str(e))
            st.rerun()


def render_history(service: InterviewService) -> None:
    st.title("🗂️ Interview History")

    sessions = service.list_history()
    if not sessions:
        st.info("No interviews saved yet.")
        return

    for session in sessions:
        summary = calculate_aggregate_scores(session.assessments)
        title = f"{session.candidate_name or 'Candidate'} • {session.date[:10]} • {session.level.label}"
        with st.expander(title):
            st.markdown(
                f"Technical: **{session.overall_technical_score}** / 5 • "
                f"Soft skills: **{session.overall_soft_skill_score}** / 5 • "
                f"Average: **{summary.average_score}** / 5"
            )
            if session.technical_feedback:
                st.markdown(session.technical_feedback)
            if session.soft_skill_feedback:
                st.markdown(session.soft_skill_feedback)
            if st.button("Delete", key=f"hist-{session.id}"):
                service.delete_history(session.id)
                st.rerun()
