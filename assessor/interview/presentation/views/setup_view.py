import streamlit as st

from assessor.config import AppConfig, InterviewLevel
from assessor.interview.domain.errors import RemoteSourceError
from assessor.interview.domain.ports import IQuestionBankStore, IRemoteQuestionSource
from assessor.interview.presentation.viewmodel import InterviewViewModel


def _remote_options(remote: IRemoteQuestionSource | None) -> list[str]:
    if remote is None:
        return []
    if "remote_banks" not in st.session_state:
        try:
            st.session_state.remote_banks = [f.path for f in remote.find_question_banks()]
        except RemoteSourceError as e:
            st.warning(f"Could not list the remote question banks: {e}")
            st.session_state.remote_banks = []
    return st.session_state.remote_banks


def render(vm: InterviewViewModel, banks: IQuestionBankStore, remote: IRemoteQuestionSource | None) -> None:
    st.title("🎤 New Interview")

    col1, col2 = st.columns(2)
    candidate = col1.text_input("Candidate name")
    interviewer = col2.text_input("Interviewer name")

    level = st.radio(
        "Interview level",
        list(InterviewLevel),
        format_func=lambda lvl: lvl.label,
        horizontal=True,
    )
    count = st.number_input(
        "Technical questions",
        min_value=1,
        max_value=AppConfig.MAX_QUESTION_COUNT,
        value=AppConfig.DEFAULT_QUESTION_COUNT,
    )

    local = st.multiselect(
        "Uploaded question banks",
        [b.filename for b in banks.list_banks()],
    )
    remote_paths = st.multiselect("Question banks from GitHub", _remote_options(remote))

    if st.button("🚀 Start Interview", type="primary", disabled=not (local or remote_paths)):
        with st.spinner("Loading questions..."):
            vm.start_interview(local, remote_paths, int(count), level, candidate, interviewer)
        st.rerun()


def render_empty(vm: InterviewViewModel) -> None:
    st.warning("The selected question banks contain no questions.")
    if st.button("Back"):
        vm.reset()
        st.rerun()
