# ==============================================================================
# ARCHITECTURE: INTEGRATION TEST (FILE SYSTEM)
# ------------------------------------------------------------------------------
# GOAL: Verify the question bank store against a real directory.
# CONSTRAINTS:
#   1. I/O: Confined to pytest's tmp_path.
# ==============================================================================
import pytest

from assessor.interview.adapters.file_bank_store import (
    FileQuestionBankStore,
    sanitize_filename,
)
from assessor.interview.domain.errors import (
    InvalidBankPathError,
    QuestionBankNotFoundError,
    QuestionBankUnreadableError,
)

BANK = "## Beginner\n### Q1: One?\n### Q2: Two?\n"


@pytest.fixture
def store(tmp_path):
    return FileQuestionBankStore(str(tmp_path / "banks"))


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("week 1.md", "week_1.md"),
        ("notes", "notes.md"),
        ("a/b\\c.md", "a_b_c.md"),
    ],
)
def test_sanitize_filename(raw, expected):
    assert sanitize_filename(raw) == expected


def test_save_and_list(store):
    saved = store.save_bank("python week.md", BANK)

    assert saved.filename == "python_week.md"
    assert saved.name == "python week"
    assert saved.question_count == 2
    assert saved.size == len(BANK)
    assert [b.filename for b in store.list_banks()] == ["python_week.md"]


def test_name_clash_gets_suffix(store):
    store.save_bank("bank.md", BANK)
    second = store.save_bank("bank.md", "### Q1: Other?\n")
    third = store.save_bank("bank.md", "")

    assert second.filename == "bank_1.md"
    assert third.filename == "bank_2.md"
    assert store.read_bank("bank.md") == BANK


def test_read_and_delete(store):
    store.save_bank("bank.md", BANK)

    assert store.read_bank("bank.md") == BANK

    store.delete_bank("bank.md")
    assert store.list_banks() == []


def test_missing_bank_raises(store):
    with pytest.raises(QuestionBankNotFoundError):
        store.read_bank("ghost.md")
    with pytest.raises(QuestionBankNotFoundError):
        store.delete_bank("ghost.md")


def test_undecodable_bank_raises_typed_error(store):
    store.list_banks()
    (store.banks_dir / "latin1.md").write_bytes(b"### Q1: caf\xe9?\n")

    with pytest.raises(QuestionBankUnreadableError) as exc:
        store.read_bank("latin1.md")

    assert exc.value.filename == "latin1.md"


@pytest.mark.parametrize("filename", ["../outside.md", "../../etc/passwd", "."])
def test_paths_outside_directory_are_rejected(store, tmp_path, filename):
    (tmp_path / "outside.md").write_text("secret")

    with pytest.raises(InvalidBankPathError):
        store.read_bank(filename)


def test_empty_directory_is_created_on_list(store):
    assert store.list_banks() == []
    assert store.banks_dir.is_dir()
