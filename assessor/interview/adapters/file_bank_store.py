import re
from datetime import datetime, timezone
from pathlib import Path

from assessor.config import AppConfig
from assessor.interview.adapters.markdown_parser import count_questions
from assessor.interview.domain.errors import (
    InvalidBankPathError,
    QuestionBankNotFoundError,
    QuestionBankUnreadableError,
)
from assessor.interview.domain.models import QuestionBank
from assessor.interview.domain.ports import IQuestionBankStore
from assessor.shared.telemetry import Telemetry

UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")


def sanitize_filename(filename: str) -> str:
    safe = UNSAFE_FILENAME_CHARS.sub("_", filename)
    return safe if safe.endswith(".md") else f"{safe}.md"


def _iso(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


class FileQuestionBankStore(IQuestionBankStore):
    """
    Uploaded question banks, one markdown file each, in a single directory.
    """

    def __init__(self, banks_dir: str = AppConfig.BANKS_DIR) -> None:
        self.telemetry = Telemetry("FileQuestionBankStore")
        self.banks_dir = Path(banks_dir)

    def _ensure_dir(self) -> None:
        self.banks_dir.mkdir(parents=True, exist_ok=True)

    def _resolve(self, filename: str) -> Path:
        root = self.banks_dir.resolve()
        path = (root / filename).resolve()
        if not path.is_relative_to(root) or path == root:
            raise InvalidBankPathError(filename)
        return path

    def _describe(self, path: Path) -> QuestionBank:
        stats = path.stat()
        return QuestionBank(
            id=path.stem,
            name=path.stem.replace("_", " "),
            filename=path.name,
            question_count=count_questions(path.read_text(encoding="utf-8")),
            created_at=_iso(stats.st_ctime),
            modified_at=_iso(stats.st_mtime),
            size=stats.st_size,
        )

    def list_banks(self) -> list[QuestionBank]:
        self._ensure_dir()
        banks = []
        for path in sorted(self.banks_dir.glob("*.md")):
            try:
                banks.append(self._describe(path))
            except (OSError, UnicodeDecodeError) as e:
                self.telemetry.log_error("Skipping unreadable bank", e, file=path.name)
        return banks

    def save_bank(self, filename: str, content: str) -> QuestionBank:
        """Stores the upload, adding _1, _2, ... when the name is taken."""
        self._ensure_dir()
        safe = sanitize_filename(filename)
        stem = safe[: -len(".md")]

        final = safe
        counter = 1
        while (self.banks_dir / final).exists():
            final = f"{stem}_{counter}.md"
            counter += 1

        path = self._resolve(final)
        path.write_text(content, encoding="utf-8")
        self.telemetry.log_info("Question Bank Saved", filename=final)
        return self._describe(path)

    def read_bank(self, filename: str) -> str:
        path = self._resolve(filename)
        if not path.is_file():
            raise QuestionBankNotFoundError(filename)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.telemetry.log_error("Bank read failed", e, file=filename)
            raise QuestionBankUnreadableError(filename, str(e)) from e

    def delete_bank(self, filename: str) -> None:
        path = self._resolve(filename)
        if not path.is_file():
            raise QuestionBankNotFoundError(filename)
        path.unlink()
        self.telemetry.log_info("Question Bank Deleted", filename=filename)
