"""
Parses markdown question banks into Question records.

Expected layout::

    ## Beginner (Foundational)
    ### Q1: What is a closure?
    **Keywords:** scope, function, environment
    <details><summary>Model answer</summary>
    ...
    </details>

Section headings (``#`` or ``##``) switch the difficulty applied to every
following question until the next section heading.
"""

import re

from assessor.config import Difficulty
from assessor.interview.domain.models import Question

QUESTION_HEADER = re.compile(r"^###\s+Q(\d+):\s*(.+?)\s*$")
SECTION_HEADER = re.compile(r"^#{1,2}\s")
KEYWORDS_LINE = re.compile(r"\*\*Keywords:\*\*\s*(.+?)(?=\n|$)")
DETAILS_BLOCK = re.compile(
    r"<details>[\s\S]*?<summary>[\s\S]*?</summary>([\s\S]*?)</details>"
)
CODE_FENCE = re.compile(r"```[\s\S]*?```")
EXTRA_BLANK_LINES = re.compile(r"\n{3,}")
BANK_QUESTION_HEADER = re.compile(r"###\s+Q\d+:")

SECTION_MARKERS: tuple[tuple[Difficulty, tuple[str, ...]], ...] = (
    (Difficulty.BEGINNER, ("Beginner", "Foundational")),
    (Difficulty.INTERMEDIATE, ("Intermediate", "Application")),
    (Difficulty.ADVANCED, ("Advanced", "Deep Dive")),
)


def section_difficulty(heading: str) -> Difficulty | None:
    for difficulty, markers in SECTION_MARKERS:
        if any(marker in heading for marker in markers):
            return difficulty
    return None


def clean_model_answer(raw: str) -> str:
    text = CODE_FENCE.sub("[Code Example]", raw.strip())
    return EXTRA_BLANK_LINES.sub("\n\n", text)


def _build_question(
    number: int,
    text: str,
    body: str,
    difficulty: Difficulty,
    week_number: int,
    source: str | None,
) -> Question:
    keywords_match = KEYWORDS_LINE.search(body)
    keywords = (
        tuple(k.strip() for k in keywords_match.group(1).split(",") if k.strip())
        if keywords_match
        else ()
    )
    details = DETAILS_BLOCK.search(body)

    return Question(
        id=f"week{week_number}-q{number}",
        question_number=number,
        text=text,
        keywords=keywords,
        model_answer=clean_model_answer(details.group(1)) if details else "",
        difficulty=difficulty,
        week_number=week_number,
        source=source,
    )


def parse_interview_questions(
    content: str, week_number: int, source: str | None = None
) -> list[Question]:
    current = Difficulty.BEGINNER
    questions: list[Question] = []
    # (number, text, difficulty, body lines) of the question being read
    pending: tuple[int, str, Difficulty, list[str]] | None = None
    in_details = False

    def flush() -> None:
        if pending is not None:
            number, text, difficulty, body = pending
            questions.append(
                _build_question(
                    number, text, "\n".join(body), difficulty, week_number, source
                )
            )

    for line in content.replace("\r\n", "\n").split("\n"):
        header = QUESTION_HEADER.match(line)
        if header and not in_details:
            flush()
            pending = (int(header.group(1)), header.group(2), current, [])
            continue

        if SECTION_HEADER.match(line) and not in_details:
            switched = section_difficulty(line)
            if switched is not None:
                current = switched
            continue

        if "<details>" in line:
            in_details = True
        if "</details>" in line:
            in_details = False

        if pending is not None:
            pending[3].append(line)

    flush()
    return questions


def count_questions(content: str) -> int:
    return len(BANK_QUESTION_HEADER.findall(content))
