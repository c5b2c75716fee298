import random

from assessor.interview.domain.models import StarterQuestion, StarterType

STARTER_QUESTION_CONFIG: dict[StarterType, dict[str, tuple[str, ...]]] = {
    "about-yourself": {
        "variations": (
            "Tell me about yourself and your background in technology.",
            "What's your backstory? How did you get into tech?",
            "Give me a brief overview of your professional background.",
            "Walk me through your career journey so far.",
            "Tell me a bit about yourself - who are you professionally?",
        ),
        "guidelines": (
            "Clear and concise introduction",
            "Relevant technical background",
            "Career trajectory and goals",
            "Passion for the field",
        ),
    },
    "project-work": {
        "variations": (
            "Tell me about a significant project you've worked on.",
            "What's a recent project you're proud of?",
            "Describe a challenging project and your role in it.",
            "Walk me through a technical project from start to finish.",
            "What's a project that showcases your skills best?",
        ),
        "guidelines": (
            "Project scope and objectives",
            "Your specific role and contributions",
            "Technologies used",
            "Challenges faced and solutions",
            "Results and learnings",
        ),
    },
}


def generate_starter_questions(
    rng: random.Random | None = None,
) -> list[StarterQuestion]:
    """One 'about yourself' and one 'project' opener, phrasing picked at random."""
    draw = rng if rng is not None else random.Random()
    starters = []
    for index, (kind, config) in enumerate(STARTER_QUESTION_CONFIG.items(), start=1):
        starters.append(
            StarterQuestion(
                id=f"starter-{index}",
                text=draw.choice(config["variations"]),
                type=kind,
                guidelines=config["guidelines"],
            )
        )
    return starters
