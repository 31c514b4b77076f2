from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

from mockprep.config import Settings, get_settings
from mockprep.types import QuizResult


@dataclass(slots=True, frozen=True)
class QuizQuestion:
    question: str
    options: tuple[str, ...]
    correct_answer: int


QUIZ_BANK: dict[str, tuple[QuizQuestion, ...]] = {
    "Software Engineer": (
        QuizQuestion("What is the time complexity of binary search?", ("O(n)", "O(log n)", "O(n²)", "O(1)"), 1),
        QuizQuestion("Which data structure uses LIFO principle?", ("Queue", "Stack", "Array", "Tree"), 1),
        QuizQuestion(
            "What does REST stand for?",
            (
                "Remote State Transfer",
                "Representational State Transfer",
                "Resource State Transfer",
                "Relational State Transfer",
            ),
            1,
        ),
        QuizQuestion(
            "Which sorting algorithm has the best average case time complexity?",
            ("Bubble Sort", "Insertion Sort", "Quick Sort", "Selection Sort"),
            2,
        ),
        QuizQuestion(
            "What is polymorphism in OOP?",
            ("Multiple inheritance", "Method overloading", "Ability to take multiple forms", "Data encapsulation"),
            2,
        ),
    ),
    "Product Manager": (
        QuizQuestion(
            "What is a product roadmap?",
            ("A list of bugs", "Strategic plan for product development", "Marketing strategy", "Sales forecast"),
            1,
        ),
        QuizQuestion(
            "What does MVP stand for?",
            ("Most Valuable Player", "Minimum Viable Product", "Maximum Value Proposition", "Market Validation Process"),
            1,
        ),
        QuizQuestion(
            "Which metric measures user engagement?",
            ("Revenue", "DAU/MAU ratio", "Cost per acquisition", "Profit margin"),
            1,
        ),
        QuizQuestion(
            "What is A/B testing?",
            ("Testing two products", "Comparing two versions", "Alpha and Beta testing", "Automated testing"),
            1,
        ),
        QuizQuestion(
            "What is product-market fit?",
            ("Product pricing", "Product matching market needs", "Market size", "Product features"),
            1,
        ),
    ),
    "Data Scientist": (
        QuizQuestion(
            "What is overfitting in machine learning?",
            ("Model too simple", "Model too complex", "Perfect model", "Underfitting"),
            1,
        ),
        QuizQuestion(
            "Which algorithm is used for classification?",
            ("Linear Regression", "K-Means", "Decision Tree", "PCA"),
            2,
        ),
        QuizQuestion(
            "What is the purpose of cross-validation?",
            ("Data cleaning", "Model evaluation", "Feature selection", "Data visualization"),
            1,
        ),
        QuizQuestion(
            "What does ROC curve measure?",
            ("Model accuracy", "True positive vs false positive rate", "Training time", "Data quality"),
            1,
        ),
        QuizQuestion(
            "What is feature engineering?",
            ("Creating new features", "Removing features", "Scaling features", "All of the above"),
            3,
        ),
    ),
}


def quiz_roles() -> list[str]:
    return list(QUIZ_BANK)


def questions_for_role(role: str) -> list[QuizQuestion]:
    return list(QUIZ_BANK.get(role, ()))


@dataclass(slots=True)
class QuizAttempt:
    """A timed multiple-choice run; answers are final once given."""

    user_id: str
    role: str
    time_limit_sec: int = 60
    questions: list[QuizQuestion] = field(default_factory=list)
    answers: list[bool] = field(default_factory=list)
    current_index: int = 0
    is_complete: bool = False
    timed_out: bool = False
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None

    @classmethod
    def start(cls, user_id: str, role: str, settings: Settings | None = None) -> QuizAttempt:
        settings = settings or get_settings()
        questions = questions_for_role(role)
        if not questions:
            raise ValueError(f"no quiz available for role {role!r}")
        return cls(user_id=user_id, role=role, time_limit_sec=settings.quiz_time_limit_sec, questions=questions)

    @property
    def score(self) -> int:
        return sum(self.answers)

    @property
    def current_question(self) -> QuizQuestion | None:
        if self.is_complete:
            return None
        return self.questions[self.current_index]

    def time_remaining(self, now: datetime | None = None) -> int:
        elapsed = ((now or datetime.now(UTC)) - self.started_at).total_seconds()
        return max(0, self.time_limit_sec - int(elapsed))

    def answer(self, index: int) -> bool | None:
        """Lock in an answer for the current question; None if it was already answered."""
        if self.is_complete or len(self.answers) > self.current_index:
            return None
        question = self.questions[self.current_index]
        if index < 0 or index >= len(question.options):
            raise ValueError(f"answer index {index} out of range")

        correct = index == question.correct_answer
        self.answers.append(correct)
        return correct

    def advance(self) -> bool:
        """Move past an answered question; returns False once the attempt is complete."""
        if self.is_complete:
            return False
        if len(self.answers) <= self.current_index:
            raise ValueError("answer the current question before moving on")
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
            return True
        self._complete()
        return False

    def time_up(self) -> None:
        if self.is_complete:
            return
        self.timed_out = True
        self._complete()

    def result(self) -> QuizResult:
        if not self.is_complete:
            raise ValueError("quiz attempt is still running")
        return QuizResult(
            id=f"quiz-{uuid.uuid4().hex}",
            user=self.user_id,
            role=self.role,
            score=self.score,
            total_questions=len(self.questions),
            completed_at=self.completed_at or datetime.now(UTC),
            timed_out=self.timed_out,
        )

    def _complete(self) -> None:
        self.is_complete = True
        self.completed_at = datetime.now(UTC)
