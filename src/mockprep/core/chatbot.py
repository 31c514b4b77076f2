from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

from mockprep.config import Settings, get_settings
from mockprep.core.events import EventBus, Notifier
from mockprep.core.gateway import SessionGateway, resolve
from mockprep.core.scoring import round_half_up
from mockprep.errors import (
    PersistenceError,
    PersistenceErrorKind,
    classify_persistence_error,
    persistence_error_notice,
)
from mockprep.types import InterviewConfig, InterviewQuestion, InterviewResponse, InterviewSessionRecord

logger = logging.getLogger(__name__)

SUBMIT_SENTINEL = "enough"
OVERALL_FEEDBACK = "Good performance overall. Continue practicing to improve your interview skills."

QUESTION_BANK: dict[str, dict[str, tuple[str, ...]]] = {
    "Technical": {
        "Beginner": (
            "Can you explain what a variable is in programming?",
            "What is the difference between a class and an object?",
            "How would you explain recursion to someone new to programming?",
        ),
        "Medium": (
            "Explain the difference between synchronous and asynchronous programming.",
            "What are the key principles of object-oriented programming?",
            "How would you optimize a slow database query?",
        ),
        "Hard": (
            "Design a distributed caching system for a high-traffic application.",
            "Explain how you would implement a rate limiter for an API.",
            "Describe the trade-offs between different database indexing strategies.",
        ),
    },
    "Behavioral": {
        "Beginner": (
            "Tell me about a time when you worked on a team project.",
            "Describe a challenge you faced and how you overcame it.",
            "What motivates you in your work?",
        ),
        "Medium": (
            "Tell me about a time when you had to deal with a difficult team member.",
            "Describe a situation where you had to make a decision with incomplete information.",
            "How do you handle conflicting priorities?",
        ),
        "Hard": (
            "Tell me about a time when you had to influence others without authority.",
            "Describe a situation where you failed and what you learned from it.",
            "How have you handled a situation where your team disagreed with your approach?",
        ),
    },
    "HR": {
        "Beginner": (
            "Why are you interested in this position?",
            "What are your greatest strengths?",
            "Where do you see yourself in 5 years?",
        ),
        "Medium": (
            "Why should we hire you over other candidates?",
            "What is your expected salary range?",
            "How do you handle work-life balance?",
        ),
        "Hard": (
            "What would you do if you disagreed with a company policy?",
            "Tell me about a time when you had to make an ethical decision at work.",
            "How would you handle a situation where you were asked to do something you felt was wrong?",
        ),
    },
}


def questions_for(interview_type: str, difficulty: str) -> tuple[str, ...]:
    return QUESTION_BANK.get(interview_type, {}).get(difficulty) or QUESTION_BANK["Technical"]["Beginner"]


def rate_answer(answer: str) -> tuple[str, int]:
    """Score a free-text answer 1-5 from its length, examples and structure."""
    length = len(answer.strip())
    lowered = answer.lower()
    has_examples = "example" in lowered or "for instance" in lowered
    has_structure = "\n" in answer or len(answer.split(".")) > 2

    rating = 3.0
    parts: list[str] = []
    if length > 200:
        parts.append("Your answer was comprehensive and detailed.")
        rating += 1
    elif length > 100:
        parts.append("Your answer was clear and concise.")
    else:
        parts.append("Your answer could benefit from more elaboration.")
        rating -= 1

    if has_examples:
        parts.append("Great job providing specific examples to support your points.")
        rating += 1
    else:
        parts.append("Consider adding concrete examples to strengthen your response.")

    if has_structure:
        parts.append("Your response was well-structured and easy to follow.")
        rating += 0.5

    return " ".join(parts), max(1, min(5, round_half_up(rating)))


def average_rating(questions: list[InterviewQuestion]) -> float | None:
    ratings = [item.rating for item in questions if item.rating is not None]
    if not ratings:
        return None
    return sum(ratings) / len(ratings)


@dataclass(slots=True)
class ChatMessage:
    role: Literal["ai", "user"]
    content: str
    feedback: str | None = None
    rating: int | None = None


class ChatbotInterview:
    """Text interview: one question at a time, rated locally, saved at the end."""

    def __init__(
        self,
        config: InterviewConfig,
        *,
        user_id: str,
        gateway: SessionGateway | None = None,
        settings: Settings | None = None,
        event_bus: EventBus | None = None,
    ):
        self.config = config
        self.user_id = user_id
        self.gateway = gateway
        self.settings = settings or get_settings()
        self.notify = Notifier(event_bus, user_id, source="chatbot")

        bank = questions_for(config.interview_type, config.difficulty)
        count = config.question_count or self.settings.chatbot_question_count
        self.questions: tuple[str, ...] = bank[: max(1, min(count, len(bank)))]
        self.messages: list[ChatMessage] = []
        self.answered: list[InterviewQuestion] = []
        self.current_index = 0
        self.draft = ""
        self.is_processing = False
        self.is_complete = False
        self.blocked: PersistenceErrorKind | None = None
        self.record: InterviewSessionRecord | None = None
        self.started_at = datetime.now(UTC)
        self._timer: asyncio.Task[None] | None = None

    @property
    def current_question(self) -> str:
        return self.questions[self.current_index]

    def greeting(self) -> str:
        return (
            f"Hello! I'm your AI interviewer. Today we'll be conducting a {self.config.difficulty} level "
            f"{self.config.interview_type} interview for the {self.config.role} position. "
            f"I'll ask you {len(self.questions)} questions and provide feedback after each response. "
            f"Let's begin!\n\n{self.questions[0]}"
        )

    async def start(self) -> bool:
        """Check the resume preconditions and post the greeting."""
        if self.gateway is not None:
            resume = await resolve(self.gateway.get_latest_resume(self.user_id))
            if resume is None:
                return self._block(PersistenceErrorKind.RESUME_REQUIRED)
            role = self.config.role.strip()
            if role and (not resume.verified or resume.target_role.strip() != role):
                return self._block(PersistenceErrorKind.VERIFICATION_REQUIRED)

        self.started_at = datetime.now(UTC)
        self.messages = [ChatMessage(role="ai", content=self.greeting())]
        return True

    async def update_draft(self, text: str) -> InterviewQuestion | None:
        self.draft = text
        if text.strip().lower() == SUBMIT_SENTINEL:
            return await self.submit()

        self._cancel_timer()
        if text.strip() and not self.is_processing and not self.is_complete:
            self._timer = asyncio.get_running_loop().create_task(self._inactivity())
        return None

    async def submit(self) -> InterviewQuestion | None:
        if not self.draft.strip() or self.is_processing or self.is_complete or self.blocked is not None:
            return None

        self._cancel_timer()
        self.is_processing = True
        answer = self.draft
        try:
            feedback, rating = rate_answer(answer)
            question = InterviewQuestion(
                question=self.current_question,
                answer=answer,
                feedback=feedback,
                difficulty=self.config.difficulty,
                interview_type=self.config.interview_type,
                role=self.config.role,
                rating=rating,
            )
            self.answered.append(question)
            await self._save_response(answer, feedback, rating)

            self.messages.append(ChatMessage(role="user", content=answer))
            self.messages.append(ChatMessage(role="ai", content=feedback, feedback=feedback, rating=rating))
            self.draft = ""

            if self.current_index < len(self.questions) - 1:
                self.current_index += 1
                self.messages.append(
                    ChatMessage(
                        role="ai",
                        content=f"Great! Let's move on to the next question:\n\n{self.current_question}",
                    )
                )
            else:
                await self._finish()
            return question
        finally:
            self.is_processing = False

    def close(self) -> None:
        self._cancel_timer()

    async def _finish(self) -> None:
        average = average_rating(self.answered) or 0.0
        self.messages.append(
            ChatMessage(
                role="ai",
                content=(
                    f"Excellent work! You've completed the interview. Your average rating was {average:.1f}/5. "
                    "Overall, you demonstrated good understanding and communication skills. "
                    "Keep practicing to further improve your interview performance!"
                ),
            )
        )
        self.is_complete = True
        self.record = InterviewSessionRecord(
            id=f"session-{uuid.uuid4().hex}",
            user=self.user_id,
            role=self.config.role,
            interview_type=self.config.interview_type,
            difficulty=self.config.difficulty,
            questions=list(self.answered),
            start_time=self.started_at,
            end_time=datetime.now(UTC),
            overall_feedback=OVERALL_FEEDBACK,
            number_of_questions=len(self.questions),
            average_rating=round(average, 1),
        )
        logger.info(
            "Chatbot interview complete user=%s role=%r average=%.1f", self.user_id, self.config.role, average
        )
        if self.gateway is None:
            return
        try:
            await resolve(self.gateway.save_interview_session(self.record))
        except PersistenceError as exc:
            logger.warning("Failed to save interview session user=%s: %s", self.user_id, exc)
            self.notify("error", persistence_error_notice(classify_persistence_error(exc), "save session"))
        else:
            self.notify("success", "Interview session saved!")

    async def _save_response(self, answer: str, feedback: str, rating: int) -> None:
        if self.gateway is None:
            return
        response = InterviewResponse(answer=answer, feedback=feedback, rating=rating, created_at=datetime.now(UTC))
        try:
            await resolve(self.gateway.add_interview_response(self.user_id, response))
        except PersistenceError as exc:
            logger.warning("Failed to save interview response user=%s: %s", self.user_id, exc)
            self.notify("error", persistence_error_notice(classify_persistence_error(exc), "save response"))

    async def _inactivity(self) -> None:
        await asyncio.sleep(self.settings.chatbot_inactivity_timeout_sec)
        self._timer = None
        await self.submit()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _block(self, kind: PersistenceErrorKind) -> bool:
        self.blocked = kind
        self.notify("error", persistence_error_notice(kind))
        return False
