from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

from mockprep.config import Settings, get_settings
from mockprep.core.events import EventBus, Notifier
from mockprep.core.gateway import SessionGateway, resolve
from mockprep.core.media import (
    PERMISSION_RECOGNITION_ERRORS,
    TRANSIENT_RECOGNITION_ERRORS,
    DeviceError,
    DeviceErrorKind,
    MediaCapture,
    SpeechRecognizer,
    TranscriptSegment,
    device_error_message,
)
from mockprep.core.scoring import ScoringStrategy, get_scoring_strategy, round_half_up
from mockprep.errors import (
    PersistenceError,
    PersistenceErrorKind,
    classify_persistence_error,
    persistence_error_notice,
)
from mockprep.types import (
    InterviewConfig,
    InterviewSettings,
    LiveMockRecord,
    PresentationScores,
    SpokenAnswerFeedback,
)

logger = logging.getLogger(__name__)

PermissionState = Literal["idle", "requesting", "granted", "denied"]

CONFIDENCE_WORDS = frozenset({"definitely", "certainly", "absolutely", "confident", "sure", "believe", "know"})
ENTHUSIASM_WORDS = frozenset(
    {"excited", "passionate", "love", "amazing", "great", "excellent", "wonderful", "fantastic"}
)


@dataclass(slots=True, frozen=True)
class LiveQuestion:
    question: str
    expected_keywords: tuple[str, ...]
    expected_answer: str


LIVE_QUESTIONS: tuple[LiveQuestion, ...] = (
    LiveQuestion(
        "Tell me about yourself and your background.",
        ("experience", "education", "skills", "background", "work", "career"),
        "A good answer should include your professional background, relevant experience, education, "
        "and key skills that make you suitable for the role.",
    ),
    LiveQuestion(
        "Why are you interested in this position?",
        ("interest", "passion", "company", "role", "opportunity", "growth", "align"),
        "Explain your genuine interest in the role, how it aligns with your career goals, and what "
        "attracts you to the company.",
    ),
    LiveQuestion(
        "What are your greatest strengths?",
        ("strength", "skill", "ability", "expertise", "proficient", "excel"),
        "Highlight 2-3 key strengths with specific examples demonstrating how you've applied them "
        "successfully in your work.",
    ),
    LiveQuestion(
        "Describe a challenging project you worked on.",
        ("challenge", "project", "problem", "solution", "result", "overcome", "team"),
        "Use the STAR method: describe the Situation, Task, Action you took, and the positive Result achieved.",
    ),
    LiveQuestion(
        "Where do you see yourself in 5 years?",
        ("future", "goal", "growth", "develop", "career", "aspiration", "plan"),
        "Discuss your career aspirations, how this role fits into your long-term goals, and your "
        "commitment to professional growth.",
    ),
    LiveQuestion(
        "How do you handle stress and pressure?",
        ("stress", "pressure", "manage", "cope", "prioritize", "deadline", "balance"),
        "Describe specific strategies you use to manage stress, prioritize tasks, and maintain "
        "productivity under pressure.",
    ),
    LiveQuestion(
        "Tell me about a time you failed and what you learned.",
        ("failure", "mistake", "learn", "improve", "growth", "lesson", "overcome"),
        "Share a genuine failure, focus on what you learned, and how you applied those lessons to "
        "improve and succeed later.",
    ),
    LiveQuestion(
        "Why should we hire you?",
        ("value", "contribution", "skills", "experience", "fit", "unique", "benefit"),
        "Highlight your unique value proposition, relevant skills, and how you can contribute to the "
        "company's success.",
    ),
    LiveQuestion(
        "Describe your ideal work environment.",
        ("environment", "culture", "team", "collaboration", "communication", "values", "work"),
        "Describe an environment that aligns with the company culture while highlighting your "
        "adaptability and teamwork skills.",
    ),
    LiveQuestion(
        "What questions do you have for us?",
        ("question", "curious", "learn", "team", "company", "role", "growth", "culture"),
        "Ask thoughtful questions about the role, team dynamics, company culture, growth opportunities, "
        "or current challenges.",
    ),
)


@dataclass(slots=True, frozen=True)
class VoiceAnalysis:
    confidence: int = 0
    clarity: int = 0
    enthusiasm: int = 0


def analyze_voice_tone(text: str) -> VoiceAnalysis:
    words = text.lower().split()
    confidence_hits = sum(1 for word in words if word in CONFIDENCE_WORDS)
    enthusiasm_hits = sum(1 for word in words if word in ENTHUSIASM_WORDS)
    return VoiceAnalysis(
        confidence=min(100, 70 + confidence_hits * 10),
        clarity=80 if len(text) > 50 else 60,
        enthusiasm=min(100, 65 + enthusiasm_hits * 10),
    )


def evaluate_spoken_answer(transcript: str, question: LiveQuestion, *, min_words: int = 20) -> SpokenAnswerFeedback:
    """Blend keyword coverage (70%) with length adequacy (30%) into a 0-100 rating."""
    lowered = transcript.lower()
    word_count = len(lowered.split())

    matched = [keyword for keyword in question.expected_keywords if keyword.lower() in lowered]
    missing = [keyword for keyword in question.expected_keywords if keyword.lower() not in lowered]
    keyword_score = len(matched) / len(question.expected_keywords) * 100 if question.expected_keywords else 100
    length_score = word_count / min_words * 100 if word_count < min_words else 100
    rating = round_half_up(keyword_score * 0.7 + length_score * 0.3)

    if rating >= 80:
        improvements = (
            "Excellent answer! You covered the key points effectively. To further improve, consider adding "
            "more specific examples or quantifiable achievements."
        )
    elif rating >= 60:
        improvements = (
            f"Good start! To strengthen your answer, try to incorporate these key concepts: "
            f"{', '.join(missing[:3])}. "
        )
        if word_count < 30:
            improvements += "Also, provide more detailed explanations and specific examples to demonstrate your points."
    elif rating >= 40:
        improvements = f"Your answer needs more development. Focus on addressing: {', '.join(missing[:4])}. "
        improvements += "Structure your response using the STAR method (Situation, Task, Action, Result) for better clarity."
    else:
        improvements = (
            f"Your answer is incomplete. Make sure to address the core question by discussing: "
            f"{', '.join(missing[:5])}. "
        )
        improvements += "Take time to think through your response and provide concrete examples from your experience."

    if word_count < 15:
        improvements += " Your answer is too brief. Aim for at least 30-50 words to provide sufficient detail."
    elif word_count > 150:
        improvements += " Consider being more concise. Focus on the most relevant points to keep the interviewer engaged."

    return SpokenAnswerFeedback(
        transcript=transcript,
        correctness_rating=max(0, min(100, rating)),
        suggested_improvements=improvements,
        recommended_answer=question.expected_answer,
    )


def average_correctness(feedbacks: list[SpokenAnswerFeedback]) -> float:
    if not feedbacks:
        return 0.0
    return sum(item.correctness_rating for item in feedbacks) / len(feedbacks)


def aggregated_improvements(feedbacks: list[SpokenAnswerFeedback]) -> str:
    average = average_correctness(feedbacks)
    text = f"Overall Answer Quality: {round_half_up(average)}/100\n\n"
    if average >= 80:
        text += (
            "Your answers were consistently strong across all questions. Continue practicing to maintain "
            "this level of performance."
        )
    elif average >= 60:
        text += "You provided good answers overall, but there's room for improvement. Focus on:\n"
        text += "- Including more specific examples and quantifiable results\n"
        text += "- Addressing all key aspects of each question\n"
        text += "- Structuring responses using frameworks like STAR method"
    else:
        text += "Your answers need significant improvement. Key areas to work on:\n"
        text += "- Thoroughly understand the question before answering\n"
        text += "- Include relevant keywords and concepts in your responses\n"
        text += "- Provide concrete examples from your experience\n"
        text += "- Practice common interview questions to build confidence"
    return text


def aggregate_spoken_feedback(feedbacks: list[SpokenAnswerFeedback]) -> SpokenAnswerFeedback | None:
    if not feedbacks:
        return None
    return SpokenAnswerFeedback(
        transcript="\n\n".join(item.transcript for item in feedbacks),
        correctness_rating=round_half_up(average_correctness(feedbacks)),
        suggested_improvements=aggregated_improvements(feedbacks),
        recommended_answer="Review each question's recommended answer for best practices.",
    )


def appearance_feedback(score: int) -> str:
    if score >= 85:
        return (
            "Excellent professional appearance! Your attire is appropriate and well-presented. You project a "
            "polished, professional image that would make a strong impression in an interview setting."
        )
    if score >= 70:
        return (
            "Good professional appearance. Your attire is generally appropriate. Consider: ensuring clothes "
            "are well-fitted, choosing solid colors or subtle patterns, and paying attention to grooming details."
        )
    return (
        "Your appearance could be improved for a professional interview. Recommendations: wear business "
        "professional attire, ensure clothes are clean and pressed, maintain good grooming, and choose "
        "conservative colors."
    )


def comprehensive_feedback(scores: PresentationScores, answer_correctness: float, question_count: int) -> str:
    overall = round_half_up(
        (
            scores.body_language
            + scores.eye_contact
            + scores.confidence
            + scores.clarity
            + scores.tone
            + scores.styling
        )
        / 6
    )
    if scores.tone >= 80:
        tone_label = "excellent"
    elif scores.tone >= 70:
        tone_label = "good"
    else:
        tone_label = "moderate"

    if answer_correctness >= 80:
        answers = (
            "Your answers were comprehensive and well-structured. You effectively addressed the key points "
            "in each question."
        )
    elif answer_correctness >= 60:
        answers = (
            "Your answers were generally good but could be improved by including more specific examples "
            "and addressing all key concepts."
        )
    else:
        answers = (
            "Your answers need more development. Focus on understanding the question fully and providing "
            "detailed, relevant responses."
        )

    if scores.styling >= 85:
        presentation = "Outstanding"
    elif scores.styling >= 70:
        presentation = "Good"
    else:
        presentation = "Needs improvement"

    lines = [
        f"Overall Performance: {overall}/100",
        f"Answer Quality: {round_half_up(answer_correctness)}/100",
        f"Questions Completed: {question_count}",
        "",
        f"Voice Analysis: Your vocal tone showed {tone_label} confidence and clarity. "
        "Continue to speak with enthusiasm and maintain a steady pace.",
        "",
        f"Answer Evaluation: {answers}",
        "",
        f"Professional Presentation: {presentation} professional appearance. "
        "Your attire and grooming contribute significantly to first impressions.",
        "",
        f"Body Language: {'Strong' if scores.body_language >= 80 else 'Moderate'} body language with "
        f"{'excellent' if scores.eye_contact >= 80 else 'good'} eye contact. "
        "Keep practicing to maintain natural, confident posture throughout the interview.",
    ]
    return "\n".join(lines)


class LiveMockInterview:
    def __init__(
        self,
        config: InterviewConfig,
        *,
        user_id: str,
        media: MediaCapture,
        recognizer: SpeechRecognizer | None = None,
        gateway: SessionGateway | None = None,
        scoring: ScoringStrategy | None = None,
        settings: Settings | None = None,
        event_bus: EventBus | None = None,
        question_count: int | None = None,
        video_ref: str = "",
    ):
        self.config = config
        self.user_id = user_id
        self.media = media
        self.recognizer = recognizer
        self.gateway = gateway
        self.settings = settings or get_settings()
        self.scoring = scoring or get_scoring_strategy(self.settings)
        self.notify = Notifier(event_bus, user_id, source="live_mock")
        self.video_ref = video_ref

        count = question_count or self.settings.live_mock_question_count
        self.questions: tuple[LiveQuestion, ...] = LIVE_QUESTIONS[: max(1, min(count, len(LIVE_QUESTIONS)))]
        self.current_index = 0
        self.permission_state: PermissionState = "idle"
        self.device_error: DeviceErrorKind | None = None
        self.is_recording = False
        self.is_complete = False
        self.answer_transcript = ""
        self.voice = VoiceAnalysis()
        self.styling_score = 0
        self.feedbacks: list[SpokenAnswerFeedback] = []
        self.last_feedback: SpokenAnswerFeedback | None = None
        self.record: LiveMockRecord | None = None
        self._mic_denial_reported = False

    @property
    def current_question(self) -> LiveQuestion:
        return self.questions[self.current_index]

    async def begin(self) -> bool:
        """Check for a resume, save the chosen settings, then acquire camera and microphone."""
        if self.gateway is not None:
            if await resolve(self.gateway.get_latest_resume(self.user_id)) is None:
                logger.warning("Live mock blocked for user=%s: no resume on file", self.user_id)
                self.notify("error", persistence_error_notice(PersistenceErrorKind.RESUME_REQUIRED))
                return False
            try:
                await resolve(
                    self.gateway.save_interview_settings(
                        self.user_id,
                        InterviewSettings(
                            target_role=self.config.role,
                            interview_type=self.config.interview_type,
                            difficulty=self.config.difficulty,
                            question_count=len(self.questions),
                        ),
                    )
                )
            except PersistenceError as exc:
                logger.warning("Failed to save interview settings user=%s: %s", self.user_id, exc)
                kind = classify_persistence_error(exc)
                self.notify("error", persistence_error_notice(kind, "save interview settings"))
                return False
        self.notify("success", f"Starting interview with {len(self.questions)} questions")
        return await self.acquire_devices()

    async def acquire_devices(self) -> bool:
        return await self._acquire(self.media.start)

    async def retry_devices(self) -> bool:
        granted = await self._acquire(self.media.retry)
        if granted:
            self.notify("success", "Camera access granted!")
        return granted

    async def start_answer(self) -> bool:
        if self.is_complete:
            return False
        if self.permission_state != "granted" and not await self.acquire_devices():
            return False

        self.is_recording = True
        self.answer_transcript = ""
        self.last_feedback = None
        if self.recognizer is not None:
            try:
                self.recognizer.start()
            except Exception:
                logger.exception("Failed to start speech recognition user=%s", self.user_id)
                self.notify("error", "Failed to start speech recognition. Please check microphone permissions.")

        frame = await self.media.capture_frame()
        if frame:
            self.styling_score = self.scoring.sample_score("styling")
        return True

    def handle_segment(self, segment: TranscriptSegment) -> None:
        if not segment.is_final or not self.is_recording:
            return
        self.answer_transcript += segment.text + " "
        self.voice = analyze_voice_tone(segment.text)

    def handle_recognition_error(self, code: str) -> None:
        if code in TRANSIENT_RECOGNITION_ERRORS:
            return
        if code in PERMISSION_RECOGNITION_ERRORS:
            if not self._mic_denial_reported:
                self._mic_denial_reported = True
                self.notify("error", "Microphone access denied. Please allow microphone access.")
            return
        logger.warning("Speech recognition error user=%s code=%s", self.user_id, code)

    def handle_recognition_end(self) -> None:
        if self.is_recording and self.recognizer is not None:
            self.recognizer.start()

    def stop_answer(self) -> SpokenAnswerFeedback | None:
        if not self.is_recording:
            return None
        self.is_recording = False
        if self.recognizer is not None:
            self.recognizer.stop()

        if not self.answer_transcript.strip():
            return None

        feedback = evaluate_spoken_answer(
            self.answer_transcript.strip(),
            self.current_question,
            min_words=self.settings.live_mock_min_words,
        )
        self.last_feedback = feedback
        self.feedbacks.append(feedback)

        if feedback.correctness_rating >= 80:
            self.notify("success", "Excellent answer! Well done.")
        elif feedback.correctness_rating >= 60:
            self.notify("info", "Good answer. Check the feedback for improvements.")
        else:
            self.notify("warning", "Your answer needs improvement. Review the suggestions.")
        return feedback

    async def next_question(self) -> bool:
        """Advance; returns False once the last question has been completed."""
        if self.is_recording:
            self.stop_answer()
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
            self.answer_transcript = ""
            self.last_feedback = None
            return True
        await self.complete()
        return False

    def presentation_scores(self) -> PresentationScores:
        sample = self.scoring.sample_score
        tone = (self.voice.confidence + self.voice.enthusiasm) // 2
        return PresentationScores(
            body_language=sample("body_language"),
            eye_contact=sample("eye_contact"),
            facial_expression=sample("facial_expression"),
            confidence=self.voice.confidence or sample("confidence"),
            attentiveness=sample("attentiveness"),
            clarity=self.voice.clarity or sample("clarity"),
            tone=tone or sample("tone"),
            styling=self.styling_score or sample("styling"),
        )

    async def complete(self) -> LiveMockRecord:
        if self.record is not None:
            return self.record
        if self.is_recording:
            self.stop_answer()
        await self.media.stop()

        scores = self.presentation_scores()
        correctness = average_correctness(self.feedbacks)
        now = datetime.now(UTC)
        self.record = LiveMockRecord(
            id=f"live-{uuid.uuid4().hex}",
            user=self.user_id,
            session_id=f"session-{uuid.uuid4().hex}",
            video_file=self.video_ref,
            body_language_score=scores.body_language,
            eye_contact_score=scores.eye_contact,
            facial_expression_score=scores.facial_expression,
            confidence_score=scores.confidence,
            attentiveness_score=scores.attentiveness,
            clarity_score=scores.clarity,
            tone_score=scores.tone,
            styling_score=scores.styling,
            appearance_feedback=appearance_feedback(scores.styling),
            feedback=comprehensive_feedback(scores, correctness, len(self.questions)),
            spoken_answer_feedback=aggregate_spoken_feedback(self.feedbacks),
            recorded_at=now,
            number_of_questions=len(self.questions),
        )
        self.is_complete = True

        if self.gateway is not None:
            try:
                await resolve(self.gateway.save_live_mock(self.record))
            except PersistenceError as exc:
                logger.warning("Failed to save live mock user=%s: %s", self.user_id, exc)
                kind = classify_persistence_error(exc)
                self.notify("error", persistence_error_notice(kind, "save interview data"))
            else:
                self.notify("success", "Live mock interview saved with analysis and answer evaluation!")
        return self.record

    async def _acquire(self, acquire) -> bool:
        if not self.media.is_supported:
            return self._deny(DeviceErrorKind.NOT_SUPPORTED)

        self.permission_state = "requesting"
        try:
            started = await acquire()
        except DeviceError as exc:
            logger.warning("Media acquisition failed user=%s kind=%s", self.user_id, exc.kind.value)
            return self._deny(exc.kind)

        if not started:
            return self._deny(DeviceErrorKind.UNKNOWN)

        self.permission_state = "granted"
        self.device_error = None
        return True

    def _deny(self, kind: DeviceErrorKind) -> bool:
        self.permission_state = "denied"
        self.device_error = kind
        self.notify("error", device_error_message(kind), device_error=kind.value)
        return False
