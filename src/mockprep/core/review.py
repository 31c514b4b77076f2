from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import UTC, datetime

from mockprep.core.scoring import ScoringStrategy, round_half_up
from mockprep.types import CandidateReview, InterviewSessionRecord, LiveMockRecord, ResumeRecord

CHATBOT_WEIGHT = 0.35
LIVE_MOCK_WEIGHT = 0.45
RESUME_WEIGHT = 0.20

NO_STRENGTHS = "Complete more practice sessions to identify strengths"
NO_WEAKNESSES = "Complete more practice sessions to identify areas for improvement"


def rating_label(rating: int) -> str:
    if rating >= 90:
        return "Excellent"
    if rating >= 80:
        return "Very Good"
    if rating >= 70:
        return "Good"
    if rating >= 60:
        return "Fair"
    return "Needs Improvement"


def chatbot_scores(sessions: Sequence[InterviewSessionRecord], scoring: ScoringStrategy) -> list[int]:
    scores: list[int] = []
    for session in sessions:
        for question in session.questions:
            if question.rating is None:
                scores.append(scoring.sample_score("chatbot_answer"))
            else:
                scores.append(question.rating * 20)
    return scores


def live_mock_score(record: LiveMockRecord) -> float:
    parts = [
        record.body_language_score,
        record.eye_contact_score,
        record.confidence_score,
        record.clarity_score,
        record.tone_score,
        record.styling_score,
    ]
    present = [value for value in parts if value > 0]
    if not present:
        return 0.0
    return sum(present) / len(present)


def _mean(values: Sequence[float]) -> int:
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def generate_candidate_review(
    sessions: Sequence[InterviewSessionRecord],
    live_mocks: Sequence[LiveMockRecord],
    resumes: Sequence[ResumeRecord],
    scoring: ScoringStrategy,
    *,
    user_id: str = "",
) -> CandidateReview:
    """Weighted readiness review across chatbot, live-mock and resume history.

    ``resumes`` is expected newest first, the way the repository lists them.
    """
    chat_scores = chatbot_scores(sessions, scoring)
    chat_avg = _mean(chat_scores)
    live_scores = [live_mock_score(record) for record in live_mocks]
    live_avg = _mean(live_scores)
    resume_score = resumes[0].quality_score if resumes and resumes[0].quality_score else 0

    overall = round_half_up(
        chat_avg * CHATBOT_WEIGHT + live_avg * LIVE_MOCK_WEIGHT + resume_score * RESUME_WEIGHT
    )

    strengths: list[str] = []
    if chat_avg >= 80:
        strengths.append("Strong verbal communication and articulation")
    if live_avg >= 80:
        strengths.append("Excellent non-verbal communication and presentation")
    if resume_score >= 85:
        strengths.append("Well-crafted resume with clear achievements")
    if any(record.tone_score >= 80 for record in live_mocks):
        strengths.append("Confident and enthusiastic vocal delivery")
    if any(record.styling_score >= 80 for record in live_mocks):
        strengths.append("Professional appearance and presentation")

    weaknesses: list[str] = []
    if chat_avg < 70:
        weaknesses.append("Need to improve response clarity and structure")
    if live_avg < 70:
        weaknesses.append("Work on body language and eye contact")
    if resume_score < 70:
        weaknesses.append("Resume needs better formatting and quantifiable achievements")
    if any(record.tone_score < 70 for record in live_mocks):
        weaknesses.append("Vocal tone could be more confident and engaging")
    if any(record.styling_score < 70 for record in live_mocks):
        weaknesses.append("Professional appearance needs improvement")

    recommendations: list[str] = []
    if chat_avg < 80:
        recommendations.append(
            "Practice answering common interview questions with structured responses (STAR method)"
        )
    if live_avg < 80:
        recommendations.append("Record yourself and practice maintaining eye contact and confident posture")
    if resume_score < 85:
        recommendations.append("Revise resume to include more quantifiable achievements and action verbs")
    recommendations.append("Continue practicing with both chatbot and live mock interviews regularly")
    recommendations.append("Review feedback from each session and focus on areas needing improvement")

    return CandidateReview(
        id=f"review-{uuid.uuid4().hex}",
        user=user_id,
        chatbot_scores=chat_scores,
        live_mock_scores=[round_half_up(score) for score in live_scores],
        resume_score=resume_score or None,
        overall_rating=overall,
        strengths=strengths or [NO_STRENGTHS],
        weaknesses=weaknesses or [NO_WEAKNESSES],
        recommendations=recommendations,
        created_at=datetime.now(UTC),
    )
