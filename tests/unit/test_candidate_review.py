from datetime import UTC, datetime

from mockprep.core.review import NO_STRENGTHS, generate_candidate_review, rating_label
from mockprep.core.scoring import FixedScoring
from mockprep.types import InterviewQuestion, InterviewSessionRecord, LiveMockRecord, ResumeRecord

NOW = datetime(2026, 1, 5, tzinfo=UTC)


def _session(*ratings: int | None) -> InterviewSessionRecord:
    return InterviewSessionRecord(
        id="session-1",
        user="user-1",
        role="Software Engineer",
        interview_type="Technical",
        difficulty="Medium",
        questions=[
            InterviewQuestion(
                question="q",
                answer="a",
                feedback="f",
                difficulty="Medium",
                interview_type="Technical",
                role="Software Engineer",
                rating=rating,
            )
            for rating in ratings
        ],
        start_time=NOW,
        end_time=NOW,
    )


def _live(score: int, tone: int = 0, styling: int = 0) -> LiveMockRecord:
    return LiveMockRecord(
        id="live-1",
        user="user-1",
        session_id="s",
        body_language_score=score,
        eye_contact_score=score,
        facial_expression_score=score,
        confidence_score=score,
        attentiveness_score=score,
        clarity_score=score,
        tone_score=tone,
        styling_score=styling,
        recorded_at=NOW,
    )


def test_weighted_overall_rating() -> None:
    review = generate_candidate_review(
        [_session(4, 5, None)],
        [_live(90, tone=90, styling=90)],
        [ResumeRecord(id="r2", owner="user-1", quality_score=95), ResumeRecord(id="r1", owner="user-1", quality_score=40)],
        FixedScoring(70),
        user_id="user-1",
    )

    # chat: 80, 100, 70 -> 83; live: 90; resume: newest first -> 95
    assert review.chatbot_scores == [80, 100, 70]
    assert review.live_mock_scores == [90]
    assert review.resume_score == 95
    assert review.overall_rating == round(83 * 0.35 + 90 * 0.45 + 95 * 0.20)
    assert "Strong verbal communication and articulation" in review.strengths
    assert "Confident and enthusiastic vocal delivery" in review.strengths
    assert review.recommendations == [
        "Continue practicing with both chatbot and live mock interviews regularly",
        "Review feedback from each session and focus on areas needing improvement",
    ]


def test_zero_sub_scores_are_ignored_for_live_mock_average() -> None:
    review = generate_candidate_review([], [_live(60)], [], FixedScoring(70))
    assert review.live_mock_scores == [60]
    assert review.resume_score is None


def test_empty_history_uses_placeholders() -> None:
    review = generate_candidate_review([], [], [], FixedScoring(70))
    assert review.overall_rating == 0
    assert review.strengths == [NO_STRENGTHS]
    assert "Work on body language and eye contact" in review.weaknesses
    assert len(review.recommendations) == 5


def test_rating_labels() -> None:
    assert [rating_label(value) for value in (95, 85, 75, 65, 10)] == [
        "Excellent",
        "Very Good",
        "Good",
        "Fair",
        "Needs Improvement",
    ]
