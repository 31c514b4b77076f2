from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from mockprep.db.models import (
    InterviewAnswer,
    InterviewPreference,
    InterviewSession,
    LiveMockSession,
    Profile,
    QuizRecord,
    Resume,
    ReviewRecord,
)
from mockprep.errors import NotFoundError, ResumeRequiredError, RoleNotVerifiedError
from mockprep.types import (
    CandidateReview,
    ImprovementSuggestion,
    InterviewResponse,
    InterviewSessionRecord,
    InterviewSettings,
    LiveMockRecord,
    QuizResult,
    ResumeRecord,
    SpokenAnswerFeedback,
    UserProfile,
)

logger = logging.getLogger(__name__)


def to_user_profile(row: Profile) -> UserProfile:
    return UserProfile(
        user_id=row.user_id,
        full_name=row.full_name,
        email=row.email,
        current_role=row.current_role,
        experience_level=row.experience_level,
        preferred_interview_type=row.preferred_interview_type,
        preferred_difficulty=row.preferred_difficulty,
        created_at=row.created_at,
    )


def to_resume_record(row: Resume) -> ResumeRecord:
    return ResumeRecord(
        id=row.id,
        owner=row.owner,
        blob_ref=row.blob_ref,
        file_name=row.file_name,
        parsed_content=row.parsed_content,
        quality_score=row.quality_score,
        improvement_suggestions=row.improvement_suggestions,
        target_role=row.target_role,
        verified=row.verified,
        improvement_details=[ImprovementSuggestion.model_validate(item) for item in row.improvement_details_json],
        suggested_role=row.suggested_role,
        uploaded_at=row.uploaded_at,
    )


def to_session_record(row: InterviewSession) -> InterviewSessionRecord:
    return InterviewSessionRecord(
        id=row.id,
        user=row.user_id,
        role=row.role,
        interview_type=row.interview_type,
        difficulty=row.difficulty,
        questions=row.questions_json,
        start_time=row.start_time,
        end_time=row.end_time,
        overall_feedback=row.overall_feedback,
        number_of_questions=row.number_of_questions,
        average_rating=row.average_rating,
    )


def to_interview_response(row: InterviewAnswer) -> InterviewResponse:
    return InterviewResponse(answer=row.answer, feedback=row.feedback, rating=row.rating, created_at=row.answered_at)


def to_live_mock_record(row: LiveMockSession) -> LiveMockRecord:
    spoken = SpokenAnswerFeedback.model_validate(row.spoken_answer_json) if row.spoken_answer_json else None
    return LiveMockRecord(
        id=row.id,
        user=row.user_id,
        session_id=row.session_id,
        video_file=row.video_file,
        body_language_score=row.body_language_score,
        eye_contact_score=row.eye_contact_score,
        facial_expression_score=row.facial_expression_score,
        confidence_score=row.confidence_score,
        attentiveness_score=row.attentiveness_score,
        clarity_score=row.clarity_score,
        tone_score=row.tone_score,
        styling_score=row.styling_score,
        appearance_feedback=row.appearance_feedback,
        feedback=row.feedback,
        spoken_answer_feedback=spoken,
        recorded_at=row.recorded_at,
        number_of_questions=row.number_of_questions,
    )


def to_quiz_result(row: QuizRecord) -> QuizResult:
    return QuizResult(
        id=row.id,
        user=row.user_id,
        role=row.role,
        score=row.score,
        total_questions=row.total_questions,
        completed_at=row.completed_at,
        timed_out=row.timed_out,
    )


def to_candidate_review(row: ReviewRecord) -> CandidateReview:
    return CandidateReview(
        id=row.id,
        user=row.user_id,
        chatbot_scores=row.chatbot_scores_json,
        live_mock_scores=row.live_mock_scores_json,
        resume_score=row.resume_score,
        overall_rating=row.overall_rating,
        strengths=row.strengths_json,
        weaknesses=row.weaknesses_json,
        recommendations=row.recommendations_json,
        created_at=row.reviewed_at,
    )


def to_interview_settings(row: InterviewPreference) -> InterviewSettings:
    return InterviewSettings(
        target_role=row.target_role,
        interview_type=row.interview_type,
        difficulty=row.difficulty,
        question_count=row.question_count,
    )


class Repository:
    """Persistence gateway; every operation is scoped to one user id."""

    def __init__(self, session: Session):
        self.session = session

    def save_profile(self, profile: UserProfile) -> Profile:
        existing = self.session.scalar(select(Profile).where(Profile.user_id == profile.user_id))
        values = profile.model_dump(exclude={"user_id", "created_at"})
        if existing:
            for key, value in values.items():
                setattr(existing, key, value)
            obj = existing
        else:
            obj = Profile(user_id=profile.user_id, **values)
            self.session.add(obj)

        self.session.commit()
        self.session.refresh(obj)
        return obj

    def get_profile(self, user_id: str) -> Profile | None:
        return self.session.scalar(select(Profile).where(Profile.user_id == user_id))

    def add_resume(
        self,
        user_id: str,
        *,
        file_name: str,
        blob_ref: str = "",
        parsed_content: str = "",
        quality_score: int | None = None,
        improvement_suggestions: str = "",
        target_role: str = "",
        verified: bool = False,
        improvement_details: list[ImprovementSuggestion] | None = None,
        suggested_role: str = "",
        resume_id: str | None = None,
    ) -> Resume:
        resume = Resume(
            id=resume_id or f"resume-{uuid.uuid4().hex}",
            owner=user_id,
            blob_ref=blob_ref,
            file_name=file_name,
            parsed_content=parsed_content,
            quality_score=quality_score,
            improvement_suggestions=improvement_suggestions,
            target_role=target_role,
            verified=verified,
            improvement_details_json=[item.model_dump() for item in improvement_details or []],
            suggested_role=suggested_role,
            uploaded_at=datetime.now(UTC),
        )
        self.session.add(resume)
        self.session.commit()
        self.session.refresh(resume)
        return resume

    def get_resume(self, user_id: str, resume_id: str) -> Resume | None:
        return self.session.scalar(select(Resume).where(Resume.id == resume_id, Resume.owner == user_id))

    def list_resumes(self, user_id: str) -> list[Resume]:
        statement = select(Resume).where(Resume.owner == user_id).order_by(Resume.uploaded_at.desc())
        return list(self.session.scalars(statement).all())

    def get_latest_resume(self, user_id: str) -> ResumeRecord | None:
        resumes = self.list_resumes(user_id)
        return to_resume_record(resumes[0]) if resumes else None

    def has_uploaded_resume(self, user_id: str) -> bool:
        return self.session.scalar(select(Resume.id).where(Resume.owner == user_id).limit(1)) is not None

    def verify_resume_role(
        self,
        user_id: str,
        resume_id: str,
        target_role: str,
        *,
        verified: bool,
        suggestions: list[ImprovementSuggestion] | None = None,
        detected_role: str = "",
    ) -> Resume:
        resume = self.get_resume(user_id, resume_id)
        if not resume:
            raise NotFoundError(f"resume {resume_id} not found")

        resume.target_role = target_role.strip()
        resume.verified = verified
        resume.improvement_details_json = [item.model_dump() for item in suggestions or []]
        if detected_role:
            resume.suggested_role = detected_role

        self.session.commit()
        self.session.refresh(resume)
        logger.info("Resume %s verification for role=%r: %s", resume_id, target_role, verified)
        return resume

    def save_interview_session(self, record: InterviewSessionRecord) -> InterviewSession:
        self._require_resume(record.user, role=record.role)
        session_row = InterviewSession(
            id=record.id,
            user_id=record.user,
            role=record.role,
            interview_type=record.interview_type,
            difficulty=record.difficulty,
            questions_json=[item.model_dump() for item in record.questions],
            start_time=record.start_time,
            end_time=record.end_time,
            overall_feedback=record.overall_feedback,
            number_of_questions=record.number_of_questions,
            average_rating=record.average_rating,
        )
        self.session.add(session_row)
        self.session.commit()
        self.session.refresh(session_row)
        return session_row

    def list_interview_sessions(self, user_id: str) -> list[InterviewSession]:
        statement = (
            select(InterviewSession)
            .where(InterviewSession.user_id == user_id)
            .order_by(InterviewSession.end_time.desc())
        )
        return list(self.session.scalars(statement).all())

    def add_interview_response(self, user_id: str, response: InterviewResponse) -> InterviewAnswer:
        self._require_resume(user_id)
        item = InterviewAnswer(
            user_id=user_id,
            answer=response.answer,
            feedback=response.feedback,
            rating=response.rating,
            answered_at=response.created_at,
        )
        self.session.add(item)
        self.session.commit()
        self.session.refresh(item)
        return item

    def list_interview_responses(self, user_id: str) -> list[InterviewAnswer]:
        statement = select(InterviewAnswer).where(InterviewAnswer.user_id == user_id).order_by(InterviewAnswer.id.asc())
        return list(self.session.scalars(statement).all())

    def save_live_mock(self, record: LiveMockRecord) -> LiveMockSession:
        self._require_resume(record.user)
        item = LiveMockSession(
            id=record.id,
            user_id=record.user,
            session_id=record.session_id,
            video_file=record.video_file,
            body_language_score=record.body_language_score,
            eye_contact_score=record.eye_contact_score,
            facial_expression_score=record.facial_expression_score,
            confidence_score=record.confidence_score,
            attentiveness_score=record.attentiveness_score,
            clarity_score=record.clarity_score,
            tone_score=record.tone_score,
            styling_score=record.styling_score,
            appearance_feedback=record.appearance_feedback,
            feedback=record.feedback,
            spoken_answer_json=(
                record.spoken_answer_feedback.model_dump() if record.spoken_answer_feedback else None
            ),
            recorded_at=record.recorded_at,
            number_of_questions=record.number_of_questions,
        )
        self.session.add(item)
        self.session.commit()
        self.session.refresh(item)
        return item

    def list_live_mocks(self, user_id: str) -> list[LiveMockSession]:
        statement = (
            select(LiveMockSession)
            .where(LiveMockSession.user_id == user_id)
            .order_by(LiveMockSession.recorded_at.desc())
        )
        return list(self.session.scalars(statement).all())

    def save_quiz_result(self, result: QuizResult) -> QuizRecord:
        item = QuizRecord(
            id=result.id,
            user_id=result.user,
            role=result.role,
            score=result.score,
            total_questions=result.total_questions,
            timed_out=result.timed_out,
            completed_at=result.completed_at,
        )
        self.session.add(item)
        self.session.commit()
        self.session.refresh(item)
        return item

    def list_quiz_results(self, user_id: str) -> list[QuizRecord]:
        statement = select(QuizRecord).where(QuizRecord.user_id == user_id).order_by(QuizRecord.completed_at.desc())
        return list(self.session.scalars(statement).all())

    def save_review(self, review: CandidateReview) -> ReviewRecord:
        item = ReviewRecord(
            id=review.id,
            user_id=review.user,
            chatbot_scores_json=list(review.chatbot_scores),
            live_mock_scores_json=list(review.live_mock_scores),
            resume_score=review.resume_score,
            overall_rating=review.overall_rating,
            strengths_json=list(review.strengths),
            weaknesses_json=list(review.weaknesses),
            recommendations_json=list(review.recommendations),
            reviewed_at=review.created_at,
        )
        self.session.add(item)
        self.session.commit()
        self.session.refresh(item)
        return item

    def list_reviews(self, user_id: str) -> list[ReviewRecord]:
        statement = (
            select(ReviewRecord).where(ReviewRecord.user_id == user_id).order_by(ReviewRecord.reviewed_at.desc())
        )
        return list(self.session.scalars(statement).all())

    def save_interview_settings(self, user_id: str, settings: InterviewSettings) -> InterviewPreference:
        existing = self.get_interview_settings(user_id)
        values = settings.model_dump()
        if existing:
            for key, value in values.items():
                setattr(existing, key, value)
            obj = existing
        else:
            obj = InterviewPreference(user_id=user_id, **values)
            self.session.add(obj)

        self.session.commit()
        self.session.refresh(obj)
        return obj

    def get_interview_settings(self, user_id: str) -> InterviewPreference | None:
        return self.session.scalar(select(InterviewPreference).where(InterviewPreference.user_id == user_id))

    def _require_resume(self, user_id: str, role: str = "") -> None:
        role = role.strip()
        resumes = self.list_resumes(user_id)
        if not resumes:
            logger.warning("Rejected save for user=%s: no resume on file", user_id)
            raise ResumeRequiredError()
        if not role:
            return
        if not any(item.verified and item.target_role.strip() == role for item in resumes):
            logger.warning("Rejected save for user=%s: role %r not verified", user_id, role)
            raise RoleNotVerifiedError(role)
