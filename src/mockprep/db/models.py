from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mockprep.db.base import Base, TimestampMixin, utcnow


class Profile(TimestampMixin, Base):
    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    current_role: Mapped[str] = mapped_column(String(255), default="Not specified", nullable=False)
    experience_level: Mapped[str] = mapped_column(String(40), default="Beginner", nullable=False)
    preferred_interview_type: Mapped[str] = mapped_column(String(40), default="Technical", nullable=False)
    preferred_difficulty: Mapped[str] = mapped_column(String(40), default="Beginner", nullable=False)


class Resume(TimestampMixin, Base):
    __tablename__ = "resumes"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner: Mapped[str] = mapped_column(String(120), index=True, nullable=False)
    blob_ref: Mapped[str] = mapped_column(String(800), default="", nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    parsed_content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    quality_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    improvement_suggestions: Mapped[str] = mapped_column(Text, default="", nullable=False)
    target_role: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    improvement_details_json: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    suggested_role: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class InterviewSession(TimestampMixin, Base):
    __tablename__ = "interview_sessions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(120), index=True, nullable=False)
    role: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    interview_type: Mapped[str] = mapped_column(String(40), nullable=False)
    difficulty: Mapped[str] = mapped_column(String(40), nullable=False)
    questions_json: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    overall_feedback: Mapped[str] = mapped_column(Text, default="", nullable=False)
    number_of_questions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    average_rating: Mapped[float | None] = mapped_column(Float, nullable=True)


class InterviewAnswer(TimestampMixin, Base):
    __tablename__ = "interview_responses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(120), index=True, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    feedback: Mapped[str] = mapped_column(Text, default="", nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    answered_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class LiveMockSession(TimestampMixin, Base):
    __tablename__ = "live_mock_sessions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(120), index=True, nullable=False)
    session_id: Mapped[str] = mapped_column(String(64), nullable=False)
    video_file: Mapped[str] = mapped_column(String(800), default="", nullable=False)
    body_language_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    eye_contact_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    facial_expression_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    confidence_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    attentiveness_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    clarity_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    tone_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    styling_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    appearance_feedback: Mapped[str] = mapped_column(Text, default="", nullable=False)
    feedback: Mapped[str] = mapped_column(Text, default="", nullable=False)
    spoken_answer_json: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    number_of_questions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class QuizRecord(TimestampMixin, Base):
    __tablename__ = "quiz_results"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(120), index=True, nullable=False)
    role: Mapped[str] = mapped_column(String(255), nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    total_questions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    timed_out: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class ReviewRecord(TimestampMixin, Base):
    __tablename__ = "candidate_reviews"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(120), index=True, nullable=False)
    chatbot_scores_json: Mapped[list[int]] = mapped_column(JSON, default=list, nullable=False)
    live_mock_scores_json: Mapped[list[int]] = mapped_column(JSON, default=list, nullable=False)
    resume_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    overall_rating: Mapped[int] = mapped_column(Integer, nullable=False)
    strengths_json: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    weaknesses_json: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    recommendations_json: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    reviewed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class InterviewPreference(TimestampMixin, Base):
    __tablename__ = "interview_settings"
    __table_args__ = (UniqueConstraint("user_id", name="uq_interview_settings_user"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(120), nullable=False)
    target_role: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    interview_type: Mapped[str] = mapped_column(String(40), default="Technical", nullable=False)
    difficulty: Mapped[str] = mapped_column(String(40), default="Beginner", nullable=False)
    question_count: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
