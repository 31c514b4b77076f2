from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

InterviewMode = Literal["chatbot", "live"]
InterviewType = Literal["Technical", "Behavioral", "HR", "Case Study"]
Difficulty = Literal["Beginner", "Medium", "Hard"]


class RoleCategory(str, Enum):
    TECHNICAL = "Technical"
    MANAGERIAL = "Managerial"
    DATA = "Data"
    DESIGN = "Design"
    GENERAL = "General"


class ImprovementSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    priority: int = 2
    implementation_tips: list[str] = Field(default_factory=list)

    @field_validator("priority")
    @classmethod
    def validate_priority(cls, value: int) -> int:
        if value < 1 or value > 3:
            raise ValueError("priority must be between 1 and 3")
        return value


class InterviewConfig(BaseModel):
    role: str
    interview_type: str = "Technical"
    difficulty: str = "Beginner"
    resume_id: str | None = None
    question_count: int = 5


class InterviewQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    answer: str
    feedback: str
    difficulty: str
    interview_type: str
    role: str
    rating: int | None = None


class InterviewResponse(BaseModel):
    answer: str
    feedback: str
    rating: int
    created_at: datetime


class InterviewSessionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    user: str
    role: str
    interview_type: str
    difficulty: str
    questions: list[InterviewQuestion] = Field(default_factory=list)
    start_time: datetime
    end_time: datetime
    overall_feedback: str = ""
    number_of_questions: int = 0
    average_rating: float | None = None


class SpokenAnswerFeedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    transcript: str
    correctness_rating: int
    suggested_improvements: str
    recommended_answer: str

    @field_validator("correctness_rating")
    @classmethod
    def validate_rating(cls, value: int) -> int:
        if value < 0 or value > 100:
            raise ValueError("correctness_rating must be between 0 and 100")
        return value


class PresentationScores(BaseModel):
    body_language: int = 0
    eye_contact: int = 0
    facial_expression: int = 0
    confidence: int = 0
    attentiveness: int = 0
    clarity: int = 0
    tone: int = 0
    styling: int = 0


class LiveMockRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    user: str
    session_id: str
    video_file: str = ""
    body_language_score: int
    eye_contact_score: int
    facial_expression_score: int
    confidence_score: int
    attentiveness_score: int
    clarity_score: int
    tone_score: int
    styling_score: int
    appearance_feedback: str = ""
    feedback: str = ""
    spoken_answer_feedback: SpokenAnswerFeedback | None = None
    recorded_at: datetime
    number_of_questions: int = 0


class ResumeInput(BaseModel):
    """What the verification pipeline knows about the selected resume."""

    resume_id: str = ""
    file_name: str = ""
    content: str = ""
    suggested_role: str = ""
    quality_score: int | None = None


class ResumeSignal(BaseModel):
    category: RoleCategory
    detected_role: str
    quality_score: int


class ResumeRecord(BaseModel):
    id: str
    owner: str
    blob_ref: str = ""
    file_name: str = ""
    parsed_content: str = ""
    quality_score: int | None = None
    improvement_suggestions: str = ""
    target_role: str = ""
    verified: bool = False
    improvement_details: list[ImprovementSuggestion] = Field(default_factory=list)
    suggested_role: str = ""
    uploaded_at: datetime | None = None


class VerificationOutcome(BaseModel):
    role: str
    detected_role: str
    category: RoleCategory
    quality_score: int
    matched: bool
    suggestions: list[ImprovementSuggestion] = Field(default_factory=list)


class UserProfile(BaseModel):
    user_id: str
    full_name: str
    email: str
    current_role: str = "Not specified"
    experience_level: str = "Beginner"
    preferred_interview_type: str = "Technical"
    preferred_difficulty: str = "Beginner"
    created_at: datetime | None = None

    @field_validator("full_name", "email")
    @classmethod
    def validate_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("full name and email are required")
        return value


class InterviewSettings(BaseModel):
    target_role: str
    interview_type: str
    difficulty: str
    question_count: int = 5


class QuizResult(BaseModel):
    id: str
    user: str
    role: str
    score: int
    total_questions: int
    completed_at: datetime
    timed_out: bool = False


class CandidateReview(BaseModel):
    id: str
    user: str
    chatbot_scores: list[int] = Field(default_factory=list)
    live_mock_scores: list[int] = Field(default_factory=list)
    resume_score: int | None = None
    overall_rating: int
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    created_at: datetime
