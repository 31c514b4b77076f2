from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from mockprep.types import ImprovementSuggestion, InterviewQuestion, RoleCategory, SpokenAnswerFeedback


class ProfileRequest(BaseModel):
    full_name: str
    email: str
    current_role: str = "Not specified"
    experience_level: str = "Beginner"
    preferred_interview_type: str = "Technical"
    preferred_difficulty: str = "Beginner"


class RoleRequest(BaseModel):
    role: str


class RoleClassificationResponse(BaseModel):
    role: str
    category: RoleCategory
    suggested_interview_type: str
    suggested_difficulty: str
    rounds: list[str]


class ResumeStatusResponse(BaseModel):
    has_resume: bool
    latest_resume_id: str | None = None
    verified: bool = False
    target_role: str = ""


class VerifyResumeRequest(BaseModel):
    target_role: str


class VerificationCheckRequest(BaseModel):
    role: str
    resume_id: str | None = None
    file_name: str = ""
    content: str = ""


class VerificationResponse(BaseModel):
    role: str
    detected_role: str
    category: RoleCategory
    quality_score: int
    matched: bool
    suggestions: list[ImprovementSuggestion] = Field(default_factory=list)
    notice: str


class RateAnswerRequest(BaseModel):
    answer: str


class RateAnswerResponse(BaseModel):
    feedback: str
    rating: int


class InterviewSessionCreateRequest(BaseModel):
    id: str | None = None
    role: str = ""
    interview_type: str
    difficulty: str
    questions: list[InterviewQuestion] = Field(default_factory=list)
    start_time: datetime
    end_time: datetime
    overall_feedback: str = ""
    number_of_questions: int = 0


class InterviewResponseCreateRequest(BaseModel):
    answer: str
    feedback: str = ""
    rating: int


class SpokenAnswerRequest(BaseModel):
    question_index: int = Field(ge=0)
    transcript: str


class SpokenAnswerResponse(BaseModel):
    question: str
    feedback: SpokenAnswerFeedback


class LiveMockCreateRequest(BaseModel):
    session_id: str | None = None
    video_file: str = ""
    body_language_score: int = Field(ge=0, le=100)
    eye_contact_score: int = Field(ge=0, le=100)
    facial_expression_score: int = Field(ge=0, le=100)
    confidence_score: int = Field(ge=0, le=100)
    attentiveness_score: int = Field(ge=0, le=100)
    clarity_score: int = Field(ge=0, le=100)
    tone_score: int = Field(default=0, ge=0, le=100)
    styling_score: int = Field(default=0, ge=0, le=100)
    appearance_feedback: str = ""
    feedback: str = ""
    spoken_answer_feedback: SpokenAnswerFeedback | None = None
    number_of_questions: int = 0


class QuizQuestionResponse(BaseModel):
    question: str
    options: list[str]


class QuizSubmitRequest(BaseModel):
    role: str
    answers: list[int] = Field(default_factory=list)
    timed_out: bool = False


class ReviewResponse(BaseModel):
    id: str
    overall_rating: int
    rating_label: str
    resume_score: int | None = None
    chatbot_scores: list[int]
    live_mock_scores: list[int]
    strengths: list[str]
    weaknesses: list[str]
    recommendations: list[str]
    created_at: datetime
