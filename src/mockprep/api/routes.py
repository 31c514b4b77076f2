from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from pathlib import PurePath

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from mockprep.api.deps import get_current_user, get_db, get_scoring
from mockprep.api.schemas import (
    InterviewResponseCreateRequest,
    InterviewSessionCreateRequest,
    LiveMockCreateRequest,
    ProfileRequest,
    QuizQuestionResponse,
    QuizSubmitRequest,
    RateAnswerRequest,
    RateAnswerResponse,
    ResumeStatusResponse,
    ReviewResponse,
    RoleClassificationResponse,
    RoleRequest,
    SpokenAnswerRequest,
    SpokenAnswerResponse,
    VerificationCheckRequest,
    VerificationResponse,
    VerifyResumeRequest,
)
from mockprep.config import get_settings
from mockprep.core.chatbot import average_rating, rate_answer
from mockprep.core.classifier import (
    classify_role,
    detect_role_from_resume,
    rounds_for_role,
    suggest_difficulty,
    suggest_interview_type,
)
from mockprep.core.live_mock import LIVE_QUESTIONS, evaluate_spoken_answer
from mockprep.core.quiz import QuizAttempt, questions_for_role
from mockprep.core.resume_signals import resume_feedback, validate_resume_upload
from mockprep.core.review import generate_candidate_review, rating_label
from mockprep.core.runtime import get_event_bus, user_notifier
from mockprep.core.scoring import ScoringStrategy
from mockprep.core.verification import MATCH_NOTICE, MISMATCH_NOTICE, run_verification_pipeline
from mockprep.db.repositories import (
    Repository,
    to_candidate_review,
    to_interview_response,
    to_interview_settings,
    to_live_mock_record,
    to_quiz_result,
    to_resume_record,
    to_session_record,
    to_user_profile,
)
from mockprep.types import (
    CandidateReview,
    InterviewResponse,
    InterviewSessionRecord,
    InterviewSettings,
    LiveMockRecord,
    QuizResult,
    ResumeInput,
    ResumeRecord,
    UserProfile,
    VerificationOutcome,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


def _publish_verification(outcome: VerificationOutcome, user_id: str) -> str:
    notice = MATCH_NOTICE if outcome.matched else MISMATCH_NOTICE
    user_notifier(user_id, "verification")("success" if outcome.matched else "error", notice, role=outcome.role)
    return notice


def _verification_response(outcome: VerificationOutcome, user_id: str) -> VerificationResponse:
    return VerificationResponse(**outcome.model_dump(), notice=_publish_verification(outcome, user_id))


@router.get("/profile", response_model=UserProfile)
def get_profile(user_id: str = Depends(get_current_user), db: Session = Depends(get_db)) -> UserProfile:
    profile = Repository(db).get_profile(user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return to_user_profile(profile)


@router.put("/profile", response_model=UserProfile)
def save_profile(
    payload: ProfileRequest,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserProfile:
    try:
        profile = UserProfile(user_id=user_id, **payload.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Full name and email are required") from exc
    return to_user_profile(Repository(db).save_profile(profile))


@router.post("/roles/classify", response_model=RoleClassificationResponse)
def classify(payload: RoleRequest) -> RoleClassificationResponse:
    return RoleClassificationResponse(
        role=payload.role,
        category=classify_role(payload.role),
        suggested_interview_type=suggest_interview_type(payload.role),
        suggested_difficulty=suggest_difficulty(payload.role),
        rounds=rounds_for_role(payload.role),
    )


@router.post("/resumes", response_model=ResumeRecord)
async def upload_resume(
    file: UploadFile = File(...),
    target_role: str = Form(""),
    content: str = Form(""),
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
    scoring: ScoringStrategy = Depends(get_scoring),
) -> ResumeRecord:
    settings = get_settings()
    data = await file.read()
    file_name = file.filename or "resume"
    validate_resume_upload(file_name, file.content_type or "", len(data), max_bytes=settings.resume_max_bytes)

    resume_id = f"resume-{uuid.uuid4().hex}"
    settings.resume_dir.mkdir(parents=True, exist_ok=True)
    blob_path = settings.resume_dir / f"{resume_id}{PurePath(file_name).suffix.lower()}"
    blob_path.write_bytes(data)

    quality = scoring.resume_quality()
    resume_input = ResumeInput(
        resume_id=resume_id,
        file_name=file_name,
        content=content,
        suggested_role=detect_role_from_resume(content, file_name),
        quality_score=quality,
    )
    target_role = target_role.strip()
    outcome = run_verification_pipeline(target_role, resume_input, scoring) if target_role else None

    resume = Repository(db).add_resume(
        user_id,
        resume_id=resume_id,
        file_name=file_name,
        blob_ref=str(blob_path),
        parsed_content=content,
        quality_score=quality,
        improvement_suggestions=resume_feedback(quality),
        target_role=target_role,
        verified=bool(outcome and outcome.matched),
        improvement_details=outcome.suggestions if outcome else [],
        suggested_role=resume_input.suggested_role,
    )
    if outcome is not None:
        _publish_verification(outcome, user_id)
    logger.info("Stored resume %s for user=%s quality=%s", resume_id, user_id, quality)
    return to_resume_record(resume)


@router.get("/resumes", response_model=list[ResumeRecord])
def list_resumes(user_id: str = Depends(get_current_user), db: Session = Depends(get_db)) -> list[ResumeRecord]:
    return [to_resume_record(row) for row in Repository(db).list_resumes(user_id)]


@router.get("/resumes/latest", response_model=ResumeRecord)
def latest_resume(user_id: str = Depends(get_current_user), db: Session = Depends(get_db)) -> ResumeRecord:
    resume = Repository(db).get_latest_resume(user_id)
    if not resume:
        raise HTTPException(status_code=404, detail="No resume uploaded")
    return resume


@router.get("/resumes/status", response_model=ResumeStatusResponse)
def resume_status(user_id: str = Depends(get_current_user), db: Session = Depends(get_db)) -> ResumeStatusResponse:
    resume = Repository(db).get_latest_resume(user_id)
    if not resume:
        return ResumeStatusResponse(has_resume=False)
    return ResumeStatusResponse(
        has_resume=True,
        latest_resume_id=resume.id,
        verified=resume.verified,
        target_role=resume.target_role,
    )


@router.post("/resumes/{resume_id}/verify", response_model=VerificationResponse)
async def verify_resume(
    resume_id: str,
    payload: VerifyResumeRequest,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
    scoring: ScoringStrategy = Depends(get_scoring),
) -> VerificationResponse:
    repo = Repository(db)
    resume = repo.get_resume(user_id, resume_id)
    if not resume:
        raise HTTPException(status_code=404, detail="Resume not found")
    target_role = payload.target_role.strip()
    if not target_role:
        raise HTTPException(status_code=400, detail="Target role is required")

    outcome = run_verification_pipeline(
        target_role,
        ResumeInput(
            resume_id=resume.id,
            file_name=resume.file_name,
            content=resume.parsed_content,
            suggested_role=resume.suggested_role,
            quality_score=resume.quality_score,
        ),
        scoring,
    )
    repo.verify_resume_role(
        user_id,
        resume_id,
        target_role,
        verified=outcome.matched,
        suggestions=outcome.suggestions,
        detected_role=outcome.detected_role,
    )
    return _verification_response(outcome, user_id)


@router.post("/verification/check", response_model=VerificationResponse)
async def check_verification(
    payload: VerificationCheckRequest,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
    scoring: ScoringStrategy = Depends(get_scoring),
) -> VerificationResponse:
    role = payload.role.strip()
    if not role:
        raise HTTPException(status_code=400, detail="Target role is required")
    if payload.resume_id:
        resume = Repository(db).get_resume(user_id, payload.resume_id)
        if not resume:
            raise HTTPException(status_code=404, detail="Resume not found")
        resume_input = ResumeInput(
            resume_id=resume.id,
            file_name=resume.file_name,
            content=resume.parsed_content,
            suggested_role=resume.suggested_role,
            quality_score=resume.quality_score,
        )
    else:
        resume_input = ResumeInput(file_name=payload.file_name, content=payload.content)
    return _verification_response(run_verification_pipeline(role, resume_input, scoring), user_id)


@router.post("/interviews/rate", response_model=RateAnswerResponse)
def rate(payload: RateAnswerRequest) -> RateAnswerResponse:
    if not payload.answer.strip():
        raise HTTPException(status_code=400, detail="Answer must not be blank")
    feedback, rating = rate_answer(payload.answer)
    return RateAnswerResponse(feedback=feedback, rating=rating)


@router.post("/interviews/sessions", response_model=InterviewSessionRecord)
def save_interview_session(
    payload: InterviewSessionCreateRequest,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> InterviewSessionRecord:
    average = average_rating(payload.questions)
    record = InterviewSessionRecord(
        id=payload.id or f"session-{uuid.uuid4().hex}",
        user=user_id,
        role=payload.role,
        interview_type=payload.interview_type,
        difficulty=payload.difficulty,
        questions=payload.questions,
        start_time=payload.start_time,
        end_time=payload.end_time,
        overall_feedback=payload.overall_feedback,
        number_of_questions=payload.number_of_questions or len(payload.questions),
        average_rating=round(average, 1) if average is not None else None,
    )
    row = Repository(db).save_interview_session(record)
    return to_session_record(row)


@router.get("/interviews/sessions", response_model=list[InterviewSessionRecord])
def list_interview_sessions(
    user_id: str = Depends(get_current_user), db: Session = Depends(get_db)
) -> list[InterviewSessionRecord]:
    return [to_session_record(row) for row in Repository(db).list_interview_sessions(user_id)]


@router.post("/interviews/responses", response_model=InterviewResponse)
def add_interview_response(
    payload: InterviewResponseCreateRequest,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> InterviewResponse:
    response = InterviewResponse(**payload.model_dump(), created_at=datetime.now(UTC))
    row = Repository(db).add_interview_response(user_id, response)
    return to_interview_response(row)


@router.get("/interviews/responses", response_model=list[InterviewResponse])
def list_interview_responses(
    user_id: str = Depends(get_current_user), db: Session = Depends(get_db)
) -> list[InterviewResponse]:
    return [to_interview_response(row) for row in Repository(db).list_interview_responses(user_id)]


@router.post("/live-mock/evaluate", response_model=SpokenAnswerResponse)
def evaluate_answer(payload: SpokenAnswerRequest) -> SpokenAnswerResponse:
    if payload.question_index >= len(LIVE_QUESTIONS):
        raise HTTPException(status_code=404, detail="Question not found")
    if not payload.transcript.strip():
        raise HTTPException(status_code=400, detail="Transcript must not be blank")
    question = LIVE_QUESTIONS[payload.question_index]
    feedback = evaluate_spoken_answer(
        payload.transcript.strip(), question, min_words=get_settings().live_mock_min_words
    )
    return SpokenAnswerResponse(question=question.question, feedback=feedback)


@router.post("/live-mock/sessions", response_model=LiveMockRecord)
def save_live_mock(
    payload: LiveMockCreateRequest,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> LiveMockRecord:
    record = LiveMockRecord(
        id=f"live-{uuid.uuid4().hex}",
        user=user_id,
        session_id=payload.session_id or f"session-{uuid.uuid4().hex}",
        recorded_at=datetime.now(UTC),
        **payload.model_dump(exclude={"session_id"}),
    )
    row = Repository(db).save_live_mock(record)
    return to_live_mock_record(row)


@router.get("/live-mock/sessions", response_model=list[LiveMockRecord])
def list_live_mocks(user_id: str = Depends(get_current_user), db: Session = Depends(get_db)) -> list[LiveMockRecord]:
    return [to_live_mock_record(row) for row in Repository(db).list_live_mocks(user_id)]


@router.get("/quiz/{role}", response_model=list[QuizQuestionResponse])
def quiz_questions(role: str) -> list[QuizQuestionResponse]:
    questions = questions_for_role(role)
    if not questions:
        raise HTTPException(status_code=404, detail=f"No quiz available for {role}")
    return [QuizQuestionResponse(question=item.question, options=list(item.options)) for item in questions]


@router.post("/quiz/results", response_model=QuizResult)
def submit_quiz(
    payload: QuizSubmitRequest,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> QuizResult:
    try:
        attempt = QuizAttempt.start(user_id, payload.role)
        for index in payload.answers:
            if attempt.is_complete:
                break
            attempt.answer(index)
            attempt.advance()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if not attempt.is_complete:
        if not payload.timed_out:
            raise HTTPException(status_code=400, detail="Quiz is incomplete")
        attempt.time_up()
    return to_quiz_result(Repository(db).save_quiz_result(attempt.result()))


@router.get("/quiz-results", response_model=list[QuizResult])
def list_quiz_results(user_id: str = Depends(get_current_user), db: Session = Depends(get_db)) -> list[QuizResult]:
    return [to_quiz_result(row) for row in Repository(db).list_quiz_results(user_id)]


def _review_response(review: CandidateReview) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        overall_rating=review.overall_rating,
        rating_label=rating_label(review.overall_rating),
        resume_score=review.resume_score,
        chatbot_scores=review.chatbot_scores,
        live_mock_scores=review.live_mock_scores,
        strengths=review.strengths,
        weaknesses=review.weaknesses,
        recommendations=review.recommendations,
        created_at=review.created_at,
    )


@router.post("/reviews", response_model=ReviewResponse)
def create_review(
    save: bool = True,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
    scoring: ScoringStrategy = Depends(get_scoring),
) -> ReviewResponse:
    repo = Repository(db)
    review = generate_candidate_review(
        [to_session_record(row) for row in repo.list_interview_sessions(user_id)],
        [to_live_mock_record(row) for row in repo.list_live_mocks(user_id)],
        [to_resume_record(row) for row in repo.list_resumes(user_id)],
        scoring,
        user_id=user_id,
    )
    if save:
        repo.save_review(review)
    return _review_response(review)


@router.get("/reviews", response_model=list[ReviewResponse])
def list_reviews(user_id: str = Depends(get_current_user), db: Session = Depends(get_db)) -> list[ReviewResponse]:
    return [_review_response(to_candidate_review(row)) for row in Repository(db).list_reviews(user_id)]


@router.get("/settings", response_model=InterviewSettings)
def get_interview_settings(
    user_id: str = Depends(get_current_user), db: Session = Depends(get_db)
) -> InterviewSettings:
    row = Repository(db).get_interview_settings(user_id)
    if not row:
        raise HTTPException(status_code=404, detail="No interview settings saved")
    return to_interview_settings(row)


@router.put("/settings", response_model=InterviewSettings)
def save_interview_settings(
    payload: InterviewSettings,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> InterviewSettings:
    return to_interview_settings(Repository(db).save_interview_settings(user_id, payload))


@router.websocket("/notifications/stream")
async def stream_notifications(websocket: WebSocket, user_id: str) -> None:
    await websocket.accept()
    event_bus = get_event_bus()
    try:
        async for event in event_bus.subscribe(user_id):
            await websocket.send_json(event)
    except WebSocketDisconnect:
        return
