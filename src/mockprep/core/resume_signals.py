from __future__ import annotations

from pathlib import PurePath

from mockprep.core.classifier import classify_role, detect_role_from_resume
from mockprep.core.scoring import ScoringStrategy
from mockprep.errors import InvalidResumeError
from mockprep.types import ResumeInput, ResumeSignal

ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
ALLOWED_SUFFIXES = {".pdf", ".docx"}


def extract_resume_signal(resume: ResumeInput, scoring: ScoringStrategy) -> ResumeSignal:
    text = f"{resume.content} {resume.file_name}"
    detected_role = resume.suggested_role or detect_role_from_resume(resume.content, resume.file_name)
    if resume.quality_score is not None:
        quality = resume.quality_score
    else:
        quality = scoring.resume_quality()
    return ResumeSignal(
        category=classify_role(text),
        detected_role=detected_role,
        quality_score=max(0, min(100, int(quality))),
    )


def resume_feedback(score: int) -> str:
    if score >= 90:
        return (
            "Excellent resume! Your content is well-structured with strong action verbs and quantifiable "
            "achievements. Consider adding more specific metrics to further strengthen your impact statements."
        )
    if score >= 75:
        return (
            "Good resume overall. Strengthen your bullet points with more quantifiable results. Add specific "
            "technologies and tools you've used. Consider reorganizing sections for better flow."
        )
    return (
        "Your resume needs improvement. Focus on: 1) Adding quantifiable achievements, 2) Using stronger "
        "action verbs, 3) Highlighting relevant skills, 4) Improving formatting and consistency, "
        "5) Tailoring content to target roles."
    )


def validate_resume_upload(file_name: str, content_type: str, size: int, *, max_bytes: int) -> None:
    if content_type:
        allowed = content_type in ALLOWED_CONTENT_TYPES
    else:
        allowed = PurePath(file_name).suffix.lower() in ALLOWED_SUFFIXES
    if not allowed:
        raise InvalidResumeError("Please upload a PDF or DOCX file")
    if size > max_bytes:
        raise InvalidResumeError(f"File size must be less than {max_bytes // (1024 * 1024)}MB")
