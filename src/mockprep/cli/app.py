from __future__ import annotations

import json
from pathlib import Path

import typer
import uvicorn

from mockprep.api.app import create_app
from mockprep.config import get_settings
from mockprep.core.chatbot import rate_answer
from mockprep.core.classifier import classify_role, rounds_for_role, suggest_difficulty, suggest_interview_type
from mockprep.core.live_mock import LIVE_QUESTIONS, evaluate_spoken_answer
from mockprep.core.review import generate_candidate_review, rating_label
from mockprep.core.scoring import get_scoring_strategy
from mockprep.core.verification import run_verification_pipeline
from mockprep.db.init import init_database
from mockprep.db.repositories import Repository, to_live_mock_record, to_resume_record, to_session_record
from mockprep.db.session import session_scope
from mockprep.logging_config import configure_logging
from mockprep.types import ResumeInput

app = typer.Typer(help="MockPrep CLI")
resume_app = typer.Typer(help="Stored resumes")

app.add_typer(resume_app, name="resume")

_INITIALIZED = False


def ensure_initialized() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    init_database()
    _INITIALIZED = True


@app.command("init")
def init_cmd(reset: bool = typer.Option(False, "--reset", help="Drop all tables first")) -> None:
    """Initialize database and data directories."""
    configure_logging()
    result = init_database(reset=reset)
    typer.echo(json.dumps({"ok": True, **result}, indent=2))


@app.command("classify-role")
def classify_role_cmd(role: str = typer.Argument(...)) -> None:
    typer.echo(
        json.dumps(
            {
                "role": role,
                "category": classify_role(role).value,
                "interview_type": suggest_interview_type(role),
                "difficulty": suggest_difficulty(role),
                "rounds": rounds_for_role(role),
            },
            indent=2,
        )
    )


@app.command("verify")
def verify_cmd(
    role: str = typer.Option(..., "--role"),
    file: Path = typer.Option(..., "--file", exists=True, readable=True),
) -> None:
    """Check a plain-text resume against a target role."""
    configure_logging()
    outcome = run_verification_pipeline(
        role,
        ResumeInput(file_name=file.name, content=file.read_text(encoding="utf-8")),
        get_scoring_strategy(),
    )
    typer.echo(outcome.model_dump_json(indent=2))
    if not outcome.matched:
        raise typer.Exit(code=1)


@app.command("rate-answer")
def rate_answer_cmd(answer: str = typer.Argument(...)) -> None:
    feedback, rating = rate_answer(answer)
    typer.echo(json.dumps({"rating": rating, "feedback": feedback}, indent=2))


@app.command("evaluate-answer")
def evaluate_answer_cmd(
    transcript: str = typer.Argument(...),
    question: int = typer.Option(0, "--question", min=0, max=len(LIVE_QUESTIONS) - 1),
) -> None:
    feedback = evaluate_spoken_answer(
        transcript, LIVE_QUESTIONS[question], min_words=get_settings().live_mock_min_words
    )
    typer.echo(feedback.model_dump_json(indent=2))


@app.command("review")
def review_cmd(
    user_id: str = typer.Option(..., "--user"),
    save: bool = typer.Option(False, "--save"),
) -> None:
    configure_logging()
    ensure_initialized()
    with session_scope() as db:
        repo = Repository(db)
        review = generate_candidate_review(
            [to_session_record(row) for row in repo.list_interview_sessions(user_id)],
            [to_live_mock_record(row) for row in repo.list_live_mocks(user_id)],
            [to_resume_record(row) for row in repo.list_resumes(user_id)],
            get_scoring_strategy(),
            user_id=user_id,
        )
        if save:
            repo.save_review(review)

    payload = review.model_dump(mode="json")
    payload["rating_label"] = rating_label(review.overall_rating)
    typer.echo(json.dumps(payload, indent=2))


@resume_app.command("list")
def resume_list(user_id: str = typer.Option(..., "--user")) -> None:
    configure_logging()
    ensure_initialized()
    with session_scope() as db:
        rows = Repository(db).list_resumes(user_id)
        payload = [
            {
                "id": row.id,
                "file_name": row.file_name,
                "target_role": row.target_role,
                "verified": row.verified,
                "quality_score": row.quality_score,
            }
            for row in rows
        ]
    typer.echo(json.dumps(payload, indent=2))


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
    log_level: str | None = typer.Option(None, "--log-level"),
) -> None:
    configure_logging(log_level)
    ensure_initialized()
    settings = get_settings()
    app_instance = create_app()
    uvicorn.run(
        app_instance,
        host=host or settings.app_host,
        port=port or settings.app_port,
        log_level=(log_level or settings.log_level).lower(),
    )


if __name__ == "__main__":
    app()
