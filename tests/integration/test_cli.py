import json
from pathlib import Path

from typer.testing import CliRunner

from mockprep.cli.app import app
from mockprep.db.repositories import Repository
from mockprep.db.session import session_scope

runner = CliRunner()


def test_classify_role_command() -> None:
    result = runner.invoke(app, ["classify-role", "Junior UX Designer"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["category"] == "Design"
    assert payload["difficulty"] == "Beginner"


def test_rate_answer_command() -> None:
    result = runner.invoke(app, ["rate-answer", "short"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["rating"] == 2


def test_verify_command_exits_nonzero_on_mismatch(tmp_path: Path) -> None:
    resume = tmp_path / "resume.txt"
    resume.write_text("Senior software engineer with Python experience", encoding="utf-8")

    matched = runner.invoke(app, ["verify", "--role", "Software Engineer", "--file", str(resume)])
    assert matched.exit_code == 0
    assert '"matched": true' in matched.output

    mismatched = runner.invoke(app, ["verify", "--role", "Product Manager", "--file", str(resume)])
    assert mismatched.exit_code == 1


def test_review_command_for_empty_history() -> None:
    result = runner.invoke(app, ["review", "--user", "nobody"])
    assert result.exit_code == 0
    assert '"overall_rating": 0' in result.output
    assert '"rating_label": "Needs Improvement"' in result.output


def test_init_reset_clears_stored_rows() -> None:
    with session_scope() as db:
        Repository(db).add_resume("user-1", file_name="cv.pdf")

    result = runner.invoke(app, ["init", "--reset"])
    assert result.exit_code == 0
    assert '"reset": 1' in result.output

    with session_scope() as db:
        assert Repository(db).list_resumes("user-1") == []
