import pytest

from mockprep.config import Settings
from mockprep.core.quiz import QuizAttempt, questions_for_role


def test_unknown_role_has_no_quiz() -> None:
    assert questions_for_role("Astronaut") == []
    with pytest.raises(ValueError):
        QuizAttempt.start("user-1", "Astronaut", Settings())


def test_full_attempt_counts_correct_answers() -> None:
    attempt = QuizAttempt.start("user-1", "Software Engineer", Settings(quiz_time_limit_sec=45))
    assert attempt.time_limit_sec == 45

    for index in (1, 1, 0, 2, 2):
        attempt.answer(index)
        attempt.advance()

    assert attempt.is_complete
    result = attempt.result()
    assert result.score == 4
    assert result.total_questions == 5
    assert not result.timed_out


def test_second_answer_to_same_question_is_ignored() -> None:
    attempt = QuizAttempt.start("user-1", "Product Manager", Settings())
    assert attempt.answer(0) is False
    assert attempt.answer(1) is None
    assert attempt.answers == [False]


def test_time_up_completes_early() -> None:
    attempt = QuizAttempt.start("user-1", "Data Scientist", Settings())
    attempt.answer(1)
    attempt.advance()
    attempt.time_up()

    result = attempt.result()
    assert result.timed_out
    assert result.score == 1
    assert attempt.answer(2) is None


def test_result_requires_completion() -> None:
    attempt = QuizAttempt.start("user-1", "Data Scientist", Settings())
    with pytest.raises(ValueError):
        attempt.result()


def test_result_carries_completion_time() -> None:
    attempt = QuizAttempt.start("user-1", "Data Scientist", Settings())
    attempt.time_up()
    result = attempt.result()
    assert result.completed_at == attempt.completed_at
    assert result.completed_at >= attempt.started_at
