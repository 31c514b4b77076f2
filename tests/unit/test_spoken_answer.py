from mockprep.core.live_mock import (
    LIVE_QUESTIONS,
    aggregate_spoken_feedback,
    analyze_voice_tone,
    appearance_feedback,
    evaluate_spoken_answer,
)

INTRO = LIVE_QUESTIONS[0]


def test_keyword_and_length_blend() -> None:
    transcript = (
        "My background includes experience in retail and my education gave me strong skills "
        "that I use daily to help customers find what they need most"
    )
    assert len(transcript.split()) == 25

    result = evaluate_spoken_answer(transcript, INTRO, min_words=20)

    assert result.correctness_rating == 77
    assert result.suggested_improvements.startswith("Good start!")
    assert "work, career" in result.suggested_improvements
    assert "provide more detailed explanations" in result.suggested_improvements
    assert result.recommended_answer == INTRO.expected_answer


def test_full_coverage_scores_one_hundred() -> None:
    transcript = (
        "My background covers work experience and education, the skills I built during my career, "
        "and how each step prepared me for this position and the team I would join next year"
    )
    result = evaluate_spoken_answer(transcript, INTRO, min_words=20)
    assert result.correctness_rating == 100
    assert result.suggested_improvements.startswith("Excellent answer!")


def test_short_answer_gets_brevity_note() -> None:
    result = evaluate_spoken_answer("I like computers", INTRO, min_words=20)
    # no keywords, 3 of 20 words: round(0 + 15 * 0.3) = 5
    assert result.correctness_rating == 5
    assert result.suggested_improvements.startswith("Your answer is incomplete.")
    assert "experience, education, skills, background, work" in result.suggested_improvements
    assert result.suggested_improvements.endswith(
        "Aim for at least 30-50 words to provide sufficient detail."
    )


def test_long_answer_gets_concision_note() -> None:
    transcript = " ".join(["experience education skills background work career"] * 30)
    result = evaluate_spoken_answer(transcript, INTRO, min_words=20)
    assert result.correctness_rating == 100
    assert "Consider being more concise." in result.suggested_improvements


def test_voice_tone_heuristics() -> None:
    voice = analyze_voice_tone("I am definitely excited and absolutely sure this is a great fit for me")
    assert voice.confidence == 100
    assert voice.enthusiasm == 85
    assert voice.clarity == 80

    quiet = analyze_voice_tone("ok")
    assert (quiet.confidence, quiet.enthusiasm, quiet.clarity) == (70, 65, 60)


def test_aggregate_uses_mean_rating() -> None:
    first = evaluate_spoken_answer("I like computers", INTRO, min_words=20)
    second = evaluate_spoken_answer(
        "My background covers work experience and education, the skills I built during my career, "
        "and how each step prepared me for this position and the team I would join next year",
        INTRO,
        min_words=20,
    )
    aggregate = aggregate_spoken_feedback([first, second])
    assert aggregate is not None
    assert aggregate.correctness_rating == 53
    assert aggregate.suggested_improvements.startswith("Overall Answer Quality: 53/100")
    assert aggregate_spoken_feedback([]) is None


def test_appearance_feedback_tiers() -> None:
    assert appearance_feedback(90).startswith("Excellent professional appearance!")
    assert appearance_feedback(75).startswith("Good professional appearance.")
    assert appearance_feedback(40).startswith("Your appearance could be improved")
