import asyncio

from mockprep.config import Settings
from mockprep.core.chatbot import QUESTION_BANK, ChatbotInterview
from mockprep.errors import PersistenceErrorKind, RoleNotVerifiedError
from mockprep.types import InterviewConfig, ResumeRecord

LONG_ANSWER = (
    "In my last role I rebuilt the deployment pipeline. For example, I split the monolith build into "
    "cached stages, added contract tests, and moved releases behind feature flags. "
    "Lead time dropped from two days to under an hour."
)


class FakeGateway:
    def __init__(self, resume: ResumeRecord | None = None, fail_with: Exception | None = None):
        self.resume = resume
        self.fail_with = fail_with
        self.sessions: list = []
        self.responses: list = []

    def get_latest_resume(self, user_id: str) -> ResumeRecord | None:
        return self.resume

    async def save_interview_session(self, record) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sessions.append(record)

    def add_interview_response(self, user_id: str, response) -> None:
        self.responses.append((user_id, response))


def _config(**overrides) -> InterviewConfig:
    values = {"role": "Software Engineer", "interview_type": "Technical", "difficulty": "Medium", "question_count": 3}
    values.update(overrides)
    return InterviewConfig(**values)


def _verified_resume(role: str = "Software Engineer") -> ResumeRecord:
    return ResumeRecord(id="resume-1", owner="user-1", target_role=role, verified=True)


def _settings(timeout: float = 30.0) -> Settings:
    return Settings(chatbot_inactivity_timeout_sec=timeout)


def test_greeting_includes_first_question() -> None:
    async def scenario() -> ChatbotInterview:
        interview = ChatbotInterview(_config(), user_id="user-1", settings=_settings())
        assert await interview.start()
        return interview

    interview = asyncio.run(scenario())
    greeting = interview.messages[0].content
    assert "Medium level Technical interview for the Software Engineer position" in greeting
    assert "I'll ask you 3 questions" in greeting
    assert greeting.endswith(QUESTION_BANK["Technical"]["Medium"][0])


def test_enough_sentinel_submits_immediately() -> None:
    async def scenario() -> tuple[ChatbotInterview, object]:
        interview = ChatbotInterview(_config(), user_id="user-1", settings=_settings())
        await interview.start()
        answered = await interview.update_draft("  Enough ")
        return interview, answered

    interview, answered = asyncio.run(scenario())
    assert answered is not None
    assert answered.answer == "  Enough "
    assert answered.rating == 2
    assert interview.current_index == 1
    assert interview.messages[-1].content.startswith("Great! Let's move on to the next question:")
    assert interview.draft == ""


def test_inactivity_timer_submits_draft() -> None:
    async def scenario() -> ChatbotInterview:
        interview = ChatbotInterview(_config(), user_id="user-1", settings=_settings(timeout=0.02))
        await interview.start()
        await interview.update_draft("I would add an index")
        await interview.update_draft("I would add an index on the filter column")
        await asyncio.sleep(0.1)
        return interview

    interview = asyncio.run(scenario())
    assert len(interview.answered) == 1
    assert interview.answered[0].answer == "I would add an index on the filter column"


def test_blank_drafts_are_ignored() -> None:
    async def scenario() -> ChatbotInterview:
        interview = ChatbotInterview(_config(), user_id="user-1", settings=_settings(timeout=0.01))
        await interview.start()
        await interview.update_draft("   ")
        assert await interview.submit() is None
        await asyncio.sleep(0.05)
        return interview

    interview = asyncio.run(scenario())
    assert interview.answered == []


def test_completed_session_is_saved_with_single_count_average() -> None:
    gateway = FakeGateway(resume=_verified_resume())

    async def scenario() -> ChatbotInterview:
        interview = ChatbotInterview(_config(), user_id="user-1", gateway=gateway, settings=_settings())
        assert await interview.start()
        for answer in (LONG_ANSWER, "No idea.", "Short answer"):
            await interview.update_draft(answer)
            await interview.submit()
        return interview

    interview = asyncio.run(scenario())
    ratings = [item.rating for item in interview.answered]
    assert ratings == [5, 2, 2]
    assert interview.is_complete

    record = gateway.sessions[0]
    assert record.average_rating == 3.0
    assert len(record.questions) == 3
    assert record.number_of_questions == 3
    assert record.start_time <= record.end_time
    assert len(gateway.responses) == 3
    assert "Your average rating was 3.0/5." in interview.messages[-1].content
    assert "Interview session saved!" in interview.notify.messages("success")


def test_start_requires_resume_and_verification() -> None:
    async def scenario(gateway: FakeGateway, role: str) -> ChatbotInterview:
        interview = ChatbotInterview(_config(role=role), user_id="user-1", gateway=gateway, settings=_settings())
        await interview.start()
        return interview

    missing = asyncio.run(scenario(FakeGateway(), "Software Engineer"))
    assert missing.blocked is PersistenceErrorKind.RESUME_REQUIRED
    assert missing.messages == []

    unverified = asyncio.run(scenario(FakeGateway(resume=_verified_resume("Designer")), "Software Engineer"))
    assert unverified.blocked is PersistenceErrorKind.VERIFICATION_REQUIRED

    legacy = asyncio.run(scenario(FakeGateway(resume=ResumeRecord(id="r", owner="user-1")), ""))
    assert legacy.blocked is None


def test_save_failure_is_classified_into_a_notice() -> None:
    gateway = FakeGateway(resume=_verified_resume(), fail_with=RoleNotVerifiedError("Software Engineer"))

    async def scenario() -> ChatbotInterview:
        interview = ChatbotInterview(
            _config(question_count=1), user_id="user-1", gateway=gateway, settings=_settings()
        )
        await interview.start()
        await interview.update_draft(LONG_ANSWER)
        await interview.submit()
        return interview

    interview = asyncio.run(scenario())
    assert interview.is_complete
    assert gateway.sessions == []
    assert interview.notify.messages("error") == [
        "Resume-role verification required. Please complete the verification process."
    ]


def test_start_compares_roles_without_surrounding_whitespace() -> None:
    async def scenario() -> ChatbotInterview:
        interview = ChatbotInterview(
            _config(role="Software Engineer "),
            user_id="user-1",
            gateway=FakeGateway(resume=_verified_resume(" Software Engineer")),
            settings=_settings(),
        )
        assert await interview.start()
        return interview

    assert asyncio.run(scenario()).blocked is None
