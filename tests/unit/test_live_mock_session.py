import asyncio

from mockprep.config import Settings
from mockprep.core.live_mock import LIVE_QUESTIONS, LiveMockInterview
from mockprep.core.media import DeviceError, DeviceErrorKind, TranscriptSegment, device_error_message
from mockprep.core.scoring import FixedScoring
from mockprep.errors import ResumeRequiredError
from mockprep.types import InterviewConfig, ResumeRecord

RESUME = ResumeRecord(id="resume-1", owner="user-1", file_name="resume.pdf")


class FakeMedia:
    def __init__(self, *, supported: bool = True, errors: list[DeviceErrorKind] | None = None):
        self.is_supported = supported
        self.errors = list(errors or [])
        self.starts = 0
        self.stopped = False

    async def start(self) -> bool:
        self.starts += 1
        if self.errors:
            raise DeviceError(self.errors.pop(0))
        return True

    async def stop(self) -> None:
        self.stopped = True

    async def retry(self) -> bool:
        return await self.start()

    async def capture_frame(self) -> bytes | None:
        return b"\xff\xd8frame"


class FakeRecognizer:
    def __init__(self):
        self.running = False
        self.starts = 0

    def start(self) -> None:
        self.running = True
        self.starts += 1

    def stop(self) -> None:
        self.running = False


class FakeGateway:
    def __init__(self, fail_with: Exception | None = None, resume: ResumeRecord | None = RESUME):
        self.fail_with = fail_with
        self.resume = resume
        self.live_mocks: list = []
        self.settings: list = []

    async def get_latest_resume(self, user_id: str) -> ResumeRecord | None:
        return self.resume

    def save_live_mock(self, record) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.live_mocks.append(record)

    def save_interview_settings(self, user_id, settings) -> None:
        self.settings.append((user_id, settings))


def _interview(media: FakeMedia, gateway: FakeGateway | None = None, count: int = 2) -> LiveMockInterview:
    return LiveMockInterview(
        InterviewConfig(role="Software Engineer", interview_type="HR", difficulty="Medium"),
        user_id="user-1",
        media=media,
        recognizer=FakeRecognizer(),
        gateway=gateway,
        scoring=FixedScoring(72, overrides={"styling": 88}),
        settings=Settings(live_mock_min_words=20),
        question_count=count,
    )


def test_device_errors_map_to_distinct_notices_and_retry() -> None:
    async def scenario() -> tuple[LiveMockInterview, bool, bool]:
        interview = _interview(FakeMedia(errors=[DeviceErrorKind.BUSY]))
        first = await interview.acquire_devices()
        assert interview.permission_state == "denied"
        assert interview.device_error is DeviceErrorKind.BUSY
        second = await interview.retry_devices()
        return interview, first, second

    interview, first, second = asyncio.run(scenario())
    assert (first, second) == (False, True)
    assert interview.permission_state == "granted"
    assert interview.device_error is None
    assert interview.notify.messages("error") == [device_error_message(DeviceErrorKind.BUSY)]
    assert "Camera access granted!" in interview.notify.messages("success")


def test_unsupported_browser_never_calls_start() -> None:
    media = FakeMedia(supported=False)
    interview = _interview(media)
    assert asyncio.run(interview.acquire_devices()) is False
    assert media.starts == 0
    assert interview.device_error is DeviceErrorKind.NOT_SUPPORTED


def test_transient_recognition_errors_are_swallowed_and_denial_reported_once() -> None:
    interview = _interview(FakeMedia())
    interview.handle_recognition_error("no-speech")
    interview.handle_recognition_error("aborted")
    interview.handle_recognition_error("not-allowed")
    interview.handle_recognition_error("not-allowed")
    assert interview.notify.messages("error") == ["Microphone access denied. Please allow microphone access."]


def test_full_session_produces_and_saves_record() -> None:
    gateway = FakeGateway()
    media = FakeMedia()

    async def scenario() -> LiveMockInterview:
        interview = _interview(media, gateway)
        assert await interview.begin()

        assert await interview.start_answer()
        interview.handle_segment(TranscriptSegment("I am", is_final=False))
        interview.handle_segment(
            TranscriptSegment(
                "My background covers work experience and education, the skills I built during my career, "
                "and I am definitely excited to bring them to this team"
            )
        )
        feedback = interview.stop_answer()
        assert feedback is not None and feedback.correctness_rating == 100
        assert await interview.next_question()

        assert await interview.start_answer()
        assert interview.stop_answer() is None
        assert not await interview.next_question()
        return interview

    interview = asyncio.run(scenario())
    record = gateway.live_mocks[0]
    assert interview.is_complete and media.stopped
    assert record.number_of_questions == 2
    assert record.confidence_score == 80
    assert record.clarity_score == 80
    assert record.tone_score == (80 + 75) // 2
    assert record.styling_score == 88
    assert record.body_language_score == 72
    assert record.spoken_answer_feedback is not None
    assert record.spoken_answer_feedback.correctness_rating == 100
    assert record.appearance_feedback.startswith("Excellent professional appearance!")
    assert record.feedback.startswith("Overall Performance: ")
    assert "Questions Completed: 2" in record.feedback
    assert gateway.settings[0][1].question_count == 2


def test_zero_voice_scores_fall_back_to_strategy() -> None:
    async def scenario() -> LiveMockInterview:
        interview = _interview(FakeMedia(), count=1)
        await interview.acquire_devices()
        await interview.complete()
        return interview

    interview = asyncio.run(scenario())
    record = interview.record
    assert record is not None
    assert record.confidence_score == 72
    assert record.clarity_score == 72
    assert record.tone_score == 72
    assert record.styling_score == 88
    assert record.spoken_answer_feedback is None


def test_question_bank_is_trimmed_to_configured_count() -> None:
    interview = _interview(FakeMedia(), count=3)
    assert interview.questions == LIVE_QUESTIONS[:3]
    assert len(LIVE_QUESTIONS) == 10


def test_save_failure_becomes_resume_required_notice() -> None:
    gateway = FakeGateway(fail_with=ResumeRequiredError())

    async def scenario() -> LiveMockInterview:
        interview = _interview(FakeMedia(), gateway, count=1)
        await interview.acquire_devices()
        await interview.complete()
        return interview

    interview = asyncio.run(scenario())
    assert gateway.live_mocks == []
    assert interview.notify.messages("error") == [
        "Resume upload required. Please upload your resume before continuing."
    ]


def test_begin_without_resume_is_blocked_before_devices_or_settings() -> None:
    gateway = FakeGateway(resume=None)
    media = FakeMedia()

    async def scenario() -> tuple[LiveMockInterview, bool]:
        interview = _interview(media, gateway)
        started = await interview.begin()
        return interview, started

    interview, started = asyncio.run(scenario())
    assert started is False
    assert media.starts == 0
    assert gateway.settings == []
    assert interview.permission_state != "granted"
    assert interview.notify.messages("error") == [
        "Resume upload required. Please upload your resume before continuing."
    ]
