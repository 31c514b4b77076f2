import asyncio

from mockprep.config import Settings
from mockprep.core.chatbot import ChatbotInterview
from mockprep.core.live_mock import LiveMockInterview
from mockprep.core.media import TranscriptSegment
from mockprep.core.review import generate_candidate_review
from mockprep.core.scoring import FixedScoring
from mockprep.core.verification import StartDecision, VerificationOrchestrator
from mockprep.db.repositories import Repository, to_live_mock_record, to_resume_record, to_session_record
from mockprep.db.session import SessionLocal
from mockprep.types import InterviewConfig, ResumeInput

USER = "candidate-1"
ROLE = "Software Engineer"
ANSWER = (
    "For example, I led the migration of our billing service to a queue based design. "
    "I planned the cutover, wrote the rollback steps, and paired with support on the launch. "
    "Error rates dropped by half and on-call pages went quiet within a month of the change."
)


class StubMedia:
    is_supported = True

    async def start(self) -> bool:
        return True

    async def stop(self) -> None:
        return None

    async def retry(self) -> bool:
        return True

    async def capture_frame(self) -> bytes | None:
        return b"frame"


class StubRecognizer:
    def start(self) -> None:
        return None

    def stop(self) -> None:
        return None


def test_verify_then_run_chatbot_and_live_mock_against_the_database() -> None:
    settings = Settings(verification_debounce_sec=5, chatbot_inactivity_timeout_sec=30, live_mock_min_words=20)
    scoring = FixedScoring(84)

    with SessionLocal() as db:
        repo = Repository(db)
        stored = repo.add_resume(
            USER,
            file_name="resume.pdf",
            parsed_content="Backend software engineer focused on Python services",
            quality_score=88,
        )
        launched: list[ChatbotInterview] = []

        async def on_start(mode, role, resume) -> None:
            repo.verify_resume_role(USER, resume.resume_id, role, verified=True)
            interview = ChatbotInterview(
                InterviewConfig(role=role, interview_type="Behavioral", difficulty="Beginner", question_count=2),
                user_id=USER,
                gateway=repo,
                settings=settings,
            )
            assert await interview.start()
            launched.append(interview)

        async def scenario() -> StartDecision | None:
            orchestrator = VerificationOrchestrator(settings=settings, scoring=scoring, on_start=on_start)
            orchestrator.set_resume(
                ResumeInput(
                    resume_id=stored.id,
                    file_name=stored.file_name,
                    content=stored.parsed_content,
                    quality_score=stored.quality_score,
                )
            )
            orchestrator.set_role(ROLE)
            assert await orchestrator.request_start("chatbot") is StartDecision.AWAITING_ACKNOWLEDGEMENT
            decision = await orchestrator.acknowledge()

            interview = launched[0]
            await interview.update_draft(ANSWER)
            await interview.submit()
            await interview.update_draft("enough")
            interview.close()
            orchestrator.close()

            live = LiveMockInterview(
                InterviewConfig(role=ROLE, interview_type="HR", difficulty="Beginner"),
                user_id=USER,
                media=StubMedia(),
                recognizer=StubRecognizer(),
                gateway=repo,
                scoring=scoring,
                settings=settings,
                question_count=1,
            )
            assert await live.begin()
            assert await live.start_answer()
            live.handle_segment(TranscriptSegment(ANSWER))
            live.stop_answer()
            assert not await live.next_question()
            return decision

        decision = asyncio.run(scenario())
        assert decision is StartDecision.STARTED

        interview = launched[0]
        assert interview.is_complete
        assert "Interview session saved!" in interview.notify.messages("success")

        sessions = [to_session_record(row) for row in repo.list_interview_sessions(USER)]
        assert len(sessions) == 1
        assert sessions[0].role == ROLE
        assert [q.answer for q in sessions[0].questions] == [ANSWER, "enough"]
        assert len(repo.list_interview_responses(USER)) == 2

        live_mocks = [to_live_mock_record(row) for row in repo.list_live_mocks(USER)]
        assert len(live_mocks) == 1
        assert live_mocks[0].spoken_answer_feedback is not None
        assert repo.get_interview_settings(USER).question_count == 1

        review = generate_candidate_review(
            sessions,
            live_mocks,
            [to_resume_record(row) for row in repo.list_resumes(USER)],
            scoring,
            user_id=USER,
        )
        assert review.resume_score == 88
        assert len(review.chatbot_scores) == 2
        assert len(review.live_mock_scores) == 1
