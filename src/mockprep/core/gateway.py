from __future__ import annotations

import inspect
from typing import Any, Protocol

from mockprep.types import (
    InterviewResponse,
    InterviewSessionRecord,
    InterviewSettings,
    LiveMockRecord,
    QuizResult,
    ResumeRecord,
)


class SessionGateway(Protocol):
    """The slice of the persistence gateway the session launchers write to."""

    def get_latest_resume(self, user_id: str) -> ResumeRecord | None:
        ...

    def save_interview_session(self, record: InterviewSessionRecord) -> Any:
        ...

    def add_interview_response(self, user_id: str, response: InterviewResponse) -> Any:
        ...

    def save_live_mock(self, record: LiveMockRecord) -> Any:
        ...

    def save_interview_settings(self, user_id: str, settings: InterviewSettings) -> Any:
        ...

    def save_quiz_result(self, result: QuizResult) -> Any:
        ...


async def resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value
