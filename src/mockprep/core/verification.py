from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from mockprep.config import Settings, get_settings
from mockprep.core.classifier import suggest_difficulty, suggest_interview_type
from mockprep.core.compatibility import roles_compatible
from mockprep.core.events import EventBus, Notifier
from mockprep.core.resume_signals import extract_resume_signal
from mockprep.core.scoring import ScoringStrategy, get_scoring_strategy
from mockprep.core.suggestions import generate_improvement_suggestions
from mockprep.types import ImprovementSuggestion, InterviewMode, ResumeInput, RoleCategory, VerificationOutcome

logger = logging.getLogger(__name__)

MATCH_NOTICE = "You're applicable for this job!"
MISMATCH_NOTICE = "You're not applicable for this role. Please change your role or upload a matching resume."

Analyzer = Callable[[str, ResumeInput], "VerificationOutcome | Awaitable[VerificationOutcome]"]
StartHandler = Callable[[InterviewMode, str, ResumeInput], Any]


class Gate(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    CHECKING = "checking"
    BLOCKED = "blocked"
    PASSABLE = "passable"
    PASSED = "passed"


class StartDecision(str, Enum):
    STARTED = "started"
    RESUME_REQUIRED = "resume_required"
    BLOCKED = "blocked"
    AWAITING_ACKNOWLEDGEMENT = "awaiting_acknowledgement"
    SUPERSEDED = "superseded"


def run_verification_pipeline(role: str, resume: ResumeInput, scoring: ScoringStrategy) -> VerificationOutcome:
    """Classifier, extractor and compatibility check in one synchronous pass."""
    signal = extract_resume_signal(resume, scoring)
    matched = roles_compatible(signal.detected_role, role)
    suggestions = generate_improvement_suggestions(role, signal.quality_score) if matched else []
    return VerificationOutcome(
        role=role,
        detected_role=signal.detected_role,
        category=signal.category,
        quality_score=signal.quality_score,
        matched=matched,
        suggestions=suggestions,
    )


@dataclass(slots=True)
class VerificationState:
    role: str = ""
    resume: ResumeInput | None = None
    gate: Gate = Gate.IDLE
    detected_role: str = ""
    resume_category: RoleCategory | None = None
    resume_quality: int = 0
    suggestions: list[ImprovementSuggestion] = field(default_factory=list)
    suggested_interview_type: str = ""
    suggested_difficulty: str = ""


@dataclass(slots=True, frozen=True)
class _Snapshot:
    role: str
    resume: ResumeInput


class VerificationOrchestrator:
    """Debounced resume/role verification gate in front of session start.

    Must be driven from a running event loop: edits arm the debounce timer as
    an asyncio task. Edits are accepted in every state; a pipeline run that was
    overtaken by an edit keeps running but its result is thrown away.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        scoring: ScoringStrategy | None = None,
        event_bus: EventBus | None = None,
        channel: str = "",
        analyzer: Analyzer | None = None,
        on_start: StartHandler | None = None,
    ):
        self.settings = settings or get_settings()
        self.scoring = scoring or get_scoring_strategy(self.settings)
        self.notify = Notifier(event_bus, channel, source="verification")
        self.state = VerificationState()
        self.evaluations = 0
        self._analyzer = analyzer or (lambda role, resume: run_verification_pipeline(role, resume, self.scoring))
        self._on_start = on_start
        self._timer: asyncio.Task[None] | None = None
        self._inflight: asyncio.Task[VerificationOutcome | None] | None = None
        self._inflight_snapshot: _Snapshot | None = None
        self._inflight_generation = -1
        self._generation = 0
        self._pending_start: InterviewMode | None = None
        self.gate_history: list[Gate] = [Gate.IDLE]

    @property
    def gate(self) -> Gate:
        return self.state.gate

    @property
    def pending_start(self) -> InterviewMode | None:
        return self._pending_start

    @property
    def prerequisites_met(self) -> bool:
        return bool(self.state.role.strip()) and self.state.resume is not None

    def set_role(self, role: str) -> None:
        if role == self.state.role:
            return
        self.state.role = role
        self.state.suggested_interview_type = suggest_interview_type(role)
        self.state.suggested_difficulty = suggest_difficulty(role)
        self._on_input_changed()

    def set_resume(self, resume: ResumeInput | None) -> None:
        if resume == self.state.resume:
            return
        self.state.resume = resume
        self._on_input_changed()

    async def blur(self) -> VerificationOutcome | None:
        return await self._fast_path()

    async def enter_pressed(self) -> VerificationOutcome | None:
        return await self._fast_path()

    async def evaluate_now(self) -> VerificationOutcome | None:
        """Run the pipeline now; the timer, both fast paths and forced start all land here."""
        if not self.prerequisites_met:
            return None

        self._cancel_timer()
        snapshot = self._snapshot()
        if (
            self._inflight is not None
            and not self._inflight.done()
            and self._inflight_generation == self._generation
            and self._inflight_snapshot == snapshot
        ):
            return await asyncio.shield(self._inflight)

        self._generation += 1
        self._set_gate(Gate.CHECKING)
        self._inflight_generation = self._generation
        self._inflight_snapshot = snapshot
        self._inflight = asyncio.get_running_loop().create_task(self._run(self._generation, snapshot))
        return await asyncio.shield(self._inflight)

    async def acknowledge(self) -> StartDecision | None:
        if self.state.gate is not Gate.PASSABLE:
            raise ValueError(f"cannot acknowledge suggestions while gate is {self.state.gate.value}")

        self._set_gate(Gate.PASSED)
        logger.info("Verification passed role=%r", self.state.role)
        self.notify("success", "Verification complete! You can now start your interview.")
        if self._pending_start is not None:
            return await self._launch(self._pending_start)
        return None

    def change_role(self) -> None:
        self._clear_analysis()
        self.notify("info", "Please update your target role to match your resume")

    def upload_new_resume(self) -> None:
        self.state.resume = None
        self._clear_analysis()
        self.notify("info", "Please upload a new resume that matches your target role")

    async def request_start(self, mode: InterviewMode) -> StartDecision:
        if not self.prerequisites_met:
            if self.state.resume is None:
                self.notify("error", "Resume upload required. Please upload your resume before continuing.")
            else:
                self.notify("error", "Please enter your target role before starting an interview.")
            return StartDecision.RESUME_REQUIRED

        if self.state.gate is Gate.PASSED:
            return await self._launch(mode)

        if self.state.gate not in {Gate.BLOCKED, Gate.PASSABLE}:
            outcome = await self.evaluate_now()
            if outcome is None:
                return StartDecision.SUPERSEDED

        if self.state.gate is Gate.BLOCKED:
            self._pending_start = None
            return StartDecision.BLOCKED

        if self.state.gate is Gate.PASSABLE:
            self._pending_start = mode
            self.notify("info", "Please complete the verification process to continue")
            return StartDecision.AWAITING_ACKNOWLEDGEMENT

        # An edit slipped in while the forced evaluation was running.
        return StartDecision.SUPERSEDED

    def close(self) -> None:
        self._cancel_timer()

    def _on_input_changed(self) -> None:
        self._clear_analysis()
        if self.prerequisites_met:
            self._set_gate(Gate.PENDING)
            self._timer = asyncio.get_running_loop().create_task(self._debounce())

    def _clear_analysis(self) -> None:
        self._cancel_timer()
        self._generation += 1
        self._pending_start = None
        self._set_gate(Gate.IDLE)
        self.state.detected_role = ""
        self.state.resume_category = None
        self.state.resume_quality = 0
        self.state.suggestions = []

    def _set_gate(self, gate: Gate) -> None:
        if gate is self.state.gate:
            return
        logger.debug("Gate %s -> %s role=%r", self.state.gate.value, gate.value, self.state.role)
        self.state.gate = gate
        self.gate_history.append(gate)

    async def _fast_path(self) -> VerificationOutcome | None:
        if not self.prerequisites_met or self.state.gate not in {Gate.IDLE, Gate.PENDING}:
            return None
        return await self.evaluate_now()

    async def _debounce(self) -> None:
        await asyncio.sleep(self.settings.verification_debounce_sec)
        # Detach first so evaluate_now() does not cancel the task it is running in.
        self._timer = None
        await self.evaluate_now()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _snapshot(self) -> _Snapshot:
        if self.state.resume is None:
            raise RuntimeError("cannot evaluate without a resume")
        return _Snapshot(role=self.state.role, resume=self.state.resume)

    def _is_current(self, generation: int, snapshot: _Snapshot) -> bool:
        return (
            generation == self._generation
            and self.state.resume is not None
            and snapshot == self._snapshot()
        )

    async def _run(self, generation: int, snapshot: _Snapshot) -> VerificationOutcome | None:
        self.evaluations += 1
        try:
            result = self._analyzer(snapshot.role, snapshot.resume)
            if inspect.isawaitable(result):
                result = await result
        except Exception:
            logger.exception("Verification pipeline failed role=%r", snapshot.role)
            if self._is_current(generation, snapshot):
                self._set_gate(Gate.IDLE)
                self.notify("error", "Failed to verify resume. Please try again.")
            return None

        if not self._is_current(generation, snapshot):
            logger.info("Discarding stale verification result role=%r", snapshot.role)
            return None

        self.state.detected_role = result.detected_role
        self.state.resume_category = result.category
        self.state.resume_quality = result.quality_score

        if not result.matched:
            self._set_gate(Gate.BLOCKED)
            self.state.suggestions = []
            self._pending_start = None
            logger.info(
                "Verification blocked role=%r detected_role=%r", snapshot.role, result.detected_role
            )
            self.notify("error", MISMATCH_NOTICE, detected_role=result.detected_role)
            return result

        self._set_gate(Gate.PASSABLE)
        self.state.suggestions = list(result.suggestions)
        logger.info(
            "Verification passable role=%r suggestions=%s", snapshot.role, len(result.suggestions)
        )
        self.notify("success", MATCH_NOTICE, suggestion_count=len(result.suggestions))
        return result

    async def _launch(self, mode: InterviewMode) -> StartDecision:
        self._pending_start = None
        if self.state.resume is None:
            raise RuntimeError("cannot start an interview without a resume")
        if self._on_start is not None:
            outcome = self._on_start(mode, self.state.role, self.state.resume)
            if inspect.isawaitable(outcome):
                await outcome
        label = "chatbot" if mode == "chatbot" else "live mock"
        self.notify("success", f"Starting {label} interview...")
        return StartDecision.STARTED
