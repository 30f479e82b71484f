# services/problem_type_engine/collector.py
# One-question-at-a-time answer collection.

import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .config import settings
from .models import InvalidSubmissionError, Question

logger = logging.getLogger(__name__)

UserAnswers = Dict[int, Any]  # unexpected values are kept and tallied as secondary
CompletionListener = Callable[[UserAnswers], None]


class CollectorPhase(str, Enum):
    IDLE = "idle"
    PRESENTING = "presenting"
    COMPLETED = "completed"


class CollectorState(BaseModel):
    """Immutable snapshot of a collection session."""
    model_config = ConfigDict(frozen=True)

    phase: CollectorPhase = CollectorPhase.IDLE
    index: int = 0
    answers: Dict[int, Any] = Field(default_factory=dict)
    busy_until: float = 0.0  # clock value until which submissions are dropped

    def in_flight(self, now: float) -> bool:
        return now < self.busy_until


# --- Pure transitions ---

def start(state: CollectorState) -> CollectorState:
    if state.phase != CollectorPhase.IDLE:
        return state
    return CollectorState(phase=CollectorPhase.PRESENTING)


def restart() -> CollectorState:
    return CollectorState(phase=CollectorPhase.PRESENTING)


def submit(
    state: CollectorState,
    pole: Any,
    questions: Sequence[Question],
    now: float,
    debounce_seconds: float
) -> CollectorState:
    """
    Records pole for the current question and advances.

    Returns the unchanged state when not presenting, past the last question,
    or while the previous transition is still in flight.
    """
    if state.phase != CollectorPhase.PRESENTING or state.index >= len(questions):
        return state
    if state.in_flight(now):
        return state

    question = questions[state.index]
    answers = {**state.answers, question.id: pole}
    busy_until = now + debounce_seconds

    if state.index + 1 < len(questions):
        return CollectorState(
            phase=CollectorPhase.PRESENTING,
            index=state.index + 1,
            answers=answers,
            busy_until=busy_until,
        )
    return CollectorState(
        phase=CollectorPhase.COMPLETED,
        index=state.index,
        answers=answers,
        busy_until=busy_until,
    )


class AnswerCollector:
    """
    Drives the pure transitions with a clock and tells a listener when the
    answer set is complete.
    """
    def __init__(
        self,
        questions: Sequence[Question],
        on_complete: Optional[CompletionListener] = None,
        debounce_seconds: Optional[float] = None,
        strict: Optional[bool] = None,
        clock: Callable[[], float] = time.monotonic,
        auto_start: bool = True,
    ):
        if not questions:
            raise ValueError("AnswerCollector needs at least one question.")
        self.questions = tuple(questions)
        self.on_complete = on_complete
        self.debounce_seconds = settings.debounce_seconds if debounce_seconds is None else debounce_seconds
        self.strict = settings.strict_poles if strict is None else strict
        self._clock = clock
        self._state = CollectorState()
        if auto_start:
            self.start()

    @property
    def state(self) -> CollectorState:
        return self._state

    @property
    def phase(self) -> CollectorPhase:
        return self._state.phase

    @property
    def answers(self) -> UserAnswers:
        return dict(self._state.answers)

    @property
    def is_complete(self) -> bool:
        return self._state.phase == CollectorPhase.COMPLETED

    @property
    def current_question(self) -> Optional[Question]:
        if self._state.phase != CollectorPhase.PRESENTING:
            return None
        return self.questions[self._state.index]

    @property
    def progress(self) -> float:
        """Percent shown by a progress bar: counts the question on screen."""
        if self._state.phase == CollectorPhase.COMPLETED:
            return 100.0
        if self._state.phase == CollectorPhase.IDLE:
            return 0.0
        return (self._state.index + 1) / len(self.questions) * 100

    def start(self) -> None:
        self._state = start(self._state)

    def restart(self) -> None:
        """Drops all progress and goes back to the first question."""
        self._state = restart()
        logger.debug("Answer collection restarted")

    def submit(self, pole: Any) -> bool:
        """
        Answers the current question. Returns False if the call was ignored
        (not presenting, already complete, or inside the debounce window).
        """
        previous = self._state
        candidate = submit(previous, pole, self.questions, self._clock(), self.debounce_seconds)
        if candidate is previous:
            logger.debug(f"Ignored submission '{pole}' in phase {previous.phase.value}")
            return False

        if self.strict:
            question = self.questions[previous.index]
            allowed = [option.value for option in question.options]
            if pole not in allowed:
                raise InvalidSubmissionError(
                    f"Invalid answer '{pole}' for question {question.id}. Expected one of {allowed}."
                )

        self._state = candidate
        if self._state.phase == CollectorPhase.COMPLETED:
            logger.info(f"Answer collection completed with {len(self._state.answers)} answers")
            if self.on_complete is not None:
                self.on_complete(self.answers)
        return True
