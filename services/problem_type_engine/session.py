import logging
from typing import Any, Callable, List, Optional

from .collector import AnswerCollector, CompletionListener, UserAnswers
from .engine import ProblemTypeEngine, get_engine
from .logging_config import setup_logging
from .models import ResolutionTrace, TypeDefinition

logger = logging.getLogger(__name__)

ResultListener = Callable[[TypeDefinition], None]


class QuizSession:
    """
    One person's run through the quiz: collects answers and resolves the
    problem type as soon as the last answer lands.
    """
    def __init__(
        self,
        engine: ProblemTypeEngine,
        on_result: Optional[ResultListener] = None,
        **collector_options
    ):
        self.engine = engine
        self.on_result = on_result
        self.trace: Optional[ResolutionTrace] = None
        # A caller-supplied completion listener still sees the raw answers
        self.on_answers: Optional[CompletionListener] = collector_options.pop("on_complete", None)
        self.collector = AnswerCollector(
            engine.questions,
            on_complete=self._handle_complete,
            **collector_options
        )

    @property
    def result(self) -> Optional[TypeDefinition]:
        return self.trace.result if self.trace else None

    def submit(self, pole: Any) -> bool:
        return self.collector.submit(pole)

    def restart(self) -> None:
        self.trace = None
        self.collector.restart()

    def other_types(self) -> List[TypeDefinition]:
        if self.result is None:
            return []
        return self.engine.other_types(self.result)

    def _handle_complete(self, answers: UserAnswers) -> None:
        if self.on_answers is not None:
            self.on_answers(dict(answers))
        self.trace = self.engine.evaluate(answers)
        logger.info(f"Resolved code {self.trace.code} to type {self.trace.result.code} ({self.trace.rule.value})")
        if self.on_result is not None:
            self.on_result(self.trace.result)


def create_session(on_result: Optional[ResultListener] = None, **collector_options) -> QuizSession:
    """Builds a session on the process-wide engine, configuring logging on first use."""
    setup_logging()
    return QuizSession(get_engine(), on_result=on_result, **collector_options)
