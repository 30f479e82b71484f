from .collector import AnswerCollector, CollectorPhase, CollectorState
from .engine import ProblemTypeEngine, get_engine
from .models import (
    ContentValidationError,
    InvalidSubmissionError,
    Question,
    ResolutionTrace,
    TypeDefinition,
)
from .session import QuizSession, create_session

__all__ = [
    "AnswerCollector",
    "CollectorPhase",
    "CollectorState",
    "ContentValidationError",
    "InvalidSubmissionError",
    "ProblemTypeEngine",
    "Question",
    "QuizSession",
    "ResolutionTrace",
    "TypeDefinition",
    "create_session",
    "get_engine",
]
