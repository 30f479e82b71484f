from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class AxisId(str, Enum):
    IE = "IE"  # Internal vs External
    PM = "PM"  # Product vs Market
    TS = "TS"  # Team vs System
    ES = "ES"  # Early vs Scale


class Pole(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str = Field(..., min_length=1, max_length=1)
    label: str


class Axis(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: AxisId
    name: str
    primary: Pole    # first letter in the type code convention, wins ties
    secondary: Pole


class Option(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    axis: AxisId
    question: str
    options: Tuple[Option, Option]


class SecretMentor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    role: str
    comment: str


class TypeDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=4, max_length=4)
    name: str
    short_desc: str
    long_desc: str
    signs: Tuple[str, ...]
    actions: Tuple[str, ...]
    cta_copy: str
    secret_mentor: SecretMentor


class FallbackDefaults(BaseModel):
    model_config = ConfigDict(frozen=True)

    secondary_suffix: Optional[str] = None  # used for codes ending in axis 3/4 secondary poles
    primary_prefix: Optional[str] = None    # used for codes starting with the axis 1 primary pole


class ProblemTypeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    released_at: str
    axes: List[Axis]
    questions: List[Question]
    types: List[TypeDefinition]
    fallback: FallbackDefaults = Field(default_factory=FallbackDefaults)


class FallbackRule(str, Enum):
    EXACT = "exact"
    SECONDARY_SUFFIX = "secondary_suffix"
    PRIMARY_PREFIX = "primary_prefix"
    DEFAULT = "default"


class ResolutionTrace(BaseModel):
    """Everything that went into a single type resolution."""
    model_config = ConfigDict(frozen=True)

    answers: Dict[int, Any]
    axis_poles: Dict[AxisId, str]
    code: str
    rule: FallbackRule
    result: TypeDefinition


# Custom Error Classes
class ContentValidationError(ValueError):
    """Raised when the question bank or type catalog is structurally invalid."""
    pass

class InvalidSubmissionError(ValueError):
    """Raised in strict mode when a submitted pole is not one of the question's options."""
    pass
