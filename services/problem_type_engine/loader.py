import logging
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from services.problem_type_engine.models import AxisId, ContentValidationError, ProblemTypeConfig

logger = logging.getLogger(__name__)

QUESTIONS_PER_AXIS = 2
CODE_LENGTH = len(AxisId)


def load_content_data(data: Dict[str, Any]) -> ProblemTypeConfig:
    """
    Validates the raw dictionary data against the ProblemTypeConfig model
    and performs the structural checks pydantic cannot express.
    """
    try:
        config = ProblemTypeConfig.model_validate(data)
    except ValidationError as e:
        # Re-raise Pydantic's validation error for schema issues
        raise e

    _validate_axes(config)
    _validate_questions(config)
    _validate_types(config)
    _validate_fallback(config)

    logger.info(
        f"Loaded problem type content v{config.version}: "
        f"{len(config.questions)} questions, {len(config.types)} types"
    )
    return config


def _validate_axes(config: ProblemTypeConfig) -> None:
    axis_ids = [axis.id for axis in config.axes]
    if len(axis_ids) != len(set(axis_ids)):
        duplicate = next(a for a, n in Counter(axis_ids).items() if n > 1)
        raise ContentValidationError(f"Duplicate axis ID found: {duplicate.value}")
    missing = [a.value for a in AxisId if a not in axis_ids]
    if missing:
        raise ContentValidationError(f"Missing axis definitions: {', '.join(missing)}")

    for axis in config.axes:
        if axis.primary.value == axis.secondary.value:
            raise ContentValidationError(
                f"Axis '{axis.id.value}' must have two distinct poles, got '{axis.primary.value}' twice"
            )


def _validate_questions(config: ProblemTypeConfig) -> None:
    axes = {axis.id: axis for axis in config.axes}

    question_ids = set()
    for question in config.questions:
        if question.id in question_ids:
            raise ContentValidationError(f"Duplicate question ID found: {question.id}")
        question_ids.add(question.id)

        # Option poles must be exactly the two opposite poles of the axis
        axis = axes[question.axis]
        option_values = {option.value for option in question.options}
        if option_values != {axis.primary.value, axis.secondary.value}:
            raise ContentValidationError(
                f"Question {question.id} options {sorted(option_values)} do not match "
                f"axis '{axis.id.value}' poles ['{axis.primary.value}', '{axis.secondary.value}']"
            )

    per_axis = Counter(question.axis for question in config.questions)
    for axis in config.axes:
        if per_axis.get(axis.id, 0) != QUESTIONS_PER_AXIS:
            raise ContentValidationError(
                f"Axis '{axis.id.value}' needs exactly {QUESTIONS_PER_AXIS} questions, "
                f"found {per_axis.get(axis.id, 0)}"
            )


def _validate_types(config: ProblemTypeConfig) -> None:
    if not config.types:
        raise ContentValidationError("Type catalog must contain at least one type")

    # Each code position must carry one of the poles of the axis at that position
    position_poles = [{axis.primary.value, axis.secondary.value} for axis in config.axes]
    codes = set()
    for type_def in config.types:
        if type_def.code in codes:
            raise ContentValidationError(f"Duplicate type code found: {type_def.code}")
        codes.add(type_def.code)

        for position, (letter, poles) in enumerate(zip(type_def.code, position_poles)):
            if letter not in poles:
                raise ContentValidationError(
                    f"Type code '{type_def.code}' has '{letter}' at position {position + 1}, "
                    f"expected one of {sorted(poles)}"
                )


def _validate_fallback(config: ProblemTypeConfig) -> None:
    # A fallback default that names no catalog entry is allowed; resolution
    # then falls through to the first catalog entry.
    for field_name in ("secondary_suffix", "primary_prefix"):
        code = getattr(config.fallback, field_name)
        if code is not None and len(code) != CODE_LENGTH:
            raise ContentValidationError(
                f"Fallback '{field_name}' must be a {CODE_LENGTH}-letter code, got '{code}'"
            )


def load_content_from_file(file_path: Union[str, Path]) -> ProblemTypeConfig:
    """
    Loads the question bank and type catalog from a YAML file, validates it,
    and returns a ProblemTypeConfig object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ContentValidationError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise ContentValidationError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise ContentValidationError(f"YAML file is empty or invalid: {file_path}")

    return load_content_data(data)
