import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .config import settings
from .loader import load_content_from_file
from .models import (
    AxisId,
    FallbackRule,
    ProblemTypeConfig,
    Question,
    ResolutionTrace,
    TypeDefinition,
)
from .scorer import code_from_answers, compose_code, resolve_axes

logger = logging.getLogger(__name__)


class ProblemTypeEngine:
    """
    Holds the question bank and type catalog and turns a completed answer
    set into a problem type.
    """
    def __init__(self, config: ProblemTypeConfig):
        """
        Args:
            config: A validated ProblemTypeConfig, see loader.load_content_data.
        """
        self.config = config
        self.axes = tuple(config.axes)
        self.questions: Tuple[Question, ...] = tuple(config.questions)
        self._build_lookup_maps()

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "ProblemTypeEngine":
        return cls(load_content_from_file(config_path))

    def _build_lookup_maps(self):
        """Builds read-only lookups for axis questions and the catalog."""
        axis_questions: Dict[AxisId, List[Question]] = {axis.id: [] for axis in self.axes}
        for question in self.questions:
            axis_questions[question.axis].append(question)
        self.axis_questions: Mapping[AxisId, Tuple[Question, ...]] = MappingProxyType(
            {axis_id: tuple(qs) for axis_id, qs in axis_questions.items()}
        )
        # Insertion order matters: the first entry is the ultimate default
        self.catalog: Mapping[str, TypeDefinition] = MappingProxyType(
            {type_def.code: type_def for type_def in self.config.types}
        )
        self.default_type = self.config.types[0]

        # Fallback shapes derived from the axis poles ('SS' suffix, 'I' prefix)
        self.secondary_suffix = self.axes[2].secondary.value + self.axes[3].secondary.value
        self.primary_prefix = self.axes[0].primary.value

    def get_questions(self) -> List[Dict[str, Any]]:
        """
        Returns the question bank as plain dicts for presentation.
        (Does not implement actual presentation logic).
        """
        return [q.model_dump(mode="json") for q in self.questions]

    def resolve_code(self, code: str) -> TypeDefinition:
        return self._resolve_code_with_rule(code)[0]

    def _resolve_code_with_rule(self, code: str) -> Tuple[TypeDefinition, FallbackRule]:
        found = self.catalog.get(code)
        if found is not None:
            return found, FallbackRule.EXACT

        # Ordered fallback chain, first match wins
        if code.endswith(self.secondary_suffix):
            rule = FallbackRule.SECONDARY_SUFFIX
            result = self._catalog_or_default(self.config.fallback.secondary_suffix)
        elif code.startswith(self.primary_prefix):
            rule = FallbackRule.PRIMARY_PREFIX
            result = self._catalog_or_default(self.config.fallback.primary_prefix)
        else:
            rule = FallbackRule.DEFAULT
            result = self.default_type

        logger.info(f"No catalog entry for '{code}', fell back to '{result.code}' via {rule.value}")
        return result, rule

    def _catalog_or_default(self, code: Optional[str]) -> TypeDefinition:
        if code is None:
            return self.default_type
        return self.catalog.get(code, self.default_type)

    def compute_code(self, answers: Mapping[int, Any]) -> str:
        return code_from_answers(self.axes, self.axis_questions, answers)

    def resolve(self, answers: Mapping[int, Any]) -> TypeDefinition:
        """Resolves a completed answer set to its problem type."""
        return self.resolve_code(self.compute_code(answers))

    def evaluate(self, answers: Mapping[int, Any]) -> ResolutionTrace:
        """Same as resolve, but keeps the intermediate poles, code and matched rule."""
        poles = resolve_axes(self.axes, self.axis_questions, answers)
        code = compose_code(list(poles.values()))
        result, rule = self._resolve_code_with_rule(code)
        return ResolutionTrace(
            answers=dict(answers),
            axis_poles=poles,
            code=code,
            rule=rule,
            result=result,
        )

    def other_types(self, type_def: TypeDefinition) -> List[TypeDefinition]:
        """Catalog entries other than type_def, in catalog order."""
        return [t for t in self.catalog.values() if t.code != type_def.code]


@lru_cache(maxsize=1)
def get_engine() -> ProblemTypeEngine:
    """Process-wide engine, loaded once from the configured content file."""
    return ProblemTypeEngine.from_file(settings.content_path)
