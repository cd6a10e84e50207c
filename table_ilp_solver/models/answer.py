"""
Models for solver answers and optimizer solutions
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .question import MultipleChoiceSelection


@dataclass(frozen=True)
class IlpSolution:
    """
    What the optimizer reports back for one question

    has_solution is False when the model was infeasible or not solved; the
    remaining fields then hold whatever the optimizer defaulted to.
    """
    best_choice: int
    best_choice_score: float
    trace: Dict[str, Any] = field(default_factory=dict)
    has_solution: bool = True


@dataclass(frozen=True)
class SimpleAnswer:
    """An answer before provenance is attached"""
    selection: MultipleChoiceSelection
    score: float
    analysis: Optional[Dict[str, Any]] = None
    features: Optional[Dict[str, float]] = None


@dataclass(frozen=True)
class Analysis:
    """Provenance of an answer: which component produced it and why"""
    component_id: str
    confidence: Optional[float] = None
    analysis: Dict[str, Any] = field(default_factory=dict)
    features: Optional[Dict[str, float]] = None


@dataclass(frozen=True)
class SolverAnswer:
    selection: MultipleChoiceSelection
    analysis: Analysis

    @property
    def score(self) -> float:
        return self.analysis.confidence if self.analysis.confidence is not None else 0.0


@dataclass(frozen=True)
class SolverResponse:
    solver: str
    answers: List[SolverAnswer] = field(default_factory=list)

    def best_answer(self) -> Optional[SolverAnswer]:
        return self.answers[0] if self.answers else None


def sort_answers(answers: List[SolverAnswer]) -> List[SolverAnswer]:
    """Order answers by score, highest first (stable for ties)"""
    return sorted(answers, key=lambda answer: -answer.score)
