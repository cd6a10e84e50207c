"""
Models for the TableIlp solver
"""

from .table import (
    Table,
    TableCandidate,
    AllowedColumnAlignment,
    InterColumnRelation,
    RelationPattern,
)
from .question import MultipleChoiceSelection, Question, SolverRequest
from .answer import IlpSolution, SimpleAnswer, Analysis, SolverAnswer, SolverResponse, sort_answers

__all__ = [
    'Table',
    'TableCandidate',
    'AllowedColumnAlignment',
    'InterColumnRelation',
    'RelationPattern',
    'MultipleChoiceSelection',
    'Question',
    'SolverRequest',
    'IlpSolution',
    'SimpleAnswer',
    'Analysis',
    'SolverAnswer',
    'SolverResponse',
    'sort_answers',
]
