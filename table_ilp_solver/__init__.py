"""
TableIlp - table retrieval and alignment scoring for multiple-choice questions
"""

__version__ = '0.1.0'

from .config import TableParams, IlpParams, SolverParams, SolverConfig
from .exceptions import (
    TableIlpError,
    ConfigurationError,
    MissingDependencyError,
    EntailmentServiceError,
)
from .models import (
    Table,
    TableCandidate,
    Question,
    MultipleChoiceSelection,
    SolverRequest,
    SolverResponse,
    SolverAnswer,
    IlpSolution,
)
from .services import (
    KeywordTokenizer,
    AlignmentFunction,
    TableInterface,
    TableIlpSolver,
)

__all__ = [
    '__version__',
    'TableParams',
    'IlpParams',
    'SolverParams',
    'SolverConfig',
    'TableIlpError',
    'ConfigurationError',
    'MissingDependencyError',
    'EntailmentServiceError',
    'Table',
    'TableCandidate',
    'Question',
    'MultipleChoiceSelection',
    'SolverRequest',
    'SolverResponse',
    'SolverAnswer',
    'IlpSolution',
    'KeywordTokenizer',
    'AlignmentFunction',
    'TableInterface',
    'TableIlpSolver',
]
