"""
Solver Service - answers multiple-choice questions with knowledge tables

Pipeline per question:
1. pick candidate tables (TableInterface)
2. hand tables + an AlignmentFunction to the optimizer (in a worker thread)
3. turn the optimizer's best choice into one answer per option
4. if nothing came out and a fallback solver is configured, ask it instead

Public API:
- solve(request) -> SolverResponse (async)
- handle_question(question) -> List[SimpleAnswer] (async)
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from .alignment_service import AlignmentFunction
from .cache_service import SimilarityCache
from .entailment_service import EntailmentService
from .table_service import TableInterface
from .tokenizer_service import Tokenizer
from .vector_service import WordVectorModel
from .. import __version__
from ..config import IlpParams, SolverParams
from ..exceptions import MissingDependencyError
from ..models.answer import (
    IlpSolution,
    SimpleAnswer,
    Analysis,
    SolverAnswer,
    SolverResponse,
    sort_answers,
)
from ..models.question import MultipleChoiceSelection, Question, SolverRequest
from ..models.table import TableCandidate

logger = logging.getLogger(__name__)

FALLBACK_FEATURE = "fallbackSolverUsed"
ILP_SOLUTION_KEY = "ilpSolution"


class Optimizer(ABC):
    """Builds and solves the optimization model for one question"""

    @abstractmethod
    def solve(self, question: Question, tables: List[TableCandidate],
              aligner: AlignmentFunction) -> IlpSolution:
        """
        Build a model over the candidate tables and solve it

        Blocking; the solver runs it in a worker thread.
        """
        pass


class FallbackSolver(ABC):
    """Another solver that gets the question when this one has no answer"""

    @abstractmethod
    async def solve(self, request: SolverRequest) -> SolverResponse:
        pass


class TableIlpSolver:
    """
    Answers multiple-choice questions by aligning them against knowledge tables
    and letting an optimizer pick the best inference chain
    """

    name = "TableIlp"
    default_score = 0.0

    def __init__(
        self,
        table_interface: TableInterface,
        tokenizer: Tokenizer,
        optimizer: Optimizer,
        ilp_params: Optional[IlpParams] = None,
        solver_params: Optional[SolverParams] = None,
        entailment_service: Optional[EntailmentService] = None,
        fallback_solver: Optional[FallbackSolver] = None,
        similarity_cache: Optional[SimilarityCache] = None,
        word_vector_model: Optional[WordVectorModel] = None
    ):
        """
        Initialize the solver

        Args:
            table_interface: Loaded tables and ranker
            tokenizer: Stemmed keyword tokenizer
            optimizer: Model builder/solver
            ilp_params: Alignment parameters (defaults to IlpParams())
            solver_params: Orchestration switches (defaults to SolverParams())
            entailment_service: Needed by the Entailment alignment type
            fallback_solver: Needed when use_fallback_solver is set
            similarity_cache: Optional cache shared by all questions
            word_vector_model: Needed by the Word2Vec alignment type

        Raises:
            ConfigurationError: If the alignment type is not recognized
            MissingDependencyError: If use_fallback_solver is set without a fallback solver,
                or the alignment type's collaborator is missing
        """
        self.table_interface = table_interface
        self.tokenizer = tokenizer
        self.optimizer = optimizer
        self.ilp_params = ilp_params or IlpParams()
        self.solver_params = solver_params or SolverParams()
        self.entailment_service = entailment_service
        self.fallback_solver = fallback_solver
        self.similarity_cache = similarity_cache
        self.word_vector_model = word_vector_model

        if self.solver_params.use_fallback_solver and fallback_solver is None:
            raise MissingDependencyError("fallback solver", "use_fallback_solver")

        # Vectors and the Redis client are loaded here once; the aligner is
        # read-only apart from its cache and is shared by all questions.
        self.aligner = AlignmentFunction.from_params(
            self.ilp_params,
            tokenizer,
            entailment_service=entailment_service,
            similarity_cache=similarity_cache,
            word_vector_model=word_vector_model,
        )

    @property
    def component_id(self) -> str:
        return f"{self.name}-{__version__}"

    async def solve(self, request: SolverRequest) -> SolverResponse:
        """
        Answer a request, calling the fallback solver if this solver has no answer

        Exceptions raised while answering propagate; they never trigger the fallback.
        """
        simple_answers = await self.handle_question(request.question)
        complete_answers = [
            SolverAnswer(
                answer.selection,
                Analysis(self.component_id, answer.score, answer.analysis or {}, answer.features)
            )
            for answer in simple_answers
        ]

        if not complete_answers and self.solver_params.use_fallback_solver:
            return await self._solve_with_fallback(request)

        response = SolverResponse(self.component_id, sort_answers(complete_answers))
        best = response.best_answer()
        if best is not None:
            logger.info(f"Best answer: ({best.selection.key}) {best.selection.focus} score={best.score}")
        return response

    async def _solve_with_fallback(self, request: SolverRequest) -> SolverResponse:
        logger.info("No answer from TableIlp, calling fallback solver")
        response = await self.fallback_solver.solve(request)
        if self.solver_params.use_fallback_solver_component_id:
            component_id = response.solver
        else:
            component_id = self.component_id

        features = {FALLBACK_FEATURE: 1.0}
        return SolverResponse(component_id, [
            SolverAnswer(
                answer.selection,
                Analysis(component_id, answer.analysis.confidence, answer.analysis.analysis, dict(features))
            )
            for answer in response.answers
        ])

    async def handle_question(self, question: Question) -> List[SimpleAnswer]:
        """
        Answer one question

        Returns an empty list for questions that aren't multiple choice, have no
        text, or have no solution when fail_on_unanswered_questions is set.
        """
        if not question.is_multiple_choice or not question.text:
            return []
        # The optimizer blocks; run it off the event loop.
        return await asyncio.to_thread(self._answer_question, question)

    def _answer_question(self, question: Question) -> List[SimpleAnswer]:
        logger.info(f"Question: {question.raw_question}")
        tables = self.table_interface.get_tables_for_question(question.raw_question)
        solution = self.optimizer.solve(question, tables, self.aligner)

        if self.solver_params.fail_on_unanswered_questions and not solution.has_solution:
            logger.info("No solution found for question")
            return []

        logger.debug(f"ILP solution: {solution.trace}")
        return self._make_answers(question, solution)

    def _make_answers(self, question: Question, solution: IlpSolution) -> List[SimpleAnswer]:
        """Best choice with the optimizer's score, every other option with score 0"""
        best_selection = next(
            (s for s in question.selections if s.index == solution.best_choice), None
        )
        if best_selection is None:
            raise ValueError(
                f"Optimizer picked choice {solution.best_choice}, "
                f"question has {len(question.selections)} options"
            )

        best_answer = SimpleAnswer(
            best_selection,
            solution.best_choice_score,
            {ILP_SOLUTION_KEY: solution.trace},
            {FALLBACK_FEATURE: 0.0}
        )
        other_answers = [
            self._default_answer(selection)
            for selection in question.selections
            if selection.index != solution.best_choice
        ]
        return [best_answer] + other_answers

    def _default_answer(self, selection: MultipleChoiceSelection) -> SimpleAnswer:
        return SimpleAnswer(selection, self.default_score, {ILP_SOLUTION_KEY: None})
