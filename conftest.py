"""
Shared fixtures and fakes for the TableIlp tests
"""

import re
from typing import List

import pytest

from table_ilp_solver.models import Table, IlpSolution, SolverRequest, SolverResponse
from table_ilp_solver.services import Tokenizer, EntailmentService, EntailmentResult
from table_ilp_solver.services.solver_service import Optimizer, FallbackSolver


class SimpleTokenizer(Tokenizer):
    """Deterministic tokenizer: lowercase words, a few stop words, plural 's' stripped"""

    STOPWORDS = {'how', 'many', 'does', 'do', 'a', 'an', 'the', 'have', 'has',
                 'is', 'are', 'of', 'what', 'which', 'to', 'in'}

    def stemmed_keyword_tokenize(self, text: str) -> List[str]:
        tokens = []
        for word in re.findall(r'\w+', text.lower()):
            if word in self.STOPWORDS:
                continue
            if len(word) > 3 and word.endswith('s'):
                word = word[:-1]
            tokens.append(word)
        return tokens


class FakeEntailmentService(EntailmentService):
    """1.0 when every hypothesis token is in the premise, 0.1 otherwise; records calls"""

    def __init__(self):
        self.calls = []

    def entail(self, text1: List[str], text2: List[str]) -> EntailmentResult:
        self.calls.append((list(text1), list(text2)))
        entailed = bool(text2) and all(token in text1 for token in text2)
        return EntailmentResult(confidence=1.0 if entailed else 0.1)


class FakeOptimizer(Optimizer):
    """Returns a fixed solution and records what it was given"""

    def __init__(self, solution: IlpSolution = None, error: Exception = None):
        self.solution = solution
        self.error = error
        self.calls = []

    def solve(self, question, tables, aligner) -> IlpSolution:
        self.calls.append((question, tables, aligner))
        if self.error is not None:
            raise self.error
        return self.solution


class FakeFallbackSolver(FallbackSolver):
    """Returns a canned response and records requests"""

    def __init__(self, response: SolverResponse):
        self.response = response
        self.requests: List[SolverRequest] = []

    async def solve(self, request: SolverRequest) -> SolverResponse:
        self.requests.append(request)
        return self.response


@pytest.fixture
def tokenizer():
    return SimpleTokenizer()


@pytest.fixture
def animal_tables(tokenizer):
    """Three small tables: legs per animal, moons per planet, food per animal"""
    return [
        Table.from_rows("animals.csv", [["Animal", "Legs"], ["cat", "4"], ["bird", "2"]], tokenizer),
        Table.from_rows("planets.csv", [["Planet", "Moons"], ["earth", "1"], ["mars", "2"]], tokenizer),
        Table.from_rows("food.csv", [["Animal", "Food"], ["cat", "fish"], ["cow", "grass"]], tokenizer),
    ]


@pytest.fixture
def entailment_service():
    return FakeEntailmentService()
