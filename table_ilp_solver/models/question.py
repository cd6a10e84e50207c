"""
Models for multiple-choice questions and solver requests
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class MultipleChoiceSelection:
    """One answer option of a question"""
    index: int
    focus: str

    @property
    def key(self) -> str:
        """Option label: A, B, C, ..."""
        return chr(ord('A') + self.index)


@dataclass(frozen=True)
class Question:
    """
    A question as it reaches the solver

    raw_question holds the full text including options; text is the stem only.
    """
    raw_question: str
    text: str
    selections: List[MultipleChoiceSelection] = field(default_factory=list)

    @property
    def is_multiple_choice(self) -> bool:
        return len(self.selections) > 0

    @classmethod
    def from_choices(cls, text: str, choices: List[str]) -> 'Question':
        """
        Build a question from a stem and option texts

        Example:
            >>> q = Question.from_choices("How many legs does a cat have?", ["2", "4"])
            >>> q.raw_question
            'How many legs does a cat have? (A) 2 (B) 4'
        """
        selections = [MultipleChoiceSelection(index=i, focus=c) for i, c in enumerate(choices)]
        options = " ".join(f"({s.key}) {s.focus}" for s in selections)
        raw = f"{text} {options}".strip()
        return cls(raw_question=raw, text=text, selections=selections)


@dataclass(frozen=True)
class SolverRequest:
    """A request for one question"""
    question: Question
