"""Pull pronunciation and grammar scores out of turn feedback."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chatterly.domain.practice.entities.learning_turn import LearningTurn


def _mean(values: tuple[float, ...]) -> float:
    return sum(values) / len(values) if values else 0.0


@dataclass(frozen=True)
class ScoreSeries:
    """Scores in turn order, plus their means (0 for an empty series)."""

    pronunciation: tuple[float, ...] = ()
    grammar: tuple[float, ...] = ()

    @property
    def average_pronunciation(self) -> float:
        return _mean(self.pronunciation)

    @property
    def average_grammar(self) -> float:
        return _mean(self.grammar)

    @property
    def overall_average(self) -> float:
        """Mean of both series taken together."""
        return _mean(self.pronunciation + self.grammar)


def extract_scores(turns: Iterable["LearningTurn"]) -> ScoreSeries:
    """
    Collect numeric overall scores from an ordered collection of turns.

    Turns whose feedback is missing or carries no usable score are skipped.
    """
    pronunciation: list[float] = []
    grammar: list[float] = []
    for turn in turns:
        if turn.pronunciation_score is not None:
            pronunciation.append(turn.pronunciation_score)
        if turn.grammar_score is not None:
            grammar.append(turn.grammar_score)
    return ScoreSeries(pronunciation=tuple(pronunciation), grammar=tuple(grammar))
