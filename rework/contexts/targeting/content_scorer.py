"""
Achievement Content Scoring

Heuristic relevance proxy used to decide which achievement bullets survive
when a job has more bullets than the template allows. The score is a pure,
non-negative integer computed from surface features of the text:

- Domain/action keywords (technology names, "led", "built", "improved", ...)
- A quantitative signal (percentage, dollar amount, user count, large number),
  weighted above any single keyword
- Strong action verbs ("achieved", "delivered", "optimized", ...)

This is not semantic understanding. The scorer only ranks strings, so it can
be replaced by a real NLP model without touching any geometry code.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence, Tuple

DOMAIN_KEYWORDS = (
    "react",
    "node",
    "javascript",
    "python",
    "aws",
    "api",
    "database",
    "led",
    "managed",
    "built",
    "created",
    "developed",
    "improved",
    "increased",
)

ACTION_VERBS = ("achieved", "delivered", "exceeded", "optimized", "streamlined")


@dataclass(frozen=True)
class MetricPatterns:
    """Regex patterns that count as a quantitative signal."""

    PERCENTAGE = r"\d+(?:\.\d+)?\s?%"
    DOLLAR_AMOUNT = r"\$\s?\d[\d,]*(?:\.\d+)?\s?[kmb]?"
    USER_COUNT = r"\d[\d,]*\+?\s+(?:users|customers|clients|people|engineers)"
    SUFFIXED_NUMBER = r"\b\d+(?:\.\d+)?[km]\b"
    LARGE_NUMBER = r"\b(?:\d{1,3}(?:,\d{3})+|\d{3,})\b"

    def combined(self) -> Pattern:
        alternatives = (
            self.PERCENTAGE,
            self.DOLLAR_AMOUNT,
            self.USER_COUNT,
            self.SUFFIXED_NUMBER,
            self.LARGE_NUMBER,
        )
        return re.compile("|".join(f"(?:{alt})" for alt in alternatives), re.IGNORECASE)


@dataclass(frozen=True)
class ScoringWeights:
    """
    Points awarded per signal.

    Attributes:
        keyword: Per distinct domain keyword present
        metric: Once, if any quantitative signal is present
        action_verb: Per distinct strong action verb present
    """

    keyword: int = 2
    metric: int = 3
    action_verb: int = 1


def _word_pattern(word: str) -> Pattern:
    # Whole word plus simple inflections: "api" matches "APIs", not "capital"
    return re.compile(rf"\b{re.escape(word)}(?:s|es|d|ed|ing)?\b", re.IGNORECASE)


class ContentScorer:
    """
    Scores achievement text and selects the highest-scoring items.

    Attributes:
        weights: Points per signal
        keywords: Domain/action keywords
        action_verbs: Strong action verbs
    """

    def __init__(
        self,
        weights: Optional[ScoringWeights] = None,
        keywords: Sequence[str] = DOMAIN_KEYWORDS,
        action_verbs: Sequence[str] = ACTION_VERBS,
    ):
        self.weights = weights or ScoringWeights()
        self.keywords = tuple(keywords)
        self.action_verbs = tuple(action_verbs)
        self._keyword_patterns = [_word_pattern(word) for word in self.keywords]
        self._verb_patterns = [_word_pattern(word) for word in self.action_verbs]
        self._metric_pattern = MetricPatterns().combined()

    def score(self, text: str) -> int:
        """
        Score a single achievement string.

        Args:
            text: Achievement text (opaque; may be empty)

        Returns:
            Non-negative integer score

        Example:
            >>> ContentScorer().score("Led migration that cut costs by 30%")
            5
        """
        if not text:
            return 0

        total = 0
        total += self.weights.keyword * sum(1 for p in self._keyword_patterns if p.search(text))
        if self._metric_pattern.search(text):
            total += self.weights.metric
        total += self.weights.action_verb * sum(1 for p in self._verb_patterns if p.search(text))
        return total

    def rank(self, items: Sequence[str]) -> List[Tuple[int, str]]:
        """
        Rank items by score descending; ties keep their original order.

        Returns:
            (score, text) pairs, best first
        """
        indexed = [(self.score(text), index, text) for index, text in enumerate(items)]
        indexed.sort(key=lambda entry: (-entry[0], entry[1]))
        return [(score, text) for score, _, text in indexed]

    def select_top(self, items: Sequence[str], n: int) -> List[str]:
        """
        Select the n highest-scoring items (stable for equal scores).

        Args:
            items: Candidate strings
            n: Number to keep; n <= 0 keeps nothing

        Returns:
            Up to n items, best first
        """
        if n <= 0 or not items:
            return []
        return [text for _, text in self.rank(items)[:n]]


_default_scorer = ContentScorer()


def score(text: str) -> int:
    """Score text with the default weights and keyword lists."""
    return _default_scorer.score(text)


def select_top(items: Sequence[str], n: int) -> List[str]:
    """Select the n highest-scoring items with the default scorer."""
    return _default_scorer.select_top(items, n)
