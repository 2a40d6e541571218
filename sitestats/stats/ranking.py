"""
Words-per-question ratio and "chatty" ranking shared by tags and sites.

Ranking is by descending ratio with ties broken by ascending name, so the
same statistics always produce the same order no matter how they were
aggregated. A zero-question entry gets NO_QUESTIONS_RATIO, which ranks
strictly below every real ratio instead of dividing by zero.
"""

import heapq
from typing import Iterable, List, Tuple

NO_QUESTIONS_RATIO = float("-inf")


def words_per_question(word_count: int, question_count: int) -> float:
    """Average words per question, or NO_QUESTIONS_RATIO for zero questions."""
    if question_count == 0:
        return NO_QUESTIONS_RATIO
    return word_count / question_count


def chatty_order_key(item: Tuple[str, float]) -> Tuple[float, str]:
    name, ratio = item
    return (-ratio, name)


def top_k_by_ratio(ratios: Iterable[Tuple[str, float]], k: int) -> List[str]:
    """
    Select the names of the k chattiest entries.

    Uses heap-based selection, O(n log k), over (name, ratio) pairs.

    Args:
        ratios: Iterable of (name, ratio) pairs with unique names
        k: Maximum number of names to return

    Returns:
        Up to k names, highest ratio first, ties by name ascending

    Example:
        >>> top_k_by_ratio([("b", 4.0), ("a", 4.0), ("c", 9.0)], 2)
        ['c', 'a']
    """
    if k <= 0:
        return []
    best = heapq.nsmallest(k, ratios, key=chatty_order_key)
    return [name for name, _ in best]
