"""
Per-site statistics.

A SiteStat is the accumulator of the per-file fold: every decoded question
of the site is added to it, and partial SiteStats built by different
workers over the same file are merged into one.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .question import QuestionStat
from .ranking import words_per_question
from .tag_stat import TagStatSet


@dataclass
class SiteStat:
    """
    Question count, word count and tag breakdown of one site.

    SiteStat(name) with zero counts and no tags is the identity element of
    merge. `name` is None when the site did not come from a named file.
    Counts and tags merge commutatively; the name does not: merge keeps
    its own name and only adopts the operand's when its own is None.
    """
    name: Optional[str] = None
    question_count: int = 0
    word_count: int = 0
    tags: TagStatSet = field(default_factory=TagStatSet)

    def add_question(self, question: QuestionStat) -> None:
        self.question_count += 1
        self.word_count += question.word_count
        self.tags.add_tags(question.tags, question.word_count)

    def merge(self, other: "SiteStat") -> "SiteStat":
        """Sum counts and merge tag sets. `other` is left untouched."""
        if self.name is None:
            self.name = other.name
        self.question_count += other.question_count
        self.word_count += other.word_count
        self.tags.merge(other.tags)
        return self

    def ratio(self) -> float:
        return words_per_question(self.word_count, self.question_count)

    def to_dict(self, top_n: int = 10) -> Dict[str, Any]:
        return {
            "questions": self.question_count,
            "words": self.word_count,
            "tags": self.tags.to_dict(),
            "chatty_tags": self.tags.top_k(top_n),
        }
