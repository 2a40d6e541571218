"""
Per-tag statistics and the tag-name keyed collection of them.

Both types are accumulators with a merge operation that is commutative and
associative, with the zero-valued instance as identity. Merging only reads
its operand; a caller that no longer needs the operand simply drops it.
"""

from dataclasses import dataclass
from typing import Dict, ItemsView, Iterable, Iterator, List, Optional

from .ranking import top_k_by_ratio, words_per_question


@dataclass
class TagStat:
    """Question and word counters for one tag."""
    question_count: int = 0
    word_count: int = 0

    @classmethod
    def from_appearance(cls, word_count: int) -> "TagStat":
        """Stat for a tag seen for the first time, in a question of word_count words."""
        return cls(question_count=1, word_count=word_count)

    def add_appearance(self, word_count: int) -> None:
        self.question_count += 1
        self.word_count += word_count

    def merge(self, other: "TagStat") -> "TagStat":
        self.question_count += other.question_count
        self.word_count += other.word_count
        return self

    def copy(self) -> "TagStat":
        return TagStat(self.question_count, self.word_count)

    def ratio(self) -> float:
        return words_per_question(self.word_count, self.question_count)

    def to_dict(self) -> Dict[str, int]:
        return {"questions": self.question_count, "words": self.word_count}


class TagStatSet:
    """
    Mapping from tag name to TagStat.

    Tag names are case-sensitive and unique. Iteration order follows
    insertion and carries no meaning; use top_k for a defined order.
    """

    def __init__(self, tags: Optional[Dict[str, TagStat]] = None):
        self._tags: Dict[str, TagStat] = {}
        if tags:
            for tag, stat in tags.items():
                self._tags[tag] = stat.copy()

    def add_tags(self, tags: Iterable[str], word_count: int) -> None:
        """
        Record one question carrying the given tags.

        A tag repeated within the same question counts once per repetition.
        """
        for tag in tags:
            stat = self._tags.get(tag)
            if stat is None:
                self._tags[tag] = TagStat.from_appearance(word_count)
            else:
                stat.add_appearance(word_count)

    def merge(self, other: "TagStatSet") -> "TagStatSet":
        """Union of keys, summing stats on collision. `other` is left untouched."""
        for tag, other_stat in other.items():
            stat = self._tags.get(tag)
            if stat is None:
                self._tags[tag] = other_stat.copy()
            else:
                stat.merge(other_stat)
        return self

    def copy(self) -> "TagStatSet":
        return TagStatSet(self._tags)

    def top_k(self, k: int) -> List[str]:
        """Names of the k tags with the most words per question."""
        return top_k_by_ratio(
            ((tag, stat.ratio()) for tag, stat in self._tags.items()), k
        )

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {tag: stat.to_dict() for tag, stat in self._tags.items()}

    def get(self, tag: str) -> Optional[TagStat]:
        return self._tags.get(tag)

    def items(self) -> ItemsView[str, TagStat]:
        return self._tags.items()

    def __getitem__(self, tag: str) -> TagStat:
        return self._tags[tag]

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagStatSet):
            return NotImplemented
        return self._tags == other._tags

    def __repr__(self) -> str:
        return f"TagStatSet({self._tags!r})"
