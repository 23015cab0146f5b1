from collections.abc import Iterable
from types import MappingProxyType
from typing import Optional


class RankTable:
    """
    Merge priorities: (left, right) -> rank, lower ranks merge first.

    Ranks are the positions of the pairs in the merge list, so they are
    unique by construction. The table is read-only once built.
    """

    def __init__(self, ranks: dict[tuple[str, str], int]):
        seen = set()
        for pair, rank in ranks.items():
            if not isinstance(rank, int) or rank < 0:
                raise ValueError(f"Rank for {pair!r} must be a non-negative int, got {rank!r}")
            if rank in seen:
                raise ValueError(f"Rank {rank} is assigned to more than one pair")
            seen.add(rank)
        self._ranks = MappingProxyType(dict(ranks))

    @classmethod
    def from_merges(cls, merges: Iterable[tuple[str, str]]) -> "RankTable":
        ranks = {}
        for rank, (left, right) in enumerate(merges):
            pair = (left, right)
            if pair in ranks:
                raise ValueError(f"Duplicate merge {pair!r} at rank {rank}")
            ranks[pair] = rank
        return cls(ranks)

    def rank_of(self, left: str, right: str) -> Optional[int]:
        return self._ranks.get((left, right))

    def merges(self) -> list[tuple[str, str]]:
        return sorted(self._ranks, key=self._ranks.__getitem__)

    def __contains__(self, pair):
        return pair in self._ranks

    def __len__(self):
        return len(self._ranks)

    def __repr__(self):
        return f"RankTable(num_merges={len(self)})"
