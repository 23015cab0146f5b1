from collections.abc import Iterator

from .ranks import RankTable


class BPEMerger:
    """
    Applies the merge table to one byte-level chunk.

    Each round picks the adjacent pair with the lowest rank anywhere in the
    chunk (not the leftmost mergeable pair) and joins its leftmost
    occurrence. Rounds repeat until one symbol is left or no adjacent pair
    has a rank. Every round shortens the sequence, so the loop terminates.
    """

    def __init__(self, ranks: RankTable):
        self.ranks = ranks

    def _best_pair_index(self, word: list[str]) -> int:
        # strict '<' keeps the leftmost of equal-rank (i.e. identical) pairs
        best_rank = None
        best_idx = -1
        for i in range(len(word) - 1):
            rank = self.ranks.rank_of(word[i], word[i + 1])
            if rank is not None and (best_rank is None or rank < best_rank):
                best_rank = rank
                best_idx = i
        return best_idx

    def merge_trace(self, chunk: str) -> Iterator[tuple[str, ...]]:
        """
        Yield the symbol sequence before the first merge and after every
        merge. The last value yielded is the result of `merge`.
        """
        word = list(chunk)
        yield tuple(word)
        while len(word) > 1:
            i = self._best_pair_index(word)
            if i < 0:
                break
            word[i:i + 2] = [word[i] + word[i + 1]]
            yield tuple(word)

    def merge(self, chunk: str) -> tuple[str, ...]:
        word = ()
        for word in self.merge_trace(chunk):
            pass
        return word

    def is_fully_merged(self, symbols) -> bool:
        """True if no adjacent pair of `symbols` could still be merged."""
        return all(
            self.ranks.rank_of(a, b) is None for a, b in zip(symbols, symbols[1:])
        )
