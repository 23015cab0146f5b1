from collections.abc import Iterator

import regex as re

# Contractions, then optional-space-prefixed letter / number / symbol runs,
# then whitespace. `\s+(?!\S)` stops one short of the next word so that the
# last space of a run is picked up by ' ?\p{L}+' and friends.
GPT2_PATTERN = r"""'s|'t|'re|'ve|'m|'ll|'d| ?\p{L}+| ?\p{N}+| ?[^\s\p{L}\p{N}]+|\s+(?!\S)|\s+"""


class Pretokenizer:
    """
    Splits text into the chunks that are merged independently.

    The split is a partition: "".join(split(text)) == text for every text.
    """

    def __init__(self, pattern: str = GPT2_PATTERN):
        self.pattern = pattern
        self._regex = re.compile(pattern)

    def iter_chunks(self, text: str) -> Iterator[str]:
        pos = 0
        for m in self._regex.finditer(text):
            start, end = m.span()
            if start == end:
                continue
            # anything the pattern skipped goes out one character at a time
            yield from text[pos:start]
            yield m.group()
            pos = end
        yield from text[pos:]

    def split(self, text: str) -> list[str]:
        return list(self.iter_chunks(text))

    def __repr__(self):
        return f"Pretokenizer(pattern={self.pattern!r})"
