class EncoderError(Exception):
    """Base class for errors raised while encoding or decoding."""


class VocabularyIncompleteError(EncoderError):
    """
    A symbol the merger can produce has no id in the vocabulary.

    This points at a broken vocabulary / merges pair, not at the input text.
    """

    def __init__(self, symbols):
        self.symbols = list(symbols)
        shown = ", ".join(repr(s) for s in self.symbols[:10])
        more = f" (and {len(self.symbols) - 10} more)" if len(self.symbols) > 10 else ""
        super().__init__(f"Vocabulary has no id for {shown}{more}")


class UnknownTokenError(EncoderError, LookupError):
    """A token id passed to decode is not in the vocabulary."""

    def __init__(self, token_id):
        self.token_id = token_id
        super().__init__(f"Unknown token id: {token_id!r}")
