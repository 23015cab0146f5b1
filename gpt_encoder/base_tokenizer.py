class BaseTokenizer:
    """
    Text <-> token id interface implemented by `Encoder`.

    * encode(text) takes a str and returns a list of token ids, each an
      unsigned 32-bit int.
    * decode(ids) is the inverse: decode(encode(text)) == text.
    * vocab_size is the number of distinct ids decode accepts.
    """

    def encode(self, text: str) -> list[int]:
        raise NotImplementedError

    def decode(self, ids: list[int]) -> str:
        raise NotImplementedError

    @property
    def vocab_size(self) -> int:
        raise NotImplementedError
