import logging
from collections.abc import Iterable, Iterator
from typing import Optional

from .base_tokenizer import BaseTokenizer
from .byte_level import ByteLevelMapper
from .cache import MergeCache
from .errors import UnknownTokenError, VocabularyIncompleteError
from .merger import BPEMerger
from .pretokenizer import Pretokenizer
from .ranks import RankTable
from .vocabulary import Vocabulary

logger = logging.getLogger(__name__)


class Decoder:
    """
    Token ids -> bytes -> text. No merging is involved on the way back:
    the symbols of the ids are concatenated and mapped back to bytes.
    """

    def __init__(self, vocabulary: Vocabulary, mapper: Optional[ByteLevelMapper] = None):
        self.vocabulary = vocabulary
        self.mapper = mapper or ByteLevelMapper()

    def decode_bytes(self, ids: Iterable[int]) -> bytes:
        if isinstance(ids, (str, bytes)):
            raise TypeError(f"ids must be a sequence of ints, got {type(ids).__name__}")

        symbols = []
        for token_id in ids:
            symbol = self.vocabulary.symbol_of(token_id)
            if symbol is None:
                raise UnknownTokenError(token_id)
            symbols.append(symbol)
        return self.mapper.to_bytes("".join(symbols))

    def decode(self, ids: Iterable[int], errors: str = "replace") -> str:
        """
        Decode ids to text. Ids may split a multi-byte character, so by
        default invalid UTF-8 is replaced with U+FFFD. Pass
        errors="surrogateescape" to get text that re-encodes to the exact
        bytes (the inverse of `Encoder.encode_bytes`).
        """
        return self.decode_bytes(ids).decode("utf-8", errors=errors)


class Encoder(BaseTokenizer):
    """
    GPT-2 style byte-level BPE encoder.

    Pipeline for encode: text -> Pretokenizer chunks -> UTF-8 bytes ->
    byte-level text -> MergeCache / BPEMerger -> Vocabulary ids.

    The vocabulary and rank table are shared read-only; the merge cache is
    the only mutable state and belongs to this encoder unless one is passed
    in explicitly.
    """

    def __init__(
        self,
        vocabulary: Vocabulary,
        ranks: RankTable,
        cache: Optional[MergeCache] = None,
        pretokenizer: Optional[Pretokenizer] = None,
    ):
        self.mapper = ByteLevelMapper()

        missing = vocabulary.missing_byte_symbols(self.mapper)
        if missing:
            raise VocabularyIncompleteError(missing)

        if cache is not None and cache.merger.ranks is not ranks:
            raise ValueError("MergeCache was built for a different RankTable")

        self.vocabulary = vocabulary
        self.ranks = ranks
        self.pretokenizer = pretokenizer or Pretokenizer()
        self.cache = cache if cache is not None else MergeCache(BPEMerger(ranks))
        self._decoder = Decoder(vocabulary, self.mapper)

        logger.debug(
            "Encoder ready: %d tokens, %d merges", len(vocabulary), len(ranks)
        )

    @property
    def decoder(self) -> Decoder:
        return self._decoder

    @property
    def vocab_size(self) -> int:
        return len(self.vocabulary)

    # ------------------------------------
    # Encoding
    # ------------------------------------
    def _to_ids(self, symbols) -> list[int]:
        ids = []
        for symbol in symbols:
            idx = self.vocabulary.id_of(symbol)
            if idx is None:
                raise VocabularyIncompleteError([symbol])
            ids.append(idx)
        return ids

    def _chunk_bytes(self, chunk: str, errors: str) -> bytes:
        try:
            return chunk.encode("utf-8", errors=errors)
        except UnicodeEncodeError as e:
            raise ValueError(
                f"Text contains a lone surrogate {chunk[e.start:e.end]!r} at chunk {chunk!r} "
                "and is not valid Unicode; use encode_bytes for raw bytes"
            ) from e

    def _encode_text(self, text: str, errors: str) -> list[int]:
        ids = []
        for chunk in self.pretokenizer.iter_chunks(text):
            data = self._chunk_bytes(chunk, errors)
            symbols = self.cache.get_or_compute(self.mapper.to_text(data))
            ids.extend(self._to_ids(symbols))
        return ids

    def encode(self, text: str) -> list[int]:
        """
        Encode text to token ids.

        Raises TypeError for non-str input and ValueError if the text holds
        lone surrogates (e.g. from a surrogateescape decode). Raw or invalid
        UTF-8 input goes through encode_bytes instead.
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be str, got {type(text).__name__}; use encode_bytes for bytes")
        return self._encode_text(text, "strict")

    def encode_bytes(self, data: bytes) -> list[int]:
        """
        Encode raw bytes, which need not be valid UTF-8.

        Valid UTF-8 input gives the same ids as encode(data.decode()).
        Invalid bytes still get byte-level tokens, and
        decode_bytes(encode_bytes(data)) == data always holds.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"data must be bytes-like, got {type(data).__name__}")
        # surrogateescape maps every chunk back to the exact raw bytes it came from
        return self._encode_text(bytes(data).decode("utf-8", errors="surrogateescape"), "surrogateescape")

    def encode_iterable(self, texts: Iterable[str]) -> Iterator[int]:
        """
        Lazily encode an iterable of strings such as an open text file.
        Each item is pretokenized on its own, so the ids equal those of
        calling encode on every item in turn.
        """
        for text in texts:
            yield from self.encode(text)

    def encode_with_trace(self, text: str) -> list[dict]:
        """Same as encode, but returns every intermediate step per chunk."""
        parts = []
        for chunk in self.pretokenizer.iter_chunks(text):
            data = self._chunk_bytes(chunk, "strict")
            translated = self.mapper.to_text(data)
            symbols = self.cache.get_or_compute(translated)
            parts.append({
                "chunk": chunk,
                "chunk_bytes": data,
                "translated": translated,
                "symbols": list(symbols),
                "ids": self._to_ids(symbols),
            })
        return parts

    # ------------------------------------
    # Decoding
    # ------------------------------------
    def decode(self, ids: Iterable[int], errors: str = "replace") -> str:
        return self._decoder.decode(ids, errors=errors)

    def decode_bytes(self, ids: Iterable[int]) -> bytes:
        return self._decoder.decode_bytes(ids)

    def __repr__(self):
        return (
            f"Encoder(vocab_size={self.vocab_size}, "
            f"num_merges={len(self.ranks)}, cached_chunks={len(self.cache)})"
        )
