from functools import lru_cache

from .base_tokenizer import BaseTokenizer
from .byte_level import ByteLevelMapper, bytes_to_unicode
from .cache import MergeCache
from .config import ENCODINGS, EncodingConfig, get_encoding_config
from .encoder import Decoder, Encoder
from .errors import EncoderError, UnknownTokenError, VocabularyIncompleteError
from .loader import load_encoder, load_registered
from .merger import BPEMerger
from .pretokenizer import GPT2_PATTERN, Pretokenizer
from .ranks import RankTable
from .vocabulary import Vocabulary


@lru_cache(maxsize=None)
def _registered_encoder(name: str) -> Encoder:
    return load_registered(get_encoding_config(name))


def get_encoder(name: str = "gpt2") -> Encoder:
    """
    Encoder for a registered encoding ("gpt2", "gpt3"). The vocabulary
    files shipped with the package are used, falling back to a one-time
    download into the cache directory. The Encoder, and with it its merge
    cache, is shared by every caller asking for `name`.
    """
    return _registered_encoder(name.lower())


__all__ = [
    "BaseTokenizer",
    "BPEMerger",
    "ByteLevelMapper",
    "Decoder",
    "ENCODINGS",
    "Encoder",
    "EncoderError",
    "EncodingConfig",
    "GPT2_PATTERN",
    "MergeCache",
    "Pretokenizer",
    "RankTable",
    "UnknownTokenError",
    "Vocabulary",
    "VocabularyIncompleteError",
    "bytes_to_unicode",
    "get_encoder",
    "get_encoding_config",
    "load_encoder",
    "load_registered",
]
