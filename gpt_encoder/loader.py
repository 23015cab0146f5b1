"""
Loading of the pre-trained vocabulary (encoder.json) and merge list
(vocab.bpe), from local paths, from the copies shipped in gpt_encoder/data,
or from the published OpenAI files.

encoder.json maps every byte-level token string to its id. vocab.bpe
starts with a "#version" line, followed by one "left right" merge per line
in rank order.
"""

import hashlib
import json
import logging
import os
import tempfile
from importlib import resources
from pathlib import Path
from typing import Optional, Union

import requests

from .config import DOWNLOAD_TIMEOUT, EncodingConfig, cache_dir
from .encoder import Encoder
from .ranks import RankTable
from .vocabulary import Vocabulary

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# ------------------------------------
# Parsing
# ------------------------------------
def parse_encoder_json(text: str) -> Vocabulary:
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"encoder.json must hold an object, got {type(data).__name__}")
    for token, idx in data.items():
        if not isinstance(idx, int) or isinstance(idx, bool):
            raise ValueError(f"Token {token!r} has a non-integer id {idx!r}")
    return Vocabulary(data)


def parse_vocab_bpe(text: str) -> RankTable:
    lines = text.split("\n")
    start = 1 if lines and lines[0].startswith("#version") else 0

    merges = []
    for lineno, line in enumerate(lines[start:], start=start + 1):
        line = line.rstrip("\r")
        if not line:
            break
        parts = line.split(" ")
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"vocab.bpe line {lineno}: expected 'left right', got {line!r}")
        merges.append((parts[0], parts[1]))
    return RankTable.from_merges(merges)


def load_vocabulary(path: PathLike) -> Vocabulary:
    vocab = parse_encoder_json(Path(path).read_text(encoding="utf-8"))
    logger.info("Loaded %d tokens from %s", len(vocab), path)
    return vocab


def load_ranks(path: PathLike) -> RankTable:
    ranks = parse_vocab_bpe(Path(path).read_text(encoding="utf-8"))
    logger.info("Loaded %d merges from %s", len(ranks), path)
    return ranks


def load_encoder(encoder_path: PathLike, vocab_path: PathLike) -> Encoder:
    return Encoder(load_vocabulary(encoder_path), load_ranks(vocab_path))


# ------------------------------------
# Bundled files, download + cache
# ------------------------------------
def bundled_file(filename: str):
    """Resource handle for a file shipped in gpt_encoder/data."""
    return resources.files(__package__) / "data" / filename


def fetch_file(url: str, local_path: PathLike, timeout: float = DOWNLOAD_TIMEOUT) -> Path:
    """Download `url` to `local_path` unless the file is already there."""
    local_path = Path(local_path)
    if local_path.is_file():
        return local_path

    local_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Downloading %s to %s", url, local_path)
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()

    # write next to the target and rename, so an interrupted download never
    # leaves a truncated file in the cache
    fd, tmp_name = tempfile.mkstemp(dir=local_path.parent, suffix=".part")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(response.content)
        os.replace(tmp_name, local_path)
    except BaseException:
        os.unlink(tmp_name)
        raise
    return local_path


def _read_checked(source, expected_sha256: Optional[str]) -> str:
    data = source.read_bytes()
    if expected_sha256 is not None:
        digest = hashlib.sha256(data).hexdigest()
        if digest != expected_sha256:
            raise ValueError(f"{source}: sha256 {digest} does not match expected {expected_sha256}")
    return data.decode("utf-8")


def load_registered(config: EncodingConfig, directory: PathLike = None) -> Encoder:
    """
    Build the Encoder for a registered encoding. Files shipped with the
    package are used when present; otherwise they are downloaded into
    `directory` (default: the cache directory) on first use.
    """
    encoder_src = bundled_file(config.encoder_file)
    vocab_src = bundled_file(config.vocab_file)
    if encoder_src.is_file() and vocab_src.is_file():
        logger.debug("Using bundled files for %s", config.name)
    else:
        directory = Path(directory) if directory is not None else cache_dir()
        encoder_src = fetch_file(config.encoder_url, directory / config.encoder_file)
        vocab_src = fetch_file(config.vocab_url, directory / config.vocab_file)

    vocab = parse_encoder_json(_read_checked(encoder_src, config.encoder_sha256))
    ranks = parse_vocab_bpe(_read_checked(vocab_src, config.vocab_sha256))
    logger.info("Loaded %s: %d tokens, %d merges", config.name, len(vocab), len(ranks))

    if len(vocab) != config.vocab_size or len(ranks) != config.num_merges:
        raise ValueError(
            f"{config.name}: expected {config.vocab_size} tokens / {config.num_merges} merges, "
            f"got {len(vocab)} / {len(ranks)}"
        )
    return Encoder(vocab, ranks)
