# config.py
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

CACHE_ENV_VAR = "GPT_ENCODER_CACHE"
DOWNLOAD_TIMEOUT = 30  # seconds

_OPENAI_BASE = "https://openaipublic.blob.core.windows.net/gpt-2/models/124M"

# sha256 of the published r50k files
R50K_ENCODER_SHA256 = "196139668be63f3b5d6574427317ae82f612a97c5d1cdaf36ed2256dbf636783"
R50K_VOCAB_SHA256 = "1ce1664773c50f3e0cc8842619a93edc4624525b728b188a9e0be33b7726adc5"


@dataclass(frozen=True)
class EncodingConfig:
    name: str
    encoder_url: str
    vocab_url: str

    # encodings sharing the same files share one cached copy
    files_key: str = "r50k"

    # expected table sizes, checked after loading
    vocab_size: int = 50257
    num_merges: int = 50000

    # None skips the checksum
    encoder_sha256: Optional[str] = None
    vocab_sha256: Optional[str] = None

    @property
    def encoder_file(self) -> str:
        return f"{self.files_key}-encoder.json"

    @property
    def vocab_file(self) -> str:
        return f"{self.files_key}-vocab.bpe"


ENCODINGS = {
    "gpt2": EncodingConfig(
        "gpt2",
        encoder_url=f"{_OPENAI_BASE}/encoder.json",
        vocab_url=f"{_OPENAI_BASE}/vocab.bpe",
        encoder_sha256=R50K_ENCODER_SHA256,
        vocab_sha256=R50K_VOCAB_SHA256,
    ),
    # GPT-3 ships the same 50257-token vocabulary and merges as GPT-2
    "gpt3": EncodingConfig(
        "gpt3",
        encoder_url=f"{_OPENAI_BASE}/encoder.json",
        vocab_url=f"{_OPENAI_BASE}/vocab.bpe",
        encoder_sha256=R50K_ENCODER_SHA256,
        vocab_sha256=R50K_VOCAB_SHA256,
    ),
}


def get_encoding_config(name: str) -> EncodingConfig:
    key = name.lower()
    if key not in ENCODINGS:
        raise ValueError(f"Unknown encoding: {name} (expected one of {sorted(ENCODINGS)})")
    return ENCODINGS[key]


def cache_dir() -> Path:
    override = os.environ.get(CACHE_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".cache" / "gpt_encoder"
