# Evaluate_Tokenizer.py
import argparse
import json
import logging
import math
import time
from collections import Counter
from pathlib import Path

import numpy as np

from gpt_encoder import get_encoder


def percentile(arr, q: float):
    """
    Simple percentile for a sorted list.
    q in [0,1], e.g. 0.5 for median.
    """
    if not arr:
        return None
    idx = int(q * (len(arr) - 1))
    return arr[idx]


def entropy_bits(counter, total):
    h = 0.0
    for c in counter.values():
        p = c / total
        h -= p * math.log2(p)
    return h


def main():
    parser = argparse.ArgumentParser(description="Compression / fragmentation stats for an encoding")
    parser.add_argument("--input", default="data/train.txt")
    parser.add_argument("--encoding", default="gpt2")
    parser.add_argument("--results_dir", default="results/tokenization")
    parser.add_argument("--sample_words", type=int, default=100_000)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    # ---- load data ----
    text = Path(args.input).read_text(encoding="utf-8")
    encoder = get_encoder(args.encoding)

    # cold pass fills the merge cache, warm pass measures the cached path
    t0 = time.perf_counter()
    cold_ids = encoder.encode(text)
    cold_s = time.perf_counter() - t0

    t0 = time.perf_counter()
    warm_ids = encoder.encode(text)
    warm_s = time.perf_counter() - t0
    assert cold_ids == warm_ids, "warm cache changed the output"

    ids = np.array(warm_ids, dtype=np.uint32)
    raw_bytes = text.encode("utf-8")

    num_chars = len(text)
    num_bytes = len(raw_bytes)
    num_tokens = len(ids)
    if num_tokens == 0:
        print("Input is empty, nothing to evaluate")
        return

    print(f"Characters : {num_chars:,}")
    print(f"Bytes      : {num_bytes:,}")
    print(f"Tokens     : {num_tokens:,}")
    print(f"Chars/token: {num_chars / num_tokens:.3f}")
    print(f"Bytes/token: {num_bytes / num_tokens:.3f}")
    print(f"Encode time: cold {cold_s:.3f}s, warm {warm_s:.3f}s")

    # ---- token frequency & entropy ----
    counter = Counter(ids.tolist())
    token_entropy = entropy_bits(counter, num_tokens)
    byte_entropy = entropy_bits(Counter(raw_bytes), num_bytes)

    print(f"Vocab used : {len(counter):,} / {encoder.vocab_size:,}")
    print(f"Token entropy (bits/token): {token_entropy:.3f}")
    print(f"Byte entropy (bits/byte)  : {byte_entropy:.3f}")

    # ---- fragmentation: tokens per word ----
    words = text.split()
    n = min(args.sample_words, len(words))
    lens = sorted(len(encoder.encode(" " + w)) for w in words[:n])

    mean_tpw = sum(lens) / len(lens) if lens else float("nan")
    print(f"\nFragmentation on first {n:,} words:")
    print(f"  mean tokens/word  : {mean_tpw:.3f}")
    print(f"  median tokens/word: {percentile(lens, 0.5)}")
    print(f"  90th pct tokens/w : {percentile(lens, 0.9)}")

    # ---- top tokens ----
    print("\nTop 20 most frequent tokens:")
    for token_id, count in counter.most_common(20):
        print(f"  id={token_id:>6} freq={count:>8}  repr={encoder.decode([token_id])!r}")

    cache = encoder.cache
    metrics = {
        "encoding": args.encoding,
        "num_characters": num_chars,
        "num_bytes": num_bytes,
        "num_tokens": num_tokens,
        "num_words": len(words),
        "chars_per_token": num_chars / num_tokens,
        "bytes_per_token": num_bytes / num_tokens,
        "vocab_size_used": len(counter),
        "token_entropy_bits_per_token": token_entropy,
        "bits_per_byte_from_tokens": token_entropy * num_tokens / num_bytes,
        "byte_entropy_bits_per_byte": byte_entropy,
        "fragmentation_sample_words": n,
        "mean_tokens_per_word": mean_tpw,
        "median_tokens_per_word": percentile(lens, 0.5),
        "p90_tokens_per_word": percentile(lens, 0.9),
        "encode_seconds_cold": cold_s,
        "encode_seconds_warm": warm_s,
        "cache_entries": len(cache),
        "cache_hit_ratio": cache.hits / max(cache.hits + cache.misses, 1),
    }

    results_dir = Path(args.results_dir)
    results_dir.mkdir(parents=True, exist_ok=True)
    out_path = results_dir / f"{args.encoding}_metrics.json"
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(metrics, f, indent=2)

    print(f"\nSaved metrics to {out_path}")


if __name__ == "__main__":
    main()
