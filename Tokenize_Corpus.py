# Tokenize_Corpus.py
import argparse
import json
import logging
from datetime import datetime
from pathlib import Path

import numpy as np

from gpt_encoder import get_encoder, load_encoder


def build_encoder(args):
    if args.encoder_json and args.vocab_bpe:
        return load_encoder(args.encoder_json, args.vocab_bpe)
    return get_encoder(args.encoding)


def main():
    parser = argparse.ArgumentParser(description="Tokenize a text file into uint32 .bin shards")
    parser.add_argument("--input", default="data/train.txt")
    parser.add_argument("--out_dir", default="data/gpt2_tokens")
    parser.add_argument("--stats_dir", default="results/tokenization")
    parser.add_argument("--encoding", default="gpt2")
    parser.add_argument("--encoder_json", default=None, help="local encoder.json (skips download)")
    parser.add_argument("--vocab_bpe", default=None, help="local vocab.bpe (skips download)")
    parser.add_argument("--train_frac", type=float, default=0.9)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    # 1) load raw text
    data_path = Path(args.input)
    text = data_path.read_text(encoding="utf-8")

    # 2) tokenize
    encoder = build_encoder(args)
    token_ids = encoder.encode(text)  # list[int]

    # 3) quick stats
    print(f"Number of characters : {len(text):,}")
    print(f"Number of tokens     : {len(token_ids):,}")
    if token_ids:
        print(f"Chars per token      : {len(text) / len(token_ids):.2f}")
    print(f"Distinct chunks      : {len(encoder.cache):,}")

    # 4) save as binary; ids are < 2**32 so uint32 is lossless
    ids = np.array(token_ids, dtype=np.uint32)

    n = int(args.train_frac * len(ids))
    train_ids = ids[:n]
    val_ids = ids[n:]

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    train_ids.tofile(out_dir / "train.bin")
    val_ids.tofile(out_dir / "val.bin")

    print(f"Saved tokenized data to {out_dir / 'train.bin'} and {out_dir / 'val.bin'}")

    # ---- save stats for later analysis ----
    stats = {
        "encoding": args.encoding,
        "num_characters": len(text),
        "num_tokens": len(token_ids),
        "chars_per_token": len(text) / len(token_ids) if token_ids else None,
        "distinct_chunks": len(encoder.cache),
        "source_file": str(data_path),
        "created_at": datetime.now().isoformat(),
    }

    results_dir = Path(args.stats_dir)
    results_dir.mkdir(parents=True, exist_ok=True)

    stats_path = results_dir / f"{args.encoding}_stats.json"
    with stats_path.open("w", encoding="utf-8") as f:
        json.dump(stats, f, indent=2)

    print(f"Saved stats to {stats_path}")


if __name__ == "__main__":
    main()
