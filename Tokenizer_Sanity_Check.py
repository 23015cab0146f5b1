import argparse
import logging
from pathlib import Path

import numpy as np

from gpt_encoder import get_encoder


def main():
    parser = argparse.ArgumentParser(description="Decode a token shard and show a merge trace")
    parser.add_argument("--bin", default="data/gpt2_tokens/train.bin")
    parser.add_argument("--encoding", default="gpt2")
    parser.add_argument("--num_ids", type=int, default=200)
    parser.add_argument("--sample", default="Hello, World")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    encoder = get_encoder(args.encoding)

    # decode a small slice back to text
    bin_path = Path(args.bin)
    if bin_path.is_file():
        train_ids = np.fromfile(bin_path, dtype=np.uint32)
        sample_ids = train_ids[:args.num_ids].tolist()
        text = encoder.decode(sample_ids)

        print(f"First {args.num_ids} token IDs:", sample_ids[:20], "...")
        print("\nDecoded text snippet:\n")
        print(text)
    else:
        print(f"{bin_path} not found, skipping shard decode")

    # show how the sample string is split and merged
    print(f"\nTrace for {args.sample!r}:")
    for part in encoder.encode_with_trace(args.sample):
        print(f"  chunk={part['chunk']!r:<16} bytes={part['chunk_bytes']!r}")
        for step in encoder.cache.merger.merge_trace(part["translated"]):
            print(f"      {' '.join(step)}")
        print(f"      -> ids {part['ids']}")

    ids = encoder.encode(args.sample)
    assert encoder.decode(ids) == args.sample, "round trip failed"
    print("\nRound trip OK:", ids)


if __name__ == "__main__":
    main()
