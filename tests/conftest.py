import pytest

from gpt_encoder import ByteLevelMapper, Encoder, RankTable, Vocabulary

# Small merge list in the vocab.bpe format: every merge only uses symbols
# that exist before it, like a trained table.
MERGES = [
    ("l", "l"),        # 256
    ("e", "ll"),       # 257
    ("h", "ell"),      # 258
    ("hell", "o"),     # 259
    ("Ġ", "w"),        # 260
    ("o", "r"),        # 261
    ("Ġw", "or"),      # 262
    ("l", "d"),        # 263
    ("Ġwor", "ld"),    # 264
    ("a", "a"),        # 265
    ("aa", "aa"),      # 266
    ("aa", "a"),       # 267
]

EOT = "<|endoftext|>"


def build_token_to_id(merges=MERGES):
    """Byte symbols get id == byte value, merged symbols follow in rank order."""
    mapper = ByteLevelMapper()
    token_to_id = {mapper.byte_encoder[b]: b for b in range(256)}
    for rank, (left, right) in enumerate(merges):
        token_to_id[left + right] = 256 + rank
    token_to_id[EOT] = 256 + len(merges)
    return token_to_id


@pytest.fixture
def token_to_id():
    return build_token_to_id()


@pytest.fixture
def vocabulary(token_to_id):
    return Vocabulary(token_to_id)


@pytest.fixture
def ranks():
    return RankTable.from_merges(MERGES)


@pytest.fixture
def encoder(vocabulary, ranks):
    return Encoder(vocabulary, ranks)


@pytest.fixture
def sample_texts():
    return [
        "hello world",
        "Hello, World",
        "I'm sure they'll say it's fine, we've 3 left.",
        "  leading and trailing spaces   ",
        "tabs\tand\nnew\n\nlines\r\n",
        "hello 👋 world 🌍",
        "日本語のテキスト",
        "aaaaaaa aaaa",
        "$100 + 2.5% = ???",
    ]
