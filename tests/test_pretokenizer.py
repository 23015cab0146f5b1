import pytest

from gpt_encoder import ByteLevelMapper, Pretokenizer


@pytest.fixture
def pretokenizer():
    return Pretokenizer()


@pytest.mark.parametrize("text, expected", [
    ("", []),
    ("Hello, World", ["Hello", ",", " World"]),
    ("I'm here", ["I", "'m", " here"]),
    ("don't", ["don", "'t"]),
    ("we'll see", ["we", "'ll", " see"]),
    ("abc123 def", ["abc", "123", " def"]),
    ("$100", ["$", "100"]),
    ("a  b", ["a", " ", " b"]),
    ("    x", ["   ", " x"]),
    ("trailing   ", ["trailing", "   "]),
    ("\n\nHello", ["\n", "\n", "Hello"]),
    ("hi !!", ["hi", " !!"]),
])
def test_split(pretokenizer, text, expected):
    assert pretokenizer.split(text) == expected


def test_partition_law(pretokenizer, sample_texts):
    for text in sample_texts:
        chunks = pretokenizer.split(text)
        assert "".join(chunks) == text
        assert all(chunks)


def test_partition_law_with_escaped_bytes(pretokenizer):
    text = b"ab\xff\xfe cd\x80".decode("utf-8", errors="surrogateescape")
    chunks = pretokenizer.split(text)
    assert "".join(chunks) == text


def test_uncovered_characters_become_single_chunks():
    # a pattern that only knows letters still partitions everything
    pretokenizer = Pretokenizer(r"\p{L}+")
    assert pretokenizer.split("ab, c") == ["ab", ",", " ", "c"]


def test_deterministic(pretokenizer, sample_texts):
    for text in sample_texts:
        assert pretokenizer.split(text) == pretokenizer.split(text)


def test_iter_chunks_is_lazy(pretokenizer):
    it = pretokenizer.iter_chunks("one two three")
    assert next(it) == "one"
    assert list(it) == [" two", " three"]


def test_matches_huggingface_byte_level(pretokenizer, sample_texts):
    pre_tokenizers = pytest.importorskip("tokenizers.pre_tokenizers")
    reference = pre_tokenizers.ByteLevel(add_prefix_space=False, use_regex=True)
    mapper = ByteLevelMapper()

    for text in sample_texts:
        expected = [piece for piece, _ in reference.pre_tokenize_str(text)]
        got = [mapper.to_text(chunk.encode("utf-8")) for chunk in pretokenizer.split(text)]
        assert got == expected, text
