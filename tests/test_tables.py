import pytest

from gpt_encoder import ByteLevelMapper, RankTable, Vocabulary
from gpt_encoder.vocabulary import MAX_TOKEN_ID

from conftest import MERGES


def test_rank_table_from_merges(ranks):
    assert len(ranks) == len(MERGES)
    assert ranks.rank_of("l", "l") == 0
    assert ranks.rank_of("aa", "a") == len(MERGES) - 1
    assert ranks.rank_of("l", "x") is None
    assert ("Ġ", "w") in ranks
    assert ranks.merges() == MERGES


def test_rank_table_rejects_duplicate_merges():
    with pytest.raises(ValueError, match="Duplicate merge"):
        RankTable.from_merges([("a", "b"), ("c", "d"), ("a", "b")])


def test_rank_table_rejects_tied_ranks():
    with pytest.raises(ValueError, match="more than one pair"):
        RankTable({("a", "b"): 0, ("c", "d"): 0})


def test_rank_table_rejects_negative_rank():
    with pytest.raises(ValueError):
        RankTable({("a", "b"): -1})


def test_rank_table_is_not_affected_by_source_dict():
    source = {("a", "b"): 0}
    ranks = RankTable(source)
    source[("c", "d")] = 1
    assert ("c", "d") not in ranks


def test_vocabulary_lookups(vocabulary):
    assert vocabulary.id_of("!") == ord("!")
    assert vocabulary.id_of("hello") == 259
    assert vocabulary.symbol_of(264) == "Ġworld"
    assert vocabulary.id_of("missing") is None
    assert vocabulary.symbol_of(10**9) is None
    assert "Ġw" in vocabulary
    assert len(vocabulary) == 256 + len(MERGES) + 1


def test_vocabulary_is_read_only(vocabulary):
    with pytest.raises(TypeError):
        vocabulary.token_to_id["new"] = 1
    with pytest.raises(TypeError):
        vocabulary.id_to_token[1] = "new"


def test_vocabulary_rejects_shared_ids():
    with pytest.raises(ValueError, match="shared"):
        Vocabulary({"a": 0, "b": 0})


@pytest.mark.parametrize("bad_id", [-1, MAX_TOKEN_ID + 1, "3", 1.0])
def test_vocabulary_rejects_out_of_range_ids(bad_id):
    with pytest.raises(ValueError):
        Vocabulary({"a": bad_id})


def test_vocabulary_accepts_max_u32():
    assert Vocabulary({"a": MAX_TOKEN_ID}).symbol_of(MAX_TOKEN_ID) == "a"


def test_missing_byte_symbols(token_to_id):
    mapper = ByteLevelMapper()
    assert Vocabulary(token_to_id).missing_byte_symbols(mapper) == []

    del token_to_id["Ġ"]
    assert Vocabulary(token_to_id).missing_byte_symbols(mapper) == ["Ġ"]
