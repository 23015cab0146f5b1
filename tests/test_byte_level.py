import pytest

from gpt_encoder import ByteLevelMapper, bytes_to_unicode


def test_mapping_is_a_bijection_over_all_bytes():
    table = bytes_to_unicode()
    assert sorted(table) == list(range(256))
    assert len(set(table.values())) == 256


def test_printable_bytes_map_to_themselves():
    table = bytes_to_unicode()
    for b in list(range(ord("!"), ord("~") + 1)) + [0xA1, 0xAC, 0xAE, 0xFF]:
        assert table[b] == chr(b)


def test_shifted_bytes():
    table = bytes_to_unicode()
    assert table[0] == chr(256)
    assert table[ord(" ")] == "Ġ"
    assert table[ord("\n")] == "Ċ"
    assert table[ord("\t")] == "ĉ"
    assert table[0xAD] == chr(256 + 67)


def test_alphabet_order_matches_gpt2_ids():
    mapper = ByteLevelMapper()
    assert len(mapper) == 256
    assert mapper.alphabet[0] == "!"
    assert mapper.alphabet[93] == "~"
    # first shifted byte (0x00) comes right after the 188 printable ones
    assert mapper.alphabet[188] == chr(256)


def test_round_trip_every_byte():
    mapper = ByteLevelMapper()
    data = bytes(range(256))
    text = mapper.to_text(data)
    assert len(text) == 256
    assert all(c in mapper for c in text)
    assert mapper.to_bytes(text) == data


def test_invalid_utf8_is_representable():
    mapper = ByteLevelMapper()
    data = b"\xff\xfe\x80abc\xc3"
    assert mapper.to_bytes(mapper.to_text(data)) == data


def test_empty():
    mapper = ByteLevelMapper()
    assert mapper.to_text(b"") == ""
    assert mapper.to_bytes("") == b""


def test_to_bytes_rejects_foreign_characters():
    mapper = ByteLevelMapper()
    with pytest.raises(ValueError, match="not a byte-level symbol"):
        mapper.to_bytes("a b")  # plain space is not in the alphabet
