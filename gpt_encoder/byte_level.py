def bytes_to_unicode() -> dict[int, str]:
    """
    Map every byte 0..255 to a printable unicode character.

    Bytes that already print fine ('!'..'~', '¡'..'¬', '®'..'ÿ') map to
    themselves. The remaining 68 bytes (control characters, space, etc.)
    are shifted to chr(256 + n) in increasing byte order, so byte 32 (space)
    becomes 'Ġ' and byte 10 (newline) becomes 'Ċ'.
    """
    bs = (
        list(range(ord("!"), ord("~") + 1))
        + list(range(ord("¡"), ord("¬") + 1))
        + list(range(ord("®"), ord("ÿ") + 1))
    )
    cs = bs[:]
    n = 0
    for b in range(2**8):
        if b not in bs:
            bs.append(b)
            cs.append(2**8 + n)
            n += 1
    return dict(zip(bs, (chr(c) for c in cs)))


class ByteLevelMapper:
    """
    Lossless text view of raw bytes.

    Every byte sequence, valid UTF-8 or not, gets a string made only of the
    256 symbols in `alphabet`, which is what the BPE merges operate on.
    """

    def __init__(self):
        self.byte_encoder = bytes_to_unicode()
        self.byte_decoder = {c: b for b, c in self.byte_encoder.items()}
        # dict order is the order ids 0..255 are assigned in encoder.json
        self.alphabet = tuple(self.byte_encoder.values())
        self._table = [self.byte_encoder[b] for b in range(256)]

    def to_text(self, data: bytes) -> str:
        return "".join(self._table[b] for b in data)

    def to_bytes(self, text: str) -> bytes:
        try:
            return bytes(self.byte_decoder[c] for c in text)
        except KeyError as e:
            raise ValueError(f"Character {e.args[0]!r} is not a byte-level symbol") from None

    def __len__(self):
        return len(self.alphabet)

    def __contains__(self, symbol):
        return symbol in self.byte_decoder
