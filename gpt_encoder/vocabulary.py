import numbers
from types import MappingProxyType
from typing import Optional

MAX_TOKEN_ID = 2**32 - 1


class Vocabulary:
    """
    Bijective symbol <-> token id table.

    Ids are unsigned 32-bit integers. Both directions are exposed read-only;
    the table never changes after construction.
    """

    def __init__(self, token_to_id: dict[str, int]):
        id_to_token = {}
        for token, idx in token_to_id.items():
            if not isinstance(idx, int) or not 0 <= idx <= MAX_TOKEN_ID:
                raise ValueError(f"Token id for {token!r} must be in [0, 2**32), got {idx!r}")
            if idx in id_to_token:
                raise ValueError(
                    f"Token id {idx} is shared by {id_to_token[idx]!r} and {token!r}"
                )
            id_to_token[idx] = token

        self.token_to_id = MappingProxyType(dict(token_to_id))
        self.id_to_token = MappingProxyType(id_to_token)

    def id_of(self, token: str) -> Optional[int]:
        return self.token_to_id.get(token)

    def symbol_of(self, token_id: int) -> Optional[str]:
        # 104.0 and True compare equal to ids but are not ids
        if isinstance(token_id, bool) or not isinstance(token_id, numbers.Integral):
            return None
        return self.id_to_token.get(int(token_id))

    def missing_byte_symbols(self, mapper) -> list[str]:
        """Byte-level symbols of `mapper` that have no id here."""
        return [c for c in mapper.alphabet if c not in self.token_to_id]

    def items(self):
        return self.token_to_id.items()

    def __contains__(self, token):
        return token in self.token_to_id

    def __len__(self):
        return len(self.token_to_id)

    def __repr__(self):
        return f"Vocabulary(size={len(self)})"
