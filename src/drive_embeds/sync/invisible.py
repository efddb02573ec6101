"""Hide short strings in invisible characters appended to visible text.

Each UTF-8 byte is split into two nibbles and each nibble maps to one of
the 16 code points U+2060..U+206F (invisible formatting characters, see
https://www.unicode.org/charts/PDF/U2000.pdf). The shadow message stores
the source message ID this way, so no database is needed to correlate
the two.
"""

from drive_embeds.errors import DecodingError

INVISIBLE_CHARS: tuple[str, ...] = tuple(chr(0x2060 + i) for i in range(16))

_NIBBLES: dict[str, int] = {char: i for i, char in enumerate(INVISIBLE_CHARS)}


def encode(payload: str) -> str:
    """Encode a string as invisible characters, two per UTF-8 byte."""
    return "".join(
        INVISIBLE_CHARS[byte >> 4] + INVISIBLE_CHARS[byte & 0xF]
        for byte in payload.encode("utf-8")
    )


def decode(encoded: str) -> str:
    """Decode invisible characters produced by :func:`encode`.

    Raises:
        DecodingError: A character is outside the invisible alphabet, a
            nibble is unpaired, or the bytes are not valid UTF-8.
    """
    nibbles = []
    for char in encoded:
        try:
            nibbles.append(_NIBBLES[char])
        except KeyError:
            raise DecodingError(
                f"Invalid invisible character: {char!r} (U+{ord(char):04X})"
            ) from None

    if len(nibbles) % 2:
        raise DecodingError(f"Odd number of nibbles: {len(nibbles)}")

    data = bytes(high << 4 | low for high, low in zip(nibbles[::2], nibbles[1::2]))
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodingError(f"Payload is not valid UTF-8: {exc}") from exc


def append_invisible(visible: str, payload: str) -> str:
    """Append ``payload`` to ``visible`` as invisible characters."""
    return visible + encode(payload)


def decode_appended(text: str) -> str | None:
    """Decode the invisible payload appended to ``text``.

    Returns None when ``text`` carries no invisible characters at all.
    Everything from the first invisible character onwards is the payload.
    """
    positions = [i for i in (text.find(c) for c in INVISIBLE_CHARS) if i != -1]
    if not positions:
        return None
    return decode(text[min(positions):])
