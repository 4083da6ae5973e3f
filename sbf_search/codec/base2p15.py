"""
Base2p15 codec for sbf-search.

Packs an arbitrary bit string into text, 15 bits per character. The first
character is a lowercase hex digit ('0' to 'e') giving the number of zero bits
appended to reach a multiple of 15. Every following character carries one
15-bit group, stored as the code point ``group + OFFSET``.

With OFFSET = 161 the data code points lie in [161, 32929), which skips the
C0/C1 control characters and stays clear of the UTF-16 surrogate band
[0xD800, 0xDFFF], so every character is a valid scalar value on its own and
survives JSON or markup transport.
"""

import math

from sbf_search.core.errors import DecodeError, InvalidParameterError

BITS_PER_CHAR = 15
OFFSET = 161
MAX_DATA_CODE_POINT = OFFSET + (1 << BITS_PER_CHAR)  # exclusive

_HEADER_DIGITS = "0123456789abcde"


def encode(bit_string: str) -> str:
    """
    Encode a bit string as base2p15 text.

    Args:
        bit_string: A string made only of '0' and '1' characters.

    Returns:
        Text of length 1 + ceil(len(bit_string) / 15).

    Raises:
        InvalidParameterError: If bit_string contains other characters.
    """
    if not set(bit_string) <= {"0", "1"}:
        raise InvalidParameterError("Bit string may only contain '0' and '1'")

    n_padded_bits = (BITS_PER_CHAR - len(bit_string) % BITS_PER_CHAR) % BITS_PER_CHAR
    padded = bit_string + "0" * n_padded_bits

    chars = [_HEADER_DIGITS[n_padded_bits]]
    for i in range(0, len(padded), BITS_PER_CHAR):
        chars.append(chr(int(padded[i : i + BITS_PER_CHAR], 2) + OFFSET))
    return "".join(chars)


def _read_padding(text: str) -> int:
    if len(text) < 1:
        raise DecodeError("Base2p15 text must contain at least a header character")
    padding = _HEADER_DIGITS.find(text[0])
    if padding < 0:
        raise DecodeError(f"Invalid base2p15 header character {text[0]!r}")
    return padding


def _group_bits(char: str) -> str:
    code_point = ord(char)
    if not (OFFSET <= code_point < MAX_DATA_CODE_POINT):
        raise DecodeError(f"Code point U+{code_point:04X} is outside the base2p15 data range")
    return format(code_point - OFFSET, "015b")


def decode(text: str) -> str:
    """
    Decode base2p15 text back into the original bit string.

    Args:
        text: Text produced by encode.

    Returns:
        The bit string that was encoded.

    Raises:
        DecodeError: If the text is empty, the header is not a hex digit in
            '0'-'e', a data character is out of range, or the header claims
            padding while there are no data characters.
    """
    padding = _read_padding(text)
    if padding and len(text) == 1:
        raise DecodeError(f"Header claims {padding} padding bits but there is no data")

    bits = "".join(_group_bits(char) for char in text[1:])
    return bits[: len(bits) - padding]


def decoded_length(text: str) -> int:
    """Number of bits the text decodes to, without decoding the data."""
    padding = _read_padding(text)
    if padding and len(text) == 1:
        raise DecodeError(f"Header claims {padding} padding bits but there is no data")
    return (len(text) - 1) * BITS_PER_CHAR - padding


def decode_range(text: str, start: int, end: int) -> str:
    """
    Decode bits [start, end) of the encoded bit string.

    Only the data characters covering the requested range are decoded, which
    makes reading a single counter out of a large filter cheap.

    Args:
        text: Text produced by encode.
        start: Index of the first bit to return.
        end: Index one past the last bit to return.

    Returns:
        The requested slice of the decoded bit string.

    Raises:
        DecodeError: If the text is malformed or the range falls outside the
            decoded bit string.
    """
    total_bits = decoded_length(text)
    if not (0 <= start <= end <= total_bits):
        raise DecodeError(f"Bit range [{start}, {end}) outside 0..{total_bits}")
    if start == end:
        return ""

    first_char = start // BITS_PER_CHAR
    last_char = (end - 1) // BITS_PER_CHAR
    bits = "".join(_group_bits(char) for char in text[1 + first_char : 2 + last_char])
    offset = first_char * BITS_PER_CHAR
    return bits[start - offset : end - offset]


def read_counter(text: str, index: int, width: int) -> int:
    """
    Read the width-bit counter at position index from encoded filter text.

    Raises:
        DecodeError: If the text is malformed or the counter lies past the end.
    """
    return int(decode_range(text, index * width, (index + 1) * width), 2)


def encoded_length(n_bits: int) -> int:
    """Length of the text that encode produces for n_bits bits."""
    return 1 + math.ceil(n_bits / BITS_PER_CHAR)
