"""
Hashing functions for sbf-search.

This module provides the hash used to derive Spectral Bloom Filter slot
indices. It is implemented in pure Python so that the exact same values can be
reproduced by the client-side query code embedded in a search page.
"""

from typing import Union


def murmurhash3_32(key: Union[str, bytes], seed: int = 0) -> int:
    """
    Pure Python implementation of MurmurHash3 (x86, 32-bit variant).

    Strings are hashed as their UTF-8 encoding. Hashing an empty key returns 0
    for every seed, so that index derivation for empty keys does not depend
    on the seed.

    Args:
        key: The key to hash, as text or raw bytes.
        seed: 32-bit seed. Each seed gives an independent hash stream.

    Returns:
        32-bit unsigned hash value.
    """
    if isinstance(key, str):
        key_bytes = key.encode("utf-8")
    else:
        key_bytes = bytes(key)

    length = len(key_bytes)
    if length == 0:
        return 0

    # MurmurHash3 constants
    c1 = 0xCC9E2D51
    c2 = 0x1B873593

    h = seed & 0xFFFFFFFF

    # Process 4 bytes at a time
    nblocks = length // 4
    for i in range(nblocks):
        k = int.from_bytes(key_bytes[i * 4 : i * 4 + 4], "little")

        k = (k * c1) & 0xFFFFFFFF
        k = ((k << 15) | (k >> 17)) & 0xFFFFFFFF  # rotl32(k, 15)
        k = (k * c2) & 0xFFFFFFFF

        h ^= k
        h = ((h << 13) | (h >> 19)) & 0xFFFFFFFF  # rotl32(h, 13)
        h = (h * 5 + 0xE6546B64) & 0xFFFFFFFF

    # Tail (0-3 bytes)
    k = 0
    idx = nblocks * 4

    if length & 3 >= 3:
        k ^= key_bytes[idx + 2] << 16
    if length & 3 >= 2:
        k ^= key_bytes[idx + 1] << 8
    if length & 3 >= 1:
        k ^= key_bytes[idx]
        k = (k * c1) & 0xFFFFFFFF
        k = ((k << 15) | (k >> 17)) & 0xFFFFFFFF
        k = (k * c2) & 0xFFFFFFFF
        h ^= k

    # Finalization mixing
    h ^= length
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & 0xFFFFFFFF
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & 0xFFFFFFFF
    h ^= h >> 16

    return h
