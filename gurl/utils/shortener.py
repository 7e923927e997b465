"""Link key derivation utility

This module turns a URL into the fixed-width composite key under which the
link is stored. A key is exactly 12 bytes:

    ┌──────────┬──────────────────────────┐
    │ YYMM (4) │ base-36 content hash (8) │
    └──────────┴──────────────────────────┘

The leading creation-month bucket makes keys sort by month first, which is
what lets listing and cleanup work as bounded range scans.

Functions:
    content_hash(url) -> int
        64-bit XXH64 digest (seed 0) of the URL.
    base36(value) -> str
        Lowercase base-36 encoding of a non-negative integer.
    time_bucket(now=None) -> bytes
        4-byte YYMM creation-month stamp.
    derive_key(url, now=None) -> bytes
        Build the 12-byte key for a URL.

Example:
    >>> from datetime import datetime, UTC
    >>> from gurl.utils import derive_key
    >>> derive_key('https://example.com/a', datetime(2024, 1, 15, tzinfo=UTC))
    b'2401...'

NOTE:
    - Hash encodings longer than 8 characters are truncated to their first
      8 bytes. Truncation is the key policy, not an error, and it raises the
      collision probability: links sharing a bucket and an 8-byte hash prefix
      overwrite each other.
    - Encodings shorter than 8 characters are padded with KeyLayout.PAD_BYTE.
      Every call starts from a fresh buffer, so no bytes of an earlier key can
      leak into a later one.
"""

import string
from datetime import datetime, UTC

import xxhash
from beartype import beartype

from gurl.constants import KeyLayout


ALPHABET = string.digits + string.ascii_lowercase
BASE = len(ALPHABET)


def content_hash(url: str) -> int:
    return xxhash.xxh64_intdigest(url.encode('utf-8'))


def base36(value: int) -> str:
    """Encode a non-negative integer as lowercase base-36 without leading zeros.

    Args:
        value (int):
            Non-negative integer, typically a 64-bit digest.

    Returns:
        str: 1 to 13 characters for any 64-bit value.

    Raises:
        ValueError:
            If value is negative.

    Example:
        >>> base36(35)
        'z'
        >>> base36(2**64 - 1)
        '3w5e11264sgsf'
    """
    if value < 0:
        raise ValueError(f'Value must be a non-negative integer (given value: {value}).')

    digits = []
    while True:
        value, remainder = divmod(value, BASE)
        digits.append(ALPHABET[remainder])
        if value == 0:
            break
    return ''.join(reversed(digits))


def time_bucket(now: datetime | None = None) -> bytes:
    """Return the YYMM creation-month stamp for `now` (current UTC time by default)."""
    if now is None:
        now = datetime.now(UTC)
    return now.strftime(KeyLayout.BUCKET_FORMAT).encode('ascii')


@beartype
def derive_key(url: str, now: datetime | None = None) -> bytes:
    """Derive the 12-byte storage key for a URL.

    Args:
        url (str):
            URL to be shortened. Not validated or normalized.
        now (datetime | None):
            Creation time used for the month bucket. Defaults to now (UTC).

    Returns:
        bytes: bucket (4 bytes) + first 8 bytes of the padded base-36 hash.

    Example:
        >>> derive_key('https://example.com/a', datetime(2024, 1, 15, tzinfo=UTC))[:4]
        b'2401'
    """
    encoded = base36(content_hash(url)).encode('ascii')
    buffer = bytearray(KeyLayout.PAD_BYTE * KeyLayout.WIDTH)
    buffer[: KeyLayout.BUCKET_WIDTH] = time_bucket(now)

    hash_part = encoded[: KeyLayout.HASH_WIDTH]
    buffer[KeyLayout.BUCKET_WIDTH : KeyLayout.BUCKET_WIDTH + len(hash_part)] = hash_part
    return bytes(buffer)
