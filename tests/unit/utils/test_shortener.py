"""Unit tests for the key derivation helpers in shortener.py.

Test coverage includes:

1. Base-36 encoding
   - Known values encode to lowercase base-36 without leading zeros.
   - Negative values raise ValueError.

2. Time bucket
   - The creation month is rendered as 4 ASCII digits (YYMM).
   - Defaults to the current UTC time.

3. Key layout
   - Keys are always 12 bytes: bucket + hash field.
   - The hash field is the XXH64 digest encoded in base-36.

4. Truncation and padding policy
   - Encodings longer than 8 characters keep exactly their first 8 bytes.
   - Encodings shorter than 8 characters are padded with the pad byte.
   - No bytes of an earlier key leak into a later one.

5. Determinism
   - The same URL within the same month always yields the same key.
   - A different month yields a different bucket only.

6. Error handling
   - Non-string URLs raise a beartype violation.
"""

from datetime import datetime, UTC

import pytest
import xxhash
from beartype.roar import BeartypeCallHintParamViolation
from freezegun import freeze_time

from gurl.constants import KeyLayout
from gurl.utils import shortener
from gurl.utils.shortener import base36, content_hash, derive_key, time_bucket


# -------------------------------
# 1. Base-36 encoding
# -------------------------------


@pytest.mark.parametrize(
    'value, expected',
    [
        (0, '0'),
        (9, '9'),
        (10, 'a'),
        (35, 'z'),
        (36, '10'),
        (46655, 'zzz'),
        (36**7, '10000000'),
        (2**64 - 1, '3w5e11264sgsf'),
    ],
)
def test_base36(value, expected):
    """base36() encodes known values."""
    assert base36(value) == expected


def test_base36_with_negative_value():
    """base36() rejects negative values."""
    with pytest.raises(ValueError, match='non-negative'):
        base36(-1)


def test_base36_length_for_64_bit_values():
    """64-bit values never need more than 13 characters."""
    assert len(base36(2**64 - 1)) == 13
    assert len(base36(2**63)) == 13


# -------------------------------
# 2. Time bucket
# -------------------------------


@pytest.mark.parametrize(
    'now, expected',
    [
        (datetime(2024, 1, 15, tzinfo=UTC), b'2401'),
        (datetime(2025, 12, 31, 23, 59, tzinfo=UTC), b'2512'),
        (datetime(2030, 7, 1, tzinfo=UTC), b'3007'),
    ],
)
def test_time_bucket(now, expected):
    assert time_bucket(now) == expected


@freeze_time('2024-03-10 08:00:00')
def test_time_bucket_defaults_to_now():
    assert time_bucket() == b'2403'


# -------------------------------
# 3. Key layout
# -------------------------------


def test_derive_key_layout(january_2024):
    """Keys are 12 bytes: YYMM bucket followed by the base-36 XXH64 digest."""
    url = 'https://example.com/a'
    encoded = base36(xxhash.xxh64_intdigest(url.encode('utf-8'))).encode('ascii')

    key = derive_key(url, january_2024)

    assert len(key) == KeyLayout.WIDTH
    assert key[:4] == b'2401'
    assert key[4:] == encoded[:8].ljust(8, KeyLayout.PAD_BYTE)


def test_content_hash_is_xxh64_seed_zero():
    assert content_hash('https://example.com/a') == xxhash.xxh64(b'https://example.com/a', seed=0).intdigest()


def test_content_hash_uses_utf8_bytes():
    url = 'https://example.com/ünïcode?q=☃'
    assert content_hash(url) == xxhash.xxh64_intdigest(url.encode('utf-8'))
    assert len(derive_key(url)) == KeyLayout.WIDTH


@freeze_time('2024-01-15')
def test_derive_key_defaults_to_current_month():
    assert derive_key('https://example.com/a')[:4] == b'2401'


# -------------------------------
# 4. Truncation and padding policy
# -------------------------------


def test_derive_key_truncates_long_hash(monkeypatch, january_2024):
    """A 13-character encoding keeps exactly its first 8 bytes."""
    monkeypatch.setattr(shortener, 'content_hash', lambda url: 2**64 - 1)
    assert derive_key('https://example.com/long', january_2024) == b'24013w5e1126'


def test_derive_key_truncation_collides(monkeypatch, january_2024):
    """Digests sharing an 8-character prefix map to the same key."""
    monkeypatch.setattr(shortener, 'content_hash', lambda url: 36**12 if url.endswith('a') else 36**12 + 1)

    first = derive_key('https://example.com/a', january_2024)
    second = derive_key('https://example.com/b', january_2024)

    assert base36(36**12) != base36(36**12 + 1)
    assert first == second == b'240110000000'


def test_derive_key_exact_width_hash(monkeypatch, january_2024):
    monkeypatch.setattr(shortener, 'content_hash', lambda url: 36**7)
    assert derive_key('https://example.com/eight', january_2024) == b'240110000000'


def test_derive_key_pads_short_hash(monkeypatch, january_2024):
    """A short encoding is padded with the pad byte up to 12 bytes."""
    monkeypatch.setattr(shortener, 'content_hash', lambda url: 46655)
    assert derive_key('https://example.com/short', january_2024) == b'2401zzz00000'


def test_derive_key_uses_fresh_buffer(monkeypatch, january_2024):
    """A short key derived after a long one carries no leftover bytes."""
    digests = iter([2**64 - 1, 46655])
    monkeypatch.setattr(shortener, 'content_hash', lambda url: next(digests))

    long_key = derive_key('https://example.com/long', january_2024)
    short_key = derive_key('https://example.com/short', january_2024)

    assert long_key == b'24013w5e1126'
    assert short_key == b'2401zzz00000'


# -------------------------------
# 5. Determinism
# -------------------------------


@pytest.mark.parametrize(
    'url',
    [
        'https://example.com/a',
        'https://example.com/a?utm_source=newsletter',
        'http://localhost:8080/',
        'not even a url',
    ],
)
def test_derive_key_is_deterministic(url, january_2024):
    assert derive_key(url, january_2024) == derive_key(url, january_2024.replace(day=28))


def test_derive_key_bucket_changes_with_month(january_2024):
    url = 'https://example.com/a'
    january = derive_key(url, january_2024)
    february = derive_key(url, january_2024.replace(month=2))

    assert january[:4] == b'2401'
    assert february[:4] == b'2402'
    assert january[4:] == february[4:]


def test_keys_sort_by_month_first(january_2024):
    """Every key of an earlier month sorts before every key of a later month."""
    urls = [f'https://example.com/{i}' for i in range(50)]
    january = [derive_key(url, january_2024) for url in urls]
    february = [derive_key(url, january_2024.replace(month=2)) for url in urls]

    assert max(january) < min(february)


# -------------------------------
# 6. Error handling
# -------------------------------


@pytest.mark.parametrize('url', [123, None, b'https://example.com/a'])
def test_derive_key_with_invalid_type(url):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        derive_key(url)
