from dataclasses import dataclass


# fmt: off
@dataclass(frozen=True)
class LinkRecord:
    key: bytes     # 12-byte composite key: YYMM bucket + base-36 content hash
    target: bytes  # Original URL, stored as raw bytes


@dataclass(frozen=True)
class Backup:
    data: bytes  # Binary image of the whole store
    size: int    # Size reported by the transaction that produced the image
# fmt: on
