from collections.abc import Iterator


# Type aliases for store primitives
type Entry = tuple[bytes, bytes]
type EntryIterator = Iterator[Entry]

# Type aliases for tabular reports
type ReportRow = tuple[str, ...]
type Report = list[ReportRow]
