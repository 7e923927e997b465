from enum import StrEnum


class KeyLayout:
    """Byte layout of a link key."""

    WIDTH = 12  # Total key width in bytes
    BUCKET_WIDTH = 4  # Leading YYMM creation-month stamp
    HASH_WIDTH = 8  # Base-36 content hash, truncated to fit
    PAD_BYTE = b'0'  # Fills the hash field when the encoding is shorter than HASH_WIDTH
    BUCKET_FORMAT = '%y%m'


class Defaults:
    """Default runtime settings."""

    API_ADDRESS = ':7070'
    REDIRECT_ADDRESS = ':8090'
    DATABASE = 'links.db'
    WRITE_TIMEOUT = 1.0  # Seconds to wait for the store-wide writer lock
    LOG_LEVEL = 'INFO'
    LIST_LIMIT = 30  # Max rows returned by /link/list
    CURSOR_BATCH_SIZE = 64  # Rows fetched per cursor page
    BACKUP_FILENAME = 'backup.db'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        API_ADDRESS = 'GURL_API_ADDRESS'
        REDIRECT_ADDRESS = 'GURL_REDIRECT_ADDRESS'
        DATABASE = 'GURL_DATABASE'
        WRITE_TIMEOUT = 'GURL_WRITE_TIMEOUT'
        LOG_LEVEL = 'LOG_LEVEL'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
