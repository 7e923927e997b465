from gurl.utils.config import Address, Config, load_config, parse_address
from gurl.utils.shortener import base36, content_hash, derive_key, time_bucket
from gurl.utils.logging import initialize_logging


__all__ = [
    'Address',
    'Config',
    'load_config',
    'parse_address',
    'base36',
    'content_hash',
    'derive_key',
    'time_bucket',
    'initialize_logging',
]
