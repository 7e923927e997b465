"""gurl: hash-addressed URL shortener backend."""

__version__ = '1.0.0'
