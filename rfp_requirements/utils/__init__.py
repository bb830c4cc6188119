from .logger import setup_logging
from .hashing import sha256_hash
from .cache import TTLCache

__all__ = ["setup_logging", "sha256_hash", "TTLCache"]
