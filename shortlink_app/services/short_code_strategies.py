"""
Short code generation strategies for the shortlink service.
Uses Strategy Pattern to allow different generation algorithms.

Generators never check for uniqueness: the store's put() is the
authority and the URL service retries on collision.
"""

import secrets
import string
import uuid
from abc import ABC, abstractmethod


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""
    
    @abstractmethod
    def generate(self) -> str:
        """
        Generate a short code.
        
        Returns:
            A URL-safe short code string (not guaranteed unique)
        """
        pass


class HashedUUIDShortCodeStrategy(ShortCodeStrategy):
    """
    Random UUID reduced to a 32-bit hash, rendered as uppercase hex.
    
    Codes are 1-8 characters of [0-9A-F] (no zero padding).
    
    Pros: Short, no coordination, no DB queries
    Cons: 32 bits collide noticeably at scale (birthday bound ~77k codes
          for a 50% chance), hence reject-and-retry in the store
    """
    
    def generate(self) -> str:
        """Generate a code from a fresh UUID4"""
        return format(self._hash32(uuid.uuid4()), "X")
    
    @staticmethod
    def _hash32(value: uuid.UUID) -> int:
        """Fold the 128-bit UUID into 32 bits by XOR-ing its four words"""
        number = value.int
        result = 0
        for _ in range(4):
            result ^= number & 0xFFFFFFFF
            number >>= 32
        return result


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Fixed-length random Base62 string.
    
    Pros: Denser alphabet, length is configurable
    Cons: Still probabilistic uniqueness
    """
    
    BASE62_CHARS = string.digits + string.ascii_lowercase + string.ascii_uppercase
    
    def __init__(self, length: int = 8):
        if length < 1:
            raise ValueError(f"Short code length must be positive, got {length}")
        self.length = length
    
    def generate(self) -> str:
        """Generate random short code of configured length"""
        return ''.join(secrets.choice(self.BASE62_CHARS) for _ in range(self.length))
