"""
randpass.entropy

Random byte source and unbiased index sampling.

RandomByteSource keeps a fixed-size buffer of cryptographically secure bytes
and hands them out one at a time, refilling the whole buffer when it runs dry.
UnbiasedSampler turns those bytes into uniform indices in [0, bound) by
rejecting the values that would skew a plain modulo.

Neither class is thread-safe: use one instance per thread.
"""

import logging
import secrets
from typing import Callable, Optional

from .errors import RandomSourceError

logger = logging.getLogger(__name__)

RANDOM_BATCH_SIZE = 256


class RandomByteSource:

    def __init__(self, randbytes: Optional[Callable[[int], bytes]] = None,
                 batch_size: int = RANDOM_BATCH_SIZE):
        if batch_size < 1:
            raise ValueError("batch_size must be > 0")
        self._randbytes = randbytes or secrets.token_bytes
        self._batch_size = batch_size
        self._buffer = b""
        self._cursor = 0

    def _refill(self) -> None:
        try:
            data = self._randbytes(self._batch_size)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceError("failed to generate random bytes") from e
        if len(data) != self._batch_size:
            raise RandomSourceError(
                f"short read from random source: got {len(data)} of {self._batch_size} bytes")
        logger.debug("refilled random buffer with %d bytes", self._batch_size)
        self._buffer = bytes(data)
        self._cursor = 0

    def next_byte(self) -> int:
        """Return the next random byte as an int in [0, 256)."""
        if self._cursor >= len(self._buffer):
            self._refill()
        value = self._buffer[self._cursor]
        self._cursor += 1
        return value


class UnbiasedSampler:

    def __init__(self, source: Optional[RandomByteSource] = None):
        self.source = source or RandomByteSource()

    def next_index(self, bound: int) -> int:
        """
        Return a uniformly distributed int in [0, bound).

        For bound <= 256 a single byte is drawn per candidate and anything
        >= 256 - (256 % bound) is rejected. Larger bounds read enough bytes
        big-endian to cover the range and apply the same rule over 256**k.
        """
        if bound < 1:
            raise ValueError("bound must be > 0")
        nbytes = max(1, ((bound - 1).bit_length() + 7) // 8)
        space = 256 ** nbytes
        limit = space - (space % bound)
        while True:
            value = 0
            for _ in range(nbytes):
                value = (value << 8) | self.source.next_byte()
            if value < limit:
                return value % bound
            logger.debug("rejected random value %d (limit %d)", value, limit)
