"""
Identifier generation for clients and history entries.

IDs look like ``client_1735689600000_k3j9x0q2m``: a prefix, the creation
time in milliseconds and a random base36 suffix. They are not secure and
not checked against existing records; the suffix only has to keep two IDs
minted in the same millisecond apart.
"""

import random
import string
from datetime import datetime
from typing import Callable, Optional

from .models import utc_now

BASE36_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 9

CLIENT_ID_PREFIX = "client"
ENTRY_ID_PREFIX = "entry"


class IdGenerator:
    """
    Mints prefixed, timestamped IDs.

    The clock and the random source are injectable so tests can pin
    both and produce collisions on purpose.
    """

    def __init__(
        self,
        prefix: str = CLIENT_ID_PREFIX,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        if not prefix:
            raise ValueError("prefix is required")
        self._prefix = prefix
        self._rng = rng or random.Random()
        self._clock = clock or utc_now

    @property
    def prefix(self) -> str:
        return self._prefix

    def generate(self) -> str:
        millis = int(self._clock().timestamp() * 1000)
        suffix = "".join(
            self._rng.choice(BASE36_ALPHABET) for _ in range(SUFFIX_LENGTH)
        )
        return f"{self._prefix}_{millis}_{suffix}"
