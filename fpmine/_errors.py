from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when the miner is configured with an unusable threshold or option."""


class MiningTimeoutError(TimeoutError):
    """Raised when a parallel mining pass exceeds its ``timeout``.

    Partial results are discarded; nothing is returned to the caller.
    """
