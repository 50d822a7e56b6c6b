from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Pacing for resubmitting items DynamoDB reported as unprocessed.

    ``max_attempts`` bounds consecutive submissions that make no progress at
    all (every item handed back); partial progress resets the count.
    """

    max_attempts: int = 10
    base_delay_s: float = 0.05
    max_delay_s: float = 1.5


def backoff_delay(policy: RetryPolicy, attempt: int) -> float:
    # Full jitter exponential backoff.
    cap = policy.max_delay_s
    base = policy.base_delay_s
    exp = min(cap, base * (2 ** max(0, attempt - 1)))
    return random.random() * exp
