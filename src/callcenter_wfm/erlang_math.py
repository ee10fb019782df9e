"""
Erlang Math Module
==================

Queueing formulas behind the staffing solver.

Mathematical Context:
    Erlang-B is computed with the recursive ratio
        B(0) = 1,  B(i) = A * B(i-1) / (i + A * B(i-1))
    which never forms A^N or N!, so it stays finite for the traffic
    volumes a contact center sees (A well past 170 Erlangs).

    Erlang-C (probability an arriving call waits) follows from B:
        C = N * B / (N - A * (1 - B))

    Service level (probability of answer within t seconds):
        SL = 1 - C * exp(-(N - A) * t / AHT)
"""

import math


def erlang_c(traffic: float, agents: int) -> float:
    """Compute Erlang-C probability: P(wait > 0).

    Args:
        traffic: Offered load A in Erlangs (>= 0).
        agents: Number of agents N (>= 0).

    Returns:
        Probability of waiting (0 to 1). Returns 1 when N <= A, the
        saturated queue where every caller waits.
    """
    if agents <= traffic:
        return 1.0

    erlang_b = 1.0
    for i in range(1, math.floor(traffic) + 1):
        erlang_b = (traffic * erlang_b) / (i + traffic * erlang_b)
    for i in range(math.floor(traffic) + 1, agents + 1):
        erlang_b = (traffic * erlang_b) / (i + traffic * erlang_b)

    numerator = agents * erlang_b
    denominator = agents - traffic * (1 - erlang_b)
    if denominator <= 0:
        return 1.0
    return numerator / denominator


def service_level(
    traffic: float,
    agents: int,
    target_answer_seconds: float,
    aht: float,
) -> float:
    """Probability a call is answered within the target answer time.

    ``aht`` must be positive; guarding against zero is the caller's job.

    Args:
        traffic: Offered load in Erlangs.
        agents: Number of agents staffed.
        target_answer_seconds: Answer-time threshold in seconds.
        aht: Average handle time in seconds.

    Returns:
        Service level as a fraction. An overloaded queue (N <= A) reports 0.
    """
    p_wait = min(max(erlang_c(traffic, agents), 0.0), 1.0)
    sl = 1.0 - p_wait * math.exp(-(agents - traffic) * target_answer_seconds / aht)
    return max(sl, 0.0)
