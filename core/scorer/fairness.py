#!/usr/bin/env python3
"""
Fairness Weighting - Exposure correction for organisations.

A multiplier in [0.70, 1.40] applied to the weighted component sum:

- swipes below small_threshold: boost from 1.0 (at the threshold) up to 1.4 (at zero)
- swipes above large_threshold: reduction from 1.0 down to 0.7, saturating at 2x large
- in between: 1.0

The thresholds and slopes are tunable policy meant to damp popularity
feedback loops. Nothing downstream depends on their exact values.
"""

MIN_WEIGHT = 0.70
MAX_WEIGHT = 1.40
SMALL_ORG_BOOST = 0.4
LARGE_ORG_PENALTY = 0.3
NEUTRAL_WEIGHT = 1.0


def fairness_weight(swipe_count: int, small_threshold: int, large_threshold: int) -> float:
    """
    Calculate the fairness multiplier for an organisation.

    Args:
        swipe_count: Total swipes recorded on the organisation's vacancies
        small_threshold: Below this count the organisation is boosted
        large_threshold: Above this count the organisation is damped

    Returns:
        Multiplier in [MIN_WEIGHT, MAX_WEIGHT]
    """
    swipes = max(0, swipe_count or 0)

    if small_threshold > 0 and swipes < small_threshold:
        weight = NEUTRAL_WEIGHT + (small_threshold - swipes) / small_threshold * SMALL_ORG_BOOST
    elif large_threshold > 0 and swipes > large_threshold:
        excess = min(1.0, (swipes - large_threshold) / large_threshold)
        weight = NEUTRAL_WEIGHT - excess * LARGE_ORG_PENALTY
    else:
        weight = NEUTRAL_WEIGHT

    return min(MAX_WEIGHT, max(MIN_WEIGHT, weight))
