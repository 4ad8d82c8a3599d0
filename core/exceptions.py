#!/usr/bin/env python3
"""
Domain exceptions shared by the scoring, swipe and match services.

The web layer maps each family to an HTTP status in
web/backend/exceptions.py.
"""


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


# Configuration errors

class InvalidWeightsException(ServiceException):
    """Raised when a scoring weights update violates its invariants."""
    pass


# Precondition rejections

class DailySwipeLimitExceeded(ServiceException):
    """Raised when an actor has used up today's swipes."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Daily swipe limit of {limit} reached")


class SuperLikeLimitExceeded(ServiceException):
    """Raised when a volunteer has used up today's super likes."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Daily super like limit of {limit} reached")


class InvalidSwipeException(ServiceException):
    """Raised when a swipe request is malformed (bad direction, missing reason)."""
    pass


# Invariant violations

class InvariantViolation(ServiceException):
    """Raised when an action would break a state machine invariant."""
    pass


class SwipeUndoNotAllowed(InvariantViolation):
    """Raised when undoing anything but the actor's most recent swipe."""
    pass


class InvalidMatchTransition(InvariantViolation):
    """Raised when a match status change is not an allowed transition."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move match from {current} to {requested}")


# Not found

class NotFoundException(ServiceException):
    """Base for missing records."""
    pass


class VolunteerNotFoundException(NotFoundException):
    pass


class VacancyNotFoundException(NotFoundException):
    pass


class MatchNotFoundException(NotFoundException):
    pass


# Access

class MatchAccessDenied(ServiceException):
    """Raised when an organisation acts on a match for another organisation's vacancy."""
    pass
