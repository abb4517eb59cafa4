"""Exception hierarchy shared by the entity managers.

Contract violations are raised before any connection is opened and are never
wrapped. ``ServiceFailureError`` always chains the low-level cause.
"""
from __future__ import annotations


class GraveManagerError(Exception):
    pass


class ContractViolationError(GraveManagerError, ValueError):
    """A required argument is missing (``None`` entity or ``None`` id)."""


class IllegalEntityError(ContractViolationError):
    """The entity's id is set when it must not be, or missing when it must be."""


class ValidationError(GraveManagerError):
    """An entity field breaks a business rule."""


class EntityNotFoundError(GraveManagerError):
    """An update or delete matched no stored row."""


class ServiceFailureError(GraveManagerError):
    """The backing store failed, or returned data that breaks an integrity rule."""
