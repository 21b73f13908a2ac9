# errors.py

"""
Error kinds returned by the category/analytic layer.

Every failing operation raises exactly one ServiceError subclass. The kinds
carry no transport details; main.py owns the mapping to status codes.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CATEGORY_ALREADY_EXISTS = "CategoryAlreadyExists"
    CATEGORY_NOT_FOUND = "CategoryNotFound"
    CATEGORY_IN_USE = "CategoryInUse"
    POST_NOT_FOUND = "PostNotFound"
    POST_ID_ALREADY_EXISTS = "PostIDAlreadyExists"
    ANALYTIC_NOT_FOUND = "AnalyticNotFound"
    ANALYTIC_DEPENDENCY_NOT_FOUND = "AnalyticDependencyNotFound"
    EMPTY_UPDATE = "EmptyUpdate"
    MISSING_ROLE = "MissingRole"
    INSUFFICIENT_ROLE = "InsufficientRole"
    UNEXPECTED = "Unexpected"


class ServiceError(Exception):
    """Base error. Subclasses fix `kind` and a default message."""

    kind: ErrorKind = ErrorKind.UNEXPECTED
    default_message = "unexpected error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class CategoryAlreadyExists(ServiceError):
    kind = ErrorKind.CATEGORY_ALREADY_EXISTS
    default_message = "category already exists"


class CategoryNotFound(ServiceError):
    kind = ErrorKind.CATEGORY_NOT_FOUND
    default_message = "category not found"


class CategoryInUse(ServiceError):
    kind = ErrorKind.CATEGORY_IN_USE
    default_message = "category has posts"


class PostNotFound(ServiceError):
    kind = ErrorKind.POST_NOT_FOUND
    default_message = "post not found"


class PostIDAlreadyExists(ServiceError):
    kind = ErrorKind.POST_ID_ALREADY_EXISTS
    default_message = "analytic for this post_id already exists"


class AnalyticNotFound(ServiceError):
    kind = ErrorKind.ANALYTIC_NOT_FOUND
    default_message = "analytic not found"


class AnalyticDependencyNotFound(ServiceError):
    kind = ErrorKind.ANALYTIC_DEPENDENCY_NOT_FOUND
    default_message = "post for analytic not found"


class EmptyUpdate(ServiceError):
    kind = ErrorKind.EMPTY_UPDATE
    default_message = "analytic has no changes"


class MissingRole(ServiceError):
    kind = ErrorKind.MISSING_ROLE
    default_message = "not found role"


class InsufficientRole(ServiceError):
    kind = ErrorKind.INSUFFICIENT_ROLE
    default_message = "admin role required"


class Unexpected(ServiceError):
    kind = ErrorKind.UNEXPECTED
