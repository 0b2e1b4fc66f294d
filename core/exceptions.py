#!/usr/bin/env python3
"""
Service layer exceptions.

Callers distinguish failure categories by type:
- NotFoundException: an identifier does not resolve
- StateConflictException: the current state does not permit the operation;
  re-fetch state and decide, never retry blindly
- PermissionDeniedException: the actor may not perform the operation
- ValidationException: input rejected at a boundary check
- TransactionFailedException: persistence could not commit; nothing was applied
"""


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class NotFoundException(ServiceException):
    """Raised when an entity is not found."""
    pass


class RequestNotFoundException(NotFoundException):
    """Raised when a request is not found."""
    pass


class ProposalNotFoundException(NotFoundException):
    """Raised when a proposal is not found."""
    pass


class CompanyNotFoundException(NotFoundException):
    """Raised when a company is not found."""
    pass


class StateConflictException(ServiceException):
    """Raised when a transition is not allowed from the current state."""

    def __init__(self, message: str, current_state=None):
        super().__init__(message)
        self.current_state = current_state


class PermissionDeniedException(ServiceException):
    """Raised when the acting user or company may not perform the operation."""
    pass


class ValidationException(ServiceException):
    """Raised when input fails a boundary check."""
    pass


class TransactionFailedException(ServiceException):
    """Raised when the persistence layer could not commit atomically."""
    pass
