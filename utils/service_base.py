"""
Base classes and utilities for the service layer.

This module provides the ServiceResult pattern (inspired by Rust's Result type)
and the BaseService class shared by the authentication and marketplace
services.

Guidelines
- Keep services stateless; pass dependencies via the constructor.
- Return structured results instead of raising for expected outcomes.
- Reserve exceptions for truly exceptional/unrecoverable scenarios.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorCodes:
    """Error codes shared by every service and mapped to HTTP by utils.api_errors."""

    VALIDATION_FAILED = "validation_failed"
    DUPLICATE_IDENTITY = "duplicate_identity"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    ALREADY_SELLER = "already_seller"
    DUPLICATE_REVIEW = "duplicate_review"
    STORE_UNAVAILABLE = "store_unavailable"
    INTERNAL_ERROR = "internal_error"


@dataclass
class ServiceResult(Generic[T]):
    """
    A result type that encapsulates success or failure from service operations.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code from ErrorCodes (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)
        field: Offending input field for validation failures

    Examples:
        >>> result = service_ok(gig)
        >>> if result.ok:
        ...     return Response({"gig": result.value}, 200)

        >>> result = service_err(ErrorCodes.NOT_FOUND, "Gig not found")
        >>> print(result.error)  # "not_found"
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None
    field: Optional[str] = None


def service_ok(value: T = None) -> ServiceResult[T]:
    """Create a successful ServiceResult."""
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "", field: Optional[str] = None) -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (one of ErrorCodes)
        error_detail: Human-readable error message
        field: Input field the error refers to, if any

    Example:
        >>> return service_err(ErrorCodes.VALIDATION_FAILED, "Title is too short", field="title")
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error, field=field)


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator
    - Mapping of database outages to ``store_unavailable``

    Usage:
        class CatalogService(BaseService):
            def __init__(self, image_store):
                super().__init__()
                self.image_store = image_store

            @BaseService.log_performance
            def create_gig(self, actor, data):
                ...
    """

    def __init__(self):
        """Initialize base service with logger."""
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log performance of service methods.

        Logs execution time and the outcome of the returned ServiceResult.
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000  # Convert to ms

                if isinstance(result, ServiceResult):
                    if result.ok:
                        self.logger.info(f"{method_name} completed successfully in {elapsed_time:.2f}ms")
                    else:
                        self.logger.warning(
                            f"{method_name} failed with error '{result.error}' in {elapsed_time:.2f}ms"
                        )
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper

    def store_unavailable(self, operation: str, exc: Exception) -> ServiceResult:
        """
        Log a database failure with its traceback and hide it behind a generic error.

        The returned detail never includes driver messages.
        """
        self.logger.error(f"Data store failure during {operation}: {exc.__class__.__name__}", exc_info=True)
        return service_err(ErrorCodes.STORE_UNAVAILABLE, "Service temporarily unavailable, please retry")
