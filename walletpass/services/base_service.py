# walletpass/services/base_service.py

"""
Base Service for Business Logic.

Provides a foundational service class with common patterns including:
- Operation tracing
- Error handling
- Structured operation logging
"""

import logging
import uuid
from abc import ABC
from datetime import datetime
from typing import Optional


logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class BaseService(ABC):
    """
    Abstract base service with common functionality.

    Services inheriting from this class get:
    - Operation tracing ids
    - Consistent start/success/error logging with durations

    A service instance covers a single operation; build a new one per request.
    """

    def __init__(self):
        self._operation_id: Optional[str] = None
        self._trace_id: Optional[str] = None
        self._started_at: Optional[datetime] = None

    # ==================== Context Management ====================

    def set_operation_context(
        self,
        operation_id: Optional[str] = None,
        trace_id: Optional[str] = None
    ) -> 'BaseService':
        """
        Set operation context for tracing.

        Args:
            operation_id: Unique ID for this operation
            trace_id: Trace ID for distributed tracing

        Returns:
            Self for method chaining
        """
        self._operation_id = operation_id or str(uuid.uuid4())
        self._trace_id = trace_id or str(uuid.uuid4())
        self._started_at = datetime.utcnow()
        return self

    @property
    def operation_id(self) -> str:
        """Get current operation ID, generating one if not set."""
        if not self._operation_id:
            self._operation_id = str(uuid.uuid4())
        return self._operation_id

    @property
    def trace_id(self) -> str:
        """Get current trace ID, generating one if not set."""
        if not self._trace_id:
            self._trace_id = str(uuid.uuid4())
        return self._trace_id

    def _elapsed(self) -> Optional[float]:
        if self._started_at:
            return (datetime.utcnow() - self._started_at).total_seconds()
        return None

    # ==================== Logging Helpers ====================

    def _log_operation_start(self, operation: str, **context):
        """Log the start of an operation with context."""
        logger.info(
            f"[{self.__class__.__name__}] Starting {operation}",
            extra={
                'operation_id': self.operation_id,
                'trace_id': self.trace_id,
                **context
            }
        )

    def _log_operation_success(self, operation: str, **context):
        """Log successful operation completion."""
        logger.info(
            f"[{self.__class__.__name__}] Completed {operation}",
            extra={
                'operation_id': self.operation_id,
                'trace_id': self.trace_id,
                'duration_seconds': self._elapsed(),
                **context
            }
        )

    def _log_operation_error(self, operation: str, error: Exception, exc_info: bool = True, **context):
        """Log operation error."""
        logger.error(
            f"[{self.__class__.__name__}] Failed {operation}: {str(error)}",
            extra={
                'operation_id': self.operation_id,
                'trace_id': self.trace_id,
                'duration_seconds': self._elapsed(),
                'error_type': type(error).__name__,
                **context
            },
            exc_info=exc_info
        )
