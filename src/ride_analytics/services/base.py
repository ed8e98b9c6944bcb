"""
Base service classes and collaborator protocols.

Defines the interfaces of the external collaborators (session store,
session recorder, zone-control actuator) and the base class for the
controllers that talk to them.
"""

from typing import Any, Dict, Generic, List, Optional, Protocol, TypeVar, runtime_checkable
import logging

from pydantic import BaseModel, ConfigDict

from ..exceptions import RideAnalyticsError
from ..models.sensors import LiveMetrics
from ..models.sessions import SessionRecord
from ..models.zone_control import StopReason, ZoneControlStatus, ZoneRideSummary, ZoneTarget


T = TypeVar("T")


@runtime_checkable
class SessionSource(Protocol):
    """Supplies an immutable snapshot of historical ride summaries."""

    def list_sessions(self) -> List[SessionRecord]:
        """Get all stored session summaries."""
        ...


@runtime_checkable
class SessionApi(Protocol):
    """Session recorder that owns the active ride."""

    async def start_session(self) -> str:
        """Start recording and return the new session id."""
        ...

    async def stop_session(self) -> Optional[SessionRecord]:
        """Stop recording and return the stored summary, if any."""
        ...

    async def pause_session(self) -> None:
        ...

    async def resume_session(self) -> None:
        ...

    async def get_live_metrics(self) -> Optional[LiveMetrics]:
        """Current rolling metrics, or None outside a session."""
        ...


@runtime_checkable
class ZoneControlActuator(Protocol):
    """Closed-loop trainer controller that holds the rider in a zone."""

    async def start_zone_control(self, target: ZoneTarget) -> None:
        ...

    async def stop_zone_control(self) -> Optional[StopReason]:
        ...

    async def pause_zone_control(self) -> None:
        ...

    async def resume_zone_control(self) -> None:
        ...

    async def get_zone_control_status(self) -> ZoneControlStatus:
        ...


@runtime_checkable
class ZoneRideStore(Protocol):
    """Persists completed zone-ride summaries."""

    async def save_zone_ride(self, summary: ZoneRideSummary) -> None:
        ...


class BaseService:
    """
    Base class for controllers.

    Provides common functionality:
    - Logging setup
    - Conversion of collaborator failures into ServiceResult
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    def _failure(self, action: str, error: Exception) -> "ServiceResult[Any]":
        """Log a failed collaborator call and wrap it for the caller."""
        self._logger.warning(f"{action} failed: {error}")
        if isinstance(error, RideAnalyticsError):
            return ServiceResult.fail(
                error=error.message,
                error_code=error.code.value,
                metadata=error.details or None,
            )
        return ServiceResult.fail(error=f"{action} failed: {error}")


class ServiceResult(BaseModel, Generic[T]):
    """
    Wrapper for service operation results.

    Provides a consistent way to return success/failure status
    along with optional data and a user-visible error message.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(
        cls,
        data: Optional[T] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[T]":
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(
        cls,
        error: str,
        error_code: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[T]":
        """Create a failed result."""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            metadata=metadata,
        )
