"""Session state and start/stop orchestration against the session recorder."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..exceptions import ErrorCode, SessionControlError
from ..models.sessions import SessionRecord
from .base import BaseService, ServiceResult, SessionApi

if TYPE_CHECKING:
    from .zone_ride import ZoneRideController


@dataclass
class SessionState:
    """Whether a ride is being recorded. Owned by SessionController."""

    active: bool = False
    session_id: Optional[str] = None
    paused: bool = False

    def reset(self) -> None:
        self.active = False
        self.session_id = None
        self.paused = False


class SessionController(BaseService):
    """
    Starts, stops, pauses and resumes recording through the session API.

    Failed calls come back as a failed ServiceResult carrying a message for
    the user; the in-memory SessionState is only changed after the API call
    succeeded.
    """

    def __init__(
        self,
        session_api: SessionApi,
        state: Optional[SessionState] = None,
        zone_ride: Optional["ZoneRideController"] = None,
    ) -> None:
        super().__init__()
        self.session_api = session_api
        self.state = state or SessionState()
        self.zone_ride = zone_ride

    async def start_session(self) -> ServiceResult[str]:
        """Start recording a new session."""
        if self.state.active:
            return ServiceResult.ok(data=self.state.session_id)

        try:
            session_id = await self.session_api.start_session()
        except Exception as e:
            return self._failure(
                "Start session",
                SessionControlError(f"Could not start session: {e}"),
            )

        self.state.active = True
        self.state.session_id = session_id
        self.state.paused = False
        self.logger.info(f"Session {session_id} started")
        return ServiceResult.ok(data=session_id)

    async def stop_session(self) -> ServiceResult[Optional[SessionRecord]]:
        """
        Stop recording.

        An active zone ride is snapshotted, stopped and persisted first. That
        step is best effort and never blocks the session stop.
        """
        if not self.state.active:
            return ServiceResult.fail(
                error="No session is being recorded",
                error_code=ErrorCode.SESSION_NOT_ACTIVE.value,
            )

        if self.zone_ride is not None and self.zone_ride.is_active:
            try:
                result = await self.zone_ride.stop(session_id=self.state.session_id, force=True)
                if not result.success:
                    self.logger.warning(f"Zone ride shutdown during session stop failed: {result.error}")
            except Exception as e:
                self.logger.warning(f"Zone ride shutdown during session stop failed: {e}")

        try:
            summary = await self.session_api.stop_session()
        except Exception as e:
            return self._failure(
                "Stop session",
                SessionControlError(
                    f"Could not stop session: {e}",
                    code=ErrorCode.SESSION_STOP_FAILED,
                ),
            )

        self.logger.info(f"Session {self.state.session_id} stopped")
        self.state.reset()
        return ServiceResult.ok(data=summary)

    async def pause_session(self) -> ServiceResult[None]:
        try:
            await self.session_api.pause_session()
        except Exception as e:
            return self._failure("Pause session", e)
        self.state.paused = True
        return ServiceResult.ok()

    async def resume_session(self) -> ServiceResult[None]:
        try:
            await self.session_api.resume_session()
        except Exception as e:
            return self._failure("Resume session", e)
        self.state.paused = False
        return ServiceResult.ok()
