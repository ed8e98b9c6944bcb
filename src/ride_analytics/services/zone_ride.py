"""Zone-ride orchestration against the external zone-control actuator."""

from typing import List, Optional

from ..analysis.zones import calculate_time_to_zone
from ..config import get_settings
from ..exceptions import ErrorCode, ZoneControlError
from ..metrics.zones import resolve_zone_bounds
from ..models.sessions import SessionConfig
from ..models.zone_control import (
    StopReason,
    ZoneControlStatus,
    ZoneMode,
    ZoneRideSummary,
    ZoneTarget,
)
from .base import BaseService, ServiceResult, ZoneControlActuator, ZoneRideStore
from .scheduler import RepeatingTask
from .sensors import LiveSensorState
from .session import SessionState


def build_zone_target(
    mode: ZoneMode,
    zone: int,
    config: SessionConfig,
    duration_secs: Optional[int] = None,
) -> ZoneTarget:
    """Target for a numbered zone, bounds resolved from the athlete configuration."""
    bounds = resolve_zone_bounds(mode, zone, config)
    return ZoneTarget(
        mode=mode,
        zone=zone,
        lower_bound=bounds.lower,
        upper_bound=bounds.upper,
        duration_secs=duration_secs,
    )


class ZoneRideController(BaseService):
    """
    Starts, stops, pauses and resumes a bounded target-zone ride.

    While a ride runs the actuator status is polled at 1 Hz. Each successful
    poll also records the commanded power and the rider's current power or
    heart rate, which feed the summary written when the ride ends. A ride
    the actuator ends on its own (duration complete, safety stop) is noticed
    on the next poll and wrapped up the same way as a user stop.

    Usage:
        controller = ZoneRideController(actuator, store, sensor_state)
        await controller.start(target)
        ...
        await controller.stop()
    """

    def __init__(
        self,
        actuator: ZoneControlActuator,
        store: Optional[ZoneRideStore] = None,
        sensor_state: Optional[LiveSensorState] = None,
        poll_interval_secs: Optional[float] = None,
        session_state: Optional[SessionState] = None,
    ) -> None:
        super().__init__()
        self.actuator = actuator
        self.store = store
        self.sensor_state = sensor_state
        self.session_state = session_state
        self.poll_interval_secs = poll_interval_secs or get_settings().zone_status_poll_secs
        self.task = RepeatingTask("zone_status_poll", self.poll_status, self.poll_interval_secs)

        self._status: Optional[ZoneControlStatus] = None
        self._target: Optional[ZoneTarget] = None
        self._commanded_power: List[int] = []
        self._values: List[Optional[float]] = []

    @property
    def status(self) -> Optional[ZoneControlStatus]:
        """Last polled status, None when no ride is running."""
        return self._status

    @property
    def target(self) -> Optional[ZoneTarget]:
        return self._target

    @property
    def is_active(self) -> bool:
        """A ride was started and has not ended yet."""
        return self._target is not None

    async def start(self, target: ZoneTarget) -> ServiceResult[ZoneTarget]:
        """Send the target to the actuator and begin polling its status."""
        try:
            await self.actuator.start_zone_control(target)
        except Exception as e:
            return self._failure(
                "Start zone ride",
                ZoneControlError(f"Could not start zone ride: {e}", operation="start"),
            )

        self._target = target
        self._status = None
        self._commanded_power = []
        self._values = []
        self.task.start()
        self.logger.info(
            f"Zone ride started: {target.mode.value} zone {target.zone} "
            f"[{target.lower_bound}, {target.upper_bound}]"
        )
        return ServiceResult.ok(data=target)

    async def stop(
        self,
        session_id: Optional[str] = None,
        force: bool = False,
    ) -> ServiceResult[Optional[StopReason]]:
        """
        Stop the ride, end polling and clear status.

        The final status is captured before the stop command because
        stopping clears the actuator's own ride state. The summary is then
        persisted on a best-effort basis.

        Args:
            session_id: Session the ride belongs to
            force: Tear down and persist even if the actuator refuses the
                   stop command; used when the containing session stops

        Returns:
            The actuator's stop reason. When the stop command fails the
            result is a failure; without force the ride is left running.
        """
        if self._target is None:
            return ServiceResult.fail(
                error="No zone ride is running",
                error_code=ErrorCode.ZONE_RIDE_NOT_ACTIVE.value,
            )

        await self._fetch_status()
        summary = self.build_summary(session_id)

        failure: Optional[ServiceResult[Optional[StopReason]]] = None
        reason: Optional[StopReason] = None
        try:
            reason = await self.actuator.stop_zone_control()
        except Exception as e:
            failure = self._failure(
                "Stop zone ride",
                ZoneControlError(f"Could not stop zone ride: {e}", operation="stop"),
            )
            if not force:
                return failure

        self.task.stop()
        self._status = None
        self._target = None
        self.logger.info(f"Zone ride stopped ({reason.value if reason else 'no reason'})")

        if summary is not None:
            summary.stop_reason = reason
            await self._persist(summary)
        return failure or ServiceResult.ok(data=reason)

    async def pause(self) -> ServiceResult[None]:
        try:
            await self.actuator.pause_zone_control()
        except Exception as e:
            return self._failure(
                "Pause zone ride",
                ZoneControlError(f"Could not pause zone ride: {e}", operation="pause"),
            )
        return ServiceResult.ok()

    async def resume(self) -> ServiceResult[None]:
        try:
            await self.actuator.resume_zone_control()
        except Exception as e:
            return self._failure(
                "Resume zone ride",
                ZoneControlError(f"Could not resume zone ride: {e}", operation="resume"),
            )
        return ServiceResult.ok()

    async def poll_status(self) -> None:
        """Fetch actuator status once; finish the ride if the actuator ended it."""
        status = await self._fetch_status()
        if status is not None and not status.active:
            await self._finish_ended_ride()

    async def _fetch_status(self) -> Optional[ZoneControlStatus]:
        """Fetch actuator status and record the per-poll samples of a live ride."""
        if self._target is None:
            return None
        try:
            status = await self.actuator.get_zone_control_status()
        except Exception as e:
            self.logger.warning(f"Zone status poll failed: {e}")
            return None

        if not status.active:
            # Keep the fuller snapshot if the actuator already reset its counters
            if self._status is None or status.elapsed_secs >= self._status.elapsed_secs:
                self._status = status
            return status

        self._status = status
        if status.commanded_power is not None:
            self._commanded_power.append(status.commanded_power)
        if self.sensor_state is not None and not status.paused:
            if self._target.mode == ZoneMode.POWER:
                self._values.append(self.sensor_state.power)
            else:
                self._values.append(self.sensor_state.heart_rate)
        return status

    async def _finish_ended_ride(self) -> None:
        summary = self.build_summary()
        self._status = None
        self._target = None

        # The actuator keeps its stop reason until it is told to stop
        reason: Optional[StopReason] = None
        try:
            reason = await self.actuator.stop_zone_control()
        except Exception as e:
            self.logger.warning(f"Collecting zone ride stop reason failed: {e}")

        self.logger.info(f"Zone ride ended by actuator ({reason.value if reason else 'no reason'})")

        if summary is not None:
            summary.stop_reason = reason
            await self._persist(summary)
        # Runs from inside the poll job; a ride started meanwhile keeps its poll
        if self._target is None:
            self.task.stop_soon()

    def build_summary(self, session_id: Optional[str] = None) -> Optional[ZoneRideSummary]:
        """Summary of the running ride from the latest status, None if no ride."""
        target = self._target
        if target is None:
            return None

        if session_id is None and self.session_state is not None:
            session_id = self.session_state.session_id

        status = self._status or ZoneControlStatus()
        lower = status.lower_bound if status.lower_bound is not None else target.lower_bound
        upper = status.upper_bound if status.upper_bound is not None else target.upper_bound

        return ZoneRideSummary(
            session_id=session_id,
            mode=status.mode or target.mode,
            zone=status.target_zone if status.target_zone is not None else target.zone,
            lower_bound=lower,
            upper_bound=upper,
            duration_secs=status.elapsed_secs,
            time_in_zone_secs=status.time_in_zone_secs,
            commanded_power_series=list(self._commanded_power),
            time_to_zone_secs=calculate_time_to_zone(
                self._values, lower, upper, self.poll_interval_secs
            ),
            safety_note=status.safety_note,
        )

    async def _persist(self, summary: ZoneRideSummary) -> None:
        if self.store is None:
            return
        try:
            await self.store.save_zone_ride(summary)
        except Exception as e:
            self.logger.warning(f"Saving zone ride summary failed: {e}")

    def shutdown(self) -> None:
        """Stop polling and forget local ride state without calling the actuator."""
        self.task.stop()
        self._status = None
        self._target = None
