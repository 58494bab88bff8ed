"""Security engine deciding alarm status from sensors, arming mode and images."""

from typing import Any, List, Optional

from ..config.defaults import DEFAULT_CONFIG
from ..exceptions import InvalidStatusError, UnknownSensorError
from ..models.sensor import Sensor
from ..models.status import ArmingStatus, AlarmStatus
from ..logging_config import get_logger
from .error_handler import ErrorHandler, ErrorSeverity, global_error_handler, track_errors
from .interfaces import ImageServiceInterface, SecurityRepositoryInterface, StatusListener

logger = get_logger("security_service")

COMPONENT_NAME = "security_service"
LISTENER_COMPONENT_NAME = "status_listener"


class SecurityService:
    """Alarm state machine.

    Every operation reads the current state from the repository, applies
    the transition rules, writes back what changed and then notifies the
    registered listeners. The only state kept here is the listener list and
    whether the most recent image contained a cat.

    Alarm status moves NO_ALARM -> PENDING_ALARM -> ALARM on sensor
    activations while armed. A deactivation clears a pending alarm. ALARM is
    never left because of a sensor event; only disarming, arming or an
    explicit set_alarm_status clear it.
    """

    def __init__(self,
                 security_repository: SecurityRepositoryInterface,
                 image_service: ImageServiceInterface,
                 confidence_threshold: float = DEFAULT_CONFIG["confidence_threshold"],
                 error_handler: Optional[ErrorHandler] = None):
        self.security_repository = security_repository
        self.image_service = image_service
        self.confidence_threshold = confidence_threshold
        self.error_handler = error_handler or global_error_handler

        self._status_listeners: List[StatusListener] = []
        self._cat_detected = False

        self.error_handler.register_component(COMPONENT_NAME)
        self.error_handler.register_component(LISTENER_COMPONENT_NAME)

    @property
    def cat_detected(self) -> bool:
        """Whether the most recently processed image contained a cat."""
        return self._cat_detected

    # Listener registry

    def add_status_listener(self, listener: StatusListener) -> None:
        if any(existing is listener for existing in self._status_listeners):
            return
        self._status_listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        self._status_listeners = [
            existing for existing in self._status_listeners if existing is not listener
        ]

    # Status

    def get_arming_status(self) -> ArmingStatus:
        return self.security_repository.get_arming_status()

    def get_alarm_status(self) -> AlarmStatus:
        return self.security_repository.get_alarm_status()

    @track_errors(COMPONENT_NAME)
    def set_alarm_status(self, status: AlarmStatus) -> None:
        """Persist the alarm status and notify every listener once."""
        if not isinstance(status, AlarmStatus):
            raise InvalidStatusError(f"Not an alarm status: {status!r}")
        self._update_alarm_status(status)

    @track_errors(COMPONENT_NAME)
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Change the arming mode.

        Disarming clears the alarm. Arming resets every sensor to inactive
        and clears the alarm, unless the system is armed at home while the
        last image showed a cat, which raises the alarm straight away.
        """
        if not isinstance(arming_status, ArmingStatus):
            raise InvalidStatusError(f"Not an arming status: {arming_status!r}")

        self.security_repository.set_arming_status(arming_status)
        logger.info(f"Arming status set to {arming_status.name}")

        if arming_status == ArmingStatus.DISARMED:
            self._update_alarm_status(AlarmStatus.NO_ALARM)
            return

        self._reset_sensors()

        if self._cat_detected and arming_status == ArmingStatus.ARMED_HOME:
            self._update_alarm_status(AlarmStatus.ALARM)
        else:
            self._update_alarm_status(AlarmStatus.NO_ALARM)

    # Sensors

    def get_sensors(self) -> List[Sensor]:
        return sorted(self.security_repository.get_sensors())

    @track_errors(COMPONENT_NAME)
    def add_sensor(self, sensor: Sensor) -> None:
        self.security_repository.add_sensor(sensor)
        logger.info(f"Added {sensor.sensor_type.value} sensor {sensor.name}")

    @track_errors(COMPONENT_NAME)
    def remove_sensor(self, sensor: Sensor) -> None:
        self.security_repository.remove_sensor(sensor)
        logger.info(f"Removed sensor {sensor.name}")

    @track_errors(COMPONENT_NAME)
    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """Apply a sensor activation or deactivation."""
        active = bool(active)
        stored = self._find_stored_sensor(sensor)
        previous = sensor.active

        if stored.active == active:
            sensor.active = active
            # Re-triggering a sensor that is still active confirms a pending alarm.
            if active and self._is_armed() and self.get_alarm_status() == AlarmStatus.PENDING_ALARM:
                self._update_alarm_status(AlarmStatus.ALARM)
            else:
                logger.debug(f"Sensor {sensor.name} already {'active' if active else 'inactive'}")
            return

        sensor.active = active
        try:
            self.security_repository.update_sensor(sensor)
        except Exception:
            sensor.active = previous
            raise
        logger.info(f"Sensor {sensor.name} {'activated' if active else 'deactivated'}")

        alarm_status = self.get_alarm_status()
        if alarm_status != AlarmStatus.ALARM:
            if active:
                self._handle_sensor_activated(alarm_status)
            elif alarm_status == AlarmStatus.PENDING_ALARM:
                self._update_alarm_status(AlarmStatus.NO_ALARM)

        self._notify_sensor_status_changed()

    # Images

    @track_errors(COMPONENT_NAME)
    def process_image(self, image: Any) -> None:
        """Classify an image and react to whether it shows a cat."""
        cat = bool(self.image_service.image_contains_cat(image, self.confidence_threshold))
        self._cat_detected = cat
        logger.info(f"Image processed, cat detected: {cat}")

        if cat and self.get_arming_status() == ArmingStatus.ARMED_HOME:
            self._update_alarm_status(AlarmStatus.ALARM)
        elif not self._any_sensor_active():
            self._update_alarm_status(AlarmStatus.NO_ALARM)

        for listener in list(self._status_listeners):
            self._call_listener(listener, "cat_detected", cat)

    # Internals

    def _is_armed(self) -> bool:
        return self.get_arming_status().is_armed

    def _find_stored_sensor(self, sensor: Sensor) -> Sensor:
        """Return the repository copy of a sensor, which holds its real activity."""
        for stored in self.security_repository.get_sensors():
            if stored.name == sensor.name:
                return stored
        raise UnknownSensorError(sensor.name)

    def _update_alarm_status(self, status: AlarmStatus) -> None:
        self.security_repository.set_alarm_status(status)
        logger.info(f"Alarm status set to {status.name}")

        for listener in list(self._status_listeners):
            self._call_listener(listener, "notify", status)

    def _handle_sensor_activated(self, alarm_status: AlarmStatus) -> None:
        if not self._is_armed():
            return

        if alarm_status == AlarmStatus.NO_ALARM:
            self._update_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm_status == AlarmStatus.PENDING_ALARM:
            self._update_alarm_status(AlarmStatus.ALARM)

    def _any_sensor_active(self) -> bool:
        return any(sensor.active for sensor in self.security_repository.get_sensors())

    def _reset_sensors(self) -> None:
        """Mark every sensor inactive without running the activation rules."""
        for sensor in self.security_repository.get_sensors():
            sensor.active = False
            self.security_repository.update_sensor(sensor)
        self._notify_sensor_status_changed()

    def _notify_sensor_status_changed(self) -> None:
        for listener in list(self._status_listeners):
            self._call_listener(listener, "sensor_status_changed")

    def _call_listener(self, listener: StatusListener, callback: str, *args: Any) -> None:
        try:
            getattr(listener, callback)(*args)
        except Exception as e:
            logger.error(f"Listener {listener!r} failed in {callback}: {e}", exc_info=True)
            self.error_handler.handle_error(LISTENER_COMPONENT_NAME, e, ErrorSeverity.LOW)
