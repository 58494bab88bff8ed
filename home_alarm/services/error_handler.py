"""Error tracking for the home alarm system.

Errors are recorded per component and then re-raised to the caller. The
engine never retries a failed collaborator and never substitutes a fallback
alarm status, so the only job here is bookkeeping and logging.
"""

import functools
import traceback
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field
from enum import Enum

from ..logging_config import get_logger

logger = get_logger("error_handler")


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComponentStatus(Enum):
    """Component status levels."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass
class ErrorRecord:
    """Record of an error occurrence."""
    component_name: str
    error: Exception
    severity: ErrorSeverity
    timestamp: datetime = field(default_factory=datetime.now)
    traceback_str: str = ""


class ErrorHandler:
    """Records errors per component and tracks component health."""

    def __init__(self, max_records: int = 500):
        self.max_records = max_records
        self.error_records: List[ErrorRecord] = []
        self.component_error_counts: Dict[str, int] = {}
        self.component_status: Dict[str, ComponentStatus] = {}

    def register_component(self, component_name: str) -> None:
        """Register a component for error tracking."""
        self.component_error_counts.setdefault(component_name, 0)
        self.component_status.setdefault(component_name, ComponentStatus.HEALTHY)
        logger.debug(f"Component registered: {component_name}")

    def handle_error(self, component_name: str, error: Exception, severity: ErrorSeverity) -> ErrorRecord:
        """Record an error from a component."""
        error_record = ErrorRecord(
            component_name=component_name,
            error=error,
            severity=severity,
            traceback_str="".join(traceback.format_exception(type(error), error, error.__traceback__))
        )

        self.error_records.append(error_record)
        if len(self.error_records) > self.max_records:
            del self.error_records[:len(self.error_records) - self.max_records]

        self.component_error_counts[component_name] = self.component_error_counts.get(component_name, 0) + 1

        if severity == ErrorSeverity.CRITICAL:
            self.component_status[component_name] = ComponentStatus.FAILED
        elif severity == ErrorSeverity.HIGH:
            self.component_status[component_name] = ComponentStatus.DEGRADED
        else:
            self.component_status.setdefault(component_name, ComponentStatus.HEALTHY)

        if severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM):
            logger.warning(f"Error in {component_name}: {error} (Severity: {severity.value})")
        else:
            logger.error(f"Error in {component_name}: {error} (Severity: {severity.value})")

        return error_record

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics."""
        return {
            "total_errors": len(self.error_records),
            "component_error_counts": dict(self.component_error_counts),
            "component_status": {name: status.value for name, status in self.component_status.items()}
        }

    def get_component_health(self) -> Dict[str, ComponentStatus]:
        """Get health status of all registered components."""
        return dict(self.component_status)

    def reset_error_counts(self, component_name: Optional[str] = None) -> None:
        """Reset error counts for a component or all components."""
        components = [component_name] if component_name else list(self.component_error_counts)
        for component in components:
            if component in self.component_error_counts:
                self.component_error_counts[component] = 0
                self.component_status[component] = ComponentStatus.HEALTHY

    def get_error_summary(self, hours: int = 24) -> Dict[str, Any]:
        """Get summary of errors in the last N hours."""
        cutoff_time = datetime.now() - timedelta(hours=hours)
        recent_errors = [e for e in self.error_records if e.timestamp >= cutoff_time]

        component_counts: Dict[str, int] = {}
        severity_counts = {severity.value: 0 for severity in ErrorSeverity}

        for error in recent_errors:
            component_counts[error.component_name] = component_counts.get(error.component_name, 0) + 1
            severity_counts[error.severity.value] += 1

        return {
            "total_errors": len(recent_errors),
            "component_counts": component_counts,
            "severity_counts": severity_counts,
            "time_period_hours": hours
        }


# Create global error handler instance
global_error_handler = ErrorHandler()


def track_errors(component_name: str, severity: ErrorSeverity = ErrorSeverity.HIGH):
    """Decorator that records any exception and re-raises it.

    Invalid-argument errors (``ValueError`` subclasses) are recorded as LOW
    severity since they do not indicate a failing component. Methods whose
    instance carries an ``error_handler`` attribute report there; everything
    else reports to the global handler.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                handler = getattr(args[0], "error_handler", None) if args else None
                if not isinstance(handler, ErrorHandler):
                    handler = global_error_handler
                level = ErrorSeverity.LOW if isinstance(e, ValueError) else severity
                handler.handle_error(component_name, e, level)
                raise
        return wrapper
    return decorator
