"""Custom exceptions for the maintenance core."""


class MaintenanceError(Exception):
    """Base exception for all maintenance-core errors."""

    pass


class ValidationError(MaintenanceError):
    """Exception raised when caller input violates a required field or value range."""

    pass


class InvalidRuleError(ValidationError):
    """Exception raised for a malformed recurrence rule."""

    pass


class InvalidTransitionError(MaintenanceError):
    """Exception raised when a status change is not a legal edge."""

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move task from '{_value(current)}' to '{_value(target)}'")


class ImmutableRecordError(MaintenanceError):
    """Exception raised when editing a completed or cancelled task."""

    pass


class NotFoundError(MaintenanceError):
    """Exception raised when a task ID does not resolve."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class ConcurrentModificationError(MaintenanceError):
    """Exception raised when a task's status changed between load and save."""

    def __init__(self, task_id: str, expected, actual):
        self.task_id = task_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Task {task_id} was modified concurrently "
            f"(expected status '{_value(expected)}', found '{_value(actual)}')"
        )


def _value(status) -> str:
    return getattr(status, "value", status)
