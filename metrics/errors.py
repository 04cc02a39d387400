"""Errors raised and returned by the metrics engine"""
from typing import Optional


class MetricsError(Exception):
    """Base class for metrics engine errors"""
    pass


class MissingParameterError(MetricsError):
    """Raised when a required snapshot argument is absent"""

    def __init__(self, parameter: str):
        super().__init__(f"Missing required parameter {parameter}")
        self.parameter = parameter


class InvalidSnapshotError(MetricsError):
    """Raised when a monitoring snapshot does not have the expected shape"""

    def __init__(self, parameter: str, detail: str):
        super().__init__(f"Invalid parameter {parameter}: {detail}")
        self.parameter = parameter
        self.detail = detail


class ConflictError(MetricsError):
    """Raised when a family name is reused with a different type or help text"""

    def __init__(self, name: str, existing: Optional[str] = None, requested: Optional[str] = None):
        message = f"Metric family {name} is already registered with different metadata"
        if existing and requested:
            message += f" (existing: {existing}, requested: {requested})"
        super().__init__(message)
        self.name = name
        self.existing = existing
        self.requested = requested


class NotFoundError(MetricsError, KeyError):
    """Raised when a family or sample lookup misses"""

    def __str__(self):
        return str(self.args[0]) if self.args else "not found"


class InvalidLabelSetError(MetricsError, ValueError):
    """Raised when a sample's label keys differ from its family's label names"""
    pass


class InvalidNameError(MetricsError, ValueError):
    """Raised when a metric or label name is not valid in the exposition format"""
    pass
