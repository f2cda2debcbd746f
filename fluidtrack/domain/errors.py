"""
Domain errors.

Aggregation errors (InvalidConfig, DataSourceUnavailable) fail the whole
request or trigger. ReportGenerationFailed is turned into an error-notice
report by the dispatcher. DeliveryFailed never leaves a single recipient's
delivery attempt.
"""


class FluidTrackError(Exception):
    """Base class for tracker errors"""


class InvalidConfig(FluidTrackError):
    """Limit, threshold or day-start values outside their allowed range"""


class DataSourceUnavailable(FluidTrackError):
    """The event store could not be read"""


class ReportGenerationFailed(FluidTrackError):
    """A report body could not be built"""


class DeliveryFailed(FluidTrackError):
    """A message could not be delivered to one recipient"""

    def __init__(self, recipient_id: int, reason: str):
        super().__init__(f"Delivery to {recipient_id} failed: {reason}")
        self.recipient_id = recipient_id
        self.reason = reason
