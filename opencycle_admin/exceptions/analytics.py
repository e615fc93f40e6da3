"""Analytics exceptions."""

from opencycle_admin.exceptions.base import AppException


class MetricUnavailableError(AppException):
    """A metric could not be computed (storage failure or timeout)."""

    def __init__(self, metric: str, reason: str | None = None):
        """
        Initialize a MetricUnavailableError for the named metric.

        Parameters:
            metric (str): Name of the metric that could not be computed.
            reason (str | None): Optional short description of the underlying failure.
        """
        self.metric = metric
        self.reason = reason
        message = f"Metric '{metric}' is unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
