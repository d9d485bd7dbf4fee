class SkyEventsError(Exception):
    """Base error."""

class LocationResolutionError(SkyEventsError):
    """Raised when no time zone can be resolved for a geographic location."""

class ModelUnavailableError(SkyEventsError):
    """Raised when a position model (or the optional extra it needs) is not available."""
