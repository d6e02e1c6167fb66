"""Exception types raised by RouteMeter."""


class RouteMeterError(Exception):
    """Base class for all RouteMeter errors."""
    pass


class ConfigurationError(RouteMeterError):
    """Raised when an endpoint, route policy or scenario configuration is invalid."""
    pass


class MeterRegistryError(RouteMeterError):
    """Raised when the meter registry rejects an operation."""
    pass


class MeterTypeConflictError(MeterRegistryError):
    """Raised when a name and tag set is already registered as another meter type."""

    def __init__(self, name: str, tags, existing_type: str, requested_type: str):
        self.name = name
        self.tags = tags
        self.existing_type = existing_type
        self.requested_type = requested_type
        super().__init__(
            f"Meter '{name}' with tags {tags} is already registered as "
            f"{existing_type}, cannot register it as {requested_type}"
        )
