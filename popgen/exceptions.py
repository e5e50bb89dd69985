class DistrictNotFoundError(KeyError):
    """Raised when a district name has no entry in the census table."""

    def __init__(self, name):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"No district available named: {self.name}"


class CapacityError(ValueError):
    """Raised when the city cannot employ all of its inhabitants."""


class WorkplaceCapacityError(CapacityError):
    """Raised when no district has a free workplace left."""
