class LittleAlchemistError(Exception):
    """Base exception for the Little Alchemist project."""


class ElementNotFoundError(LittleAlchemistError, KeyError):
    """Raised when an element id is not present in the catalog."""

    def __init__(self, element_id: str) -> None:
        super().__init__(f"Unknown element id: {element_id}")
        self.element_id = element_id

    def __str__(self) -> str:
        return self.args[0]


class CapacityRejectedError(LittleAlchemistError):
    """Raised when a spawn is refused because the object pool is full."""


class ConfigurationError(LittleAlchemistError):
    """Raised when element, recipe or settings data is malformed (e.g., duplicate ids)."""
