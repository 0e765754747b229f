"""Base abstract class for page drivers.

This module defines the interface generated page objects delegate to. A
generated page holds a reference to a driver and never depends on a concrete
automation engine; any engine adapter implementing these operations works.
"""

from abc import ABC, abstractmethod


class PageInteractionError(Exception):
    """Raised by drivers when an interaction with the page fails."""

    pass


class BasePageDriver(ABC):
    """Abstract base class for page driver implementations.

    Field arguments are registry constants of the form ``<strategy>:<value>``
    (``id:email``, ``name:q``, ``xpath:/html/body/form/input[2]``). Every
    operation may raise PageInteractionError; generated page objects let it
    propagate unchanged.
    """

    @abstractmethod
    def navigate(self, location: str) -> None:
        """Open the page at a URL or resources-relative path.

        Raises:
            PageInteractionError: If navigation fails
        """
        pass

    @abstractmethod
    def set_resources_root(self, path: str) -> None:
        """Set the root that relative locations are resolved against."""
        pass

    @abstractmethod
    def set_value(self, field: str, text: str) -> None:
        """Replace the value of a text-like field.

        Raises:
            PageInteractionError: If the field cannot be found or edited
        """
        pass

    @abstractmethod
    def click(self, field: str) -> None:
        """Click a field.

        Raises:
            PageInteractionError: If the field cannot be found or clicked
        """
        pass

    @abstractmethod
    def select_option(self, field: str, text: str) -> None:
        """Choose the option with the given visible text.

        Raises:
            PageInteractionError: If the field or option cannot be found
        """
        pass

    @staticmethod
    def split_field(field: str) -> tuple:
        """Split a registry constant into (strategy, value).

        Example:
            >>> BasePageDriver.split_field("id:email")
            ('id', 'email')
        """
        strategy, separator, value = field.partition(":")
        if not separator:
            raise PageInteractionError(f"Malformed field locator {field!r}")
        return strategy, value
