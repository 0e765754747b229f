"""Browser-facing components of the page object generator.

Holds the element scanner, the error taxonomy and the page driver contract
consumed by generated page objects.
"""

from src.browser.base import BasePageDriver, PageInteractionError
from src.browser.errors import (
    GenerationError,
    FetchError,
    RedirectLoopError,
    ParseError,
    AmbiguousLocatorError,
    WriteError,
)

__all__ = [
    "BasePageDriver",
    "PageInteractionError",
    "GenerationError",
    "FetchError",
    "RedirectLoopError",
    "ParseError",
    "AmbiguousLocatorError",
    "WriteError",
]
