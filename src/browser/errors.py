"""Error taxonomy for page object generation.

Every error carries the pipeline stage it was raised in so the command line
can report which part of the run failed.
"""

from typing import Optional


class GenerationError(Exception):
    """Base class for generation failures."""

    stage = "generate"

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        if stage:
            self.stage = stage


class FetchError(GenerationError):
    """Raised when a document cannot be retrieved."""

    stage = "fetch"


class RedirectLoopError(FetchError):
    """Raised when the redirect hop bound is exceeded."""

    pass


class ParseError(GenerationError):
    """Raised when content cannot be parsed even leniently."""

    stage = "parse"


class AmbiguousLocatorError(GenerationError):
    """Raised when a field locator does not match exactly one node."""

    stage = "locate"

    def __init__(self, message: str, expression: str = "", matches: int = 0):
        super().__init__(message)
        self.expression = expression
        self.matches = matches


class WriteError(GenerationError):
    """Raised when artifacts cannot be committed to disk."""

    stage = "write"
