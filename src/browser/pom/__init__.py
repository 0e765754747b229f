"""Page Object Model (POM) generation from HTML documents.

This package provides the generation pipeline: document acquisition,
field naming, locator selection, capability classification, artifact
rendering and the all-or-nothing artifact writer.
"""

from src.browser.pom.pom_generator import POMGenerator
from src.browser.pom.element_selector import LocatorSelector

__all__ = [
    "POMGenerator",
    "LocatorSelector",
]
