"""Models package for the page object generator."""

from .page_models import (
    ElementKind,
    Capability,
    CAPABILITY_ORDER,
    LocatorStrategy,
    ArtifactKind,
    Locator,
    CandidateElement,
    FieldDescriptor,
    PageDescriptor,
    GeneratedArtifact,
    FieldDiagnostic,
    GenerationResult,
)

__all__ = [
    # Enums
    "ElementKind",
    "Capability",
    "CAPABILITY_ORDER",
    "LocatorStrategy",
    "ArtifactKind",
    # Pipeline models
    "Locator",
    "CandidateElement",
    "FieldDescriptor",
    "PageDescriptor",
    "GeneratedArtifact",
    "FieldDiagnostic",
    "GenerationResult",
]
