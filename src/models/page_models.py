"""Data models for page object generation.

This module defines the Pydantic models that flow through the generation
pipeline: scanned candidate elements, resolved field descriptors, the page
descriptor handed to the emitter, and the generated artifacts themselves.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ElementKind(str, Enum):
    """Closed set of interactive element kinds."""

    TEXT_INPUT = "text_input"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    BUTTON = "button"
    SUBMIT = "submit"
    ANCHOR = "anchor"
    SELECT = "select"
    OTHER = "other"


class Capability(str, Enum):
    """Interactions a generated accessor can perform on a field."""

    SET_VALUE = "set_value"
    SELECT = "select"
    CLICK = "click"


# Emission order for accessors of a single field
CAPABILITY_ORDER: Tuple[Capability, ...] = (
    Capability.SET_VALUE,
    Capability.SELECT,
    Capability.CLICK,
)


class LocatorStrategy(str, Enum):
    """Locator strategies in preference order."""

    ID = "id"
    NAME = "name"
    XPATH = "xpath"


class ArtifactKind(str, Enum):
    """Kinds of generated source files."""

    FIELD_REGISTRY = "field_registry"
    PAGE_ACCESSOR = "page_accessor"


class Locator(BaseModel):
    """Locator strategy plus value."""

    model_config = ConfigDict(frozen=True)

    strategy: LocatorStrategy = Field(description="Locator strategy")
    value: str = Field(description="Locator value")

    def render(self) -> str:
        """Render as ``<strategy>:<value>``."""
        return f"{self.strategy.value}:{self.value}"


class CandidateElement(BaseModel):
    """Interactive element discovered by the scanner."""

    scan_index: int = Field(ge=1, description="1-based position in scan order")
    tag: str = Field(description="Lower-cased tag name")
    kind: ElementKind = Field(description="Classified element kind")
    type: Optional[str] = Field(default=None, description="Lower-cased type attribute")
    id: Optional[str] = Field(default=None, description="id attribute")
    name: Optional[str] = Field(default=None, description="name attribute")
    placeholder: Optional[str] = Field(default=None, description="placeholder attribute")
    text: Optional[str] = Field(default=None, description="Collapsed visible text")
    label: Optional[str] = Field(
        default=None, description="aria-label or associated <label> text"
    )
    role: Optional[str] = Field(default=None, description="Explicit ARIA role")
    ancestor_path: List[str] = Field(
        default_factory=list, description="Ancestor tag names, root first"
    )
    attributes: Dict[str, str] = Field(
        default_factory=dict, description="Raw element attributes"
    )
    node_path: str = Field(description="Absolute positional path of the node")


class FieldDescriptor(BaseModel):
    """Resolved, uniquely named field of a page."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(description="Letter-leading alphanumeric identifier")
    locator: Locator = Field(description="Locator unique in the source document")
    capabilities: Tuple[Capability, ...] = Field(description="Supported interactions")
    kind: ElementKind = Field(description="Element kind")
    scan_index: int = Field(ge=1, description="Source candidate scan index")

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities


class PageDescriptor(BaseModel):
    """Everything the emitter needs to render one page."""

    location: str = Field(description="Originating URL or file path")
    page_name: str = Field(description="Derived page class prefix")
    package_path: List[str] = Field(
        default_factory=list, description="Output package path segments"
    )
    resources_root: str = Field(default=".", description="Resources root path")
    fields: List[FieldDescriptor] = Field(
        default_factory=list, description="Fields in document order"
    )


class GeneratedArtifact(BaseModel):
    """One rendered source file."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Target path relative to the output root")
    content: str = Field(description="Rendered file content")
    kind: ArtifactKind = Field(description="Artifact kind")


class FieldDiagnostic(BaseModel):
    """Non-fatal per-field problem reported during generation."""

    scan_index: int = Field(description="Scan index of the affected candidate")
    field_name: Optional[str] = Field(default=None, description="Assigned identifier")
    message: str = Field(description="Human-readable description")
    dropped: bool = Field(default=False, description="Whether the field was skipped")

    def format(self) -> str:
        label = self.field_name or "unnamed"
        return f"field #{self.scan_index} ({label}): {self.message}"


class GenerationResult(BaseModel):
    """Outcome of one generation run."""

    page: PageDescriptor
    artifacts: List[GeneratedArtifact] = Field(default_factory=list)
    diagnostics: List[FieldDiagnostic] = Field(default_factory=list)
    written_paths: List[str] = Field(default_factory=list)

    @property
    def dropped_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.dropped)
