"""Rendering of field registry and page accessor artifacts.

This module provides the ArtifactEmitter class which turns a PageDescriptor
into the two generated Python modules of a page object.

PATTERN: Fill string templates in document order
CRITICAL: Output must be byte-identical for identical input (no timestamps,
no unordered iteration)
"""

import json
import logging
from typing import List

from src.browser.pom import templates
from src.browser.pom.naming import to_snake_case
from src.models.page_models import (
    ArtifactKind,
    CAPABILITY_ORDER,
    Capability,
    FieldDescriptor,
    GeneratedArtifact,
    PageDescriptor,
)

logger = logging.getLogger(__name__)


def python_literal(value: str) -> str:
    """Render a string as a double-quoted Python literal."""
    return json.dumps(value, ensure_ascii=False)


class ArtifactEmitter:
    """Render generated page object modules.

    Example:
        >>> emitter = ArtifactEmitter()
        >>> registry, page = emitter.emit(descriptor)
        >>> registry.path
        'example/ExampleField.py'
    """

    ACCESSOR_TEMPLATES = {
        Capability.SET_VALUE: templates.SET_VALUE_TEMPLATE,
        Capability.SELECT: templates.SELECT_TEMPLATE,
        Capability.CLICK: templates.CLICK_TEMPLATE,
    }

    def emit(self, page: PageDescriptor) -> List[GeneratedArtifact]:
        """Render both artifacts for a page.

        Args:
            page: Page descriptor with resolved fields

        Returns:
            [field registry, page accessor]
        """
        artifacts = [
            GeneratedArtifact(
                path=self.artifact_path(page, "Field"),
                content=self.render_registry(page),
                kind=ArtifactKind.FIELD_REGISTRY,
            ),
            GeneratedArtifact(
                path=self.artifact_path(page, "Page"),
                content=self.render_page(page),
                kind=ArtifactKind.PAGE_ACCESSOR,
            ),
        ]
        logger.info(
            f"Rendered {page.page_name} artifacts with {len(page.fields)} fields"
        )
        return artifacts

    def artifact_path(self, page: PageDescriptor, suffix: str) -> str:
        return "/".join(page.package_path + [f"{page.page_name}{suffix}.py"])

    def render_registry(self, page: PageDescriptor) -> str:
        constants = [
            templates.FIELD_CONSTANT_TEMPLATE.format(
                identifier=field.identifier,
                locator=python_literal(field.locator.render()),
            )
            for field in page.fields
        ]
        return templates.FIELD_REGISTRY_TEMPLATE.format(
            page_name=page.page_name,
            constants="\n".join(constants) or templates.EMPTY_BODY,
        )

    def render_page(self, page: PageDescriptor) -> str:
        accessors = "".join(self._render_accessors(page, field) for field in page.fields)
        return templates.PAGE_ACCESSOR_TEMPLATE.format(
            page_name=page.page_name,
            location=python_literal(page.location),
            resources_root=python_literal(page.resources_root),
            accessors=accessors,
        )

    def _render_accessors(self, page: PageDescriptor, field: FieldDescriptor) -> str:
        method = to_snake_case(field.identifier)
        rendered = []
        for capability in CAPABILITY_ORDER:
            if field.supports(capability):
                rendered.append(
                    self.ACCESSOR_TEMPLATES[capability].format(
                        page_name=page.page_name,
                        identifier=field.identifier,
                        method=method,
                    )
                )
        return "".join(rendered)
