"""Locator selection for generated page fields.

This module provides the LocatorSelector class which picks, for each scanned
candidate, the most stable locator that matches exactly one node of the
source document.

PATTERN: Try strategies in priority order, validate uniqueness against the document
CRITICAL: A locator is only emitted after it re-evaluates to exactly one node
"""

import logging
from typing import Dict, Optional

from lxml import etree

from src.browser.errors import AmbiguousLocatorError
from src.models.page_models import CandidateElement, Locator, LocatorStrategy

logger = logging.getLogger(__name__)


def xpath_literal(value: str) -> str:
    """Quote a string for use inside an XPath 1.0 expression.

    XPath 1.0 has no escape sequences, so values containing both quote kinds
    are assembled with concat().

    Example:
        >>> xpath_literal("it's")
        '"it\\'s"'
    """
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'

    parts = []
    for index, chunk in enumerate(value.split("'")):
        if index:
            parts.append('"\'"')
        if chunk:
            parts.append(f"'{chunk}'")
    return f"concat({', '.join(parts)})"


class LocatorSelector:
    """Select and validate unique locators within one document.

    Strategies, in priority order:
    1. id - if present and unique across the whole document
    2. name - if present and unique
    3. xpath - absolute positional path plus the node's stable attributes

    The selector caches match counts per expression; create one per document.

    Example:
        >>> selector = LocatorSelector(root)
        >>> selector.select(candidate).render()
        'id:email'
    """

    # Attributes added as predicates to structural paths
    STRUCTURAL_ATTRIBUTES = (
        "type",
        "name",
        "placeholder",
        "role",
        "href",
        "value",
    )

    INVALID_EXPRESSION = -1

    def __init__(self, root: etree._Element):
        """Initialize the selector for a parsed document.

        Args:
            root: Root element of the source document
        """
        self.root = root
        self._match_cache: Dict[str, int] = {}

    def select(self, candidate: CandidateElement) -> Locator:
        """Select the best unique locator for a candidate.

        Args:
            candidate: Scanned candidate element

        Returns:
            Locator matching exactly one node

        Raises:
            AmbiguousLocatorError: If no strategy yields a unique match
        """
        locator = self._attribute_locator(LocatorStrategy.ID, candidate.id)
        if locator is None:
            locator = self._attribute_locator(LocatorStrategy.NAME, candidate.name)
        if locator is None:
            locator = Locator(
                strategy=LocatorStrategy.XPATH,
                value=self.structural_expression(candidate),
            )

        self.verify(locator)
        logger.debug(f"Candidate #{candidate.scan_index} located by {locator.render()}")
        return locator

    def verify(self, locator: Locator) -> None:
        """Re-evaluate a locator against the document.

        Raises:
            AmbiguousLocatorError: If it does not match exactly one node
        """
        expression = self.expression_for(locator)
        matches = self.count_matches(expression)

        if matches == self.INVALID_EXPRESSION:
            raise AmbiguousLocatorError(
                f"locator {locator.render()} is not a valid expression",
                expression=expression,
                matches=0,
            )
        if matches != 1:
            raise AmbiguousLocatorError(
                f"locator {locator.render()} matches {matches} elements (expected 1)",
                expression=expression,
                matches=matches,
            )

    def expression_for(self, locator: Locator) -> str:
        """XPath expression equivalent to a locator."""
        if locator.strategy is LocatorStrategy.XPATH:
            return locator.value
        return f"//*[@{locator.strategy.value}={xpath_literal(locator.value)}]"

    def count_matches(self, expression: str) -> int:
        """Count nodes matched by an XPath expression, cached per document.

        Returns:
            Number of matching nodes, or INVALID_EXPRESSION if evaluation fails
        """
        if expression in self._match_cache:
            return self._match_cache[expression]

        try:
            result = self.root.xpath(expression)
            matches = len(result) if isinstance(result, list) else self.INVALID_EXPRESSION
        except (etree.XPathError, ValueError) as e:
            logger.debug(f"Invalid XPath expression {expression}: {e}")
            matches = self.INVALID_EXPRESSION

        self._match_cache[expression] = matches
        return matches

    def structural_expression(self, candidate: CandidateElement) -> str:
        """Build an absolute path expression for a candidate.

        The positional path identifies the node on its own; attribute
        predicates are appended to the last step.

        Example:
            >>> selector.structural_expression(candidate)
            "/html/body/form/input[2][@type='text']"
        """
        predicates = []
        for attribute in self.STRUCTURAL_ATTRIBUTES:
            value = candidate.attributes.get(attribute)
            if value is not None:
                predicates.append(f"[@{attribute}={xpath_literal(value)}]")
        return candidate.node_path + "".join(predicates)

    def _attribute_locator(
        self, strategy: LocatorStrategy, value: Optional[str]
    ) -> Optional[Locator]:
        if not value:
            return None

        locator = Locator(strategy=strategy, value=value)
        matches = self.count_matches(self.expression_for(locator))
        if matches == 1:
            return locator

        logger.debug(
            f"{strategy.value} '{value}' matches {matches} elements, trying next strategy"
        )
        return None
