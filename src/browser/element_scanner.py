"""Interactive element discovery over parsed HTML documents.

This module provides the ElementScanner class which walks an lxml document
tree in document order and yields CandidateElement models for every node a
page object should expose.

PATTERN: Depth-first walk with subtree pruning → classify → extract attributes
CRITICAL: Output order must be stable across runs on the same document
"""

import logging
import re
from typing import Dict, Iterator, List, Optional, Tuple

from lxml import etree

from src.models.page_models import CandidateElement, ElementKind

logger = logging.getLogger(__name__)


class ElementScanner:
    """Walk a document tree and collect interactive candidates.

    Selection:
    1. input (any type except hidden), textarea, select, button
    2. a elements carrying an href
    3. any element with an explicit interactive ARIA role

    Excluded: non-rendered containers (script, style, ...), hidden subtrees,
    disabled controls and everything inside a disabled fieldset.

    Example:
        >>> scanner = ElementScanner()
        >>> candidates = scanner.scan(lxml.html.document_fromstring(html))
        >>> [c.tag for c in candidates]
        ['input', 'button']
    """

    # Subtrees that never contain interactive content
    EXCLUDED_TAGS = {
        "head",
        "meta",
        "noscript",
        "script",
        "style",
        "template",
    }

    TEXT_INPUT_TYPES = {
        "date",
        "datetime-local",
        "email",
        "file",
        "month",
        "number",
        "password",
        "search",
        "tel",
        "text",
        "time",
        "url",
        "week",
    }

    BUTTON_INPUT_TYPES = {
        "button": ElementKind.BUTTON,
        "reset": ElementKind.BUTTON,
        "submit": ElementKind.SUBMIT,
        "image": ElementKind.SUBMIT,
    }

    ROLE_KINDS = {
        "button": ElementKind.BUTTON,
        "link": ElementKind.ANCHOR,
        "checkbox": ElementKind.CHECKBOX,
        "switch": ElementKind.CHECKBOX,
        "radio": ElementKind.RADIO,
        "textbox": ElementKind.TEXT_INPUT,
        "searchbox": ElementKind.TEXT_INPUT,
        "combobox": ElementKind.OTHER,
        "listbox": ElementKind.OTHER,
        "option": ElementKind.OTHER,
        "menuitem": ElementKind.OTHER,
        "tab": ElementKind.OTHER,
        "slider": ElementKind.OTHER,
        "spinbutton": ElementKind.OTHER,
    }

    _HIDDEN_STYLE = re.compile(
        r"(?:^|;)\s*(?:display\s*:\s*none|visibility\s*:\s*hidden)\s*(?:!important)?\s*(?:;|$)",
        re.IGNORECASE,
    )

    def scan(self, root: etree._Element) -> List[CandidateElement]:
        """Collect candidate elements in document order.

        Args:
            root: Root element of a parsed document

        Returns:
            Candidates with 1-based scan indices
        """
        tree = root.getroottree()
        labels = self._collect_labels(root)
        candidates: List[CandidateElement] = []

        for element, ancestors in self._walk(root):
            kind = self._classify_kind(element)
            if kind is None:
                continue

            candidate = self._build_candidate(
                element=element,
                kind=kind,
                ancestors=ancestors,
                scan_index=len(candidates) + 1,
                node_path=tree.getpath(element),
                labels=labels,
            )
            candidates.append(candidate)
            logger.debug(
                f"Candidate #{candidate.scan_index}: <{candidate.tag}> "
                f"kind={candidate.kind.value} path={candidate.node_path}"
            )

        logger.info(f"Scanned {len(candidates)} interactive candidates")
        return candidates

    def _walk(
        self, root: etree._Element
    ) -> Iterator[Tuple[etree._Element, List[str]]]:
        """Yield visible, enabled elements with their ancestor tags.

        Iterative pre-order traversal, so deep documents do not hit the
        recursion limit.
        """
        stack: List[Tuple[etree._Element, List[str]]] = [(root, [])]

        while stack:
            element, ancestors = stack.pop()
            if not isinstance(element.tag, str):
                # Comments and processing instructions
                continue

            tag = element.tag.lower()
            if not self._renders(element):
                continue

            disabled = "disabled" in element.attrib
            if tag == "fieldset" and disabled:
                continue

            if not disabled:
                yield element, ancestors

            child_ancestors = ancestors + [tag]
            children = [child for child in element if isinstance(child.tag, str)]
            for child in reversed(children):
                stack.append((child, child_ancestors))

    def _is_hidden(self, element: etree._Element) -> bool:
        if "hidden" in element.attrib:
            return True
        if (element.get("aria-hidden") or "").strip().lower() == "true":
            return True
        style = element.get("style")
        return bool(style and self._HIDDEN_STYLE.search(style))

    def _classify_kind(self, element: etree._Element) -> Optional[ElementKind]:
        """Map a node to its element kind, or None if it is not interactive."""
        tag = element.tag.lower()
        input_type = (element.get("type") or "").strip().lower()

        if tag == "input":
            if input_type == "hidden":
                return None
            if not input_type or input_type in self.TEXT_INPUT_TYPES:
                return ElementKind.TEXT_INPUT
            if input_type == "checkbox":
                return ElementKind.CHECKBOX
            if input_type == "radio":
                return ElementKind.RADIO
            if input_type in self.BUTTON_INPUT_TYPES:
                return self.BUTTON_INPUT_TYPES[input_type]
            return ElementKind.OTHER

        if tag == "textarea":
            return ElementKind.TEXTAREA
        if tag == "select":
            return ElementKind.SELECT
        if tag == "button":
            if input_type in ("", "submit"):
                return ElementKind.SUBMIT
            return ElementKind.BUTTON
        if tag == "a" and element.get("href") is not None:
            return ElementKind.ANCHOR

        role = self._role(element)
        if role in self.ROLE_KINDS:
            return self.ROLE_KINDS[role]

        return None

    def _build_candidate(
        self,
        element: etree._Element,
        kind: ElementKind,
        ancestors: List[str],
        scan_index: int,
        node_path: str,
        labels: Dict[str, str],
    ) -> CandidateElement:
        element_id = element.get("id")
        label = self._clean(element.get("aria-label"))
        if not label and element_id:
            label = labels.get(element_id)
        if not label:
            label = self._enclosing_label(element)

        return CandidateElement(
            scan_index=scan_index,
            tag=element.tag.lower(),
            kind=kind,
            type=(element.get("type") or "").strip().lower() or None,
            id=element_id,
            name=element.get("name"),
            placeholder=element.get("placeholder"),
            text=self._visible_text(element, kind),
            label=label,
            role=self._role(element),
            ancestor_path=ancestors,
            attributes={str(key): value for key, value in element.attrib.items()},
            node_path=node_path,
        )

    def _visible_text(
        self, element: etree._Element, kind: ElementKind
    ) -> Optional[str]:
        """Text a user would read on the control itself.

        Value-bearing controls (text inputs, textareas, selects) have no label
        text of their own; their content is data, not a name.
        """
        if element.tag.lower() == "input":
            if kind in (ElementKind.BUTTON, ElementKind.SUBMIT):
                return self._clean(element.get("value") or element.get("alt"))
            return None

        if kind in (ElementKind.TEXT_INPUT, ElementKind.TEXTAREA, ElementKind.SELECT):
            return None

        return self._clean(self._rendered_text(element))

    def _collect_labels(self, root: etree._Element) -> Dict[str, str]:
        """Map label[for] targets to their label text; first label wins."""
        labels: Dict[str, str] = {}
        for label in root.iter("label"):
            target = label.get("for")
            text = self._clean(self._rendered_text(label))
            if target and text and target not in labels:
                labels[target] = text
        return labels

    def _enclosing_label(self, element: etree._Element) -> Optional[str]:
        for ancestor in element.iterancestors("label"):
            return self._clean(self._rendered_text(ancestor))
        return None

    def _rendered_text(self, element: etree._Element) -> str:
        """Concatenate text nodes, skipping the subtrees _walk prunes.

        Tails of skipped children stay: they belong to the parent.
        """
        parts: List[str] = []
        stack: List[Tuple[etree._Element, str]] = [(element, "open")]

        while stack:
            node, action = stack.pop()
            if action == "tail":
                if node.tail:
                    parts.append(node.tail)
                continue

            if node.text:
                parts.append(node.text)
            for child in reversed(list(node)):
                stack.append((child, "tail"))
                if self._renders(child):
                    stack.append((child, "open"))

        return "".join(parts)

    def _renders(self, element: etree._Element) -> bool:
        if not isinstance(element.tag, str):
            return False
        return element.tag.lower() not in self.EXCLUDED_TAGS and not self._is_hidden(element)

    @staticmethod
    def _role(element: etree._Element) -> Optional[str]:
        role = (element.get("role") or "").strip().lower()
        # The first token of a role list is the effective role
        return role.split()[0] if role else None

    @staticmethod
    def _clean(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        collapsed = " ".join(value.split())
        return collapsed or None
