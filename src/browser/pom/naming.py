"""Identifier derivation for generated fields and pages.

This module turns raw attribute values, visible text and host names into
letter-leading alphanumeric identifiers, and resolves collisions between
fields of the same page.

PATTERN: Derive → Sanitize → Make unique (case-insensitive)
CRITICAL: Candidates must be assigned in document order; suffixes depend on it
"""

import ipaddress
import keyword
import logging
import re
from typing import List, Optional, Set, Tuple

from src.models.page_models import CandidateElement

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")
_TOKENS = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")
_SNAKE_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# Second-level labels registries place under country-code top-level domains
GENERIC_SECOND_LEVEL_LABELS = {
    "ac",
    "co",
    "com",
    "edu",
    "go",
    "gov",
    "ne",
    "net",
    "or",
    "org",
}

SYNTHETIC_PREFIX = "Field"
DEFAULT_PAGE_NAME = "Document"


def split_tokens(raw: str) -> List[str]:
    """Split a raw string on separator and casing boundaries.

    Example:
        >>> split_tokens("user_emailAddress")
        ['user', 'email', 'Address']
    """
    return _TOKENS.findall(_SEPARATORS.sub(" ", raw))


def sanitize_identifier(raw: Optional[str]) -> str:
    """Convert a raw string into a TitleCase identifier.

    Leading digit tokens are dropped so the result starts with a letter.
    Returns an empty string when nothing usable remains.

    Example:
        >>> sanitize_identifier("first-name")
        'FirstName'
        >>> sanitize_identifier("HTMLParser")
        'HtmlParser'
    """
    if not raw:
        return ""

    tokens = split_tokens(raw)
    while tokens and tokens[0].isdigit():
        tokens.pop(0)

    identifier = "".join(token[:1].upper() + token[1:].lower() for token in tokens)

    # None/True/False survive title-casing as keywords
    if keyword.iskeyword(identifier):
        identifier = f"{identifier}{SYNTHETIC_PREFIX}"

    return identifier


def to_snake_case(identifier: str) -> str:
    """Convert a TitleCase identifier to snake_case for method names."""
    return _SNAKE_BOUNDARY.sub("_", identifier).lower()


def derive_host_naming(host: str) -> Tuple[str, List[str]]:
    """Derive a page name and package path from a URL host.

    The top-level label is dropped, and so is a generic second-level label
    under a two-letter country code. The last remaining label names the page;
    the remaining labels, reversed, form the package path.

    Example:
        >>> derive_host_naming("mail.google.co.uk")
        ('Google', ['google', 'mail'])
        >>> derive_host_naming("www.my-shop.com:8080")
        ('MyShop', ['myshop'])
    """
    host = host.strip().lower().rstrip(".")
    if host.startswith("["):
        host = host[1 : host.find("]")] if "]" in host else host[1:]
    elif host.count(":") == 1:
        host = host.split(":", 1)[0]

    try:
        address = ipaddress.ip_address(host)
        digits = re.sub(r"[^0-9a-f]", "", address.exploded)
        return f"Host{digits}", [f"host{digits}"]
    except ValueError:
        pass

    labels = [label for label in host.split(".") if label]
    if len(labels) > 1 and labels[0] == "www":
        labels = labels[1:]

    if len(labels) > 1:
        top_level = labels.pop()
        if (
            len(top_level) == 2
            and len(labels) > 1
            and labels[-1] in GENERIC_SECOND_LEVEL_LABELS
        ):
            labels.pop()

    segments = [sanitize_identifier(label).lower() for label in reversed(labels)]
    segments = [segment for segment in segments if segment]

    page_name = sanitize_identifier(labels[-1]) if labels else ""
    if not page_name:
        page_name = DEFAULT_PAGE_NAME

    return page_name, segments or [page_name.lower()]


def derive_file_naming(stem: str) -> Tuple[str, List[str]]:
    """Derive a page name and package path from a file name stem."""
    page_name = sanitize_identifier(stem) or DEFAULT_PAGE_NAME
    return page_name, [page_name.lower()]


class FieldNameResolver:
    """Assign unique field identifiers in document order.

    Holds the running, case-insensitive set of names assigned so far. One
    resolver is created per generation run and never shared between runs.

    Name source priority:
    1. id attribute
    2. name attribute
    3. visible text, then accessible label
    4. placeholder
    5. synthetic Field<scanIndex>

    Example:
        >>> resolver = FieldNameResolver()
        >>> resolver.assign(candidate_with_name_q)
        'Q'
        >>> resolver.assign(another_candidate_with_name_q)
        'Q2'
    """

    def __init__(self, max_text_length: int = 50):
        self.max_text_length = max_text_length
        self._assigned: Set[str] = set()

    def base_name(self, candidate: CandidateElement) -> str:
        """Derive the unsuffixed identifier for a candidate."""
        source = self._name_source(candidate)
        identifier = sanitize_identifier(source)
        if not identifier:
            identifier = f"{SYNTHETIC_PREFIX}{candidate.scan_index}"
            logger.debug(
                f"Candidate #{candidate.scan_index} has no usable name source, "
                f"using {identifier}"
            )
        return identifier

    def propose(self, candidate: CandidateElement) -> str:
        """Return the name the candidate would get, without reserving it."""
        return self._make_unique(self.base_name(candidate))

    def assign(self, candidate: CandidateElement) -> str:
        """Reserve and return a unique identifier for the candidate."""
        identifier = self.propose(candidate)
        self._assigned.add(identifier.lower())
        return identifier

    def _name_source(self, candidate: CandidateElement) -> Optional[str]:
        for value in (candidate.id, candidate.name):
            if value and value.strip():
                return value

        if candidate.text and len(candidate.text) <= self.max_text_length:
            return candidate.text

        for value in (candidate.label, candidate.placeholder):
            if value and value.strip():
                return value

        return None

    def _make_unique(self, base_name: str) -> str:
        if base_name.lower() not in self._assigned:
            return base_name

        suffix = 2
        while f"{base_name}{suffix}".lower() in self._assigned:
            suffix += 1
        return f"{base_name}{suffix}"
