"""Document acquisition from URLs and local files.

This module provides the DocumentAcquirer class which fetches or reads an
HTML source, parses it leniently with lxml, and derives the page name and
package path used for the generated artifacts.

PATTERN: Resolve location → fetch/read (bounded) → lenient parse → derive naming
CRITICAL: Fetching is the only blocking step; it is always time-bounded and
never retried here
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

import httpx
from lxml import etree
from lxml import html as lxml_html

from src.browser.errors import FetchError, ParseError, RedirectLoopError
from src.browser.pom.naming import derive_file_naming, derive_host_naming

logger = logging.getLogger(__name__)

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)
# Characters libxml2 rejects outright; browsers drop or replace them
_CONTROL_CHARACTERS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


@dataclass
class AcquiredDocument:
    """Parsed document plus naming derived from its location."""

    location: str
    root: etree._Element
    page_name: str
    package_path: List[str] = field(default_factory=list)
    is_remote: bool = False
    final_url: Optional[str] = None


def parse_document(content: str, location: str = "<string>") -> etree._Element:
    """Parse HTML leniently, mirroring browser error recovery.

    Args:
        content: Decoded HTML source
        location: Source description for error messages

    Returns:
        Root element of the parsed document

    Raises:
        ParseError: If nothing can be recovered from the content
    """
    content = _XML_DECLARATION.sub("", content, count=1)
    content = _CONTROL_CHARACTERS.sub("", content)
    if not content.strip():
        raise ParseError(f"Document {location} is empty")

    try:
        return lxml_html.document_fromstring(content)
    except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
        raise ParseError(f"Failed to parse {location}: {e}")


def decode_bytes(data: bytes) -> str:
    """Decode file content as UTF-8, falling back to Latin-1."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


class DocumentAcquirer:
    """Resolve a URL or local path into a parsed document.

    Example:
        >>> acquirer = DocumentAcquirer(timeout=5.0)
        >>> document = acquirer.acquire(url="https://www.example.com/login")
        >>> document.page_name
        'Example'
    """

    SUPPORTED_SCHEMES = ("http", "https")

    def __init__(
        self,
        timeout: float = 10.0,
        max_redirects: int = 5,
        user_agent: str = "pomgen/0.1",
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the acquirer.

        Args:
            timeout: Fetch timeout in seconds
            max_redirects: Maximum redirect hops followed
            user_agent: User-Agent header value
            transport: Optional httpx transport (used in tests)
        """
        self.timeout = timeout
        self.max_redirects = max_redirects
        self.user_agent = user_agent
        self.transport = transport

    def acquire(
        self, url: Optional[str] = None, path: Optional[str] = None
    ) -> AcquiredDocument:
        """Acquire a document from exactly one of url or path.

        Raises:
            ValueError: If both or neither location is given
            FetchError: If the source cannot be retrieved
            RedirectLoopError: If the redirect bound is exceeded
            ParseError: If the content cannot be parsed
        """
        if (url is None) == (path is None):
            raise ValueError("Exactly one of url or path must be given")

        if url is not None:
            return self.acquire_url(url)
        return self.acquire_file(path)

    def acquire_url(self, url: str) -> AcquiredDocument:
        try:
            parsed = urlparse(url)
            hostname = parsed.hostname
        except ValueError as e:
            raise FetchError(f"Invalid URL {url!r}: {e}")

        if parsed.scheme.lower() not in self.SUPPORTED_SCHEMES or not hostname:
            raise FetchError(f"Unsupported URL {url!r}: expected an http(s) URL")

        content, final_url = self.fetch(url)
        root = parse_document(content, url)
        page_name, package_path = derive_host_naming(hostname)

        logger.info(f"Acquired {url} as page {page_name}")
        return AcquiredDocument(
            location=url,
            root=root,
            page_name=page_name,
            package_path=package_path,
            is_remote=True,
            final_url=final_url,
        )

    def acquire_file(self, path: str) -> AcquiredDocument:
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise FetchError(f"Cannot read {path}: {e}")

        root = parse_document(decode_bytes(data), path)
        page_name, package_path = derive_file_naming(file_path.stem)

        logger.info(f"Acquired {path} as page {page_name}")
        return AcquiredDocument(
            location=path,
            root=root,
            page_name=page_name,
            package_path=package_path,
        )

    def fetch(self, url: str) -> tuple:
        """Fetch a URL with bounded timeout and redirect hops.

        Returns:
            (decoded body, final URL after redirects)
        """
        logger.debug(
            f"Fetching {url} (timeout={self.timeout}s, max_redirects={self.max_redirects})"
        )
        try:
            with httpx.Client(
                timeout=self.timeout,
                follow_redirects=True,
                max_redirects=self.max_redirects,
                headers={"User-Agent": self.user_agent},
                transport=self.transport,
            ) as client:
                response = client.get(url)
                response.raise_for_status()
                return response.text, str(response.url)

        except httpx.TooManyRedirects as e:
            raise RedirectLoopError(
                f"More than {self.max_redirects} redirects fetching {url}: {e}"
            )
        except httpx.TimeoutException as e:
            raise FetchError(f"Timed out after {self.timeout}s fetching {url}: {e}")
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"HTTP {e.response.status_code} fetching {url}"
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"Failed to fetch {url}: {e}")
