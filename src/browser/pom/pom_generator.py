"""Page Object Model (POM) generator for static HTML documents.

This module provides the POMGenerator class which runs the full generation
pipeline: acquire a document, scan it for interactive elements, resolve a
unique name, locator and capability set per element, render the field
registry and page accessor modules, and commit both to disk.

PATTERN: Acquire → Scan → Resolve (sequential, per-run state) → Emit → Commit
CRITICAL: Per-field failures are reported and skipped; everything else is fatal
"""

import logging
import os
from pathlib import PurePath
from typing import List, Optional, Tuple

from lxml import etree

from src.browser.element_scanner import ElementScanner
from src.browser.errors import AmbiguousLocatorError
from src.browser.pom.capabilities import CapabilityClassifier
from src.browser.pom.document_acquirer import AcquiredDocument, DocumentAcquirer
from src.browser.pom.element_selector import LocatorSelector
from src.browser.pom.emitter import ArtifactEmitter
from src.browser.pom.naming import FieldNameResolver, sanitize_identifier
from src.browser.pom.writer import ArtifactWriter
from src.config.generator_config import GeneratorConfig
from src.models.page_models import (
    CandidateElement,
    FieldDescriptor,
    FieldDiagnostic,
    GenerationResult,
    PageDescriptor,
)

logger = logging.getLogger(__name__)


class POMGenerator:
    """Generate page object source files from HTML documents.

    PATTERN: DocumentAcquirer → ElementScanner → FieldNameResolver +
    LocatorSelector + CapabilityClassifier → ArtifactEmitter → ArtifactWriter
    CRITICAL: Naming and locator state is created per run and threaded through
    resolution explicitly, so concurrent runs never share it

    Example:
        >>> generator = POMGenerator()
        >>> result = generator.generate(path="pages/login.html", out_dir="generated")
        >>> [field.identifier for field in result.page.fields]
        ['Username', 'Password', 'SignIn']
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        acquirer: Optional[DocumentAcquirer] = None,
        scanner: Optional[ElementScanner] = None,
        classifier: Optional[CapabilityClassifier] = None,
        emitter: Optional[ArtifactEmitter] = None,
    ):
        """Initialize the generator.

        PATTERN: Inject dependencies for testability

        Args:
            config: Generator configuration (defaults if not provided)
            acquirer: Document acquirer (built from config if not provided)
            scanner: Element scanner
            classifier: Capability classifier
            emitter: Artifact emitter
        """
        self.config = config or GeneratorConfig()
        self.acquirer = acquirer or DocumentAcquirer(
            timeout=self.config.timeout,
            max_redirects=self.config.max_redirects,
            user_agent=self.config.user_agent,
        )
        self.scanner = scanner or ElementScanner()
        self.classifier = classifier or CapabilityClassifier()
        self.emitter = emitter or ArtifactEmitter()

    def generate(
        self,
        url: Optional[str] = None,
        path: Optional[str] = None,
        out_dir: Optional[str] = None,
        page_name: Optional[str] = None,
        resources_root: Optional[str] = None,
        write: bool = True,
    ) -> GenerationResult:
        """Run one generation pass.

        Args:
            url: http(s) URL of the page (exclusive with path)
            path: Local HTML file (exclusive with url)
            out_dir: Output root (config.out_dir if not provided)
            page_name: Page name override
            resources_root: Resources root override
            write: Whether to commit artifacts to disk

        Returns:
            GenerationResult with artifacts, diagnostics and written paths

        Raises:
            FetchError, RedirectLoopError, ParseError, WriteError: Fatal failures
        """
        document = self.acquirer.acquire(url=url, path=path)
        page, diagnostics = self.build_page(
            document,
            page_name=page_name,
            resources_root=resources_root,
        )

        # Both artifacts are rendered before anything touches the disk
        artifacts = self.emitter.emit(page)

        written_paths: List[str] = []
        if write:
            writer = ArtifactWriter(out_dir or self.config.out_dir)
            written_paths = [str(target) for target in writer.commit(artifacts)]

        logger.info(
            f"Generated {page.page_name}: {len(page.fields)} fields, "
            f"{sum(1 for d in diagnostics if d.dropped)} dropped"
        )

        return GenerationResult(
            page=page,
            artifacts=artifacts,
            diagnostics=diagnostics,
            written_paths=written_paths,
        )

    def build_page(
        self,
        document: AcquiredDocument,
        page_name: Optional[str] = None,
        resources_root: Optional[str] = None,
    ) -> Tuple[PageDescriptor, List[FieldDiagnostic]]:
        """Scan and resolve a document into a PageDescriptor."""
        candidates = self.scanner.scan(document.root)
        fields, diagnostics = self.resolve_fields(document.root, candidates)

        name = document.page_name
        if page_name:
            name = sanitize_identifier(page_name) or name

        root = resources_root or self._default_resources_root(document)

        page = PageDescriptor(
            location=self._navigation_location(document, root),
            page_name=name,
            package_path=document.package_path,
            resources_root=root,
            fields=fields,
        )
        return page, diagnostics

    def resolve_fields(
        self, root: etree._Element, candidates: List[CandidateElement]
    ) -> Tuple[List[FieldDescriptor], List[FieldDiagnostic]]:
        """Resolve candidates into fields, strictly in document order.

        PATTERN: Locate first, then name; dropped candidates never reserve a name
        CRITICAL: The resolver and selector are local to this call

        Args:
            root: Root element of the source document
            candidates: Scanned candidates in document order

        Returns:
            (fields, diagnostics)
        """
        naming = FieldNameResolver(max_text_length=self.config.max_text_length)
        selector = LocatorSelector(root)

        fields: List[FieldDescriptor] = []
        diagnostics: List[FieldDiagnostic] = []

        for candidate in candidates:
            try:
                locator = selector.select(candidate)
            except AmbiguousLocatorError as e:
                proposed = naming.propose(candidate)
                logger.warning(f"Dropping field #{candidate.scan_index} ({proposed}): {e}")
                diagnostics.append(
                    FieldDiagnostic(
                        scan_index=candidate.scan_index,
                        field_name=proposed,
                        message=f"dropped, {e}",
                        dropped=True,
                    )
                )
                continue

            identifier = naming.assign(candidate)
            classification = self.classifier.classify(candidate)
            if classification.warning:
                diagnostics.append(
                    FieldDiagnostic(
                        scan_index=candidate.scan_index,
                        field_name=identifier,
                        message=classification.warning,
                    )
                )

            fields.append(
                FieldDescriptor(
                    identifier=identifier,
                    locator=locator,
                    capabilities=classification.capabilities,
                    kind=candidate.kind,
                    scan_index=candidate.scan_index,
                )
            )

        return fields, diagnostics

    def _default_resources_root(self, document: AcquiredDocument) -> str:
        if document.is_remote:
            return "."
        parent = PurePath(document.location).parent
        return parent.as_posix()

    def _navigation_location(self, document: AcquiredDocument, resources_root: str) -> str:
        """Location handed to driver.navigate, relative to the resources root.

        URLs are absolute and pass through unchanged.
        """
        if document.is_remote:
            return document.location

        try:
            relative = os.path.relpath(document.location, resources_root)
        except ValueError:
            # Different drives on Windows; no relative path exists
            return PurePath(os.path.abspath(document.location)).as_posix()
        return PurePath(relative).as_posix()
