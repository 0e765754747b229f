"""Main CLI application entry point."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

# Load .env file from project root or current directory
# so POMGEN_* settings are visible before configuration loads
_env_paths = [
    Path(__file__).parent.parent.parent / ".env",  # Project root
    Path.cwd() / ".env",  # Current working directory
]
for env_path in _env_paths:
    if env_path.exists():
        load_dotenv(env_path)
        break

from ..browser.errors import GenerationError
from ..browser.pom.pom_generator import POMGenerator
from ..config.generator_config import load_config
from ..models.page_models import GenerationResult

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Configure logging so stderr carries only user-facing diagnostics."""
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
        # Field diagnostics are printed by the CLI itself
        logging.getLogger("src").setLevel(logging.CRITICAL)
    else:
        logging.getLogger("src").setLevel(logging.DEBUG)


@click.command()
@click.option(
    "-url", "--url", "url",
    help="http(s) URL of the page to generate from",
)
@click.option(
    "-file", "--file", "file_path",
    type=click.Path(dir_okay=False),
    help="Local HTML file to generate from",
)
@click.option(
    "-out", "--out", "out_dir",
    type=click.Path(file_okay=False),
    help="Output root for generated sources",
)
@click.option(
    "-timeout", "--timeout", "timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Fetch timeout in seconds",
)
@click.option(
    "-name", "--name", "page_name",
    help="Override the derived page name",
)
@click.option(
    "-resources", "--resources", "resources_root",
    help="Override the resources root passed to navigate",
)
@click.option(
    "-config", "--config", "config_path",
    type=click.Path(dir_okay=False),
    help="Config file path",
)
@click.option(
    "-verbose", "--verbose", "verbose",
    is_flag=True,
    help="Enable verbose logging",
)
def main(
    url: Optional[str],
    file_path: Optional[str],
    out_dir: Optional[str],
    timeout: Optional[float],
    page_name: Optional[str],
    resources_root: Optional[str],
    config_path: Optional[str],
    verbose: bool,
) -> None:
    """
    Generate page object sources from an HTML page.

    From a live page:
        pomgen -url https://www.example.com/login

    From a saved file into a custom root:
        pomgen -file pages/login.html -out tests/pages
    """
    if bool(url) == bool(file_path):
        raise click.UsageError("Exactly one of -url or -file is required")

    configure_logging(verbose)

    config = load_config(config_path)
    if timeout is not None:
        config = config.model_copy(update={"timeout": timeout})

    generator = POMGenerator(config=config)

    try:
        result = generator.generate(
            url=url,
            path=file_path,
            out_dir=out_dir or config.out_dir,
            page_name=page_name,
            resources_root=resources_root,
        )
    except GenerationError as e:
        if verbose:
            logger.exception("Generation failed")
        click.echo(f"Error [{e.stage}]: {e}", err=True)
        sys.exit(1)

    for diagnostic in result.diagnostics:
        click.echo(f"warning: {diagnostic.format()}", err=True)

    render_summary(result, verbose)


def render_summary(result: GenerationResult, verbose: bool = False) -> None:
    """Print written paths and, when verbose, the field table."""
    console = Console(soft_wrap=True, highlight=False)

    for path in result.written_paths:
        console.print(f"wrote {path}", markup=False)

    if verbose and result.page.fields:
        table = Table(title=f"{result.page.page_name} fields")
        table.add_column("Field")
        table.add_column("Locator")
        table.add_column("Capabilities")
        for field in result.page.fields:
            table.add_row(
                field.identifier,
                field.locator.render(),
                ", ".join(c.value for c in field.capabilities),
            )
        console.print(table)

    console.print(
        f"{len(result.page.fields)} fields generated for {result.page.page_name}"
        f" ({result.dropped_count} dropped)",
        markup=False,
    )
