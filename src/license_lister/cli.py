"""Command-line interface for license_lister.

Provides the ``list`` (and deprecated ``ls``) command for license listings
and the ``generate-disclaimer`` command for third-party notices.
"""

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from license_lister.aggregator import collect, count_packages, group
from license_lister.models import PackageManifest
from license_lister.providers import DEFAULT_MODULES_FOLDER, ProviderFlags, get_provider
from license_lister.reporters import (
    DisclaimerReporter,
    NoticeReporter,
    TableReporter,
    TreeReporter,
    build_entries,
)

app = typer.Typer(
    name="license-lister",
    help="List the licenses of installed packages and generate disclaimers.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("license_lister")


DISCLAIMER_BASENAME = "disclaimer"


class DisclaimerFormat(str, Enum):
    json = "json"
    text = "text"


CwdOption = Annotated[
    Path,
    typer.Option(
        "--cwd",
        "-C",
        help="Project directory, node_modules folder, or JSON manifest dump",
    ),
]
ModulesFolderOption = Annotated[
    str,
    typer.Option(
        "--modules-folder",
        envvar="LICENSE_LISTER_MODULES_FOLDER",
        help="Name of the folder packages are installed into",
    ),
]
IgnorePlatformOption = Annotated[
    bool,
    typer.Option(
        "--ignore-platform",
        help="Include packages built for other platforms",
    ),
]
JsonOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output a structured table instead of a tree",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
]


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("license_lister").setLevel(level)


async def _load_manifests(cwd: Path, flags: ProviderFlags) -> list[PackageManifest]:
    """Fetch the resolved manifests for ``cwd`` from the matching provider.

    Raises:
        FileNotFoundError: If ``cwd`` or its install does not exist.
        ValueError: If no provider can read ``cwd`` or its content is invalid.
    """
    provider = get_provider(cwd)
    logger.debug("Using provider: %s", provider.source_name)
    return await provider.get_manifests(flags)


def _resolve_manifests(cwd: Path, flags: ProviderFlags) -> list[PackageManifest]:
    try:
        return asyncio.run(_load_manifests(cwd, flags))
    except (FileNotFoundError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)


def _run_list(
    cwd: Path,
    flags: ProviderFlags,
    as_json: bool,
    verbose: bool,
) -> None:
    """Shared implementation of the list and ls commands."""
    _setup_logging(verbose)

    manifests = collect(_resolve_manifests(cwd, flags))
    groups = group(manifests)
    logger.info(
        "Listing %d packages under %d licenses", count_packages(groups), len(groups)
    )

    if as_json:
        console.out(TableReporter().render(groups), highlight=False)
    else:
        console.print(TreeReporter().build_tree(groups))


@app.command("list")
def list_licenses(
    cwd: CwdOption = Path("."),
    modules_folder: ModulesFolderOption = DEFAULT_MODULES_FOLDER,
    ignore_platform: IgnorePlatformOption = False,
    json: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """List licenses for installed packages.

    Packages are grouped by license. The default output is a tree; --json
    prints a table of name, version, license, URL, vendor URL and vendor
    name instead.
    """
    flags = ProviderFlags(modules_folder=modules_folder, ignore_platform=ignore_platform)
    _run_list(cwd, flags, as_json=json, verbose=verbose)


@app.command("ls")
def ls(
    cwd: CwdOption = Path("."),
    modules_folder: ModulesFolderOption = DEFAULT_MODULES_FOLDER,
    ignore_platform: IgnorePlatformOption = False,
    json: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Deprecated alias of list."""
    err_console.print(
        "[yellow]Warning:[/yellow] `license-lister ls` is deprecated. "
        "Please use `license-lister list`."
    )
    flags = ProviderFlags(modules_folder=modules_folder, ignore_platform=ignore_platform)
    _run_list(cwd, flags, as_json=json, verbose=verbose)


@app.command("generate-disclaimer")
def generate_disclaimer(
    cwd: CwdOption = Path("."),
    modules_folder: ModulesFolderOption = DEFAULT_MODULES_FOLDER,
    ignore_platform: IgnorePlatformOption = False,
    output_format: Annotated[
        DisclaimerFormat,
        typer.Option(
            "--format",
            "-f",
            help="Disclaimer format: JSON array or plain-text notice",
        ),
    ] = DisclaimerFormat.json,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output file, or a directory to write the disclaimer into",
        ),
    ] = None,
    template: Annotated[
        Optional[Path],
        typer.Option(
            "--template",
            "-t",
            help="Custom Jinja2 template for the text notice",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Generate a disclaimer for the licenses of installed packages.

    Every package not marked private is included, in install order, with
    its trimmed license text.
    """
    _setup_logging(verbose)

    flags = ProviderFlags(modules_folder=modules_folder, ignore_platform=ignore_platform)
    entries = build_entries(_resolve_manifests(cwd, flags))
    logger.info("Generating disclaimer for %d packages", len(entries))

    if output_format is DisclaimerFormat.text:
        reporter = NoticeReporter(template_path=template)
    else:
        if template:
            err_console.print(
                "[yellow]Warning:[/yellow] --template only applies to --format text"
            )
        reporter = DisclaimerReporter()

    if output:
        if output.is_dir():
            output = output / f"{DISCLAIMER_BASENAME}{reporter.default_extension}"
        try:
            reporter.write(entries, output)
        except OSError as e:
            err_console.print(f"[red]Error writing output:[/red] {e}")
            raise typer.Exit(code=1)
        err_console.print(
            f"[green]Generated:[/green] {output} ({reporter.format_name})"
        )
    else:
        console.out(reporter.render(entries), highlight=False)


if __name__ == "__main__":
    app()
