from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .codegen import (
    GenerationResult,
    get_language_info,
    list_supported_languages,
    load_config,
    run_generation,
)
from .codegen.core.config import ConfigError, get_config_manager
from .codegen.core.templates import SUBSTITUTION_POLICIES
from .logging_config import get_logger, setup_logging
from .utils import DatabaseLoadError, load_database, write_json

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the command line tool."""
    parser = argparse.ArgumentParser(
        prog="cdk-schema-generator",
        description=(
            "Generate the CDK resource and property type schemas from a "
            "service specification database"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cdk-schema-generator --file db.json.gz --output-path out/
  cdk-schema-generator --url https://example.com/db.json --output-path out/
  cdk-schema-generator --list-languages
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument("--file", "-f", help="Database snapshot (.json or .json.gz)")
    input_group.add_argument("--url", help="URL to fetch the database snapshot from")

    parser.add_argument(
        "--output-path", "-o", metavar="DIR", help="Directory to write the schemas to"
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--substitution-policy",
        choices=SUBSTITUTION_POLICIES,
        help="Replace only the first or every occurrence when deriving names",
    )
    parser.add_argument(
        "--timeout", type=int, default=30, help="Request timeout for --url (seconds)"
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List target languages and their naming templates, then exit",
    )
    info_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show generation warnings"
    )
    info_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level (default: WARNING)",
    )
    info_group.add_argument("--log-file", help="Also write DEBUG logs to this file")

    return parser


class CLIHandler:
    """Handle command-line interface (CLI) operations for schema generation."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        logger.debug("CLIHandler initialized")

    def run(self, args: Any) -> int:
        """Run CLI operations based on parsed arguments.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        if getattr(args, "list_languages", False):
            return self._list_languages()

        if not (args.file or args.url):
            self.console.print("❌ [red]A database snapshot is required (--file or --url)[/red]")
            return 1

        if not args.output_path:
            self.console.print("❌ [red]--output-path is required for generation[/red]")
            return 1

        output_path = Path(args.output_path)
        if not output_path.is_dir():
            self.console.print(
                f"❌ [red]Output path is not a directory: {escape(str(output_path))}[/red]"
            )
            logger.error("Output path is not a directory: %s", output_path)
            return 1

        try:
            config = load_config(
                config_file=args.config,
                custom_config={"substitution_policy": args.substitution_policy},
            )
        except ConfigError as e:
            self.console.print(f"❌ [red]Configuration error: {escape(str(e))}[/red]")
            logger.error("Configuration error: %s", e)
            return 1

        for warning in get_config_manager().validate_config(config):
            self.console.print(f"⚠️  [yellow]{escape(warning)}[/yellow]")

        try:
            source, db = load_database(args.file, args.url, args.timeout)
        except (DatabaseLoadError, FileNotFoundError) as e:
            self.console.print(f"❌ [red]Failed to load database: {escape(str(e))}[/red]")
            logger.error("Failed to load database: %s", e)
            return 1

        self.console.print(f"📄 Loaded: {escape(source)}")
        logger.info("Starting generation for source: %s", source)

        result = run_generation(db, config)
        if not result.success:
            self.console.print(f"❌ [red]{escape(result.error_message)}[/red]")
            return 1

        try:
            self._write_output(result, output_path, config)
        except OSError as e:
            self.console.print(f"❌ [red]Failed to write schemas: {escape(str(e))}[/red]")
            return 1

        self._print_summary(result, output_path, config, verbose=args.verbose)
        return 0

    def _write_output(self, result: GenerationResult, output_path: Path, config) -> None:
        """Write both schema documents, or neither.

        Each document goes to a temporary file in ``output_path`` first and
        both are moved into place only once every write has succeeded.
        """
        specification = result.specification
        documents = [
            (specification.resources_document(), output_path / config.resources_file),
            (specification.types_document(), output_path / config.types_file),
        ]
        staged = []
        placed = []
        try:
            for document, target in documents:
                temp = target.with_name(f".{target.name}.tmp")
                staged.append(temp)
                write_json(document, temp, config.indent)
            for temp, (_, target) in zip(staged, documents):
                temp.replace(target)
                placed.append(target)
        except OSError:
            for path in staged + placed:
                if path.is_file():
                    path.unlink()
            logger.error("Schemas not written to %s", output_path)
            raise

    def _print_summary(
        self, result: GenerationResult, output_path: Path, config, verbose: bool
    ) -> None:
        table = Table(title="📊 Generated Schema", box=box.ROUNDED, title_style="bold cyan")
        table.add_column("Item", style="bold")
        table.add_column("Value", style="green")

        table.add_row("Services", str(result.metadata["service_count"]))
        table.add_row("Resources", str(result.metadata["resource_count"]))
        table.add_row("Property types", str(result.metadata["property_type_count"]))
        table.add_row("Substitution policy", result.metadata["substitution_policy"])
        table.add_row("Resources file", str(output_path / config.resources_file))
        table.add_row("Types file", str(output_path / config.types_file))

        self.console.print()
        self.console.print(table)

        if result.warnings:
            if verbose:
                for warning in result.warnings:
                    self.console.print(f"⚠️  [yellow]{escape(warning)}[/yellow]")
            else:
                self.console.print(
                    f"[yellow]{len(result.warnings)} naming warning(s); "
                    "use --verbose to show them[/yellow]"
                )

        self.console.print("✅ [green]Schemas generated successfully[/green]")
        logger.info(
            "Generation completed: %d resources, %d property types",
            result.metadata["resource_count"],
            result.metadata["property_type_count"],
        )

    def _list_languages(self) -> int:
        """List target languages with their naming templates."""
        table = Table(
            title="📋 Target Languages", box=box.ROUNDED, title_style="bold cyan"
        )
        table.add_column("Language", style="bold green", no_wrap=True)
        table.add_column("Aliases", style="blue")
        table.add_column("Templates", style="dim")

        for language in list_supported_languages():
            info = get_language_info(language)
            aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
            templates = "\n".join(
                f"{key}: {template}" for key, template in info["templates"].items()
            )
            table.add_row(f"🔧 {language}", aliases, escape(templates))

        self.console.print()
        self.console.print(table)
        self.console.print(
            Panel(
                "[bold]Usage:[/bold] cdk-schema-generator --file [dim]db.json.gz[/dim] "
                "--output-path [cyan]DIR[/cyan]",
                title="💡 Quick Start",
                border_style="blue",
            )
        )
        return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point of the ``cdk-schema-generator`` command."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    return CLIHandler().run(args)


if __name__ == "__main__":
    raise SystemExit(main())
