"""CLI interface using Typer and Rich."""

from typing import NoReturn, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape as markup_escape
from rich.table import Table

from safe_pattern.analyzer import analyze
from safe_pattern.compiler import compile_safe
from safe_pattern.config import AppConfig, load_app_config
from safe_pattern.globbing import glob_to_regex, translate_glob
from safe_pattern.models import CompiledMatcher, Rejected
from safe_pattern.resolver import CommandResolver
from safe_pattern.utils.escape import escape as escape_literal
from safe_pattern.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Static ReDoS-safe regex and glob compilation")
console = Console()


def load_config() -> AppConfig:
    """Load configuration, exiting on invalid environment values.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    try:
        return load_app_config()
    except ValidationError as e:
        console.print(f"[red]Configuration error:[/red]\n{markup_escape(str(e))}")
        raise typer.Exit(1)


def setup(log_file: Optional[str], verbose: bool) -> AppConfig:
    """Load configuration and configure logging; options override the environment."""
    config = load_config()
    configure_logging(log_file or config.log_file, verbose or config.verbose)
    return config


def fail_unexpected(e: Exception) -> NoReturn:
    console.print(f"[red]Unexpected error: {markup_escape(str(e))}[/red]")
    get_logger(__name__).exception("unexpected_error")
    raise typer.Exit(1)


def print_rejection(rejected: Rejected) -> None:
    console.print(
        f"[red]Rejected ({rejected.reason.value}):[/red] "
        f"{markup_escape(rejected.detail or rejected.pattern)}"
    )


def print_matches(matcher: CompiledMatcher, candidates: list[str], whole: bool) -> int:
    """Render a match table and return the number of matching candidates."""
    table = Table(title=f"Pattern: {markup_escape(matcher.pattern)}")
    table.add_column("Candidate", style="cyan")
    table.add_column("Match", justify="center")

    matched = 0
    for candidate in candidates:
        hit = matcher.fullmatch(candidate) is not None if whole else matcher.test(candidate)
        matched += int(hit)
        table.add_row(markup_escape(candidate), "[green]yes[/green]" if hit else "[red]no[/red]")

    console.print(table)
    return matched


@app.command()
def escape(
    text: str,
    log_file: Optional[str] = typer.Option(None, "--log-file"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Print a regex fragment that matches TEXT literally.

    Example:
        safe-pattern escape "tsconfig.json"
    """
    setup(log_file, verbose)

    try:
        typer.echo(escape_literal(text))
    except Exception as e:
        fail_unexpected(e)


@app.command()
def check(
    patterns: list[str],
    flags: Optional[str] = typer.Option(None, "--flags", "-f", help="Flag letters, e.g. 'gi'"),
    log_file: Optional[str] = typer.Option(None, "--log-file"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Assess regex patterns for catastrophic backtracking.

    Exits with status 1 when any pattern is rejected.

    Example:
        safe-pattern check "(a+)+b" "^test$"
    """
    config = setup(log_file, verbose)
    logger = get_logger(__name__)

    try:
        limits = config.analyzer_limits()

        table = Table(title="Pattern risk")
        table.add_column("Pattern", style="cyan")
        table.add_column("Verdict", justify="center")
        table.add_column("Findings")

        rejected = 0
        for pattern in patterns:
            result = compile_safe(pattern, flags, limits)
            if isinstance(result, Rejected):
                rejected += 1
                report = analyze(pattern, flags, limits)
                findings = ", ".join(f.kind.value for f in report.findings) or result.reason.value
                table.add_row(markup_escape(pattern), "[red]unsafe[/red]", findings)
            else:
                table.add_row(markup_escape(pattern), "[green]safe[/green]", "")
            logger.info(
                "pattern_checked",
                pattern=pattern,
                safe=not isinstance(result, Rejected),
            )

        console.print(table)
        logger.info("check_completed", total=len(patterns), rejected=rejected)
    except Exception as e:
        fail_unexpected(e)

    if rejected:
        raise typer.Exit(1)


@app.command()
def match(
    pattern: str,
    candidates: list[str],
    flags: Optional[str] = typer.Option(None, "--flags", "-f", help="Flag letters, e.g. 'gi'"),
    log_file: Optional[str] = typer.Option(None, "--log-file"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Compile PATTERN safely and search each candidate with it.

    Example:
        safe-pattern match "^test-\\d+$" test-1 test-x
    """
    config = setup(log_file, verbose)
    logger = get_logger(__name__)

    try:
        result = compile_safe(pattern, flags, config.analyzer_limits())
        if isinstance(result, CompiledMatcher):
            matched = print_matches(result, candidates, whole=False)
            logger.info("match_completed", pattern=pattern, total=len(candidates), matched=matched)
    except Exception as e:
        fail_unexpected(e)

    if isinstance(result, Rejected):
        print_rejection(result)
        logger.error("pattern_rejected", pattern=pattern, reason=result.reason.value)
        raise typer.Exit(1)


@app.command()
def glob(
    pattern: str,
    candidates: Optional[list[str]] = typer.Argument(None),
    flags: Optional[str] = typer.Option(None, "--flags", "-f", help="Flag letters, e.g. 'i'"),
    log_file: Optional[str] = typer.Option(None, "--log-file"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Translate a glob to a safe regex and test candidates against it.

    Example:
        safe-pattern glob "src/**/*.ts" src/deep/file.ts src/foo.js
    """
    config = setup(log_file, verbose)
    logger = get_logger(__name__)

    try:
        result = translate_glob(pattern, flags, config.analyzer_limits())
        if isinstance(result, CompiledMatcher):
            console.print(f"[cyan]Regex:[/cyan] {markup_escape(glob_to_regex(pattern))}")
            logger.info("glob_translated", glob=pattern, regex=result.pattern)

            if candidates:
                matched = print_matches(result, candidates, whole=True)
                logger.info("match_completed", glob=pattern, total=len(candidates), matched=matched)
    except Exception as e:
        fail_unexpected(e)

    if isinstance(result, Rejected):
        print_rejection(result)
        logger.error("glob_rejected", glob=pattern, reason=result.reason.value)
        raise typer.Exit(1)


@app.command()
def resolve(
    commands: list[str],
    log_file: Optional[str] = typer.Option(None, "--log-file"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Resolve command names to executable paths (Windows only).

    Example:
        safe-pattern resolve codex node
    """
    config = setup(log_file, verbose)

    try:
        resolver = CommandResolver(timeout=config.command_timeout)
        for command in commands:
            console.print(f"{markup_escape(command)} -> {markup_escape(resolver.resolve(command))}")
    except Exception as e:
        fail_unexpected(e)


if __name__ == "__main__":
    app()
