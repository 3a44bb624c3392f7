"""CLI entry point for meetbrief."""

import json
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from .config import SummarizerConfig, validate_config
from .costs import estimate_summarization_cost, format_cost_warning
from .errors import ConfigError, InputError, PipelineError
from .logging_setup import setup_logging
from .providers import ProviderRole
from .sources.local_file import load_local_transcript
from .summarize import SummaryResult, Summarizer

app = typer.Typer(
    name="meetbrief",
    help="Summarize meeting transcripts with LLM providers.",
    no_args_is_help=True,
)

console = Console()


def _load_text(source: str) -> tuple[str, str]:
    """Load transcript text and title, exiting on bad input."""
    try:
        loaded = load_local_transcript(source)
    except FileNotFoundError as e:
        console.print(f"[red]File not found:[/red] {source}")
        raise typer.Exit(1) from e
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    return loaded.text, loaded.title


def _load_config() -> SummarizerConfig:
    try:
        return SummarizerConfig.from_env()
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1) from e


def _write_outputs(
    out_dir: Path,
    result: SummaryResult,
    output_format: str,
    meta: dict,
) -> None:
    """Write output files."""
    out_dir.mkdir(parents=True, exist_ok=True)

    (out_dir / "meta.json").write_text(json.dumps(meta, indent=2, ensure_ascii=False))

    if output_format == "json":
        (out_dir / "summary.json").write_text(result.model_dump_json(indent=2))
    else:
        (out_dir / "summary.txt").write_text(result.summary)


@app.command()
def summarize(
    source: Annotated[str, typer.Argument(help="Transcript .txt/.md file, or - for stdin")],
    prompt: Annotated[
        str | None,
        typer.Option("--prompt", "-p", help="Custom summary instructions"),
    ] = None,
    prompt_file: Annotated[
        Path | None,
        typer.Option("--prompt-file", help="Read custom summary instructions from a file"),
    ] = None,
    max_tokens: Annotated[
        int | None,
        typer.Option("--max-tokens", help="Output token limit for short transcripts"),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Output directory (prints to stdout if omitted)"),
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: txt or json"),
    ] = "txt",
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip cost confirmation prompts"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose output"),
    ] = False,
) -> None:
    """Summarize a meeting transcript."""
    setup_logging(verbose)

    if format not in ("txt", "json"):
        console.print(f"[red]Unknown format:[/red] {format} (use txt or json)")
        raise typer.Exit(1)

    transcript_text, title = _load_text(source)

    custom_prompt = prompt
    if prompt_file is not None:
        if not prompt_file.exists():
            console.print(f"[red]File not found:[/red] {prompt_file}")
            raise typer.Exit(1)
        custom_prompt = prompt_file.read_text(encoding="utf-8").strip() or None

    config = _load_config()
    if not validate_config(config).has_at_least_one:
        console.print(
            "[red]No API keys configured.[/red] Set GROQ_API_KEY or OPENAI_API_KEY."
        )
        raise typer.Exit(1)

    estimate = estimate_summarization_cost(transcript_text, config)
    if estimate["should_warn"] and not yes:
        console.print(
            format_cost_warning(
                "Summarization",
                estimate["estimated_cost"],
                f"{estimate['token_count']:,} tokens in {estimate['num_chunks']} chunks",
            )
        )
        if not typer.confirm("Continue?"):
            raise typer.Exit(0)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Generating summary...", total=None)
        try:
            result = Summarizer(config).summarize(transcript_text, custom_prompt, max_tokens)
        except InputError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1) from e
        except PipelineError as e:
            console.print(f"[red]Summarization failed:[/red] {e}")
            raise typer.Exit(1) from e

    if out is None:
        if format == "json":
            console.print_json(result.model_dump_json())
        else:
            console.print(result.summary, markup=False, highlight=False)
        return

    meta = {
        "title": title,
        "source": source,
        "model": result.model,
        "token_count": result.token_count,
        "processing_time_ms": result.processing_time_ms,
        "chunk_count": result.chunk_count,
        "created_at": datetime.now().isoformat(),
    }
    _write_outputs(out, result, format, meta)

    console.print(
        Panel(
            f"[bold green]Done![/bold green]\n\n"
            f"Model: {result.model} ({result.chunk_count} chunk(s))\n"
            f"Output: {out}"
        )
    )


@app.command()
def plan(
    source: Annotated[str, typer.Argument(help="Transcript .txt/.md file, or - for stdin")],
) -> None:
    """Show how a transcript would be summarized, without calling any provider."""
    transcript_text, _ = _load_text(source)
    config = _load_config()
    estimate = estimate_summarization_cost(transcript_text, config)

    console.print(f"Estimated tokens: {estimate['token_count']:,}")
    console.print(f"Path: {estimate['path']}")
    console.print(f"Chunks: {estimate['num_chunks']}")
    console.print(f"LLM calls: {estimate['num_calls']}")
    console.print(
        f"Estimated cost ({estimate['model']}): ${estimate['estimated_cost']:.4f}"
    )


@app.command()
def status(
    probe: Annotated[
        bool,
        typer.Option("--probe", help="Send a tiny test request to each provider"),
    ] = False,
) -> None:
    """Show which providers are configured."""
    config = _load_config()
    report = Summarizer(config).status(probe=probe)

    for role, settings, configured in (
        (ProviderRole.PRIMARY, config.primary, report.configured.primary),
        (ProviderRole.FALLBACK, config.fallback, report.configured.fallback),
    ):
        mark = "[green]✓[/green]" if configured else "[red]✗[/red]"
        line = f"{mark} {role.value.capitalize()}: {settings.name} ({settings.model})"
        if probe:
            reachable = report.reachable.get(role, False)
            line += " reachable" if reachable else " unreachable"
        console.print(line)

    for recommendation in report.recommendations:
        console.print(f"[yellow]{recommendation}[/yellow]")


if __name__ == "__main__":
    app()
