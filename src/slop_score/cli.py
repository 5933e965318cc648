"""Command-line interface for Slop Score."""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from slop_score import __version__
from slop_score.data import DataFormatError

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_analyzer(data_dir: str | None, no_pos: bool, progress_callback=None):
    from slop_score.analyzer import SlopAnalyzer

    try:
        return SlopAnalyzer.from_settings(
            data_dir=Path(data_dir) if data_dir else None,
            use_pos_tagger=False if no_pos else None,
            progress_callback=progress_callback,
        )
    except DataFormatError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Slop Score - measure AI writing patterns in text."""
    pass


@main.command()
@click.option("--data-dir", type=click.Path(file_okay=False), help="Directory holding the corpus files")
def status(data_dir: str | None) -> None:
    """Check system status (corpus files, spaCy model)."""
    from slop_score.config import get_settings
    from slop_score.contrast import load_spacy_tagger

    console.print("[bold]Slop Score Status[/bold]\n")

    settings = get_settings()
    if data_dir:
        settings = settings.model_copy(update={"data_dir": Path(data_dir)})
    console.print(f"Data directory: {settings.data_dir}")

    for path in (
        settings.wordfreq_path,
        settings.human_profile_path,
        settings.slop_words_path,
        settings.slop_trigrams_path,
    ):
        if path.is_file():
            console.print(f"[green]OK[/green] {path.name}")
        else:
            console.print(f"[red]MISSING[/red] {path.name}")

    if load_spacy_tagger(settings.spacy_model) is not None:
        console.print(f"[green]OK[/green] spaCy model {settings.spacy_model}")
    else:
        console.print(f"[yellow]UNAVAILABLE[/yellow] spaCy model {settings.spacy_model} (syntactic contrast patterns disabled)")


@main.command()
@click.argument("input_path", metavar="INPUT")
@click.option("--output", "-o", type=click.Path(), help="Write output to file instead of stdout")
@click.option("--format", "-f", "output_format", type=click.Choice(["json", "markdown"]), default="json", help="Output format")
@click.option("--slop-word-hits", is_flag=True, help="Include matched slop words")
@click.option("--slop-trigram-hits", is_flag=True, help="Include matched slop trigrams")
@click.option("--top-over-represented", is_flag=True, help="Include words/n-grams over-represented vs. human baseline")
@click.option("--contrast-matches", is_flag=True, help='Include "not X, but Y" contrast pattern matches')
@click.option("--all", "include_all", is_flag=True, help="Include all optional fields")
@click.option("--data-dir", type=click.Path(file_okay=False), help="Directory holding the corpus files")
@click.option("--no-pos", is_flag=True, help="Skip POS tagging (surface contrast patterns only)")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def analyze(
    input_path: str,
    output: str | None,
    output_format: str,
    slop_word_hits: bool,
    slop_trigram_hits: bool,
    top_over_represented: bool,
    contrast_matches: bool,
    include_all: bool,
    data_dir: str | None,
    no_pos: bool,
    verbose: bool,
) -> None:
    """Analyze a text file for AI writing patterns ("slop").

    Use "-" as INPUT to read from stdin.

    Examples:
        slop-score analyze essay.md --all
        slop-score analyze essay.md -f markdown -o report.md
        cat essay.md | slop-score analyze -
    """
    _configure_logging(verbose)

    def progress_callback(progress):
        err_console.print(f"  [{progress.phase}] {progress.message}", style="dim", markup=False)

    analyzer = _load_analyzer(data_dir, no_pos, progress_callback if verbose else None)

    if input_path == "-":
        text = sys.stdin.read()
    else:
        try:
            with open(input_path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise click.ClickException(f"Cannot read {input_path}: {e}") from e

    result = analyzer.analyze_text(
        text,
        file=input_path,
        include_word_hits=include_all or slop_word_hits,
        include_trigram_hits=include_all or slop_trigram_hits,
        include_over_represented=include_all or top_over_represented,
        include_contrast_matches=include_all or contrast_matches,
    )

    if output_format == "markdown":
        rendered = _generate_markdown_report(result.to_dict())
    else:
        rendered = result.to_json()

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(rendered)
        err_console.print(f"[green]OK[/green] Results saved to {output_path}")
    else:
        click.echo(rendered)


@main.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--pattern", "-p", default="*.txt", help="File pattern to match")
@click.option("--output", "-o", type=click.Path(), help="Output file for results (JSON)")
@click.option("--data-dir", type=click.Path(file_okay=False), help="Directory holding the corpus files")
@click.option("--no-pos", is_flag=True, help="Skip POS tagging (surface contrast patterns only)")
def batch(directory: str, pattern: str, output: str | None, data_dir: str | None, no_pos: bool) -> None:
    """Analyze every matching file in a directory.

    Example:
        slop-score batch samples/ -p "*.md" -o scores.json
    """
    _configure_logging(False)

    dir_path = Path(directory)
    files = sorted(dir_path.glob(pattern))

    if not files:
        console.print(f"[red]No files matching '{pattern}' found in {directory}[/red]")
        return

    console.print("[bold]Batch Slop Analysis[/bold]")
    console.print(f"[dim]Files: {len(files)}[/dim]\n")

    analyzer = _load_analyzer(data_dir, no_pos)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Analyzing files...", total=len(files))

        def progress_callback(p):
            if p.phase == "files":
                progress.update(task, completed=p.current - 1, description=p.message)

        analyzer.progress_callback = progress_callback

        results = analyzer.analyze_files(files, skip_errors=True)
        progress.update(task, completed=len(files), description="Done")

    analyzed = {r.file for r in results}
    skipped = [f for f in files if str(f) not in analyzed]
    if skipped:
        console.print(f"[yellow]Skipped {len(skipped)} unreadable file(s):[/yellow]")
        for f in skipped:
            console.print(f"  {f.name}", markup=False)

    table = Table(title="Slop Scores")
    table.add_column("File", style="cyan")
    table.add_column("Words", justify="right")
    table.add_column("Slop Score", style="green", justify="right")
    table.add_column("Slop Words/1k", justify="right")
    table.add_column("Contrast/1k chars", justify="right")

    for r in sorted(results, key=lambda r: -r.slop_score):
        table.add_row(
            Path(r.file).name,
            f"{r.total_words:,}",
            f"{r.slop_score:.2f}",
            f"{r.metrics.slop_words_per_1k:.2f}",
            f"{r.metrics.not_x_but_y_per_1k_chars:.3f}",
        )

    console.print(table)

    if output:
        output_path = Path(output)
        analyzer.save_result(results, output_path)
        console.print(f"\n[green]OK[/green] Results saved to {output_path}")


@main.command()
@click.argument("words", nargs=-1, required=True)
@click.option("--data-dir", type=click.Path(file_okay=False), help="Directory holding the corpus files")
@click.option("--json-output", "-j", is_flag=True, help="Print JSON instead of a table")
def zipf(words: tuple[str, ...], data_dir: str | None, json_output: bool) -> None:
    """Look up Zipf frequencies of words or phrases.

    Example:
        slop-score zipf tapestry delve "the cat"
    """
    from slop_score.config import get_settings
    from slop_score.data import load_context

    _configure_logging(False)

    settings = get_settings()
    try:
        context = load_context(Path(data_dir) if data_dir else None, settings)
    except DataFormatError as e:
        raise click.ClickException(str(e)) from e

    rows = [(w, context.lookup_zipf(w), context.lookup_frequency(w)) for w in words]

    if json_output:
        click.echo(json.dumps(
            [{"word": w, "zipf": z, "frequency": f} for w, z, f in rows], indent=2
        ))
        return

    table = Table(title="Zipf Frequencies")
    table.add_column("Word", style="cyan")
    table.add_column("Zipf", style="green", justify="right")
    table.add_column("Frequency", justify="right")

    for w, z, f in rows:
        table.add_row(
            w,
            f"{z:.2f}" if z is not None else "-",
            f"{f:.3e}" if f is not None else "-",
        )

    console.print(table)


def _generate_markdown_report(r: dict) -> str:
    """Generate a markdown report from a result dict."""
    m = r["metrics"]
    ld = m["lexical_diversity"]
    lines = [
        "# Slop Score Analysis",
        "",
        f"**File:** {r['file']}",
        f"**Slop Score:** {r['slop_score']:.2f}",
        "",
        "## Basic Stats",
        f"- Total Characters: {r['total_chars']}",
        f"- Total Words: {r['total_words']}",
        "",
        "## Metrics",
        "",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Slop Words (per 1k) | {m['slop_words_per_1k']:.2f} |",
        f"| Slop Trigrams (per 1k) | {m['slop_trigrams_per_1k']:.2f} |",
        f"| Ngram Repetition Score | {m['ngram_repetition_score']:.2f} |",
        f"| Not-X-But-Y (per 1k chars) | {m['not_x_but_y_per_1k_chars']:.2f} |",
        f"| MATTR-500 | {ld['mattr_500']:.4f} |",
        f"| Type-Token Ratio | {ld['type_token_ratio']:.4f} |",
        f"| Unique Words | {ld['unique_words']} |",
        f"| Vocab Level (FK Grade) | {m['vocab_level']:.1f} |",
        f"| Avg Sentence Length | {m['avg_sentence_length']:.1f} |",
        f"| Avg Paragraph Length | {m['avg_paragraph_length']:.1f} |",
        f"| Dialogue Frequency | {m['dialogue_frequency']:.4f} |",
    ]

    word_hits = r.get("slop_word_hits")
    if word_hits:
        lines.extend(["", "## Slop Word Hits", "", "| Word | Count |", "|------|-------|"])
        for word, count in word_hits[:20]:
            lines.append(f"| {word} | {count} |")
        if len(word_hits) > 20:
            lines.append(f"| ... | ({len(word_hits) - 20} more) |")

    trigram_hits = r.get("slop_trigram_hits")
    if trigram_hits:
        lines.extend(["", "## Slop Trigram Hits", "", "| Phrase | Count |", "|--------|-------|"])
        for phrase, count in trigram_hits[:20]:
            lines.append(f"| {phrase} | {count} |")

    matches = r.get("contrast_matches")
    if matches:
        lines.extend(["", "## Contrast Pattern Matches", ""])
        for match in matches[:10]:
            lines.append(f"- **{match['pattern_name']}**: \"{match['match_text']}\"")
            lines.append(f"  > {match['sentence']}")
        if len(matches) > 10:
            lines.append(f"- ... ({len(matches) - 10} more matches)")

    over = r.get("top_over_represented")
    if over:
        if over["words"]:
            lines.extend(["", "## Over-represented Words", "", "| Word | Ratio | Count |", "|------|-------|-------|"])
            for item in over["words"][:10]:
                lines.append(f"| {item['word']} | {item['ratio']:.1f}x | {item['count']} |")

        for key, title in (("bigrams", "Bigrams"), ("trigrams", "Trigrams")):
            if over[key]:
                lines.extend(["", f"## Over-represented {title}", "", "| Phrase | Ratio | Count |", "|--------|-------|-------|"])
                for item in over[key][:10]:
                    lines.append(f"| {item['phrase']} | {item['ratio']:.1f}x | {item['count']} |")

    return "\n".join(lines)


if __name__ == "__main__":
    main()
