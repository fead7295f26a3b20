"""Convert command implementation."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from epub_webbook.core.pipeline import WebBookPipeline
from epub_webbook.models.config import ConversionConfig
from epub_webbook.models.report import ConversionOutcome, ConversionReport

BANNER = "[bold]EPUB3 to EPUB3-compatible WebBook[/]"


def print_warning(console: Console, message: str) -> None:
    console.print(f"[yellow]\\[WARNING][/] {escape(message)}")


def print_error(console: Console, message: str) -> None:
    console.print(f"[red]\\[ERROR][/] {escape(message)}")


def display_report(report: ConversionReport, console: Console) -> None:
    """Print what the run found and changed."""
    if report.extracted_entries is not None:
        console.print(
            f"Extracted {report.extracted_entries} entries into "
            f"{escape(str(report.package_root))}"
        )

    rewrite = report.rewrite
    if rewrite is not None:
        console.print(f"Found main rendition: {escape(str(rewrite.opf_path))}")

    for warning in report.warnings:
        print_warning(console, warning)

    if report.outcome == ConversionOutcome.NO_RENDITION:
        console.print("[dim]No OEBPS package declared in container.xml, nothing to do[/]")
        return
    if report.outcome == ConversionOutcome.ALREADY_WEBBOOK:
        return

    navigation = rewrite.navigation
    summary_lines = [
        "[green]Navigation Document relocated[/]",
        "",
        f"[dim]From:[/] {escape(str(rewrite.nav_source))}",
        f"[dim]To:[/] {escape(str(rewrite.nav_target))}",
        f"[dim]OPF href:[/] {escape(rewrite.nav_item.href)} -> {escape(rewrite.new_href)}",
        f"[dim]Links rewritten:[/] {navigation.rewritten}",
        f"[dim]Links kept:[/] {navigation.skipped}",
    ]
    console.print(
        Panel(
            "\n".join(summary_lines),
            title="Complete",
            border_style="green",
        )
    )


def execute_convert(
    source: Path,
    workdir: Path,
    console: Console,
) -> ConversionReport:
    """Execute the convert command.

    ``source`` is either an EPUB archive, extracted into ``workdir`` first,
    or an already extracted package converted in place.

    Raises:
        WebBookError: If any stage hits a fatal condition
    """
    console.print(Panel(BANNER, border_style="blue"))

    pipeline = WebBookPipeline(ConversionConfig(workdir=workdir))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Converting...", total=None)
        if source.is_dir():
            report = pipeline.convert_tree(source)
        else:
            report = pipeline.convert_archive(source)

    display_report(report, console)
    return report
