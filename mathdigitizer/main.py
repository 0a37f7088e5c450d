"""MathDigitizer CLI."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from mathdigitizer.assembly.assembler import FIGURE_PLACEHOLDER, WordDocumentAssembler
from mathdigitizer.assembly.exporter import WordExporter
from mathdigitizer.config.settings import Settings
from mathdigitizer.logging.logger import Log
from mathdigitizer.processor.models import EXTENSION_TYPES, Document, DocumentStatus
from mathdigitizer.processor.processor import build_processor
from mathdigitizer.session.credentials import CredentialProviderFactory
from mathdigitizer.session.session import DigitizerSession

app = typer.Typer(
    name="mathdigitizer",
    help="Digitize math documents into Word files with cropped figures",
    add_completion=False,
)
console = Console()


def build_session(settings: Settings, output_dir: Path | None = None) -> DigitizerSession:
    """Wire a session from settings; the processor is built on first use."""
    return DigitizerSession(
        processor_builder=lambda: build_processor(Settings()),
        credentials=CredentialProviderFactory.create(settings),
        assembler=WordDocumentAssembler(fallback_template=settings.figure_fallback_template),
        exporter=WordExporter(
            output_dir=output_dir or Path(settings.output_dir),
            suffix=settings.output_suffix,
        ),
        key_poll_interval_seconds=settings.key_poll_interval_seconds,
    )


def _key_badge(ready: bool) -> str:
    return "[green]● API READY[/green]" if ready else "[bold]SETUP API KEY[/bold]"


def _print_transcript(document: Document) -> None:
    if document.result is None:
        return
    for line in document.result.latex.split("\n"):
        if FIGURE_PLACEHOLDER.search(line):
            console.print(
                Panel(
                    f"{line} (AI identified the crop region for this figure)",
                    style="blue",
                )
            )
        else:
            console.print(line, markup=False, highlight=False)


@app.command()
def convert(
    file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="PDF, Word (.docx) or image file to digitize"
    ),
    output_dir: Path | None = typer.Option(None, help="Directory for the .doc file"),
    save_html: bool = typer.Option(False, "--save-html", help="Also save the model's HTML"),
) -> None:
    """Digitize a single document and write a Word file."""
    settings = Settings()
    Log.configure(settings.log_level)

    if file.suffix.lower() not in EXTENSION_TYPES:
        console.print(
            f"[red]Unsupported file extension '{file.suffix}'.[/red] "
            f"Accepted: {', '.join(EXTENSION_TYPES)}"
        )
        raise typer.Exit(code=1)

    with build_session(settings, output_dir) as session:
        console.print(_key_badge(session.has_key))
        document = session.upload(file)
        console.print(f"[bold blue]Processing:[/bold blue] {document.file_name}")
        with console.status("Analyzing pages and detecting figures..."):
            session.process()

        if document.status is DocumentStatus.ERROR:
            console.print(f"[red]Error:[/red] {document.error}")
            raise typer.Exit(code=1)

        _print_transcript(document)
        path = session.download()
        if path is None:
            console.print("[yellow]Nothing to download: the transcript is empty[/yellow]")
        else:
            console.print(f"[green]Saved:[/green] {path}")

        if save_html and document.result is not None:
            html_path = (output_dir or Path(settings.output_dir)) / f"{document.download_name}.html"
            html_path.parent.mkdir(parents=True, exist_ok=True)
            html_path.write_text(document.result.html, encoding="utf-8")
            console.print(f"[green]Saved:[/green] {html_path}")


@app.command("key-status")
def key_status() -> None:
    """Show whether the model access key is configured."""
    settings = Settings()
    credentials = CredentialProviderFactory.create(settings)
    console.print(_key_badge(credentials.has_selected_api_key()))


@app.command("setup-key")
def setup_key(
    api_key: str = typer.Option(..., prompt=True, hide_input=True, help="Model access key"),
) -> None:
    """Store the model access key in the environment file."""
    settings = Settings()
    Log.configure(settings.log_level)
    credentials = CredentialProviderFactory.create(settings)
    try:
        credentials.open_select_key(api_key)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(_key_badge(credentials.has_selected_api_key()))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
