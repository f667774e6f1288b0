#!/usr/bin/env python3
"""
Resume Generation CLI

Renders structured resume data into the LaTeX template and compiles it to PDF.

Commands:
    generate - Compile a resume input file to PDF
    render   - Write the rendered LaTeX source without compiling
    serve    - Run the HTTP API

Examples:\n

    generate_pdf.py generate data/me.yaml --photo data/me.jpg        # Writes resume.pdf

    generate_pdf.py generate data/me.json -o out/cv.pdf --timeout 60 # Custom output, timeout

    generate_pdf.py render data/me.yaml > resume.tex                 # Inspect the source

    generate_pdf.py serve --port 8080                                # Start the API
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vita.contexts.intake import load_resume_file
from vita.contexts.rendering.compiler import LATEX_COMPILER
from vita.exceptions import CompilationFailedError, InvalidResumeDataError, ResumeGenerationError
from vita.pipeline import generate_pdf, render_resume
from vita.utils.logger import setup_logger

load_dotenv()
LOGS_PATH = os.getenv("LOGS_PATH")


def _setup_cli_logger(verbose: bool, compiler: Optional[str] = None) -> None:
    setup_logger(
        context_name="cli",
        log_dir=Path(LOGS_PATH) if LOGS_PATH else None,
        extra_provenance={"LaTeX compiler": compiler or LATEX_COMPILER},
        level="DEBUG" if verbose else "INFO",
    )


def _load_or_exit(resume_file: Path, photo: Optional[Path]):
    try:
        return load_resume_file(resume_file, photo_path=photo)
    except (FileNotFoundError, InvalidResumeDataError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


app = typer.Typer(
    help="Render resume data into LaTeX and compile it to PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("generate")
def generate_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume input file (YAML or JSON)"),
    ],
    photo: Annotated[
        Optional[Path],
        typer.Option("--photo", "-p", help="Photo to embed (overrides photo_path in the input)"),
    ] = None,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Where to write the PDF"),
    ] = Path("resume.pdf"),
    template: Annotated[
        Optional[Path],
        typer.Option("--template", "-t", help="LaTeX template (default: bundled template)"),
    ] = None,
    compiler: Annotated[
        Optional[str],
        typer.Option("--compiler", "-c", help="LaTeX compiler executable (default: LATEX_COMPILER)"),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", help="Compiler timeout in seconds, 0 disables", min=0),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
):
    """
    Compile a resume input file to PDF.

    Examples:\n

        $ generate_pdf.py generate me.yaml --photo me.jpg

        $ generate_pdf.py generate me.yaml -o cv.pdf --compiler xelatex
    """
    _setup_cli_logger(verbose, compiler)
    resume = _load_or_exit(resume_file, photo)

    typer.secho(f"\nGenerating: {resume_file}", fg=typer.colors.BLUE, bold=True)
    typer.echo("")

    try:
        pdf_bytes = generate_pdf(resume, template_path=template, compiler=compiler, timeout=timeout)
    except ResumeGenerationError as e:
        typer.echo("")
        typer.secho(f"✗ {e.kind}", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {e}", fg=typer.colors.RED)
        if isinstance(e, CompilationFailedError):
            for error in e.errors[:10]:
                typer.secho(f"  - {error}", fg=typer.colors.RED)
            if len(e.errors) > 10:
                typer.echo(f"  ... and {len(e.errors) - 10} more")
        typer.echo("")
        raise typer.Exit(code=1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(pdf_bytes)

    typer.echo("")
    typer.secho("✓ Generation succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  PDF: {output} ({len(pdf_bytes)} bytes)")
    typer.echo("")


@app.command("render")
def render_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume input file (YAML or JSON)"),
    ],
    photo: Annotated[
        Optional[Path],
        typer.Option("--photo", "-p", help="Photo to embed (overrides photo_path in the input)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Where to write the .tex source (default: stdout)"),
    ] = None,
    template: Annotated[
        Optional[Path],
        typer.Option("--template", "-t", help="LaTeX template (default: bundled template)"),
    ] = None,
):
    """
    Write the rendered LaTeX source without compiling.

    Examples:\n

        $ generate_pdf.py render me.yaml > resume.tex

        $ generate_pdf.py render me.yaml -o build/resume.tex
    """
    _setup_cli_logger(verbose=False)
    resume = _load_or_exit(resume_file, photo)

    try:
        document_source = render_resume(resume, template_path=template)
    except ResumeGenerationError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(document_source, nl=False)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document_source, encoding="utf-8")
        typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)


@app.command("serve")
def serve_command(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Port")] = 8080,
):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("vita.api:app", host=host, port=port)


if __name__ == "__main__":
    app()
