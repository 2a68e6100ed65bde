#!/usr/bin/env python3
"""
Resume Rendering CLI

Creates, validates, and renders structured resumes (JSON or YAML) to LaTeX or
Typst markup and PDF.

Commands:
    init     - Write the sample resume to a file
    validate - Validate a resume file and list every issue
    markup   - Generate LaTeX or Typst markup
    compile  - Generate markup and compile it to PDF
    presets  - List formatting presets

Examples:\n

    render_resume.py init resume.json                          # Start from the sample

    render_resume.py validate resume.yaml                      # Check a resume file

    render_resume.py markup resume.json -o resume.tex          # LaTeX markup

    render_resume.py markup resume.json --dialect typst        # Typst markup to stdout

    render_resume.py compile resume.json -p spacing_tight      # PDF with a preset
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from scribe.contexts.editing import ResumeValidationError, default_resume
from scribe.contexts.editing.exceptions import InvalidResumeFormatError, PresetNotFoundError
from scribe.contexts.editing.logger import log_validation_result, setup_editing_logger
from scribe.contexts.editing.presets import load_formatting_presets, apply_presets
from scribe.contexts.editing.storage import read_resume_data, save_resume
from scribe.contexts.editing.validation import parse_resume, validate_resume
from scribe.contexts.rendering import get_compiler, render_resume
from scribe.contexts.rendering.logger import setup_rendering_logger
from scribe.contexts.templating import available_dialects, get_renderer
from scribe.contexts.templating.exceptions import UnknownDialectError
from scribe.contexts.templating.logger import setup_templating_logger
from scribe.utils.text_processing import to_filename_stem, truncate_display
from scribe.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Render structured resumes to LaTeX/Typst markup and PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _print_issues(errors) -> None:
    for issue in errors[:20]:
        typer.secho(f"  - {issue.field}: {truncate_display(issue.message, 120)}", fg=typer.colors.RED)
    if len(errors) > 20:
        typer.echo(f"  ... and {len(errors) - 20} more")


def _load_document(resume_file: Path, presets: Optional[List[str]]):
    """Read, validate, and apply presets; exits with a message on any problem."""
    try:
        document = parse_resume(read_resume_data(resume_file))
        if presets:
            document = apply_presets(document, presets)
    except (FileNotFoundError, InvalidResumeFormatError, PresetNotFoundError) as e:
        _fail(str(e))
    except ResumeValidationError as e:
        typer.secho(f"✗ {e.message}", fg=typer.colors.RED, bold=True)
        _print_issues(e.errors)
        raise typer.Exit(code=1)
    return document


ResumeFileArg = Annotated[Path, typer.Argument(help="Resume file (.json, .yaml or .yml)")]
DialectOption = Annotated[
    Optional[str],
    typer.Option("--dialect", "-d", help=f"Markup dialect: {', '.join(available_dialects())} (default: SCRIBE_DIALECT)"),
]
PresetsOption = Annotated[
    Optional[List[str]],
    typer.Option("--preset", "-p", help="Formatting preset to apply (repeatable, applied in order)"),
]
AllowUnsafeOption = Annotated[
    bool,
    typer.Option("--allow-unsafe", help="Do not reject text containing markup commands"),
]


@app.command("init")
def init_command(
    output: Annotated[Path, typer.Argument(help="Where to write the sample resume")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file")] = False,
):
    """
    Write the sample resume (Jake Ryan) as a starting point.

    Examples:\n

        $ render_resume.py init resume.json

        $ render_resume.py init resume.yaml --force
    """
    if output.exists() and not force:
        _fail(f"{output} already exists (use --force to overwrite)")

    setup_editing_logger(LOGS_PATH / f"init_{now()}", operation="init")
    save_resume(default_resume(), output)
    typer.secho(f"✓ Sample resume written to {output}", fg=typer.colors.GREEN, bold=True)


@app.command("validate")
def validate_command(resume_file: ResumeFileArg):
    """
    Validate a resume file and list every issue with its field path.

    Examples:\n

        $ render_resume.py validate resume.json
    """
    typer.secho(f"\nValidating: {resume_file}", fg=typer.colors.BLUE, bold=True)
    try:
        data = read_resume_data(resume_file)
    except (FileNotFoundError, InvalidResumeFormatError) as e:
        _fail(str(e))

    setup_editing_logger(LOGS_PATH / f"validate_{now()}", operation="validate")
    result = validate_resume(data)
    log_validation_result(str(resume_file), len(result.errors))
    if result.is_valid:
        document = result.document
        typer.secho("✓ Validation passed", fg=typer.colors.GREEN, bold=True)
        typer.echo(
            f"  Education: {len(document.education)}  Experience: {len(document.experience)}  "
            f"Projects: {len(document.projects)}  Skill categories: {len(document.skills)}"
        )
    else:
        typer.secho(f"✗ Validation failed with {len(result.errors)} errors", fg=typer.colors.RED, bold=True)
        _print_issues(result.errors)
    typer.echo("")

    raise typer.Exit(code=0 if result.is_valid else 1)


@app.command("markup")
def markup_command(
    resume_file: ResumeFileArg,
    dialect: DialectOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Markup output file (default: stdout)"),
    ] = None,
    presets: PresetsOption = None,
    allow_unsafe: AllowUnsafeOption = False,
):
    """
    Generate LaTeX or Typst markup for a resume.

    Examples:\n

        $ render_resume.py markup resume.json -o resume.tex

        $ render_resume.py markup resume.yaml --dialect typst -p margins_narrow
    """
    try:
        renderer = get_renderer(dialect)
    except UnknownDialectError as e:
        _fail(str(e))

    # Markup may go to stdout; keep console logging out of it
    setup_templating_logger(
        LOGS_PATH / f"markup_{now()}",
        dialect=renderer.name,
        console_level="INFO" if output else "ERROR",
    )
    document = _load_document(resume_file, presets)
    result = render_resume(document, renderer=renderer, reject_unsafe=not allow_unsafe)
    if not result.success:
        typer.secho(f"✗ {result.message}", fg=typer.colors.RED, bold=True, err=True)
        _print_issues(result.errors)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(result.markup, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result.markup, encoding="utf-8")
    typer.secho(f"✓ {renderer.name} markup written to {output}", fg=typer.colors.GREEN, bold=True)


@app.command("compile")
def compile_command(
    resume_file: ResumeFileArg,
    dialect: DialectOption = None,
    compiler_name: Annotated[
        Optional[str],
        typer.Option(
            "--compiler",
            "-c",
            help="Compiler backend: remote-latex, local-latex, local-typst "
            "(default: SCRIBE_COMPILER or the dialect's default)",
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="PDF output path (default: <Name>_Resume.pdf)"),
    ] = None,
    presets: PresetsOption = None,
    allow_unsafe: AllowUnsafeOption = False,
    save_markup: Annotated[
        bool,
        typer.Option("--save-markup", help="Also write the markup next to the PDF"),
    ] = False,
):
    """
    Generate markup and compile it to PDF.

    Logs go to LOGS_PATH/render_<timestamp>/render.log.

    Examples:\n

        $ render_resume.py compile resume.json

        $ render_resume.py compile resume.json -c local-latex -o out/resume.pdf

        $ render_resume.py compile resume.json -d typst -p typography_compact
    """
    try:
        renderer = get_renderer(dialect)
        compiler = get_compiler(compiler_name, dialect=renderer.name)
    except (UnknownDialectError, KeyError) as e:
        _fail(str(e).strip("'\""))

    log_dir = LOGS_PATH / f"render_{now()}"
    log_file = setup_rendering_logger(log_dir, compiler_name=compiler.name)

    document = _load_document(resume_file, presets)
    typer.secho(f"\nCompiling: {resume_file}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Dialect: {renderer.name}  Compiler: {compiler.name}")
    typer.echo("")

    result = render_resume(
        document, renderer=renderer, compiler=compiler, reject_unsafe=not allow_unsafe
    )

    if not result.success:
        typer.secho("✗ Compilation failed", fg=typer.colors.RED, bold=True)
        if result.errors:
            _print_issues(result.errors)
        elif result.message:
            typer.echo(f"\n{result.message}")
        typer.echo(f"  Log: {log_file}")
        typer.echo("")
        raise typer.Exit(code=1)

    if output is None:
        output = Path(f"{to_filename_stem(document.header.name)}.pdf")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.pdf_bytes)

    typer.secho("✓ Compilation succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  PDF: {output}")
    if result.page_count is not None:
        typer.echo(f"  Pages: {result.page_count}")
    if save_markup:
        markup_path = output.with_suffix(f".{renderer.file_extension}")
        markup_path.write_text(result.markup, encoding="utf-8")
        typer.echo(f"  Markup: {markup_path}")
    typer.echo(f"  Log: {log_file}")
    typer.echo("")


@app.command("presets")
def presets_command(
    category: Annotated[
        Optional[str],
        typer.Argument(help="Category to filter (e.g., 'spacing', 'margins', 'typography')"),
    ] = None,
):
    """
    List available formatting presets.

    Examples:\n

        $ render_resume.py presets            # All categories and presets

        $ render_resume.py presets margins    # Only margin presets
    """
    presets = load_formatting_presets()
    names = [name for name in presets if category is None or name.startswith(f"{category}_")]
    if not names:
        _fail(f"No presets found for category '{category}'")

    typer.secho("\nFormatting presets:", fg=typer.colors.BLUE, bold=True)
    for name in names:
        settings = ", ".join(f"{key}={value}" for key, value in presets[name].items())
        typer.secho(f"  {name}", fg=typer.colors.GREEN, nl=False)
        typer.echo(f"  {settings}")
    typer.echo("")


if __name__ == "__main__":
    app()
