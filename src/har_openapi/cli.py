"""CLI entry point for har-openapi."""

import json
from pathlib import Path

import click
from pydantic import ValidationError

from har_openapi.capture.filter import filter_har, merge_har_files
from har_openapi.capture.har import load_samples, read_har
from har_openapi.config import AnnotationRules, get_settings
from har_openapi.document.generator import DocumentGenerator
from har_openapi.document.serializer import format_for, load_document, render
from har_openapi.document.tools import merge_documents, sort_document
from har_openapi.errors import CaptureFormatError, DocumentFormatError
from har_openapi.logging import configure_logging


def _load_rules(rules_path: Path | None) -> AnnotationRules:
    settings = get_settings()
    try:
        if rules_path is not None:
            return AnnotationRules.from_yaml(rules_path)
        return settings.annotation_rules()
    except (ValueError, ValidationError) as e:
        raise click.ClickException(str(e))


def _read_har(file_path: Path) -> dict:
    try:
        return read_har(file_path)
    except CaptureFormatError as e:
        raise click.ClickException(str(e))


def _load_document(file_path: Path) -> dict:
    try:
        return load_document(file_path)
    except DocumentFormatError as e:
        raise click.ClickException(str(e))


def _emit(content: str, output: Path | None) -> None:
    """Write to ``output``, or to stdout when no output path is given."""
    if output is None:
        click.echo(content, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    click.echo(f"{output}: Wrote file.", err=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
def main(verbose: bool):
    """HAR to OpenAPI: generate API descriptions from captured traffic."""
    configure_logging("DEBUG" if verbose else get_settings().log_level)


@main.command()
@click.argument("har_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file path for the document.")
@click.option("--cookie", default=None, help="Require a session cookie with this name (adds an apiKey security scheme).")
@click.option("--rules", "rules_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML file overriding the field annotation rules.")
@click.option("--root-segments", default=None, type=click.IntRange(min=0), help="Leading path segments shared by every endpoint.")
@click.option("--format", "fmt", default=None, type=click.Choice(["yaml", "json"]), help="Document format (default: from the output suffix).")
def generate(har_file: Path, output: Path | None, cookie: str | None, rules_path: Path | None, root_segments: int | None, fmt: str | None):
    """Generate an OpenAPI document from a HAR file."""
    settings = get_settings()
    output = output or settings.default_output
    rules = _load_rules(rules_path)

    try:
        samples = load_samples(har_file)
    except CaptureFormatError as e:
        raise click.ClickException(str(e))
    click.echo(f"Read {len(samples)} requests from {har_file}.", err=True)

    gen = DocumentGenerator(settings=settings, rules=rules, root_segments=root_segments)
    document = gen.generate(samples, cookie=cookie)
    click.echo(f"Found {sum(len(m) for m in document.paths.values())} operations, {len(document.schemas)} schemas.", err=True)

    _emit(render(document.to_openapi(), fmt or format_for(output)), output)


@main.command(name="filter")
@click.argument("har_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("only_path")
@click.option("-e", "--exclude", multiple=True, help="Drop paths starting with this prefix. Repeatable.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output HAR file (default: stdout).")
def filter_command(har_file: Path, only_path: str, exclude: tuple[str, ...], output: Path | None):
    """Keep one entry per path for paths starting with ONLY_PATH (e.g. /api)."""
    har = filter_har(_read_har(har_file), only_path, exclude)
    _emit(json.dumps(har, indent=2, ensure_ascii=False) + "\n", output)


@main.command()
@click.argument("har_files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output HAR file (default: stdout).")
def merge(har_files: tuple[Path, ...], output: Path | None):
    """Merge multiple HAR logs into one."""
    try:
        har = merge_har_files(list(har_files))
    except CaptureFormatError as e:
        raise click.ClickException(str(e))
    _emit(json.dumps(har, indent=2, ensure_ascii=False) + "\n", output)


@main.command(name="merge-spec")
@click.argument("spec_files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output document (default: stdout).")
def merge_spec(spec_files: tuple[Path, ...], output: Path | None):
    """Merge OpenAPI documents; the first file wins on conflicts."""
    first, *rest = spec_files
    doc = _load_document(first)
    click.echo(f"{first}: Read file to spec.", err=True)
    for file_path in rest:
        doc = merge_documents(doc, _load_document(file_path))
        click.echo(f"{file_path}: Added file to spec.", err=True)
    _emit(render(doc, format_for(output or first)), output)


@main.command(name="sort")
@click.argument("spec_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output document (default: overwrite SPEC_FILE).")
def sort_command(spec_file: Path, output: Path | None):
    """Sort paths and component schemas by name."""
    output = output or spec_file
    doc = sort_document(_load_document(spec_file))
    _emit(render(doc, format_for(output)), output)
