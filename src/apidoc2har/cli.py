"""CLI entry point for apidoc2har."""

import json
import logging
from pathlib import Path

import click

from apidoc2har.converter import Converter
from apidoc2har.errors import InvalidDocumentError, UnsupportedFormatError
from apidoc2har.models import DocumentFormat
from apidoc2har.parser.detect import detect_format
from apidoc2har.parser.loader import load_document, load_variables
from apidoc2har.postman.generators import default_generators
from apidoc2har.sampler.policy import load_policy

VERSION = "0.1.0"
FORMAT_CHOICES = ["auto"] + [f.value for f in DocumentFormat]


def _load(doc_path: Path) -> dict:
    try:
        return load_document(doc_path)
    except InvalidDocumentError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(VERSION)
@click.option("-v", "--verbose", is_flag=True, help="Log conversion details to stderr.")
def main(verbose: bool):
    """apidoc2har: turn OpenAPI and Postman documents into HAR requests."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
def detect(doc_path: Path):
    """Print the detected format of an API document."""
    try:
        click.echo(detect_format(_load(doc_path)).value)
    except UnsupportedFormatError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None, help="Output file; stdout when omitted.")
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMAT_CHOICES), help="Document format.")
@click.option("--environment", type=click.Path(exists=True, path_type=Path), help="Postman environment export.")
@click.option("--globals", "globals_path", type=click.Path(exists=True, path_type=Path), help="Postman globals export.")
@click.option("--config", "config_path", type=click.Path(exists=True, path_type=Path), help="Sampling policy YAML.")
@click.option("--seed", type=int, default=None, help="Seed for Postman dynamic variables.")
@click.option("--har-log", is_flag=True, help="Wrap requests in a HAR log instead of a plain array.")
@click.option("--strict", is_flag=True, help="Fail when any operation had to be skipped.")
def convert(
    doc_path: Path,
    output: Path | None,
    fmt: str,
    environment: Path | None,
    globals_path: Path | None,
    config_path: Path | None,
    seed: int | None,
    har_log: bool,
    strict: bool,
):
    """Convert an OpenAPI or Postman document into HAR requests."""
    document = _load(doc_path)

    try:
        policy = load_policy(config_path) if config_path else None
        env_vars = load_variables(environment) if environment else None
        global_vars = load_variables(globals_path) if globals_path else None
    except InvalidDocumentError as e:
        raise click.ClickException(str(e)) from e

    converter = Converter(policy=policy, generators=default_generators(seed=seed))
    try:
        result = converter.convert(
            document,
            environment=env_vars,
            global_variables=global_vars,
            doc_format=None if fmt == "auto" else DocumentFormat(fmt),
        )
    except (UnsupportedFormatError, InvalidDocumentError) as e:
        raise click.ClickException(str(e)) from e

    for failure in result.failures:
        click.echo(f"Skipped {failure.location}: {failure.message}", err=True)

    requests = [request.to_har() for request in result.requests]
    if har_log:
        payload = {
            "log": {
                "version": "1.2",
                "creator": {"name": "apidoc2har", "version": VERSION},
                "entries": [{"request": request} for request in requests],
            }
        }
    else:
        payload = requests
    text = json.dumps(payload, indent=2, ensure_ascii=False)

    if output is None:
        click.echo(text)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        click.echo(f"Wrote {len(requests)} requests to {output}", err=True)

    if strict and result.failures:
        raise click.ClickException(f"{len(result.failures)} operation(s) could not be converted")
