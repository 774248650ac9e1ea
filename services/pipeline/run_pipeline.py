#!/usr/bin/env python3
"""
FRI Pipeline Runner - Runs one submission through extract → sanitize → classify → project
"""

import json
import os
import sys

import click
import structlog

from services.classify.generator import DEFAULT_CLASSIFIER_MODEL, DEFAULT_OLLAMA_URL, OllamaGenerator
from shared.errors import PipelineError

from .config import InputShape, PipelineConfig
from .orchestrator import build_pipeline

log = structlog.get_logger()


@click.group()
def cli():
    """Feature Request Intake tools."""


@cli.command()
@click.option("--input", "-i", "input_file", required=True, type=click.Path(exists=True, dir_okay=False),
              help="Typeform webhook JSON, or notification text with --text")
@click.option("--text", "as_text", is_flag=True, help="Treat the input file as notification text")
@click.option("--output-dir", "-o", default=None, help="Directory for result JSON (default: print only)")
@click.option("--strict", is_flag=True, help="Fail instead of falling back on unusable LLM output")
@click.option("--ticket", is_flag=True, help="Generate a ticket specification")
@click.option("--no-row", is_flag=True, help="Skip the tracking-sheet row")
@click.option("--text-parser", type=click.Choice(["llm", "anchor"]), default=None,
              help="Notification text parser (default: FRI_TEXT_PARSER or llm)")
@click.option("--sheet-path", default=None, help="Append sheet rows to this JSONL file")
@click.option("--ticket-path", default=None, help="Append tickets to this JSONL file")
@click.option("--ollama-url", default=None, help="Ollama URL (default: from OLLAMA_URL env or http://localhost:11434)")
@click.option("--model", default=None, help="LLM model for parsing and classification")
def run(input_file: str, as_text: bool, output_dir: str, strict: bool, ticket: bool, no_row: bool,
        text_parser: str, sheet_path: str, ticket_path: str, ollama_url: str, model: str):
    """Process one feature request submission."""

    env_config = PipelineConfig.from_env(
        input_shape=InputShape.FREE_TEXT if as_text else InputShape.STRUCTURED
    )
    config = PipelineConfig(
        strict_classification=strict or env_config.strict_classification,
        input_shape=env_config.input_shape,
        emit_row=env_config.emit_row and not no_row,
        emit_ticket=ticket or env_config.emit_ticket,
    )
    generator = OllamaGenerator(
        ollama_url=ollama_url or DEFAULT_OLLAMA_URL,
        model=model or DEFAULT_CLASSIFIER_MODEL,
    )
    log.info("Pipeline config", input_shape=config.input_shape.value,
             strict=config.strict_classification, ticket=config.emit_ticket)

    with open(input_file, encoding="utf-8") as f:
        raw = f.read() if as_text else json.load(f)

    pipeline = build_pipeline(
        config=config,
        generator=generator,
        text_parser=text_parser,
        sheet_path=sheet_path,
        ticket_path=ticket_path,
    )

    try:
        result = pipeline.run(raw)
    except PipelineError as e:
        log.error("Pipeline failed", **e.to_dict())
        click.echo(json.dumps({"success": False, "error": e.to_dict()}, indent=2), err=True)
        sys.exit(2 if e.kind == "malformed_input" else 1)
    finally:
        generator.close()

    output = result.model_dump(mode="json", by_alias=True)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
        out_file = os.path.join(output_dir, f"{result.request_id}.json")
        with open(out_file, "w") as f:
            json.dump(output, f, indent=2)
        log.info("Result saved", output=out_file)

    click.echo(json.dumps(output, indent=2))


@cli.command()
@click.option("--host", default=os.getenv("FRI_HOST", "0.0.0.0"))
@click.option("--port", type=int, default=int(os.getenv("FRI_PORT", "4111")))
def serve(host: str, port: int):
    """Run the webhook API service."""
    import uvicorn

    uvicorn.run("services.api.main:app", host=host, port=port)


def main():
    cli()


if __name__ == "__main__":
    main()
