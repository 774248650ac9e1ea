import json

import pytest
from click.testing import CliRunner

from services.pipeline import run_pipeline

from conftest import FakeGenerator


class ClosableFakeGenerator(FakeGenerator):
    def __init__(self, *args, **kwargs):
        super().__init__("not json", "not json")
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def fake_ollama(monkeypatch):
    monkeypatch.setattr(run_pipeline, "OllamaGenerator", ClosableFakeGenerator)


def test_run_structured(tmp_path, webhook_payload):
    input_file = tmp_path / "payload.json"
    input_file.write_text(json.dumps(webhook_payload))
    output_dir = tmp_path / "out"

    result = CliRunner().invoke(run_pipeline.cli, ["run", "-i", str(input_file), "-o", str(output_dir)])

    assert result.exit_code == 0, result.output
    files = list(output_dir.glob("req_*.json"))
    assert len(files) == 1
    saved = json.loads(files[0].read_text())
    assert saved["record"]["feature_name"] == "Feature Review Needed"
    assert saved["row"]["niche"] == "Hair, Nails"


def test_run_text_with_anchor_parser(tmp_path):
    input_file = tmp_path / "notification.txt"
    input_file.write_text(
        "Please describe the feature you're requesting. Note anything you like! "
        "Recurring appointments. What type of services do you provide? Yoga"
    )

    result = CliRunner().invoke(
        run_pipeline.cli,
        ["run", "-i", str(input_file), "--text", "--text-parser", "anchor"],
    )

    assert result.exit_code == 0, result.output
    assert '"Yoga"' in result.output


def test_missing_description_exit_code(tmp_path, webhook_payload):
    webhook_payload["form_response"]["answers"] = []
    input_file = tmp_path / "payload.json"
    input_file.write_text(json.dumps(webhook_payload))

    result = CliRunner().invoke(run_pipeline.cli, ["run", "-i", str(input_file)])

    assert result.exit_code == 2


def test_strict_exit_code(tmp_path, webhook_payload):
    input_file = tmp_path / "payload.json"
    input_file.write_text(json.dumps(webhook_payload))

    result = CliRunner().invoke(run_pipeline.cli, ["run", "-i", str(input_file), "--strict"])

    assert result.exit_code == 1


def test_text_parser_failure_exit_code(tmp_path):
    input_file = tmp_path / "notification.txt"
    input_file.write_text("Please describe the feature you're requesting. Waitlists")

    result = CliRunner().invoke(
        run_pipeline.cli,
        ["run", "-i", str(input_file), "--text", "--text-parser", "llm"],
    )

    assert result.exit_code == 1
