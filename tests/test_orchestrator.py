"""Tests for the orchestration pipeline."""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest

from tests._fixtures.source_builder import SAMPLE_SOURCE, SourceBuilder
from zigmarkdoc.config import RunConfig
from zigmarkdoc.errors import EXIT_MISMATCH, EXIT_OK, InvocationError, ResourceError, SourceSyntaxError
from zigmarkdoc.orchestrator import MAX_SOURCE_BYTES, Orchestrator, decode_source


def test_run_writes_to_stdout_stream(source_builder: SourceBuilder) -> None:
    path = source_builder.write("sample.zig", SAMPLE_SOURCE)
    stream = io.BytesIO()
    status = Orchestrator().run(RunConfig(input_path=path), stdout=stream)
    assert status == EXIT_OK
    assert stream.getvalue().startswith(b"# sample\n\nGeometry helpers.\nPoints and shapes.\n")


def test_run_writes_output_file(source_builder: SourceBuilder, tmp_path: Path) -> None:
    path = source_builder.write("sample.zig", SAMPLE_SOURCE)
    output = tmp_path / "out" / "sample.json"
    output.parent.mkdir()
    status = Orchestrator().run(
        RunConfig(input_path=path, output_path=output, output_format="structured")
    )
    assert status == EXIT_OK
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["name"] == "sample"
    assert [entry.name for entry in output.parent.iterdir()] == ["sample.json"]


def test_write_replaces_existing_file(source_builder: SourceBuilder, tmp_path: Path) -> None:
    path = source_builder.write("sample.zig", SAMPLE_SOURCE)
    output = tmp_path / "sample.md"
    output.write_text("stale\n", encoding="utf-8")
    Orchestrator().run(RunConfig(input_path=path, output_path=output))
    assert output.read_text(encoding="utf-8").startswith("# sample\n")


def test_check_matches_after_write(source_builder: SourceBuilder, tmp_path: Path) -> None:
    path = source_builder.write("sample.zig", SAMPLE_SOURCE)
    output = tmp_path / "sample.md"
    orchestrator = Orchestrator()
    orchestrator.run(RunConfig(input_path=path, output_path=output))
    before = output.stat().st_mtime_ns
    status = orchestrator.run(RunConfig(input_path=path, output_path=output, check=True))
    assert status == EXIT_OK
    assert output.stat().st_mtime_ns == before


def test_check_reports_mismatch_without_writing(
    source_builder: SourceBuilder, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = source_builder.write("sample.zig", SAMPLE_SOURCE)
    output = tmp_path / "sample.md"
    output.write_bytes(b"# outdated\n")
    with caplog.at_level(logging.INFO, logger="zigmarkdoc"):
        status = Orchestrator().run(RunConfig(input_path=path, output_path=output, check=True))
    assert status == EXIT_MISMATCH
    assert output.read_bytes() == b"# outdated\n"
    assert "Documentation mismatch" in caplog.text


def test_check_with_missing_output_is_resource_error(source_builder: SourceBuilder, tmp_path: Path) -> None:
    path = source_builder.write("sample.zig", SAMPLE_SOURCE)
    with pytest.raises(ResourceError):
        Orchestrator().run(RunConfig(input_path=path, output_path=tmp_path / "missing.md", check=True))


def test_check_requires_output(source_builder: SourceBuilder) -> None:
    path = source_builder.write("sample.zig", SAMPLE_SOURCE)
    with pytest.raises(InvocationError):
        Orchestrator().run(RunConfig(input_path=path, check=True))


def test_missing_input_is_resource_error(tmp_path: Path) -> None:
    with pytest.raises(ResourceError) as excinfo:
        Orchestrator().run(RunConfig(input_path=tmp_path / "nope.zig"), stdout=io.BytesIO())
    assert excinfo.value.exit_code == 3


def test_oversized_input_is_resource_error(source_builder: SourceBuilder) -> None:
    path = source_builder.write_bytes("big.zig", b" " * (MAX_SOURCE_BYTES + 1))
    with pytest.raises(ResourceError):
        Orchestrator().run(RunConfig(input_path=path), stdout=io.BytesIO())


def test_unwritable_output_is_resource_error(source_builder: SourceBuilder, tmp_path: Path) -> None:
    path = source_builder.write("sample.zig", SAMPLE_SOURCE)
    output = tmp_path / "no-such-dir" / "sample.md"
    with pytest.raises(ResourceError):
        Orchestrator().run(RunConfig(input_path=path, output_path=output))
    assert not output.parent.exists()


def test_syntax_error_produces_no_output(source_builder: SourceBuilder, tmp_path: Path) -> None:
    path = source_builder.write("broken.zig", "pub const x = \n")
    output = tmp_path / "broken.md"
    with pytest.raises(SourceSyntaxError):
        Orchestrator().run(RunConfig(input_path=path, output_path=output))
    assert not output.exists()


def test_invalid_utf8_is_syntax_error() -> None:
    with pytest.raises(SourceSyntaxError) as excinfo:
        decode_source(b"const a = 1;\nconst \xff = 2;\n", "bad.zig")
    issue = excinfo.value.issues[0]
    assert (issue.line, issue.column) == (2, 7)
    assert excinfo.value.exit_code == 2


def test_byte_order_mark_is_ignored() -> None:
    assert decode_source(b"\xef\xbb\xbfconst a = 1;\n", "bom.zig") == "const a = 1;\n"


def test_generate_is_deterministic(source_builder: SourceBuilder) -> None:
    path = source_builder.write("sample.zig", SAMPLE_SOURCE)
    orchestrator = Orchestrator()
    config = RunConfig(input_path=path, include_private=True)
    source = orchestrator.read_source(path)
    assert orchestrator.generate(source, str(path), config) == orchestrator.generate(
        source, str(path), config
    )
