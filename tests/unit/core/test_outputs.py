"""Tests for step outputs."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

from setupbuildx.core.outputs import format_output, set_output, set_outputs


class TestFormatOutput:
    def test_single_line(self) -> None:
        assert format_output("name", "mybuilder") == "name=mybuilder\n"

    def test_multi_line_uses_delimiter(self) -> None:
        text = format_output("flags", "a\nb")
        header, body = text.split("\n", 1)
        assert header.startswith("flags<<ghadelimiter_")
        delimiter = header.split("<<", 1)[1]
        assert body == f"a\nb\n{delimiter}\n"


class TestSetOutput:
    def test_appends_to_github_output(self, tmp_path: Path) -> None:
        output_file = tmp_path / "output"
        with patch.dict(os.environ, {"GITHUB_OUTPUT": str(output_file)}):
            set_output("name", "mybuilder")
            set_output("driver", None)
        assert output_file.read_text() == "name=mybuilder\ndriver=\n"

    def test_without_output_file_only_logs(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            set_output("name", "mybuilder")
        assert list(tmp_path.iterdir()) == []

    def test_set_outputs_order(self, tmp_path: Path) -> None:
        output_file = tmp_path / "output"
        set_outputs({"name": "b", "status": "running"}, output_file=output_file)
        assert output_file.read_text() == "name=b\nstatus=running\n"
