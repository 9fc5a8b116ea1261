"""Tests for buildx introspection and output parsing."""

from __future__ import annotations

import logging

import pytest

from setupbuildx.buildx.inspector import (
    BuildxInspector,
    InspectParser,
    builder_container_name,
    parse_inspect,
    parse_version,
)
from setupbuildx.buildx.models import Builder
from setupbuildx.core.errors import ExternalToolError, ParseError
from setupbuildx.core.subprocess_runner import ExecOutput

INSPECT_OUTPUT = (
    "Name: mybuilder\n"
    "Driver: docker-container\n"
    "\n"
    "Name: mybuilder0\n"
    "Endpoint: unix:///var/run/docker.sock\n"
    "Status: running\n"
    "Platforms: linux/amd64, linux/arm64\n"
)


class TestParseVersion:
    def test_parses_buildx_output(self) -> None:
        assert parse_version("github.com/docker/buildx v0.11.2 abcdef") == "0.11.2"

    def test_without_v_prefix(self) -> None:
        assert parse_version("github.com/docker/buildx 0.10.4 c513d34") == "0.10.4"

    def test_version_at_start(self) -> None:
        assert parse_version("v0.9.1") == "0.9.1"

    def test_no_version_token(self) -> None:
        with pytest.raises(ParseError, match="Cannot parse buildx version"):
            parse_version("github.com/docker/buildx dev")

    def test_unparsable_token(self) -> None:
        with pytest.raises(ParseError):
            parse_version("buildx v0.11")


class TestParseInspect:
    """Tests for parse_inspect."""

    def test_builder_and_node_fields(self) -> None:
        builder = parse_inspect(INSPECT_OUTPUT)
        assert builder.name == "mybuilder"
        assert builder.driver == "docker-container"
        assert builder.node_name == "mybuilder0"
        assert builder.node_endpoint == "unix:///var/run/docker.sock"
        assert builder.node_status == "running"
        assert builder.node_platforms == "linux/amd64,linux/arm64"

    def test_stops_after_platforms(self) -> None:
        output = INSPECT_OUTPUT + "Flags: --debug\n\nName: mybuilder1\nStatus: stopped\n"
        builder = parse_inspect(output)
        assert builder.node_flags is None
        assert builder.node_name == "mybuilder0"
        assert builder.node_status == "running"

    def test_last_node_wins_before_platforms(self) -> None:
        output = (
            "Name: multi\n"
            "Driver: docker-container\n"
            "\n"
            "Name: multi0\n"
            "Status: inactive\n"
            "\n"
            "Name: multi1\n"
            "Status: running\n"
            "Flags: --allow-insecure-entitlement security.insecure\n"
            "Platforms: linux/arm64\n"
        )
        builder = parse_inspect(output)
        assert builder.name == "multi"
        assert builder.node_name == "multi1"
        assert builder.node_status == "running"
        assert builder.node_flags == "--allow-insecure-entitlement security.insecure"

    def test_crlf_line_endings(self) -> None:
        builder = parse_inspect(INSPECT_OUTPUT.replace("\n", "\r\n"))
        assert builder.driver == "docker-container"
        assert builder.node_status == "running"
        assert builder.node_platforms == "linux/amd64,linux/arm64"

    def test_blank_values_and_unknown_keys_skipped(self) -> None:
        output = "Name: b\nLast Activity:\nBuildkit: v0.12.0\nDriver: docker\n"
        builder = parse_inspect(output)
        assert builder == Builder(name="b", driver="docker")

    def test_empty_output(self) -> None:
        assert parse_inspect("") == Builder()


class TestInspectParser:
    def test_state_transitions(self) -> None:
        parser = InspectParser()
        assert parser.state.value == "awaiting_key"
        parser.feed("Name: x")
        assert parser.state.value == "in_block"
        parser.feed("")
        assert parser.state.value == "awaiting_key"
        parser.feed("Platforms: linux/amd64")
        assert parser.done
        parser.feed("Name: ignored")
        assert parser.builder.node_name is None


class TestBuildxInspector:
    """Tests for BuildxInspector against a fake process runner."""

    def test_is_available_success(self, fake_runner) -> None:
        fake_runner.results[("buildx",)] = ExecOutput("usage", "", 0)
        assert BuildxInspector(runner=fake_runner).is_available() is True

    def test_is_available_success_with_warning(self, fake_runner) -> None:
        fake_runner.results[("buildx",)] = ExecOutput("usage", "WARNING: something", 0)
        assert BuildxInspector(runner=fake_runner).is_available() is True

    def test_is_available_failure_without_stderr(self, fake_runner) -> None:
        fake_runner.results[("buildx",)] = ExecOutput("", "", 1)
        assert BuildxInspector(runner=fake_runner).is_available() is True

    def test_is_available_false(self, fake_runner) -> None:
        fake_runner.results[("buildx",)] = ExecOutput("", "'buildx' is not a docker command.", 1)
        assert BuildxInspector(runner=fake_runner).is_available() is False

    def test_get_version(self, fake_runner) -> None:
        fake_runner.results[("buildx", "version")] = ExecOutput(
            "github.com/docker/buildx v0.11.2 9872040\n", "", 0
        )
        assert BuildxInspector(runner=fake_runner).get_version() == "0.11.2"
        assert fake_runner.calls == [("docker", "buildx", "version")]

    def test_get_version_unstripped_output(self, fake_runner) -> None:
        fake_runner.results[("buildx", "version")] = ExecOutput("\n\nv0.12.1\n", "", 0)
        assert BuildxInspector(runner=fake_runner).get_version() == "0.12.1"

    def test_get_version_failure(self, fake_runner) -> None:
        fake_runner.results[("buildx", "version")] = ExecOutput("", "  boom  \n", 1)
        with pytest.raises(ExternalToolError, match="^boom$"):
            BuildxInspector(runner=fake_runner).get_version()

    def test_inspect(self, fake_runner) -> None:
        fake_runner.results[("buildx", "inspect", "mybuilder")] = ExecOutput(INSPECT_OUTPUT, "", 0)
        builder = BuildxInspector(runner=fake_runner).inspect("mybuilder")
        assert builder.name == "mybuilder"
        assert builder.to_outputs()["platforms"] == "linux/amd64,linux/arm64"

    def test_inspect_failure(self, fake_runner) -> None:
        fake_runner.results[("buildx", "inspect", "nope")] = ExecOutput("", "no builder \"nope\" found", 1)
        with pytest.raises(ExternalToolError, match="no builder"):
            BuildxInspector(runner=fake_runner).inspect("nope")

    def test_env_passed_to_every_call(self, fake_runner) -> None:
        inspector = BuildxInspector(runner=fake_runner, env={"DOCKER_CONFIG": "/cfg"})
        inspector.is_available()
        inspector.inspect("mybuilder")
        assert fake_runner.envs == [{"DOCKER_CONFIG": "/cfg"}, {"DOCKER_CONFIG": "/cfg"}]

    def test_no_env_by_default(self, fake_runner) -> None:
        BuildxInspector(runner=fake_runner).is_available()
        assert fake_runner.envs == [None]


class TestGetBuildKitVersion:
    IMAGE_ARGS = ("inspect", "--format", "{{.Config.Image}}", "buildx_buildkit_b0")

    def test_success(self, fake_runner) -> None:
        fake_runner.results[self.IMAGE_ARGS] = ExecOutput("moby/buildkit:buildx-stable-1\n", "", 0)
        fake_runner.results[("run", "--rm", "moby/buildkit:buildx-stable-1", "--version")] = ExecOutput(
            "buildkitd github.com/moby/buildkit v0.12.2 567a99433\n", "", 0
        )
        version = BuildxInspector(runner=fake_runner).get_buildkit_version("buildx_buildkit_b0")
        assert version == "moby/buildkit:buildx-stable-1 => buildkitd github.com/moby/buildkit v0.12.2 567a99433"

    def test_image_lookup_failure_warns(self, fake_runner, caplog) -> None:
        fake_runner.results[self.IMAGE_ARGS] = ExecOutput("", "No such object", 1)
        with caplog.at_level(logging.WARNING, logger="setupbuildx"):
            version = BuildxInspector(runner=fake_runner).get_buildkit_version("buildx_buildkit_b0")
        assert version == ""
        assert "No such object" in caplog.text
        assert len(fake_runner.calls) == 1

    def test_version_run_failure_returns_partial(self, fake_runner, caplog) -> None:
        fake_runner.results[self.IMAGE_ARGS] = ExecOutput("moby/buildkit:latest", "", 0)
        fake_runner.results[("run", "--rm", "moby/buildkit:latest", "--version")] = ExecOutput(
            "", "pull access denied", 125
        )
        with caplog.at_level(logging.WARNING, logger="setupbuildx"):
            version = BuildxInspector(runner=fake_runner).get_buildkit_version("buildx_buildkit_b0")
        assert version == ""
        assert "pull access denied" in caplog.text


class TestBuilderContainerName:
    def test_docker_container_driver(self) -> None:
        builder = Builder(name="b", driver="docker-container", node_name="b0")
        assert builder_container_name(builder) == "buildx_buildkit_b0"

    def test_other_driver(self) -> None:
        assert builder_container_name(Builder(name="default", driver="docker", node_name="default")) is None
