"""Configuration data models for setupbuildx.

Defines the typed configuration that represents .setup-buildx.yml and the
equivalent GitHub Actions inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

DEFAULT_DRIVER = "docker-container"

DEFAULT_BUILDKITD_FLAGS = (
    "--allow-insecure-entitlement security.insecure "
    "--allow-insecure-entitlement network.host"
)


@dataclass
class SetupBuildxConfig:
    """Complete setupbuildx configuration.

    Example .setup-buildx.yml:
        version: v0.11.2
        driver: docker-container
        driver_opts:
          - image=moby/buildkit:master
          - network=host
        use: true
    """

    # Version specifier: "", "v0.11.2", "pr-1234" or a workflow run id
    version: str = ""
    driver: str = DEFAULT_DRIVER
    driver_opts: List[str] = field(default_factory=list)
    buildkitd_flags: str = DEFAULT_BUILDKITD_FLAGS
    install: bool = False
    use: bool = True
    endpoint: str = ""
    config: str = ""
    github_token: str = ""
    # Empty = $DOCKER_CONFIG or ~/.docker
    docker_config_home: str = ""

    # Metadata (not from YAML, set by loader)
    _config_sources: List[str] = field(default_factory=list, repr=False)

    @property
    def config_sources(self) -> List[str]:
        return list(self._config_sources)
