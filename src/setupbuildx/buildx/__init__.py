"""Buildx version resolution, acquisition, installation and inspection."""

from setupbuildx.buildx.acquirer import Acquirer
from setupbuildx.buildx.builder import BuilderCreator, BuilderOptions
from setupbuildx.buildx.inspector import BuildxInspector, parse_inspect, parse_version
from setupbuildx.buildx.installer import PluginInstaller
from setupbuildx.buildx.models import Builder, ReleaseTag, ResolvedSource, RunID
from setupbuildx.buildx.naming import asset_filename, plugin_filename
from setupbuildx.buildx.resolver import VersionResolver

__all__ = [
    "Acquirer",
    "Builder",
    "BuilderCreator",
    "BuilderOptions",
    "BuildxInspector",
    "PluginInstaller",
    "ReleaseTag",
    "ResolvedSource",
    "RunID",
    "VersionResolver",
    "asset_filename",
    "parse_inspect",
    "parse_version",
    "plugin_filename",
]
