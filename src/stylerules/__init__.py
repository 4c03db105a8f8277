"""stylerules: editing model and capability resolution for cartographic style rules."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("stylerules")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
