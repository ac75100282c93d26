"""semzones - OSC 133 semantic-prompt zone tracking."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("semzones")
except PackageNotFoundError:
    __version__ = "0.0.0"
