"""toolhub: word counting, UUID generation and an AI passthrough over HTTP."""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("toolhub")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
