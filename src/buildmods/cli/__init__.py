"""buildmods command-line interface."""

from .main import main  # noqa: F401
