"""buildexport — turn a resolved workspace description into build files."""

__version__ = "0.1.0"
