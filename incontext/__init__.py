"""InContext - @project/path reference notation engine, command line and tool server."""

__version__ = "0.1.0"
