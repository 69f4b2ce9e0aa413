"""grpr — run one git command in every repository under a directory."""

__version__ = "0.1.0"
