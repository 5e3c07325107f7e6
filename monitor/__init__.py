"""monitor package: run a command and report its outcome to healthchecks."""

__version__ = "0.1.0"
