"""Local Profile Assistant commands for eUICC (eSIM) chips, run against a pluggable eUICC interface."""

__version__ = "0.1.0"