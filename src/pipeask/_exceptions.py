"""Exceptions shared by every layer of the command."""

from __future__ import annotations


class PipeaskError(Exception):
    """Base class for every failure the command line treats as fatal."""


class ConfigError(PipeaskError):
    """Raised when the environment does not describe a usable service."""


class InputError(PipeaskError):
    """Raised when standard input cannot be inspected or read."""
