"""Error types raised by the savings engine."""

from __future__ import annotations


class InvalidInput(ValueError):
    """Structurally invalid input passed programmatically (e.g. zero contributors)."""


class UnparsableDate(ValueError):
    """A date string matched none of the supported formats."""

    def __init__(self, text: str):
        super().__init__(f"Unrecognised date: {text!r}")
        self.text = text
