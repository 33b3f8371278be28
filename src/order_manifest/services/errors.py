from __future__ import annotations

"""Fatal processing errors.

Any of these aborts the whole run: no output table is produced and the
message is surfaced to the operator as a single error log line, so each
message must be enough to fix the input file.
"""

__all__ = [
    "ManifestError",
    "EmptyInputError",
    "HeaderNotFoundError",
    "MissingColumnsError",
    "NoValidOrdersError",
]


class ManifestError(Exception):
    """Base exception for fatal manifest processing errors."""


class EmptyInputError(ManifestError):
    """Raised when the sheet has fewer than 2 rows."""


class HeaderNotFoundError(ManifestError):
    """Raised when no header row is found in the scanned rows."""


class MissingColumnsError(ManifestError):
    """Raised when required semantic columns cannot be resolved."""

    def __init__(self, missing: list[str], layout_label: str) -> None:
        self.missing = missing
        self.layout_label = layout_label
        super().__init__(
            f"Missing required columns: {', '.join(missing)}. Format detected: {layout_label}"
        )


class NoValidOrdersError(ManifestError):
    """Raised when filtering leaves zero shipment groups."""
