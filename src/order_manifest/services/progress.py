from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

"""Batch progress bar (tqdm, TTY only).

One bar over the input files. The postfix carries running ok / failed /
shipment counts; the description names the file being processed. Outside a
TTY the bar is created with ``disable=True`` so every call is a no-op.
"""

__all__ = [
    "ManifestProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Check if progress output should be displayed.

    Returns:
        True if stdout is a TTY, False otherwise (CI, pipes, captured output)
    """
    return sys.stdout.isatty()


class ManifestProgress:
    """Progress over the order files of one batch.

    Usage::

        with ManifestProgress(len(files)) as progress:
            for path in files:
                progress.begin(path)
                ...
                progress.record(success=result.ok, shipments=result.stats.groups)
    """

    def __init__(self, total_files: int, *, description: str = "Processing orders") -> None:
        """
        Args:
            total_files: Number of files in the batch
            description: Base label of the bar
        """
        self.description = description
        self.ok = 0
        self.failed = 0
        self.shipments = 0
        self.pbar = tqdm(
            total=total_files,
            desc=description,
            unit="file",
            disable=not is_tty_enabled(),
            leave=True,
            ncols=80,
            ascii=True,
        )

    def begin(self, file_path: Path) -> None:
        """Show ``file_path`` as the file in progress."""
        self.pbar.set_description(f"{self.description} ({file_path.name})")

    def record(self, *, success: bool, shipments: int = 0) -> None:
        """Count one finished file and advance the bar.

        Args:
            success: Whether a manifest was written for the file
            shipments: Shipment rows in that manifest (ignored on failure)
        """
        if success:
            self.ok += 1
            self.shipments += shipments
        else:
            self.failed += 1
        self.pbar.set_description(self.description)
        self.pbar.set_postfix(ok=self.ok, failed=self.failed, shipments=self.shipments)
        self.pbar.update(1)

    def close(self) -> None:
        self.pbar.close()

    def __enter__(self) -> ManifestProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
