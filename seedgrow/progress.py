"""Console progress reporting for growth runs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PrintProgress:
    """Observer printing the committed share of the grid as a percentage."""

    prefix: str = "[seedgrow]"

    def __call__(self, done: int, total: int) -> None:
        percent = 100.0 * done / total if total else 100.0
        print(f"{self.prefix} {percent:.2f}%")


__all__ = ["PrintProgress"]
