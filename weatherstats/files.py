"""Creates the output file for a run, refusing to overwrite an existing one."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from .configuration import Configuration


class FileExistsError_(FileExistsError):
    """Raised when the output file is already present."""


class FileCreator:
    """Names and creates result or benchmark files from the configuration."""

    def __init__(self, cfg: Configuration, ext: str, prefix: str) -> None:
        self.cfg = cfg
        self.ext = ext
        self.prefix = prefix

    @classmethod
    def for_results(cls, cfg: Configuration) -> FileCreator:
        """Creator of the JSON file holding the records."""
        return cls(cfg, ".json", "result")

    @classmethod
    def for_tests(cls, cfg: Configuration) -> FileCreator:
        """Creator of the CSV file holding benchmark durations."""
        return cls(cfg, ".csv", "test")

    def _mode_suffix(self) -> str:
        cfg = self.cfg
        if cfg.mode in ("mode_1", "mode_2"):
            return "_1producer_1consumer"
        if cfg.mode == "mode_3":
            return f"_1producer_{cfg.consumer_number}consumer"
        if cfg.mode == "mode_4":
            return f"_{cfg.producer_number}producer_{cfg.consumer_number}consumer"
        if cfg.mode == "mode_5":
            return (
                f"_{cfg.producer_number}producer_{cfg.consumer_number}consumer"
                f"_{cfg.max_working_producers}max_working_producers"
            )
        return ""

    def filename(self) -> str:
        """The file name, built from the prefix, mode and worker counts."""
        repeat = f"_{self.cfg.execution_repeat_count}times" if self.prefix == "test" else ""
        return f"{self.prefix}_{self.cfg.mode}_{repeat}{self._mode_suffix()}{self.ext}"

    def create(self) -> TextIO:
        """Open a new file for writing in the configured directory."""
        path = Path(self.cfg.files_dir_name) / self.filename()
        try:
            return open(path, "x", encoding="utf-8", newline="")
        except FileExistsError as exc:
            raise FileExistsError_(f"file {path} already exists") from exc