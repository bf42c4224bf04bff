"""
Rotating on-disk store for text reports
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

CDMA_PREFIX = "cdma_simulation_results_"
LINK_PREFIX = "simulation_results_"
FILE_SUFFIX = ".txt"
MAX_FILES_TO_KEEP = 5


class ResultStore:
    """
    Writes timestamped report files and keeps only the newest few

    File names sort chronologically (<prefix>YYYYmmdd_HHMMSS.mmm.txt), so the
    oldest files are the first ones in name order.
    """

    def __init__(self, directory: str, prefix: str = CDMA_PREFIX,
                 max_files: int = MAX_FILES_TO_KEEP):
        if max_files < 1:
            raise ValueError("max_files must be >= 1")
        self.directory = Path(directory)
        self.prefix = prefix
        self.max_files = max_files

    def _ensure_dir(self):
        if not self.directory.exists():
            logger.info(f"Creating directory: {self.directory}")
            self.directory.mkdir(parents=True, exist_ok=True)

    def filename_for(self, timestamp: datetime) -> str:
        stamp = timestamp.strftime("%Y%m%d_%H%M%S") + f".{timestamp.microsecond // 1000:03d}"
        return f"{self.prefix}{stamp}{FILE_SUFFIX}"

    def _write_new(self, name: str, content: str) -> Path:
        # Same-millisecond saves get "_001", "_002", ... before the suffix
        stem = name[:-len(FILE_SUFFIX)]
        candidate = name
        attempt = 0
        while True:
            path = self.directory / candidate
            try:
                with open(path, "x", encoding="utf-8") as f:
                    f.write(content)
                return path
            except FileExistsError:
                attempt += 1
                candidate = f"{stem}_{attempt:03d}{FILE_SUFFIX}"

    def save(self, content: str, timestamp: Optional[datetime] = None) -> Path:
        """
        Write *content* to a new report file, then rotate

        Args:
            content: Report text
            timestamp: Time used for the file name (defaults to now)

        Returns:
            Path of the written file
        """
        self._ensure_dir()
        path = self._write_new(self.filename_for(timestamp or datetime.now()), content)
        logger.info(f"Results saved to: {path}")
        self.cleanup()
        return path

    def list_files(self) -> List[Path]:
        """Report files of this store, oldest first"""
        if not self.directory.exists():
            return []
        return sorted(
            p for p in self.directory.iterdir()
            if p.is_file() and p.name.startswith(self.prefix) and p.name.endswith(FILE_SUFFIX)
        )

    def cleanup(self) -> List[Path]:
        """
        Delete the oldest files beyond max_files

        Returns:
            Paths that were deleted
        """
        files = self.list_files()
        excess = files[:max(len(files) - self.max_files, 0)]
        deleted = []
        for path in excess:
            try:
                path.unlink()
            except OSError as e:
                logger.error(f"Error deleting old file '{path}': {e}")
                continue
            logger.info(f"Deleted old file: {path}")
            deleted.append(path)
        return deleted
