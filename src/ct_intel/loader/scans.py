"""Time-windowed scan loading from the live directory with archive fallback."""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from ..logging import get_logger
from ..records import TS_KEY, ScanRecord, freeze_record

logger = get_logger(__name__)

HOUR_MS = 3600 * 1000

SOURCE_LIVE = "live"
SOURCE_ARCHIVE = "archive"
SOURCE_NONE = "none"


@dataclass(frozen=True)
class RawScan:
    """A scan file that parsed into a JSON object."""

    source: str
    data: dict[str, Any]


@dataclass(frozen=True)
class ScanParseError:
    """A scan file that could not be read or decoded."""

    source: str
    reason: str


ScanResult = Union[RawScan, ScanParseError]


def read_scan_file(path: Path) -> ScanResult:
    """
    Read one scanner output file.

    Args:
        path: JSON file holding a single scan object

    Returns:
        RawScan on success, ScanParseError otherwise (never raises)
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        return ScanParseError(path.name, str(e))

    if not isinstance(data, dict):
        return ScanParseError(path.name, f"expected a JSON object, got {type(data).__name__}")
    return RawScan(path.name, data)


def iter_scan_files(data_dir: Path) -> Iterator[ScanResult]:
    """Yield parse results for every *.json file in data_dir, in file-name order."""
    try:
        paths = sorted(
            (p for p in data_dir.iterdir() if p.name.endswith(".json") and p.is_file()),
            key=lambda p: p.name,
        )
    except OSError as e:
        logger.warning(f"Cannot list scan directory {data_dir}: {e}")
        return

    for path in paths:
        yield read_scan_file(path)


@dataclass(frozen=True)
class ScanArchive:
    """
    Read-only bundle of scans loaded once at start-up.

    Used by ScanLoader when the live directory yields nothing.
    """

    records: tuple[ScanRecord, ...] = ()
    path: Optional[Path] = None

    @classmethod
    def empty(cls) -> "ScanArchive":
        return cls()

    @classmethod
    def from_scans(cls, scans: list[Any], path: Optional[Path] = None) -> "ScanArchive":
        """Build an archive from raw scan objects, skipping anything that is not an object."""
        records = tuple(freeze_record(s) for s in scans if isinstance(s, dict))
        skipped = len(scans) - len(records)
        if skipped:
            logger.warning(f"Skipped {skipped} non-object entries in scan archive")
        return cls(records=records, path=path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ScanArchive":
        """
        Load a bundle written by ``bundle_scans``.

        A missing or unreadable bundle yields an empty archive.
        """
        path = Path(path)
        if not path.exists():
            logger.info(f"No scan archive at {path}")
            return cls.empty()

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Scan archive {path} unreadable: {e}")
            return cls.empty()

        if not isinstance(data, list):
            logger.warning(f"Scan archive {path} is not a JSON array")
            return cls.empty()

        archive = cls.from_scans(data, path=path)
        logger.info(f"Loaded {len(archive)} archived scans from {path}")
        return archive

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class LoadReport:
    """Outcome of one load: the windowed scans plus where they came from."""

    scans: list[ScanRecord] = field(default_factory=list)
    source: str = SOURCE_NONE
    dropped: int = 0


class ScanLoader:
    """
    Loads scans for a trailing time window.

    The live directory is re-read on every call. Files that fail to parse
    are dropped and counted; when no live scan parses, the injected archive
    is used instead.
    """

    def __init__(
        self,
        data_dir: Union[str, Path],
        archive: Optional[ScanArchive] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize loader.

        Args:
            data_dir: Directory of live scanner output files
            archive: Fallback scans, loaded once by the caller
            clock: Returns the current time in seconds since the epoch
        """
        self.data_dir = Path(data_dir)
        self.archive = archive or ScanArchive.empty()
        self.clock = clock

    def read_live(self) -> tuple[list[ScanRecord], int]:
        """Read every live scan file. Returns (records, dropped file count)."""
        if not self.data_dir.is_dir():
            return [], 0

        records: list[ScanRecord] = []
        dropped = 0
        for result in iter_scan_files(self.data_dir):
            if isinstance(result, ScanParseError):
                dropped += 1
                logger.warning(f"Dropped scan {result.source}: {result.reason}")
                continue
            records.append(freeze_record(result.data))
        return records, dropped

    def load_with_report(self, hours: int = 24) -> LoadReport:
        """
        Load scans whose `_ts` falls within the last `hours` hours.

        Args:
            hours: Window size; 0 returns every scan unfiltered

        Returns:
            LoadReport with scans in source order
        """
        if hours < 0:
            raise ValueError(f"Window hours must be non-negative, got {hours}")

        scans, dropped = self.read_live()
        source = SOURCE_LIVE
        if not scans:
            if len(self.archive):
                logger.info(f"No live scans in {self.data_dir}; using archive ({len(self.archive)} scans)")
                scans = list(self.archive.records)
                source = SOURCE_ARCHIVE
            else:
                source = SOURCE_NONE

        if hours:
            cutoff = int(self.clock() * 1000) - hours * HOUR_MS
            scans = [s for s in scans if s[TS_KEY] >= cutoff]

        return LoadReport(scans=scans, source=source, dropped=dropped)

    def load(self, hours: int = 24) -> list[ScanRecord]:
        """Load scans for the window (see load_with_report)."""
        return self.load_with_report(hours).scans
