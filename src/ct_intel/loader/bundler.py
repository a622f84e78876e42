"""Snapshot a directory of scan files into one archive file."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..logging import get_logger
from .scans import RawScan, iter_scan_files

logger = get_logger(__name__)


@dataclass(frozen=True)
class BundleResult:
    count: int
    errors: int
    path: Path
    size_bytes: int

    @property
    def size_mb(self) -> float:
        return self.size_bytes / 1024 / 1024


def bundle_scans(data_dir: Union[str, Path], out_path: Union[str, Path]) -> BundleResult:
    """
    Write every parseable scan in data_dir to out_path as a JSON array.

    Files are bundled in file-name order; unparseable files are counted and
    skipped. The output is the archive format read by ScanArchive.load().

    Raises:
        FileNotFoundError: If data_dir does not exist
    """
    data_dir = Path(data_dir)
    out_path = Path(out_path)
    if not data_dir.is_dir():
        raise FileNotFoundError(f"Scan directory not found: {data_dir}")

    scans = []
    errors = 0
    for result in iter_scan_files(data_dir):
        if isinstance(result, RawScan):
            scans.append(result.data)
        else:
            errors += 1
            logger.debug(f"Skipping {result.source}: {result.reason}")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(scans, f, ensure_ascii=False, separators=(",", ":"))

    result = BundleResult(
        count=len(scans),
        errors=errors,
        path=out_path,
        size_bytes=out_path.stat().st_size,
    )
    logger.info(f"Bundled {result.count} scans ({result.errors} errors) -> {out_path}")
    return result
