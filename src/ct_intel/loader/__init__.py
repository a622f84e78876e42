"""Scan loading and archive bundling."""

from .bundler import BundleResult, bundle_scans
from .scans import (
    LoadReport,
    RawScan,
    ScanArchive,
    ScanLoader,
    ScanParseError,
    read_scan_file,
)

__all__ = [
    "BundleResult",
    "LoadReport",
    "RawScan",
    "ScanArchive",
    "ScanLoader",
    "ScanParseError",
    "bundle_scans",
    "read_scan_file",
]
