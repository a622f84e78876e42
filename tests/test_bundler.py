"""Tests for the scan bundler."""

import json

import pytest

from ct_intel.loader import ScanArchive, bundle_scans

from .helpers import scan


class TestBundleScans:
    """Tests for bundle_scans."""

    def test_bundles_valid_scans_in_name_order(self, data_dir, write_scan, tmp_path):
        """Test that scans are written as one array in file-name order."""
        write_scan("b.json", scan(1, id="b"))
        write_scan("a.json", scan(2, id="a"))
        out = tmp_path / "out" / "bundle.json"

        result = bundle_scans(data_dir, out)

        assert result.count == 2
        assert result.errors == 0
        assert result.path == out
        assert result.size_bytes == out.stat().st_size
        assert [s["id"] for s in json.loads(out.read_text(encoding="utf-8"))] == ["a", "b"]

    def test_counts_errors(self, data_dir, write_scan, tmp_path):
        """Test that unparseable files are counted and skipped."""
        write_scan("a.json", scan(1))
        write_scan("b.json", "{broken")

        result = bundle_scans(data_dir, tmp_path / "bundle.json")

        assert result.count == 1
        assert result.errors == 1

    def test_output_loads_as_archive(self, data_dir, write_scan, tmp_path):
        """Test that the bundle reads back as a ScanArchive."""
        write_scan("a.json", scan(1, text="héllo"))
        out = tmp_path / "bundle.json"

        bundle_scans(data_dir, out)
        archive = ScanArchive.load(out)

        assert len(archive) == 1
        assert archive.records[0]["text"] == "héllo"

    def test_missing_directory_raises(self, tmp_path):
        """Test that a missing scan directory raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            bundle_scans(tmp_path / "missing", tmp_path / "bundle.json")
