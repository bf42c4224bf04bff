"""
Tests for text reports and the rotating result store
"""

from datetime import datetime, timedelta

import pytest

from cdmasim.reporting import (
    CDMA_PREFIX,
    LINK_PREFIX,
    ResultStore,
    format_cdma_report,
    format_link_report,
    format_signal,
)
from cdmasim.rf import UserInput, simulate_cdma, simulate_link

STAMP = datetime(2024, 3, 5, 14, 7, 9, 123456)


class TestFormatSignal:
    """Numeric rendering"""

    def test_two_decimals(self):
        assert format_signal([1, -1.5, 0.125]) == "1.00, -1.50, 0.12"

    def test_truncation_marker(self):
        assert format_signal([1.0] * 5, limit=3) == "1.00, 1.00, 1.00..."
        assert format_signal([1.0] * 3, limit=3) == "1.00, 1.00, 1.00"

    def test_unlimited(self):
        assert format_signal([2.0] * 50, limit=-1).count(",") == 49

    def test_empty(self):
        assert format_signal([]) == ""


class TestReports:
    """Full report layout"""

    def test_cdma_report(self):
        result = simulate_cdma(
            10, [0, 3], [0, 2, 3, 8],
            UserInput(1, 0b1010101010, "Hi"), UserInput(2, 0b0101010101, "Yo"),
            rng=0, timestamp=STAMP,
        )
        report = format_cdma_report(result)
        assert report.startswith("CDMA Simulation Results - Timestamp: Tue, 05 Mar 2024 14:07:09")
        assert "User A Seeds (L1/L2): 0x1 / 0x2AA" in report
        assert 'Decoded Text A: "Hi"' in report
        assert 'Decoded Text B: "Yo"' in report
        assert "BER A: 0.00%, Errors A: 0/16" in report
        assert "Random Seq Length" not in report
        assert report.rstrip().endswith("End of CDMA Report")

    def test_cdma_report_with_silent_user(self):
        result = simulate_cdma(
            10, [0, 3], [0, 2, 3, 8],
            UserInput(1, 0b1010101010, "Hi"), UserInput(2, 0b0101010101),
            rng=0, timestamp=STAMP,
        )
        report = format_cdma_report(result)
        assert "Original B: (no data)" in report
        assert "Decoded B: (no data)" in report
        assert "BER B: 0.00%, Errors B: 0/0" in report
        assert 'Decoded Text A: "Hi"' in report

    def test_link_report(self):
        result = simulate_link(10, [0, 3], 1, [0, 2, 3, 8], 0b1010101010,
                               text="A", rng=0, timestamp=STAMP)
        report = format_link_report(result)
        assert "Original (len 8): 01000001" in report
        assert "Original ASCII: A" in report
        assert "Decoded ASCII: A" in report
        assert "BER: 0.0000 (0.00%)" in report
        assert "Error Type: random" in report

    def test_link_report_without_decoder(self):
        result = simulate_link(10, [0, 3], 1, [0, 2, 3, 8], 0b1010101010,
                               random_length=12, decode=False, rng=0, timestamp=STAMP)
        report = format_link_report(result)
        assert "Decoder: disabled" in report
        assert "BER: Not calculated / Decoder disabled" in report
        assert "Original ASCII" not in report


class TestResultStore:
    """Timestamped files with fixed retention"""

    def test_filename(self, tmp_path):
        store = ResultStore(str(tmp_path), LINK_PREFIX)
        assert store.filename_for(STAMP) == "simulation_results_20240305_140709.123.txt"

    def test_save_creates_directory(self, tmp_path):
        store = ResultStore(str(tmp_path / "out"), CDMA_PREFIX)
        path = store.save("report", STAMP)
        assert path.read_text(encoding="utf-8") == "report"
        assert path.name.startswith(CDMA_PREFIX)

    def test_rotation_keeps_newest(self, tmp_path):
        store = ResultStore(str(tmp_path), CDMA_PREFIX, max_files=5)
        stamps = [STAMP + timedelta(seconds=i) for i in range(7)]
        for i, stamp in enumerate(stamps):
            store.save(f"run {i}", stamp)
        files = store.list_files()
        assert len(files) == 5
        assert [f.read_text() for f in files] == [f"run {i}" for i in range(2, 7)]

    def test_other_files_untouched(self, tmp_path):
        (tmp_path / "notes.txt").write_text("keep")
        store = ResultStore(str(tmp_path), CDMA_PREFIX, max_files=1)
        store.save("a", STAMP)
        store.save("b", STAMP + timedelta(seconds=1))
        assert (tmp_path / "notes.txt").exists()
        assert len(store.list_files()) == 1

    def test_same_millisecond_saves_are_kept(self, tmp_path):
        store = ResultStore(str(tmp_path), CDMA_PREFIX, max_files=5)
        first = store.save("first", STAMP)
        second = store.save("second", STAMP)
        third = store.save("third", STAMP)
        assert first.read_text() == "first"
        assert second.read_text() == "second"
        assert second.name == "cdma_simulation_results_20240305_140709.123_001.txt"
        assert store.list_files() == [first, second, third]

    def test_collision_rotation_drops_older_copy(self, tmp_path):
        store = ResultStore(str(tmp_path), CDMA_PREFIX, max_files=1)
        store.save("first", STAMP)
        store.save("second", STAMP)
        files = store.list_files()
        assert [f.read_text() for f in files] == ["second"]

    def test_invalid_retention(self, tmp_path):
        with pytest.raises(ValueError):
            ResultStore(str(tmp_path), max_files=0)
