"""
Tests for PhotoProcessor using a stub extractor, so every outcome
(GPS, no GPS, error report, raised exception) is deterministic.
"""
import os
import sys
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

from photogpx.config import ProcessorConfig
from photogpx.processor import PhotoProcessor
from photogpx.models import GPSCoordinates, PhotoMetadata, PhotoStatus
from photogpx.exceptions import ScanError, WriteFailure

NS = {"gpx": "http://www.topografix.com/GPX/1/1"}


class StubExtractor:
    """Answers by file name: coordinates, None, an error string or an exception."""

    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    def extract_metadata(self, path):
        path = Path(path)
        self.calls.append(path.name)
        answer = self.answers.get(path.name)
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, str):
            return PhotoMetadata(path.name, str(path), None, answer)
        return PhotoMetadata(path.name, str(path), answer)


def fixed_clock():
    return datetime(2024, 5, 17, 9, 30, 15)


@pytest.fixture
def make_processor(output_dir):
    def _make(answers):
        config = ProcessorConfig(output_dir=output_dir)
        return PhotoProcessor(config, StubExtractor(answers), clock=fixed_clock)

    return _make


def _touch(folder, *names):
    for name in names:
        (folder / name).touch()


class TestCounters:
    def test_counter_identities_after_every_update(self, photo_dir, make_processor):
        answers = {
            "a.jpg": GPSCoordinates(1.0, 2.0),
            "b.jpg": None,
            "c.jpg": "cannot identify image file",
            "d.jpg": RuntimeError("exploded"),
            "e.jpg": GPSCoordinates(3.0, 4.0),
        }
        _touch(photo_dir, *answers)
        updates = []

        result = make_processor(answers).process(photo_dir, updates.append)

        assert len(updates) == 5
        for p in updates:
            assert p.processed_photos == p.successful_photos + p.skipped_photos + p.error_photos
            assert p.remaining_photos == p.total_photos - p.processed_photos
            assert p.total_photos == 5
            assert 0 <= p.percentage <= 100
        assert [p.processed_photos for p in updates] == [1, 2, 3, 4, 5]
        assert updates[-1].percentage == 100
        for before, after in zip(updates, updates[1:]):
            assert after.successful_photos >= before.successful_photos
            assert after.skipped_photos >= before.skipped_photos
            assert after.error_photos >= before.error_photos
            assert after.remaining_photos <= before.remaining_photos

        assert (result.total_photos, result.successful_photos, result.skipped_photos, result.error_photos) == (
            5, 2, 1, 2,
        )
        assert result.processed_photos == 5
        assert result.success_rate == pytest.approx(40.0)

    def test_percentage_truncates(self, photo_dir, make_processor):
        answers = {"a.jpg": None, "b.jpg": None, "c.jpg": None}
        _touch(photo_dir, *answers)
        updates = []

        make_processor(answers).process(photo_dir, updates.append)

        assert [p.percentage for p in updates] == [33, 66, 100]

    def test_progress_names_current_file(self, photo_dir, make_processor):
        _touch(photo_dir, "only.jpg")
        updates = []

        make_processor({"only.jpg": None}).process(photo_dir, updates.append)

        assert updates[0].current_file == "only.jpg"

    def test_works_without_callback(self, photo_dir, make_processor):
        _touch(photo_dir, "a.jpg")
        result = make_processor({"a.jpg": GPSCoordinates(1.0, 1.0)}).process(photo_dir)
        assert result.successful_photos == 1


class TestClassification:
    def test_statuses(self, photo_dir, make_processor):
        answers = {
            "gps.jpg": GPSCoordinates(1.0, 2.0),
            "nogps.jpg": None,
            "reported.jpg": "bad header",
            "raised.jpg": OSError("I/O error"),
        }
        _touch(photo_dir, *answers)
        processor = make_processor(answers)

        processor.process(photo_dir)

        statuses = {photo.name: status for photo, status in processor.statuses}
        assert statuses == {
            "gps.jpg": PhotoStatus.SUCCESS,
            "nogps.jpg": PhotoStatus.SKIPPED,
            "reported.jpg": PhotoStatus.ERRORED,
            "raised.jpg": PhotoStatus.ERRORED,
        }

    def test_error_log_lines(self, photo_dir, output_dir, make_processor):
        answers = {"nogps.jpg": None, "reported.jpg": "bad header", "raised.jpg": OSError("I/O error")}
        _touch(photo_dir, *answers)

        result = make_processor(answers).process(photo_dir)

        lines = Path(result.log_file_path).read_text(encoding="utf-8").splitlines()
        assert len(lines) == 3
        by_file = {Path(line.split(" ERROR: ")[1].split(" - ")[0]).name: line for line in lines}
        assert by_file["nogps.jpg"].endswith(" - No GPS data found")
        assert by_file["reported.jpg"].endswith(" - bad header")
        assert by_file["raised.jpg"].endswith(" - I/O error")

    def test_failure_does_not_stop_batch(self, photo_dir, make_processor):
        answers = {"a.jpg": RuntimeError("boom"), "b.jpg": GPSCoordinates(5.0, 6.0)}
        _touch(photo_dir, *answers)
        processor = make_processor(answers)

        result = processor.process(photo_dir)

        assert sorted(processor.extractor.calls) == ["a.jpg", "b.jpg"]
        assert result.successful_photos == 1
        assert result.error_photos == 1


class TestWaypointSequence:
    def test_pairs_with_offset(self, photo_dir, make_processor):
        answers = {"a.jpg": GPSCoordinates(37.1, -122.1), "b.jpg": None, "c.jpg": GPSCoordinates(40.0, -73.0)}
        _touch(photo_dir, *answers)
        processor = make_processor(answers)

        processor.process(photo_dir)

        seq = processor.waypoints
        assert len(seq) == 4
        for k in range(0, len(seq), 2):
            assert seq[k + 1].latitude == seq[k].latitude + 0.00001
            assert seq[k + 1].longitude == seq[k].longitude
            assert seq[k + 1].name == seq[k].name + " (offset)"
        assert {seq[0].name, seq[2].name} == {"a.jpg", "c.jpg"}

    def test_gpx_matches_successful_count(self, photo_dir, make_processor):
        answers = {"a.jpg": GPSCoordinates(1.0, 2.0), "b.jpg": None, "c.jpg": GPSCoordinates(3.0, 4.0)}
        _touch(photo_dir, *answers)

        result = make_processor(answers).process(photo_dir)

        tracks = ET.parse(result.gpx_file_path).getroot().findall("gpx:trk", NS)
        assert len(tracks) == result.successful_photos == 2
        for trk in tracks:
            assert len(trk.findall("gpx:trkseg", NS)) == 1
            assert len(trk.findall("gpx:trkseg/gpx:trkpt", NS)) == 2


class TestOutputs:
    def test_output_paths(self, photo_dir, output_dir, make_processor):
        _touch(photo_dir, "a.jpg")

        result = make_processor({"a.jpg": None}).process(photo_dir)

        assert Path(result.gpx_file_path) == output_dir / "photos_export20240517_093015.gpx"
        assert Path(result.log_file_path) == output_dir / "errors.log"
        assert Path(result.gpx_file_path).exists()

    def test_creates_output_directory(self, photo_dir, tmp_path):
        nested = tmp_path / "nested" / "out"
        processor = PhotoProcessor(ProcessorConfig(output_dir=nested), StubExtractor({}), clock=fixed_clock)

        processor.process(photo_dir)

        assert nested.is_dir()

    def test_custom_file_names(self, photo_dir, output_dir):
        _touch(photo_dir, "a.jpg")
        config = ProcessorConfig(
            output_dir=output_dir,
            log_file_name="skipped.txt",
            gpx_file_pattern="trip_{timestamp}.gpx",
            timestamp_format="%Y-%m-%d",
        )

        result = PhotoProcessor(config, StubExtractor({"a.jpg": None}), clock=fixed_clock).process(photo_dir)

        assert Path(result.gpx_file_path).name == "trip_2024-05-17.gpx"
        assert Path(result.log_file_path).name == "skipped.txt"
        assert Path(result.log_file_path).exists()

    def test_zero_photos(self, photo_dir, make_processor):
        (photo_dir / "readme.txt").touch()
        updates = []
        processor = make_processor({})

        result = processor.process(photo_dir, updates.append)

        assert updates == []
        assert processor.extractor.calls == []
        assert (result.total_photos, result.successful_photos, result.skipped_photos, result.error_photos) == (
            0, 0, 0, 0,
        )
        assert result.success_rate == 0
        root = ET.parse(result.gpx_file_path).getroot()
        assert root.tag == "{http://www.topografix.com/GPX/1/1}gpx"
        assert list(root) == []

    def test_idempotent_content(self, photo_dir, output_dir):
        answers = {"a.jpg": GPSCoordinates(37.1, -122.1), "b.jpg": GPSCoordinates(40.0, -73.0)}
        _touch(photo_dir, *answers)
        config = ProcessorConfig(output_dir=output_dir)

        first = PhotoProcessor(config, StubExtractor(answers), clock=lambda: datetime(2024, 1, 1, 0, 0, 0))
        second = PhotoProcessor(config, StubExtractor(answers), clock=lambda: datetime(2024, 1, 1, 0, 0, 1))
        r1 = first.process(photo_dir)
        r2 = second.process(photo_dir)

        assert r1.gpx_file_path != r2.gpx_file_path
        assert Path(r1.gpx_file_path).read_bytes() == Path(r2.gpx_file_path).read_bytes()


class TestFatalErrors:
    def test_missing_folder(self, tmp_path, output_dir, make_processor):
        with pytest.raises(ScanError):
            make_processor({}).process(tmp_path / "nope")

        assert not list(output_dir.glob("*.gpx"))
        log = (output_dir / "errors.log").read_text(encoding="utf-8")
        assert "ERROR: PROCESSING - Error scanning folder" in log

    def test_write_failure_propagates(self, photo_dir, output_dir, make_processor):
        _touch(photo_dir, "a.jpg")

        with patch("photogpx.generators.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(WriteFailure):
                make_processor({"a.jpg": GPSCoordinates(1.0, 1.0)}).process(photo_dir)

        assert "disk full" in (output_dir / "gpx_write_errors.log").read_text(encoding="utf-8")
        assert "PROCESSING" in (output_dir / "errors.log").read_text(encoding="utf-8")
