import numpy as np
import pytest

from motion_synth.errors import HeaderMismatchError
from motion_synth.config import CsvFormat
from motion_synth.tracking.time_value import TimeValue
from motion_synth.tracking.tracker_reader import (
    ReadStopReason,
    TrackerSampleReader,
    read_tracker_header,
)


def test_read_parses_fields_in_storage_order():
    reader = TrackerSampleReader(["12,345,1.5,-2,3,0.5,0.1,0.2,0.3\n"])
    kf = reader.read()
    assert kf is not None
    assert kf.time == TimeValue(12, 345)
    np.testing.assert_allclose(kf.pose.position, np.array([1.5, -2.0, 3.0], dtype=np.float64))
    # qw comes first in the record and stays first in [w, x, y, z].
    np.testing.assert_allclose(
        kf.pose.quaternion, np.array([0.5, 0.1, 0.2, 0.3], dtype=np.float64)
    )


def test_read_returns_none_at_end_and_counts_reads():
    reader = TrackerSampleReader(["0,0,0,0,0,1,0,0,0\n"])
    assert reader.read() is not None
    assert reader.read() is None
    assert reader.reads == 2
    assert reader.stop_reason is ReadStopReason.EXHAUSTED


def test_short_record_is_treated_as_end_of_data():
    reader = TrackerSampleReader(["0,0,0,0,0,1,0,0\n", "1,0,0,0,0,1,0,0,0\n"])
    assert reader.read() is None
    assert reader.stop_reason is ReadStopReason.MALFORMED


def test_unparsable_record_is_treated_as_end_of_data():
    reader = TrackerSampleReader(["0,zero,0,0,0,1,0,0,0\n"])
    assert reader.read() is None
    assert reader.stop_reason is ReadStopReason.MALFORMED


def test_blank_line_is_end_of_data():
    reader = TrackerSampleReader(["\n"])
    assert reader.read() is None
    assert reader.stop_reason is ReadStopReason.EXHAUSTED


def test_extra_trailing_fields_are_ignored():
    reader = TrackerSampleReader(["0,1,0,0,0,1,0,0,0,extra,stuff\n"])
    kf = reader.read()
    assert kf is not None
    assert kf.time == TimeValue(0, 1)


def test_read_tracker_header_accepts_quoted_headers():
    lines = iter(['"sec","usec","x","y","z","qw","qx","qy","qz"\r\n', "0,0,0,0,0,1,0,0,0\n"])
    header = read_tracker_header(lines, CsvFormat())
    assert len(header) == 9
    # Header consumed, data line still available.
    assert next(lines).startswith("0,0")


def test_read_tracker_header_rejects_reordered_quaternion():
    lines = iter(["sec,usec,x,y,z,qx,qy,qz,qw\n"])
    with pytest.raises(HeaderMismatchError, match="column 5"):
        read_tracker_header(lines, CsvFormat())


def test_read_tracker_header_rejects_empty_file():
    with pytest.raises(HeaderMismatchError, match="empty"):
        read_tracker_header(iter([]), CsvFormat())
