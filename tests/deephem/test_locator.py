"""Tests for record addressing and chunked seeking."""

import io
import unittest

from deephem.errors import FileReadError
from deephem.header import EphemerisHeader
from deephem.locator import RecordLocator, seek_offsets

from de_fixtures import RECORD_SPAN, TIME_END, TIME_START, build_ephemeris


class SeekRecordingStream(io.BytesIO):
    """BytesIO that remembers every relative seek."""

    def __init__(self, data: bytes):
        self.relative_seeks = []
        super().__init__(data)

    def seek(self, offset, whence=io.SEEK_SET):
        if whence == io.SEEK_CUR:
            self.relative_seeks.append(offset)
        return super().seek(offset, whence)


class FailingSeekStream(SeekRecordingStream):
    """Stream whose relative seeks start failing after a given count."""

    def __init__(self, data: bytes, fail_after: int):
        self.fail_after = fail_after
        super().__init__(data)

    def seek(self, offset, whence=io.SEEK_SET):
        if whence == io.SEEK_CUR and len(self.relative_seeks) >= self.fail_after:
            raise OSError("seek failed")
        return super().seek(offset, whence)


class TestSeekOffsets(unittest.TestCase):
    def test_zero_skip(self):
        self.assertEqual(list(seek_offsets(0, 100, 1 << 31)), [])

    def test_single_call_when_it_fits(self):
        self.assertEqual(list(seek_offsets(7, 100, 1 << 31)), [700])

    def test_chunked_skip_adds_up(self):
        record_size = 8144
        max_offset = 2**31 - 1
        skip = 1_000_000
        offsets = list(seek_offsets(skip, record_size, max_offset))

        self.assertGreater(len(offsets), 1)
        self.assertEqual(sum(offsets), skip * record_size)
        for offset in offsets:
            self.assertLessEqual(offset, max_offset)
            self.assertEqual(offset % record_size, 0)

    def test_exact_multiple_of_largest_chunk(self):
        offsets = list(seek_offsets(9, 10, 30))
        self.assertEqual(offsets, [30, 30, 30])

    def test_backwards_skip(self):
        offsets = list(seek_offsets(-10, 10, 30))
        self.assertEqual(offsets, [-30, -30, -30, -10])
        self.assertEqual(sum(offsets), -100)

    def test_invalid_geometry(self):
        with self.assertRaises(ValueError):
            list(seek_offsets(1, 0, 100))
        with self.assertRaises(ValueError):
            list(seek_offsets(1, 200, 100))


class TestRecordLocator(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.data = build_ephemeris()

    def make_locator(self, **kwargs) -> RecordLocator:
        stream = SeekRecordingStream(self.data)
        header = EphemerisHeader.from_stream(stream)
        return RecordLocator(header, stream, **kwargs)

    def test_starts_empty(self):
        locator = self.make_locator()
        self.assertEqual(locator.current_index, -1)
        self.assertEqual(locator.read_count, 0)
        self.assertEqual(locator.stream.tell(), locator.header.records_offset)

    def test_record_index(self):
        locator = self.make_locator()
        self.assertEqual(locator.record_index(TIME_START), 0)
        self.assertEqual(locator.record_index(TIME_START + RECORD_SPAN - 1e-6), 0)
        self.assertEqual(locator.record_index(TIME_START + RECORD_SPAN), 1)
        self.assertEqual(locator.record_index(2440500.0), 3)

    def test_end_of_coverage_uses_last_record(self):
        locator = self.make_locator()
        self.assertEqual(locator.record_index(TIME_END), 299)
        record = locator.locate(TIME_END)
        self.assertEqual(record.end_time, TIME_END)

    def test_loads_requested_record(self):
        locator = self.make_locator()
        record = locator.locate(2440500.0)
        self.assertEqual(record.index, 3)
        self.assertEqual(record.start_time, TIME_START + 3 * RECORD_SPAN)
        self.assertEqual(record.end_time, TIME_START + 4 * RECORD_SPAN)
        self.assertEqual(locator.read_count, 1)

    def test_same_record_needs_no_read(self):
        locator = self.make_locator()
        locator.locate(2440500.0)
        locator.locate(2440500.5)
        locator.locate(2440496.5)
        self.assertEqual(locator.read_count, 1)

    def test_new_record_triggers_read(self):
        locator = self.make_locator()
        first = locator.locate(2440500.0).start_time
        second = locator.locate(2440530.0).start_time
        self.assertEqual(locator.read_count, 2)
        self.assertLess(first, second)

    def test_adjacent_record_needs_no_seek(self):
        locator = self.make_locator()
        locator.locate(TIME_START)
        locator.stream.relative_seeks.clear()
        locator.locate(TIME_START + RECORD_SPAN)
        self.assertEqual(locator.stream.relative_seeks, [])

    def test_backwards_access(self):
        locator = self.make_locator()
        locator.locate(2441000.0)
        record = locator.locate(2440410.0)
        self.assertEqual(record.index, 0)
        self.assertEqual(record.start_time, TIME_START)

    def test_small_seek_limit_reaches_same_record(self):
        default = self.make_locator()
        expected = default.locate(2449000.0).coefficients.copy()

        size = default.header.record_byte_size
        limited = self.make_locator(max_seek_offset=3 * size + 5)
        record = limited.locate(2449000.0)

        self.assertTrue((record.coefficients == expected).all())
        seeks = limited.stream.relative_seeks
        self.assertGreater(len(seeks), 1)
        self.assertEqual(sum(seeks), record.index * size)
        for offset in seeks:
            self.assertLessEqual(offset, 3 * size)

    def test_seek_limit_below_one_record(self):
        stream = io.BytesIO(self.data)
        header = EphemerisHeader.from_stream(stream)
        with self.assertRaises(ValueError):
            RecordLocator(header, stream, max_seek_offset=header.record_byte_size - 1)

    def test_failed_chunked_seek_forgets_resident_record(self):
        stream = FailingSeekStream(self.data, fail_after=2)
        header = EphemerisHeader.from_stream(stream)
        size = header.record_byte_size
        locator = RecordLocator(header, stream, max_seek_offset=3 * size)
        locator.locate(TIME_START)

        with self.assertRaises(FileReadError):
            locator.locate(2449000.0)
        self.assertEqual(locator.current_index, -1)
        self.assertEqual(stream.tell(), header.records_offset)

        # With seeks working again the same locator lands on the right record
        stream.fail_after = float("inf")
        record = locator.locate(2449000.0)
        self.assertEqual(record.index, 268)
        self.assertEqual(record.start_time, TIME_START + 268 * RECORD_SPAN)

    def test_truncated_records(self):
        data = build_ephemeris(record_count=2)
        stream = io.BytesIO(data)
        locator = RecordLocator(EphemerisHeader.from_stream(stream), stream)
        locator.locate(TIME_START + RECORD_SPAN)
        with self.assertRaises(FileReadError):
            locator.locate(2441000.0)
        self.assertEqual(locator.current_index, -1)


if __name__ == "__main__":
    unittest.main()
