"""
Tests of comtradeio.rawio.geometry
"""

import unittest

import numpy as np

from comtradeio.rawio import parse_header
from comtradeio.rawio.geometry import RecordGeometry, compute_geometry
from comtradeio.test.tools import build_cfg_text


class TestComputeGeometry(unittest.TestCase):
    def test__record_bytes(self):
        for nb_analog, nb_digital, expected in [
            (0, 0, 8),
            (2, 1, 14),
            (3, 16, 16),
            (3, 17, 18),
            (8, 0, 24),
        ]:
            geometry = compute_geometry(nb_analog, nb_digital)
            self.assertEqual(geometry.record_bytes, expected, (nb_analog, nb_digital))

    def test__offsets(self):
        geometry = compute_geometry(4, 20)
        self.assertEqual(geometry.sample_offset, 0)
        self.assertEqual(geometry.timestamp_offset, 4)
        self.assertEqual(geometry.analog_offset, 8)
        self.assertEqual(geometry.digital_offset, 16)
        self.assertEqual(geometry.digital_words, 2)
        self.assertEqual(geometry.record_bytes, 20)

    def test__negative_counts(self):
        with self.assertRaises(ValueError):
            compute_geometry(-1, 0)

    def test__required_bytes(self):
        self.assertEqual(compute_geometry(2, 1).required_bytes(3), 42)
        self.assertEqual(compute_geometry(2, 1).required_bytes(0), 0)

    def test__from_header(self):
        header = parse_header(build_cfg_text())
        self.assertEqual(RecordGeometry.from_header(header), compute_geometry(2, 1))


class TestRecordDtype(unittest.TestCase):
    def test__itemsize_and_fields(self):
        dtype = compute_geometry(3, 17).record_dtype()
        self.assertEqual(dtype.itemsize, 18)
        self.assertEqual(dtype.names, ("sample", "stamp", "analog", "digital"))
        self.assertEqual(dtype.fields["analog"][1], 8)
        self.assertEqual(dtype.fields["digital"][1], 14)

    def test__no_channel_fields_when_empty(self):
        dtype = compute_geometry(0, 0).record_dtype()
        self.assertEqual(dtype.names, ("sample", "stamp"))
        self.assertEqual(dtype.itemsize, 8)

    def test__slices_little_endian_records(self):
        geometry = compute_geometry(2, 0)
        data = np.array([(1, 0, 5, -5), (2, 1000, 6, -6)], dtype="<i4,<i4,<i2,<i2").tobytes()
        records = np.frombuffer(data, dtype=geometry.record_dtype())
        np.testing.assert_array_equal(records["sample"], [1, 2])
        np.testing.assert_array_equal(records["stamp"], [0, 1000])
        np.testing.assert_array_equal(records["analog"], [[5, -5], [6, -6]])


if __name__ == "__main__":
    unittest.main()
