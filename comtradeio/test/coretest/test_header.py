"""
Tests of the comtradeio.core.header value types and comtradeio.core.errors
"""

import dataclasses
import datetime
import unittest

import numpy as np

from comtradeio.core import (
    AnalogChannelSpec,
    ChannelOutOfRange,
    DataFileType,
    DigitalChannelSpec,
    FormatError,
    Header,
    InvalidNumber,
    InvalidSection,
    SampleRate,
    TruncatedData,
)


def make_header(**kwargs):
    params = dict(
        station_name="SUB_A",
        record_device_id="R1",
        revision_year=1999,
        analog_channels=(
            AnalogChannelSpec(1, "IA", "A", "", "A", 0.01, 0.0, 0.0, -32767, 32767),
            AnalogChannelSpec(2, "IB", "B", "", "A", 0.02, -1.0, 0.0, -32767, 32767),
        ),
        digital_channels=(DigitalChannelSpec(1, "TRIP", "A"),),
        line_frequency=50,
        sample_rates=(SampleRate(1000.0, 3), SampleRate(500.0, 10)),
        start_time=datetime.datetime(2020, 1, 1),
        trigger_time=datetime.datetime(2020, 1, 1, 0, 0, 0, 100000),
        data_file_type=DataFileType.BINARY,
    )
    params.update(kwargs)
    return Header(**params)


class TestAnalogChannelSpec(unittest.TestCase):
    def test__scale(self):
        ch = AnalogChannelSpec(1, "IA", "A", "", "A", 0.01, 0.5, 0.0, -32767, 32767)
        self.assertAlmostEqual(ch.scale(100), 1.5)
        np.testing.assert_allclose(ch.scale(np.array([100.0, -50.0])), [1.5, 0.0])

    def test__optional_fields_default_to_none(self):
        ch = AnalogChannelSpec(1, "IA", "A", "", "A", 1.0, 0.0, 0.0, 0, 0)
        self.assertIsNone(ch.primary)
        self.assertIsNone(ch.secondary)
        self.assertIsNone(ch.ps)

    def test__frozen(self):
        ch = AnalogChannelSpec(1, "IA", "A", "", "A", 1.0, 0.0, 0.0, 0, 0)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            ch.a = 2.0


class TestHeader(unittest.TestCase):
    def test__counts_and_names(self):
        header = make_header()
        self.assertEqual(header.analog_count, 2)
        self.assertEqual(header.digital_count, 1)
        self.assertEqual(header.analog_channel_names, ["IA", "IB"])
        self.assertEqual(header.digital_channel_names, ["TRIP"])

    def test__first_sample_rate_is_used(self):
        header = make_header()
        self.assertEqual(header.sampling_rate, 1000.0)
        self.assertEqual(header.sample_count, 3)

    def test__analog_channel_is_one_based(self):
        header = make_header()
        self.assertEqual(header.analog_channel(1).name, "IA")
        self.assertEqual(header.analog_channel(2).name, "IB")

    def test__analog_channel_out_of_range(self):
        header = make_header()
        for channel_index in (0, -1, 3):
            with self.assertRaises(ChannelOutOfRange) as cm:
                header.analog_channel(channel_index)
            self.assertEqual(cm.exception.total, 2)

    def test__defaults(self):
        header = make_header()
        self.assertEqual(header.time_factor, 1.0)
        self.assertIsNone(header.total_channels)

    def test__equality(self):
        self.assertEqual(make_header(), make_header())
        self.assertNotEqual(make_header(), make_header(line_frequency=60))


class TestErrors(unittest.TestCase):
    def test__all_derive_from_format_error(self):
        self.assertTrue(issubclass(FormatError, ValueError))
        for err in (InvalidSection("x"), InvalidNumber(1, 2), TruncatedData(10, 5), ChannelOutOfRange(3, 2)):
            self.assertIsInstance(err, FormatError)

    def test__invalid_number_location(self):
        err = InvalidNumber(4, 6, "abc")
        self.assertEqual((err.line, err.field, err.text), (4, 6, "abc"))
        self.assertIn("line 4, field 6", str(err))

    def test__invalid_section_line(self):
        self.assertEqual(str(InvalidSection("missing", line=3)), "line 3: missing")
        self.assertIsNone(InvalidSection("missing").line)

    def test__truncated_data_sizes(self):
        err = TruncatedData(42, 41)
        self.assertEqual((err.expected, err.actual), (42, 41))


if __name__ == "__main__":
    unittest.main()
