"""
Layout of one record of a BINARY COMTRADE data file.

Each record is little-endian and made of::

    sample number     int32
    timestamp         int32      (in units of the header time factor, usually us)
    analog values     int16 * nb_analog
    digital words     uint16 * ceil(nb_digital / 16)    (16 status bits per word)

There is no framing: the file is a plain sequence of such records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

SAMPLE_BYTES = 4
STAMP_BYTES = 4
ANALOG_BYTES = 2
DIGITAL_WORD_BYTES = 2
DIGITAL_BITS_PER_WORD = 16


@dataclass(frozen=True)
class RecordGeometry:
    analog_count: int
    digital_count: int
    record_bytes: int
    sample_offset: int
    timestamp_offset: int
    analog_offset: int
    digital_offset: int
    digital_words: int

    @classmethod
    def from_header(cls, header) -> "RecordGeometry":
        return compute_geometry(header.analog_count, header.digital_count)

    def record_dtype(self) -> np.dtype:
        """
        Numpy structured dtype of one record, with explicit offsets so that
        `np.frombuffer(buffer, dtype=geometry.record_dtype())` slices the data
        file exactly as described by the geometry.
        """
        names = ["sample", "stamp"]
        formats = ["<i4", "<i4"]
        offsets = [self.sample_offset, self.timestamp_offset]
        if self.analog_count > 0:
            names.append("analog")
            formats.append(("<i2", (self.analog_count,)))
            offsets.append(self.analog_offset)
        if self.digital_words > 0:
            names.append("digital")
            formats.append(("<u2", (self.digital_words,)))
            offsets.append(self.digital_offset)
        return np.dtype(
            {"names": names, "formats": formats, "offsets": offsets, "itemsize": self.record_bytes}
        )

    def required_bytes(self, nb_record: int) -> int:
        return nb_record * self.record_bytes


def compute_geometry(analog_count: int, digital_count: int) -> RecordGeometry:
    """
    Compute the byte layout of one data record from the channel counts of
    a header.

    record_bytes = 8 + 2 * analog_count + 2 * ceil(digital_count / 16)
    """
    if analog_count < 0 or digital_count < 0:
        raise ValueError(f"channel counts must be >= 0, got {analog_count} analog and {digital_count} digital")

    digital_words = math.ceil(digital_count / DIGITAL_BITS_PER_WORD)
    analog_offset = SAMPLE_BYTES + STAMP_BYTES
    digital_offset = analog_offset + ANALOG_BYTES * analog_count
    record_bytes = digital_offset + DIGITAL_WORD_BYTES * digital_words

    return RecordGeometry(
        analog_count=analog_count,
        digital_count=digital_count,
        record_bytes=record_bytes,
        sample_offset=0,
        timestamp_offset=SAMPLE_BYTES,
        analog_offset=analog_offset,
        digital_offset=digital_offset,
        digital_words=digital_words,
    )
