"""
Decoder for BINARY COMTRADE data (.dat) files.

The data file is sliced into fixed-width records whose layout comes from
:class:`comtradeio.rawio.geometry.RecordGeometry`, and analog values are
scaled with the per-channel conversion factors of the header::

    physical = raw * a + b

Only the first sample-rate entry of the header is honored: the number of
records decoded is its sample count.

Nothing is cached: every call slices the buffer again. The buffer is only
ever read, so several channels of the same buffer can be decoded from
different threads at the same time.
"""

from __future__ import annotations

import numpy as np

from comtradeio.core.errors import (
    ChannelOutOfRange,
    EmptyData,
    MissingSampleRate,
    TruncatedData,
    UnsupportedDataFileType,
)
from comtradeio.core.header import DataFileType, Header

from .geometry import RecordGeometry
from .utils import readonly_buffer


class DatDecoder:
    """
    Decode the records of a data file described by `header`.

    Parameters
    ----------
    header: Header
        The parsed configuration file

    Examples
    --------
    >>> decoder = DatDecoder(header)
    >>> currents = decoder.channel_series(dat_bytes, channel_index=1)
    >>> stamps_us = decoder.stamps(dat_bytes)
    """

    def __init__(self, header: Header):
        self.header = header
        self.geometry = RecordGeometry.from_header(header)

    def channel_series(self, data, channel_index: int) -> np.ndarray:
        """
        Return the scaled values of analog channel `channel_index` (1-based,
        as numbered in the header), one float64 per record.

        Raises, checked in this order: EmptyData, ChannelOutOfRange,
        MissingSampleRate, UnsupportedDataFileType, TruncatedData.
        """
        buf = self._load(data)
        self._check_channel_index(channel_index)
        records = self._records(buf)

        channel = self.header.analog_channel(channel_index)
        raw = records["analog"][:, channel_index - 1]
        return channel.scale(raw.astype("float64"))

    def raw_channel(self, data, channel_index: int) -> np.ndarray:
        """Unscaled int16 samples of one analog channel"""
        buf = self._load(data)
        self._check_channel_index(channel_index)
        return self._records(buf)["analog"][:, channel_index - 1]

    def records(self, data) -> np.ndarray:
        """
        Return all records as a read-only numpy structured array with fields
        'sample', 'stamp', 'analog' (n_record, nb_analog) and 'digital'
        (n_record, nb_word). 'analog' and 'digital' are absent when the header
        has no channel of that kind.
        """
        return self._records(self._load(data))

    def sample_numbers(self, data) -> np.ndarray:
        return self.records(data)["sample"]

    def stamps(self, data) -> np.ndarray:
        """Record timestamps multiplied by the header time factor (usually microseconds)"""
        return self.records(data)["stamp"].astype("float64") * self.header.time_factor

    def digital_channel_series(self, data, channel_index: int) -> np.ndarray:
        # geometry.digital_offset / digital_words already locate the packed status words
        raise NotImplementedError("Decoding digital channel states is not implemented")

    def _load(self, data):
        if data is None:
            raise EmptyData("no data content, read the data file first")
        buf = readonly_buffer(data)
        if buf.size == 0:
            raise EmptyData("no data content, read the data file first")
        return buf

    def _check_channel_index(self, channel_index):
        total = self.header.analog_count
        if not 1 <= channel_index <= total:
            raise ChannelOutOfRange(channel_index, total)

    def _sample_count(self):
        if len(self.header.sample_rates) == 0:
            raise MissingSampleRate("header has no sample rate entry")
        return self.header.sample_rates[0].sample_count

    def _records(self, buf):
        nb_record = self._sample_count()
        if self.header.data_file_type != DataFileType.BINARY:
            raise UnsupportedDataFileType(
                f"only BINARY data files can be decoded, header declares {self.header.data_file_type.value}"
            )

        dtype = self.geometry.record_dtype()
        needed = self.geometry.required_bytes(nb_record)
        if needed > buf.size:
            raise TruncatedData(needed, buf.size)
        if nb_record == 0:
            return np.zeros(0, dtype=dtype)
        return np.frombuffer(buf, dtype=dtype, count=nb_record)


def channel_series(header: Header, data_bytes, channel_index: int) -> np.ndarray:
    """
    Scaled values of analog channel `channel_index` (1-based) for every
    record of `data_bytes`. See :meth:`DatDecoder.channel_series`.
    """
    return DatDecoder(header).channel_series(data_bytes, channel_index)
