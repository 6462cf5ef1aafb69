"""
Class for reading COMTRADE records (IEEE C37.111) from disk.

A COMTRADE record is made of (at least) 2 files sharing a base name:
 - .cfg          configuration (header) file, text
 - .dat          data file, fixed-width binary records

Only BINARY data files (int16 analog samples) can be decoded. The data file
is opened read-only (np.memmap mode='r') and shared by every read, so
channels can be extracted from several threads at once.

"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import quantities as pq

from comtradeio.core.header import DataFileType
from comtradeio.units import ensure_signal_units

from .baserawio import BaseRawIO, _digital_channel_dtype, _signal_channel_dtype
from .datdecoder import DatDecoder
from .headerparser import HeaderParser
from .timemodel import sample_times, timestamp_at
from .utils import readonly_buffer


class ComtradeRawIO(BaseRawIO):
    """
    Class for reading COMTRADE .cfg/.dat file pairs

    Parameters
    ----------
    filename: str | Path, default: ''
        The *.cfg file to load
    dat_filename: str | Path | None, default: None
        The data file. When None, the file with the same base name and a
        '.dat' (then '.DAT') extension is used.
    swap_timestamps: bool, default: False
        Read the first timestamp line of the configuration as the trigger
        time, see :class:`comtradeio.rawio.headerparser.HeaderParser`

    Examples
    --------
    >>> import comtradeio.rawio
    >>> reader = comtradeio.rawio.ComtradeRawIO(filename="fault.cfg")
    >>> reader.parse_header()
    >>> print(reader)
    >>> ia = reader.get_channel_series(1)
    >>> raw_chunk = reader.get_analogsignal_chunk(i_start=0, i_stop=1000, channel_names=["IA", "IB"])
    >>> float_chunk = reader.rescale_signal_raw_to_float(raw_chunk, dtype="float64", channel_names=["IA", "IB"])
    """

    extensions = ["cfg"]

    def __init__(self, filename="", dat_filename=None, swap_timestamps=False):
        BaseRawIO.__init__(self)
        self.filename = str(filename)
        self.dat_filename = None if dat_filename is None else str(dat_filename)
        self.swap_timestamps = swap_timestamps

    def _source_name(self):
        return self.filename

    def _parse_header(self):
        with open(self.filename, mode="rb") as f:
            comtrade_header = HeaderParser(swap_timestamps=self.swap_timestamps).parse(f.read())

        self.dat_filename = self._ensure_data_filename()
        if os.path.getsize(self.dat_filename) == 0:
            # np.memmap cannot map an empty file
            self._buffer = readonly_buffer(b"")
        else:
            self._buffer = readonly_buffer(np.memmap(self.dat_filename, dtype="uint8", mode="r"))

        self._decoder = DatDecoder(comtrade_header)
        self.comtrade_header = comtrade_header

        if comtrade_header.data_file_type != DataFileType.BINARY:
            self.logger.warning(
                f"{self.filename} declares {comtrade_header.data_file_type.value} data, "
                "only BINARY data files can be decoded"
            )
        elif len(comtrade_header.sample_rates) > 1:
            self.logger.warning(
                f"{self.filename} has {len(comtrade_header.sample_rates)} sample rates, only the first one is used"
            )

        expected = self._decoder.geometry.required_bytes(comtrade_header.sample_count)
        if self._buffer.size != expected:
            self.logger.warning(
                f"{self.dat_filename} holds {self._buffer.size} bytes, "
                f"{comtrade_header.sample_count} records of {self._decoder.geometry.record_bytes} bytes "
                f"need {expected}"
            )

        sr = comtrade_header.sampling_rate
        sig_channels = []
        for ch in comtrade_header.analog_channels:
            sig_channels.append((ch.name, str(ch.index), sr, "int16", ch.unit, ch.a, ch.b))
        sig_channels = np.array(sig_channels, dtype=_signal_channel_dtype)

        digital_channels = []
        for ch in comtrade_header.digital_channels:
            state = -1 if ch.initial_state is None else ch.initial_state
            digital_channels.append((ch.name, str(ch.index), ch.phase, state))
        digital_channels = np.array(digital_channels, dtype=_digital_channel_dtype)

        # fill into header dict
        self.header = {}
        self.header["signal_channels"] = sig_channels
        self.header["digital_channels"] = digital_channels

    def _ensure_data_filename(self):
        if self.dat_filename is not None:
            if not os.path.exists(self.dat_filename):
                raise FileNotFoundError(f"Data file {self.dat_filename} not found")
            return self.dat_filename

        base, _ = os.path.splitext(self.filename)
        for ext in (".dat", ".DAT"):
            if os.path.exists(base + ext):
                return base + ext
        raise FileNotFoundError(
            f"Did not find the data file associated with {os.path.basename(self.filename)!r}, "
            f"looked for {os.path.basename(base)}.dat and {os.path.basename(base)}.DAT"
        )

    def _get_signal_size(self):
        return self.comtrade_header.sample_count

    def _get_analogsignal_chunk(self, i_start, i_stop, channel_indexes):
        if channel_indexes is None:
            channel_indexes = slice(None)
        analog = self._decoder.records(self._buffer)["analog"]
        return analog[slice(i_start, i_stop), channel_indexes]

    ###
    # scaled access, channel_index is 1-based as in the .cfg file

    def get_channel_series(self, channel_index: int) -> np.ndarray:
        """Scaled float64 values of analog channel `channel_index` (1-based)"""
        return self._decoder.channel_series(self._buffer, channel_index)

    def get_channel_quantity(self, channel_index: int) -> pq.Quantity:
        """Scaled values of one analog channel in the units declared by the header"""
        values = self.get_channel_series(channel_index)
        units = ensure_signal_units(self.comtrade_header.analog_channel(channel_index).unit)
        return values * units

    def get_all_channel_series(self, max_workers: int | None = None) -> list[np.ndarray]:
        """
        Scaled values of every analog channel, in header order.

        One decoding task per channel is run on a thread pool; all tasks
        read the same read-only buffer. The first failure is raised.
        """
        channel_indexes = range(1, self.comtrade_header.analog_count + 1)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self.get_channel_series, channel_indexes))

    def get_sample_times(self) -> pq.Quantity:
        """Time of every sample relative to the start time"""
        return sample_times(self.comtrade_header) * pq.s

    def timestamp_at(self, sample_index: int):
        return timestamp_at(self.comtrade_header, sample_index)
