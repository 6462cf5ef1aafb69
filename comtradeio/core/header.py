"""
This module defines the immutable value types produced by the COMTRADE
configuration parser:

:class:`Header`
    station, channel and sampling metadata of one record
:class:`AnalogChannelSpec`, :class:`DigitalChannelSpec`
    one entry per channel line of the configuration file
:class:`SampleRate`
    one ``(rate, sample_count)`` pair
:class:`DataFileType`
    closed set of data file formats
"""

from __future__ import annotations

import datetime
import enum
from dataclasses import dataclass

from comtradeio.core.errors import ChannelOutOfRange


class DataFileType(enum.Enum):
    """Data file formats that a configuration file may declare"""

    ASCII = "ASCII"
    BINARY = "BINARY"
    BINARY32 = "BINARY32"
    FLOAT32 = "FLOAT32"


@dataclass(frozen=True)
class AnalogChannelSpec:
    """
    One analog channel line.

    index: channel number as written in the file (1-based)
    name: channel id, spaces replaced by underscores
    element: circuit component being monitored, usually empty
    a, b: conversion factors, physical = raw * a + b
    skew: time skew between channels in microseconds
    min_value, max_value: declared range of the raw data
    primary, secondary: transformer ratio, None when the columns are absent
    ps: 'P' or 'S' depending on which side a/b refer to, None when absent
    """

    index: int
    name: str
    phase: str
    element: str
    unit: str
    a: float
    b: float
    skew: float
    min_value: int
    max_value: int
    primary: float | None = None
    secondary: float | None = None
    ps: str | None = None

    def scale(self, raw):
        return raw * self.a + self.b


@dataclass(frozen=True)
class DigitalChannelSpec:
    index: int
    name: str
    phase: str
    element: str | None = None
    initial_state: int | None = None


@dataclass(frozen=True)
class SampleRate:
    rate: float
    sample_count: int


@dataclass(frozen=True)
class Header:
    """
    Content of a COMTRADE configuration (.cfg) file.

    Only the first entry of `sample_rates` is used to decode data and to
    compute sample times; the others are kept for inspection.

    `start_time` and `trigger_time` follow the order given by the parser,
    see :class:`comtradeio.rawio.headerparser.HeaderParser`.
    """

    station_name: str
    record_device_id: str
    revision_year: int | None
    analog_channels: tuple[AnalogChannelSpec, ...]
    digital_channels: tuple[DigitalChannelSpec, ...]
    line_frequency: int
    sample_rates: tuple[SampleRate, ...]
    start_time: datetime.datetime
    trigger_time: datetime.datetime
    data_file_type: DataFileType
    time_factor: float = 1.0
    total_channels: int | None = None

    @property
    def analog_count(self) -> int:
        return len(self.analog_channels)

    @property
    def digital_count(self) -> int:
        return len(self.digital_channels)

    @property
    def sampling_rate(self) -> float:
        """First sampling rate, in Hz"""
        return self.sample_rates[0].rate

    @property
    def sample_count(self) -> int:
        """Number of samples at the first sampling rate"""
        return self.sample_rates[0].sample_count

    @property
    def analog_channel_names(self) -> list[str]:
        return [ch.name for ch in self.analog_channels]

    @property
    def digital_channel_names(self) -> list[str]:
        return [ch.name for ch in self.digital_channels]

    def analog_channel(self, channel_index: int) -> AnalogChannelSpec:
        """Return the analog channel at 1-based position `channel_index`"""
        if not 1 <= channel_index <= self.analog_count:
            raise ChannelOutOfRange(channel_index, self.analog_count)
        return self.analog_channels[channel_index - 1]
