"""
Sample times of a COMTRADE record.

Times are derived from the header only: sample `i` is taken at
`start_time + i / sampling_rate`, with the first sampling rate entry. The
per-record timestamps of the data file are available separately through
:meth:`comtradeio.rawio.datdecoder.DatDecoder.stamps`.
"""

from __future__ import annotations

import datetime

import numpy as np

from comtradeio.core.errors import MissingSampleRate
from comtradeio.core.header import Header


def _first_rate(header):
    if len(header.sample_rates) == 0:
        raise MissingSampleRate("header has no sample rate entry")
    rate = header.sample_rates[0].rate
    if rate <= 0:
        raise MissingSampleRate(f"sample rate {rate} cannot be used to compute sample times")
    return rate


def timestamp_at(header: Header, sample_index: int) -> datetime.datetime:
    """
    Absolute time of sample `sample_index` (0-based).

    `sample_index` is expected in [0, sample_count); it is not checked.
    """
    rate = _first_rate(header)
    return header.start_time + datetime.timedelta(seconds=sample_index / rate)


def sample_times(header: Header, dtype="float64") -> np.ndarray:
    """Time of every sample in seconds relative to `start_time`"""
    rate = _first_rate(header)
    return np.arange(header.sample_count, dtype=dtype) / rate


def timestamps(header: Header) -> list[datetime.datetime]:
    return [timestamp_at(header, i) for i in range(header.sample_count)]
