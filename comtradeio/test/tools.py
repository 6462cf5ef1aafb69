"""
Tools for use with comtradeio tests: builders for small synthetic
configuration and data files, and array comparisons.
"""

import math
import struct

import numpy as np

DEFAULT_ANALOG_LINES = (
    "1,IA,A,,A,0.01,0.0,0.0,-32767,32767",
    "2,VB,B,,kV,0.5,1.0,0.0,-32767,32767,110000.0,100.0,P",
)
DEFAULT_DIGITAL_LINES = ("1,BRK 52,A,,0",)
DEFAULT_TIMESTAMPS = ("01/01/2020,00:00:00.000000", "01/01/2020,00:00:00.100000")

# raw int16 samples matching DEFAULT_ANALOG_LINES, one row per record
DEFAULT_ROWS = ((100, 10), (200, 20), (-50, -30))


def build_cfg_text(
    station="STATION_1,REC_42,1999",
    analog_lines=DEFAULT_ANALOG_LINES,
    digital_lines=DEFAULT_DIGITAL_LINES,
    total=None,
    counts=None,
    frequency="50",
    rates=((1000.0, 3),),
    nrates=None,
    timestamps=DEFAULT_TIMESTAMPS,
    file_type="BINARY",
    time_factor="1.0",
    newline="\n",
):
    """
    Return the text of a configuration file.

    `counts` replaces the whole channel count line, `nrates` the sample rate
    count line; by default both are computed from the other arguments.
    """
    if counts is None:
        if total is None:
            total = len(analog_lines) + len(digital_lines)
        counts = f"{total},{len(analog_lines)}A,{len(digital_lines)}D"
    if nrates is None:
        nrates = len(rates)

    lines = [station, counts]
    lines.extend(analog_lines)
    lines.extend(digital_lines)
    lines.append(frequency)
    lines.append(str(nrates))
    lines.extend(f"{rate},{count}" for rate, count in rates)
    lines.extend(timestamps)
    lines.append(file_type)
    lines.append(time_factor)
    return newline.join(lines) + newline


def build_dat_bytes(analog_rows=DEFAULT_ROWS, nb_digital=1, digital_words=None, stamps=None):
    """
    Return BINARY data records: int32 sample number (1-based), int32 stamp,
    int16 analog values, then uint16 status words.
    """
    nb_word = math.ceil(nb_digital / 16)
    chunks = []
    for i, row in enumerate(analog_rows):
        stamp = i * 1000 if stamps is None else stamps[i]
        words = [0] * nb_word if digital_words is None else digital_words[i]
        fmt = f"<ii{len(row)}h{nb_word}H"
        chunks.append(struct.pack(fmt, i + 1, stamp, *row, *words))
    return b"".join(chunks)


def assert_arrays_equal(a, b, dtype=False):
    """
    Check if two arrays have the same shape and contents.

    If dtype is True (default=False), then also theck that they have the same
    dtype.
    """
    assert isinstance(a, np.ndarray), f"a is a {type(a)}"
    assert isinstance(b, np.ndarray), f"b is a {type(b)}"
    assert a.shape == b.shape, f"{a} != {b}"
    assert (a.flatten() == b.flatten()).all(), f"{a} != {b}"
    if dtype:
        assert a.dtype == b.dtype, f"{a} and {b} not same dtype {a.dtype} {b.dtype}"


def assert_arrays_almost_equal(a, b, threshold, dtype=False):
    """
    Check if two arrays have the same shape and contents that differ
    by abs(a - b) <= threshold for all elements.

    If threshold is None, do an absolute comparison rather than a relative
    comparison.
    """
    if threshold is None:
        return assert_arrays_equal(a, b, dtype=dtype)

    a = np.asarray(a)
    b = np.asarray(b)
    assert a.shape == b.shape, f"{a} != {b}"
    if a.dtype.kind in ["f", "c", "i"]:
        assert (abs(a - b) <= threshold).all(), (
            f"abs({a} - {b})    max(|a - b|) = {(abs(a - b)).max()}    threshold:{threshold}"
        )

    if dtype:
        assert a.dtype == b.dtype, f"{a} and {b} not same dtype {a.dtype} and {b.dtype}"
