"""
Write a :class:`comtradeio.core.Header` back to the configuration file
grammar read by :mod:`comtradeio.rawio.headerparser`.

Floats are written with `repr` so that parsing the output gives back
exactly the same values.
"""

from __future__ import annotations

from comtradeio.core.header import Header

from .headerparser import TIME_FORMAT


def _opt(value):
    if value is None:
        return ""
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _timestamp(value):
    return value.strftime(TIME_FORMAT).replace("T", ",")


def format_header(header: Header, swap_timestamps: bool = False) -> str:
    """
    Return the configuration text of `header`.

    `swap_timestamps` must match the value used to parse the text back.
    """
    if len(header.sample_rates) == 0:
        raise ValueError("a header needs at least one sample rate entry to be written")

    lines = []

    station = [header.station_name, header.record_device_id]
    if header.revision_year is not None:
        station.append(str(header.revision_year))
    lines.append(",".join(station))

    total = header.total_channels
    if total is None:
        total = header.analog_count + header.digital_count
    lines.append(f"{total},{header.analog_count}A,{header.digital_count}D")

    for ch in header.analog_channels:
        fields = [
            str(ch.index),
            ch.name,
            ch.phase,
            ch.element,
            ch.unit,
            repr(ch.a),
            repr(ch.b),
            repr(ch.skew),
            str(ch.min_value),
            str(ch.max_value),
        ]
        optional = [_opt(ch.primary), _opt(ch.secondary), _opt(ch.ps)]
        while optional and optional[-1] == "":
            optional.pop()
        lines.append(",".join(fields + optional))

    for ch in header.digital_channels:
        fields = [str(ch.index), ch.name, ch.phase]
        optional = [_opt(ch.element), _opt(ch.initial_state)]
        while optional and optional[-1] == "":
            optional.pop()
        lines.append(",".join(fields + optional))

    lines.append(str(header.line_frequency))
    lines.append(str(len(header.sample_rates)))
    for sr in header.sample_rates:
        lines.append(f"{sr.rate!r},{sr.sample_count}")

    if swap_timestamps:
        lines.append(_timestamp(header.trigger_time))
        lines.append(_timestamp(header.start_time))
    else:
        lines.append(_timestamp(header.start_time))
        lines.append(_timestamp(header.trigger_time))

    lines.append(header.data_file_type.value)
    lines.append(repr(header.time_factor))

    return "\n".join(lines) + "\n"
