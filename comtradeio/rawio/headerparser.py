"""
Parser for COMTRADE configuration (.cfg) files.

The configuration file is a positional grammar, one section after the
other::

    station_name,rec_dev_id[,rev_year]
    TT,##A,##D
    An,ch_id,ph,ccbm,uu,a,b,skew,min,max[,primary,secondary,PS]    (## lines)
    Dn,ch_id,ph[,ccbm[,y]]                                         (## lines)
    lf
    nrates
    samp,endsamp                                                   (nrates lines)
    dd/mm/yyyy,hh:mm:ss.ssssss                                     (first data point)
    dd/mm/yyyy,hh:mm:ss.ssssss                                     (trigger point)
    ft
    timemult

The position of every section after the channel lines depends on the
channel counts, so lines are consumed through a
:class:`comtradeio.rawio.lexer.LineCursor`. Lines after `timemult`
(time codes of the 2013 revision) are ignored.

Any malformed field aborts the whole parse: a partially filled
:class:`comtradeio.core.Header` is never returned.
"""

from __future__ import annotations

import datetime
import logging
import math
import re

from comtradeio.core.errors import InvalidNumber, InvalidSection, InvalidTimestamp
from comtradeio.core.header import (
    AnalogChannelSpec,
    DataFileType,
    DigitalChannelSpec,
    Header,
    SampleRate,
)

from .lexer import LineCursor, split_lines

logger = logging.getLogger(__name__)

TIME_FORMAT = "%d/%m/%YT%H:%M:%S.%f"

_uint_re = re.compile(r"[0-9]+")
_int_re = re.compile(r"[+-]?[0-9]+")
_float_re = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")
# datetime only handles microseconds
_long_fraction_re = re.compile(r"(\.[0-9]{6})[0-9]+$")


def _parse_uint(text, line, field):
    if not _uint_re.fullmatch(text):
        raise InvalidNumber(line, field, text)
    return int(text)


def _parse_int(text, line, field):
    if not _int_re.fullmatch(text):
        raise InvalidNumber(line, field, text)
    return int(text)


def _parse_float(text, line, field):
    if not _float_re.fullmatch(text):
        raise InvalidNumber(line, field, text)
    value = float(text)
    # huge exponents overflow to inf
    if not math.isfinite(value):
        raise InvalidNumber(line, field, text)
    return value


def _optional(fields, position):
    """Return the stripped field at 0-based `position`, None if absent or blank"""
    if len(fields) > position and fields[position] != "":
        return fields[position]
    return None


def _channel_name(text):
    # format ids to xxx_xxx_xxx
    return text.replace(" ", "_")


def _decode(header_bytes):
    if isinstance(header_bytes, str):
        return header_bytes
    try:
        return bytes(header_bytes).decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise InvalidSection(f"configuration is not valid UTF-8 text ({e.reason} at byte {e.start})") from None


class HeaderParser:
    """
    Parse the text of a COMTRADE configuration file into a
    :class:`comtradeio.core.Header`.

    Parameters
    ----------
    swap_timestamps: bool, default: False
        By default the first timestamp line is taken as the time of the
        first data point (`start_time`) and the second one as the trigger
        time (`trigger_time`), which is the order of IEEE C37.111.
        Some recorders and older tools write them the other way round;
        set this to True to read the first line as the trigger time.

    Examples
    --------
    >>> parser = HeaderParser()
    >>> with open("fault.cfg", "rb") as f:
    ...     header = parser.parse(f.read())
    >>> header.analog_channel_names
    ['IA', 'IB', 'IC', 'VA']
    """

    def __init__(self, swap_timestamps: bool = False):
        self.swap_timestamps = swap_timestamps

    def parse(self, header_bytes: bytes | str) -> Header:
        cursor = LineCursor(split_lines(_decode(header_bytes)))

        station_name, record_device_id, revision_year = self._parse_station_line(cursor)
        total_channels, nb_analog, nb_digital = self._parse_channel_counts(cursor)
        if total_channels != nb_analog + nb_digital:
            logger.warning(
                f"Channel total {total_channels} differs from {nb_analog} analog + {nb_digital} digital channels"
            )

        lines = cursor.take("analog channel", count=nb_analog, min_fields=10)
        analog_channels = tuple(
            self._parse_analog_line(fields, line) for fields, line in zip(lines, cursor.last_line_numbers)
        )

        lines = cursor.take("digital channel", count=nb_digital, min_fields=3)
        digital_channels = tuple(
            self._parse_digital_line(fields, line) for fields, line in zip(lines, cursor.last_line_numbers)
        )

        (fields,) = cursor.take("line frequency")
        line_frequency = int(_parse_float(fields[0], cursor.last_line_numbers[0], 1))

        sample_rates = self._parse_sample_rates(cursor)

        lines = cursor.take("timestamp", count=2)
        first_time, second_time = (
            self._parse_timestamp(fields, line) for fields, line in zip(lines, cursor.last_line_numbers)
        )
        if self.swap_timestamps:
            start_time, trigger_time = second_time, first_time
        else:
            start_time, trigger_time = first_time, second_time

        (fields,) = cursor.take("data file type")
        try:
            data_file_type = DataFileType(fields[0].upper())
        except ValueError:
            allowed = ", ".join(ft.value for ft in DataFileType)
            raise InvalidSection(
                f"data file type {fields[0]!r} is not one of {allowed}", line=cursor.last_line_numbers[0]
            ) from None

        (fields,) = cursor.take("time multiplication factor")
        if fields[0] == "":
            time_factor = 1.0
        else:
            time_factor = _parse_float(fields[0], cursor.last_line_numbers[0], 1)

        logger.debug(
            f"Parsed {station_name!r}: {nb_analog} analog, {nb_digital} digital channels, "
            f"{len(sample_rates)} sample rate(s), {data_file_type.value}, "
            f"{cursor.remaining()} trailing line(s) ignored"
        )

        return Header(
            station_name=station_name,
            record_device_id=record_device_id,
            revision_year=revision_year,
            analog_channels=analog_channels,
            digital_channels=digital_channels,
            line_frequency=line_frequency,
            sample_rates=sample_rates,
            start_time=start_time,
            trigger_time=trigger_time,
            data_file_type=data_file_type,
            time_factor=time_factor,
            total_channels=total_channels,
        )

    def _parse_station_line(self, cursor):
        (fields,) = cursor.take("station", min_fields=2)
        revision = _optional(fields, 2)
        if revision is not None:
            revision = _parse_uint(revision, cursor.last_line_numbers[0], 3)
        return fields[0], fields[1], revision

    def _parse_channel_counts(self, cursor):
        (fields,) = cursor.take("channel count", min_fields=3)
        line = cursor.last_line_numbers[0]
        total = _parse_uint(fields[0], line, 1)
        nb_analog = self._parse_marked_count(fields[1], "A", line, 2)
        nb_digital = self._parse_marked_count(fields[2], "D", line, 3)
        return total, nb_analog, nb_digital

    def _parse_marked_count(self, text, marker, line, field):
        value = text.upper()
        if not value.endswith(marker):
            raise InvalidSection(f"channel count {text!r} lacks the {marker!r} marker", line=line)
        return _parse_uint(value[:-1].strip(), line, field)

    def _parse_analog_line(self, fields, line):
        primary = _optional(fields, 10)
        secondary = _optional(fields, 11)
        return AnalogChannelSpec(
            index=_parse_uint(fields[0], line, 1),
            name=_channel_name(fields[1]),
            phase=fields[2],
            element=fields[3],
            unit=fields[4],
            a=_parse_float(fields[5], line, 6),
            b=_parse_float(fields[6], line, 7),
            skew=_parse_float(fields[7], line, 8),
            min_value=_parse_int(fields[8], line, 9),
            max_value=_parse_int(fields[9], line, 10),
            primary=None if primary is None else _parse_float(primary, line, 11),
            secondary=None if secondary is None else _parse_float(secondary, line, 12),
            ps=_optional(fields, 12),
        )

    def _parse_digital_line(self, fields, line):
        initial_state = _optional(fields, 4)
        if initial_state is not None:
            initial_state = _parse_uint(initial_state, line, 5)
            if initial_state not in (0, 1):
                raise InvalidNumber(line, 5, fields[4])
        return DigitalChannelSpec(
            index=_parse_uint(fields[0], line, 1),
            name=_channel_name(fields[1]),
            phase=fields[2],
            element=_optional(fields, 3),
            initial_state=initial_state,
        )

    def _parse_sample_rates(self, cursor):
        (fields,) = cursor.take("sample rate count")
        nrates = _parse_uint(fields[0], cursor.last_line_numbers[0], 1)
        # nrates=0 means timestamps drive the sampling but one samp,endsamp line is still written
        lines = cursor.take("sample rate", count=max(nrates, 1), min_fields=2)
        return tuple(
            SampleRate(rate=_parse_float(fields[0], line, 1), sample_count=_parse_uint(fields[1], line, 2))
            for fields, line in zip(lines, cursor.last_line_numbers)
        )

    def _parse_timestamp(self, fields, line):
        if len(fields) == 6:
            day, month, year, hour, minute, second = fields
            text = f"{day}/{month}/{year}T{hour}:{minute}:{second}"
        elif len(fields) == 2:
            text = "T".join(fields)
        else:
            raise InvalidTimestamp(line, ",".join(fields))

        m = _long_fraction_re.search(text)
        if m is not None:
            logger.warning(f"line {line}: timestamp {text!r} truncated to microseconds")
            text = text[: m.end(1)]

        try:
            return datetime.datetime.strptime(text, TIME_FORMAT)
        except ValueError:
            raise InvalidTimestamp(line, ",".join(fields)) from None


_default_parser = HeaderParser()


def parse_header(header_bytes: bytes | str, swap_timestamps: bool = False) -> Header:
    """
    Parse the content of a configuration file.

    Raises a :class:`comtradeio.core.FormatError` subclass on any malformed
    line; see :class:`HeaderParser` for `swap_timestamps`.
    """
    if swap_timestamps:
        return HeaderParser(swap_timestamps=True).parse(header_bytes)
    return _default_parser.parse(header_bytes)
