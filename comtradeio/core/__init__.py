"""
:mod:`comtradeio.core` provides the value types describing a COMTRADE
record and the exceptions raised while decoding it.

Classes:

.. autoclass:: Header
.. autoclass:: AnalogChannelSpec
.. autoclass:: DigitalChannelSpec
.. autoclass:: SampleRate
.. autoclass:: DataFileType

.. autoexception:: FormatError
"""

from comtradeio.core.header import (
    Header,
    AnalogChannelSpec,
    DigitalChannelSpec,
    SampleRate,
    DataFileType,
)
from comtradeio.core.errors import (
    FormatError,
    InvalidSection,
    InvalidNumber,
    InvalidTimestamp,
    EmptyData,
    TruncatedData,
    ChannelOutOfRange,
    MissingSampleRate,
    UnsupportedDataFileType,
)
