"""
:mod:`comtradeio.rawio` provides the decoding layer of comtradeio: the
configuration file parser, the data file decoder and a file level reader.

Functions:

.. autofunction:: comtradeio.rawio.parse_header
.. autofunction:: comtradeio.rawio.format_header
.. autofunction:: comtradeio.rawio.compute_geometry
.. autofunction:: comtradeio.rawio.channel_series
.. autofunction:: comtradeio.rawio.timestamp_at
.. autofunction:: comtradeio.rawio.get_rawio


Classes:

* :attr:`HeaderParser`
* :attr:`DatDecoder`
* :attr:`RecordGeometry`
* :attr:`ComtradeRawIO`


.. autoclass:: comtradeio.rawio.ComtradeRawIO

    .. autoattribute:: extensions

"""

from pathlib import Path

from .lexer import LineCursor, split_lines
from .headerparser import HeaderParser, parse_header
from .headerwriter import format_header
from .geometry import RecordGeometry, compute_geometry
from .datdecoder import DatDecoder, channel_series
from .timemodel import timestamp_at, sample_times, timestamps
from .comtraderawio import ComtradeRawIO
from .utils import readonly_buffer

rawiolist = [
    ComtradeRawIO,
]


def get_rawio(filename):
    """
    Return a RawIO class that can read the file `filename`, None if the
    extension is not known.
    """
    ext = Path(filename).suffix[1:].lower()
    for rawio in rawiolist:
        if ext in rawio.extensions:
            return rawio
    return None
