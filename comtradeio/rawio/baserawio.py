"""
baserawio
======

Classes
-------

BaseRawIO
abstract class which should be overridden to write a RawIO.

RawIO is the file level API of comtradeio: it reads a record from disk,
keeps the data file as a read-only buffer, and gives fast access to raw
samples and to their scaled values.

A recording is mapped as follows:

A signal channel is one analog channel of the record. It is identified by a
channel_id (the channel number written in the configuration file) and by a
channel_index, a 0 based index into `header['signal_channels']`. All signal
channels of a record share the same sampling rate, sample count and raw
dtype, so a chunk of samples can be retrieved as one Numpy array of shape
(n_samples, n_channels).

Digital (status) channels are listed in `header['digital_channels']` for
inspection only.

With this API the IO has an attribute `header` with necessary keys.
This `header` attribute is done in the `_parse_header(...)` method.
See ComtradeRawIO as example.

"""

from __future__ import annotations

import logging

import numpy as np

from comtradeio import logging_handler

error_header = "Header is not read yet, do parse_header() first"

_signal_channel_dtype = [
    ("name", "U64"),  # not necessarily unique
    ("id", "U64"),  # must be unique
    ("sampling_rate", "float64"),
    ("dtype", "U16"),
    ("units", "U64"),
    ("gain", "float64"),
    ("offset", "float64"),
]

_common_sig_characteristics = ["sampling_rate", "dtype"]

_digital_channel_dtype = [
    ("name", "U64"),
    ("id", "U64"),
    ("phase", "U64"),
    ("initial_state", "int8"),  # -1 when not given
]


class BaseRawIO:
    """
    Generic class to handle.

    """

    name = "BaseRawIO"
    description = ""
    extensions = []

    def __init__(self, **kargs):
        """
        init docstring should be filled out at the rawio level so the user knows
        which filename(s) to give.

        """
        # create a logger for the IO class
        fullname = self.__class__.__module__ + "." + self.__class__.__name__
        self.logger = logging.getLogger(fullname)
        # Create a logger for 'comtradeio' and add a handler to it if it doesn't have one already.
        # (it will also not add one if the root logger has a handler)
        corename = self.__class__.__module__.split(".")[0]
        corelogger = logging.getLogger(corename)
        rootlogger = logging.getLogger()
        if not corelogger.handlers and not rootlogger.handlers:
            corelogger.addHandler(logging_handler)

        self.header = None
        self.is_header_parsed = False

    def parse_header(self):
        """
        Parses the header of the file(s) to allow for faster computations
        for all other functions

        """
        # this must create
        # self.header['signal_channels']
        # self.header['digital_channels']

        self._parse_header()
        self._check_signal_channel_characteristics()
        self.is_header_parsed = True

    def source_name(self):
        """Return fancy name of file source"""
        return self._source_name()

    def __repr__(self):
        txt = f"{self.__class__.__name__}: {self.source_name()}\n"
        if self.header is not None:
            for k in ("signal_channels", "digital_channels"):
                v = pprint_vector(self.header[k]["name"])
                txt += f"{k}: {v}\n"
        return txt

    def signal_channels_count(self):
        """Returns the number of signal (analog) channels"""
        return len(self.header["signal_channels"])

    def digital_channels_count(self):
        return len(self.header["digital_channels"])

    ###
    # signal and channel zone

    def _check_signal_channel_characteristics(self):
        """
        Check that all signal channels have the same
        _common_sig_characteristics and unique ids. These
        presently includes:
          * sampling_rate
          * dtype
        """
        signal_channels = self.header["signal_channels"]
        if signal_channels.size == 0:
            return

        characteristics = signal_channels[_common_sig_characteristics]
        unique_characteristics = np.unique(characteristics)
        if unique_characteristics.size != 1:
            raise ValueError(
                f"Some channels do not have the same {_common_sig_characteristics} {unique_characteristics}"
            )

        channel_ids = signal_channels["id"]
        if np.unique(channel_ids).size != channel_ids.size:
            self.logger.warning(f"signal_channels do not have unique ids: {list(channel_ids)}")

    def channel_name_to_index(self, channel_names: list[str]):
        """
        Transform channel_names to channel_indexes.
        Based on self.header['signal_channels']
        channel_indexes are zero-based offsets

        Parameters
        ----------
        channel_names: list[str]
            The channel names to convert to channel_indexes

        Returns
        -------
        channel_indexes: np.array[int]
            the channel_indexes associated with the given channel_names

        """
        signal_channels = self.header["signal_channels"]
        chan_names = list(signal_channels["name"])
        if signal_channels.size != np.unique(chan_names).size:
            raise ValueError("Channel names are not unique")
        channel_indexes = np.array([chan_names.index(name) for name in channel_names])
        return channel_indexes

    def channel_id_to_index(self, channel_ids: list[str]):
        """
        Transform channel_ids to channel_indexes.
        Based on self.header['signal_channels']
        channel_indexes are zero-based offsets

        Parameters
        ----------
        channel_ids: list[str]
            the list of channel_ids to convert to channel_indexes

        Returns
        -------
        channel_indexes: np.array[int]
             the channel_indexes associated with the given channel_ids
        """
        chan_ids = list(self.header["signal_channels"]["id"])
        channel_indexes = np.array([chan_ids.index(str(chan_id)) for chan_id in channel_ids])
        return channel_indexes

    def _get_channel_indexes(
        self,
        channel_indexes: list[int] | None,
        channel_names: list[str] | None,
        channel_ids: list[str] | None,
    ):
        """
        Select channel_indexes based on channel_indexes/channel_names/channel_ids
        depending on which one is not None.
        """
        if channel_indexes is None and channel_names is not None:
            channel_indexes = self.channel_name_to_index(channel_names)
        elif channel_indexes is None and channel_ids is not None:
            channel_indexes = self.channel_id_to_index(channel_ids)
        return channel_indexes

    def get_signal_size(self):
        """
        Retrieves the number of samples of the signal channels.

        Returns
        -------
        signal_size: int
            The number of samples of every signal channel

        """
        if not self.is_header_parsed:
            raise ValueError(error_header)
        return self._get_signal_size()

    def get_signal_sampling_rate(self):
        """
        Retrieves the sampling rate shared by all signal channels.

        Returns
        -------
        sr: float
            The sampling rate in Hz

        """
        signal_channels = self.header["signal_channels"]
        sr = signal_channels[0]["sampling_rate"]
        return float(sr)

    def get_analogsignal_chunk(
        self,
        i_start: int | None = None,
        i_stop: int | None = None,
        channel_indexes: list[int] | None = None,
        channel_names: list[str] | None = None,
        channel_ids: list[str] | None = None,
    ):
        """
        Returns a chunk of raw signal as a Numpy array.

        Parameters
        ----------
        i_start: int | None, default: None
            The index of the first sample (not time) of the desired analog signal
        i_stop: int | None, default: None
            The index of one past the last sample (not time) of the desired analog signal
        channel_indexes: list[int] | np.array[int]|  slice | None, default: None
            The list of indexes of channels to retrieve
        channel_names: list[str] | None, default: None
            The list of channel names to retrieve
        channel_ids: list[str] | None, default: None
            The list of channel_ids to retrieve

        Returns
        -------
        raw_chunk: np.array (n_samples, n_channels)
            The array with the raw signal samples

        Notes
        -----
        Rows are the samples and columns are the channels
        The channels are chosen either by channel_indexes,
        if provided, otherwise by channel_names, if provided, otherwise by channel_ids, if
        provided, otherwise all channels are selected.

        Examples
        --------
        # 4 analog channels, 3000 samples
        >>> rawio_reader.parse_header()
        >>> raw_sigs = rawio_reader.get_analogsignal_chunk()
        >>> raw_sigs.shape
        (3000,4)
        >>> raw_sigs.dtype
        'int16' # returns the dtype from the recording itself

        """
        if not self.is_header_parsed:
            raise ValueError(error_header)

        signal_channels = self.header["signal_channels"]
        if signal_channels.size == 0:
            error_message = (
                "get_analogsignal_chunk can't be called on a file with no signal channels."
                "Double check that your file contains analog channels."
            )
            raise AttributeError(error_message)

        channel_indexes = self._get_channel_indexes(channel_indexes, channel_names, channel_ids)

        # some check on channel_indexes
        if isinstance(channel_indexes, list):
            channel_indexes = np.asarray(channel_indexes)

        if isinstance(channel_indexes, np.ndarray):
            if channel_indexes.dtype == "bool":
                if self.signal_channels_count() != channel_indexes.size:
                    raise ValueError(
                        "If channel_indexes is a boolean it must have be the same length as the "
                        f"number of channels {self.signal_channels_count()}"
                    )
                (channel_indexes,) = np.nonzero(channel_indexes)

        raw_chunk = self._get_analogsignal_chunk(i_start, i_stop, channel_indexes)

        return raw_chunk

    def rescale_signal_raw_to_float(
        self,
        raw_signal: np.ndarray,
        dtype: np.dtype = "float32",
        channel_indexes: list[int] | None = None,
        channel_names: list[str] | None = None,
        channel_ids: list[str] | None = None,
    ):
        """
        Rescales a chunk of raw signals which are provided as a Numpy array. These are normally
        returned by a call to get_analogsignal_chunk.

        Parameters
        ----------
        raw_signal: np.array (n_samples, n_channels)
            The numpy array of samples with columns being samples for a single channel
        dtype: np.dype, default: "float32"
            The datatype for returning scaled samples, must be acceptable by the numpy dtype constructor
        channel_indexes: list[int], np.array[int], slice | None, default: None
            The list of indexes of channels to retrieve
        channel_names: list[str] | None, default: None
            The list of channel names to retrieve
        channel_ids: list[str] | None, default: None
            list of channel_ids to retrieve

        Returns
        -------
        float_signal: np.array (n_samples, n_channels)
            The rescaled signal

        Notes
        -----
        The channels must be selected the same way as for get_analogsignal_chunk,
        the gain (factor a) and offset (factor b) of each column are taken from
        `header['signal_channels']`.

        Examples
        --------
        >>> float_sigs = rawio_reader.rescale_signal_raw_to_float(raw_signal=raw_sigs, dtype='float64')
        >>> float_sigs.shape == raw_sigs.shape
        True

        """
        channel_indexes = self._get_channel_indexes(channel_indexes, channel_names, channel_ids)
        if channel_indexes is None:
            channel_indexes = slice(None)

        channels = self.header["signal_channels"][channel_indexes]

        float_signal = raw_signal.astype(dtype)

        if np.any(channels["gain"] != 1.0):
            float_signal *= channels["gain"]

        if np.any(channels["offset"] != 0.0):
            float_signal += channels["offset"]

        return float_signal

    ###
    # Functions to be implemented in IO below here

    def _parse_header(self):
        raise (NotImplementedError)

    def _source_name(self):
        raise (NotImplementedError)

    def _get_signal_size(self):
        """
        Return the number of samples of the signal channels.
        """
        raise (NotImplementedError)

    def _get_analogsignal_chunk(
        self,
        i_start: int | None,
        i_stop: int | None,
        channel_indexes: list[int] | None,
    ):
        """
        Return the samples from a set of AnalogSignals indexed
        by channel_indexes.

        RETURNS
        -------
            array of samples, with each requested channel in a column
        """

        raise (NotImplementedError)


def pprint_vector(vector, lim: int = 8):
    vector = np.asarray(vector)
    if vector.ndim != 1:
        raise ValueError(f"`vector` must have a dimension of 1 and not {vector.ndim}")
    if len(vector) > lim:
        part1 = ", ".join(e for e in vector[: lim // 2])
        part2 = " , ".join(e for e in vector[-lim // 2 :])
        txt = f"[{part1} ... {part2}]"
    else:
        part1 = ", ".join(e for e in vector)
        txt = f"[{part1}]"
    return txt
