"""
Exceptions raised while decoding COMTRADE files.

Every error raised by the header parser or the data decoder derives from
:class:`FormatError`, so callers can catch a single class. Header errors
abort the whole parse; data errors abort only the channel extraction that
raised them.
"""


class FormatError(ValueError):
    """Base class for malformed or undecodable COMTRADE content"""


class InvalidSection(FormatError):
    """
    A required configuration line is missing, has too few fields, or the
    analog/digital channel-count markers are malformed.
    """

    def __init__(self, message, line=None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        FormatError.__init__(self, message)


class InvalidNumber(FormatError):
    """
    A field expected to be numeric failed strict decimal parsing.

    `line` and `field` are both 1-based, as a text editor would show them.
    """

    def __init__(self, line, field, text=""):
        self.line = line
        self.field = field
        self.text = text
        FormatError.__init__(self, f"line {line}, field {field}: {text!r} is not a valid number")


class InvalidTimestamp(FormatError):
    """A start or trigger timestamp line does not match dd/mm/yyyy,hh:mm:ss.ssssss"""

    def __init__(self, line, text=""):
        self.line = line
        self.text = text
        FormatError.__init__(self, f"line {line}: {text!r} is not a valid timestamp")


class EmptyData(FormatError):
    """No data file content was supplied"""


class TruncatedData(FormatError):
    """The data file is shorter than the record geometry requires"""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        FormatError.__init__(
            self, f"data file holds {actual} bytes but {expected} bytes are required by the header"
        )


class ChannelOutOfRange(FormatError):
    """Requested analog channel number is outside [1, total]"""

    def __init__(self, channel_index, total):
        self.channel_index = channel_index
        self.total = total
        FormatError.__init__(self, f"analog channel {channel_index} is outside [1, {total}]")


class MissingSampleRate(FormatError):
    """The header carries no usable sampling rate entry"""


class UnsupportedDataFileType(FormatError):
    """The data file type declared in the header cannot be decoded"""
