import numpy as np


def readonly_buffer(data):
    """
    Return `data` as a flat, read-only numpy uint8 array.

    Immutable inputs (bytes, read-only memoryview, read-only arrays such as a
    np.memmap opened with mode='r') are wrapped without copy. Mutable inputs
    (bytearray, writable memoryview or array) are copied once, so that later
    changes made by the caller never reach decoding calls still using the
    returned view. To decode new content, call this function again.
    """
    if isinstance(data, np.ndarray):
        arr = np.ascontiguousarray(data).reshape(-1).view(np.uint8)
        if arr.flags.writeable:
            arr = arr.copy()
    else:
        view = memoryview(data)
        if view.readonly:
            arr = np.frombuffer(view.cast("B"), dtype=np.uint8)
        else:
            arr = np.frombuffer(view.tobytes(), dtype=np.uint8)
    arr.flags.writeable = False
    return arr
