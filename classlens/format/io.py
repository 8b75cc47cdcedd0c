""" Base reader class.

Reading file formats is often more of the same. This module contains commonly
required logic to process binary files.
"""

import struct
from ..common import TruncatedData


class ByteCursor:
    """ Sequential big endian reader over a fixed buffer.

    Every read checks that enough bytes are left, so the cursor never
    moves past the end of the buffer.
    """

    def __init__(self, data, offset=0):
        self.data = bytes(data)
        self.pos = 0
        # Offset of this buffer within the enclosing file, used in errors.
        self.offset = offset

    @property
    def remaining(self):
        return len(self.data) - self.pos

    @property
    def at_end(self):
        return self.pos >= len(self.data)

    def read_fmt(self, fmt):
        size = struct.calcsize(fmt)
        data = self.read_data(size)
        return struct.unpack(fmt, data)[0]

    def read_data(self, size):
        if size < 0:
            raise ValueError('Cannot read {} bytes'.format(size))
        if size > self.remaining:
            raise TruncatedData(
                'Need {} bytes, only {} left'.format(size, self.remaining),
                offset=self.offset + self.pos)
        data = self.data[self.pos:self.pos + size]
        self.pos += size
        return data

    def skip(self, size):
        self.read_data(size)

    def read_u8(self):
        return self.read_data(1)[0]

    def read_i8(self):
        return self.read_fmt('>b')

    def read_u16(self):
        return self.read_fmt('>H')

    def read_i16(self):
        return self.read_fmt('>h')

    def read_u32(self):
        return self.read_fmt('>I')

    def read_i32(self):
        return self.read_fmt('>i')

    def read_i64(self):
        return self.read_fmt('>q')

    def read_f32(self):
        return self.read_fmt('>f')

    def read_f64(self):
        return self.read_fmt('>d')
