""" Utilities to dump binary data in hex """


def chunks(data, size):
    """ Split data into pieces of at most size bytes """
    if size < 1:
        raise ValueError("Chunk size must be at least 1, not {}".format(size))
    for i in range(0, len(data), size):
        yield data[i : i + size]


def hex_listing(data, width=16):
    """ Render bytes as rows of uppercase hex pairs.

    For example:

        >>> from classlens.utils.hexdump import hex_listing
        >>> print(hex_listing(bytes(range(10)), width=4))
        00 01 02 03
        04 05 06 07
        08 09

    """
    return "\n".join(
        " ".join("{:02X}".format(b) for b in piece)
        for piece in chunks(data, size=width)
    )


def hexdump(data, address=0, width=16, file=None):
    """ Hexdump of the given bytes, with offsets and printable characters.

    For example:

        >>> from classlens.utils.hexdump import hexdump
        >>> data = bytes(range(10))
        >>> hexdump(data, width=4)
        00000000  00 01 02 03  |....|
        00000004  04 05 06 07  |....|
        00000008  08 09        |..|

    """
    hex_chars_width = width * 3 - 1 + ((width - 1) // 8)
    for piece in chunks(data, size=width):
        hex_chars = []
        for part8 in chunks(piece, size=8):
            hex_chars.append(" ".join("{:02x}".format(j) for j in part8))
        ints = "  ".join(hex_chars)
        chars = "".join(chr(j) if j in range(33, 127) else "." for j in piece)
        line = "{:08x}  {}  |{}|".format(
            address, ints.ljust(hex_chars_width), chars
        )
        print(line, file=file)
        address += width
