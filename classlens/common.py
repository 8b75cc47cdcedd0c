"""
   Error handling routines
   Logging format
"""


logformat = '%(asctime)s | %(levelname)8s | %(name)10.10s | %(message)s'


class ClassFormatError(Exception):
    """ Raised when the bytes given do not form a valid class file.

    The optional offset is the position in the buffer at which the
    problem was detected.
    """
    def __init__(self, msg, offset=None):
        super().__init__(msg)
        self.msg = msg
        self.offset = offset

    def __repr__(self):
        return '"{}"'.format(self.msg)

    def __str__(self):
        if self.offset is None:
            return self.msg
        return '{} (at offset {})'.format(self.msg, self.offset)

    def print(self, file=None):
        """ Print the error with its kind """
        print('{}: {}'.format(self.__class__.__name__, self), file=file)


class BadMagic(ClassFormatError):
    pass


class TruncatedData(ClassFormatError):
    pass


class InvalidConstantPoolIndex(ClassFormatError):
    pass


class UnsupportedTag(ClassFormatError):
    pass


class MalformedDescriptor(ClassFormatError):
    pass


class UnsupportedOpcode(ClassFormatError):
    pass
