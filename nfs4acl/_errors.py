# SPDX-License-Identifier: LGPL-3.0-or-later


class MalformedBufferError(ValueError):
    """Raised when an nfs4_acl xattr payload cannot be decoded.

    offset is the buffer position at which the problem was detected.
    """

    def __init__(self, msg, offset=0):
        super().__init__(msg)
        self.offset = offset


class BufferTooShortError(MalformedBufferError):
    """Buffer cannot hold even the entry count."""


class TruncatedEntryError(MalformedBufferError):
    """Buffer ends inside a declared entry."""


class WhoLengthError(MalformedBufferError):
    """who_length runs past the end of the buffer."""


class TrailingDataError(MalformedBufferError):
    """Bytes remain after the last declared entry."""


class InvalidTargetError(ValueError):
    """Mutation targeted by a who type that cannot select entries."""
