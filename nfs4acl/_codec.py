# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Binary codec for the system.nfs4_acl xattr payload.

Layout, every field a big-endian u32 atom:

    [naces]
    { [type][flags][access_mask][who_len][who bytes, zero padded to an atom] } * naces

There is no magic, version or checksum, so every length is checked against
the buffer before it is used.
"""

from ._ace import WHO_ENCODING, WHO_ERRORS, NFS4Ace, who_bytes
from ._atom import padded_length, read_u32_be, write_u32_be
from ._enums import ATOM_SIZE
from ._errors import (
    BufferTooShortError,
    TrailingDataError,
    TruncatedEntryError,
    WhoLengthError,
)


# type, flags, access_mask, who_len
_ACE_HDR_SIZE = 4 * ATOM_SIZE


def unpack_aces(buffer):
    """Decode an xattr payload into a list of NFS4Ace.

    Raises a MalformedBufferError subclass at the first inconsistency; no
    partial result is returned.
    """
    if not isinstance(buffer, (bytes, bytearray, memoryview)):
        raise TypeError(f'expected bytes-like object, not {type(buffer).__name__}')

    data = bytes(buffer)
    size = len(data)
    if size < ATOM_SIZE:
        raise BufferTooShortError(
            f'buffer of {size} bytes cannot hold the entry count', 0)

    naces = read_u32_be(data, 0)
    cur = ATOM_SIZE
    aces = []

    for idx in range(naces):
        if cur >= size:
            raise TruncatedEntryError(
                f'entry {idx} of {naces} starts past end of buffer', cur)
        if cur + _ACE_HDR_SIZE > size:
            raise TruncatedEntryError(
                f'entry {idx}: {size - cur} bytes left, header needs '
                f'{_ACE_HDR_SIZE}', cur)

        ace_type = read_u32_be(data, cur)
        ace_flags = read_u32_be(data, cur + ATOM_SIZE)
        access_mask = read_u32_be(data, cur + 2 * ATOM_SIZE)
        who_len = read_u32_be(data, cur + 3 * ATOM_SIZE)
        cur += _ACE_HDR_SIZE

        if who_len > size - cur:
            raise WhoLengthError(
                f'entry {idx}: who length {who_len} exceeds remaining '
                f'{size - cur} bytes', cur)
        if padded_length(who_len) > size - cur:
            raise TruncatedEntryError(
                f'entry {idx}: who string padding missing', cur)

        who = data[cur:cur + who_len].decode(WHO_ENCODING, WHO_ERRORS)
        cur += padded_length(who_len)

        aces.append(NFS4Ace(ace_type, ace_flags, access_mask, who))

    if cur != size:
        raise TrailingDataError(
            f'{size - cur} bytes follow the last of {naces} entries', cur)

    return aces


def packed_size(aces):
    """Exact number of bytes pack_aces() will produce."""
    size = ATOM_SIZE
    for ace in aces:
        size += _ACE_HDR_SIZE + padded_length(len(who_bytes(ace.who)))
    return size


def pack_aces(aces):
    """Encode ACEs, in order, into an xattr payload.  Padding is zeroed."""
    aces = list(aces)
    buf = bytearray(packed_size(aces))

    write_u32_be(buf, 0, len(aces))
    cur = ATOM_SIZE

    for ace in aces:
        who = who_bytes(ace.who)
        write_u32_be(buf, cur, int(ace.ace_type))
        write_u32_be(buf, cur + ATOM_SIZE, int(ace.ace_flags))
        write_u32_be(buf, cur + 2 * ATOM_SIZE, int(ace.access_mask))
        write_u32_be(buf, cur + 3 * ATOM_SIZE, len(who))
        cur += _ACE_HDR_SIZE
        buf[cur:cur + len(who)] = who
        cur += padded_length(len(who))

    return bytes(buf)
