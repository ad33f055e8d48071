# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Big-endian u32 ("atom") primitives for the nfs4_acl xattr layout.

Bounds are the caller's responsibility: both accessors assume
offset + ATOM_SIZE <= len(buffer).
"""

import struct

from ._enums import ATOM_SIZE


_ATOM = struct.Struct('>I')


def read_u32_be(buffer, offset: int) -> int:
    return _ATOM.unpack_from(buffer, offset)[0]


def write_u32_be(buffer: bytearray, offset: int, value: int) -> None:
    _ATOM.pack_into(buffer, offset, value)


def padded_length(byte_length: int) -> int:
    """Round byte_length up to a whole number of atoms.

    Exact multiples are returned unchanged, so a 4-byte who string takes
    one atom, not two.
    """
    return -(-byte_length // ATOM_SIZE) * ATOM_SIZE
