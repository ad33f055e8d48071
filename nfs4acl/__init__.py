# SPDX-License-Identifier: LGPL-3.0-or-later
"""
NFSv4 ACL codec for the system.nfs4_acl extended attribute.

Decodes the attribute payload into NFS4ACL / NFS4Ace objects, mutates
access masks and flags in place, encodes back to bytes and renders the
conventional TYPE:FLAGS:WHO:MASK text form.
"""

from ._enums import (
    ATOM_SIZE,
    NFS4_ACL_XATTR,
    WHO_EVERYONE,
    WHO_GROUP,
    WHO_OWNER,
    NFS4AceType,
    NFS4Flag,
    NFS4Perm,
    NFS4Who,
    perm_name,
    who_type_of,
)
from ._errors import (
    BufferTooShortError,
    InvalidTargetError,
    MalformedBufferError,
    TrailingDataError,
    TruncatedEntryError,
    WhoLengthError,
)
from ._atom import padded_length, read_u32_be, write_u32_be
from ._ace import NFS4Ace
from ._acl import NFS4ACL, decode, encode
from ._render import parse_ace, render_ace, render_acl
from ._xattr import fgetacl, fsetacl, get_raw, getacl, set_raw, setacl


__version__ = '0.1.0'

__all__ = [
    'ATOM_SIZE', 'NFS4_ACL_XATTR', 'WHO_OWNER', 'WHO_GROUP', 'WHO_EVERYONE',
    'NFS4AceType', 'NFS4Flag', 'NFS4Perm', 'NFS4Who', 'perm_name', 'who_type_of',
    'MalformedBufferError', 'BufferTooShortError', 'TruncatedEntryError',
    'WhoLengthError', 'TrailingDataError', 'InvalidTargetError',
    'padded_length', 'read_u32_be', 'write_u32_be',
    'NFS4Ace', 'NFS4ACL', 'decode', 'encode',
    'render_ace', 'render_acl', 'parse_ace',
    'get_raw', 'set_raw', 'getacl', 'setacl', 'fgetacl', 'fsetacl',
]
