# SPDX-License-Identifier: LGPL-3.0-or-later

from enum import IntEnum, IntFlag


# Size of a packing atom (big-endian u32) in bytes.
ATOM_SIZE = 4
U32_MAX = 0xFFFFFFFF

NFS4_ACL_XATTR = 'system.nfs4_acl'

WHO_OWNER = 'OWNER@'
WHO_GROUP = 'GROUP@'
WHO_EVERYONE = 'EVERYONE@'


# ── NFS4 enums ────────────────────────────────────────────────────────────────

class NFS4AceType(IntEnum):
    ALLOW = 0
    DENY = 1
    AUDIT = 2
    ALARM = 3


class NFS4Who(IntEnum):
    """Principal class of an ACE, derived from its who string."""
    NAMED = 0
    OWNER = 1
    GROUP = 2
    EVERYONE = 3


class NFS4Flag(IntFlag):
    FILE_INHERIT = 0x00000001
    DIRECTORY_INHERIT = 0x00000002
    NO_PROPAGATE_INHERIT = 0x00000004
    INHERIT_ONLY = 0x00000008
    SUCCESSFUL_ACCESS = 0x00000010
    FAILED_ACCESS = 0x00000020
    IDENTIFIER_GROUP = 0x00000040
    OWNER = 0x00000080
    GROUP = 0x00000100
    EVERYONE = 0x00000200


class NFS4Perm(IntFlag):
    """Access mask bits.

    READ_DATA, WRITE_DATA and APPEND_DATA are LIST_DIRECTORY, ADD_FILE and
    ADD_SUBDIRECTORY when the ACL belongs to a directory.  The bit is the
    same; only the label differs (see perm_name()).
    """
    READ_DATA = 0x00000001
    WRITE_DATA = 0x00000002
    APPEND_DATA = 0x00000004
    READ_NAMED_ATTRS = 0x00000008
    WRITE_NAMED_ATTRS = 0x00000010
    EXECUTE = 0x00000020
    DELETE_CHILD = 0x00000040
    READ_ATTRIBUTES = 0x00000080
    WRITE_ATTRIBUTES = 0x00000100
    DELETE = 0x00010000
    READ_ACL = 0x00020000
    WRITE_ACL = 0x00040000
    WRITE_OWNER = 0x00080000
    SYNCHRONIZE = 0x00100000


_DIRECTORY_PERM_NAMES = (
    (NFS4Perm.READ_DATA,   'LIST_DIRECTORY'),
    (NFS4Perm.WRITE_DATA,  'ADD_FILE'),
    (NFS4Perm.APPEND_DATA, 'ADD_SUBDIRECTORY'),
)

_SINGLE_PERMS = frozenset(int(p) for p in NFS4Perm)

_WHO_TYPES = (
    (WHO_OWNER,    NFS4Who.OWNER),
    (WHO_GROUP,    NFS4Who.GROUP),
    (WHO_EVERYONE, NFS4Who.EVERYONE),
)


def who_type_of(who: str) -> NFS4Who:
    """Classify a who string.  Exact, case-sensitive match only."""
    for token, who_type in _WHO_TYPES:
        if who == token:
            return who_type
    return NFS4Who.NAMED


def perm_name(bit: NFS4Perm, is_directory: bool = False) -> str:
    """Symbolic name of a single access mask bit in file or directory context.

    Raises ValueError unless bit is exactly one known NFS4Perm member.
    """
    if isinstance(bit, bool) or bit not in _SINGLE_PERMS:
        raise ValueError(f'not a single access mask bit: {bit!r}')
    if is_directory:
        for perm, name in _DIRECTORY_PERM_NAMES:
            if bit == perm:
                return name
    return NFS4Perm(bit).name
