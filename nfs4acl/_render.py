# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Conventional TYPE:FLAGS:WHO:MASK text form of NFS4 ACEs.
"""

from ._ace import NFS4Ace
from ._enums import NFS4AceType, NFS4Flag, NFS4Perm


_TYPE_CHARS = (
    (NFS4AceType.ALLOW, 'A', 'ALLOW'),
    (NFS4AceType.DENY,  'D', 'DENY'),
    (NFS4AceType.AUDIT, 'U', 'AUDIT'),
    (NFS4AceType.ALARM, 'L', 'ALARM'),
)

_FLAG_CHARS = (
    (NFS4Flag.FILE_INHERIT,         'f'),
    (NFS4Flag.DIRECTORY_INHERIT,    'd'),
    (NFS4Flag.NO_PROPAGATE_INHERIT, 'n'),
    (NFS4Flag.INHERIT_ONLY,         'i'),
    (NFS4Flag.SUCCESSFUL_ACCESS,    'S'),
    (NFS4Flag.FAILED_ACCESS,        'F'),
    (NFS4Flag.IDENTIFIER_GROUP,     'g'),
    (NFS4Flag.OWNER,                'O'),
    (NFS4Flag.GROUP,                'G'),
    (NFS4Flag.EVERYONE,             'E'),
)

# list-directory, create-file, create-subdirectory, delete-child
_DIR_PERM_CHARS = (
    (NFS4Perm.READ_DATA,    'r'),
    (NFS4Perm.WRITE_DATA,   'w'),
    (NFS4Perm.APPEND_DATA,  'a'),
    (NFS4Perm.DELETE_CHILD, 'D'),
)

_FILE_PERM_CHARS = (
    (NFS4Perm.READ_DATA,   'r'),
    (NFS4Perm.WRITE_DATA,  'w'),
    (NFS4Perm.APPEND_DATA, 'a'),
)

_COMMON_PERM_CHARS = (
    (NFS4Perm.DELETE,            'd'),
    (NFS4Perm.EXECUTE,           'x'),
    (NFS4Perm.READ_ATTRIBUTES,   't'),
    (NFS4Perm.WRITE_ATTRIBUTES,  'T'),
    (NFS4Perm.READ_NAMED_ATTRS,  'n'),
    (NFS4Perm.WRITE_NAMED_ATTRS, 'N'),
    (NFS4Perm.READ_ACL,          'c'),
    (NFS4Perm.WRITE_ACL,         'C'),
    (NFS4Perm.WRITE_OWNER,       'o'),
    (NFS4Perm.SYNCHRONIZE,       'y'),
)

_TYPE_FROM_STR = {s: atype for atype, short, verbose in _TYPE_CHARS
                  for s in (short, verbose)}

_FLAG_FROM_CHAR = {c: bit for bit, c in _FLAG_CHARS}
_PERM_FROM_CHAR = {c: bit for bit, c in _DIR_PERM_CHARS + _COMMON_PERM_CHARS}


def type_str(ace_type, verbose=False):
    for atype, short, name in _TYPE_CHARS:
        if ace_type == atype:
            return name if verbose else short
    return ''


def flag_str(flags):
    return ''.join(c for bit, c in _FLAG_CHARS if flags & bit)


def perm_str(mask, is_directory=False):
    head = _DIR_PERM_CHARS if is_directory else _FILE_PERM_CHARS
    return ''.join(c for bit, c in head + _COMMON_PERM_CHARS if mask & bit)


def render_ace(ace: NFS4Ace, verbose: bool = False, is_directory: bool = False) -> str:
    """Return ace as TYPE:FLAGS:WHO:MASK.  Unset bits are omitted."""
    return ':'.join((
        type_str(ace.ace_type, verbose),
        flag_str(ace.ace_flags),
        ace.who,
        perm_str(ace.access_mask, is_directory),
    ))


def render_acl(acl, verbose: bool = False) -> str:
    return '\n'.join(render_ace(ace, verbose, acl.is_directory) for ace in acl)


# ── parsing ───────────────────────────────────────────────────────────────────

def parse_flags(s):
    flags = NFS4Flag(0)
    for ch in s:
        if ch == '-':
            continue
        if ch not in _FLAG_FROM_CHAR:
            raise ValueError(f'invalid NFS4 flag char: {ch!r}')
        flags |= _FLAG_FROM_CHAR[ch]
    return flags


def parse_perms(s):
    mask = NFS4Perm(0)
    for ch in s:
        if ch == '-':
            continue
        if ch not in _PERM_FROM_CHAR:
            raise ValueError(f'invalid NFS4 perm char: {ch!r}')
        mask |= _PERM_FROM_CHAR[ch]
    return mask


def parse_ace(s: str) -> NFS4Ace:
    """Parse TYPE:FLAGS:WHO:MASK back into an NFS4Ace.

    WHO is everything between the second and the last colon, so named
    principals may themselves contain colons.
    """
    parts = s.strip().split(':', 2)
    if len(parts) != 3 or ':' not in parts[2]:
        raise ValueError(f'invalid NFS4 ACE: {s!r}')
    type_part, flags_part, rest = parts
    who, perms_part = rest.rsplit(':', 1)

    if type_part not in _TYPE_FROM_STR:
        raise ValueError(f'invalid NFS4 ACE type: {type_part!r}')

    return NFS4Ace(_TYPE_FROM_STR[type_part], parse_flags(flags_part),
                   parse_perms(perms_part), who)
