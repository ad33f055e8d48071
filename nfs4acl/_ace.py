# SPDX-License-Identifier: LGPL-3.0-or-later

import dataclasses

from ._enums import U32_MAX, NFS4AceType, NFS4Flag, NFS4Perm, NFS4Who, who_type_of


# Who strings are UTF-8 by convention but the kernel stores raw bytes;
# surrogateescape keeps undecodable bytes intact through a round trip.
WHO_ENCODING = 'utf-8'
WHO_ERRORS = 'surrogateescape'


def who_bytes(who):
    return who.encode(WHO_ENCODING, WHO_ERRORS)


def _check_u32(value, what):
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f'{what} must be an int, not {type(value).__name__}')
    if not 0 <= value <= U32_MAX:
        raise ValueError(f'{what} out of u32 range: {value:#x}')
    return value


def _coerce_ace_type(value):
    _check_u32(value, 'ace_type')
    try:
        return NFS4AceType(value)
    except ValueError:
        # Unknown codes are kept as-is; decode does not judge semantics.
        return value


def _check_who(value):
    if not isinstance(value, str):
        raise TypeError(f'who must be str, not {type(value).__name__}')
    try:
        who_bytes(value)
    except UnicodeEncodeError as e:
        raise ValueError(f'who is not encodable: {value!r}') from e
    return value


_FIELD_CHECKS = {
    'ace_type': _coerce_ace_type,
    'ace_flags': lambda v: NFS4Flag(_check_u32(v, 'ace_flags')),
    'access_mask': lambda v: NFS4Perm(_check_u32(v, 'access_mask')),
    'who': _check_who,
}


@dataclasses.dataclass(slots=True)
class NFS4Ace:
    """NFS4 Access Control Entry.

    Fields: ace_type (NFS4AceType, or a bare int for codes outside the
    enum), ace_flags (NFS4Flag), access_mask (NFS4Perm), who (str).

    Every assignment is validated, so an entry that exists can always be
    encoded.  who_type is computed from who on every read and cannot be
    assigned.
    """
    ace_type: NFS4AceType
    ace_flags: NFS4Flag
    access_mask: NFS4Perm
    who: str

    def __setattr__(self, name, value):
        check = _FIELD_CHECKS.get(name)
        if check is not None:
            value = check(value)
        object.__setattr__(self, name, value)

    @property
    def who_type(self) -> NFS4Who:
        return who_type_of(self.who)

    # ── access mask ──────────────────────────────────────────────────────────

    def apply_access_mask(self, mask):
        """Set the bits in mask; other bits are left alone."""
        self.access_mask = NFS4Perm(int(self.access_mask) | _check_u32(mask, 'mask'))

    def remove_access_mask(self, mask):
        """Clear the bits in mask; other bits are left alone."""
        self.access_mask = NFS4Perm(int(self.access_mask) & ~_check_u32(mask, 'mask') & U32_MAX)

    def set_access_mask(self, mask):
        self.access_mask = NFS4Perm(_check_u32(mask, 'mask'))

    # ── flags ────────────────────────────────────────────────────────────────

    def apply_flags(self, flags):
        self.ace_flags = NFS4Flag(int(self.ace_flags) | _check_u32(flags, 'flags'))

    def remove_flags(self, flags):
        self.ace_flags = NFS4Flag(int(self.ace_flags) & ~_check_u32(flags, 'flags') & U32_MAX)

    def set_flags(self, flags):
        self.ace_flags = NFS4Flag(_check_u32(flags, 'flags'))
