# SPDX-License-Identifier: LGPL-3.0-or-later

from typing import Iterable

from ._ace import NFS4Ace, _check_u32
from ._codec import pack_aces, packed_size, unpack_aces
from ._enums import NFS4Perm, NFS4Who
from ._errors import InvalidTargetError
from ._render import render_acl


_TARGETABLE_WHO = (NFS4Who.OWNER, NFS4Who.GROUP, NFS4Who.EVERYONE)


def _check_who_type(who_type):
    if isinstance(who_type, bool):
        raise InvalidTargetError(f'unsupported who type: {who_type!r}')
    try:
        wt = NFS4Who(who_type)
    except (TypeError, ValueError):
        raise InvalidTargetError(f'unsupported who type: {who_type!r}') from None
    if wt not in _TARGETABLE_WHO:
        raise InvalidTargetError(
            f'{wt.name} cannot be used as a target; use the by-who form')
    return wt


class NFS4ACL:
    """Ordered list of NFS4Ace plus the directory/file discriminator.

    Order is significant (first match wins) and is preserved by every
    operation, including decode/encode round trips.  Instances are not
    thread-safe.
    """

    __slots__ = ('_aces', '_is_directory')

    def __init__(self, aces: Iterable[NFS4Ace] = (), is_directory: bool = False):
        self._aces = []
        self._is_directory = bool(is_directory)
        for ace in aces:
            self.append(ace)

    @classmethod
    def from_aces(cls, aces: Iterable[NFS4Ace], is_directory: bool = False) -> 'NFS4ACL':
        return cls(aces, is_directory)

    @classmethod
    def from_bytes(cls, data, is_directory: bool = False) -> 'NFS4ACL':
        """Decode a system.nfs4_acl payload.  Raises MalformedBufferError."""
        return cls(unpack_aces(data), is_directory)

    @property
    def is_directory(self) -> bool:
        return self._is_directory

    @property
    def aces(self) -> list[NFS4Ace]:
        return list(self._aces)

    def append(self, ace: NFS4Ace) -> None:
        if not isinstance(ace, NFS4Ace):
            raise TypeError(f'expected NFS4Ace, not {type(ace).__name__}')
        self._aces.append(ace)

    def __len__(self):
        return len(self._aces)

    def __iter__(self):
        return iter(list(self._aces))

    def __bytes__(self):
        return pack_aces(self._aces)

    def __eq__(self, other):
        if not isinstance(other, NFS4ACL):
            return NotImplemented
        return (self._is_directory == other._is_directory and
                self._aces == other._aces)

    __hash__ = None

    def __repr__(self):
        kind = 'dir' if self._is_directory else 'file'
        return f'NFS4ACL({kind}, aces={self._aces!r})'

    def xattr_size(self) -> int:
        return packed_size(self._aces)

    def render(self, verbose: bool = False) -> str:
        return render_acl(self, verbose)

    # ── access mask mutation ─────────────────────────────────────────────────

    def _update(self, op, mask, selected):
        # Validate before touching anything so a bad operand leaves the
        # ACL unchanged.
        _check_u32(mask, 'mask')
        hits = [ace for ace in self._aces if selected(ace)]
        for ace in hits:
            op(ace, mask)
        return len(hits)

    def _by_who_type(self, op, who_type, mask):
        wt = _check_who_type(who_type)
        return self._update(op, mask, lambda ace: ace.who_type == wt)

    def _by_who(self, op, who, mask):
        return self._update(op, mask, lambda ace: ace.who == who)

    def apply_access_mask(self, mask) -> int:
        """OR mask into every entry.  Returns the number of entries touched."""
        return self._update(NFS4Ace.apply_access_mask, mask, lambda ace: True)

    def remove_access_mask(self, mask) -> int:
        return self._update(NFS4Ace.remove_access_mask, mask, lambda ace: True)

    def set_access_mask(self, mask) -> int:
        return self._update(NFS4Ace.set_access_mask, mask, lambda ace: True)

    def apply_access_mask_by_who_type(self, who_type, mask) -> int:
        """OR mask into entries whose derived who_type matches.

        NAMED and unknown values raise InvalidTargetError.
        """
        return self._by_who_type(NFS4Ace.apply_access_mask, who_type, mask)

    def remove_access_mask_by_who_type(self, who_type, mask) -> int:
        return self._by_who_type(NFS4Ace.remove_access_mask, who_type, mask)

    def set_access_mask_by_who_type(self, who_type, mask) -> int:
        return self._by_who_type(NFS4Ace.set_access_mask, who_type, mask)

    def apply_access_mask_by_who(self, who: str, mask) -> int:
        """OR mask into entries whose who string is exactly who.

        Well-known tokens such as 'OWNER@' are matched literally like any
        other string.
        """
        return self._by_who(NFS4Ace.apply_access_mask, who, mask)

    def remove_access_mask_by_who(self, who: str, mask) -> int:
        return self._by_who(NFS4Ace.remove_access_mask, who, mask)

    def set_access_mask_by_who(self, who: str, mask) -> int:
        return self._by_who(NFS4Ace.set_access_mask, who, mask)

    def set_write(self) -> int:
        return self.apply_access_mask(NFS4Perm.WRITE_DATA)

    def clear_write(self) -> int:
        return self.remove_access_mask(NFS4Perm.WRITE_DATA)

    # ── flag mutation ────────────────────────────────────────────────────────

    def apply_flags(self, flags) -> int:
        return self._update(NFS4Ace.apply_flags, flags, lambda ace: True)

    def remove_flags(self, flags) -> int:
        return self._update(NFS4Ace.remove_flags, flags, lambda ace: True)

    def set_flags(self, flags) -> int:
        return self._update(NFS4Ace.set_flags, flags, lambda ace: True)


def decode(buffer, is_directory: bool = False) -> NFS4ACL:
    return NFS4ACL.from_bytes(buffer, is_directory)


def encode(acl: NFS4ACL) -> bytes:
    return bytes(acl)
