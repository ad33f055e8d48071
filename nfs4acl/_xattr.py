# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Read and write the system.nfs4_acl xattr.

path may be a path-like object or an open file descriptor, as with the
os.*xattr() functions.  OSError is passed through unchanged: ENODATA or
EOPNOTSUPP when the filesystem has no NFS4 ACL, ENOENT, EACCES and so on.
"""

import os
import stat

from ._acl import NFS4ACL
from ._enums import NFS4_ACL_XATTR


def get_raw(path, *, follow_symlinks=True):
    """Return (payload bytes, is_directory) for path."""
    data = os.getxattr(path, NFS4_ACL_XATTR, follow_symlinks=follow_symlinks)
    st = os.stat(path, follow_symlinks=follow_symlinks)
    return data, stat.S_ISDIR(st.st_mode)


def set_raw(path, data, *, follow_symlinks=True):
    """Replace the existing payload on path.  Fails if none is present."""
    os.setxattr(path, NFS4_ACL_XATTR, data, os.XATTR_REPLACE,
                follow_symlinks=follow_symlinks)


def getacl(path, *, follow_symlinks=True) -> NFS4ACL:
    data, is_directory = get_raw(path, follow_symlinks=follow_symlinks)
    return NFS4ACL.from_bytes(data, is_directory)


def setacl(path, acl: NFS4ACL, *, follow_symlinks=True) -> None:
    if not isinstance(acl, NFS4ACL):
        raise TypeError(f'expected NFS4ACL, not {type(acl).__name__}')
    set_raw(path, bytes(acl), follow_symlinks=follow_symlinks)


def fgetacl(fd: int) -> NFS4ACL:
    return getacl(fd)


def fsetacl(fd: int, acl: NFS4ACL) -> None:
    setacl(fd, acl)
