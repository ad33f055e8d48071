# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Pytest fixtures for nfs4acl tests.

Most tests never touch a real NFSv4 ACL.  The xattr_store fixture swaps
os.getxattr / os.setxattr for an in-memory store keyed by resolved path so
the OS bridge and the command-line tools can run against plain files in a
tmpdir.

Live tests use nfs4_dir, which yields a scratch directory below
$NFS4ACL_TEST_PATH (a mount with NFSv4 ACL support, e.g. an NFS 4.x
client mount).  Without that variable live tests are skipped.
"""

import errno
import os
import shutil
import tempfile

import pytest


# ── in-memory xattr store ────────────────────────────────────────────────────

class _XattrStore:
    """Stand-in for the kernel's xattr table, keyed by (realpath, name)."""

    def __init__(self):
        self._data = {}
        self.writes = []

    @staticmethod
    def _key(path, name):
        if isinstance(path, int):
            path = os.readlink(f'/proc/self/fd/{path}')
        return os.path.realpath(os.fspath(path)), name

    def put(self, path, data, name='system.nfs4_acl'):
        self._data[self._key(path, name)] = bytes(data)

    def get(self, path, name='system.nfs4_acl'):
        return self._data[self._key(path, name)]

    def getxattr(self, path, attribute, *, follow_symlinks=True):
        key = self._key(path, attribute)
        if not os.path.lexists(key[0]):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), key[0])
        try:
            return self._data[key]
        except KeyError:
            raise OSError(errno.ENODATA, os.strerror(errno.ENODATA), key[0]) from None

    def setxattr(self, path, attribute, value, flags=0, *, follow_symlinks=True):
        key = self._key(path, attribute)
        if not os.path.lexists(key[0]):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), key[0])
        if flags & os.XATTR_REPLACE and key not in self._data:
            raise OSError(errno.ENODATA, os.strerror(errno.ENODATA), key[0])
        if flags & os.XATTR_CREATE and key in self._data:
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), key[0])
        self._data[key] = bytes(value)
        self.writes.append((key[0], flags))


@pytest.fixture(scope='function')
def xattr_store(monkeypatch):
    """Patch os.getxattr / os.setxattr with an in-memory store."""
    store = _XattrStore()
    monkeypatch.setattr(os, 'getxattr', store.getxattr)
    monkeypatch.setattr(os, 'setxattr', store.setxattr)
    return store


# ── live NFSv4 ACL directory ─────────────────────────────────────────────────

@pytest.fixture(scope='function')
def nfs4_dir():
    """
    Scratch directory on a filesystem with NFSv4 ACLs, removed afterwards.
    Skips when NFS4ACL_TEST_PATH is unset.
    """
    base = os.environ.get('NFS4ACL_TEST_PATH')
    if not base:
        pytest.skip('NFS4ACL_TEST_PATH not set')
    path = tempfile.mkdtemp(prefix='nfs4acl_test_', dir=base)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
