# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Tests for the system.nfs4_acl xattr bridge.

Most tests run against the in-memory xattr_store fixture.  Live tests need
NFS4ACL_TEST_PATH (see conftest.py) and are skipped otherwise.
"""

import errno
import os

import pytest
import nfs4acl as n


_OWNER_RWX = n.NFS4ACL.from_aces([
    n.NFS4Ace(n.NFS4AceType.ALLOW, 0,
              n.NFS4Perm.READ_DATA | n.NFS4Perm.WRITE_DATA | n.NFS4Perm.EXECUTE,
              'OWNER@'),
    n.NFS4Ace(n.NFS4AceType.ALLOW, 0, n.NFS4Perm.READ_DATA, 'EVERYONE@'),
])


def _touch(path):
    with open(path, 'w'):
        pass
    return str(path)


# ═══════════════════════════════════════════════════════════════════════════
# get_raw / set_raw
# ═══════════════════════════════════════════════════════════════════════════

def test_get_raw_file(xattr_store, tmp_path):
    path = _touch(tmp_path / 'f')
    xattr_store.put(path, bytes(_OWNER_RWX))
    data, is_directory = n.get_raw(path)
    assert data == bytes(_OWNER_RWX)
    assert is_directory is False


def test_get_raw_directory(xattr_store, tmp_path):
    path = str(tmp_path / 'd')
    os.mkdir(path)
    xattr_store.put(path, bytes(_OWNER_RWX))
    _, is_directory = n.get_raw(path)
    assert is_directory is True


def test_set_raw_uses_replace(xattr_store, tmp_path):
    path = _touch(tmp_path / 'f')
    xattr_store.put(path, b'\0\0\0\0')
    n.set_raw(path, bytes(_OWNER_RWX))
    assert xattr_store.get(path) == bytes(_OWNER_RWX)
    assert xattr_store.writes[-1][1] == os.XATTR_REPLACE


def test_set_raw_without_existing_acl_fails(xattr_store, tmp_path):
    path = _touch(tmp_path / 'f')
    with pytest.raises(OSError) as exc:
        n.set_raw(path, bytes(_OWNER_RWX))
    assert exc.value.errno == errno.ENODATA


def test_get_raw_missing_path(xattr_store, tmp_path):
    with pytest.raises(FileNotFoundError):
        n.get_raw(str(tmp_path / 'missing'))


def test_get_raw_no_acl_propagates_oserror(xattr_store, tmp_path):
    path = _touch(tmp_path / 'f')
    with pytest.raises(OSError) as exc:
        n.get_raw(path)
    assert exc.value.errno == errno.ENODATA


# ═══════════════════════════════════════════════════════════════════════════
# getacl / setacl
# ═══════════════════════════════════════════════════════════════════════════

def test_getacl_decodes(xattr_store, tmp_path):
    path = _touch(tmp_path / 'f')
    xattr_store.put(path, bytes(_OWNER_RWX))
    acl = n.getacl(path)
    assert acl.aces == _OWNER_RWX.aces
    assert acl.is_directory is False


def test_getacl_malformed_payload(xattr_store, tmp_path):
    path = _touch(tmp_path / 'f')
    xattr_store.put(path, b'\0\0\0\x01')
    with pytest.raises(n.MalformedBufferError):
        n.getacl(path)


def test_setacl_round_trip(xattr_store, tmp_path):
    path = str(tmp_path / 'd')
    os.mkdir(path)
    xattr_store.put(path, bytes(_OWNER_RWX))

    acl = n.getacl(path)
    acl.remove_access_mask_by_who_type(n.NFS4Who.OWNER, n.NFS4Perm.WRITE_DATA)
    n.setacl(path, acl)

    again = n.getacl(path)
    assert again.is_directory is True
    assert n.NFS4Perm.WRITE_DATA not in again.aces[0].access_mask
    assert again.aces[1] == _OWNER_RWX.aces[1]


def test_setacl_wrong_type_raises(xattr_store, tmp_path):
    path = _touch(tmp_path / 'f')
    with pytest.raises(TypeError):
        n.setacl(path, b'\0\0\0\0')


def test_fgetacl_fsetacl(xattr_store, tmp_path):
    path = _touch(tmp_path / 'f')
    xattr_store.put(path, bytes(_OWNER_RWX))
    fd = os.open(path, os.O_RDONLY)
    try:
        acl = n.fgetacl(fd)
        acl.set_access_mask(n.NFS4Perm.READ_DATA)
        n.fsetacl(fd, acl)
    finally:
        os.close(fd)
    assert all(a.access_mask == n.NFS4Perm.READ_DATA for a in n.getacl(path))


# ═══════════════════════════════════════════════════════════════════════════
# Live NFSv4 ACL filesystem
# ═══════════════════════════════════════════════════════════════════════════

def test_live_getacl_file(nfs4_dir):
    path = _touch(os.path.join(nfs4_dir, 'testfile'))
    acl = n.getacl(path)
    assert acl.is_directory is False
    assert len(acl) > 0


def test_live_reencode_is_byte_identical(nfs4_dir):
    path = _touch(os.path.join(nfs4_dir, 'testfile'))
    data, _ = n.get_raw(path)
    assert n.encode(n.decode(data)) == data


def test_live_setacl_round_trip(nfs4_dir):
    path = os.path.join(nfs4_dir, 'testdir')
    os.mkdir(path)
    acl = n.getacl(path)
    acl.apply_access_mask_by_who_type(n.NFS4Who.OWNER, n.NFS4Perm.WRITE_ACL)
    n.setacl(path, acl)
    again = n.getacl(path)
    assert again.is_directory is True
    owner = [a for a in again if a.who_type == n.NFS4Who.OWNER]
    assert owner
    assert any(n.NFS4Perm.WRITE_ACL in a.access_mask for a in owner)
