# SPDX-License-Identifier: LGPL-3.0-or-later

import argparse
import os
import sys

import nfs4acl as n
from nfs4acl._render import parse_perms

from ._getfacl import _walk


_PROG = 'nfs4_setfacl'

_WHO_TYPE_FROM_STR = {
    'owner':    n.NFS4Who.OWNER,
    'group':    n.NFS4Who.GROUP,
    'everyone': n.NFS4Who.EVERYONE,
}


# ── entry text splitting ──────────────────────────────────────────────────────

def _split_entries(text):
    result = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        result.append(line)
    return result


def _parse_acl_file(text):
    return [n.parse_ace(e) for e in _split_entries(text)]


# ── ACL modification ──────────────────────────────────────────────────────────

def _pick_mask_op(acl, op, who, who_type):
    """Return the NFS4ACL method implementing op for the chosen target."""
    if who is not None:
        return getattr(acl, f'{op}_access_mask_by_who'), who
    if who_type is not None:
        return getattr(acl, f'{op}_access_mask_by_who_type'), who_type
    return getattr(acl, f'{op}_access_mask'), None


def _apply_mask_ops(acl, mask_ops, who, who_type):
    """Apply (op, mask) pairs in order.  Returns entries touched."""
    touched = 0
    for op, mask in mask_ops:
        method, target = _pick_mask_op(acl, op, who, who_type)
        if target is None:
            touched += method(mask)
        else:
            touched += method(target, mask)
    return touched


def _do_setfacl_path(path, mask_ops, who, who_type, acl_file_aces):
    """Read, modify and write back the ACL on path.  Returns the new ACL."""
    acl = n.getacl(path, follow_symlinks=False)

    if acl_file_aces is not None:
        acl = n.NFS4ACL.from_aces(
            [n.NFS4Ace(a.ace_type, a.ace_flags, a.access_mask, a.who)
             for a in acl_file_aces],
            acl.is_directory,
        )

    _apply_mask_ops(acl, mask_ops, who, who_type)
    n.setacl(path, acl, follow_symlinks=False)
    return acl


# ── main ──────────────────────────────────────────────────────────────────────

def _collect_mask_ops(args):
    ops = []
    for op, values in (('remove', args.remove), ('apply', args.apply),
                       ('set', args.set)):
        for value in values:
            ops.append((op, parse_perms(value)))
    return ops


def _error(path, e):
    print(f'{_PROG}: {path}: {e}', file=sys.stderr)


def main(argv=None):
    ap = argparse.ArgumentParser(
        prog=_PROG,
        description='Modify NFSv4 ACL entries on files.',
    )
    ap.add_argument('-R', '--recursive', action='store_true',
                    help='Process directories recursively; '
                         'does not follow symlinks or cross device boundaries')
    ap.add_argument('-a', '--apply', action='append', default=[],
                    metavar='perms',
                    help='Grant permission chars (e.g. "rwx") on matching '
                         'entries; applied after -x')
    ap.add_argument('-x', '--remove', action='append', default=[],
                    metavar='perms',
                    help='Revoke permission chars on matching entries')
    ap.add_argument('-s', '--set', action='append', default=[],
                    metavar='perms',
                    help='Overwrite the access mask of matching entries; '
                         'applied last')
    target = ap.add_mutually_exclusive_group()
    target.add_argument('--who', default=None,
                        help='Only modify entries whose who string is '
                             'exactly this value')
    target.add_argument('--who-type', default=None,
                        choices=sorted(_WHO_TYPE_FROM_STR),
                        help='Only modify entries for this special principal')
    ap.add_argument('--set-acl', dest='acl_file', default=None,
                    metavar='file',
                    help='Replace the entire ACL with entries from file '
                         '(- for stdin), one TYPE:FLAGS:WHO:MASK per line; '
                         'applied before -x/-a/-s')
    ap.add_argument('path', nargs='+')
    args = ap.parse_args(argv)

    try:
        mask_ops = _collect_mask_ops(args)
    except ValueError as e:
        ap.error(str(e))

    if not mask_ops and args.acl_file is None:
        ap.error('nothing to do: give -a, -x, -s or --set-acl')

    who_type = None
    if args.who_type is not None:
        who_type = _WHO_TYPE_FROM_STR[args.who_type]

    acl_file_aces = None
    if args.acl_file is not None:
        if args.acl_file == '-':
            text = sys.stdin.read()
        else:
            with open(args.acl_file) as f:
                text = f.read()
        try:
            acl_file_aces = _parse_acl_file(text)
        except ValueError as e:
            ap.error(f'{args.acl_file}: {e}')

    rc = 0
    for path in args.path:
        try:
            _do_setfacl_path(path, mask_ops, args.who, who_type,
                             acl_file_aces)
        except (OSError, ValueError) as e:
            _error(path, e)
            rc = 1

        if not args.recursive or not os.path.isdir(path) \
                or os.path.islink(path):
            continue

        try:
            for full_path in _walk(path):
                try:
                    _do_setfacl_path(full_path, mask_ops, args.who,
                                     who_type, acl_file_aces)
                except (OSError, ValueError) as e:
                    _error(full_path, e)
                    rc = 1
        except OSError as e:
            _error(path, e)
            rc = 1

    return rc


if __name__ == '__main__':
    sys.exit(main())
