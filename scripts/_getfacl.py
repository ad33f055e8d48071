# SPDX-License-Identifier: LGPL-3.0-or-later

import argparse
import json
import os
import stat
import sys

import nfs4acl as n
from nfs4acl._render import type_str


_PROG = 'nfs4_getfacl'


def _ace_to_dict(ace, is_directory):
    return {
        'type': type_str(ace.ace_type, verbose=True) or str(int(ace.ace_type)),
        'flags': [f.name for f in n.NFS4Flag if ace.ace_flags & f],
        'who': ace.who,
        'who_type': ace.who_type.name,
        'perms': [n.perm_name(p, is_directory)
                  for p in n.NFS4Perm if ace.access_mask & p],
    }


def _format_text(path, acl, verbose, omit_header):
    lines = []
    if not omit_header:
        lines.append(f'# file: {path}')
    lines.extend(n.render_ace(ace, verbose, acl.is_directory) for ace in acl)
    return '\n'.join(lines)


def _format_json(path, acl):
    return {
        'path': path,
        'is_directory': acl.is_directory,
        'aces': [_ace_to_dict(ace, acl.is_directory) for ace in acl],
    }


def _output_acl(path, acl, verbose, omit_header, use_json):
    if use_json:
        print(json.dumps(_format_json(path, acl)))
    else:
        print(_format_text(path, acl, verbose, omit_header))
        print()


def _process_path(path, verbose, omit_header, use_json):
    acl = n.getacl(path, follow_symlinks=False)
    _output_acl(path, acl, verbose, omit_header, use_json)


def _walk(root):
    """Yield every path below root, top-down.

    Symlinks are not followed and directories on another device than root
    are not descended into.
    """
    root_dev = os.lstat(root).st_dev
    for parent, dirs, files in os.walk(root, followlinks=False):
        kept = []
        for name in sorted(dirs):
            full_path = os.path.join(parent, name)
            st = os.lstat(full_path)
            if stat.S_ISLNK(st.st_mode):
                continue
            yield full_path
            if st.st_dev == root_dev:
                kept.append(name)
        dirs[:] = kept
        for name in sorted(files):
            full_path = os.path.join(parent, name)
            if os.path.islink(full_path):
                continue
            yield full_path


def _error(path, e):
    print(f'{_PROG}: {path}: {e}', file=sys.stderr)


def main(argv=None):
    ap = argparse.ArgumentParser(
        prog=_PROG,
        description='Display NFSv4 ACL entries for files.',
    )
    ap.add_argument('-R', '--recursive', action='store_true',
                    help='Process directories recursively; '
                         'does not follow symlinks or cross device boundaries')
    ap.add_argument('-H', '--omit-header', action='store_true',
                    help='Omit the "# file:" header for each path')
    ap.add_argument('-v', '--verbose', action='store_true',
                    help='Print ACE types as full keywords (ALLOW, DENY, ...)')
    ap.add_argument('-j', '--json', dest='use_json', action='store_true',
                    help='Output ACLs as JSONL (one object per line)')
    ap.add_argument('path', nargs='+')
    args = ap.parse_args(argv)

    rc = 0
    for path in args.path:
        try:
            _process_path(path, args.verbose, args.omit_header, args.use_json)
        except (OSError, ValueError) as e:
            _error(path, e)
            rc = 1

        if not args.recursive or not os.path.isdir(path) \
                or os.path.islink(path):
            continue

        try:
            for full_path in _walk(path):
                try:
                    _process_path(full_path, args.verbose, args.omit_header,
                                  args.use_json)
                except (OSError, ValueError) as e:
                    _error(full_path, e)
                    rc = 1
        except OSError as e:
            _error(path, e)
            rc = 1

    return rc


if __name__ == '__main__':
    sys.exit(main())
