from setuptools import setup

setup(
    name='nfs4acl',
    version='0.1.0',
    description='Codec for the NFSv4 ACL system.nfs4_acl extended attribute',
    license='LGPL-3.0-or-later',
    python_requires='>=3.10',
    packages=['nfs4acl', '_nfs4acl_scripts'],
    package_dir={
        'nfs4acl': 'nfs4acl',
        '_nfs4acl_scripts': 'scripts',
    },
    package_data={
        'nfs4acl': ['py.typed'],
    },
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'nfs4_getfacl=_nfs4acl_scripts._getfacl:main',
            'nfs4_setfacl=_nfs4acl_scripts._setfacl:main',
        ],
    },
)
