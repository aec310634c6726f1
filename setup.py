# vim: tabstop=4 shiftwidth=4 softtabstop=4

# All Rights Reserved.
#
#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.

import setuptools

project = 'scwbackup'

requires = [
    'oslo.config>=8.6.0',
    'oslo.i18n>=5.0.1',
    'oslo.log>=4.4.0',
    'oslo.serialization>=4.1.0',
    'oslo.utils>=4.8.0',
    'requests>=2.25.1',
    'boto3>=1.18.49',
    'botocore>=1.21.49',
    'PyYAML>=5.4',
    'prettytable>=0.7.2',
]

test_requires = [
    'ddt>=1.4.1',
    'fixtures>=3.0.0',
    'stestr>=3.2.1',
    'testtools>=2.4.0',
]

setuptools.setup(
    name=project,
    version='0.1.0',
    description='Scaleway Block Storage volume snapshotter for backups',
    classifiers=[
        'Intended Audience :: Information Technology',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
    packages=setuptools.find_packages(include=['scwbackup', 'scwbackup.*']),
    install_requires=requires,
    extras_require={'test': test_requires},
    python_requires='>=3.8',
    entry_points={
        'console_scripts': [
            'scwbackup-manage = scwbackup.cmd.manage:main',
        ],
        'oslo.config.opts': [
            'scwbackup = scwbackup.common.config:list_opts',
        ],
    },
    include_package_data=True)
