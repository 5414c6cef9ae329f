# Copyright 2026 The Pigweed Authors
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License. You may obtain a copy of
# the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations under
# the License.
"""pw_jsonpb_haskell"""

import unittest
import setuptools  # type: ignore


def test_suite():
    """Test suite for pw_jsonpb_haskell."""
    return unittest.TestLoader().discover('./', pattern='*_test.py')


setuptools.setup(
    name='pw_jsonpb_haskell',
    version='0.1.0',
    author='Pigweed Authors',
    author_email='pigweed-developers@googlegroups.com',
    description='protoc plugin generating Haskell JSONPB instances',
    packages=setuptools.find_packages(include=['pw_jsonpb_haskell']),
    test_suite='setup.test_suite',
    entry_points={
        'console_scripts': [
            'protoc-gen-jsonpb_haskell = pw_jsonpb_haskell.plugin:main',
        ]
    },
    install_requires=[
        'coloredlogs',
        'protobuf',
    ],
    extras_require={
        'test': ['parameterized'],
    },
)
