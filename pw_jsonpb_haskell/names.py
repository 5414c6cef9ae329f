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
"""Identifier transformations from .proto names to Haskell names."""

import os

from typing import List

# Reserved identifiers from the Haskell 2010 report, plus keywords introduced
# by commonly enabled GHC extensions (ExplicitForAll, RecursiveDo, Arrows).
HASKELL_RESERVED_WORDS = frozenset([
    'case',
    'class',
    'data',
    'default',
    'deriving',
    'do',
    'else',
    'foreign',
    'if',
    'import',
    'in',
    'infix',
    'infixl',
    'infixr',
    'instance',
    'let',
    'module',
    'newtype',
    'of',
    'then',
    'type',
    'where',
    '_',
    'forall',
    'mdo',
    'rec',
    'proc',
])


def capitalize(segment: str) -> str:
    """Lowercases a name segment, then uppercases its first letter."""
    return segment.lower().capitalize()


def lower_camel_case(name: str) -> str:
    """Converts a snake_case name to lowerCamelCase."""
    segments = name.split('_')
    return segments[0].lower() + ''.join(capitalize(s) for s in segments[1:])


def upper_camel_case(name: str) -> str:
    """Converts a snake_case name to UpperCamelCase."""
    return ''.join(capitalize(s) for s in name.split('_'))


def escape_reserved(identifier: str) -> str:
    """Appends a prime to identifiers that collide with Haskell keywords."""
    if identifier in HASKELL_RESERVED_WORDS:
        return identifier + "'"
    return identifier


def haskell_field_name(name: str) -> str:
    """The name proto-lens uses for a field's lens and record accessor."""
    return escape_reserved(lower_camel_case(name))


def resolve_type_path(type_name: str) -> str:
    """Converts a .proto type reference to a Haskell type name.

    References local to the compilation unit start with a '.' and resolve to
    their last component; other references are treated as qualified module
    paths.

      .foo.Message          => Message
      google.protobuf.Empty => Google.Protobuf.Empty
    """
    if len(type_name) > 1 and type_name.startswith('.'):
        return type_name.split('.')[-1]

    return '.'.join(part[:1].upper() + part[1:]
                    for part in type_name.split('.'))


def module_path(proto_path: str) -> List[str]:
    """Splits a .proto file path into UpperCamelCase module components.

      foo/bar_baz.proto => ['Foo', 'BarBaz']
    """
    stem, _ = os.path.splitext(proto_path)
    return [upper_camel_case(part) for part in stem.split('/') if part]
