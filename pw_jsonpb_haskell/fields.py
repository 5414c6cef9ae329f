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
"""Classifies message fields for JSON instance generation.

A message's own instances treat each oneof group as a single optional field
named after the group, which follows the message's regular fields. The members
of a group are emitted separately, as the constructors of the group's type.
"""

from typing import List, NamedTuple

from pw_jsonpb_haskell import names
from pw_jsonpb_haskell.proto_tree import ProtoMessage, ProtoOneof
from pw_jsonpb_haskell.type_mapping import base_type, haskell_type


class ClassifiedField(NamedTuple):
    """A field as it appears in a message's decode and encode instances."""
    json_key: str
    haskell_name: str
    lens_name: str
    requires_presence: bool
    sep: str
    haskell_type: str


class OneofMember(NamedTuple):
    """A oneof member as it appears in the oneof type's instances."""
    json_key: str
    constructor: str
    requires_presence: bool
    sep: str
    haskell_type: str


def oneof_type_name(message: ProtoMessage, oneof: ProtoOneof) -> str:
    return (f"{message.qualified_name()}'"
            f'{names.upper_camel_case(oneof.name())}')


def _lens_name(haskell_name: str, requires_presence: bool) -> str:
    if requires_presence:
        return "maybe'" + haskell_name
    return haskell_name


def message_fields(message: ProtoMessage,
                   first_sep: str = '',
                   rest_sep: str = '') -> List[ClassifiedField]:
    """Lists the fields of a message's own instances.

    Fields outside of any oneof come first in declaration order, followed by
    one field per oneof group. The first entry is given first_sep and every
    later entry rest_sep.
    """
    fields: List[ClassifiedField] = []

    def sep() -> str:
        return rest_sep if fields else first_sep

    for field in message.fields():
        if field.oneof_index() is not None:
            continue

        haskell_name = names.haskell_field_name(field.name())
        fields.append(
            ClassifiedField(
                json_key=field.name(),
                haskell_name=haskell_name,
                lens_name=_lens_name(haskell_name, field.requires_presence()),
                requires_presence=field.requires_presence(),
                sep=sep(),
                haskell_type=haskell_type(field),
            ))

    for oneof in message.oneofs():
        haskell_name = names.haskell_field_name(oneof.name())
        fields.append(
            ClassifiedField(
                json_key=oneof.name(),
                haskell_name=haskell_name,
                lens_name=_lens_name(haskell_name, True),
                requires_presence=True,
                sep=sep(),
                haskell_type=f'Maybe {oneof_type_name(message, oneof)}',
            ))

    return fields


def oneof_members(message: ProtoMessage,
                  oneof: ProtoOneof,
                  first_sep: str = '',
                  rest_sep: str = '') -> List[OneofMember]:
    """Lists the members of a oneof group in declaration order."""
    members: List[OneofMember] = []

    for field in oneof.members():
        constructor = (f"{message.qualified_name()}'"
                       f'{names.upper_camel_case(field.name())}')
        members.append(
            OneofMember(
                json_key=field.name(),
                constructor=constructor,
                requires_presence=field.requires_presence(),
                sep=rest_sep if members else first_sep,
                haskell_type=base_type(field),
            ))

    return members
