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
"""Maps protobuf field types to the Haskell types proto-lens generates."""

from typing import Dict

from google.protobuf import descriptor_pb2

from pw_jsonpb_haskell.errors import UnmappedTypeError
from pw_jsonpb_haskell.names import resolve_type_path
from pw_jsonpb_haskell.proto_tree import ProtoMessageField

_FieldType = descriptor_pb2.FieldDescriptorProto

# Reference: google/protobuf/descriptor.proto, FieldDescriptorProto.Type.
SCALAR_TYPES: Dict[int, str] = {
    _FieldType.TYPE_INT32: 'Int32',
    _FieldType.TYPE_INT64: 'Int64',
    _FieldType.TYPE_SINT32: 'Int32',
    _FieldType.TYPE_SINT64: 'Int64',
    _FieldType.TYPE_SFIXED32: 'Signed Int32',
    _FieldType.TYPE_SFIXED64: 'Signed Int64',
    _FieldType.TYPE_UINT32: 'Word32',
    _FieldType.TYPE_UINT64: 'Word64',
    _FieldType.TYPE_FIXED32: 'Fixed Word32',
    _FieldType.TYPE_FIXED64: 'Fixed Word64',
    _FieldType.TYPE_STRING: 'Text',
    _FieldType.TYPE_BYTES: 'ByteString',
    _FieldType.TYPE_BOOL: 'Bool',
    _FieldType.TYPE_FLOAT: 'Float',
    _FieldType.TYPE_DOUBLE: 'Double',
}

REFERENCE_TYPES = frozenset([_FieldType.TYPE_MESSAGE, _FieldType.TYPE_ENUM])


def _wrap(haskell_type: str) -> str:
    if ' ' in haskell_type:
        return f'({haskell_type})'
    return haskell_type


def _type_label(field_type: int) -> str:
    try:
        return _FieldType.Type.Name(field_type)
    except ValueError:
        return str(field_type)


def base_type(field: ProtoMessageField) -> str:
    """Returns the element type of a field, ignoring its label.

    Raises:
      UnmappedTypeError: The field's wire type has no Haskell equivalent.
    """
    if field.type() in REFERENCE_TYPES:
        return resolve_type_path(field.type_name())

    try:
        return SCALAR_TYPES[field.type()]
    except KeyError:
        raise UnmappedTypeError(field.name(),
                                _type_label(field.type())) from None


def haskell_type(field: ProtoMessageField, parenthesize: bool = False) -> str:
    """Returns the Haskell type of a field's proto-lens accessor.

    Repeated fields of any kind become a Vector. Singular message fields are
    wrapped in Maybe; enums always have a default, so they are never wrapped.

    Args:
      field: The field to map.
      parenthesize: Surround multi-word types with parentheses, for use as a
          type argument.
    """
    result = base_type(field)

    if field.is_repeated():
        result = f'Vector {_wrap(result)}'
    elif field.is_message():
        result = f'Maybe {_wrap(result)}'

    return _wrap(result) if parenthesize else result
