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
"""This module defines data structures for protobuf entities."""

import abc
import enum

from typing import Iterator, List, Optional

from google.protobuf import descriptor_pb2


class ProtoNode(abc.ABC):
    """A ProtoNode represents a Haskell type generated from a .proto entity.

    Messages own their nested messages and enums, forming a tree below each
    top-level definition of a file. A node's Haskell name is qualified by the
    names of the messages enclosing it, as proto-lens does.
    """
    class Type(enum.Enum):
        """The type of a ProtoNode.

        MESSAGE maps to a proto-lens message record.
        ENUM maps to a proto-lens enum sum type.
        """
        MESSAGE = 1
        ENUM = 2

    def __init__(self, name: str):
        self._name: str = name
        self._parent: Optional['ProtoMessage'] = None

    @abc.abstractmethod
    def type(self) -> 'ProtoNode.Type':
        """The type of the node."""

    def name(self) -> str:
        return self._name

    def parent(self) -> Optional['ProtoMessage']:
        return self._parent

    def qualified_name(self) -> str:
        """Haskell type name of the node, e.g. Outer'Inner."""
        return "'".join(self._name_hierarchy())

    def proto_path(self) -> str:
        return '.'.join(self._name_hierarchy())

    def _name_hierarchy(self) -> List[str]:
        hierarchy = []
        node: Optional[ProtoNode] = self
        while node is not None:
            hierarchy.append(node.name())
            node = node.parent()
        return list(reversed(hierarchy))


class ProtoEnum(ProtoNode):
    """Representation of an enum in a .proto file."""
    def __init__(self, name: str):
        super().__init__(name)
        self._values: List[str] = []

    def type(self) -> ProtoNode.Type:
        return ProtoNode.Type.ENUM

    def values(self) -> List[str]:
        return list(self._values)

    def add_value(self, name: str) -> None:
        self._values.append(name)


class ProtoMessage(ProtoNode):
    """Representation of a message in a .proto file."""
    def __init__(self, name: str):
        super().__init__(name)
        self._fields: List['ProtoMessageField'] = []
        self._oneofs: List['ProtoOneof'] = []
        self._messages: List['ProtoMessage'] = []
        self._enums: List[ProtoEnum] = []

    def type(self) -> ProtoNode.Type:
        return ProtoNode.Type.MESSAGE

    def fields(self) -> List['ProtoMessageField']:
        return list(self._fields)

    def oneofs(self) -> List['ProtoOneof']:
        return list(self._oneofs)

    def nested_messages(self) -> List['ProtoMessage']:
        return list(self._messages)

    def nested_enums(self) -> List[ProtoEnum]:
        return list(self._enums)

    def add_field(self, field: 'ProtoMessageField') -> None:
        self._fields.append(field)
        if field.oneof_index() is not None:
            self._oneofs[field.oneof_index()].add_member(field)

    def add_oneof(self, oneof: 'ProtoOneof') -> None:
        self._oneofs.append(oneof)

    def add_child(self, child: ProtoNode) -> None:
        """Nests a message or enum inside of this message.

        Raises:
          ValueError: The child already belongs to another message.
        """
        # pylint: disable=protected-access
        if child._parent is not None:
            raise ValueError(f'{child.proto_path()} already has a parent')
        child._parent = self
        # pylint: enable=protected-access

        if child.type() == ProtoNode.Type.MESSAGE:
            assert isinstance(child, ProtoMessage)
            self._messages.append(child)
        else:
            assert isinstance(child, ProtoEnum)
            self._enums.append(child)

    def __iter__(self) -> Iterator[ProtoNode]:
        """Iterates pre-order through this message and everything it nests."""
        yield self
        for message in self._messages:
            yield from message
        yield from self._enums


# Fields and oneofs are not nodes and do not appear in the proto tree. They
# belong to proto messages and are processed along with them.
class ProtoMessageField:
    """Representation of a field within a protobuf message."""
    def __init__(self,
                 field_name: str,
                 field_number: int,
                 field_type: int,
                 type_name: str = '',
                 repeated: bool = False,
                 oneof_index: Optional[int] = None):
        self._field_name = field_name
        self._number: int = field_number
        self._type: int = field_type
        self._type_name: str = type_name
        self._repeated: bool = repeated
        self._oneof_index: Optional[int] = oneof_index

    def name(self) -> str:
        return self._field_name

    def number(self) -> int:
        return self._number

    def type(self) -> int:
        return self._type

    def type_name(self) -> str:
        return self._type_name

    def is_repeated(self) -> bool:
        return self._repeated

    def is_message(self) -> bool:
        return self._type == descriptor_pb2.FieldDescriptorProto.TYPE_MESSAGE

    def oneof_index(self) -> Optional[int]:
        return self._oneof_index

    def requires_presence(self) -> bool:
        """Whether the field is a singular message, which can be absent."""
        return self.is_message() and not self.is_repeated()


class ProtoOneof:
    """A oneof group; its members are also fields of the owning message."""
    def __init__(self, name: str):
        self._name = name
        self._members: List[ProtoMessageField] = []

    def name(self) -> str:
        return self._name

    def members(self) -> List[ProtoMessageField]:
        return list(self._members)

    def add_member(self, field: ProtoMessageField) -> None:
        self._members.append(field)


class ProtoFile:
    """The top-level messages and enums defined in a single .proto file."""
    def __init__(self, name: str, package: str):
        self._name = name
        self._package = package
        self._messages: List[ProtoMessage] = []
        self._enums: List[ProtoEnum] = []

    def name(self) -> str:
        return self._name

    def package(self) -> str:
        return self._package

    def messages(self) -> List[ProtoMessage]:
        return list(self._messages)

    def enums(self) -> List[ProtoEnum]:
        return list(self._enums)

    def add_message(self, message: ProtoMessage) -> None:
        self._messages.append(message)

    def add_enum(self, proto_enum: ProtoEnum) -> None:
        self._enums.append(proto_enum)


def _build_enum(proto_enum) -> ProtoEnum:
    node = ProtoEnum(proto_enum.name)
    for value in proto_enum.value:
        node.add_value(value.name)
    return node


def _build_message(proto_message) -> ProtoMessage:
    """Recursively builds a message node and its nested messages and enums."""
    node = ProtoMessage(proto_message.name)

    # Oneofs must exist before their member fields are added.
    for oneof in proto_message.oneof_decl:
        node.add_oneof(ProtoOneof(oneof.name))

    for field in proto_message.field:
        repeated = \
            field.label == descriptor_pb2.FieldDescriptorProto.LABEL_REPEATED
        node.add_field(
            ProtoMessageField(
                field.name,
                field.number,
                field.type,
                field.type_name,
                repeated,
                field.oneof_index if field.HasField('oneof_index') else None,
            ))

    for submessage in proto_message.nested_type:
        node.add_child(_build_message(submessage))
    for proto_enum in proto_message.enum_type:
        node.add_child(_build_enum(proto_enum))

    return node


def build_proto_file(file_descriptor_proto) -> ProtoFile:
    """Constructs a ProtoFile tree from a FileDescriptorProto."""
    proto_file = ProtoFile(file_descriptor_proto.name,
                           file_descriptor_proto.package)

    for message in file_descriptor_proto.message_type:
        proto_file.add_message(_build_message(message))
    for proto_enum in file_descriptor_proto.enum_type:
        proto_file.add_enum(_build_enum(proto_enum))

    return proto_file
