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
"""Tests for building proto trees from file descriptors."""

import unittest

from google.protobuf import descriptor_pb2, text_format

from pw_jsonpb_haskell.proto_tree import (
    ProtoEnum,
    ProtoMessage,
    ProtoNode,
    build_proto_file,
)

_FILE = """
name: "pw/test/shapes.proto"
package: "pw.test"
message_type {
  name: "Shape"
  field { name: "label" number: 1 type: TYPE_STRING label: LABEL_OPTIONAL }
  field {
    name: "circle" number: 2 type: TYPE_MESSAGE label: LABEL_OPTIONAL
    type_name: ".pw.test.Shape.Circle" oneof_index: 0
  }
  field {
    name: "side" number: 3 type: TYPE_UINT32 label: LABEL_OPTIONAL
    oneof_index: 0
  }
  field {
    name: "tags" number: 4 type: TYPE_STRING label: LABEL_REPEATED
  }
  nested_type {
    name: "Circle"
    field { name: "radius" number: 1 type: TYPE_FLOAT label: LABEL_OPTIONAL }
    enum_type { name: "Fill" value { name: "SOLID" number: 0 } }
  }
  enum_type {
    name: "Kind"
    value { name: "ROUND" number: 0 }
    value { name: "square" number: 1 }
  }
  oneof_decl { name: "geometry" }
}
enum_type {
  name: "Color"
  value { name: "RED" number: 0 }
}
"""


def _build():
    return build_proto_file(
        text_format.Parse(_FILE, descriptor_pb2.FileDescriptorProto()))


class TestBuildProtoFile(unittest.TestCase):
    """Tests for build_proto_file."""
    def test_file_attributes(self):
        proto_file = _build()
        self.assertEqual('pw/test/shapes.proto', proto_file.name())
        self.assertEqual('pw.test', proto_file.package())
        self.assertEqual(['Shape'],
                         [message.name() for message in proto_file.messages()])
        self.assertEqual(['Color'],
                         [enum.name() for enum in proto_file.enums()])

    def test_fields(self):
        shape = _build().messages()[0]
        fields = shape.fields()

        self.assertEqual(['label', 'circle', 'side', 'tags'],
                         [field.name() for field in fields])
        self.assertIsNone(fields[0].oneof_index())
        self.assertEqual(0, fields[1].oneof_index())
        self.assertEqual('.pw.test.Shape.Circle', fields[1].type_name())
        self.assertTrue(fields[1].is_message())
        self.assertTrue(fields[1].requires_presence())
        self.assertFalse(fields[2].requires_presence())
        self.assertTrue(fields[3].is_repeated())
        self.assertFalse(fields[3].requires_presence())

    def test_oneof_members(self):
        shape = _build().messages()[0]
        oneofs = shape.oneofs()

        self.assertEqual(['geometry'], [oneof.name() for oneof in oneofs])
        self.assertEqual(['circle', 'side'],
                         [field.name() for field in oneofs[0].members()])

    def test_nesting(self):
        shape = _build().messages()[0]
        circle = shape.nested_messages()[0]
        fill = circle.nested_enums()[0]

        self.assertIs(shape, circle.parent())
        self.assertIs(circle, fill.parent())
        self.assertIsNone(shape.parent())
        self.assertEqual("Shape'Circle", circle.qualified_name())
        self.assertEqual("Shape'Circle'Fill", fill.qualified_name())
        self.assertEqual('Shape.Circle.Fill', fill.proto_path())

    def test_enum_values_keep_declared_names(self):
        kind = _build().messages()[0].nested_enums()[0]
        self.assertEqual(['ROUND', 'square'], kind.values())

    def test_preorder_iteration(self):
        shape = _build().messages()[0]
        self.assertEqual(
            ['Shape', "Shape'Circle", "Shape'Circle'Fill", "Shape'Kind"],
            [node.qualified_name() for node in shape])


class TestProtoMessage(unittest.TestCase):
    """Tests for nesting nodes within messages."""
    def test_child_types(self):
        message = ProtoMessage('Outer')
        message.add_child(ProtoMessage('Inner'))
        message.add_child(ProtoEnum('Kind'))

        self.assertEqual(ProtoNode.Type.MESSAGE,
                         message.nested_messages()[0].type())
        self.assertEqual(ProtoNode.Type.ENUM, message.nested_enums()[0].type())

    def test_child_cannot_have_two_parents(self):
        child = ProtoEnum('Kind')
        ProtoMessage('First').add_child(child)

        with self.assertRaises(ValueError):
            ProtoMessage('Second').add_child(child)


if __name__ == '__main__':
    unittest.main()
