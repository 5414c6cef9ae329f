#!/usr/bin/env python3
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
"""Tests for the protoc plugin entry point."""

import io
import unittest
from unittest import mock

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from pw_jsonpb_haskell import codegen, plugin
from pw_jsonpb_haskell.errors import NoFilesToGenerateError

_FieldType = descriptor_pb2.FieldDescriptorProto


def _proto_file(name: str) -> descriptor_pb2.FileDescriptorProto:
    proto_file = descriptor_pb2.FileDescriptorProto(name=name, package='pw')
    message = proto_file.message_type.add(name='Request')
    message.field.add(name='id',
                      number=1,
                      type=_FieldType.TYPE_UINT32,
                      label=_FieldType.LABEL_OPTIONAL)
    return proto_file


def _request(*files_to_generate: str) -> plugin_pb2.CodeGeneratorRequest:
    request = plugin_pb2.CodeGeneratorRequest()
    request.file_to_generate.extend(files_to_generate)
    for name in ('common.proto', 'a.proto', 'b.proto'):
        request.proto_file.append(_proto_file(name))
    return request


_OPTIONS = codegen.GeneratorOptions(version='0.0.0')


class TestSelectFiles(unittest.TestCase):
    """Tests for plugin.select_files."""
    def test_request_order(self):
        request = _request()
        selected = plugin.select_files(['b.proto', 'a.proto'],
                                       request.proto_file)
        self.assertEqual(['b.proto', 'a.proto'],
                         [proto_file.name for proto_file in selected])

    def test_imports_are_not_selected(self):
        request = _request()
        selected = plugin.select_files(['a.proto'], request.proto_file)
        self.assertEqual(['a.proto'],
                         [proto_file.name for proto_file in selected])

    def test_missing_file_is_skipped(self):
        request = _request()
        with self.assertLogs(plugin.__name__, level='WARNING'):
            selected = plugin.select_files(['missing.proto', 'a.proto'],
                                           request.proto_file)
        self.assertEqual(['a.proto'],
                         [proto_file.name for proto_file in selected])


class TestProcessProtoRequest(unittest.TestCase):
    """Tests for plugin.process_proto_request."""
    def test_one_output_per_requested_file(self):
        response = plugin_pb2.CodeGeneratorResponse()
        plugin.process_proto_request(_request('b.proto', 'a.proto'), response,
                                     _OPTIONS)

        self.assertEqual(['Proto/B_JSON.hs', 'Proto/A_JSON.hs'],
                         [output.name for output in response.file])
        self.assertIn('module Proto.B_JSON where', response.file[0].content)
        self.assertIn('instance FromJSONPB Request where',
                      response.file[1].content)

    def test_missing_file_is_not_fatal(self):
        response = plugin_pb2.CodeGeneratorResponse()
        with self.assertLogs(plugin.__name__, level='WARNING'):
            plugin.process_proto_request(
                _request('missing.proto', 'a.proto'), response, _OPTIONS)

        self.assertEqual(['Proto/A_JSON.hs'],
                         [output.name for output in response.file])

    def test_no_files_to_generate(self):
        response = plugin_pb2.CodeGeneratorResponse()
        with self.assertRaises(NoFilesToGenerateError):
            plugin.process_proto_request(_request(), response, _OPTIONS)

    def test_failure_leaves_response_empty(self):
        request = _request('a.proto', 'b.proto')
        request.proto_file[2].message_type[0].field.add(
            name='legacy',
            number=2,
            type=_FieldType.TYPE_GROUP,
            label=_FieldType.LABEL_OPTIONAL,
            type_name='.pw.Request.Legacy')

        response = plugin_pb2.CodeGeneratorResponse()
        with self.assertRaises(plugin.GeneratorError):
            plugin.process_proto_request(request, response, _OPTIONS)

        self.assertEqual(0, len(response.file))


class TestParameterOptions(unittest.TestCase):
    """Tests for parsing the protoc plugin parameter."""
    def test_empty(self):
        self.assertFalse(plugin.parse_parameter_options('').verbose)

    def test_verbose(self):
        self.assertTrue(plugin.parse_parameter_options('--verbose').verbose)
        self.assertTrue(plugin.parse_parameter_options('-v').verbose)


@mock.patch('pw_jsonpb_haskell.plugin.coloredlogs')
class TestMain(unittest.TestCase):
    """Tests running the plugin over stdin and stdout."""
    def _run(self, data: bytes):
        stdin = io.TextIOWrapper(io.BytesIO(data))
        stdout = io.TextIOWrapper(io.BytesIO())
        with mock.patch('sys.stdin', stdin), mock.patch('sys.stdout', stdout):
            status = plugin.main()
        return status, stdout.buffer.getvalue()

    def test_success(self, _):
        status, output = self._run(
            _request('a.proto').SerializeToString())

        self.assertEqual(0, status)
        response = plugin_pb2.CodeGeneratorResponse.FromString(output)
        self.assertEqual(['Proto/A_JSON.hs'],
                         [output.name for output in response.file])
        self.assertIn(f'protoc-gen-jsonpb_haskell {plugin.PLUGIN_VERSION}',
                      response.file[0].content)

    def test_identical_input_identical_output(self, _):
        data = _request('a.proto', 'b.proto').SerializeToString()
        self.assertEqual(self._run(data), self._run(data))

    def test_no_files_to_generate(self, _):
        with self.assertLogs(plugin.__name__, level='ERROR'):
            status, output = self._run(_request().SerializeToString())

        self.assertEqual(1, status)
        self.assertEqual(b'', output)

    def test_malformed_input(self, _):
        with self.assertLogs(plugin.__name__, level='ERROR'):
            status, output = self._run(b'\xff\xff\xff')

        self.assertEqual(1, status)
        self.assertEqual(b'', output)

    def test_write_failure(self, _):
        data = _request('a.proto').SerializeToString()
        with mock.patch.object(plugin,
                               'write_response',
                               side_effect=OSError('disk full')):
            with self.assertLogs(plugin.__name__, level='ERROR'):
                status, _ = self._run(data)

        self.assertEqual(1, status)


if __name__ == '__main__':
    unittest.main()
