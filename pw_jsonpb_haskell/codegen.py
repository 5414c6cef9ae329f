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
"""Generates Haskell JSONPB instances for the types in a .proto file.

The generated module complements the modules proto-lens-protoc generates for
the same file: Proto.Foo defines the message records and Proto.Foo_Fields their
lenses, while Proto.Foo_JSON defines FromJSONPB, ToJSONPB, FromJSON and ToJSON
instances for every message, oneof and enum in the file.
"""

import logging

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from pw_jsonpb_haskell import fields, names
from pw_jsonpb_haskell.proto_tree import (
    ProtoEnum,
    ProtoFile,
    ProtoMessage,
    ProtoOneof,
    build_proto_file,
)

_LOG = logging.getLogger(__name__)

PLUGIN_NAME = 'protoc-gen-jsonpb_haskell'

OUTPUT_DIRECTORY = 'Proto'
OUTPUT_SUFFIX = '_JSON'
OUTPUT_EXTENSION = '.hs'

_IMPORTS = (
    'import           Prelude(($), (.), (<$>), (>>=), pure, show, fail, maybe,'
    ' Maybe(..))',
    '',
    'import           Data.ProtoLens.Runtime.Lens.Family2 ((^.), (.~), (&))',
    'import           Control.Monad (msum)',
    'import           Data.ProtoLens (defMessage)',
    'import qualified Data.Aeson as A',
    'import qualified Data.Aeson.Encoding as E',
    'import           Data.ProtoLens.JSONPB as JSONPB',
    'import qualified Data.Text as T',
)


@dataclass
class GeneratorOptions:
    version: str


class OutputFile:
    """A buffer to which data is written.

    Example:

    ```
    output = OutputFile("Hello.hs")
    output.write_line('main :: IO ()')
    output.write_line('main = do')
    with output.indent():
        output.write_line('putStrLn "Hello, world"')

    print(output.content())
    ```

    Produces:
    ```
    main :: IO ()
    main = do
      putStrLn "Hello, world"
    ```
    """

    INDENT_WIDTH = 2

    def __init__(self, filename: str):
        self._filename: str = filename
        self._content: List[str] = []
        self._indentation: int = 0

    def write_line(self, line: str = '') -> None:
        if line:
            self._content.append(' ' * self._indentation)
            self._content.append(line)
        self._content.append('\n')

    def indent(self) -> 'OutputFile._IndentationContext':
        """Increases the indentation level of the output."""
        return self._IndentationContext(self)

    def name(self) -> str:
        return self._filename

    def content(self) -> str:
        return ''.join(self._content)

    class _IndentationContext:
        """Context that increases the output's indentation when it is active."""
        def __init__(self, output: 'OutputFile'):
            self._output = output

        def __enter__(self):
            self._output._indentation += OutputFile.INDENT_WIDTH

        def __exit__(self, typ, value, traceback):
            self._output._indentation -= OutputFile.INDENT_WIDTH


def module_name(proto_path: str) -> str:
    """Haskell module name of the proto-lens module for a .proto file."""
    return '.'.join([OUTPUT_DIRECTORY, *names.module_path(proto_path)])


def output_filename(proto_path: str) -> str:
    """Path of the generated module, e.g. Proto/Foo/BarBaz_JSON.hs."""
    path = '/'.join([OUTPUT_DIRECTORY, *names.module_path(proto_path)])
    return f'{path}{OUTPUT_SUFFIX}{OUTPUT_EXTENSION}'


def _generate_field_summary(type_name: str, entries: Iterable[Tuple[str, str]],
                            output: OutputFile) -> None:
    """Writes a comment listing the Haskell types within a generated type."""
    output.write_line()
    output.write_line(f'-- {type_name}')
    for name, haskell_type in entries:
        output.write_line(f'--   {name} :: {haskell_type}')


def _generate_json_bridge(type_name: str, output: OutputFile) -> None:
    """Routes aeson's FromJSON and ToJSON through the JSONPB instances."""
    output.write_line()
    output.write_line(f'instance FromJSON {type_name} where')
    with output.indent():
        output.write_line('parseJSON = parseJSONPB')

    output.write_line()
    output.write_line(f'instance ToJSON {type_name} where')
    with output.indent():
        output.write_line('toJSON = toAesonValue')
        output.write_line('toEncoding = toAesonEncoding')


def generate_code_for_oneof(message: ProtoMessage, oneof: ProtoOneof,
                            output: OutputFile) -> None:
    """Creates JSONPB instances for the sum type of a oneof group.

    Decoding tries each member's key in declaration order and uses the first
    one which is present and parses.
    """
    type_name = fields.oneof_type_name(message, oneof)
    members = fields.oneof_members(message, oneof, '[', ',')

    _generate_field_summary(
        type_name,
        [(member.constructor, member.haskell_type) for member in members],
        output,
    )

    output.write_line()
    output.write_line(f'instance FromJSONPB {type_name} where')
    with output.indent():
        output.write_line(
            f'parseJSONPB = A.withObject "{type_name}" $ \\obj -> msum')
        with output.indent():
            for member in members:
                # Unlike JSONPB's parseField, this fails for a missing key.
                value = ('A.explicitParseField parseJSONPB obj '
                         f'"{member.json_key}"')
                if member.requires_presence:
                    value = (f'({value} >>= maybe (fail "{member.json_key}: '
                             f'null") pure)')
                output.write_line(
                    f'{member.sep} {member.constructor} <$> {value}')
            output.write_line(']')

    output.write_line()
    output.write_line(f'instance ToJSONPB {type_name} where')
    with output.indent():
        for method, builder in (('toJSONPB', 'object'),
                                ('toEncodingPB', 'pairs')):
            for member in members:
                value = 'Just x' if member.requires_presence else 'x'
                output.write_line(
                    f'{method} ({member.constructor} x) = '
                    f'{builder} [ "{member.json_key}" .= {value} ]')

    _generate_json_bridge(type_name, output)


def generate_code_for_message(message: ProtoMessage,
                              output: OutputFile) -> None:
    """Creates JSONPB instances for a message and everything nested in it."""
    for oneof in message.oneofs():
        generate_code_for_oneof(message, oneof, output)

    type_name = message.qualified_name()
    message_fields = fields.message_fields(message, '[', ',')

    _generate_field_summary(
        type_name,
        [(field.haskell_name, field.haskell_type) for field in message_fields],
        output,
    )

    output.write_line()
    output.write_line(f'instance FromJSONPB {type_name} where')
    with output.indent():
        if not message_fields:
            # Empty messages ignore their input entirely.
            output.write_line(
                f'parseJSONPB = withObject "{type_name}" $ \\_ -> '
                'pure defMessage')
        else:
            output.write_line(
                f'parseJSONPB = withObject "{type_name}" $ \\obj -> do')
            with output.indent():
                for field in message_fields:
                    read = 'A..:?' if field.requires_presence else '.:'
                    output.write_line(f"{field.haskell_name}' <- obj {read} "
                                      f'"{field.json_key}"')
                output.write_line('pure $ defMessage')
                with output.indent():
                    for field in message_fields:
                        output.write_line(f'& P.{field.lens_name} .~ '
                                          f"{field.haskell_name}'")

    output.write_line()
    output.write_line(f'instance ToJSONPB {type_name} where')
    with output.indent():
        for method, builder in (('toJSONPB', 'object'),
                                ('toEncodingPB', 'pairs')):
            if not message_fields:
                output.write_line(f'{method} _ = {builder} []')
                continue

            output.write_line(f'{method} x = {builder}')
            with output.indent():
                for field in message_fields:
                    output.write_line(f'{field.sep} "{field.json_key}" .= '
                                      f'(x^.P.{field.lens_name})')
                output.write_line(']')

    _generate_json_bridge(type_name, output)

    for nested in message.nested_messages():
        generate_code_for_message(nested, output)
    for proto_enum in message.nested_enums():
        generate_code_for_enum(proto_enum, output)


def generate_code_for_enum(proto_enum: ProtoEnum, output: OutputFile) -> None:
    """Creates JSONPB instances for an enum, encoded as its value names."""
    type_name = proto_enum.qualified_name()
    parent: Optional[ProtoMessage] = proto_enum.parent()

    output.write_line()
    output.write_line(f'instance FromJSONPB {type_name} where')
    with output.indent():
        for value in proto_enum.values():
            json_value = value.upper()
            constructor = json_value
            if parent is not None:
                constructor = f"{parent.qualified_name()}'{json_value}"
            output.write_line(f'parseJSONPB (JSONPB.String "{json_value}") = '
                              f'pure {constructor}')
        output.write_line(f'parseJSONPB x = typeMismatch "{type_name}" x')

    output.write_line()
    output.write_line(f'instance ToJSONPB {type_name} where')
    with output.indent():
        output.write_line(
            'toJSONPB x _ = A.String . T.toUpper . T.pack $ show x')
        output.write_line(
            'toEncodingPB x _ = E.text . T.toUpper . T.pack $ show x')

    _generate_json_bridge(type_name, output)


def generate_header(proto_file: ProtoFile, options: GeneratorOptions,
                    output: OutputFile) -> None:
    """Writes the module declaration and imports of a generated file."""
    module = module_name(proto_file.name())

    output.write_line(f'-- Code generated by {PLUGIN_NAME} {options.version}, '
                      'DO NOT EDIT.')
    output.write_line('{-# LANGUAGE OverloadedStrings #-}')
    output.write_line('{-# OPTIONS_GHC -Wno-orphans -Wno-unused-imports '
                      '-Wno-missing-export-lists #-}')
    output.write_line(f'module {module}{OUTPUT_SUFFIX} where')
    output.write_line()

    for line in _IMPORTS:
        output.write_line(line)
    output.write_line()

    output.write_line(f'import           {module} as P')
    output.write_line(f'import           {module}_Fields as P')


def process_proto_file(file_descriptor_proto,
                       options: GeneratorOptions) -> OutputFile:
    """Generates the JSONPB module for a single .proto file.

    Raises:
      UnmappedTypeError: A field in the file has a type with no Haskell
          equivalent.
    """
    proto_file = build_proto_file(file_descriptor_proto)

    output = OutputFile(output_filename(proto_file.name()))
    _LOG.debug('Generating %s from %s', output.name(), proto_file.name())

    generate_header(proto_file, options, output)

    for message in proto_file.messages():
        generate_code_for_message(message, output)
    for proto_enum in proto_file.enums():
        generate_code_for_enum(proto_enum, output)

    return output
