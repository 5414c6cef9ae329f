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
"""protoc-gen-jsonpb_haskell compiler plugin.

This file implements a protobuf compiler plugin which generates Haskell JSONPB
instances for the messages and enums generated by proto-lens-protoc.

  protoc --plugin=protoc-gen-jsonpb_haskell --jsonpb_haskell_out=gen foo.proto
"""

import logging
import sys
from argparse import ArgumentParser, Namespace
from shlex import shlex
from typing import BinaryIO, Iterable, List, Sequence

import coloredlogs  # type: ignore
from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError, EncodeError

from pw_jsonpb_haskell import codegen
from pw_jsonpb_haskell.errors import GeneratorError, NoFilesToGenerateError

PLUGIN_VERSION = '0.1.0'

_LOG = logging.getLogger(__name__)


def parse_parameter_options(parameter: str) -> Namespace:
    """Parses parameters passed through from protoc.

    These parameters come in via passing `--jsonpb_haskell_opt` to protoc.
    """
    parser = ArgumentParser(prog=codegen.PLUGIN_NAME)
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help='Log debug messages',
    )

    # protoc passes the custom arguments in shell quoted form, separated by
    # commas. Use shlex to split them, correctly handling quoted sections, with
    # equivalent options to IFS=","
    lex = shlex(parameter)
    lex.whitespace_split = True
    lex.whitespace = ','
    lex.commenters = ''
    args = list(lex)

    return parser.parse_args(args)


def select_files(files_to_generate: Sequence[str],
                 proto_files: Iterable) -> List:
    """Selects the descriptors of the files explicitly listed to protoc.

    proto_files holds every file in the compilation, including imports. The
    result follows the order of files_to_generate; names that match no file
    are skipped.
    """
    by_name = {}
    for proto_file in proto_files:
        by_name.setdefault(proto_file.name, proto_file)

    selected = []
    for name in files_to_generate:
        proto_file = by_name.get(name)
        if proto_file is None:
            _LOG.warning('Requested file %s was not provided by protoc', name)
            continue
        selected.append(proto_file)

    return selected


def process_proto_request(req: plugin_pb2.CodeGeneratorRequest,
                          res: plugin_pb2.CodeGeneratorResponse,
                          options: codegen.GeneratorOptions) -> None:
    """Handles a protoc CodeGeneratorRequest message.

    Generates code for the files in the request and writes the output to the
    specified CodeGeneratorResponse message.

    Raises:
      NoFilesToGenerateError: The request does not list any files.
      UnmappedTypeError: A field's type has no Haskell equivalent.
    """
    if not req.file_to_generate:
        raise NoFilesToGenerateError()

    # Generate everything before touching the response, so a failure leaves
    # no partial output.
    output_files = [
        codegen.process_proto_file(proto_file, options)
        for proto_file in select_files(req.file_to_generate, req.proto_file)
    ]

    for output_file in output_files:
        fd = res.file.add()
        fd.name = output_file.name()
        fd.content = output_file.content()


def read_request(stream: BinaryIO) -> plugin_pb2.CodeGeneratorRequest:
    return plugin_pb2.CodeGeneratorRequest.FromString(stream.read())


def write_response(stream: BinaryIO,
                   response: plugin_pb2.CodeGeneratorResponse) -> None:
    stream.write(response.SerializeToString())
    stream.flush()


def _setup_logging(verbose: bool) -> None:
    # protoc reads the response from stdout, so logs must go to stderr.
    coloredlogs.install(level='DEBUG' if verbose else 'INFO',
                        stream=sys.stderr,
                        level_styles={
                            'debug': {
                                'color': 244
                            },
                            'error': {
                                'color': 'red'
                            }
                        },
                        fmt='%(levelname)s | %(message)s')


def main() -> int:
    """Protobuf compiler plugin entrypoint.

    Reads a CodeGeneratorRequest proto from stdin and writes a
    CodeGeneratorResponse to stdout.
    """
    try:
        request = read_request(sys.stdin.buffer)
    except (DecodeError, OSError) as err:
        _setup_logging(verbose=False)
        _LOG.error('error: %s parsing input proto', err)
        return 1

    args = parse_parameter_options(request.parameter)
    _setup_logging(args.verbose)

    response = plugin_pb2.CodeGeneratorResponse()
    options = codegen.GeneratorOptions(version=PLUGIN_VERSION)

    try:
        process_proto_request(request, response, options)
    except GeneratorError as err:
        _LOG.error('error: %s', err)
        return 1

    try:
        write_response(sys.stdout.buffer, response)
    except (EncodeError, OSError) as err:
        _LOG.error('error: %s writing response', err)
        return 1

    _LOG.debug('Generated %d file(s)', len(response.file))
    return 0


if __name__ == '__main__':
    sys.exit(main())
