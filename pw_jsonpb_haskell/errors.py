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
"""Errors that abort a code generation run."""


class GeneratorError(Exception):
    """Base class for errors that make the plugin exit with a failure."""


class NoFilesToGenerateError(GeneratorError):
    def __init__(self):
        super().__init__('no files to generate')


class UnmappedTypeError(GeneratorError):
    """A field has a wire type with no Haskell equivalent."""
    def __init__(self, field_name: str, field_type: str):
        super().__init__(
            f'no mapping for type {field_type} of field {field_name}')
        self.field_name = field_name
        self.field_type = field_type
