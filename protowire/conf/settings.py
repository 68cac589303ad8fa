# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from enum import Enum
from pathlib import Path
from typing import Union

from protowire.serialization.consts import DEFAULT_RECURSION_LIMIT
from protowire.utils import pydantic
from protowire.utils.yaml import dict_from_extended_yaml


class LongMode(str, Enum):
    """How 64-bit integer kinds (int64, uint64, sint64, fixed64, sfixed64) are represented in message values."""

    # exact Python ints, JSON uses a number up to 2**53-1 and a decimal string above it
    INT = 'int'

    # ints restricted to what a double represents exactly, anything above 2**53-1 raises PrecisionLossError
    NUMBER = 'number'

    # decimal strings, both in message values and in JSON
    STRING = 'string'


class CodecSettings(pydantic.BaseModel):
    # Representation of 64-bit integer kinds
    LONG_MODE: LongMode = LongMode.INT

    # Maximum depth of nested messages (and groups) accepted when decoding binary data
    RECURSION_LIMIT: int = DEFAULT_RECURSION_LIMIT

    # When false, from_json raises JsonDecodeError on keys that are not a field of the message
    JSON_IGNORE_UNKNOWN_FIELDS: bool = True

    # Use the declared field names instead of lowerCamelCase names when producing JSON, both are always accepted
    JSON_USE_PROTO_NAMES: bool = False

    # Emit plain (non-optional) scalar fields even when they hold their default value
    JSON_EMIT_DEFAULTS: bool = True

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'CodecSettings':
        """Takes a filepath to a yaml file and returns a validated CodecSettings instance."""
        settings_dict = dict_from_extended_yaml(filepath=filepath)
        return cls.model_validate(settings_dict)
