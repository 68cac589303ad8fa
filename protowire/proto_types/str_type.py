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

from typing_extensions import override

from protowire.proto_types.proto_type import ProtoType
from protowire.serialization import Deserializer, Serializer
from protowire.serialization.encoding.tag import WireType
from protowire.serialization.encoding.utf8 import decode_utf8, encode_utf8


class StrType(ProtoType[str]):
    wire_type = WireType.LEN
    packable = False

    @override
    def default(self) -> str:
        return ''

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise TypeError(f'string expects a str, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: str, /) -> None:
        encode_utf8(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> str:
        return decode_utf8(deserializer)

    @override
    def _json_to_value(self, json_value: ProtoType.Json, /) -> str:
        if not isinstance(json_value, str):
            raise TypeError(f'string expects a str, got {type(json_value).__name__}')
        return json_value

    @override
    def _value_to_json(self, value: str, /) -> ProtoType.Json:
        return value

    @override
    def json_key_to_value(self, key: str, /) -> str:
        return key

    @override
    def value_to_json_key(self, value: str, /) -> str:
        self._check_value(value, deep=False)
        return value
