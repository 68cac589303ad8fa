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
from protowire.serialization.encoding.bool import decode_bool, encode_bool
from protowire.serialization.encoding.tag import WireType


class BoolType(ProtoType[bool]):
    wire_type = WireType.VARINT
    packable = True

    @override
    def default(self) -> bool:
        return False

    @override
    def _check_value(self, value: bool, /, *, deep: bool) -> None:
        if not isinstance(value, bool):
            raise TypeError(f'bool expects a bool, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: bool, /) -> None:
        encode_bool(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> bool:
        return decode_bool(deserializer)

    @override
    def _json_to_value(self, json_value: ProtoType.Json, /) -> bool:
        if not isinstance(json_value, bool):
            raise TypeError(f'bool expects true or false, got {type(json_value).__name__}')
        return json_value

    @override
    def _value_to_json(self, value: bool, /) -> ProtoType.Json:
        return value

    @override
    def json_key_to_value(self, key: str, /) -> bool:
        match key:
            case 'true':
                return True
            case 'false':
                return False
            case _:
                return self.json_to_value(key)

    @override
    def value_to_json_key(self, value: bool, /) -> str:
        self._check_value(value, deep=False)
        return 'true' if value else 'false'
