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
from protowire.serialization.encoding.bytes import decode_bytes, encode_bytes
from protowire.serialization.encoding.tag import WireType
from protowire.utils.json import bytes_to_json, json_to_bytes


class BytesType(ProtoType[bytes]):
    """Raw bytes, base64 in JSON."""

    wire_type = WireType.LEN
    packable = False

    @override
    def default(self) -> bytes:
        return b''

    @override
    def is_default(self, value: bytes, /) -> bool:
        return len(value) == 0

    @override
    def _check_value(self, value: bytes, /, *, deep: bool) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f'bytes expects a bytes-like value, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: bytes, /) -> None:
        encode_bytes(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> bytes:
        return decode_bytes(deserializer)

    @override
    def _json_to_value(self, json_value: ProtoType.Json, /) -> bytes:
        if not isinstance(json_value, str):
            raise TypeError(f'bytes expects a base64 string, got {type(json_value).__name__}')
        return json_to_bytes(json_value)

    @override
    def _value_to_json(self, value: bytes, /) -> ProtoType.Json:
        return bytes_to_json(bytes(value))

    @override
    def from_partial(self, value: bytes, /) -> bytes:
        self._check_value(value, deep=False)
        return bytes(value)
