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

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable

from typing_extensions import override

from protowire.proto_types.proto_type import ProtoType
from protowire.serialization import Deserializer, Serializer
from protowire.serialization.compound_encoding.length_delimited import (
    decode_length_delimited,
    encode_length_delimited,
)
from protowire.serialization.encoding.tag import WireType

if TYPE_CHECKING:
    from protowire.codec import MessageCodec

Message = dict[str, Any]


class MessageType(ProtoType[Message]):
    """ Proto type for nested messages, written as a length-delimited region holding the message fields.

    The codec of the nested message is resolved on first use, which allows recursive message types.
    """

    __slots__ = ('type_name', '_codec_getter', '_codec')

    wire_type = WireType.LEN
    packable = False

    def __init__(self, type_name: str, codec_getter: Callable[[], MessageCodec]) -> None:
        self.type_name = type_name
        self._codec_getter = codec_getter
        self._codec: MessageCodec | None = None

    @property
    def codec(self) -> MessageCodec:
        if self._codec is None:
            self._codec = self._codec_getter()
        return self._codec

    @override
    def default(self) -> Message:
        return self.codec.default()

    @override
    def _check_value(self, value: Message, /, *, deep: bool) -> None:
        if not isinstance(value, Mapping):
            raise TypeError(f'{self.type_name} expects a mapping, got {type(value).__name__}')
        if deep:
            self.codec.check_value(value)

    @override
    def _serialize(self, serializer: Serializer, value: Message, /) -> None:
        encode_length_delimited(serializer, value, self.codec.encode_to)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Message:
        return decode_length_delimited(deserializer, self.codec.decode_from)

    @override
    def _json_to_value(self, json_value: ProtoType.Json, /) -> Message:
        return self.codec.from_json(json_value)

    @override
    def _value_to_json(self, value: Message, /) -> ProtoType.Json:
        return self.codec.to_json(value)

    @override
    def from_partial(self, value: Message, /) -> Message:
        return self.codec.from_partial(value)
