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

from typing import TYPE_CHECKING, Any

from typing_extensions import override

from protowire.proto_types.message_type import MessageType
from protowire.proto_types.proto_type import ProtoType
from protowire.serialization import BadDataError, Deserializer, Serializer
from protowire.serialization.encoding.tag import WireType

if TYPE_CHECKING:
    from protowire.well_known.adapter import WellKnownAdapter


class WellKnownType(ProtoType[Any]):
    """ Proto type for well-known messages that have a native Python representation.

    On the wire these are regular messages, so the conversion goes through the `MessageType` of the message: the
    native value is wrapped into a message value before encoding and unwrapped after decoding. The JSON form is
    handled by the adapter directly.
    """

    __slots__ = ('adapter', 'message_type')

    wire_type = WireType.LEN
    packable = False

    def __init__(self, adapter: WellKnownAdapter, message_type: MessageType) -> None:
        self.adapter = adapter
        self.message_type = message_type

    @override
    def default(self) -> Any:
        return self.adapter.default()

    @override
    def _check_value(self, value: Any, /, *, deep: bool) -> None:
        self.adapter.check_value(value)

    @override
    def _serialize(self, serializer: Serializer, value: Any, /) -> None:
        self.message_type.serialize(serializer, self.adapter.wrap(value))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Any:
        message = self.message_type.deserialize(deserializer)
        try:
            return self.adapter.unwrap(message)
        except ValueError as e:
            raise BadDataError(f'invalid {self.adapter.full_name}: {e}') from e

    @override
    def _json_to_value(self, json_value: ProtoType.Json, /) -> Any:
        return self.adapter.from_json(json_value)

    @override
    def _value_to_json(self, value: Any, /) -> ProtoType.Json:
        return self.adapter.to_json(value)

    @override
    def from_partial(self, value: Any, /) -> Any:
        return self.adapter.normalize(value)
