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

import math
import struct
from typing import Callable, ClassVar

from typing_extensions import override

from protowire.proto_types.proto_type import ProtoType
from protowire.serialization import Deserializer, Serializer
from protowire.serialization.encoding.fixed import decode_double, decode_float, encode_double, encode_float
from protowire.serialization.encoding.tag import WireType
from protowire.utils.json import float_to_json, json_to_float

_FLOAT32_MAX = struct.unpack('<f', bytes.fromhex('ffff7f7f'))[0]


class _FloatingType(ProtoType[float]):
    packable = True

    # XXX: subclass must define these values:
    kind_name: ClassVar[str]
    _encoder: ClassVar[Callable[[Serializer, float], None]]
    _decoder: ClassVar[Callable[[Deserializer], float]]

    @override
    def default(self) -> float:
        return 0.0

    @override
    def is_default(self, value: float, /) -> bool:
        # -0.0 compares equal to 0.0 and is also elided
        return value == 0

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f'{self.kind_name} expects a float, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: float, /) -> None:
        type(self)._encoder(serializer, float(value))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> float:
        return type(self)._decoder(deserializer)

    @override
    def _json_to_value(self, json_value: ProtoType.Json, /) -> float:
        return json_to_float(json_value)

    @override
    def _value_to_json(self, value: float, /) -> ProtoType.Json:
        return float_to_json(float(value))

    @override
    def from_partial(self, value: float, /) -> float:
        self._check_value(value, deep=False)
        return float(value)


class FloatType(_FloatingType):
    """Single precision float, values are rounded to the nearest float32 when encoded."""

    kind_name = 'float'
    wire_type = WireType.I32
    _encoder = staticmethod(encode_float)
    _decoder = staticmethod(decode_float)

    @override
    def _json_to_value(self, json_value: ProtoType.Json, /) -> float:
        value = json_to_float(json_value)
        if math.isfinite(value) and abs(value) > _FLOAT32_MAX:
            raise ValueError(f'float out of range: {value}')
        return value


class DoubleType(_FloatingType):
    kind_name = 'double'
    wire_type = WireType.I64
    _encoder = staticmethod(encode_double)
    _decoder = staticmethod(decode_double)
