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

import math
from typing import Callable, ClassVar

from typing_extensions import override

from protowire.conf.settings import LongMode
from protowire.proto_types.proto_type import ProtoType
from protowire.serialization import Deserializer, PrecisionLossError, Serializer
from protowire.serialization.consts import MAX_SAFE_INTEGER
from protowire.serialization.encoding.fixed import (
    decode_fixed32,
    decode_fixed64,
    decode_sfixed32,
    decode_sfixed64,
    encode_fixed32,
    encode_fixed64,
    encode_sfixed32,
    encode_sfixed64,
)
from protowire.serialization.encoding.tag import WireType
from protowire.serialization.encoding.varint import as_signed, as_unsigned64, decode_varint, encode_varint
from protowire.serialization.encoding.zigzag import zigzag_decode, zigzag_encode
from protowire.utils.json import INTEGER_RE, NUMBER_RE

# values of 64-bit kinds are str when using LongMode.STRING
IntValue = int | str


class _IntProtoType(ProtoType[IntValue]):
    """ Base class of the 10 integer kinds.

    32-bit kinds always use `int` values. 64-bit kinds follow the configured `LongMode`: exact ints (`INT`), ints that
    must fit a double exactly (`NUMBER`), or decimal strings (`STRING`).
    """

    __slots__ = ('_long_mode',)

    packable = True

    # XXX: subclass must define these values:
    kind_name: ClassVar[str]
    _bits: ClassVar[int]
    _signed: ClassVar[bool]

    def __init__(self, long_mode: LongMode = LongMode.INT) -> None:
        self._long_mode = long_mode if self._bits == 64 else LongMode.INT

    @property
    def long_mode(self) -> LongMode:
        return self._long_mode

    def _lower_bound_value(self) -> int:
        return -(1 << (self._bits - 1)) if self._signed else 0

    def _upper_bound_value(self) -> int:
        return (1 << (self._bits - 1)) - 1 if self._signed else (1 << self._bits) - 1

    def _as_int(self, value: IntValue) -> int:
        match value:
            case bool():
                raise TypeError(f'{self.kind_name} expects an int, got bool')
            case int():
                return value
            case str() if self._long_mode is LongMode.STRING:
                try:
                    return int(value, 10)
                except ValueError:
                    raise ValueError(f'{self.kind_name} expects a decimal string, got {value!r}') from None
            case _:
                raise TypeError(f'{self.kind_name} expects an int, got {type(value).__name__}')

    def _check_range(self, value: int) -> None:
        if not self._lower_bound_value() <= value <= self._upper_bound_value():
            raise ValueError(f'{self.kind_name} out of range: {value}')

    def _check_precision(self, value: int) -> None:
        if self._long_mode is LongMode.NUMBER and abs(value) > MAX_SAFE_INTEGER:
            raise PrecisionLossError(f'{self.kind_name} value {value} cannot be represented exactly as a number')

    def _from_int(self, value: int) -> IntValue:
        """Convert a decoded int to the representation of the configured long mode."""
        self._check_precision(value)
        if self._long_mode is LongMode.STRING:
            return str(value)
        return value

    @override
    def default(self) -> IntValue:
        return '0' if self._long_mode is LongMode.STRING else 0

    @override
    def is_default(self, value: IntValue, /) -> bool:
        return self._as_int(value) == 0

    @override
    def _check_value(self, value: IntValue, /, *, deep: bool) -> None:
        int_value = self._as_int(value)
        self._check_range(int_value)
        self._check_precision(int_value)

    @override
    def _serialize(self, serializer: Serializer, value: IntValue, /) -> None:
        self._encode_int(serializer, self._as_int(value))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> IntValue:
        return self._from_int(self._decode_int(deserializer))

    def _encode_int(self, serializer: Serializer, value: int) -> None:
        raise NotImplementedError

    def _decode_int(self, deserializer: Deserializer) -> int:
        raise NotImplementedError

    @override
    def _json_to_value(self, json_value: ProtoType.Json, /) -> IntValue:
        match json_value:
            case bool():
                raise TypeError(f'{self.kind_name} expects a number, got a boolean')
            case int():
                int_value = json_value
            case float():
                int_value = self._integral_float(json_value)
            case str() if INTEGER_RE.fullmatch(json_value):
                int_value = int(json_value, 10)
            case str():
                int_value = self._integral_float(self._parse_float(json_value))
            case _:
                raise TypeError(f'{self.kind_name} expects a number, got {type(json_value).__name__}')
        self._check_range(int_value)
        return self._from_int(int_value)

    def _parse_float(self, text: str) -> float:
        if NUMBER_RE.fullmatch(text) is None:
            raise ValueError(f'invalid {self.kind_name}: {text!r}')
        return float(text)

    def _integral_float(self, value: float) -> int:
        if not math.isfinite(value) or not value.is_integer():
            raise ValueError(f'{self.kind_name} expects an integer, got {value}')
        return int(value)

    @override
    def _value_to_json(self, value: IntValue, /) -> ProtoType.Json:
        int_value = self._as_int(value)
        if self._bits == 32:
            return int_value
        match self._long_mode:
            case LongMode.INT:
                return int_value if abs(int_value) <= MAX_SAFE_INTEGER else str(int_value)
            case LongMode.NUMBER:
                return int_value
            case LongMode.STRING:
                return str(int_value)
            case _:
                raise NotImplementedError(self._long_mode)

    @override
    def from_partial(self, value: IntValue, /) -> IntValue:
        self._check_value(value, deep=False)
        return self._from_int(self._as_int(value))

    @override
    def json_key_to_value(self, key: str, /) -> IntValue:
        return self.json_to_value(key)

    @override
    def value_to_json_key(self, value: IntValue, /) -> str:
        return str(self._as_int(value))


class _VarintType(_IntProtoType):
    wire_type = WireType.VARINT

    @override
    def _encode_int(self, serializer: Serializer, value: int) -> None:
        # negative values are sign-extended to 64 bits, even for 32-bit kinds
        encode_varint(serializer, as_unsigned64(value))

    @override
    def _decode_int(self, deserializer: Deserializer) -> int:
        value = decode_varint(deserializer)
        if self._signed:
            return as_signed(value, self._bits)
        return value & ((1 << self._bits) - 1)


class _ZigZagType(_IntProtoType):
    wire_type = WireType.VARINT
    _signed = True

    @override
    def _encode_int(self, serializer: Serializer, value: int) -> None:
        encode_varint(serializer, zigzag_encode(value, self._bits))

    @override
    def _decode_int(self, deserializer: Deserializer) -> int:
        return zigzag_decode(decode_varint(deserializer) & ((1 << self._bits) - 1))


class _FixedType(_IntProtoType):
    # XXX: subclass must define these values:
    _encoder: ClassVar[Callable[[Serializer, int], None]]
    _decoder: ClassVar[Callable[[Deserializer], int]]

    @override
    def _encode_int(self, serializer: Serializer, value: int) -> None:
        type(self)._encoder(serializer, value)

    @override
    def _decode_int(self, deserializer: Deserializer) -> int:
        return type(self)._decoder(deserializer)


class Int32Type(_VarintType):
    kind_name = 'int32'
    _bits = 32
    _signed = True


class Int64Type(_VarintType):
    kind_name = 'int64'
    _bits = 64
    _signed = True


class Uint32Type(_VarintType):
    kind_name = 'uint32'
    _bits = 32
    _signed = False


class Uint64Type(_VarintType):
    kind_name = 'uint64'
    _bits = 64
    _signed = False


class Sint32Type(_ZigZagType):
    kind_name = 'sint32'
    _bits = 32


class Sint64Type(_ZigZagType):
    kind_name = 'sint64'
    _bits = 64


class Fixed32Type(_FixedType):
    kind_name = 'fixed32'
    wire_type = WireType.I32
    _bits = 32
    _signed = False
    _encoder = staticmethod(encode_fixed32)
    _decoder = staticmethod(decode_fixed32)


class Fixed64Type(_FixedType):
    kind_name = 'fixed64'
    wire_type = WireType.I64
    _bits = 64
    _signed = False
    _encoder = staticmethod(encode_fixed64)
    _decoder = staticmethod(decode_fixed64)


class Sfixed32Type(_FixedType):
    kind_name = 'sfixed32'
    wire_type = WireType.I32
    _bits = 32
    _signed = True
    _encoder = staticmethod(encode_sfixed32)
    _decoder = staticmethod(decode_sfixed32)


class Sfixed64Type(_FixedType):
    kind_name = 'sfixed64'
    wire_type = WireType.I64
    _bits = 64
    _signed = True
    _encoder = staticmethod(encode_sfixed64)
    _decoder = staticmethod(decode_sfixed64)
