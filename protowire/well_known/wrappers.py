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

r"""
The wrapper messages (`google.protobuf.BoolValue`, `Int64Value`, `StringValue` and the rest), each holding a single
scalar `value` field, represented natively as the scalar itself.

A field of a wrapper type has presence, so it can tell an unset value (None) from the default value. In JSON a wrapper
is the bare JSON form of its scalar.

>>> BoolValueAdapter().wrap(False)
{'value': False}
>>> Int64ValueAdapter().to_json(2**60)
'1152921504606846976'
>>> Int64ValueAdapter().with_long_mode(LongMode.STRING).from_json(5)
'5'
>>> BytesValueAdapter().from_json('-_8')
b'\xfb\xff'
"""

from typing import Any, ClassVar

from typing_extensions import Self, override

from protowire.conf.settings import LongMode
from protowire.proto_types import ProtoType, make_scalar_type
from protowire.schema.descriptors import FieldDescriptor, MessageDescriptor
from protowire.schema.field_kind import FieldKind
from protowire.utils.json import JsonValue
from protowire.well_known.adapter import Message, WellKnownAdapter


def _wrapper_descriptor(name: str, kind: FieldKind) -> MessageDescriptor:
    return MessageDescriptor(
        name=f'google.protobuf.{name}',
        fields=(FieldDescriptor(name='value', number=1, kind=kind),),
    )


class WrapperAdapter(WellKnownAdapter[Any]):
    """ Base adapter of the wrapper messages, conversions are delegated to the ProtoType of the wrapped scalar.
    """

    __slots__ = ('long_mode', 'value_type')

    # XXX: subclasses must initialize this
    kind: ClassVar[FieldKind]

    long_mode: LongMode
    value_type: ProtoType

    def __init__(self, long_mode: LongMode = LongMode.INT) -> None:
        self.long_mode = long_mode
        self.value_type = make_scalar_type(self.kind.value, long_mode=long_mode)

    @override
    def with_long_mode(self, long_mode: LongMode) -> Self:
        if long_mode is self.long_mode:
            return self
        return type(self)(long_mode)

    @override
    def default(self) -> Any:
        return self.value_type.default()

    @override
    def check_value(self, value: Any) -> None:
        self.value_type.check_value(value)

    @override
    def normalize(self, value: Any) -> Any:
        return self.value_type.from_partial(value)

    @override
    def wrap(self, value: Any) -> Message:
        return {'value': value}

    @override
    def unwrap(self, message: Message) -> Any:
        return message['value']

    @override
    def to_json(self, value: Any) -> JsonValue:
        return self.value_type.value_to_json(value)

    @override
    def from_json(self, json_value: JsonValue) -> Any:
        return self.value_type.json_to_value(json_value)


class DoubleValueAdapter(WrapperAdapter):
    kind = FieldKind.DOUBLE
    descriptor = _wrapper_descriptor('DoubleValue', kind)
    full_name = descriptor.name


class FloatValueAdapter(WrapperAdapter):
    kind = FieldKind.FLOAT
    descriptor = _wrapper_descriptor('FloatValue', kind)
    full_name = descriptor.name


class Int64ValueAdapter(WrapperAdapter):
    kind = FieldKind.INT64
    descriptor = _wrapper_descriptor('Int64Value', kind)
    full_name = descriptor.name


class UInt64ValueAdapter(WrapperAdapter):
    kind = FieldKind.UINT64
    descriptor = _wrapper_descriptor('UInt64Value', kind)
    full_name = descriptor.name


class Int32ValueAdapter(WrapperAdapter):
    kind = FieldKind.INT32
    descriptor = _wrapper_descriptor('Int32Value', kind)
    full_name = descriptor.name


class UInt32ValueAdapter(WrapperAdapter):
    kind = FieldKind.UINT32
    descriptor = _wrapper_descriptor('UInt32Value', kind)
    full_name = descriptor.name


class BoolValueAdapter(WrapperAdapter):
    kind = FieldKind.BOOL
    descriptor = _wrapper_descriptor('BoolValue', kind)
    full_name = descriptor.name


class StringValueAdapter(WrapperAdapter):
    kind = FieldKind.STRING
    descriptor = _wrapper_descriptor('StringValue', kind)
    full_name = descriptor.name


class BytesValueAdapter(WrapperAdapter):
    kind = FieldKind.BYTES
    descriptor = _wrapper_descriptor('BytesValue', kind)
    full_name = descriptor.name


WRAPPER_ADAPTERS: tuple[WrapperAdapter, ...] = (
    DoubleValueAdapter(),
    FloatValueAdapter(),
    Int64ValueAdapter(),
    UInt64ValueAdapter(),
    Int32ValueAdapter(),
    UInt32ValueAdapter(),
    BoolValueAdapter(),
    StringValueAdapter(),
    BytesValueAdapter(),
)
