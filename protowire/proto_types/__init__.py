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

from protowire.conf.settings import LongMode
from protowire.proto_types.bool_type import BoolType
from protowire.proto_types.bytes_type import BytesType
from protowire.proto_types.enum_type import EnumType
from protowire.proto_types.float_types import DoubleType, FloatType
from protowire.proto_types.int_types import (
    Fixed32Type,
    Fixed64Type,
    Int32Type,
    Int64Type,
    Sfixed32Type,
    Sfixed64Type,
    Sint32Type,
    Sint64Type,
    Uint32Type,
    Uint64Type,
)
from protowire.proto_types.message_type import MessageType
from protowire.proto_types.proto_type import ProtoType
from protowire.proto_types.str_type import StrType
from protowire.proto_types.well_known_type import WellKnownType

# kind name -> ProtoType class, for every kind that is fully described by its name
SCALAR_TYPE_MAP: dict[str, type[ProtoType]] = {
    'double': DoubleType,
    'float': FloatType,
    'int32': Int32Type,
    'int64': Int64Type,
    'uint32': Uint32Type,
    'uint64': Uint64Type,
    'sint32': Sint32Type,
    'sint64': Sint64Type,
    'fixed32': Fixed32Type,
    'fixed64': Fixed64Type,
    'sfixed32': Sfixed32Type,
    'sfixed64': Sfixed64Type,
    'bool': BoolType,
    'string': StrType,
    'bytes': BytesType,
}


def make_scalar_type(kind_name: str, *, long_mode: LongMode = LongMode.INT) -> ProtoType:
    """ Instantiate the ProtoType of a scalar kind, the long mode only affects the 64-bit integer kinds.

    >>> make_scalar_type('sint64', long_mode=LongMode.STRING).default()
    '0'
    >>> make_scalar_type('message')
    Traceback (most recent call last):
        ...
    KeyError: 'message is not a scalar kind'
    """
    try:
        proto_type_class = SCALAR_TYPE_MAP[kind_name]
    except KeyError:
        raise KeyError(f'{kind_name} is not a scalar kind') from None
    if issubclass(proto_type_class, _INT_TYPES):
        return proto_type_class(long_mode)
    return proto_type_class()


_INT_TYPES = (
    Int32Type,
    Int64Type,
    Uint32Type,
    Uint64Type,
    Sint32Type,
    Sint64Type,
    Fixed32Type,
    Fixed64Type,
    Sfixed32Type,
    Sfixed64Type,
)

__all__ = [
    'SCALAR_TYPE_MAP',
    'BoolType',
    'BytesType',
    'DoubleType',
    'EnumType',
    'Fixed32Type',
    'Fixed64Type',
    'FloatType',
    'Int32Type',
    'Int64Type',
    'MessageType',
    'ProtoType',
    'Sfixed32Type',
    'Sfixed64Type',
    'Sint32Type',
    'Sint64Type',
    'StrType',
    'Uint32Type',
    'Uint64Type',
    'WellKnownType',
    'make_scalar_type',
]
