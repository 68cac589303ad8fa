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
A packed collection is a sequence of scalar values with fixed-size or varint encodings written back to back inside a
single length-delimited region, without tags.

Layout: [N: varint][value_0]...[value_k], where N is the total size in bytes of the values

An empty collection is still a valid region (`00`), but fields never write it, an empty repeated field is omitted.

>>> from protowire.serialization.encoding.varint import encode_varint, decode_varint
>>> se = Serializer.build_bytes_serializer()
>>> encode_packed(se, [3, 270, 86942], encode_varint)
>>> bytes(se.finalize()).hex()
'06038e029ea705'

Breakdown of the result:

    06: 6 bytes follow
    03: 3
    8e02: 270
    9ea705: 86942

When decoding, the builder can be any compatible collection, it only matters that it can be initialized with an
`Iterable[T]`.

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('06038e029ea705'))
>>> decode_packed(de, decode_varint, tuple)
(3, 270, 86942)
>>> de.finalize()
"""

from collections.abc import Collection, Iterable, Iterator
from typing import Callable, TypeVar

from protowire.serialization import Deserializer, Serializer
from protowire.serialization.bytes_deserializer import BytesDeserializer
from protowire.serialization.encoding.varint import decode_varint

from . import Decoder, Encoder

T = TypeVar('T')
R = TypeVar('R', bound=Collection)


def encode_packed(serializer: Serializer, values: Iterable[T], encoder: Encoder[T]) -> None:
    serializer.fork()
    for value in values:
        encoder(serializer, value)
    serializer.ldelim()


def decode_packed(
    deserializer: Deserializer,
    decoder: Decoder[T],
    builder: Callable[[Iterable[T]], R],
) -> R:
    length = decode_varint(deserializer)
    # a packed region is not a nested message, it stays at the same depth
    region = BytesDeserializer(
        deserializer.read_bytes(length),
        depth=deserializer.nesting_depth(),
        recursion_limit=deserializer.recursion_limit(),
    )

    def iter_values() -> Iterator[T]:
        while not region.is_empty():
            yield decoder(region)

    result = builder(iter_values())
    region.finalize()
    return result
