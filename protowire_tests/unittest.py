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

import unittest
from pathlib import Path
from typing import Any, Callable

from structlog import get_logger

from protowire.codec import MessageCodec
from protowire.conf.settings import CodecSettings
from protowire.registry import SchemaRegistry
from protowire.serialization import Serializer
from protowire.serialization.encoding.tag import WireType, encode_tag

logger = get_logger()
main = unittest.main

RESOURCES_DIR = Path(__file__).parent / 'resources'
ATTESTATION_SCHEMA_FILEPATH = RESOURCES_DIR / 'attestation.yml'
TESTING_SCHEMA_FILEPATH = RESOURCES_DIR / 'testing.yml'


def build_bytes(*writers: Callable[[Serializer], None]) -> bytes:
    """Run every writer on a fresh serializer and return the result, used to craft wire data by hand."""
    serializer = Serializer.build_bytes_serializer()
    for writer in writers:
        writer(serializer)
    return bytes(serializer.finalize())


def tag(field_number: int, wire_type: WireType) -> Callable[[Serializer], None]:
    return lambda serializer: encode_tag(serializer, field_number, wire_type)


def raw(data: bytes) -> Callable[[Serializer], None]:
    return lambda serializer: serializer.write_bytes(data)


class TestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.log = logger.new(test=self.id())
        self.registry = SchemaRegistry.from_yaml_files([ATTESTATION_SCHEMA_FILEPATH, TESTING_SCHEMA_FILEPATH])

    def get_codec(self, name: str, **settings: Any) -> MessageCodec:
        return self.registry.codec(name, CodecSettings(**settings))

    def assertRoundTrip(self, codec: MessageCodec, message: dict[str, Any]) -> bytes:
        """Check binary and JSON round trips of a message and return its encoding."""
        expected = codec.from_partial(message)
        data = codec.encode(message)
        decoded = codec.decode(data)
        self.assertEqual(decoded, expected)
        self.assertEqual(codec.encode(decoded), data)
        self.assertEqual(codec.from_json(codec.to_json(message)), expected)
        return data
