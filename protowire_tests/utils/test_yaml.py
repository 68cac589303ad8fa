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

from pathlib import Path

import pytest

from protowire.utils.yaml import dict_from_extended_yaml, dict_from_yaml


def _write(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


def test_dict_from_yaml(tmp_path):
    assert dict_from_yaml(filepath=_write(tmp_path / 'a.yml', 'a: 1\n')) == {'a': 1}
    assert dict_from_yaml(filepath=_write(tmp_path / 'empty.yml', '')) == {}
    with pytest.raises(ValueError):
        dict_from_yaml(filepath=_write(tmp_path / 'list.yml', '- 1\n'))


def test_extends_chain(tmp_path):
    (tmp_path / 'sub').mkdir()
    _write(tmp_path / 'base.yml', 'a: 1\nnested: {x: 1, y: 2}\n')
    _write(tmp_path / 'sub' / 'middle.yml', 'extends: ../base.yml\nb: 2\nnested: {y: 3}\n')
    top = _write(tmp_path / 'sub' / 'top.yml', 'extends: middle.yml\nc: 3\n')
    assert dict_from_extended_yaml(filepath=top) == {'a': 1, 'b': 2, 'c': 3, 'nested': {'x': 1, 'y': 3}}


def test_extends_cycle(tmp_path):
    _write(tmp_path / 'a.yml', 'extends: b.yml\n')
    _write(tmp_path / 'b.yml', 'extends: a.yml\n')
    with pytest.raises(ValueError, match='cycle'):
        dict_from_extended_yaml(filepath=tmp_path / 'a.yml')


def test_extends_missing_file(tmp_path):
    top = _write(tmp_path / 'top.yml', 'extends: missing.yml\n')
    with pytest.raises(ValueError):
        dict_from_extended_yaml(filepath=top)
