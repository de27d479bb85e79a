import dataclasses

import pytest

from javaninja import JarSpec


def test_directory():
    spec = JarSpec.directory('out/classes', 'out/classes.list')
    assert not spec.is_archive()
    assert spec.jar_args() == ['-C', 'out/classes', '-l', 'out/classes.list']
    assert spec.deps() == ['out/classes.list']


def test_archive():
    spec = JarSpec.archive('prebuilts/lib.jar')
    assert spec.is_archive()
    assert spec.jar_args() == ['-j', 'prebuilts/lib.jar']
    assert spec.deps() == ['prebuilts/lib.jar']


def test_immutable():
    spec = JarSpec.archive('lib.jar')
    with pytest.raises(dataclasses.FrozenInstanceError):
        spec.path = 'other.jar'
    assert spec == JarSpec.archive('lib.jar')
    assert len({spec, JarSpec.archive('lib.jar')}) == 1
