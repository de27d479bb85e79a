import pytest

from javaninja import Config, SdkPolicy, TranslateToggles


def test_sdk_policy():
    sdk = SdkPolicy()
    assert sdk.boot_classpath('') == 'core-libart'
    assert sdk.boot_classpath('current') == 'android_stubs_current'
    assert sdk.boot_classpath('system_current') == 'android_system_stubs_current'
    assert sdk.boot_classpath('23') == 'sdk_v23'


def test_precedence(monkeypatch):
    monkeypatch.setenv('JAVANINJA_OUT_DIR', 'env-out')
    monkeypatch.setenv('JAVAC', '/opt/jdk/bin/javac')
    monkeypatch.setenv('DX', 'env-dx')
    config = Config.load({'dx': 'definition-dx'}, {'out_dir': 'option-out', 'install_dir': None})
    assert config.out_dir == 'option-out'
    assert config.javac == '/opt/jdk/bin/javac'
    assert config.dx == 'definition-dx'
    assert config.install_root == 'option-out/install'
    assert config.intermediates_dir('host', 'lib') == 'option-out/host/lib'
    assert config.install_path('device', 'framework') == 'option-out/install/device/framework'


def test_toggles(monkeypatch):
    monkeypatch.delenv('NO_OPTIMIZE_DX', raising=False)
    monkeypatch.setenv('GENERATE_DEX_DEBUG', '1')
    monkeypatch.setenv('EMMA_INSTRUMENT', 'true')
    assert Config.load().toggles == TranslateToggles(no_optimize=False, debug_dump=True, instrument=True)


def test_unknown_sdk_attribute():
    with pytest.raises(SystemExit):
        Config.load({'sdk': {'stubs': 'x'}})
