import pytest

from goupdate import config as cfg
from goupdate.config import UpdaterConfig
from goupdate.errors import ConfigurationError


def test_defaults():
    c = UpdaterConfig(platform='linux-amd64')
    assert c.catalog_url == 'https://go.dev/dl/?mode=json&include=all'
    assert c.install_root == '/usr/local/go'
    assert c.extract_dir == '/usr/local'
    assert c.backup_dir == '/usr/local/go-bak'
    assert c.scratch_file == 'go.tar.gz'
    assert c.strategy == 'backup'
    assert c.current_version is None


def test_from_environment():
    environ = {
        'GOUPDATE_INSTALL_ROOT': '/opt/go',
        'GOUPDATE_STRATEGY': 'destructive',
        'GOUPDATE_PLATFORM': 'darwin-arm64',
        'GOUPDATE_SCRATCH_FILE': '',
        'UNRELATED': 'x',
    }
    c = UpdaterConfig.from_environment(environ)
    assert c.install_root == '/opt/go'
    assert c.extract_dir == '/opt'
    assert c.strategy == 'destructive'
    assert c.platform == 'darwin-arm64'
    assert c.scratch_file == 'go.tar.gz'


def test_replace_ignores_none():
    c = UpdaterConfig(platform='linux-amd64', extract_dir='/srv')
    c2 = c.replace(strategy=None, install_root='/srv/go', backup_dir='/srv/go-old')
    assert c2.strategy == 'backup'
    assert c2.install_root == '/srv/go'
    assert c2.backup_dir == '/srv/go-old'
    assert c2.extract_dir == '/srv'
    assert c2.platform == 'linux-amd64'
    assert c.install_root == '/usr/local/go'


def test_replace_on_unknown_host(monkeypatch):
    monkeypatch.setattr(cfg.sys, 'platform', 'win32')

    c = UpdaterConfig()
    assert c.replace(platform='linux-amd64').platform == 'linux-amd64'
    c2 = c.replace(strategy='destructive')
    assert c2.strategy == 'destructive'

    # detection only happens when the platform is read, and is never stored
    assert c._platform is None
    assert c2._platform is None
    with pytest.raises(ConfigurationError):
        c2.platform


def test_invalid_values():
    with pytest.raises(ConfigurationError):
        UpdaterConfig(strategy='sideways')
    with pytest.raises(ConfigurationError):
        UpdaterConfig().replace(colour='blue')


def test_platform_detection(monkeypatch):
    CASES = [
        ('linux', 'x86_64', 'linux-amd64'),
        ('linux', 'aarch64', 'linux-arm64'),
        ('darwin', 'arm64', 'darwin-arm64'),
        ('freebsd13', 'amd64', 'freebsd-amd64'),
        ('linux', 'riscv64', 'linux-riscv64'),
    ]
    for sys_platform, machine, expected in CASES:
        monkeypatch.setattr(cfg.sys, 'platform', sys_platform)
        monkeypatch.setattr(cfg._platform, 'machine', lambda: machine)
        assert cfg.platform() == expected

    monkeypatch.setattr(cfg.sys, 'platform', 'win32')
    with pytest.raises(ConfigurationError):
        cfg.platform()
