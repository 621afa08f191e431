"""
Settings shared by every stage of an update run
"""
import os
import sys
import platform as _platform
from typing import Optional

from .errors import ConfigurationError
import logging
logger = logging.getLogger(__name__)

CATALOG_URL = 'https://go.dev/dl/?mode=json&include=all'
DOWNLOAD_BASE = 'https://go.dev/dl'
PRODUCT = 'go'
INSTALL_ROOT = '/usr/local/go'
BACKUP_DIR = '/usr/local/go-bak'
SCRATCH_FILE = 'go.tar.gz'

STRATEGY_BACKUP = 'backup'
STRATEGY_DESTRUCTIVE = 'destructive'
STRATEGIES = (STRATEGY_BACKUP, STRATEGY_DESTRUCTIVE)

ENV_PREFIX = 'GOUPDATE_'

_MACHINE_MAP = {
    'x86_64': 'amd64',
    'amd64': 'amd64',
    'aarch64': 'arm64',
    'arm64': 'arm64',
    'i386': '386',
    'i686': '386',
    'armv6l': 'armv6l',
    'armv7l': 'armv6l',
}


def platform() -> str:
    """Go's name for the current platform, eg linux-amd64"""
    p = sys.platform
    if p.startswith('linux'):
        os_name = 'linux'
    elif p == 'darwin':
        os_name = 'darwin'
    elif p.startswith('freebsd'):
        os_name = 'freebsd'
    else:
        raise ConfigurationError(f'Unsupported platform: {p}')

    machine = _platform.machine().lower()
    arch = _MACHINE_MAP.get(machine, machine)
    return f'{os_name}-{arch}'


class UpdaterConfig(object):
    """
    Paths and endpoints used by an update run.

    Built once at start-up and handed to each collaborator; nothing
    modifies it afterwards. Use replace() to derive a variant.
    """
    FIELDS = ('catalog_url', 'download_base', 'product', 'platform',
              'install_root', 'extract_dir', 'backup_dir', 'scratch_file',
              'strategy', 'current_version')

    def __init__(self,
                 catalog_url: str = CATALOG_URL,
                 download_base: str = DOWNLOAD_BASE,
                 product: str = PRODUCT,
                 platform: Optional[str] = None,
                 install_root: str = INSTALL_ROOT,
                 extract_dir: Optional[str] = None,
                 backup_dir: str = BACKUP_DIR,
                 scratch_file: str = SCRATCH_FILE,
                 strategy: str = STRATEGY_BACKUP,
                 current_version: Optional[str] = None):
        if strategy not in STRATEGIES:
            raise ConfigurationError(
                f'Unknown install strategy: {strategy}. Expected one of {", ".join(STRATEGIES)}')

        self.catalog_url = catalog_url
        self.download_base = download_base.rstrip('/')
        self.product = product
        self._platform = platform
        self.install_root = install_root
        self._extract_dir = extract_dir
        self.backup_dir = backup_dir
        self.scratch_file = scratch_file
        self.strategy = strategy
        self.current_version = current_version

    @property
    def platform(self) -> str:
        if self._platform:
            return self._platform
        return platform()

    @property
    def extract_dir(self) -> str:
        # the archive unpacks to <product>/, so extracting into the parent lands on install_root
        if self._extract_dir:
            return self._extract_dir
        return os.path.dirname(self.install_root.rstrip('/'))

    @classmethod
    def from_environment(cls, environ=None) -> 'UpdaterConfig':
        """
        Build a configuration from the defaults, overridden by any
        GOUPDATE_<FIELD> environment variables (eg GOUPDATE_INSTALL_ROOT)
        """
        if environ is None:
            environ = os.environ

        kwargs = {}
        for field in cls.FIELDS:
            if field == 'product':
                continue
            value = environ.get(ENV_PREFIX + field.upper())
            if value:
                kwargs[field] = value

        if kwargs:
            logger.debug('Configuration from environment: %s', kwargs)
        return cls(**kwargs)

    def replace(self, **overrides) -> 'UpdaterConfig':
        """Return a copy with the given fields replaced. None values are ignored."""
        values = {f: getattr(self, f) for f in self.FIELDS
                  if f not in ('platform', 'extract_dir')}
        values['platform'] = self._platform
        values['extract_dir'] = self._extract_dir
        for k, v in overrides.items():
            if k not in self.FIELDS:
                raise ConfigurationError(f'Unknown configuration field: {k}')
            if v is not None:
                values[k] = v
        return UpdaterConfig(**values)

    def __repr__(self):
        fields = ', '.join(f'{f}={getattr(self, f)!r}' for f in self.FIELDS
                           if f not in ('platform', 'extract_dir'))
        return f'UpdaterConfig({fields})'
