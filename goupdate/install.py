import os
import subprocess
from typing import Optional

from .config import UpdaterConfig, STRATEGY_BACKUP, STRATEGY_DESTRUCTIVE
from .errors import ProcessExecutionError, ConfigurationError, WriteError
import logging
logger = logging.getLogger(__name__)

VERSION_FILE = 'VERSION'


class SubprocessRunner(object):
    '''
    Runs external commands synchronously. There is no timeout: a command
    that hangs, hangs the update.

    Tests swap in any object with the same run(command, args) method.
    '''
    def run(self, command, args):
        cmd = [command] + list(args)
        logger.debug('Running %s', ' '.join(cmd))
        try:
            output = subprocess.check_output(cmd, stderr=subprocess.PIPE)
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b'').decode('utf-8', errors='replace').strip()
            raise ProcessExecutionError(command, args, e.returncode, stderr) from e
        except OSError as e:
            raise ProcessExecutionError(command, args, stderr=str(e)) from e
        return output.decode('utf-8', errors='replace')


def current_version(config: UpdaterConfig) -> Optional[str]:
    '''
    Version of the toolchain at config.install_root, without the product prefix.

    Uses config.current_version when set, otherwise the first line of the
    VERSION file shipped in Go distributions. None if neither is available.
    '''
    if config.current_version:
        first_line = config.current_version.strip()
    else:
        fn = os.path.join(config.install_root, VERSION_FILE)
        try:
            with open(fn) as f:
                first_line = f.readline().strip()
        except OSError:
            logger.debug('No readable %s', fn)
            return None

    if not first_line:
        return None
    if first_line.startswith(config.product):
        return first_line[len(config.product):]
    return first_line


def extract_archive(config: UpdaterConfig, runner):
    runner.run('tar', ['-C', config.extract_dir, '-xzf', config.scratch_file])
    print('Extracted the new version.')


def move_old_version(config: UpdaterConfig, runner):
    runner.run('mv', [config.install_root, config.backup_dir])
    print('Moved previous installation to: ', config.backup_dir)


def remove_old_version_backup(config: UpdaterConfig, runner):
    runner.run('rm', ['-rf', config.backup_dir])
    print('Removed previous installation.')


def remove_old_version(config: UpdaterConfig, runner):
    runner.run('rm', ['-rf', config.install_root])
    print('Removed previous installation.')


def backup_install(config: UpdaterConfig, runner):
    '''
    Move the live installation aside, then unpack the new one in its place.
    Nothing is unpacked if the move fails.
    '''
    move_old_version(config, runner)
    extract_archive(config, runner)


def destructive_install(config: UpdaterConfig, runner):
    '''
    Delete the live installation, then unpack the new one in its place.
    If unpacking fails there is nothing to go back to.
    '''
    remove_old_version(config, runner)
    extract_archive(config, runner)


INSTALL_STRATEGIES = {
    STRATEGY_BACKUP: backup_install,
    STRATEGY_DESTRUCTIVE: destructive_install
}


def remove_scratch_file(config: UpdaterConfig):
    try:
        os.remove(config.scratch_file)
    except OSError as e:
        raise WriteError(f'failed to remove the file: {e}') from e
    logger.debug('Removed %s', config.scratch_file)


def install_release(config: UpdaterConfig, runner=None):
    '''
    Replace the installation at config.install_root with the archive in
    config.scratch_file, then clean up.

    Parameters:

    * config - paths and the install strategy ('backup' or 'destructive')
    * runner - runs tar/mv/rm. Defaults to SubprocessRunner()

    The scratch file is only removed once extraction has succeeded, and the
    backup (backup strategy) only once the scratch file is gone.
    '''
    if runner is None:
        runner = SubprocessRunner()

    strategy = INSTALL_STRATEGIES.get(config.strategy)
    if strategy is None:
        raise ConfigurationError(f'Unknown install strategy: {config.strategy}')

    logger.info('Installing %s into %s using the %s strategy',
                config.scratch_file, config.install_root, config.strategy)
    strategy(config, runner)
    remove_scratch_file(config)

    if config.strategy == STRATEGY_BACKUP:
        remove_old_version_backup(config, runner)
