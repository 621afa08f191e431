#!/usr/bin/env python3
"""
Command-line interface for updating the Go toolchain
"""
import sys
import argparse
import logging

from goupdate import releases, selection, install as installer
from goupdate.config import UpdaterConfig, STRATEGIES
from goupdate.errors import (
    UpdateError, FetchError, ParseError, WriteError,
    EXIT_OK, EXIT_NO_VERSIONS, EXIT_BAD_OUTPUT_FILE, EXIT_FAILURE, EXIT_INTERRUPTED
)

logger = logging.getLogger(__name__)


def _error(msg):
    print(msg, file=sys.stderr)


def _config_from_args(args) -> UpdaterConfig:
    config = UpdaterConfig.from_environment()
    return config.replace(
        strategy=getattr(args, 'strategy', None),
        install_root=getattr(args, 'install_root', None),
        backup_dir=getattr(args, 'backup_dir', None),
        scratch_file=getattr(args, 'scratch_file', None),
        platform=getattr(args, 'platform', None),
    )


def run_update(config: UpdaterConfig, prompt=None, runner=None, requested=None, session=None) -> int:
    """
    Fetch, select, download and install a release. Returns the process exit code.
    """
    try:
        versions = releases.list_available_versions(config, session=session)
    except (FetchError, ParseError) as e:
        _error(f'failed to get versions: {e}')
        return EXIT_NO_VERSIONS

    current = installer.current_version(config)
    print('Current version: ', current or 'none')
    print('Versions:', ', '.join(versions))

    try:
        version = selection.select_version(versions, prompt=prompt, requested=requested)
    except UpdateError as e:
        _error(str(e))
        return EXIT_FAILURE

    if selection.is_installed(version, current):
        print('Version already installed.')
        return EXIT_OK

    url = releases.download_url(version, config)

    try:
        with releases.open_scratch_file(config.scratch_file) as f:
            try:
                releases.download_release(url, f, session=session)
            except UpdateError as e:
                _error(f'failed to download the file: {e}')
                return EXIT_FAILURE

            try:
                installer.install_release(config, runner=runner)
            except UpdateError as e:
                _error(f'failed to install the new version: {e}')
                return EXIT_FAILURE
    except WriteError as e:
        # only reached when the scratch file could not be created
        _error(str(e))
        return EXIT_BAD_OUTPUT_FILE

    print(f'Done. Please run {config.product} version to confirm correct installation.')
    return EXIT_OK


def list_versions(args):
    """List available versions"""
    versions = releases.list_available_versions(_config_from_args(args))
    if not versions:
        print("No releases found")
        return EXIT_OK

    print("Available Go releases:")
    for v in versions:
        print(f"  {v}")
    return EXIT_OK


def show_latest(args):
    """Show latest release info"""
    config = _config_from_args(args)
    version = releases.latest_version(config)
    if not version:
        print("No releases found")
        return EXIT_OK

    print(f"Latest release: {version}")
    print(f"URL: {releases.download_url(version, config)}")
    return EXIT_OK


def install(args):
    """Install a specific version, asking for one if needed"""
    return run_update(_config_from_args(args), requested=args.version)


def _add_platform_argument(parser):
    parser.add_argument('--platform', help='Platform suffix of the archive, eg linux-amd64 (default: detected)')


def build_parser():
    parser = argparse.ArgumentParser(
        prog='goupdate',
        description='Download and install Go toolchain releases',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list                              # List all stable versions
  %(prog)s latest                            # Show the newest stable version
  %(prog)s install                           # Pick a version interactively
  %(prog)s install --version 1.21.3          # Install a specific version
  %(prog)s install --strategy destructive    # Delete the old install instead of backing it up
        """
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # list command
    list_parser = subparsers.add_parser('list', help='List available versions')
    list_parser.set_defaults(func=list_versions)

    # latest command
    latest_parser = subparsers.add_parser('latest', help='Show latest release info')
    _add_platform_argument(latest_parser)
    latest_parser.set_defaults(func=show_latest)

    # install command
    install_parser = subparsers.add_parser('install', help='Install a release')
    install_parser.add_argument('--version', help='Version to install (default: ask)')
    install_parser.add_argument('--strategy', choices=STRATEGIES,
                                help='backup: move the old install aside until done; '
                                     'destructive: delete it first (default: backup)')
    install_parser.add_argument('--install-root', help='Live installation directory (default: /usr/local/go)')
    install_parser.add_argument('--backup-dir', help='Where the old installation is moved (default: /usr/local/go-bak)')
    install_parser.add_argument('--scratch-file', help='Where the archive is downloaded (default: go.tar.gz)')
    _add_platform_argument(install_parser)
    install_parser.set_defaults(func=install)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    if not args.command:
        parser.print_help()
        return EXIT_FAILURE

    try:
        return args.func(args)
    except (FetchError, ParseError) as e:
        _error(f'failed to get versions: {e}')
        return EXIT_NO_VERSIONS
    except UpdateError as e:
        _error(f"Error: {e}")
        return EXIT_FAILURE
    except KeyboardInterrupt:
        _error('Interrupted')
        return EXIT_INTERRUPTED


if __name__ == '__main__':
    sys.exit(main())
