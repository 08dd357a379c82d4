from __future__ import annotations

import argparse
import signal
from typing import Iterable, Optional

from importlib.metadata import version, PackageNotFoundError

from kubev_installer.bootstrap.installer import Installer
from kubev_installer.config import InstallerConfig, INSTALL_DIR_ENV, VERSION_ENV
from kubev_installer.core.errors import InstallError
from kubev_installer.core.logging import configure_logging, get_logger


LOGGER = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _get_version() -> str:
    try:
        return version("kubev-installer")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from kubev_installer import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubev-install",
        description="Download, verify and install the kubev-downloader binary.",
    )

    # Global options
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show kubev-install version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (info-level) logging. This is the default.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Reduce logging output to errors only.",
    )

    # Install options
    parser.add_argument(
        "--release",
        metavar="TAG",
        help=f"Release tag to install (default: ${VERSION_ENV}, else latest).",
    )
    parser.add_argument(
        "--install-dir",
        metavar="DIR",
        help=f"Directory to install the binary into (default: ${INSTALL_DIR_ENV}, else current directory).",
    )

    return parser


def _raise_interrupt(signum, frame) -> None:
    raise KeyboardInterrupt


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint.

    Returns an exit code suitable for use as a console script.
    """

    parser = build_parser()

    # Handle --help specially to return 0
    if argv is not None:
        argv_list = list(argv)
        if "--help" in argv_list or "-h" in argv_list:
            parser.print_help()
            return EXIT_SUCCESS
    else:
        argv_list = None

    args = parser.parse_args(argv_list)

    # Configure logging as early as possible.
    configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)

    if args.version:
        print(_get_version())
        return EXIT_SUCCESS

    config = InstallerConfig.from_env(version=args.release, install_dir=args.install_dir)

    # SIGTERM unwinds like Ctrl-C so the workspace is cleaned up.
    previous_handler = signal.signal(signal.SIGTERM, _raise_interrupt)
    try:
        Installer(config).run()
    except InstallError as e:
        LOGGER.critical(str(e))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        LOGGER.critical("Installation interrupted")
        return EXIT_FAILURE
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)

    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    raise SystemExit(main())
