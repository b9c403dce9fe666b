#!/usr/bin/env python3
"""
Solidity Flattener CLI

Resolves the imports of Solidity source files and writes, per root file, a
single flat source, a standard JSON compiler input and a manifest of the
resolved files and their levels.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from flattener.config import (
    EVM_VERSIONS,
    NEWLINES,
    FlattenConfig,
    FlattenTarget,
    load_batch_config,
)
from flattener.pipeline import batch_flatten
from graph.errors import ConfigError
from scanner.discovery import iter_files

logger = logging.getLogger("solflat")


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="solflat",
        description="Flatten Solidity sources and build standard JSON compiler inputs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  solflat --file contracts/Token.sol --out flat/Token
  solflat --file contracts/Token.sol --out-auto tokens   # flat/tokens/Token/
  solflat --batch flatten.yaml                            # targets from a batch file
  solflat --dir contracts --out-auto                      # every .sol under contracts/
  solflat --file contracts/Token.sol --out-auto --evm-version cancun -v
        """,
    )

    # Root selection
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--file",
        type=str,
        help="Root source file to flatten",
    )
    source.add_argument(
        "--batch",
        type=str,
        help="Batch file (YAML, JSON or TOML) listing targets",
    )
    source.add_argument(
        "--dir",
        type=str,
        help="Flatten every source file under this directory (requires --out-auto)",
    )

    # Output options
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Output target 'dir/name'; artifacts go to dir/name/name.*",
    )
    parser.add_argument(
        "--out-auto",
        nargs="?",
        const="",
        default=None,
        metavar="SUB",
        help="Derive the output target as flat/SUB/<file stem>",
    )

    # Compiler options
    parser.add_argument(
        "--evm-version",
        choices=EVM_VERSIONS,
        default=None,
        help="EVM version for the compiler input (default: paris)",
    )
    parser.add_argument(
        "--compiler-config",
        type=str,
        default=None,
        help="JSON file whose 'settings' replace the default compiler settings "
             "(default: compiler_config.json)",
    )

    # Resolution options
    parser.add_argument(
        "--package-root",
        type=str,
        default=None,
        help="Directory '@' imports resolve against (default: nearest node_modules)",
    )
    parser.add_argument(
        "--newline",
        choices=sorted(NEWLINES),
        default="crlf",
        help="Line separator for generated artifacts (default: crlf)",
    )

    # Logging options
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log progress (-v) and per-file resolution (-vv)",
    )
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log errors",
    )

    return parser.parse_args(args)


def configure_logging(verbose: int = 0, quiet: bool = False) -> None:
    """Send log records to stderr as plain messages."""
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.DEBUG if verbose > 2 else logging.INFO
    else:
        level = logging.INFO

    logging.basicConfig(stream=sys.stderr, format="%(message)s")
    logging.getLogger().setLevel(level)


def build_targets(parsed) -> List[FlattenTarget]:
    """Turn --file/--dir arguments into flatten targets."""
    if parsed.file:
        return [FlattenTarget(file=Path(parsed.file), out=parsed.out, out_auto=parsed.out_auto)]

    root = Path(parsed.dir)
    if not root.is_dir():
        raise ConfigError(f"'{parsed.dir}' is not a directory")
    if parsed.out is not None:
        raise ConfigError("--out cannot be used with --dir; use --out-auto")
    if parsed.out_auto is None:
        raise ConfigError("--dir needs --out-auto")
    return [FlattenTarget(file=path, out_auto=parsed.out_auto) for path in iter_files(root)]


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose, parsed.quiet)

    package_root: Optional[Path] = Path(parsed.package_root) if parsed.package_root else None
    evm_version = parsed.evm_version

    try:
        if parsed.batch:
            if parsed.out is not None or parsed.out_auto is not None:
                raise ConfigError("--out and --out-auto cannot be used with --batch; set them per target")
            batch = load_batch_config(Path(parsed.batch))
            targets = batch.targets
            package_root = package_root or batch.package_root
            evm_version = evm_version or batch.evm_version
        else:
            targets = build_targets(parsed)

        config = FlattenConfig().with_overrides(
            package_root=package_root,
            evm_version=evm_version,
            compiler_config=Path(parsed.compiler_config) if parsed.compiler_config else None,
            newline=NEWLINES[parsed.newline],
            silent=parsed.verbose == 0,
            silent_resolve=parsed.verbose < 2,
        )
    except ConfigError as e:
        logger.error("Error: %s", e)
        return 1

    if not targets:
        logger.error("Error: no source files to flatten")
        return 1

    report = batch_flatten(targets, config)

    if not report.ok:
        logger.error(
            "%d of %d target(s) failed: %s",
            len(report.failed),
            len(targets),
            ", ".join(path.as_posix() for path, _ in report.failed),
        )
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
