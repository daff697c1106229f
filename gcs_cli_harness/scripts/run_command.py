#!/usr/bin/env python3
"""
Run a single harness command against a bucket and print its parsed result.

Useful for checking gsutil / gcloud output grammar by hand before writing a
test. Configuration comes from the environment (see HarnessSettings):
- GCS_HARNESS_BUCKET: Bucket the command is bound to
- GCS_HARNESS_COMMAND_TIMEOUT: Executor timeout in seconds
- GOOGLE_APPLICATION_CREDENTIALS: Service account key (sign_url only)

Example:
    python -m gcs_cli_harness.scripts.run_command du gs://my-bucket/testfile1.txt
"""

import argparse
import asyncio
import json
import sys
from typing import Any, List, Optional

from gcs_cli_harness.commands.impl.rm_command import RmCommandStatus
from gcs_cli_harness.commands.interfaces.errors import (
    ConfigError,
    ExecutionError,
    FormatError,
)
from gcs_cli_harness.commands.registry.command_registry import CommandRegistry
from gcs_cli_harness.config.logging_config import configure_logging
from gcs_cli_harness.config.settings import HarnessSettings, build_command_context


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run one gsutil / gcloud storage command and print the parsed result"
    )
    parser.add_argument(
        "command",
        choices=["du", "cat", "rm", "sign_url"],
        help="Command to run",
    )
    parser.add_argument("paths", nargs="+", help="gs:// URIs to operate on")
    parser.add_argument(
        "--bucket",
        help="Bucket name (defaults to GCS_HARNESS_BUCKET)",
    )
    parser.add_argument(
        "--summarize",
        action="store_true",
        help="Pass -s to du so each path reports a single total",
    )
    return parser.parse_args(argv)


def format_result(result: Any) -> str:
    if isinstance(result, dict):
        return json.dumps(result, indent=2, sort_keys=True)
    if isinstance(result, RmCommandStatus):
        return result.name
    return str(result)


async def main(argv: Optional[List[str]] = None) -> int:
    """Run the requested command.

    Returns:
        0 on success, 1 on failure
    """
    args = parse_args(argv)
    settings = HarnessSettings.from_env()
    configure_logging(settings.log_level)

    try:
        context = build_command_context(settings, bucket_name=args.bucket)
        registry = CommandRegistry(context)
        command = registry.create_command(args.command)

        if args.command == "du":
            result = await command.execute_many(*args.paths, summarize=args.summarize)
        elif args.command == "cat":
            result = await command.execute_many(*args.paths)
        else:
            if len(args.paths) != 1:
                print(f"✗ Error: {args.command} takes exactly one path", file=sys.stderr)
                return 1
            result = await command.execute(args.paths[0])

        print(format_result(result))
        return 0

    except ConfigError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        return 1
    except ExecutionError as e:
        print(f"✗ Command failed ({e.kind.value}): {e}", file=sys.stderr)
        return 1
    except FormatError as e:
        print(f"✗ Unexpected output format: {e.reason}", file=sys.stderr)
        return 1


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
