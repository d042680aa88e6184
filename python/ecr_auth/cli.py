#!/usr/bin/env python3
"""
Command line access to ECR registry auth.

Prints the auth a container client would receive for an image, for a swarm,
or for an image build (as a docker config.json).
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError

from ecr_auth.auth.ecr import EcrRegistryAuthSupplier
from ecr_auth.config_manager import ConfigManager, ConfigValidationError
from ecr_auth.error_utils import RegistryAuthError
from ecr_auth.logging_utils import get_logger, setup_logging
from ecr_auth.registry_auth import RegistryConfigs

EXIT_NOT_APPLICABLE = 1
EXIT_AUTH_ERROR = 2
EXIT_CONFIG_ERROR = 3


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ecr-auth",
        description="Fetch registry auth for AWS ECR images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Auth for pulling a single image
  ecr-auth image 12345.dkr.ecr.us-east-1.amazonaws.com/team/project:latest

  # Merge ECR auth into the docker config.json used by image builds
  ecr-auth build --output ~/.docker/config.json

  # Show the effective configuration
  ecr-auth --config config.yaml config
        """,
    )
    parser.add_argument("--config", help="Path to configuration YAML file (default: CONFIG_FILE env var or config.yaml)")
    parser.add_argument("--region", help="AWS region of the ECR API (default: from config or AWS environment)")
    parser.add_argument("--max-retries", type=int, help="Retries after server errors from ECR (default: from config)")
    parser.add_argument("--backoff-ms", type=int, help="Milliseconds to wait between retries (default: from config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    image_parser = subparsers.add_parser("image", help="Print auth for pulling an image")
    image_parser.add_argument("image", help="Image reference, e.g. 12345.dkr.ecr.us-east-1.amazonaws.com/team/project:tag")

    subparsers.add_parser("swarm", help="Print auth for the default ECR registry, or null")

    build_parser = subparsers.add_parser("build", help="Print a docker config.json for image builds")
    build_parser.add_argument("--output", help="Merge the auths into this docker config.json (created with mode 0600) instead of printing")

    subparsers.add_parser("config", help="Print the effective configuration")

    return parser.parse_args(argv)


def build_supplier(cm: ConfigManager, args: argparse.Namespace) -> EcrRegistryAuthSupplier:
    """Build a supplier from configuration, with command line overrides applied"""
    return cm.create_supplier(
        client=cm.create_ecr_client(region=args.region),
        max_retries=args.max_retries,
        retry_backoff_ms=args.backoff_ms,
    )


def write_docker_config(path: str, configs: RegistryConfigs) -> None:
    """Merge registry auth into a docker config.json, readable by the owner only

    Entries for other registries and keys such as credsStore or credHelpers
    in an existing file are kept.

    Raises:
        OSError: If the file cannot be read or written
        ValueError: If an existing file is not a JSON object
    """
    docker_config: Dict[str, Any] = {}
    if os.path.exists(path):
        with open(path, "r") as f:
            docker_config = json.load(f)
        if not isinstance(docker_config, dict):
            raise ValueError("expected a JSON object at the top level")

    auths = docker_config.get("auths")
    if not isinstance(auths, dict):
        auths = {}
    auths.update(configs.to_docker_config()["auths"])
    docker_config["auths"] = auths

    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        json.dump(docker_config, f, indent=2)
        f.write("\n")
    # O_CREAT only applies the mode to new files
    os.chmod(path, 0o600)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)

    try:
        cm = ConfigManager(config_file=args.config)
    except ConfigValidationError as e:
        print(str(e), file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logging(level=logging.DEBUG if args.verbose else cm.get_log_level())
    logger = get_logger(__name__)

    if args.command == "config":
        cm.print_config()
        return 0

    try:
        supplier = build_supplier(cm, args)
    except ValueError as e:
        logger.error(f"Invalid retry settings: {e}")
        return EXIT_CONFIG_ERROR
    except BotoCoreError as e:
        logger.error(f"Unable to create ECR client: {e}")
        return EXIT_CONFIG_ERROR

    if args.command == "image":
        try:
            auth = supplier.auth_for(args.image)
        except RegistryAuthError as e:
            logger.error(f"Failed to get ECR auth for {args.image}:\n{e}")
            return EXIT_AUTH_ERROR
        if auth is None:
            print(f"{args.image} is not an ECR image", file=sys.stderr)
            return EXIT_NOT_APPLICABLE
        print(json.dumps(auth.to_dict(), indent=2))
        return 0

    if args.command == "swarm":
        auth = supplier.auth_for_swarm()
        print(json.dumps(auth.to_dict() if auth else None, indent=2))
        return 0

    configs = supplier.auth_for_build()
    if args.output:
        try:
            write_docker_config(os.path.expanduser(args.output), configs)
        except (OSError, ValueError) as e:
            logger.error(f"Unable to update docker config {args.output}: {e}")
            return EXIT_CONFIG_ERROR
        logger.info(f"Wrote {len(configs.configs)} registry auth entries to {args.output}")
    else:
        print(json.dumps(configs.to_docker_config(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
