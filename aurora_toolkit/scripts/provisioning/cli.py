"""CLI interface for provisioning an Aurora Serverless V2 cluster"""

import argparse
import logging
import sys

from botocore.exceptions import BotoCoreError, ClientError

from aurora_toolkit.common.aws_client_factory import create_ec2_client, create_rds_client
from aurora_toolkit.common.exceptions import ProvisioningError
from aurora_toolkit.config import AuroraConfig

from .workflow import print_connection_details, provision_aurora


def configure_logging(verbose=False):
    """Configure root logging for the CLI entry points."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )


def parse_args(argv):
    parser = argparse.ArgumentParser(
        description="Provision an Aurora Serverless V2 PostgreSQL cluster and its network"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for aurora-provision."""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.verbose)

    config = AuroraConfig.from_env()
    print("🚀 AURORA SERVERLESS V2 PROVISIONING")
    print("=" * 80)
    print(f"Region: {config.region}")
    print(f"Cluster: {config.cluster_identifier}")
    print("=" * 80)

    try:
        ec2_client = create_ec2_client(config.region)
        rds_client = create_rds_client(config.region)
        endpoint_info = provision_aurora(config, ec2_client, rds_client)
    except (ProvisioningError, ClientError, BotoCoreError) as e:
        logging.error("Error in main process: %s", e)
        return 1

    print_connection_details(config, endpoint_info)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
