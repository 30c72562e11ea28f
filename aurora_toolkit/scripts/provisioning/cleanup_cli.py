"""CLI interface for deleting a previously provisioned Aurora cluster.

Only the configured cluster and the security group given on the command line
are deleted by default. Other resources are deleted only when named
explicitly, since this entry point has no record of what a provisioning run
created.
"""

import argparse
import logging
import sys

from botocore.exceptions import BotoCoreError

from aurora_toolkit.common.aws_client_factory import create_ec2_client, create_rds_client
from aurora_toolkit.config import AuroraConfig

from .cli import configure_logging
from .resource_ledger import ResourceKind, ResourceLedger, teardown_resources


def parse_args(argv):
    parser = argparse.ArgumentParser(
        description="Delete the Aurora cluster and the security group created for it"
    )
    parser.add_argument("security_group_id", help="Security group ID printed by aurora-provision")
    parser.add_argument(
        "--instance-id",
        help="Also delete this DB instance (must be deleted before the cluster)",
    )
    parser.add_argument("--subnet-group", help="Also delete this DB subnet group")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_cleanup_ledger(config, security_group_id, instance_id=None, subnet_group=None):
    """
    Reconstruct a ledger in creation order from what the caller knows about.

    Args:
        config: AuroraConfig supplying the cluster identifier
        security_group_id: Security group to delete
        instance_id: Optional DB instance to delete first
        subnet_group: Optional DB subnet group to delete

    Returns:
        ResourceLedger: Records whose reverse order is a valid deletion order
    """
    ledger = ResourceLedger()
    ledger.record(ResourceKind.SECURITY_GROUP, security_group_id)
    if subnet_group:
        ledger.record(ResourceKind.DB_SUBNET_GROUP, subnet_group)
    ledger.record(ResourceKind.DB_CLUSTER, config.cluster_identifier)
    if instance_id:
        ledger.record(ResourceKind.DB_INSTANCE, instance_id, parent_id=config.cluster_identifier)
    return ledger


def cleanup_resources(config, security_group_id, ec2_client, rds_client, **extra):
    """
    Delete the cluster and security group, best effort.

    Returns:
        list: (ResourceRecord, exception) pairs for deletions that failed
    """
    ledger = build_cleanup_ledger(config, security_group_id, **extra)
    return teardown_resources(ledger, ec2_client, rds_client)


def main(argv=None):
    """Main entry point for aurora-cleanup."""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.verbose)

    config = AuroraConfig.from_env()
    try:
        ec2_client = create_ec2_client(config.region)
        rds_client = create_rds_client(config.region)
    except BotoCoreError as e:
        logging.error("Cleanup failed: %s", e)
        return 1

    failures = cleanup_resources(
        config,
        args.security_group_id,
        ec2_client,
        rds_client,
        instance_id=args.instance_id,
        subnet_group=args.subnet_group,
    )
    if failures:
        for entry, error in failures:
            logging.error("Cleanup failed for %s: %s", entry.describe(), error)
        return 1

    print("Cleanup completed successfully")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
