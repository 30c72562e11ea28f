"""Provisioning workflow: network → security group → subnet group → cluster → instance"""

import logging

from .cluster_ops import (
    create_aurora_cluster,
    create_aurora_instance,
    get_cluster_endpoint_info,
    wait_for_cluster_available,
    wait_for_instance_available,
)
from .network import ensure_vpc
from .resource_ledger import ResourceLedger, teardown_resources
from .security_group import create_security_group
from .subnet_group import recreate_db_subnet_group


def _rollback(ledger, ec2_client, rds_client):
    print("Rolling back resources created during this run...")
    try:
        teardown_resources(ledger, ec2_client, rds_client)
    except Exception:  # noqa: BLE001
        logging.exception("Rollback did not complete; check the AWS console for leftovers")


def provision_aurora(config, ec2_client, rds_client, ledger=None):
    """
    Provision the full stack, rolling back everything created on failure.

    Args:
        config: AuroraConfig for this run
        ec2_client: Boto3 EC2 client
        rds_client: Boto3 RDS client
        ledger: Optional ResourceLedger (a fresh one is used when omitted)

    Returns:
        dict: Endpoint info plus the IDs a later cleanup needs
            (security_group_id, instance_identifier, subnet_group_name),
            vpc_id, and created_vpc_id / created_subnet_ids when this run
            built the network

    Raises:
        Exception: The original error, re-raised after the rollback attempt
    """
    if ledger is None:
        ledger = ResourceLedger()

    try:
        vpc_id = ensure_vpc(ec2_client, ledger)
        create_security_group(ec2_client, ledger, vpc_id=vpc_id)
        subnet_group_name = recreate_db_subnet_group(ec2_client, rds_client, vpc_id, ledger)

        cluster_id = create_aurora_cluster(
            rds_client, config, ledger.security_group_id, subnet_group_name, ledger
        )
        cluster = wait_for_cluster_available(
            rds_client, cluster_id, delay=config.poll_delay, max_attempts=config.poll_max_attempts
        )

        instance_id = create_aurora_instance(rds_client, config, cluster_id, ledger)
        wait_for_instance_available(
            rds_client, instance_id, delay=config.poll_delay, max_attempts=config.poll_max_attempts
        )

        endpoint_info = get_cluster_endpoint_info(cluster)
    except Exception as e:
        print(f"❌ Provisioning failed: {e}")
        _rollback(ledger, ec2_client, rds_client)
        raise

    endpoint_info.update(
        {
            "security_group_id": ledger.security_group_id,
            "instance_identifier": instance_id,
            "subnet_group_name": subnet_group_name,
            "vpc_id": vpc_id,
            "created_vpc_id": ledger.vpc_id,
            "created_subnet_ids": ledger.subnet_ids,
        }
    )
    return endpoint_info


def format_cleanup_command(endpoint_info):
    """Build the aurora-cleanup invocation that removes the RDS resources and security group."""
    return (
        f"aurora-cleanup {endpoint_info['security_group_id']}"
        f" --instance-id {endpoint_info['instance_identifier']}"
        f" --subnet-group {endpoint_info['subnet_group_name']}"
    )


def print_connection_details(config, endpoint_info):
    """Print connection details and the cleanup command for a later run."""
    print("\n" + "=" * 80)
    print("🎉 Aurora Serverless V2 cluster created successfully!")
    print("=" * 80)

    print("\n🔗 CONNECTION DETAILS:")
    print(f"Cluster Endpoint: {endpoint_info['writer_endpoint']}")
    if endpoint_info["reader_endpoint"]:
        print(f"Reader Endpoint: {endpoint_info['reader_endpoint']}")
    print(f"Port: {endpoint_info['port']}")
    print(f"Master Username: {config.master_username}")
    print(f"Database Name: {config.database_name}")

    print("\n⚠️  WARNING: Store these credentials securely!")
    if config.uses_default_password:
        print("⚠️  The cluster is using the built-in default password. Change it now.")

    print("\nTo clean up resources, run:")
    print(format_cleanup_command(endpoint_info))

    created_vpc_id = endpoint_info.get("created_vpc_id")
    if created_vpc_id:
        subnets = ", ".join(endpoint_info.get("created_subnet_ids") or [])
        print(f"\n⚠️  VPC {created_vpc_id} was created for this run (subnets: {subnets}).")
        print("aurora-cleanup does not remove it. Once the cluster is gone, delete the VPC")
        print("and its internet gateway, route table and subnets manually.")
