"""Maintain the DB subnet group the cluster launches into.

RDS cannot add availability zones to an existing subnet group, so the
group is deleted and rebuilt on every run instead of being modified.
"""

from aurora_toolkit import config
from aurora_toolkit.common.exceptions import InsufficientAvailabilityZonesError
from aurora_toolkit.common.rds_cleanup_utils import delete_db_subnet_group

from .resource_ledger import ResourceKind


def find_tagged_subnets(ec2_client, vpc_id):
    """
    List the subnets in a VPC carrying this tool's system tag.

    Returns:
        list: Subnet dicts from describe_subnets
    """
    response = ec2_client.describe_subnets(
        Filters=[
            {"Name": "vpc-id", "Values": [vpc_id]},
            {"Name": f"tag:{config.SYSTEM_TAG_KEY}", "Values": [config.SYSTEM_TAG_VALUE]},
        ]
    )
    return response.get("Subnets", [])


def recreate_db_subnet_group(ec2_client, rds_client, vpc_id, ledger, name=None):
    """
    Delete and recreate the DB subnet group from the VPC's tagged subnets.

    Args:
        ec2_client: Boto3 EC2 client
        rds_client: Boto3 RDS client
        vpc_id: VPC whose subnets make up the group
        ledger: ResourceLedger receiving the group
        name: Subnet group name (default: config.DB_SUBNET_GROUP_NAME)

    Returns:
        str: The subnet group name

    Raises:
        InsufficientAvailabilityZonesError: If the subnets span fewer than two AZs
        ClientError: If deleting the old group fails for any reason other than not-found
    """
    name = name or config.DB_SUBNET_GROUP_NAME
    print(f"🧩 Preparing DB subnet group {name}...")

    subnets = find_tagged_subnets(ec2_client, vpc_id)
    zones = {subnet["AvailabilityZone"] for subnet in subnets}
    if len(zones) < 2:
        raise InsufficientAvailabilityZonesError(vpc_id, zones)
    subnet_ids = [subnet["SubnetId"] for subnet in subnets]
    print(f"  Found {len(subnet_ids)} subnet(s) across {len(zones)} AZs: {', '.join(sorted(zones))}")

    delete_db_subnet_group(rds_client, name)

    rds_client.create_db_subnet_group(
        DBSubnetGroupName=name,
        DBSubnetGroupDescription=config.DB_SUBNET_GROUP_DESCRIPTION,
        SubnetIds=subnet_ids,
        Tags=config.system_tags(name),
    )
    ledger.record(ResourceKind.DB_SUBNET_GROUP, name)
    print(f"  ✅ Created DB subnet group {name}")
    return name
