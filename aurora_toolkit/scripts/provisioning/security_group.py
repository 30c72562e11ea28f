"""Create the security group guarding the cluster."""

import logging

from aurora_toolkit import config
from aurora_toolkit.common.aws_common import tag_specifications
from aurora_toolkit.common.exceptions import MissingIdentifierError

from .network import find_default_vpc
from .resource_ledger import ResourceKind


def create_security_group(ec2_client, ledger, vpc_id=None):
    """
    Create the cluster security group and open the PostgreSQL port.

    The ingress rule allows DB_PORT from 0.0.0.0/0. A warning is logged
    every time it is created.

    Args:
        ec2_client: Boto3 EC2 client
        ledger: ResourceLedger receiving the group
        vpc_id: VPC to create the group in (default VPC when omitted)

    Returns:
        dict: {"group_id": ..., "vpc_id": ...}
    """
    if vpc_id is None:
        vpc_id = find_default_vpc(ec2_client)
        if not vpc_id:
            raise MissingIdentifierError("VpcId", "DescribeVpcs")

    print(f"🔐 Creating security group {config.SECURITY_GROUP_NAME} in {vpc_id}...")
    response = ec2_client.create_security_group(
        GroupName=config.SECURITY_GROUP_NAME,
        Description=config.SECURITY_GROUP_DESCRIPTION,
        VpcId=vpc_id,
        TagSpecifications=tag_specifications(
            "security-group", config.system_tags(config.SECURITY_GROUP_NAME)
        ),
    )
    group_id = response.get("GroupId")
    if not group_id:
        raise MissingIdentifierError("GroupId", "CreateSecurityGroup")
    ledger.record(ResourceKind.SECURITY_GROUP, group_id, parent_id=vpc_id)

    ec2_client.authorize_security_group_ingress(
        GroupId=group_id,
        IpPermissions=[
            {
                "IpProtocol": "tcp",
                "FromPort": config.DB_PORT,
                "ToPort": config.DB_PORT,
                "IpRanges": [{"CidrIp": config.OPEN_CIDR}],
            }
        ],
    )
    logging.warning(
        "Security group %s allows TCP %s from %s (the whole internet)",
        group_id,
        config.DB_PORT,
        config.OPEN_CIDR,
    )
    print(f"  ✅ Security group {group_id} created, port {config.DB_PORT} open")
    return {"group_id": group_id, "vpc_id": vpc_id}
