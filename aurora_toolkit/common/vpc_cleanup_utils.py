"""Shared VPC cleanup utilities.

Each function deletes one resource created by the network and security group
provisioners. A resource that is already gone counts as deleted; every
other ClientError propagates to the caller.
"""

from botocore.exceptions import ClientError

from aurora_toolkit.common.aws_common import is_not_found_error


def delete_route_table_association(ec2_client, association_id):
    """
    Disassociate a route table from a subnet.

    Args:
        ec2_client: Boto3 EC2 client instance
        association_id: Route table association ID

    Returns:
        bool: True if disassociated, False if the association was already gone
    """
    print(f"  Disassociating route table association {association_id}")
    try:
        ec2_client.disassociate_route_table(AssociationId=association_id)
    except ClientError as e:
        if is_not_found_error(e, ("InvalidAssociationID.NotFound",)):
            print(f"  ⚠️  Association {association_id} already removed")
            return False
        raise
    print(f"  ✅ Association {association_id} removed")
    return True


def delete_route_table(ec2_client, route_table_id):
    """
    Delete a route table. Its routes are removed with it.

    Returns:
        bool: True if deleted, False if it was already gone
    """
    print(f"  Deleting Route Table {route_table_id}")
    try:
        ec2_client.delete_route_table(RouteTableId=route_table_id)
    except ClientError as e:
        if is_not_found_error(e, ("InvalidRouteTableID.NotFound",)):
            print(f"  ⚠️  Route Table {route_table_id} already deleted")
            return False
        raise
    print(f"  ✅ Route Table {route_table_id} deleted")
    return True


def detach_internet_gateway(ec2_client, igw_id, vpc_id):
    """
    Detach an Internet Gateway from a VPC.

    Returns:
        bool: True if detached, False if it was not attached anymore
    """
    print(f"  Detaching IGW {igw_id} from VPC {vpc_id}")
    try:
        ec2_client.detach_internet_gateway(InternetGatewayId=igw_id, VpcId=vpc_id)
    except ClientError as e:
        if is_not_found_error(
            e,
            ("Gateway.NotAttached", "InvalidInternetGatewayID.NotFound", "InvalidVpcID.NotFound"),
        ):
            print(f"  ⚠️  IGW {igw_id} already detached")
            return False
        raise
    print(f"  ✅ IGW {igw_id} detached")
    return True


def delete_internet_gateway(ec2_client, igw_id):
    """
    Delete a detached Internet Gateway.

    Returns:
        bool: True if deleted, False if it was already gone
    """
    print(f"  Deleting IGW {igw_id}")
    try:
        ec2_client.delete_internet_gateway(InternetGatewayId=igw_id)
    except ClientError as e:
        if is_not_found_error(e, ("InvalidInternetGatewayID.NotFound",)):
            print(f"  ⚠️  IGW {igw_id} already deleted")
            return False
        raise
    print(f"  ✅ IGW {igw_id} deleted")
    return True


def delete_security_group(ec2_client, group_id):
    """
    Delete a Security Group.

    Returns:
        bool: True if deleted, False if it was already gone
    """
    print(f"  Deleting Security Group {group_id}")
    try:
        ec2_client.delete_security_group(GroupId=group_id)
    except ClientError as e:
        if is_not_found_error(e, ("InvalidGroup.NotFound", "InvalidGroupId.NotFound")):
            print(f"  ⚠️  Security Group {group_id} already deleted")
            return False
        raise
    print(f"  ✅ Security Group {group_id} deleted")
    return True


def delete_subnet(ec2_client, subnet_id):
    """
    Delete a Subnet.

    Returns:
        bool: True if deleted, False if it was already gone
    """
    print(f"  Deleting Subnet {subnet_id}")
    try:
        ec2_client.delete_subnet(SubnetId=subnet_id)
    except ClientError as e:
        if is_not_found_error(e, ("InvalidSubnetID.NotFound",)):
            print(f"  ⚠️  Subnet {subnet_id} already deleted")
            return False
        raise
    print(f"  ✅ Subnet {subnet_id} deleted")
    return True


def delete_vpc(ec2_client, vpc_id):
    """
    Delete a VPC. Dependencies must already be gone.

    Returns:
        bool: True if deleted, False if it was already gone
    """
    print(f"  Deleting VPC {vpc_id}")
    try:
        ec2_client.delete_vpc(VpcId=vpc_id)
    except ClientError as e:
        if is_not_found_error(e, ("InvalidVpcID.NotFound",)):
            print(f"  ⚠️  VPC {vpc_id} already deleted")
            return False
        raise
    print(f"  ✅ VPC {vpc_id} deleted successfully")
    return True
