"""Find the default VPC or build a minimal public one for the cluster."""

from aurora_toolkit import config
from aurora_toolkit.common import waiter_utils
from aurora_toolkit.common.aws_common import tag_specifications
from aurora_toolkit.common.exceptions import (
    InsufficientAvailabilityZonesError,
    MissingIdentifierError,
)

from .resource_ledger import ResourceKind


def find_default_vpc(ec2_client):
    """
    Look up the account's default VPC.

    Returns:
        str: VPC ID, or None when the region has no default VPC
    """
    response = ec2_client.describe_vpcs(Filters=[{"Name": "isDefault", "Values": ["true"]}])
    vpcs = response.get("Vpcs", [])
    if not vpcs or not vpcs[0].get("VpcId"):
        return None
    return vpcs[0]["VpcId"]


def pick_availability_zones(ec2_client, vpc_id, count=2):
    """Return the first `count` available zone names in the region."""
    response = ec2_client.describe_availability_zones(
        Filters=[{"Name": "state", "Values": ["available"]}]
    )
    zones = sorted(zone["ZoneName"] for zone in response.get("AvailabilityZones", []))
    if len(zones) < count:
        raise InsufficientAvailabilityZonesError(vpc_id, zones)
    return zones[:count]


def _create_vpc(ec2_client, ledger):
    response = ec2_client.create_vpc(
        CidrBlock=config.VPC_CIDR,
        TagSpecifications=tag_specifications("vpc", config.system_tags("aurora-serverless-vpc")),
    )
    vpc_id = response.get("Vpc", {}).get("VpcId")
    if not vpc_id:
        raise MissingIdentifierError("VpcId", "CreateVpc")
    ledger.record(ResourceKind.VPC, vpc_id)
    print(f"  ✅ Created VPC {vpc_id} ({config.VPC_CIDR})")

    waiter_utils.wait_vpc_available(ec2_client, vpc_id)
    # Public endpoints need DNS hostnames; the API takes one attribute per call
    ec2_client.modify_vpc_attribute(VpcId=vpc_id, EnableDnsSupport={"Value": True})
    ec2_client.modify_vpc_attribute(VpcId=vpc_id, EnableDnsHostnames={"Value": True})
    return vpc_id


def _create_subnet(ec2_client, ledger, vpc_id, cidr, zone):
    name = f"{config.SUBNET_NAME_PREFIX}-{zone[-1]}"
    response = ec2_client.create_subnet(
        VpcId=vpc_id,
        CidrBlock=cidr,
        AvailabilityZone=zone,
        TagSpecifications=tag_specifications("subnet", config.system_tags(name)),
    )
    subnet_id = response.get("Subnet", {}).get("SubnetId")
    if not subnet_id:
        raise MissingIdentifierError("SubnetId", "CreateSubnet")
    ledger.record(ResourceKind.SUBNET, subnet_id, parent_id=vpc_id)
    print(f"  ✅ Created subnet {subnet_id} ({cidr}) in {zone}")
    return subnet_id


def _create_internet_gateway(ec2_client, ledger, vpc_id):
    response = ec2_client.create_internet_gateway(
        TagSpecifications=tag_specifications(
            "internet-gateway", config.system_tags("aurora-serverless-igw")
        ),
    )
    igw_id = response.get("InternetGateway", {}).get("InternetGatewayId")
    if not igw_id:
        raise MissingIdentifierError("InternetGatewayId", "CreateInternetGateway")
    ledger.record(ResourceKind.INTERNET_GATEWAY, igw_id)

    ec2_client.attach_internet_gateway(InternetGatewayId=igw_id, VpcId=vpc_id)
    ledger.record(ResourceKind.GATEWAY_ATTACHMENT, igw_id, parent_id=vpc_id)
    print(f"  ✅ Created and attached Internet Gateway {igw_id}")
    return igw_id


def _create_public_route_table(ec2_client, ledger, vpc_id, igw_id, subnet_ids):
    response = ec2_client.create_route_table(
        VpcId=vpc_id,
        TagSpecifications=tag_specifications(
            "route-table", config.system_tags("aurora-serverless-rt")
        ),
    )
    route_table_id = response.get("RouteTable", {}).get("RouteTableId")
    if not route_table_id:
        raise MissingIdentifierError("RouteTableId", "CreateRouteTable")
    ledger.record(ResourceKind.ROUTE_TABLE, route_table_id, parent_id=vpc_id)

    ec2_client.create_route(
        RouteTableId=route_table_id,
        DestinationCidrBlock=config.OPEN_CIDR,
        GatewayId=igw_id,
    )
    print(f"  ✅ Created Route Table {route_table_id} with default route via {igw_id}")

    for subnet_id in subnet_ids:
        association = ec2_client.associate_route_table(
            RouteTableId=route_table_id, SubnetId=subnet_id
        )
        association_id = association.get("AssociationId")
        if not association_id:
            raise MissingIdentifierError("AssociationId", "AssociateRouteTable")
        ledger.record(ResourceKind.ROUTE_TABLE_ASSOCIATION, association_id, parent_id=subnet_id)
        print(f"  ✅ Associated {route_table_id} with {subnet_id}")
    return route_table_id


def create_vpc_with_subnets(ec2_client, ledger):
    """
    Create a VPC with two public subnets in distinct availability zones.

    Every created resource is appended to the ledger as soon as it exists, so
    a failure part-way through can be rolled back by the caller.

    Args:
        ec2_client: Boto3 EC2 client
        ledger: ResourceLedger receiving the created resources

    Returns:
        str: The new VPC ID
    """
    print("🌐 No default VPC found, creating a new one...")
    vpc_id = _create_vpc(ec2_client, ledger)

    zones = pick_availability_zones(ec2_client, vpc_id, count=len(config.SUBNET_CIDRS))
    subnet_ids = [
        _create_subnet(ec2_client, ledger, vpc_id, cidr, zone)
        for cidr, zone in zip(config.SUBNET_CIDRS, zones)
    ]

    igw_id = _create_internet_gateway(ec2_client, ledger, vpc_id)
    _create_public_route_table(ec2_client, ledger, vpc_id, igw_id, subnet_ids)
    return vpc_id


def ensure_vpc(ec2_client, ledger):
    """
    Return a usable VPC ID, creating a network only when no default VPC exists.

    Re-running without a default VPC creates another network every time.
    """
    print("🔍 Looking up default VPC...")
    vpc_id = find_default_vpc(ec2_client)
    if vpc_id:
        print(f"  ✅ Using default VPC {vpc_id}")
        return vpc_id
    return create_vpc_with_subnets(ec2_client, ledger)
