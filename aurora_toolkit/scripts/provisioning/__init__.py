"""Aurora Serverless V2 provisioning and cleanup package"""

from .cleanup_cli import build_cleanup_ledger, cleanup_resources
from .cluster_ops import (
    create_aurora_cluster,
    create_aurora_instance,
    get_cluster_endpoint_info,
    wait_for_cluster_available,
    wait_for_instance_available,
)
from .network import create_vpc_with_subnets, ensure_vpc, find_default_vpc
from .resource_ledger import ResourceKind, ResourceLedger, ResourceRecord, teardown_resources
from .security_group import create_security_group
from .subnet_group import find_tagged_subnets, recreate_db_subnet_group
from .workflow import format_cleanup_command, print_connection_details, provision_aurora

__all__ = [
    "build_cleanup_ledger",
    "cleanup_resources",
    "create_aurora_cluster",
    "create_aurora_instance",
    "get_cluster_endpoint_info",
    "wait_for_cluster_available",
    "wait_for_instance_available",
    "create_vpc_with_subnets",
    "ensure_vpc",
    "find_default_vpc",
    "ResourceKind",
    "ResourceLedger",
    "ResourceRecord",
    "teardown_resources",
    "create_security_group",
    "find_tagged_subnets",
    "recreate_db_subnet_group",
    "format_cleanup_command",
    "print_connection_details",
    "provision_aurora",
]
