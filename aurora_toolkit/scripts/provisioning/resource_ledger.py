"""
Resource ledger for rollback and cleanup.

Every provisioning step appends a record only after AWS confirms the
resource exists. Teardown walks the ledger newest-first, so dependents are
always removed before the resources they depend on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from aurora_toolkit.common import rds_cleanup_utils, vpc_cleanup_utils


class ResourceKind(Enum):
    """Kinds of resources the provisioner creates."""

    VPC = "vpc"
    SUBNET = "subnet"
    INTERNET_GATEWAY = "internet_gateway"
    GATEWAY_ATTACHMENT = "gateway_attachment"
    ROUTE_TABLE = "route_table"
    ROUTE_TABLE_ASSOCIATION = "route_table_association"
    SECURITY_GROUP = "security_group"
    DB_SUBNET_GROUP = "db_subnet_group"
    DB_CLUSTER = "db_cluster"
    DB_INSTANCE = "db_instance"


@dataclass(frozen=True)
class ResourceRecord:
    """One created resource.

    Attributes:
        kind: What was created
        resource_id: AWS identifier (ID or name)
        created_at: When the creation was confirmed (UTC)
        parent_id: Owning resource where deletion needs it (the VPC for a gateway attachment)
    """

    kind: ResourceKind
    resource_id: str
    created_at: datetime
    parent_id: Optional[str] = None

    def describe(self) -> str:
        label = self.kind.value.replace("_", " ")
        if self.parent_id:
            return f"{label} {self.resource_id} ({self.parent_id})"
        return f"{label} {self.resource_id}"


@dataclass
class ResourceLedger:
    """Append-only list of resources created during one provisioning attempt."""

    records: list[ResourceRecord] = field(default_factory=list)

    def record(
        self, kind: ResourceKind, resource_id: str, parent_id: Optional[str] = None
    ) -> ResourceRecord:
        entry = ResourceRecord(
            kind=kind,
            resource_id=resource_id,
            created_at=datetime.now(timezone.utc),
            parent_id=parent_id,
        )
        self.records.append(entry)
        logging.debug("Recorded %s", entry.describe())
        return entry

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def ids(self, kind: ResourceKind) -> list[str]:
        return [entry.resource_id for entry in self.records if entry.kind is kind]

    def first_id(self, kind: ResourceKind) -> Optional[str]:
        found = self.ids(kind)
        return found[0] if found else None

    # Views read by the workflow when reporting what this run created
    @property
    def vpc_id(self) -> Optional[str]:
        return self.first_id(ResourceKind.VPC)

    @property
    def subnet_ids(self) -> list[str]:
        return self.ids(ResourceKind.SUBNET)

    @property
    def security_group_id(self) -> Optional[str]:
        return self.first_id(ResourceKind.SECURITY_GROUP)


def _delete_record(entry, ec2_client, rds_client, wait):
    """Dispatch one record to the matching delete call."""
    kind = entry.kind
    if kind is ResourceKind.DB_INSTANCE:
        return rds_cleanup_utils.delete_aurora_instance(rds_client, entry.resource_id, wait=wait)
    if kind is ResourceKind.DB_CLUSTER:
        return rds_cleanup_utils.delete_aurora_cluster(rds_client, entry.resource_id, wait=wait)
    if kind is ResourceKind.DB_SUBNET_GROUP:
        return rds_cleanup_utils.delete_db_subnet_group(rds_client, entry.resource_id)
    if kind is ResourceKind.SECURITY_GROUP:
        return vpc_cleanup_utils.delete_security_group(ec2_client, entry.resource_id)
    if kind is ResourceKind.ROUTE_TABLE_ASSOCIATION:
        return vpc_cleanup_utils.delete_route_table_association(ec2_client, entry.resource_id)
    if kind is ResourceKind.ROUTE_TABLE:
        return vpc_cleanup_utils.delete_route_table(ec2_client, entry.resource_id)
    if kind is ResourceKind.GATEWAY_ATTACHMENT:
        return vpc_cleanup_utils.detach_internet_gateway(
            ec2_client, entry.resource_id, entry.parent_id
        )
    if kind is ResourceKind.INTERNET_GATEWAY:
        return vpc_cleanup_utils.delete_internet_gateway(ec2_client, entry.resource_id)
    if kind is ResourceKind.SUBNET:
        return vpc_cleanup_utils.delete_subnet(ec2_client, entry.resource_id)
    if kind is ResourceKind.VPC:
        return vpc_cleanup_utils.delete_vpc(ec2_client, entry.resource_id)
    raise ValueError(f"Unsupported resource kind: {kind}")


def teardown_resources(ledger, ec2_client, rds_client, wait=True):
    """
    Delete every resource in the ledger, newest first, continuing on errors.

    Args:
        ledger: ResourceLedger to walk
        ec2_client: Boto3 EC2 client
        rds_client: Boto3 RDS client
        wait: Wait for instance and cluster deletions to finish before moving on

    Returns:
        list: (ResourceRecord, exception) pairs for deletions that failed
    """
    failures = []
    if not len(ledger):
        print("Nothing to clean up.")
        return failures

    print(f"\n🗑️  Cleaning up {len(ledger)} resource(s)")
    print("=" * 80)
    for entry in reversed(ledger.records):
        try:
            _delete_record(entry, ec2_client, rds_client, wait)
        except (ClientError, BotoCoreError) as e:
            logging.error("Failed to delete %s: %s", entry.describe(), e)
            print(f"  ❌ Error deleting {entry.describe()}: {e}")
            failures.append((entry, e))

    if failures:
        print(f"⚠️  Cleanup finished with {len(failures)} error(s)")
    else:
        print("✅ Cleanup finished")
    return failures
