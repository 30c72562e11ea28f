"""Delete the RDS resources created by the provisioner."""

import logging

from botocore.exceptions import ClientError, WaiterError

from aurora_toolkit.common import waiter_utils
from aurora_toolkit.common.aws_common import get_error_code, is_not_found_error


def _already_being_deleted(error):
    return get_error_code(error) in ("InvalidDBInstanceState", "InvalidDBClusterStateFault") and (
        "being deleted" in str(error)
    )


def _wait_for_deletion(wait_fn, rds_client, identifier, label):
    print(f"  ⏳ Waiting for {label} deletion...")
    try:
        wait_fn(rds_client, identifier)
    except (ClientError, WaiterError) as e:
        logging.warning("Gave up waiting for %s %s to be deleted: %s", label, identifier, e)
        print(f"  ⚠️  Proceeding without confirmed {label} deletion: {e}")
        return
    print(f"  ✅ {label.capitalize()} {identifier} deleted")


def delete_aurora_instance(rds_client, instance_id, wait=True):
    """
    Delete an Aurora DB instance, optionally waiting until it is gone.

    Args:
        rds_client: Boto3 RDS client
        instance_id: DB instance identifier
        wait: Block until the deletion finishes (the cluster cannot be deleted before)

    Returns:
        bool: True if a deletion was initiated or in progress, False if already gone
    """
    print(f"  Deleting Aurora instance: {instance_id}")
    try:
        rds_client.delete_db_instance(
            DBInstanceIdentifier=instance_id,
            SkipFinalSnapshot=True,
            DeleteAutomatedBackups=True,
        )
        print("  ✅ Aurora instance deletion initiated")
    except ClientError as e:
        if is_not_found_error(e, ("DBInstanceNotFound", "DBInstanceNotFoundFault")):
            print("  ⚠️  Instance already deleted")
            return False
        if not _already_being_deleted(e):
            raise
        print("  ⚠️  Instance already being deleted")

    if wait:
        _wait_for_deletion(waiter_utils.wait_db_instance_deleted, rds_client, instance_id, "instance")
    return True


def delete_aurora_cluster(rds_client, cluster_id, wait=True):
    """
    Delete an Aurora DB cluster without a final snapshot.

    Returns:
        bool: True if a deletion was initiated or in progress, False if already gone
    """
    print(f"  Deleting Aurora cluster: {cluster_id}")
    try:
        rds_client.delete_db_cluster(DBClusterIdentifier=cluster_id, SkipFinalSnapshot=True)
        print("  ✅ Aurora cluster deletion initiated")
    except ClientError as e:
        if is_not_found_error(e, ("DBClusterNotFoundFault", "DBClusterNotFound")):
            print("  ⚠️  Cluster already deleted")
            return False
        if not _already_being_deleted(e):
            raise
        print("  ⚠️  Cluster already being deleted")

    if wait:
        _wait_for_deletion(waiter_utils.wait_db_cluster_deleted, rds_client, cluster_id, "cluster")
    return True


def delete_db_subnet_group(rds_client, subnet_group_name):
    """
    Delete a DB subnet group.

    Returns:
        bool: True if deleted, False if it did not exist
    """
    print(f"  Deleting DB subnet group: {subnet_group_name}")
    try:
        rds_client.delete_db_subnet_group(DBSubnetGroupName=subnet_group_name)
    except ClientError as e:
        if is_not_found_error(e, ("DBSubnetGroupNotFoundFault",)):
            print(f"  ⚠️  DB subnet group {subnet_group_name} not found")
            return False
        raise
    print(f"  ✅ DB subnet group {subnet_group_name} deleted")
    return True
