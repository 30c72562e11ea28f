"""
Status polling utilities.

wait_for_status drives the create-then-wait flow for RDS clusters and
instances with a fixed delay and a hard attempt ceiling. The deletion
helpers wrap the boto3 waiters with the same defaults.
"""

from threading import Event

from aurora_toolkit.common.exceptions import ResourceStatusError, WaitTimeoutError

_WAIT_EVENT = Event()

AVAILABLE_STATUS = "available"
TERMINAL_FAILURE_STATUSES = ("failed", "deleting")


def wait_for_status(describe, status_key, resource_label, delay=30, max_attempts=60):
    """
    Poll a resource until it reports the available status.

    The resource is described at most max_attempts times. There is no
    delay after the final attempt.

    Args:
        describe: Callable returning the current resource description (dict)
        status_key: Key in the description holding the status string
        resource_label: Human readable name used in messages and errors
        delay: Seconds between polling attempts (default: 30)
        max_attempts: Maximum number of describe calls (default: 60, ~30 min)

    Returns:
        dict: The last description, whose status is available

    Raises:
        ResourceStatusError: If the status becomes failed or deleting
        WaitTimeoutError: If the ceiling is reached without becoming available
    """
    status = None
    for attempt in range(1, max_attempts + 1):
        resource = describe()
        status = resource.get(status_key)
        print(f"  ⏳ {resource_label} status: {status} (attempt {attempt}/{max_attempts})")

        if status == AVAILABLE_STATUS:
            return resource
        if status in TERMINAL_FAILURE_STATUSES:
            raise ResourceStatusError(resource_label, status)

        if attempt < max_attempts:
            _WAIT_EVENT.wait(delay)

    raise WaitTimeoutError(resource_label, max_attempts, status)


def wait_db_instance_deleted(rds_client, instance_id, delay=30, max_attempts=60):
    """
    Wait for an RDS instance to be deleted.

    Raises:
        WaiterError: If waiter times out or encounters an error
    """
    waiter = rds_client.get_waiter("db_instance_deleted")
    waiter.wait(
        DBInstanceIdentifier=instance_id,
        WaiterConfig={"Delay": delay, "MaxAttempts": max_attempts},
    )


def wait_db_cluster_deleted(rds_client, cluster_id, delay=30, max_attempts=60):
    """
    Wait for an RDS cluster to be deleted.

    Raises:
        WaiterError: If waiter times out or encounters an error
    """
    waiter = rds_client.get_waiter("db_cluster_deleted")
    waiter.wait(
        DBClusterIdentifier=cluster_id,
        WaiterConfig={"Delay": delay, "MaxAttempts": max_attempts},
    )


def wait_vpc_available(ec2_client, vpc_id, delay=5, max_attempts=40):
    """Wait for a freshly created VPC to reach the available state."""
    waiter = ec2_client.get_waiter("vpc_available")
    waiter.wait(VpcIds=[vpc_id], WaiterConfig={"Delay": delay, "MaxAttempts": max_attempts})
