"""Aurora Serverless V2 cluster and instance operations"""

from aurora_toolkit import config as settings
from aurora_toolkit.common import waiter_utils
from aurora_toolkit.common.exceptions import MissingIdentifierError

from .resource_ledger import ResourceKind


def create_aurora_cluster(rds_client, config, security_group_id, subnet_group_name, ledger):
    """
    Request creation of the Aurora Serverless V2 cluster.

    Args:
        rds_client: Boto3 RDS client
        config: AuroraConfig for this run
        security_group_id: Security group attached to the cluster
        subnet_group_name: DB subnet group the cluster launches into
        ledger: ResourceLedger receiving the cluster

    Returns:
        str: The cluster identifier reported by RDS
    """
    print(f"🚀 Creating Aurora Serverless V2 cluster {config.cluster_identifier}...")
    response = rds_client.create_db_cluster(
        DBClusterIdentifier=config.cluster_identifier,
        Engine=settings.ENGINE,
        EngineMode=settings.ENGINE_MODE,
        EngineVersion=config.engine_version,
        DatabaseName=config.database_name,
        MasterUsername=config.master_username,
        MasterUserPassword=config.master_password,
        VpcSecurityGroupIds=[security_group_id],
        DBSubnetGroupName=subnet_group_name,
        ServerlessV2ScalingConfiguration={
            "MinCapacity": config.min_capacity,
            "MaxCapacity": config.max_capacity,
        },
        StorageType=settings.STORAGE_TYPE,
        Tags=settings.system_tags(config.cluster_identifier),
    )
    cluster_id = response.get("DBCluster", {}).get("DBClusterIdentifier")
    if not cluster_id:
        raise MissingIdentifierError("DBClusterIdentifier", "CreateDBCluster")
    ledger.record(ResourceKind.DB_CLUSTER, cluster_id)
    print(f"  ✅ Cluster creation initiated: {cluster_id}")
    return cluster_id


def create_aurora_instance(rds_client, config, cluster_id, ledger):
    """
    Request creation of the serverless writer instance inside the cluster.

    Returns:
        str: The instance identifier reported by RDS
    """
    print(f"🚀 Creating Aurora instance {config.instance_identifier} ({config.instance_class})...")
    response = rds_client.create_db_instance(
        DBInstanceIdentifier=config.instance_identifier,
        DBClusterIdentifier=cluster_id,
        Engine=settings.ENGINE,
        DBInstanceClass=config.instance_class,
        PubliclyAccessible=settings.PUBLICLY_ACCESSIBLE,
        Tags=settings.system_tags(config.instance_identifier),
    )
    instance_id = response.get("DBInstance", {}).get("DBInstanceIdentifier")
    if not instance_id:
        raise MissingIdentifierError("DBInstanceIdentifier", "CreateDBInstance")
    ledger.record(ResourceKind.DB_INSTANCE, instance_id, parent_id=cluster_id)
    print(f"  ✅ Instance creation initiated: {instance_id}")
    return instance_id


def describe_cluster(rds_client, cluster_id):
    """Return the cluster description from describe_db_clusters."""
    response = rds_client.describe_db_clusters(DBClusterIdentifier=cluster_id)
    clusters = response.get("DBClusters", [])
    if not clusters:
        raise MissingIdentifierError("DBClusters", "DescribeDBClusters")
    return clusters[0]


def describe_instance(rds_client, instance_id):
    """Return the instance description from describe_db_instances."""
    response = rds_client.describe_db_instances(DBInstanceIdentifier=instance_id)
    instances = response.get("DBInstances", [])
    if not instances:
        raise MissingIdentifierError("DBInstances", "DescribeDBInstances")
    return instances[0]


def wait_for_cluster_available(rds_client, cluster_id, delay=30, max_attempts=60):
    """Block until the cluster is available; returns its final description."""
    print("⏳ Waiting for cluster to become available...")
    return waiter_utils.wait_for_status(
        lambda: describe_cluster(rds_client, cluster_id),
        "Status",
        f"cluster {cluster_id}",
        delay=delay,
        max_attempts=max_attempts,
    )


def wait_for_instance_available(rds_client, instance_id, delay=30, max_attempts=60):
    """Block until the instance is available; returns its final description."""
    print("⏳ Waiting for instance to become available...")
    return waiter_utils.wait_for_status(
        lambda: describe_instance(rds_client, instance_id),
        "DBInstanceStatus",
        f"instance {instance_id}",
        delay=delay,
        max_attempts=max_attempts,
    )


def get_cluster_endpoint_info(cluster):
    """
    Extract connection details from a cluster description.

    Returns:
        dict: cluster_identifier, writer_endpoint, reader_endpoint, port, engine
    """
    writer_endpoint = cluster.get("Endpoint")
    if not writer_endpoint:
        raise MissingIdentifierError("Endpoint", "DescribeDBClusters")
    return {
        "cluster_identifier": cluster.get("DBClusterIdentifier"),
        "writer_endpoint": writer_endpoint,
        "reader_endpoint": cluster.get("ReaderEndpoint"),
        "port": cluster.get("Port", settings.DB_PORT),
        "engine": cluster.get("Engine", settings.ENGINE),
    }
