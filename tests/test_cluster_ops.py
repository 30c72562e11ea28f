"""Tests for aurora_toolkit/scripts/provisioning/cluster_ops.py"""

from __future__ import annotations

import pytest

from aurora_toolkit.common.exceptions import (
    MissingIdentifierError,
    ResourceStatusError,
    WaitTimeoutError,
)
from aurora_toolkit.scripts.provisioning.cluster_ops import (
    create_aurora_cluster,
    create_aurora_instance,
    get_cluster_endpoint_info,
    wait_for_cluster_available,
    wait_for_instance_available,
)
from aurora_toolkit.scripts.provisioning.resource_ledger import ResourceKind
from tests.aws_test_utils import stub_cluster_and_instance


class TestCreateAuroraCluster:
    """Tests for create_aurora_cluster."""

    def test_request_parameters(self, mock_rds, aurora_config, ledger):
        """The cluster request carries engine, credentials, network and scaling settings."""
        stub_cluster_and_instance(mock_rds)

        cluster_id = create_aurora_cluster(
            mock_rds, aurora_config, "sg-1", "aurora-serverless-subnet-group", ledger
        )

        assert cluster_id == "test-cluster"
        kwargs = mock_rds.create_db_cluster.call_args.kwargs
        assert kwargs["DBClusterIdentifier"] == "test-cluster"
        assert kwargs["Engine"] == "aurora-postgresql"
        assert kwargs["EngineMode"] == "provisioned"
        assert kwargs["EngineVersion"] == "14.7"
        assert kwargs["DatabaseName"] == "auroradb"
        assert kwargs["MasterUsername"] == aurora_config.master_username
        assert kwargs["MasterUserPassword"] == "s3cret-Passw0rd"
        assert kwargs["VpcSecurityGroupIds"] == ["sg-1"]
        assert kwargs["DBSubnetGroupName"] == "aurora-serverless-subnet-group"
        assert kwargs["ServerlessV2ScalingConfiguration"] == {
            "MinCapacity": 0.5,
            "MaxCapacity": 1.0,
        }
        assert kwargs["StorageType"] == "aurora"
        assert {"Key": "ManagedBy", "Value": "aurora-serverless-provisioner"} in kwargs["Tags"]

    def test_records_cluster(self, mock_rds, aurora_config, ledger):
        """The cluster is recorded once creation is confirmed."""
        stub_cluster_and_instance(mock_rds)

        create_aurora_cluster(mock_rds, aurora_config, "sg-1", "group", ledger)

        assert ledger.ids(ResourceKind.DB_CLUSTER) == ["test-cluster"]

    def test_failed_request_records_nothing(self, mock_rds, aurora_config, ledger):
        """A rejected creation request leaves the ledger untouched."""
        mock_rds.create_db_cluster.side_effect = RuntimeError("quota")

        with pytest.raises(RuntimeError):
            create_aurora_cluster(mock_rds, aurora_config, "sg-1", "group", ledger)

        assert len(ledger) == 0

    def test_missing_identifier(self, mock_rds, aurora_config, ledger):
        """A response without the cluster identifier is a validation error."""
        mock_rds.create_db_cluster.return_value = {"DBCluster": {}}

        with pytest.raises(MissingIdentifierError):
            create_aurora_cluster(mock_rds, aurora_config, "sg-1", "group", ledger)


class TestCreateAuroraInstance:
    """Tests for create_aurora_instance."""

    def test_request_parameters(self, mock_rds, aurora_config, ledger):
        """The instance is serverless, publicly accessible and inside the cluster."""
        stub_cluster_and_instance(mock_rds)

        instance_id = create_aurora_instance(mock_rds, aurora_config, "test-cluster", ledger)

        assert instance_id == "test-cluster-instance-1"
        kwargs = mock_rds.create_db_instance.call_args.kwargs
        assert kwargs["DBInstanceIdentifier"] == "test-cluster-instance-1"
        assert kwargs["DBClusterIdentifier"] == "test-cluster"
        assert kwargs["Engine"] == "aurora-postgresql"
        assert kwargs["DBInstanceClass"] == "db.serverless"
        assert kwargs["PubliclyAccessible"] is True
        assert ledger.ids(ResourceKind.DB_INSTANCE) == ["test-cluster-instance-1"]

    def test_missing_identifier(self, mock_rds, aurora_config, ledger):
        """A response without the instance identifier is a validation error."""
        mock_rds.create_db_instance.return_value = {}

        with pytest.raises(MissingIdentifierError):
            create_aurora_instance(mock_rds, aurora_config, "test-cluster", ledger)

        assert len(ledger) == 0


class TestWaiters:
    """Tests for the cluster and instance wait helpers."""

    def test_cluster_becomes_available(self, mock_rds):
        """The final description is returned once the cluster is available."""
        stub_cluster_and_instance(mock_rds, cluster_statuses=("creating", "available"))

        cluster = wait_for_cluster_available(mock_rds, "test-cluster", delay=1, max_attempts=5)

        assert cluster["Status"] == "available"
        mock_rds.describe_db_clusters.assert_called_with(DBClusterIdentifier="test-cluster")
        assert mock_rds.describe_db_clusters.call_count == 2

    def test_cluster_failed(self, mock_rds):
        """A failed cluster ends the wait with the status in the error."""
        stub_cluster_and_instance(mock_rds, cluster_statuses=("creating", "failed"))

        with pytest.raises(ResourceStatusError, match="failed"):
            wait_for_cluster_available(mock_rds, "test-cluster", delay=1, max_attempts=5)

    def test_instance_timeout(self, mock_rds):
        """The instance wait times out after the attempt ceiling."""
        stub_cluster_and_instance(
            mock_rds, instance_statuses=("creating", "creating", "creating", "available")
        )

        with pytest.raises(WaitTimeoutError):
            wait_for_instance_available(
                mock_rds, "test-cluster-instance-1", delay=1, max_attempts=3
            )

        assert mock_rds.describe_db_instances.call_count == 3

    def test_instance_deleting(self, mock_rds):
        """An instance observed as deleting ends the wait."""
        stub_cluster_and_instance(mock_rds, instance_statuses=("deleting",))

        with pytest.raises(ResourceStatusError, match="deleting"):
            wait_for_instance_available(mock_rds, "test-cluster-instance-1")

    def test_empty_describe_response(self, mock_rds):
        """A describe call returning no clusters is a validation error."""
        mock_rds.describe_db_clusters.return_value = {"DBClusters": []}

        with pytest.raises(MissingIdentifierError):
            wait_for_cluster_available(mock_rds, "test-cluster")


def test_get_cluster_endpoint_info():
    """Connection details are pulled from the cluster description."""
    info = get_cluster_endpoint_info(
        {
            "DBClusterIdentifier": "c1",
            "Endpoint": "c1.cluster-x.rds.amazonaws.com",
            "ReaderEndpoint": "c1.cluster-ro-x.rds.amazonaws.com",
            "Port": 5432,
            "Engine": "aurora-postgresql",
        }
    )

    assert info == {
        "cluster_identifier": "c1",
        "writer_endpoint": "c1.cluster-x.rds.amazonaws.com",
        "reader_endpoint": "c1.cluster-ro-x.rds.amazonaws.com",
        "port": 5432,
        "engine": "aurora-postgresql",
    }


def test_get_cluster_endpoint_info_without_endpoint():
    """A cluster without a writer endpoint cannot be connected to."""
    with pytest.raises(MissingIdentifierError, match="Endpoint"):
        get_cluster_endpoint_info({"DBClusterIdentifier": "c1"})
