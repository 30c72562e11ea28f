"""Tests for aurora_toolkit/common/rds_cleanup_utils.py"""

from __future__ import annotations

import pytest
from botocore.exceptions import ClientError

from aurora_toolkit.common.rds_cleanup_utils import (
    delete_aurora_cluster,
    delete_aurora_instance,
    delete_db_subnet_group,
)
from tests.aws_test_utils import make_client_error


class TestDeleteAuroraInstance:
    """Tests for delete_aurora_instance."""

    def test_deletes_and_waits(self, mock_rds, capsys):
        """Deletion skips the final snapshot and waits for completion."""
        assert delete_aurora_instance(mock_rds, "inst-1") is True

        mock_rds.delete_db_instance.assert_called_once_with(
            DBInstanceIdentifier="inst-1",
            SkipFinalSnapshot=True,
            DeleteAutomatedBackups=True,
        )
        mock_rds.get_waiter.assert_called_once_with("db_instance_deleted")
        mock_rds.get_waiter.return_value.wait.assert_called_once_with(
            DBInstanceIdentifier="inst-1",
            WaiterConfig={"Delay": 30, "MaxAttempts": 60},
        )
        assert "Instance inst-1 deleted" in capsys.readouterr().out

    def test_without_wait(self, mock_rds):
        """wait=False returns right after the delete request."""
        delete_aurora_instance(mock_rds, "inst-1", wait=False)

        mock_rds.get_waiter.assert_not_called()

    def test_not_found(self, mock_rds, capsys):
        """A missing instance is already deleted."""
        mock_rds.delete_db_instance.side_effect = make_client_error(
            "DBInstanceNotFound", "DeleteDBInstance"
        )

        assert delete_aurora_instance(mock_rds, "inst-1") is False
        mock_rds.get_waiter.assert_not_called()
        assert "already deleted" in capsys.readouterr().out

    def test_already_being_deleted_still_waits(self, mock_rds):
        """An in-progress deletion is waited on rather than reported."""
        mock_rds.delete_db_instance.side_effect = make_client_error(
            "InvalidDBInstanceState",
            "DeleteDBInstance",
            "Instance inst-1 is already being deleted.",
        )

        assert delete_aurora_instance(mock_rds, "inst-1") is True
        mock_rds.get_waiter.assert_called_once_with("db_instance_deleted")

    def test_other_errors_propagate(self, mock_rds):
        """Access errors are raised to the caller."""
        mock_rds.delete_db_instance.side_effect = make_client_error(
            "AccessDenied", "DeleteDBInstance"
        )

        with pytest.raises(ClientError):
            delete_aurora_instance(mock_rds, "inst-1")


class TestDeleteAuroraCluster:
    """Tests for delete_aurora_cluster."""

    def test_deletes_and_waits(self, mock_rds):
        """The cluster is deleted without a final snapshot."""
        assert delete_aurora_cluster(mock_rds, "cluster-1") is True

        mock_rds.delete_db_cluster.assert_called_once_with(
            DBClusterIdentifier="cluster-1", SkipFinalSnapshot=True
        )
        mock_rds.get_waiter.assert_called_once_with("db_cluster_deleted")

    @pytest.mark.parametrize("code", ["DBClusterNotFoundFault", "DBClusterNotFound"])
    def test_not_found(self, mock_rds, code):
        """Both not-found spellings count as already deleted."""
        mock_rds.delete_db_cluster.side_effect = make_client_error(code, "DeleteDBCluster")

        assert delete_aurora_cluster(mock_rds, "cluster-1") is False

    def test_invalid_state_not_deleting_propagates(self, mock_rds):
        """An invalid state that is not a deletion in progress is an error."""
        mock_rds.delete_db_cluster.side_effect = make_client_error(
            "InvalidDBClusterStateFault", "DeleteDBCluster", "Cluster has instances"
        )

        with pytest.raises(ClientError):
            delete_aurora_cluster(mock_rds, "cluster-1")


class TestDeleteDbSubnetGroup:
    """Tests for delete_db_subnet_group."""

    def test_deletes(self, mock_rds):
        """The group is deleted by name."""
        assert delete_db_subnet_group(mock_rds, "group-1") is True
        mock_rds.delete_db_subnet_group.assert_called_once_with(DBSubnetGroupName="group-1")

    def test_not_found(self, mock_rds):
        """A missing group is reported as not deleted."""
        mock_rds.delete_db_subnet_group.side_effect = make_client_error(
            "DBSubnetGroupNotFoundFault", "DeleteDBSubnetGroup"
        )

        assert delete_db_subnet_group(mock_rds, "group-1") is False
