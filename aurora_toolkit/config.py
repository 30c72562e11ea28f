"""
Configuration for the Aurora Serverless V2 provisioner.

Values that change between runs come from environment variables (optionally
seeded from a .env file); everything else is a module-level constant.

Known weaknesses kept on purpose:
- DEFAULT_MASTER_PASSWORD is a plaintext fallback. A warning is logged whenever it is used.
- The security group opens DB_PORT to OPEN_CIDR (0.0.0.0/0).
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Region / identity defaults
DEFAULT_REGION: str = "us-east-1"
DEFAULT_CLUSTER_IDENTIFIER: str = "aurora-serverless-demo"
DEFAULT_DATABASE_NAME: str = "auroradb"
DEFAULT_MASTER_USERNAME: str = "dbadmin"
DEFAULT_MASTER_PASSWORD: str = "ChangeThisPassword123!"

# Engine settings
ENGINE: str = "aurora-postgresql"
ENGINE_MODE: str = "provisioned"
DEFAULT_ENGINE_VERSION: str = "14.7"
STORAGE_TYPE: str = "aurora"
INSTANCE_CLASS: str = "db.serverless"
MIN_CAPACITY: float = 0.5  # ACUs
MAX_CAPACITY: float = 1.0
PUBLICLY_ACCESSIBLE: bool = True

# Networking
DB_PORT: int = 5432
OPEN_CIDR: str = "0.0.0.0/0"
VPC_CIDR: str = "10.0.0.0/16"
SUBNET_CIDRS: tuple[str, ...] = ("10.0.1.0/24", "10.0.2.0/24")
SUBNET_NAME_PREFIX: str = "aurora-serverless-subnet"
SECURITY_GROUP_NAME: str = "aurora-serverless-sg"
SECURITY_GROUP_DESCRIPTION: str = "Security group for Aurora Serverless V2"
DB_SUBNET_GROUP_NAME: str = "aurora-serverless-subnet-group"
DB_SUBNET_GROUP_DESCRIPTION: str = "Subnet group for Aurora Serverless V2"

# Subnets carrying this tag are the ones the subnet group is built from
SYSTEM_TAG_KEY: str = "ManagedBy"
SYSTEM_TAG_VALUE: str = "aurora-serverless-provisioner"

# Status polling: 30s x 60 attempts = 30 minutes per waited resource
POLL_DELAY_SECONDS: int = 30
POLL_MAX_ATTEMPTS: int = 60

DEFAULT_ENV_FILE: str = ".env"


def _resolve_env_path(env_path: Optional[str] = None) -> str:
    """
    Determine which .env file should seed the environment.

    Priority order:
      1. Explicit parameter
      2. AURORA_ENV_FILE environment variable
      3. ./.env
    """
    if env_path:
        return env_path
    return os.environ.get("AURORA_ENV_FILE") or DEFAULT_ENV_FILE


def system_tags(name: Optional[str] = None) -> list[dict]:
    """Tags applied to every resource this tool creates."""
    tags = [{"Key": SYSTEM_TAG_KEY, "Value": SYSTEM_TAG_VALUE}]
    if name:
        tags.insert(0, {"Key": "Name", "Value": name})
    return tags


@dataclass(frozen=True)
class AuroraConfig:
    """Settings for one provisioning or cleanup run."""

    region: str = DEFAULT_REGION
    cluster_identifier: str = DEFAULT_CLUSTER_IDENTIFIER
    instance_identifier: str = f"{DEFAULT_CLUSTER_IDENTIFIER}-instance-1"
    database_name: str = DEFAULT_DATABASE_NAME
    master_username: str = DEFAULT_MASTER_USERNAME
    master_password: str = DEFAULT_MASTER_PASSWORD
    engine_version: str = DEFAULT_ENGINE_VERSION
    instance_class: str = INSTANCE_CLASS
    min_capacity: float = MIN_CAPACITY
    max_capacity: float = MAX_CAPACITY
    poll_delay: int = POLL_DELAY_SECONDS
    poll_max_attempts: int = POLL_MAX_ATTEMPTS

    @property
    def uses_default_password(self) -> bool:
        return self.master_password == DEFAULT_MASTER_PASSWORD

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "AuroraConfig":
        """
        Build a config from environment variables.

        The resolved .env file is loaded first without overriding variables
        that are already set in the process environment.

        Args:
            env_path: Optional override path for the .env file

        Returns:
            AuroraConfig: Immutable settings for this run
        """
        resolved_path = _resolve_env_path(env_path)
        if load_dotenv(resolved_path):
            logging.debug("Loaded environment from %s", resolved_path)

        cluster_identifier = os.getenv("DB_CLUSTER_IDENTIFIER") or DEFAULT_CLUSTER_IDENTIFIER
        config = cls(
            region=os.getenv("AWS_REGION") or DEFAULT_REGION,
            cluster_identifier=cluster_identifier,
            instance_identifier=(
                os.getenv("DB_INSTANCE_IDENTIFIER") or f"{cluster_identifier}-instance-1"
            ),
            database_name=os.getenv("DB_NAME") or DEFAULT_DATABASE_NAME,
            master_username=os.getenv("DB_MASTER_USERNAME") or DEFAULT_MASTER_USERNAME,
            master_password=os.getenv("DB_MASTER_PASSWORD") or DEFAULT_MASTER_PASSWORD,
            engine_version=os.getenv("DB_ENGINE_VERSION") or DEFAULT_ENGINE_VERSION,
        )
        if config.uses_default_password:
            logging.warning(
                "DB_MASTER_PASSWORD is not set; using the built-in default password. "
                "Set DB_MASTER_PASSWORD before provisioning anything you care about."
            )
        return config
