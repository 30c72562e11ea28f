#!/usr/bin/env python3
"""
AWS Client Factory Module
Provides standardized boto3 client creation for the EC2 and RDS services.
"""

import logging
import os
from typing import Optional

import boto3


def load_credentials_from_env() -> Optional[tuple[str, str, Optional[str]]]:
    """
    Read explicit AWS credentials from the process environment.

    The environment is expected to have been seeded from the .env file
    already (see AuroraConfig.from_env).

    Returns:
        tuple: (aws_access_key_id, aws_secret_access_key, aws_session_token),
            or None when no explicit key pair is set and boto3 should fall back
            to its default credential chain (profiles, instance roles, SSO).
    """
    aws_access_key_id = os.getenv("AWS_ACCESS_KEY_ID")
    aws_secret_access_key = os.getenv("AWS_SECRET_ACCESS_KEY")
    if not (aws_access_key_id and aws_secret_access_key):
        logging.debug("No explicit AWS key pair in environment; using default credential chain")
        return None

    aws_session_token = os.getenv("AWS_SESSION_TOKEN")
    logging.debug("Using AWS credentials from environment")
    if aws_session_token:
        logging.debug("Using AWS session token from environment")
    return aws_access_key_id, aws_secret_access_key, aws_session_token


def create_client(service_name: str, region: str):
    """
    Create a boto3 client for an AWS service.

    Args:
        service_name: AWS service name (e.g., 'ec2', 'rds')
        region: AWS region name

    Returns:
        boto3.client: Configured AWS service client
    """
    client_kwargs = {"region_name": region}

    credentials = load_credentials_from_env()
    if credentials is not None:
        aws_access_key_id, aws_secret_access_key, aws_session_token = credentials
        client_kwargs["aws_access_key_id"] = aws_access_key_id
        client_kwargs["aws_secret_access_key"] = aws_secret_access_key
        if aws_session_token:
            client_kwargs["aws_session_token"] = aws_session_token

    return boto3.client(service_name, **client_kwargs)


def create_ec2_client(region: str):
    """Create an EC2 boto3 client."""
    return create_client("ec2", region)


def create_rds_client(region: str):
    """Create an RDS boto3 client."""
    return create_client("rds", region)
