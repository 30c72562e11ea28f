"""
Shared helpers for reading boto3 responses and errors.
"""

from botocore.exceptions import ClientError


def get_error_code(error):
    """
    Extract the AWS error code from a botocore ClientError.

    Args:
        error: Exception raised by a boto3 call

    Returns:
        str: The error code, or an empty string for non-ClientError exceptions
    """
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code", "")
    return ""


def is_not_found_error(error, codes):
    """
    Check whether a ClientError signals that the resource no longer exists.

    Args:
        error: Exception raised by a boto3 call
        codes: Iterable of error codes meaning "not found" for this resource

    Returns:
        bool: True if the error code is one of codes
    """
    return get_error_code(error) in set(codes)


def tag_specifications(resource_type, tags):
    """Build the TagSpecifications argument for an EC2 create call."""
    return [{"ResourceType": resource_type, "Tags": tags}]
