"""
Object store integration for objver.
"""

from .s3_client import ObjectStoreClient, create_boto3_client

__all__ = ["ObjectStoreClient", "create_boto3_client"]
