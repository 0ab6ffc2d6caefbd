"""
Fixtures shared across test modules
"""

# Imports
import boto3
import pytest
from botocore.stub import Stubber


@pytest.fixture
def ec2_client():
    """
    Real boto3 EC2 client with dummy credentials. API calls must be stubbed.
    """
    return boto3.client(
        "ec2",
        region_name="us-west-2",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def ec2_stubber(ec2_client):
    with Stubber(ec2_client) as stubber:
        yield stubber
        stubber.assert_no_pending_responses()
