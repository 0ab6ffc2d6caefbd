"""
AWS client. Creates the boto3 session and EC2 client used by the driver.
"""

# Imports
import boto3
import botocore
from botocore.config import Config
from typing import Optional

# Internal imports
from ec2_driver.config import DriverConfig
from ec2_driver.constants import DEFAULT_RETRY_LIMIT

# Type hints
from mypy_boto3_ec2.client import EC2Client


class AwsClient:
    region: Optional[str]
    profile_name: Optional[str]
    retry_limit: int

    def __init__(self,
        region: Optional[str] = None,
        profile_name: Optional[str] = None,
        retry_limit: int = DEFAULT_RETRY_LIMIT,
    ):
        self.region = region
        self.profile_name = profile_name
        self.retry_limit = retry_limit

        # Created on first use
        self._session: Optional[boto3.Session] = None
        self._ec2: Optional[EC2Client] = None

    @classmethod
    def from_config(cls, config: DriverConfig) -> "AwsClient":
        return cls(
            region=config.region,
            profile_name=config.shared_credentials_profile,
            retry_limit=(
                config.retry_limit if config.retry_limit is not None
                else DEFAULT_RETRY_LIMIT
            ),
        )

    @property
    def session(self) -> boto3.Session:
        if self._session is None:
            self._session = boto3.Session(
                profile_name=self.profile_name,
                region_name=self.region,
            )
        return self._session

    @property
    def ec2(self) -> EC2Client:
        if self._ec2 is None:
            self._ec2 = self.session.client(
                "ec2",
                config=Config(retries={"max_attempts": self.retry_limit}),
            )
        return self._ec2

    def check_credentials(self) -> int:
        """
        Confirms that the user has AWS credentials and can use the boto3 API

        returns:
            0 if the user has configured their AWS credentials
        raises:
            ValueError if the user has not configured their AWS credentials
        """
        try:
            credentials = self.session.get_credentials()
        except botocore.exceptions.ProfileNotFound as e:
            raise ValueError(str(e))
        if credentials is None:
            msg_list = [
                "AWS credentials not found. Consult Boto3 documentation:",
                "https://boto3.amazonaws.com/v1/documentation/api/latest/guide/credentials.html"    # noqa: E501
            ]
            raise ValueError('\n'.join(msg_list))
        return 0
