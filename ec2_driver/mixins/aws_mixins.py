"""
Generic AWS functions
"""

from typing import List

# Internal imports
from ec2_driver.config import TagFilter

# Type hints
from mypy_boto3_ec2.client import EC2Client


class AwsMixin:

    def find_subnet_ids_by_tag(self,
        ec2_client: EC2Client,
        tag_filter: TagFilter,
    ) -> List[str]:
        """
        Find the subnets tagged with `tag_filter`

        args:
            ec2_client: Boto3 EC2 client
            tag_filter: tag name and value to look for
        returns:
            IDs of the matching subnets, in the order returned by the API. Empty if no
            subnet matches.
        """
        response = ec2_client.describe_subnets(
            Filters=[tag_filter.to_ec2_filter()]
        )
        return [subnet["SubnetId"] for subnet in response.get("Subnets", [])]

    def find_security_group_ids_by_tag(self,
        ec2_client: EC2Client,
        tag_filter: TagFilter,
    ) -> List[str]:
        """
        Find the security groups tagged with `tag_filter`

        args:
            ec2_client: Boto3 EC2 client
            tag_filter: tag name and value to look for
        returns:
            IDs of the matching security groups, in the order returned by the API.
            Empty if no group matches.
        """
        response = ec2_client.describe_security_groups(
            Filters=[tag_filter.to_ec2_filter()]
        )
        return [sg["GroupId"] for sg in response.get("SecurityGroups", [])]
