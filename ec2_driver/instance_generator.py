"""
Instance generator. Converts the driver configuration into the data needed to launch
an EC2 instance.
"""

###########
# Imports #
###########

# Internal imports
from ec2_driver.config import DriverConfig
from ec2_driver.constants import (
    DEFAULT_LOGGER_NAME,
    TAGGED_RESOURCE_TYPES,
)
from ec2_driver.mixins.aws_mixins import AwsMixin

# Standard library imports
import base64
import copy
import logging
import os
import re
from typing import Any, Dict, List, Optional

# Type hints
from mypy_boto3_ec2.client import EC2Client


##########
# Logger #
##########

DEFAULT_LOGGER = logging.getLogger(DEFAULT_LOGGER_NAME)


# Fields that are dropped from the instance data when they are empty. The core fields
# (instance type, image, key name, etc.) are always returned.
OPTIONAL_FIELDS = [
    "block_device_mappings",
    "instance_initiated_shutdown_behavior",
    "network_interfaces",
    "placement",
    "security_group_ids",
    "user_data",
    "iam_instance_profile",
    "tag_specifications",
]


class ResolutionError(ValueError):
    """
    Raised when a tag filter does not match any resource
    """
    pass


####################
# Class definition #
####################

class InstanceGenerator(AwsMixin):
    config: DriverConfig
    ec2_client: EC2Client
    logger: logging.Logger

    # Base64-encoded user data; computed once per generator
    _user_data: Optional[str]

    def __init__(self,
        config: DriverConfig,
        ec2_client: Optional[EC2Client],
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.ec2_client = ec2_client  # type: ignore
        self.logger = logger if logger is not None else DEFAULT_LOGGER
        self._user_data = None

    def ec2_instance_data(self) -> Dict[str, Any]:
        """
        Transform the driver configuration into the data needed to create an EC2
        instance.

        returns:
            instance data as a dictionary with snake_case keys
        raises:
            ResolutionError if `security_group_filter` does not match any group
        """
        subnet_id = self.resolve_subnet_id()
        security_group_ids = self.resolve_security_group_ids()

        data: Dict[str, Any] = {
            "instance_type": self.config.instance_type,
            "ebs_optimized": self.config.ebs_optimized,
            "image_id": self.config.image_id,
            "key_name": self.config.aws_ssh_key_id,
            "subnet_id": subnet_id,
            "private_ip_address": self.config.private_ip_address,
        }

        if self.config.tags:
            tags = [{"key": k, "value": v} for k, v in self.config.tags.items()]
            data["tag_specifications"] = [
                {"resource_type": _type, "tags": tags}
                for _type in TAGGED_RESOURCE_TYPES
            ]

        data["placement"] = self.placement()

        if self.config.block_device_mappings:
            data["block_device_mappings"] = copy.deepcopy(list(self.config.block_device_mappings))  # noqa: E501

        if security_group_ids:
            data["security_group_ids"] = security_group_ids

        if self.config.instance_initiated_shutdown_behavior is not None:
            data["instance_initiated_shutdown_behavior"] = self.config.instance_initiated_shutdown_behavior  # noqa: E501

        data["user_data"] = self.prepared_user_data()

        if self.config.iam_profile_name is not None:
            data["iam_instance_profile"] = {"name": self.config.iam_profile_name}

        network_interfaces = self.network_interfaces(subnet_id, security_group_ids)
        if network_interfaces is not None:
            data["network_interfaces"] = network_interfaces

            # When the request has a network interface, the subnet, private IP, and
            # security groups must be specified on the interface and not at the top
            # level.
            interface = network_interfaces[0]
            if "subnet_id" in interface:
                del data["subnet_id"]
            if "private_ip_address" in interface:
                del data["private_ip_address"]
            if "groups" in interface:
                data.pop("security_group_ids", None)

        return self.remove_empty_fields(data)

    def resolve_subnet_id(self) -> Optional[str]:
        """
        Get the subnet ID. If the user did not specify one but specified a subnet tag
        filter, then use the first subnet with that tag. A filter that matches no
        subnet results in no subnet ID.
        """
        if self.config.subnet_id is not None:
            return self.config.subnet_id
        if self.config.subnet_filter is None:
            return None

        tag_filter = self.config.subnet_filter
        subnet_ids = self.find_subnet_ids_by_tag(self.ec2_client, tag_filter)
        if not subnet_ids:
            self.logger.warning(
                f"No subnet tagged `{tag_filter.tag}={tag_filter.value}` found; launching without a subnet ID"  # noqa: E501
            )
            return None
        self.logger.debug(
            f"Using subnet `{subnet_ids[0]}` tagged `{tag_filter.tag}={tag_filter.value}`"  # noqa: E501
        )
        return subnet_ids[0]

    def resolve_security_group_ids(self) -> List[str]:
        """
        Get the security group IDs. If the user did not specify any but specified a
        security group tag filter, then use every group with that tag.

        raises:
            ResolutionError if the filter does not match any security group
        """
        if self.config.security_group_ids:
            return list(self.config.security_group_ids)
        if self.config.security_group_filter is None:
            return []

        tag_filter = self.config.security_group_filter
        group_ids = self.find_security_group_ids_by_tag(self.ec2_client, tag_filter)
        if not group_ids:
            raise ResolutionError(
                f"The group tagged '{tag_filter.tag} {tag_filter.value}' does not exist!"  # noqa: E501
            )
        self.logger.debug(
            f"Using security groups {group_ids} tagged `{tag_filter.tag}={tag_filter.value}`"  # noqa: E501
        )
        return group_ids

    def prepared_user_data(self) -> Optional[str]:
        """
        Base64-encode the user data. If `user_data` is the path to an existing file,
        then the file's contents are encoded; otherwise, the value itself is encoded.
        The result is memoized, so the file is read at most once.
        """
        if self._user_data is not None:
            return self._user_data

        user_data = self.config.user_data
        if user_data is None:
            return None

        raw: bytes
        if isinstance(user_data, str) and os.path.isfile(user_data):
            with open(user_data, 'rb') as f:
                raw = f.read()
        elif isinstance(user_data, bytes):
            raw = user_data
        else:
            raw = user_data.encode("utf-8")

        self._user_data = base64.b64encode(raw).decode("ascii")
        return self._user_data

    def availability_zone(self) -> Optional[str]:
        """
        Get the availability zone. A single letter (e.g., `c`) is appended to the
        region; a full zone name is used as-is.
        """
        availability_zone = self.config.availability_zone
        if availability_zone is None:
            return None

        if re.match(r'^[a-z]$', availability_zone, re.IGNORECASE):
            if self.config.region is None:
                self.logger.warning(
                    f"Availability zone `{availability_zone}` looks like a zone suffix, but no region is set"  # noqa: E501
                )
                return availability_zone
            return f"{self.config.region}{availability_zone}"
        return availability_zone

    def placement(self) -> Dict[str, str]:
        """
        Get the placement, i.e., the availability zone and the tenancy. Empty if
        neither is set.
        """
        placement: Dict[str, str] = {}
        availability_zone = self.availability_zone()
        if availability_zone is not None:
            placement["availability_zone"] = availability_zone
        if self.config.tenancy is not None:
            placement["tenancy"] = self.config.tenancy
        return placement

    def network_interfaces(self,
        subnet_id: Optional[str] = None,
        security_group_ids: Optional[List[str]] = None,
    ) -> Optional[List[Dict[str, Any]]]:
        """
        Build the network interface. This is only done when the user wants a public IP
        address; otherwise, return None.

        args:
            subnet_id: resolved subnet ID; defaults to the configured subnet ID
            security_group_ids: resolved security group IDs; defaults to the
                configured security group IDs
        returns:
            a list with a single network interface, or None
        """
        if self.config.associate_public_ip is not True:
            return None

        if subnet_id is None:
            subnet_id = self.config.subnet_id
        if not security_group_ids:
            security_group_ids = list(self.config.security_group_ids or [])

        interface: Dict[str, Any] = {
            "device_index": 0,
            "associate_public_ip_address": True,
            "delete_on_termination": True,
        }
        if subnet_id is not None:
            interface["subnet_id"] = subnet_id
        if security_group_ids:
            interface["groups"] = list(security_group_ids)
        if self.config.private_ip_address is not None:
            interface["private_ip_address"] = self.config.private_ip_address
        return [interface]

    def remove_empty_fields(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Remove the optional fields whose value is None, an empty list, or an empty
        dictionary.
        """
        return {
            k: v for k, v in data.items()
            if not (k in OPTIONAL_FIELDS and _is_empty(v))
        }


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple, dict, str)):
        return len(value) == 0
    return False
