"""
Driver configuration. Stores the options used to build an EC2 instance request and
the functions used to parse them from a dictionary or a YAML configuration file.
"""

# Imports
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

# Internal imports
from ec2_driver.constants import (
    DEFAULT_LOGGER_NAME,
    SUPPORTED_SHUTDOWN_BEHAVIORS,
)
from ec2_driver.parsers.yml import YmlParser
from ec2_driver.utils import (
    ConfigurationKey,
    _check_key_in_conf,
    _check_optional_key_in_conf,
)

# Logger
import logging
DEFAULT_LOGGER = logging.getLogger(DEFAULT_LOGGER_NAME)


# Keys that are checked when parsing the configuration
CONFIGURATION_KEYS = [
    ConfigurationKey("instance_type", str),
    ConfigurationKey("ebs_optimized", bool),
    ConfigurationKey("image_id", str),
    ConfigurationKey("aws_ssh_key_id", str),
    ConfigurationKey("subnet_id", str),
    ConfigurationKey("subnet_filter", dict),
    ConfigurationKey("private_ip_address", str),
    ConfigurationKey("associate_public_ip", bool),
    ConfigurationKey("security_group_ids", [str, list]),
    ConfigurationKey("security_group_filter", dict),
    ConfigurationKey("block_device_mappings", list),
    ConfigurationKey("user_data", [str, bytes, Path]),
    ConfigurationKey("iam_profile_name", str),
    ConfigurationKey("availability_zone", str),
    ConfigurationKey("tenancy", str),
    ConfigurationKey("region", str),
    ConfigurationKey(
        "instance_initiated_shutdown_behavior", str, SUPPORTED_SHUTDOWN_BEHAVIORS
    ),
    ConfigurationKey("tags", dict),
    ConfigurationKey("shared_credentials_profile", str),
    ConfigurationKey("retry_limit", int),
]


@dataclass(frozen=True)
class TagFilter:
    """
    A (tag name, tag value) pair used to look up a subnet or security group
    """
    tag: str
    value: str

    @classmethod
    def from_dict(cls, conf: Dict[str, Any], conf_name: str) -> "TagFilter":
        for _k in ["tag", "value"]:
            _check_key_in_conf(ConfigurationKey(_k, [str, int]), conf, conf_name)
        return cls(tag=str(conf["tag"]), value=str(conf["value"]))

    def to_ec2_filter(self) -> Dict[str, Any]:
        return {
            "Name": f"tag:{self.tag}",
            "Values": [self.value],
        }


@dataclass(frozen=True)
class DriverConfig:
    """
    Options for a single EC2 instance. Every option is optional; an option that is
    not set is `None`.
    """
    instance_type: Optional[str] = None
    ebs_optimized: Optional[bool] = None
    image_id: Optional[str] = None
    aws_ssh_key_id: Optional[str] = None
    subnet_id: Optional[str] = None
    subnet_filter: Optional[TagFilter] = None
    private_ip_address: Optional[str] = None
    associate_public_ip: Optional[bool] = None
    security_group_ids: Optional[Tuple[str, ...]] = None
    security_group_filter: Optional[TagFilter] = None
    block_device_mappings: Optional[Tuple[Dict[str, Any], ...]] = None
    user_data: Optional[Union[str, bytes]] = None
    iam_profile_name: Optional[str] = None
    availability_zone: Optional[str] = None
    tenancy: Optional[str] = None
    region: Optional[str] = None
    instance_initiated_shutdown_behavior: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)
    shared_credentials_profile: Optional[str] = None
    retry_limit: Optional[int] = None

    @classmethod
    def from_dict(cls, conf: Dict[str, Any]) -> "DriverConfig":
        """
        Create the driver configuration from a dictionary

        args:
            conf: driver configuration as a dictionary
        returns:
            DriverConfig
        raises:
            ValueError if a recognized key has the wrong type or an unsupported value
        """
        known_keys = [f.name for f in fields(cls)]
        for key in conf.keys():
            if key not in known_keys:
                DEFAULT_LOGGER.debug(f"Ignoring unrecognized driver option `{key}`")

        kwargs: Dict[str, Any] = {}
        for _k in CONFIGURATION_KEYS:
            if _check_optional_key_in_conf(_k, conf):
                kwargs[_k.key_name] = conf[_k.key_name]

        # Tag filters
        for filter_key in ["subnet_filter", "security_group_filter"]:
            if filter_key in kwargs:
                kwargs[filter_key] = TagFilter.from_dict(kwargs[filter_key], filter_key)

        # Security group IDs can be specified as a single string
        if "security_group_ids" in kwargs:
            kwargs["security_group_ids"] = tuple(
                listify(kwargs["security_group_ids"])
            )

        if "block_device_mappings" in kwargs:
            kwargs["block_device_mappings"] = tuple(kwargs["block_device_mappings"])

        # A path object for the user data, e.g., from {{ Path(...) }} in a YAML file
        if isinstance(kwargs.get("user_data"), Path):
            kwargs["user_data"] = str(kwargs["user_data"])

        if "tags" in kwargs:
            kwargs["tags"] = {str(k): str(v) for k, v in kwargs["tags"].items()}

        return cls(**kwargs)

    @classmethod
    def from_file(cls, fpath: Union[str, Path]) -> "DriverConfig":
        """
        Create the driver configuration from the `driver` section of a YAML file

        args:
            fpath: path to YAML configuration file
        returns:
            DriverConfig
        """
        return cls.from_dict(YmlParser(Path(fpath)).parse_driver())


def listify(value: Union[str, List[str], Tuple[str, ...]]) -> List[str]:
    """
    Convert a single value or a sequence of values into a list
    """
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]
