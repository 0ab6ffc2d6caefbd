"""
Convert the instance data into the keyword arguments of boto3's `run_instances`
"""

# Imports
import base64
from typing import Any, Dict


def camelize(key: str) -> str:
    """
    Convert a snake_case key into the CamelCase key used by boto3, e.g.,
    `associate_public_ip_address` -> `AssociatePublicIpAddress`
    """
    return "".join(part[:1].upper() + part[1:] for part in key.split("_"))


def _camelize_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            camelize(k): _camelize_keys(v) for k, v in value.items()
            if v is not None
        }
    if isinstance(value, (list, tuple)):
        return [_camelize_keys(v) for v in value]
    return value


def to_run_instances_kwargs(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert the output of `InstanceGenerator.ec2_instance_data` into keyword arguments
    for `EC2Client.run_instances`. Fields that are not set are dropped, and a single
    instance is requested.

    botocore base64-encodes `UserData` for `RunInstances` itself, so the user data is
    passed along as raw bytes.

    args:
        data: instance data
    returns:
        keyword arguments for `run_instances`
    """
    kwargs: Dict[str, Any] = _camelize_keys(data)
    if "UserData" in kwargs:
        kwargs["UserData"] = base64.b64decode(kwargs["UserData"])
    kwargs["MinCount"] = 1
    kwargs["MaxCount"] = 1
    return kwargs
