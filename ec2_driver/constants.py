"""
Constants used throughout the ec2-driver project
"""


# Logger name
DEFAULT_LOGGER_NAME = "ec2_driver_logger"


# Default number of attempts made by the boto3 client
DEFAULT_RETRY_LIMIT = 3


# Supported values for `instance_initiated_shutdown_behavior`
SUPPORTED_SHUTDOWN_BEHAVIORS = [
    "stop",
    "terminate",
]


# Resource types that receive the configured `tags`
TAGGED_RESOURCE_TYPES = [
    "instance",
    "volume",
]
