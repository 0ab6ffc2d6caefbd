"""
Driver configurations for the InstanceGenerator tests
"""

# --------------------------------------------------------------------------------------
# Minimum requirements

MINIMUM_CONFIG = {
    "instance_type": "micro",
    "ebs_optimized": True,
    "image_id": "ami-123",
    "subnet_id": "s-456",
    "private_ip_address": "0.0.0.0",
}


# --------------------------------------------------------------------------------------
# SSH key

SSH_KEY_CONFIG = {
    **MINIMUM_CONFIG,
    "aws_ssh_key_id": "key",
}


# --------------------------------------------------------------------------------------
# Tag filters

SUBNET_FILTER_CONFIG = {
    "instance_type": "micro",
    "ebs_optimized": True,
    "image_id": "ami-123",
    "aws_ssh_key_id": "key",
    "subnet_id": None,
    "region": "us-west-2",
    "subnet_filter": {
        "tag": "foo",
        "value": "bar",
    },
}

SECURITY_GROUP_FILTER_CONFIG = {
    "instance_type": "micro",
    "ebs_optimized": True,
    "image_id": "ami-123",
    "aws_ssh_key_id": "key",
    "subnet_id": "s-123",
    "security_group_ids": None,
    "region": "us-west-2",
    "security_group_filter": {
        "tag": "foo",
        "value": "bar",
    },
}


# --------------------------------------------------------------------------------------
# Empty block device mappings

EMPTY_BLOCK_DEVICE_MAPPINGS_CONFIG = {
    **SSH_KEY_CONFIG,
    "block_device_mappings": [],
}


# --------------------------------------------------------------------------------------
# Placement

AZ_SUFFIX_AND_TENANCY_CONFIG = {
    "region": "eu-east-1",
    "availability_zone": "c",
    "tenancy": "dedicated",
}

TENANCY_ONLY_CONFIG = {
    "region": "eu-east-1",
    "tenancy": "default",
}


# --------------------------------------------------------------------------------------
# Maximum configuration

BLOCK_DEVICE_MAPPING = {
    "device_name": "/dev/sda2",
    "virtual_name": "test",
    "ebs": {
        "volume_size": 15,
        "delete_on_termination": False,
        "volume_type": "gp2",
        "snapshot_id": "id",
    },
}

MAXIMUM_CONFIG = {
    "availability_zone": "eu-west-1a",
    "instance_type": "micro",
    "ebs_optimized": True,
    "image_id": "ami-123",
    "aws_ssh_key_id": "key",
    "subnet_id": "s-456",
    "private_ip_address": "0.0.0.0",
    "block_device_mappings": [BLOCK_DEVICE_MAPPING],
    "security_group_ids": ["sg-789"],
    "user_data": "foo",
    "iam_profile_name": "iam-123",
    "associate_public_ip": True,
}


# --------------------------------------------------------------------------------------
# Tags and shutdown behavior

TAGS_CONFIG = {
    "image_id": "ami-123",
    "instance_initiated_shutdown_behavior": "terminate",
    "tags": {
        "Name": "test-instance",
        "created-by": "ec2-driver",
    },
}
