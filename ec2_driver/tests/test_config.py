"""
Test cases for DriverConfig class
"""

# Imports
import logging
import pytest
from pathlib import Path

# Internal imports
from ec2_driver.config import (
    DriverConfig,
    TagFilter,
    listify,
)
from ec2_driver.constants import DEFAULT_LOGGER_NAME
from ec2_driver.tests.configs import config_tests


# Test functions
def test_empty_config():
    config = DriverConfig.from_dict({})
    assert config == DriverConfig()
    assert config.security_group_ids is None
    assert config.tags == {}


def test_explicit_none_is_absent():
    config = DriverConfig.from_dict({"subnet_id": None, "security_group_ids": None})
    assert config.subnet_id is None
    assert config.security_group_ids is None


def test_bad_types():
    """
    Recognized keys with the wrong type throw an error
    """
    with pytest.raises(ValueError) as cm:
        _ = DriverConfig.from_dict(config_tests.BAD_INSTANCE_TYPE)
    expected_msg = "`instance_type` is not the correct type...should be a <class 'str'>"
    assert str(cm.value) == expected_msg

    with pytest.raises(ValueError) as cm:
        _ = DriverConfig.from_dict(config_tests.BAD_ASSOCIATE_PUBLIC_IP)
    expected_msg = "`associate_public_ip` is not the correct type...should be a <class 'bool'>"  # noqa: E501
    assert str(cm.value) == expected_msg

    with pytest.raises(ValueError) as cm:
        _ = DriverConfig.from_dict(config_tests.BAD_SECURITY_GROUP_IDS)
    expected_msg = "`security_group_ids` is not the correct type...should be one of [<class 'str'>, <class 'list'>]"  # noqa: E501
    assert str(cm.value) == expected_msg


def test_unsupported_shutdown_behavior():
    with pytest.raises(ValueError) as cm:
        _ = DriverConfig.from_dict(config_tests.BAD_SHUTDOWN_BEHAVIOR)
    expected_msg = "Unsupported value `hibernate` for key `instance_initiated_shutdown_behavior`"  # noqa: E501
    assert str(cm.value) == expected_msg


def test_incomplete_tag_filter():
    with pytest.raises(ValueError) as cm:
        _ = DriverConfig.from_dict(config_tests.INCOMPLETE_SUBNET_FILTER)
    expected_msg = "`value` not found in `subnet_filter`'s configuration!"
    assert str(cm.value) == expected_msg


def test_unrecognized_keys_are_ignored(caplog):
    """
    Unrecognized keys are ignored, and malformed scalars are not validated
    """
    with caplog.at_level(logging.DEBUG, logger=DEFAULT_LOGGER_NAME):
        config = DriverConfig.from_dict(config_tests.UNRECOGNIZED_KEYS)
    assert config.instance_type == "t3.micro"
    assert config.private_ip_address == "not-an-ip-address"
    assert "Ignoring unrecognized driver option `instance_typo`" in caplog.text


def test_tag_filter():
    config = DriverConfig.from_dict({"security_group_filter": {"tag": "foo", "value": "bar"}})  # noqa: E501
    assert config.security_group_filter == TagFilter(tag="foo", value="bar")
    assert config.security_group_filter.to_ec2_filter() == {
        "Name": "tag:foo",
        "Values": ["bar"],
    }


def test_security_group_ids_normalization():
    """
    A single security group ID is converted into a sequence
    """
    config = DriverConfig.from_dict({"security_group_ids": "sg-123"})
    assert config.security_group_ids == ("sg-123",)
    config = DriverConfig.from_dict({"security_group_ids": ["sg-123", "sg-456"]})
    assert config.security_group_ids == ("sg-123", "sg-456")


def test_user_data_path():
    config = DriverConfig.from_dict({"user_data": Path("/tmp/user_data.sh")})
    assert config.user_data == "/tmp/user_data.sh"


def test_tags_are_strings():
    config = DriverConfig.from_dict({"tags": {"Name": "test", "count": 2}})
    assert config.tags == {"Name": "test", "count": "2"}


def test_config_is_immutable():
    config = DriverConfig.from_dict({"instance_type": "t3.micro"})
    with pytest.raises(AttributeError):
        config.instance_type = "t3.large"  # type: ignore


def test_from_file(tmp_path):
    driver_yml = tmp_path / "driver.yml"
    driver_yml.write_text(
        "driver:\n"
        "  region: eu-west-1\n"
        "  instance_type: t3.micro\n"
        "  security_group_ids: sg-123\n"
        "  subnet_filter:\n"
        "    tag: Name\n"
        "    value: private\n"
    )
    config = DriverConfig.from_file(driver_yml)
    assert config.region == "eu-west-1"
    assert config.instance_type == "t3.micro"
    assert config.security_group_ids == ("sg-123",)
    assert config.subnet_filter == TagFilter(tag="Name", value="private")


def test_from_file_without_driver_section(tmp_path):
    driver_yml = tmp_path / "driver.yml"
    driver_yml.write_text("instance_type: t3.micro\n")
    with pytest.raises(ValueError) as cm:
        _ = DriverConfig.from_file(driver_yml)
    expected_msg = "`driver` not found in `driver.yml`'s configuration!"
    assert str(cm.value) == expected_msg


def test_from_file_relative_user_data(tmp_path, monkeypatch):
    """
    A user data script next to the configuration file is found from any working
    directory
    """
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "bootstrap.sh").write_text("#!/bin/bash\n")
    monkeypatch.chdir(tmp_path)
    driver_yml = config_dir / "driver.yml"
    driver_yml.write_text("driver:\n  user_data: bootstrap.sh\n")

    config = DriverConfig.from_file(driver_yml)
    assert config.user_data == str(config_dir.resolve() / "bootstrap.sh")


def test_listify():
    assert listify("sg-123") == ["sg-123"]
    assert listify(["sg-123", "sg-456"]) == ["sg-123", "sg-456"]
    assert listify(("sg-123",)) == ["sg-123"]
