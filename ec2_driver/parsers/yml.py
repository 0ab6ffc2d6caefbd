"""
Parser for driver configuration files. These are YAML files that may use Jinja
syntax, with the driver options stored under the `driver` key:

    driver:
      region: "{{ env('AWS_REGION', 'eu-west-1') }}"
      user_data: scripts/bootstrap.sh
"""


# Imports
from pathlib import Path
from jinja2 import Environment, FileSystemLoader, StrictUndefined
import os
import yaml
from typing import Any, Dict, Optional

# Internal imports
from ec2_driver.utils import (
    ConfigurationKey,
    _check_key_in_conf,
)


# Class definition
class YmlParser:

    def __init__(self,
        fpath: Path
    ):
        self.fpath = Path(fpath).resolve()
        self.fname = self.fpath.name
        self.config_dir = self.fpath.parent

    def env(self, var: str, default: Optional[str] = None) -> str:
        """
        Get environment variable {var}. Can be called in YAML file via
        {{ env(...) }}. If the variable isn't set, `default` is used.
        """
        val: Optional[str] = os.environ.get(var, default)
        if val is None:
            raise ValueError(f"environment variable `{var}` not found")
        return val

    def path(self, value: str) -> Path:
        """
        Convert a string to a Path object. Relative paths are resolved against the
        directory of the configuration file, so {{ Path('bootstrap.sh') }} points at a
        script next to the file.
        """
        _p = Path(value)
        if not _p.is_absolute():
            _p = self.config_dir / _p
        return _p

    def render(self) -> str:
        """
        Interpret/execute the Jinja syntax in the configuration file

        returns:
            configuration file as a string, with executed Jinja
        raises:
            jinja2.exceptions.UndefinedError if the file uses an unknown variable
        """
        env = Environment(
            loader=FileSystemLoader(str(self.config_dir)),
            undefined=StrictUndefined,
        )
        jinja_template = env.get_template(self.fname)
        jinja_template.globals.update({
            "env": self.env,
            "Path": self.path,
            "__file__": str(self.fpath),
        })
        return jinja_template.render()

    def parse(self) -> Dict[Any, Any]:
        """
        Parse the configuration file

        returns:
            configuration file represented as dictionary; empty if the file is empty
        """
        conf: Optional[Dict[Any, Any]] = yaml.safe_load(self.render())
        if conf is None:
            return {}
        if not isinstance(conf, dict):
            raise ValueError(f"`{self.fname}` must contain a mapping at the top level")
        return conf

    def parse_driver(self) -> Dict[str, Any]:
        """
        Get the `driver` section of the configuration file. A relative `user_data`
        path that exists next to the configuration file is made absolute, so that the
        user data does not depend on the current working directory.

        returns:
            driver options as a dictionary
        raises:
            ValueError if the `driver` section is missing or is not a mapping
        """
        conf = self.parse()
        _check_key_in_conf(ConfigurationKey("driver", dict), conf, self.fname)
        driver_conf: Dict[str, Any] = dict(conf["driver"])

        user_data = driver_conf.get("user_data")
        if isinstance(user_data, str) and "\0" not in user_data:
            user_data_path = self.path(user_data)
            if not Path(user_data).is_absolute() and os.path.isfile(user_data_path):
                driver_conf["user_data"] = str(user_data_path)
        return driver_conf
