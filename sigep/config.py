import json
import logging
import os
from dataclasses import dataclass
from dataclasses import fields
from typing import Any
from typing import Dict
from typing import Optional

"""
Connection and sender settings for the SIGEP client, and the code
reading them from a configuration file.

A configuration file is a json (or yaml, if pyyaml is installed) dict
of sections::

    {
        "default": {"sigep_url": "...", "sigep_login": "...", ...},
        "homolog": {"inherits": "default", "sigep_url": "..."}
    }

Keys in a section may be given with or without the ``sigep_`` prefix.
"""

log = logging.getLogger("sigep")

PRODUCTION_URL = (
    "https://apps.correios.com.br/SigepMasterJPA/AtendeClienteService/AtendeCliente"
)

## The fixed upper bound on how long we wait for the service
DEFAULT_TIMEOUT = 12


@dataclass
class SigepConfig:
    """
    Everything the SIGEP operations need to know about the account
    and the sender.  ``login``/``password`` are sent in the body of
    most calls, ``login_object_history``/``password_object_history``
    only with the tracking history call.
    """

    url: str = PRODUCTION_URL
    login: str = ""
    password: str = ""
    contract: str = ""
    post_card: str = ""
    administrative_code: str = ""
    director_code: str = ""
    cnpj: str = ""
    service_code: str = ""
    sender_name: str = ""
    sender_address: str = ""
    sender_number: str = ""
    sender_complement: str = ""
    sender_neighbor: str = ""
    sender_zip_code: str = ""
    sender_city: str = ""
    sender_state: str = ""
    sender_phone: str = ""
    sender_email: str = ""
    sender_mobile: str = ""
    login_object_history: str = ""
    password_object_history: str = ""
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SigepConfig":
        """
        Builds a config from a dict, i.e. a config file section or the
        environment.  The ``sigep_`` prefix is dropped from keys,
        unknown keys are logged and ignored.
        """
        known = {f.name for f in fields(cls)}
        params = {}
        for key, value in data.items():
            key = key.lower()
            if key.startswith("sigep_"):
                key = key[6:]
            if key == "user":
                key = "login"
            if key == "pass":
                key = "password"
            if key not in known:
                if key != "inherits":
                    log.warning(f"unknown configuration key {key} ignored")
                continue
            params[key] = value
        if "timeout" in params:
            params["timeout"] = int(params["timeout"])
        return cls(**params)


def config_section(config: Dict[str, Any], section: str = "default") -> Dict[str, Any]:
    if section in config and "inherits" in config[section]:
        ret = config_section(config, config[section]["inherits"])
    else:
        ret = {}
    if section in config:
        ret.update(config[section])
    return ret


def read_config(fn: Optional[str]) -> Optional[Dict[str, Any]]:
    if not fn:
        cfgdir = f"{os.environ.get('HOME', '/')}/.config/"
        for config_file in (
            f"{cfgdir}/sigep/sigep.conf",
            f"{cfgdir}/sigep/sigep.yaml",
            f"{cfgdir}/sigep/sigep.json",
            "/etc/sigep/sigep.conf",
        ):
            cfg = read_config(config_file)
            if cfg:
                return cfg
        return None

    try:
        try:
            with open(fn, "rb") as config_file:
                return json.load(config_file)
        except json.decoder.JSONDecodeError:
            ## Late import, yaml is an optional dependency
            try:
                import yaml

                try:
                    with open(fn, "rb") as config_file:
                        return yaml.load(config_file, yaml.Loader)
                except yaml.YAMLError:
                    logging.error(
                        f"config file {fn} exists but is neither valid json nor yaml.  Check the syntax."
                    )
            except ImportError:
                logging.error(
                    f"config file {fn} exists but is not valid json, and pyyaml is not installed."
                )

    except FileNotFoundError:
        logging.info("no config file found")
    except ValueError:
        logging.error("error in config file.  It will be ignored", exc_info=True)
    return {}
