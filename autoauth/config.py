"""
Configuration for the request executors.

Executor parameters may come from explicit arguments, from environment
variables prepended with ``AUTOAUTH_``, or from a JSON or YAML config
file with sections.  A section may ``inherits`` another one.
"""

import json
import logging
import os

import yaml

from autoauth.base_executor import CONNKEYS

log = logging.getLogger("autoauth")

ENV_PREFIX = "AUTOAUTH_"


def config_section(config, section="default"):
    if section in config and "inherits" in config[section]:
        ret = config_section(config, config[section]["inherits"])
    else:
        ret = {}
    if section in config:
        ret.update(config[section])
    return ret


_section_with_inheritance = config_section


def read_config(fn):
    if not fn:
        cfgdir = f"{os.environ.get('HOME', '/')}/.config/"
        for config_file in (
            f"{cfgdir}/autoauth/autoauth.conf",
            f"{cfgdir}/autoauth/autoauth.yaml",
            f"{cfgdir}/autoauth/autoauth.json",
            "/etc/autoauth/autoauth.conf",
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
            ## yaml is a superset of json, but the json parser gives better error messages
            try:
                with open(fn, "rb") as config_file:
                    return yaml.load(config_file, yaml.SafeLoader)
            except yaml.YAMLError:
                log.error(
                    f"config file {fn} exists but is neither valid json nor yaml.  Check the syntax."
                )
    except FileNotFoundError:
        log.info("no config file found")
    except ValueError:
        log.error("error in config file.  It will be ignored", exc_info=True)
    return {}


def coerce_param(key, value):
    """
    Environment variables and config files may give strings where the
    executor expects numbers or booleans
    """
    if not isinstance(value, str):
        return value
    if key == "timeout":
        if value.lower() in ("", "none", "null"):
            return None
        return float(value)
    if key == "ssl_verify_cert":
        if value.lower() in ("false", "no", "0", "off"):
            return False
        if value.lower() in ("true", "yes", "1", "on"):
            return True
        ## path to a CA bundle
        return value
    return value


def _filter_connkeys(params, source):
    ret = {}
    for key, value in params.items():
        if key not in CONNKEYS:
            log.warning(f"ignoring unknown executor parameter {key} from {source}")
            continue
        try:
            ret[key] = coerce_param(key, value)
        except ValueError:
            log.error(f"ignoring invalid value {value!r} for {key} from {source}")
    return ret


def get_connection_params(
    check_config_file=True,
    config_file=None,
    config_section=None,
    environment=True,
    **config_data,
):
    """
    Find the executor parameters.  The first source yielding anything wins:

    1. Explicit parameters
    2. Environment variables ``AUTOAUTH_TIMEOUT``, ``AUTOAUTH_SSL_VERIFY_CERT``, ...
    3. Config file (``AUTOAUTH_CONFIG_FILE`` or ``~/.config/autoauth/``),
       keys prepended with ``autoauth_``

    Returns:
        dict of keyword arguments for the executor, or None
    """
    if config_data:
        return config_data

    if environment:
        conf = {}
        for conf_key in (
            x
            for x in os.environ
            if x.startswith(ENV_PREFIX) and not x.startswith(ENV_PREFIX + "CONFIG")
        ):
            conf[conf_key[len(ENV_PREFIX) :].lower()] = os.environ[conf_key]
        conf = _filter_connkeys(conf, "environment")
        if conf:
            return conf
        if not config_file:
            config_file = os.environ.get(ENV_PREFIX + "CONFIG_FILE")
        if not config_section:
            config_section = os.environ.get(ENV_PREFIX + "CONFIG_SECTION")

    if check_config_file:
        if not config_section:
            config_section = "default"

        cfg = read_config(config_file)
        if cfg:
            section = _section_with_inheritance(cfg, config_section)
            conn_params = {}
            for k in section:
                if k.startswith("autoauth_") and section[k] is not None:
                    conn_params[k[len("autoauth_") :]] = section[k]
            if conn_params:
                return _filter_connkeys(conn_params, config_file or "config file")
    return None
