import yaml

from .auth import DEFAULT_API_VERSION, Authenticator
from .credentials import AccountIdentity
from .exceptions import ConfigError

DEFAULT_CONFIG_FILE = ".config.yaml"


def load_config(profile: str, config_file: str = DEFAULT_CONFIG_FILE) -> dict:
    """Load the settings for one profile from the YAML file."""
    try:
        with open(config_file, "r") as f:
            full_config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot load {config_file}: {e}") from e

    if not isinstance(full_config, dict) or profile not in full_config:
        raise ConfigError(f"Profile '{profile}' not found in {config_file}")

    conf = full_config[profile] or {}
    if not conf.get("connection_string"):
        for key in ("account_name", "account_key"):
            if not conf.get(key):
                raise ConfigError(f"Missing '{key}' in config for profile '{profile}'")
    return conf


def identity_from_config(conf: dict) -> AccountIdentity:
    if conf.get("connection_string"):
        return AccountIdentity.from_connection_string(conf["connection_string"])
    return AccountIdentity.from_base64(conf["account_name"], conf["account_key"])


def build_authenticator(conf: dict, log_string_to_sign: bool = False) -> Authenticator:
    return Authenticator.from_identity(
        identity_from_config(conf),
        endpoint=conf.get("endpoint"),
        api_version=conf.get("api_version", DEFAULT_API_VERSION),
        log_string_to_sign=log_string_to_sign,
    )
