import yaml

from .exceptions import ConfigurationError

REQUIRED_KEYS = ('app_id', 'secret_id', 'secret_key', 'bucket', 'region')


def load_config(profile: str, config_file: str = ".config.yaml") -> dict:
    """Load the configuration for a specific profile from the YAML file."""
    try:
        with open(config_file, "r") as f:
            full_config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Error loading {config_file}: {e}") from e

    if profile not in full_config:
        raise ConfigurationError(f"Profile '{profile}' not found in {config_file}")

    conf = full_config[profile] or {}
    for key in REQUIRED_KEYS:
        if not conf.get(key):
            raise ConfigurationError(f"Missing '{key}' in config for profile '{profile}'")
    return conf
