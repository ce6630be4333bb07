import logging
import os

import yaml

from roomwright.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ROOMWRIGHT_CONFIG"

TRUE_WORDS = ('true', 'yes', 'on', '1')


def _flatten(data, prefix=""):
    flat = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{name}."))
        else:
            flat[name] = value
    return flat


class GameConfig:
    """
    Flat map of overrides: messages, keyword spellings, flags and limits.
    Keys compare case-insensitively. Every accessor takes the caller's default,
    so a missing key leaves that one field alone.
    """

    def __init__(self, values=None, source=None):
        self.source = source
        self._keys = {}
        self._values = {}
        for key, value in (values or {}).items():
            self._keys[key.lower()] = key
            self._values[key.lower()] = value

    def _get(self, key):
        return self._values.get(key.lower())

    def text(self, key, default=None):
        value = self._get(key)
        return default if value is None else str(value)

    def flag(self, key, default=False):
        value = self._get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in TRUE_WORDS

    def number(self, key, default=0):
        value = self._get(key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring '%s': %r is not a whole number", key, value)
            return default

    def lookup(self, key, default):
        """Override for `key`, read as the type of `default`."""
        if isinstance(default, bool):
            return self.flag(key, default)
        if isinstance(default, int):
            return self.number(key, default)
        return self.text(key, default)

    def items(self):
        """(key, value) pairs with keys spelled as in the file."""
        return [(self._keys[key], value) for key, value in self._values.items()]

    def is_empty(self):
        return not self._values

    def __contains__(self, key):
        return key.lower() in self._values

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"GameConfig[{self.source or 'defaults'}: {len(self)} keys]"


def load_config(path=None):
    """
    Input: path to a YAML file, or None to use $ROOMWRIGHT_CONFIG.
    Returns: GameConfig (empty when there is nothing to read).

        message:
          prompt: "? "
        limit.inventoryCapacity: 20
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            return GameConfig()

    if not os.path.exists(path):
        logger.warning("Configuration file %s not found, using defaults", path)
        return GameConfig(source=path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"{path} is not valid YAML: {e}") from e
    except OSError as e:
        raise ConfigError(f"could not read {path}: {e}") from e

    if data is None:
        return GameConfig(source=path)
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must hold a mapping of settings")

    config = GameConfig(_flatten(data), source=path)
    logger.debug("Loaded %d settings from %s", len(config), path)
    return config
