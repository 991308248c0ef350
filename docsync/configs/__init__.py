import os.path as osp
import shutil

import yaml

from docsync.utils.logger import logger, parse_log_level


here = osp.dirname(osp.abspath(__file__))

USER_CONFIG_FILENAME = ".docsyncrc"


def update_dict(target_dict, new_dict, validate_item=None):
    for key, value in new_dict.items():
        if validate_item:
            validate_item(key, value)
        if key not in target_dict:
            logger.warning("Skipping unexpected key in config: {}".format(key))
            continue
        if isinstance(target_dict[key], dict) and isinstance(value, dict):
            update_dict(target_dict[key], value, validate_item=validate_item)
        else:
            target_dict[key] = value


# -----------------------------------------------------------------------------


def get_default_config():
    config_file = osp.join(here, "default_config.yaml")
    with open(config_file) as f:
        config = yaml.safe_load(f)

    # save default config to ~/.docsyncrc
    user_config_file = osp.join(osp.expanduser("~"), USER_CONFIG_FILENAME)
    if not osp.exists(user_config_file):
        try:
            shutil.copy(config_file, user_config_file)
        except Exception:
            logger.warning("Failed to save config: {}".format(user_config_file))

    return config


def validate_config_item(key, value):
    if key == "log_level" and value is not None:
        try:
            parse_log_level(value)
        except ValueError:
            raise ValueError(
                "Unexpected value for config key 'log_level': {}".format(value)
            ) from None
    if key == "overlay_padding" and (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or value < 0
    ):
        raise ValueError(
            "Unexpected value for config key 'overlay_padding': {}".format(
                value
            )
        )
    if key == "heading_labels" and (
        not isinstance(value, (list, tuple))
        or not all(isinstance(label, str) for label in value)
    ):
        raise ValueError(
            "Unexpected value for config key 'heading_labels': {}".format(
                value
            )
        )
    if key == "hover_prefix" and (not isinstance(value, str) or not value):
        raise ValueError(
            "Unexpected value for config key 'hover_prefix': {}".format(value)
        )
    if key in ("fetch_timeout", "resize_debounce_ms", "render_max_width") and (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or value <= 0
    ):
        raise ValueError(
            "Unexpected value for config key '{}': {}".format(key, value)
        )


def get_config(config_file_or_yaml=None, config_from_args=None):
    # 1. default config
    config = get_default_config()

    # 2. specified as file or yaml
    if config_file_or_yaml is not None:
        config_from_yaml = yaml.safe_load(config_file_or_yaml)
        if not isinstance(config_from_yaml, dict):
            with open(config_from_yaml) as f:
                logger.info(
                    "Loading config file from: {}".format(config_from_yaml)
                )
                config_from_yaml = yaml.safe_load(f) or {}
        update_dict(
            config, config_from_yaml, validate_item=validate_config_item
        )

    # 3. command line argument or specified config file
    if config_from_args is not None:
        update_dict(
            config, config_from_args, validate_item=validate_config_item
        )

    return config
