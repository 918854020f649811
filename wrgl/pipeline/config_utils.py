"""Loads configurations from .yaml files and expands environment variables.
"""
import os

import yaml


def load_config(config_file):
    """Load YAML config file, replacing environmental variables.
    """
    if not config_file or not os.path.exists(config_file):
        raise ValueError("Could not find input configuration file %s" % config_file)
    with open(config_file) as in_handle:
        config = yaml.safe_load(in_handle)
    if config is None:
        config = {}
    config = _expand_paths(config)
    if "algorithm" not in config:
        config["algorithm"] = {}
    return config

def _expand_paths(config):
    for field, setting in config.items():
        if isinstance(config[field], dict):
            config[field] = _expand_paths(config[field])
        else:
            config[field] = expand_path(setting)
    return config

def expand_path(path):
    """ Combines os.path.expandvars with replacing ~ with $HOME.
    """
    try:
        return os.path.expandvars(path.replace("~", "$HOME"))
    except AttributeError:
        return path
