"""Configuration handling for pipeline runs.

  - config_utils.py: Load YAML configuration files.
  - datadict.py: Retrieve thresholds and settings from a loaded configuration.
"""
