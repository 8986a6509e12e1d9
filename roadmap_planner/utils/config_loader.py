"""
This loads configurations for the planner from a YAML file in config directory.
"""

import logging
import os
import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "..", "config", "planner_params.yaml")


def load_planner_params(planner_name, config_path=None):
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    with open(config_path, "r") as f:
        all_params = yaml.safe_load(f) or {}
    params = all_params.get(planner_name, {})
    if not params:
        logger.warning("No parameters for planner '%s' in %s", planner_name, config_path)
    return dict(params)
