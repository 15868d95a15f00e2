"""Generate command for creating default config."""

import logging
from pathlib import Path

import yaml

from ..models import SltodoConfig
from .output import error, info, success

logger = logging.getLogger(__name__)

CONFIG_FILE = "sltodo.yml"

CONFIG_HEADER = """\
# sltodo Configuration
#
# data_root: Directory (relative to this file) where tasks are stored
# storage_key: Name of the saved task list; tasks live in {data_root}/{storage_key}.json
# default_filter: Filter selected at startup (all, completed, incomplete)
# confirm_clear: Ask before "Clear All" removes every task

"""


def generate_config_yaml(data_root: str | None = None) -> str:
    """Generate YAML config from the default SltodoConfig model.

    Args:
        data_root: Optional data directory to write instead of the default
    """
    config_dict = SltodoConfig.default().model_dump(mode="json")
    if data_root is not None:
        config_dict["data_root"] = data_root

    yaml_content = yaml.dump(config_dict, default_flow_style=False, sort_keys=False)
    return CONFIG_HEADER + yaml_content


def run_generate(project_root: Path) -> int:
    """
    Generate default configuration and data directory.

    Args:
        project_root: Directory where sltodo.yml will be created

    Returns:
        Exit code (0 = success, 1 = nothing to do or failure)
    """
    config_path = project_root / CONFIG_FILE
    config_created = False
    dir_created = False

    if config_path.exists():
        info(f"Config exists: {config_path}")
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            config = SltodoConfig.model_validate(data)
        except (yaml.YAMLError, ValueError) as e:
            error(f"Invalid config {config_path}: {e}")
            return 1
    else:
        config = SltodoConfig.default()
        try:
            project_root.mkdir(parents=True, exist_ok=True)
            config_path.write_text(generate_config_yaml())
        except OSError as e:
            error(f"Could not write {config_path}: {e}")
            return 1
        success(f"Generated config: {config_path}")
        config_created = True

    data_dir = project_root / config.data_root
    if data_dir.exists():
        info(f"Directory exists: {data_dir}/")
    else:
        try:
            data_dir.mkdir(parents=True)
        except OSError as e:
            error(f"Could not create {data_dir}: {e}")
            return 1
        success(f"Created directory: {data_dir}/")
        dir_created = True

    if not config_created and not dir_created:
        print("Nothing to generate.")
        return 1

    logger.info("Generated sltodo files in %s", project_root)
    return 0
