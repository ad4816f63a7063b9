"""
Configuration loading for svnviz.

Handles loading configuration from ~/.svnviz/config.json with sensible defaults.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional
import copy

DEFAULT_CONFIG: Dict[str, Any] = {
    "data_file": "svn_data.json",
    "output_dir": "output",

    # svn client invocation
    "svn": {
        "binary": "svn",
        "non_interactive": True,
        "trust_server_cert_failures": "unknown-ca,cn-mismatch,expired,not-yet-valid,other",
        "timeout_seconds": None
    },

    # Display options
    "display": {
        "color_enabled": True,
        "top_authors": 10
    },

    # Web dashboard
    "server": {
        "host": "127.0.0.1",
        "port": 8080
    }
}


def get_config_path() -> Path:
    """Get path to config file."""
    return Path.home() / ".svnviz" / "config.json"


def get_data_path(config: Dict[str, Any]) -> Path:
    """Get expanded data file path from config."""
    return Path(config["data_file"]).expanduser()


def get_output_path(config: Dict[str, Any]) -> Path:
    """Get expanded HTML output directory from config."""
    return Path(config["output_dir"]).expanduser()


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file, merging with defaults.

    Returns a complete configuration with all default values filled in.
    User config overrides defaults where specified.

    Args:
        config_path: Explicit config file; defaults to ~/.svnviz/config.json
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)

            # Shallow merge sections
            for key in ['svn', 'display', 'server']:
                if key in user_config and isinstance(user_config[key], dict):
                    config[key].update(user_config[key])

            # Direct override for simple values
            for key in ['data_file', 'output_dir']:
                if key in user_config:
                    config[key] = user_config[key]

        except json.JSONDecodeError as e:
            print(f"Warning: Could not parse config file: {e}")
        except OSError as e:
            print(f"Warning: Error loading config: {e}")

    return config
