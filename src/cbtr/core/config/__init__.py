"""Configuration loading, validation and merging for cbtr."""
from .loader import ConfigLoader, load_config_file, read_config_document
from .merge import deep_merge, merge_configs, merge_profiles
from .models import DEFAULT_INDENT, LoadedConfig, ResolvedConfig, Settings
from .paths import get_user_config_dir, repo_config_path, user_config_path

__all__ = [
    "ConfigLoader",
    "load_config_file",
    "read_config_document",
    "deep_merge",
    "merge_configs",
    "merge_profiles",
    "DEFAULT_INDENT",
    "LoadedConfig",
    "ResolvedConfig",
    "Settings",
    "get_user_config_dir",
    "repo_config_path",
    "user_config_path",
]
