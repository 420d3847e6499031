"""Infrastructure: corpus cache, subset selection, configuration."""

from gldoc.infrastructure.config import GldocConfig, default_config_path, load_config
from gldoc.infrastructure.repo import REFPAGES_URL, clone_repo, repo_path
from gldoc.infrastructure.subsets import API_NAMES, dir_names

__all__ = [
    "API_NAMES",
    "REFPAGES_URL",
    "GldocConfig",
    "clone_repo",
    "default_config_path",
    "dir_names",
    "load_config",
    "repo_path",
]
