# gitwtlib/config.py
import os
import sys
from pathlib import Path

try:
    if sys.version_info >= (3, 11):
        import tomllib as tomli  # type: ignore
    else:
        import tomli  # type: ignore
    import tomli_w  # type: ignore

    HAS_TOML = True
except ImportError:
    print(
        "Warning: tomli/tomli_w packages not found. Configuration file will be ignored.",
        file=sys.stderr,
    )
    print("Install with: pip install tomli tomli-w", file=sys.stderr)
    HAS_TOML = False

DEFAULT_BASEDIR = "../{gitroot}-wt"

DEFAULT_CONFIG = {"basedir": DEFAULT_BASEDIR, "copy_ignored": False, "repos": {}}


def get_config_path():
    """Get the path to the config file following XDG Base Directory spec."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        config_dir = Path(xdg_config_home) / "git-wt"
    else:
        config_dir = Path.home() / ".config" / "git-wt"
    return config_dir / "config.toml"


def load_config():
    """Load configuration from file with fallback to defaults.

    A missing file is created with the defaults so users have something to
    edit; a malformed one is reported and ignored.
    """
    config = dict(DEFAULT_CONFIG, repos={})
    if not HAS_TOML:
        return config
    config_path = get_config_path()
    if not config_path.exists():
        save_config(config)
        return config
    try:
        with open(config_path, "rb") as f:
            config.update(tomli.load(f))  # type: ignore
    except (OSError, ValueError) as e:
        print(f"Error loading config file {config_path}: {e}", file=sys.stderr)
    return config


def save_config(config):
    """Save the configuration to the config file."""
    if not HAS_TOML:
        return
    config_path = get_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "wb") as f:
            tomli_w.dump(config, f)  # type: ignore
    except OSError as e:
        print(f"Error creating config file: {e}", file=sys.stderr)


def get_repo_config(git_dir, config=None):
    """Settings for one repository: global keys overlaid by its [repos] table."""
    if config is None:
        config = load_config()
    repo_config = {
        "basedir": config.get("basedir", DEFAULT_BASEDIR),
        "copy_ignored": bool(config.get("copy_ignored", False)),
        "post_create_commands": [],
    }
    repo_config.update(config.get("repos", {}).get(git_dir, {}))
    env_basedir = os.environ.get("GIT_WT_BASEDIR")
    if env_basedir:
        repo_config["basedir"] = env_basedir
    return repo_config
