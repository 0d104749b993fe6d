"""Settings resolution: defaults < voxl.yaml < .env < environment"""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional

from voxl_deploy.core.protocols import ConfigLoader, EnvironmentProvider, FileSystemService
from voxl_deploy.deploy.exceptions import ConfigurationError
from voxl_deploy.deploy.ssh import DEFAULT_SSH_PORT

DEFAULT_USER = "ubuntu"
DEFAULT_HOST = "drone.local"
DEFAULT_REMOTE_DIR = "/voxl_docker"
DEFAULT_IMAGE_NAME = "voxl-drone"

YAML_SETTINGS_FILE = "voxl.yaml"
DOTENV_SETTINGS_FILE = ".env"

# Settings field -> environment / .env variable
ENV_KEYS = {
    "user": "VOXL_USER",
    "host": "VOXL_HOST",
    "remote_dir": "VOXL_DIR",
    "image_name": "VOXL_IMAGE",
    "ssh_port": "VOXL_SSH_PORT",
}

# Settings field -> voxl.yaml key
YAML_KEYS = {
    "user": "user",
    "host": "host",
    "remote_dir": "dir",
    "image_name": "image_name",
    "ssh_port": "ssh_port",
}


@dataclass(frozen=True)
class Settings:
    """
    Process-wide settings, resolved once at startup.

    Attributes:
        project_dir: Project root (holds docker/, ros2_ws/, deploy/)
        user: SSH login on the drone
        host: Drone hostname or IP
        remote_dir: Deploy root on the drone
        image_name: Repository part of every image tag
        ssh_port: SSH port on the drone
    """
    project_dir: Path
    user: str = DEFAULT_USER
    host: str = DEFAULT_HOST
    remote_dir: str = DEFAULT_REMOTE_DIR
    image_name: str = DEFAULT_IMAGE_NAME
    ssh_port: int = DEFAULT_SSH_PORT

    @property
    def destination(self) -> str:
        """SSH destination, e.g. ubuntu@drone.local"""
        return f"{self.user}@{self.host}"


def _coerce_port(value: Any, source: str) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid ssh port {value!r} in {source}")
    if not 0 < port < 65536:
        raise ConfigurationError(f"SSH port out of range {port} in {source}")
    return port


def _load_yaml_layer(path: Path, loader: ConfigLoader) -> Dict[str, Any]:
    try:
        document = loader.load_yaml(str(path))
    except Exception as e:
        raise ConfigurationError(f"Cannot read settings file {path}: {e}") from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigurationError(
            f"Settings file {path} must be a mapping, got {type(document).__name__}"
        )

    layer = {}
    for field_name, key in YAML_KEYS.items():
        if document.get(key) is not None:
            layer[field_name] = document[key]
    return layer


def _load_dotenv_layer(path: Path, loader: ConfigLoader) -> Dict[str, Any]:
    try:
        variables = loader.load_dotenv(str(path))
    except Exception as e:
        raise ConfigurationError(f"Cannot read settings file {path}: {e}") from e

    return {
        field_name: variables[key]
        for field_name, key in ENV_KEYS.items()
        if variables.get(key)
    }


def resolve_settings(
    env_provider: EnvironmentProvider,
    filesystem: FileSystemService,
    config_loader: ConfigLoader,
    project_dir: Optional[str] = None,
) -> Settings:
    """
    Build the immutable Settings record.

    Precedence (highest first): environment variable, .env, voxl.yaml,
    built-in default. Files are optional; a file that exists but cannot
    be read or parsed raises ConfigurationError.

    Args:
        env_provider: Source of environment variables and working directory
        filesystem: Used to check for settings files
        config_loader: Parses voxl.yaml and .env
        project_dir: Project root override (default: $VOXL_PROJECT_DIR or cwd)

    Returns:
        Frozen Settings instance
    """
    environ = env_provider.get_environ()
    root = Path(project_dir or environ.get("VOXL_PROJECT_DIR") or env_provider.get_cwd())

    values: Dict[str, Any] = {}
    sources: Dict[str, str] = {}

    yaml_path = root / YAML_SETTINGS_FILE
    if filesystem.exists(yaml_path):
        for name, value in _load_yaml_layer(yaml_path, config_loader).items():
            values[name] = value
            sources[name] = str(yaml_path)

    dotenv_path = root / DOTENV_SETTINGS_FILE
    if filesystem.exists(dotenv_path):
        for name, value in _load_dotenv_layer(dotenv_path, config_loader).items():
            values[name] = value
            sources[name] = str(dotenv_path)

    for name, key in ENV_KEYS.items():
        if environ.get(key):
            values[name] = environ[key]
            sources[name] = f"${key}"

    if "ssh_port" in values:
        values["ssh_port"] = _coerce_port(values["ssh_port"], sources["ssh_port"])
    for name in ("user", "host", "remote_dir", "image_name"):
        if name in values:
            values[name] = str(values[name])

    return Settings(project_dir=root, **values)
