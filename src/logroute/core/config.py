"""
Settings and pipeline loading for logroute.

Renderer settings use Pydantic for validation and Dynaconf for multi-source
loading (environment over file over defaults). Pipeline documents are plain
YAML validated into PipelineDocument. Everything is frozen after loading.
"""

import os
import re
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from logroute.contracts.pipeline import PipelineDocument
from logroute.core.logging import get_logger
from logroute.core.security.secret_loader import DEFAULT_MOUNT_ROOT

logger = get_logger(__name__)


class RendererSettings(BaseModel):
    """Process-level renderer settings.

    Example YAML:
        source_port: 601
        secret_mount_root: /etc/syslog-ng/secret
        secrets_dir: /var/run/secrets/logging
    """

    model_config = {"frozen": True}

    source_port: int = Field(
        default=601,
        ge=1,
        le=65535,
        description="Port of the shared network source, unless the pipeline sets one",
    )
    secret_mount_root: str = Field(
        default=DEFAULT_MOUNT_ROOT,
        description="Directory secrets are mounted under inside the daemon's container",
    )
    secrets_dir: Path | None = Field(
        default=None,
        description="Root of a <namespace>/<name>/<key> secret tree to resolve mounts against",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level for the CLI",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON logs instead of console output",
    )


def load_settings(config_path: Path | None = None) -> RendererSettings:
    """Load renderer settings with environment variable overrides.

    Precedence:
    1. Environment variables (LOGROUTE_*) - highest priority
    2. Settings file, when given
    3. Defaults from the Pydantic schema - lowest priority

    Args:
        config_path: Optional path to a YAML settings file

    Returns:
        Validated RendererSettings instance

    Raises:
        ValidationError: If settings fail Pydantic validation
        FileNotFoundError: If config_path is given but doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="LOGROUTE",
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys and mixes in its own bookkeeping
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return RendererSettings(**raw_config)


# ${VAR} or ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _expand_env_vars(value: Any) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} in string values.

    References with no environment value and no default are left as-is.
    """
    if isinstance(value, str):

        def replacer(match: re.Match[str]) -> str:
            env_value = os.environ.get(match.group(1))
            if env_value is not None:
                return env_value
            if match.group(2) is not None:
                return match.group(2)
            return match.group(0)

        return _ENV_VAR_PATTERN.sub(replacer, value)
    if isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    return value


def load_pipeline(pipeline_path: Path) -> PipelineDocument:
    """Load and validate a pipeline document from YAML.

    Args:
        pipeline_path: Path to the pipeline YAML file

    Returns:
        Validated PipelineDocument

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is not valid YAML
        ValueError: If the top level is not a mapping
        ValidationError: If the document fails Pydantic validation
    """
    if not pipeline_path.exists():
        raise FileNotFoundError(f"Pipeline file not found: {pipeline_path}")

    raw = yaml.safe_load(pipeline_path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Pipeline file {pipeline_path} must contain a mapping, got {type(raw).__name__}")

    document = PipelineDocument.model_validate(_expand_env_vars(raw))
    logger.debug(
        "pipeline_loaded",
        path=str(pipeline_path),
        outputs=len(document.outputs),
        flows=len(document.flows),
        cluster_outputs=len(document.cluster_outputs),
        cluster_flows=len(document.cluster_flows),
    )
    return document
