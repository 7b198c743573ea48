import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from kewpa_search.core.config_validator import ConfigValidator

logger = logging.getLogger(__name__)


def load_config() -> Dict[str, Any]:
    """
    Loads configuration from YAML files and environment variables.
    Returns a dictionary with configuration and status metadata.
    Never raises: problems are reported through status/error.
    """
    config_status = {
        "status": "OK",
        "error": None,
        "env": get_env(),
        "config_path": None,
        "db_path": None,
        "logs_dir": None,
        "data": {}
    }

    # --- 1. Read Overrides from ENV ---
    env_override_file = os.environ.get("KEWPA_SEARCH_CONFIG_FILE")
    env_override_dir = os.environ.get("KEWPA_SEARCH_CONFIG_DIR")

    env = config_status["env"]

    # --- 2. Determine Config Directory and Files ---
    if env_override_file:
        config_path = Path(env_override_file)
        config_dir = config_path.parent
        files_to_load = [config_path]
        config_status["config_path"] = str(config_path)
        config_status["source"] = "ENV_FILE (KEWPA_SEARCH_CONFIG_FILE)"
    elif env_override_dir:
        config_dir = Path(env_override_dir)
        files_to_load = [
            config_dir / "general.yaml",
            config_dir / f"{env.lower()}.yaml"
        ]
        config_status["source"] = "ENV_DIR (KEWPA_SEARCH_CONFIG_DIR)"
    else:
        project_root = Path(__file__).parent.parent.parent
        config_dir = project_root / "config"
        files_to_load = [
            config_dir / "general.yaml",
            config_dir / f"{env.lower()}.yaml"
        ]
        config_status["source"] = "DEFAULT (repo/site-packages)"

    # --- 3. Load Configs ---
    loaded_config = {}
    files_found = 0

    try:
        for file_path in files_to_load:
            if file_path.exists():
                files_found += 1
                if not env_override_file:
                    config_status["config_path"] = str(file_path)

                with open(file_path, "r", encoding="utf-8") as f:
                    loaded_config.update(yaml.safe_load(f) or {})

        if files_found == 0:
            config_status["status"] = "ERROR"
            config_status["error"] = f"No config files found in {config_dir} (tried: {[str(f) for f in files_to_load]})"
            return config_status

        # --- 3b. Backward Compatibility ---
        # Top-level 'quick_search_enabled' -> 'features.quick_search_enabled',
        # unless features already defines it.
        if "quick_search_enabled" in loaded_config:
            val = loaded_config.pop("quick_search_enabled")
            features = loaded_config.setdefault("features", {})
            if "quick_search_enabled" not in features:
                features["quick_search_enabled"] = val
                logger.warning("DEPRECATED: Top-level 'quick_search_enabled' found. Mapped to 'features.quick_search_enabled'.")
            else:
                logger.info("Ignoring top-level 'quick_search_enabled' because 'features.quick_search_enabled' is set.")

        # --- 3c. Validation ---
        validation_errors = ConfigValidator.validate(loaded_config, base_dir=config_dir)
        if validation_errors:
            config_status["status"] = "ERROR"
            config_status["error"] = "Invalid Configuration:\n" + "\n".join(validation_errors)
            # Keep data around for debugging the config
            config_status["data"] = loaded_config
            return config_status

        config_status["data"] = loaded_config

        # --- 4. Resolve Paths ---
        raw_db_path = None
        if "database" in loaded_config and "path" in loaded_config["database"]:
            raw_db_path = loaded_config["database"]["path"]
        elif "paths" in loaded_config and "db_path" in loaded_config["paths"]:
            raw_db_path = loaded_config["paths"]["db_path"]
        elif "db_path" in loaded_config:  # Legacy support
            raw_db_path = loaded_config["db_path"]

        config_status["db_path"] = _resolve(config_dir, raw_db_path)
        config_status["logs_dir"] = _resolve(config_dir, loaded_config.get("paths", {}).get("logs_dir"))

        features = loaded_config.get("features", {})
        search = loaded_config.get("search", {}) or {}
        logger.info(
            f"Config Loaded: quick_search_enabled={features.get('quick_search_enabled')}, "
            f"result_limit={search.get('result_limit')}, debounce_ms={search.get('debounce_ms')}"
        )

    except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
        config_status["status"] = "ERROR"
        config_status["error"] = str(e)

    return config_status


def _resolve(config_dir: Path, raw: Optional[str]) -> Optional[str]:
    if not raw:
        return None
    path_obj = Path(raw)
    if path_obj.is_absolute():
        return str(path_obj)
    return str(config_dir / raw)


def get_env() -> str:
    """
    Detects the current environment.
    Checks KEWPA_SEARCH_ENV, defaults to DEV.
    """
    return os.environ.get("KEWPA_SEARCH_ENV", "DEV").upper()
