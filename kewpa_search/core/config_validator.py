from pathlib import Path
from typing import Dict, Any, List, Optional
import logging

logger = logging.getLogger(__name__)

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ConfigValidator:
    """
    Validates configuration structure and types.
    Returns a list of human readable errors; empty list means OK.
    """

    @staticmethod
    def validate(config: Dict[str, Any], base_dir: Optional[Path] = None) -> List[str]:
        errors = []

        # 1. Top-Level Sections
        if "features" not in config:
            errors.append("Missing required section: 'features'")
        if "paths" not in config:
            errors.append("Missing required section: 'paths'")

        # 2. Features (strict bools)
        features = config.get("features", {})
        if not isinstance(features, dict):
            errors.append("'features' must be a dictionary")
        else:
            ConfigValidator._check_bool(features, "quick_search_enabled", errors)

        # 3. Search tuning
        search = config.get("search", {})
        if search:
            if not isinstance(search, dict):
                errors.append("'search' must be a dictionary")
            else:
                ConfigValidator._check_int(search, "result_limit", errors, minimum=1)
                ConfigValidator._check_int(search, "debounce_ms", errors, minimum=0)
                scoring = search.get("scoring", {})
                if scoring:
                    if not isinstance(scoring, dict):
                        errors.append("'search.scoring' must be a dictionary")
                    else:
                        # substring_score 0 would leave nothing able to score
                        ConfigValidator._check_int(scoring, "substring_score", errors, minimum=1)
                        for key in ("subsequence_weight", "word_prefix_bonus"):
                            ConfigValidator._check_int(scoring, key, errors, minimum=0)

        # 4. Paths (type + logs dir creation)
        paths = config.get("paths", {})
        if not isinstance(paths, dict):
            errors.append("'paths' must be a dictionary")
        else:
            for p in ["db_path", "logs_dir"]:
                if p not in paths:
                    errors.append(f"Missing path config: 'paths.{p}'")
                    continue
                val = paths[p]
                if not isinstance(val, str):
                    errors.append(f"'paths.{p}' must be a string")
                    continue

                if p == "logs_dir":
                    path_obj = Path(val)
                    if base_dir is not None and not path_obj.is_absolute():
                        path_obj = Path(base_dir) / path_obj
                    try:
                        path_obj.mkdir(parents=True, exist_ok=True)
                    except OSError as e:
                        errors.append(f"Path 'paths.{p}' ({val}) is invalid or not creatable: {e}")

        # 5. Logging
        logging_cfg = config.get("logging", {})
        if logging_cfg:
            if not isinstance(logging_cfg, dict):
                errors.append("'logging' must be a dictionary")
            elif "level" in logging_cfg:
                level = logging_cfg["level"]
                if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
                    errors.append(f"'logging.level' must be one of {sorted(LOG_LEVELS)}, got {level!r}")

        if errors:
            logger.error(f"Config Validation Failed: {errors}")
        else:
            logger.info("Config OK: Features=%s", features)

        return errors

    @staticmethod
    def _check_bool(section: dict, key: str, errors: list):
        if key in section and not isinstance(section[key], bool):
            errors.append(f"Field '{key}' must be boolean, got {type(section[key]).__name__}")

    @staticmethod
    def _check_int(section: dict, key: str, errors: list, minimum: int = 0):
        if key not in section:
            return
        val = section[key]
        # bool is an int subclass, reject it explicitly
        if isinstance(val, bool) or not isinstance(val, int):
            errors.append(f"Field '{key}' must be integer, got {type(val).__name__}")
        elif val < minimum:
            errors.append(f"Field '{key}' must be >= {minimum}, got {val}")
