import logging
from pathlib import Path
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILE_NAME = "kewpa_search.log"

_configured = False


def configure_logging(config: Dict[str, Any]) -> Optional[Path]:
    """
    Root logger setup from the load_config() result: level from logging.level
    (default INFO), plus a file handler in the resolved logs_dir.
    Only the first call configures; later calls are ignored (Streamlit reruns).
    Returns the log file path, or None if file logging is off.
    """
    global _configured
    if _configured:
        return None

    data = config.get("data", {}) or {}
    level_name = str((data.get("logging", {}) or {}).get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler) for h in root.handlers):
        stream = logging.StreamHandler()
        stream.setFormatter(formatter)
        root.addHandler(stream)

    log_file = None
    logs_dir = config.get("logs_dir")
    if logs_dir:
        try:
            Path(logs_dir).mkdir(parents=True, exist_ok=True)
            log_file = Path(logs_dir) / LOG_FILE_NAME
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as e:
            logging.getLogger(__name__).warning(f"File logging disabled, cannot use {logs_dir}: {e}")
            log_file = None

    _configured = True
    logging.getLogger(__name__).debug(f"Logging configured: level={level_name}, file={log_file}")
    return log_file


def reset_logging() -> None:
    """Drops handlers added by configure_logging (tests)."""
    global _configured
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            handler.close()
            root.removeHandler(handler)
    _configured = False
