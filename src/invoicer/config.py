from __future__ import annotations

import json
import os
from pathlib import Path

import platformdirs
import yaml
from dotenv import load_dotenv

APP_NAME = "invoicer"


def _resolve_config_dir_for_dotenv() -> Path | None:
    """Resolve config dir for .env loading without depending on env vars from .env itself.

    Only checks sources available before .env is loaded (env var set in shell,
    dev layout, an already existing platformdirs directory).
    """
    from_env = os.environ.get("INVOICER_CONFIG_DIR")
    if from_env:
        return Path(from_env)
    project_root = Path(__file__).resolve().parent.parent.parent
    candidate = project_root / "config"
    if candidate.is_dir():
        return candidate
    pd = Path(platformdirs.user_config_dir(APP_NAME))
    if pd.is_dir():
        return pd
    return None


# Load .env: cwd first (highest priority), then config dir (won't override)
load_dotenv()
_cfg_dir = _resolve_config_dir_for_dotenv()
if _cfg_dir is not None:
    load_dotenv(_cfg_dir / ".env")


def _resolve_dir(env_var: str, default_subdir: str) -> Path:
    """Resolve a directory from env var, repo layout, or platform default.

    Priority: 1) env var, 2) dev repo layout, 3) platformdirs user directory.
    """
    from_env = os.environ.get(env_var)
    if from_env:
        return Path(from_env)
    # Development layout: src/invoicer/config.py -> ../../.. = project root
    project_root = Path(__file__).resolve().parent.parent.parent
    candidate = project_root / default_subdir
    if candidate.is_dir():
        return candidate
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_config_dir() -> Path:
    """Resolve config directory. Re-evaluated on each call to pick up env changes."""
    return _resolve_dir("INVOICER_CONFIG_DIR", "config")


def get_downloads_dir() -> Path:
    """Directory where generated PDFs are proposed by default."""
    from_env = os.environ.get("INVOICER_DOWNLOADS_DIR")
    if from_env:
        return Path(from_env)
    return Path(platformdirs.user_downloads_dir())


def get_render_timeout() -> float:
    """Seconds allowed for loading and printing one document."""
    raw = os.environ.get("INVOICER_RENDER_TIMEOUT")
    if not raw:
        return RENDER_TIMEOUT
    return float(raw)


def get_log_level() -> str:
    return os.environ.get("INVOICER_LOG_LEVEL", "WARNING").upper()


# --- PDF page configuration ---

PAGE_FORMAT = "A4"
PAGE_MARGIN = "20px"
PRINT_BACKGROUND = True

CHROMIUM_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

RENDER_TIMEOUT = 60.0


# --- YAML config ---


def load_yaml(path: Path) -> dict:
    """Load and parse a YAML file, returning the top-level dict."""
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def load_brand() -> dict:
    """Load brand overrides from config/brand.yaml; empty when the file is absent."""
    path = get_config_dir() / "brand.yaml"
    if not path.is_file():
        return {}
    return load_yaml(path) or {}


def load_invoice(path: Path) -> dict:
    """Load an invoice payload from a .json, .yaml or .yml file."""
    text = path.read_text(encoding="utf-8")
    data = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: expected a mapping at the top level")
    return data
