from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from core.models import AllocationCfg, LoggingCfg

@dataclass
class OptionsCfg:
  jobs_glob: str
  write_markdown: bool

@dataclass
class PathsCfg:
  inputs_dir: Path
  data_dir: Path
  reports_dir: Path
  config_dir: Path

@dataclass
class UnifiedConfig:
  options: OptionsCfg
  paths: PathsCfg
  allocation: AllocationCfg
  logging: LoggingCfg

def load_unified_config(repo_root: Path, settings_path: Path | None = None) -> UnifiedConfig:
    """Load config/settings.yaml (or an explicit settings file)."""
    cfg_dir = repo_root / "config"
    yaml_cfg = settings_path or cfg_dir / "settings.yaml"

    if not yaml_cfg.exists():
        raise FileNotFoundError(
            f"Missing {yaml_cfg}. Copy config/settings.yaml from the repository and adjust the paths."
        )

    y: Dict[str, Any] = yaml.safe_load(yaml_cfg.read_text(encoding="utf-8")) or {}

    # minimal structure checks (fail fast with clear messages)
    for section in ["paths", "options"]:
        if section not in y:
            raise KeyError(f"{yaml_cfg.name} is missing the '{section}' section")

    paths = y["paths"]
    options = y["options"]
    allocation = y.get("allocation") or {}
    logging_ = y.get("logging") or {}

    log_file = logging_.get("file")
    return UnifiedConfig(
        options=OptionsCfg(
            jobs_glob=str(options.get("jobs_glob", "*.csv")),
            write_markdown=bool(options.get("write_markdown", True)),
        ),
        paths=PathsCfg(
            inputs_dir=(repo_root / paths["inputs_dir"]).resolve(),
            data_dir=(repo_root / paths["data_dir"]).resolve(),
            reports_dir=(repo_root / paths["reports_dir"]).resolve(),
            config_dir=yaml_cfg.parent.resolve(),
        ),
        allocation=AllocationCfg(**allocation),
        logging=LoggingCfg(
            level=str(logging_.get("level", "INFO")),
            file=str((repo_root / log_file).resolve()) if log_file else None,
        ),
    )
