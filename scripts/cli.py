from pathlib import Path
import argparse
import sys

REPO = Path(__file__).resolve().parents[1]
SRC = REPO / "src"
if str(SRC) not in sys.path:
  sys.path.insert(0, str(SRC))

from config.loader import load_unified_config
from core.log import configure_logging
from pipeline import run_pipeline

def parse_args(argv=None) -> argparse.Namespace:
  parser = argparse.ArgumentParser(
    description="Split job quantities into weekly and daily production buckets."
  )
  parser.add_argument("--config", "-c", type=Path, help="Settings file. Defaults to config/settings.yaml.")
  parser.add_argument("--inputs", "-i", type=Path, help="Folder of job sheets (overrides paths.inputs_dir).")
  parser.add_argument("--log-level", help="DEBUG, INFO, WARNING ...")
  return parser.parse_args(argv)

def main(argv=None):
  args = parse_args(argv)
  cfg = load_unified_config(REPO, args.config)
  if args.inputs:
    cfg.paths.inputs_dir = args.inputs.resolve()
  configure_logging(args.log_level or cfg.logging.level, cfg.logging.file)
  run_pipeline(cfg=cfg)

if __name__ == "__main__":
  main()
