from __future__ import annotations
from pathlib import Path
from typing import Dict, List

from allocation.daily import daily_breakdown
from allocation.validate import validate_split
from allocation.weekly import allocate_weeks
from config.loader import UnifiedConfig
from core.errors import InvalidRangeError
from core.log import get_logger
from core.models import Job
from ingest.jobs import find_job_sheets, read_job_sheet
from normalize import normalize_job_rows
from reports import (
  daily_rows,
  weekly_rows,
  write_payloads_json,
  write_split_csvs,
  write_split_summary_md,
)
from wire import build_job_payload

log = get_logger(__name__)

def split_job(job: Job) -> dict:
  """Weekly + daily split for one job, as the outgoing payload. Raises InvalidRangeError."""
  weekly = allocate_weeks(job.start_date, job.due_date, job.quantity)
  validate_split(weekly, job.quantity)
  daily = daily_breakdown(weekly, job.start_date, job.due_date)
  return build_job_payload(job, weekly, daily)

def run_pipeline(cfg: UnifiedConfig):
  inputs_dir  = cfg.paths.inputs_dir
  data_dir    = cfg.paths.data_dir
  reports_dir = cfg.paths.reports_dir

  # 1) Read every job sheet in the inputs folder
  sheets = find_job_sheets(inputs_dir, cfg.options.jobs_glob)
  if not sheets:
    raise FileNotFoundError(f"No job sheets matching {cfg.options.jobs_glob!r} found in {inputs_dir}")

  jobs: List[Job] = []
  for path in sheets:
    rows = normalize_job_rows(read_job_sheet(path))
    log.info("read %d jobs from %s", len(rows), path.name)
    jobs += rows

  # 2) Split each job; bad dates are reported and skipped, not fatal
  payloads: List[dict] = []
  weekly_out: List[dict] = []
  daily_out: List[dict] = []
  skipped: Dict[str, str] = {}
  for job in jobs:
    if job.start_date is None or job.due_date is None:
      reason = f"missing dates (start: {job.start_date}, due: {job.due_date})"
      log.warning("job %s: %s", job.job_number, reason)
      skipped[job.job_number] = reason
      continue
    try:
      payload = split_job(job)
    except InvalidRangeError as e:
      log.warning("job %s: %s", job.job_number, e)
      skipped[job.job_number] = str(e)
      continue
    payloads.append(payload)
    weekly_out += weekly_rows(job, payload["weekly_split"])
    daily_out += daily_rows(job, payload["daily_split"])

  # 3) Outputs
  write_split_csvs(data_dir, weekly_out, daily_out)
  write_payloads_json(data_dir, payloads)
  if cfg.options.write_markdown:
    write_split_summary_md(reports_dir, payloads, skipped)

  log.info("split %d jobs, skipped %d", len(payloads), len(skipped))
  return payloads, skipped
