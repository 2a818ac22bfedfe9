from __future__ import annotations
import json
from typing import Any, Dict, List, Optional, Sequence

from allocation.validate import validate_daily_split
from core.errors import WireFormatError
from core.log import get_logger
from core.models import Job

log = get_logger(__name__)

def encode_daily_split(daily: Sequence[Sequence[int]]) -> List[List[int]]:
  """Weeks x 7 (Mon..Sun) plain int lists, the only shape the job API accepts."""
  out = [[int(q) for q in week] for week in daily]
  validate_daily_split(out)
  return out

def decode_daily_split(raw) -> Optional[List[List[int]]]:
  """Stored daily_split comes back as a list or as a JSON string of one."""
  if raw is None or raw == "":
    return None
  if isinstance(raw, str):
    try:
      raw = json.loads(raw)
    except json.JSONDecodeError:
      log.warning("daily_split is not valid JSON: %.60r", raw)
      return None
  try:
    validate_daily_split(raw)
  except WireFormatError as e:
    log.warning("ignoring stored daily_split: %s", e)
    return None
  return [list(week) for week in raw]

def build_job_payload(job: Job, weekly: Sequence[int], daily: Sequence[Sequence[int]]) -> Dict[str, Any]:
  payload: Dict[str, Any] = {
    "job_number": job.job_number,
    "job_name": job.job_name,
    "client": job.client,
    "description": job.description,
    "quantity": job.quantity,
    "weekly_split": [int(q) for q in weekly],
    "daily_split": encode_daily_split(daily),
  }
  # only include dates that are set
  if job.start_date is not None:
    payload["start_date"] = job.start_date.isoformat()
  if job.due_date is not None:
    payload["due_date"] = job.due_date.isoformat()
  return payload
