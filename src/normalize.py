from __future__ import annotations
from typing import Any, Dict, List, Optional

from allocation.weekly import coerce_quantity
from core.dates import parse_date_or_none
from core.log import get_logger
from core.models import Job

log = get_logger(__name__)

def parse_quantity(raw) -> Optional[int]:
  """Quantity as typed into a form or sheet: "12,000" -> 12000, junk -> None."""
  if isinstance(raw, str):
    raw = raw.replace(",", "").strip()
  return coerce_quantity(raw)

def _text(x) -> str:
  if x is None:
    return ""
  s = str(x).strip()
  return "" if s.lower() == "nan" else s

def normalize_job_rows(raw_rows: List[Dict[str, Any]]) -> List[Job]:
  out: List[Job] = []
  for r in raw_rows:
    job_number = _text(r.get("job_number"))
    if not job_number:
      # skip rows without a job number (blank/footer lines)
      continue
    if job_number.endswith(".0") and job_number[:-2].isdigit():
      job_number = job_number[:-2]

    qty = parse_quantity(r.get("quantity"))
    if qty is None:
      log.warning("job %s: quantity %r is not a whole number, using 0", job_number, r.get("quantity"))
      qty = 0

    out.append(Job(
      job_number=job_number,
      quantity=qty,
      start_date=parse_date_or_none(r.get("start_date")),
      due_date=parse_date_or_none(r.get("due_date")),
      job_name=_text(r.get("job_name")),
      client=_text(r.get("client")),
      description=_text(r.get("description")),
    ))
  return out
