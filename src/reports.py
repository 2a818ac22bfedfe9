from __future__ import annotations
import csv
import json
from pathlib import Path
from typing import Dict, List, Sequence

from core.models import DAYS_PER_WEEK, DateRange, Job

_DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

def ensure_dir(p: Path):
  p.mkdir(parents=True, exist_ok=True)

def weekly_rows(job: Job, weekly: Sequence[int]) -> List[dict]:
  rng = DateRange(job.start_date, job.due_date)
  out = []
  for w, qty in enumerate(weekly):
    win = rng.week(w)
    out.append({
      "job_number": job.job_number,
      "week": w + 1,
      "week_start": win.active_start.isoformat(),
      "week_end": win.active_end.isoformat(),
      "quantity": int(qty),
    })
  return out

def daily_rows(job: Job, daily: Sequence[Sequence[int]]) -> List[dict]:
  """One row per calendar day inside the job range (zero days outside it are dropped)."""
  rng = DateRange(job.start_date, job.due_date)
  out = []
  for w, days in enumerate(daily):
    win = rng.week(w)
    for d in win.active_dates():
      out.append({
        "job_number": job.job_number,
        "week": w + 1,
        "date": d.isoformat(),
        "weekday": _DAY_NAMES[d.weekday()],
        "quantity": int(days[d.weekday()]),
      })
  return out

def write_split_csvs(data_dir: Path, weekly: List[dict], daily: List[dict]):
  ensure_dir(data_dir)
  for name, rows, fieldnames in (
    ("weekly_split.csv", weekly, ["job_number", "week", "week_start", "week_end", "quantity"]),
    ("daily_split.csv", daily, ["job_number", "week", "date", "weekday", "quantity"]),
  ):
    with (data_dir / name).open("w", newline="", encoding="utf-8") as f:
      w = csv.DictWriter(f, fieldnames=fieldnames)
      w.writeheader()
      for r in rows:
        w.writerow({k: r[k] for k in fieldnames})

def write_payloads_json(data_dir: Path, payloads: List[dict]) -> Path:
  ensure_dir(data_dir)
  path = data_dir / "job_payloads.json"
  path.write_text(json.dumps(payloads, indent=2), encoding="utf-8")
  return path

def write_split_summary_md(reports_dir: Path, payloads: List[dict], skipped: Dict[str, str]):
  ensure_dir(reports_dir)
  path = reports_dir / "split_summary.md"

  lines = []
  lines.append("# Production quantity split\n")
  lines.append(f"- **Jobs split:** {len(payloads)}")
  lines.append(f"- **Jobs skipped:** {len(skipped)}")
  lines.append(f"- **Total units:** {sum(p['quantity'] for p in payloads):,}\n")

  for p in payloads:
    title = p["job_number"] + (f" — {p['job_name']}" if p.get("job_name") else "")
    lines.append(f"## {title}\n")
    lines.append(f"- **Quantity:** {p['quantity']:,}")
    lines.append(f"- **Dates:** {p.get('start_date', '?')} to {p.get('due_date', '?')}\n")

    # Render as a table (one row per week, Monday-first)
    lines.append("| Week | " + " | ".join(_DAY_NAMES) + " | Total |")
    lines.append("|---|" + "---:|" * (DAYS_PER_WEEK + 1))
    for w, days in enumerate(p["daily_split"]):
      cells = " | ".join(f"{q:,}" if q else "·" for q in days)
      lines.append(f"| {w + 1} | {cells} | {p['weekly_split'][w]:,} |")
    lines.append("")

  if skipped:
    lines.append("## Skipped jobs\n")
    for job_number, reason in skipped.items():
      lines.append(f"- **{job_number}**: {reason}")
    lines.append("")

  path.write_text("\n".join(lines), encoding="utf-8")
  return path
