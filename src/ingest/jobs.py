from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional
import pandas as pd

_REQ = {"job_number", "quantity", "start_date", "due_date"}

# accepted header spellings -> canonical column
_ALIASES = {
    "job_number": ["job_number", "job number", "job #", "job"],
    "quantity": ["quantity", "qty", "total quantity"],
    "start_date": ["start_date", "start date", "start"],
    "due_date": ["due_date", "due date", "end_date", "end date", "due"],
    "job_name": ["job_name", "job name", "name"],
    "client": ["client", "client name", "sub_client"],
    "description": ["description", "notes"],
}

def _to_raw(x) -> Any:
    # keep raw values; normalization does the parsing
    if x is None:
        return None
    if not isinstance(x, (list, tuple)) and pd.isna(x):
        return None
    if isinstance(x, pd.Timestamp):
        return x.to_pydatetime()
    return x

def _header_cells(row) -> set:
    return {str(c).strip().lower() for c in row if not pd.isna(c) and str(c).strip()}

def _find_header_idx(df_raw: pd.DataFrame) -> int:
    scan = min(10, len(df_raw))
    wanted = {alias for names in (_ALIASES[k] for k in _REQ) for alias in names}
    best_i, best_hits = 0, -1
    for i in range(scan):
        hits = len(_header_cells(df_raw.iloc[i].tolist()) & wanted)
        if hits >= len(_REQ):
            return i
        if hits > best_hits:
            best_i, best_hits = i, hits
    return best_i  # fallback: row with the most recognizable headers

def _find_col(df: pd.DataFrame, names: List[str]) -> Optional[str]:
    low = {str(c).strip().lower(): c for c in df.columns}
    for n in names:
        if n in low:
            return low[n]
    return None

def _read_frame(path: Path, header) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, header=header, dtype=object)
    if suffix == ".xls":
        return pd.read_excel(path, header=header, dtype=object, engine="xlrd")
    if suffix == ".xlsx":
        return pd.read_excel(path, header=header, dtype=object, engine="openpyxl")
    raise ValueError(f"Unsupported job sheet type: {path.name}")

def read_job_sheet(path: Path) -> List[Dict[str, Any]]:
    """Read a job sheet into raw dicts keyed by canonical column name."""
    # pass 1: sniff header row (sheets often carry a title line or two)
    df_raw = _read_frame(path, header=None)
    if df_raw.empty:
        return []
    header_idx = _find_header_idx(df_raw)

    # pass 2: proper headered frame
    df = _read_frame(path, header=header_idx)

    cols = {key: _find_col(df, names) for key, names in _ALIASES.items()}
    missing = sorted(k for k in _REQ if cols[k] is None)
    if missing:
        raise ValueError(f"{path.name}: missing expected columns {missing}. Found: {list(df.columns)}")

    out: List[Dict[str, Any]] = []
    for _, row in df.iterrows():
        rec = {key: (_to_raw(row.get(col)) if col is not None else None) for key, col in cols.items()}
        # skip truly empty rows
        if not any(v not in (None, "") for v in rec.values()):
            continue
        out.append(rec)
    return out

def find_job_sheets(inputs_dir: Path, pattern: str) -> List[Path]:
    return sorted(p for p in inputs_dir.glob(pattern) if p.is_file())
