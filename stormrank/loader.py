"""
Dataset loader (Storm Data file -> StormRecord list)
====================================================

This module reads a NOAA Storm Data export and converts each row into a
`StormRecord` object.

Key ideas:
- We try multiple possible column names because exports vary
  ("EVTYPE" in the classic bz2 file, "EVENT_TYPE" in newer details files).
- Only the seven columns the pipeline needs are kept.
- Blank or unparsable numbers become 0.0; blank magnitude codes become None.
- The loader returns a list of immutable records; it never edits the file.
"""

from __future__ import annotations
from typing import List, Optional
import logging
import re
import pandas as pd
from .models import StormRecord

logger = logging.getLogger(__name__)

LABEL_NAMES = ("EVTYPE", "EVENT_TYPE", "Event Type")
FATALITY_NAMES = ("FATALITIES", "DEATHS", "Deaths")
INJURY_NAMES = ("INJURIES", "Injuries")
PROP_NAMES = ("PROPDMG", "PROP_DMG", "Property Damage")
PROP_EXP_NAMES = ("PROPDMGEXP", "PROP_DMG_EXP", "Property Damage Exp")
CROP_NAMES = ("CROPDMG", "CROP_DMG", "Crop Damage")
CROP_EXP_NAMES = ("CROPDMGEXP", "CROP_DMG_EXP", "Crop Damage Exp")

def _to_float(x) -> float:
    """Convert a cell to float, returning 0.0 if missing/invalid."""
    if pd.isna(x): return 0.0
    try: return float(x)
    except (TypeError, ValueError): return 0.0

def _to_str(x) -> str:
    if pd.isna(x): return ""
    return str(x).strip()

def _to_code(x) -> Optional[str]:
    """Magnitude code cell -> stripped string, or None when blank."""
    s = _to_str(x)
    return s or None

def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())

def _col(df: pd.DataFrame, *names: str) -> str:
    cols = list(df.columns)
    for n in names:
        if n in cols:
            return n
    norm_map = {_norm(c): c for c in cols}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    raise KeyError(f"Missing required column. Tried={names}. Available={cols}")

def records_from_frame(df: pd.DataFrame) -> List[StormRecord]:
    """Convert an already loaded Storm Data DataFrame into records."""
    df = df.rename(columns={c: str(c).strip() for c in df.columns})

    label_col = _col(df, *LABEL_NAMES)
    fat_col = _col(df, *FATALITY_NAMES)
    inj_col = _col(df, *INJURY_NAMES)
    prop_col = _col(df, *PROP_NAMES)
    prop_exp_col = _col(df, *PROP_EXP_NAMES)
    crop_col = _col(df, *CROP_NAMES)
    crop_exp_col = _col(df, *CROP_EXP_NAMES)

    records: List[StormRecord] = []
    for row in df[[label_col, fat_col, inj_col, prop_col, prop_exp_col, crop_col, crop_exp_col]].itertuples(index=False):
        label, fat, inj, prop, prop_exp, crop, crop_exp = row
        records.append(StormRecord(
            event_label=_to_str(label),
            fatalities=_to_float(fat),
            injuries=_to_float(inj),
            prop_dmg=_to_float(prop),
            prop_dmg_exp=_to_code(prop_exp),
            crop_dmg=_to_float(crop),
            crop_dmg_exp=_to_code(crop_exp),
        ))
    return records

def load_storm_data(path: str) -> List[StormRecord]:
    """
    Load a Storm Data export (.csv, .csv.bz2, .csv.gz or .xlsx).
    Compressed CSVs are handled by pandas' compression inference.
    """
    if str(path).lower().endswith((".xlsx", ".xls")):
        df = pd.read_excel(path, engine="openpyxl")
    else:
        # codes like "K" and "0" must stay strings, not be parsed as numbers;
        # only blank cells are missing ("NA" is a real event label)
        df = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""], low_memory=False)
    logger.info("read %d rows from %s", len(df), path)
    return records_from_frame(df)
