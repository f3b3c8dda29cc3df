import json
import logging
import os
from typing import Any, Dict, List, Sequence, Union

import pandas as pd
import requests

from pnl_graph.core.time_utils import as_timezone
from pnl_graph.models.daily_record import WIRE_FIELDS, DailyRecord

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ['date_milli', 'ntpl', 'ntpl_till_date', 'tpl']

Payload = Union[None, List[Any], Dict[str, Any]]


class PnLDataLoader:
    @classmethod
    def from_payload(cls, payload: Payload, sort: bool = True) -> List[DailyRecord]:
        """
        Build daily records from the JSON served by the realtime database.

        The database returns either a list (with null holes for deleted
        indexes) or an object keyed by push id.

        :param payload: Decoded JSON document
        :param sort: Sort the records ascending by date_milli
        :return: List of DailyRecord objects
        """
        if payload is None:
            return []
        if isinstance(payload, dict):
            entries = [payload[key] for key in sorted(payload, key=_payload_key_order)]
        elif isinstance(payload, list):
            entries = payload
        else:
            raise ValueError(f"Unsupported P&L payload type: {type(payload).__name__}")

        records = []
        for entry in entries:
            if entry is None:
                continue
            if not isinstance(entry, dict):
                raise ValueError(f"P&L entry must be an object, got {entry!r}")
            records.append(DailyRecord.from_payload(entry))

        if sort:
            records.sort(key=lambda r: r.date_milli)
        return records

    @classmethod
    def load_json(cls, path: str, sort: bool = True) -> List[DailyRecord]:
        if not os.path.exists(path):
            raise FileNotFoundError(f"P&L data file does not exist: {path}")
        with open(path, encoding='utf-8') as f:
            payload = json.load(f)
        records = cls.from_payload(payload, sort=sort)
        logger.info("Loaded %d P&L records from %s", len(records), path)
        return records

    @classmethod
    def load_csv(cls, path: str, sort: bool = True) -> List[DailyRecord]:
        """Load records from a CSV with camelCase or snake_case column names"""
        if not os.path.exists(path):
            raise FileNotFoundError(f"P&L data file does not exist: {path}")
        df = pd.read_csv(path)
        df = df.rename(columns=WIRE_FIELDS)
        if 'date_milli' not in df.columns:
            raise ValueError(f"No dateMilli column in {path}")

        # NaN cells become missing values on the record
        df = df.astype(object).where(df.notna(), None)
        records = cls.from_payload(df.to_dict('records'), sort=sort)
        logger.info("Loaded %d P&L records from %s", len(records), path)
        return records

    @classmethod
    def fetch(cls, url: str, timeout: float = 10, sort: bool = True) -> List[DailyRecord]:
        """Fetch the P&L graph JSON once; failures are logged and raised"""
        try:
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"Error loading P&L data from {url}: {e}")
            raise
        records = cls.from_payload(payload, sort=sort)
        logger.info("Fetched %d P&L records from %s", len(records), url)
        return records

    @classmethod
    def to_frame(cls, records: Sequence[DailyRecord], tz=None) -> pd.DataFrame:
        """DataFrame of the records indexed by local timestamp"""
        df = pd.DataFrame(
            [[r.date_milli, r.ntpl, r.ntpl_till_date, r.tpl] for r in records],
            columns=FRAME_COLUMNS
        )
        df['date_milli'] = df['date_milli'].astype('int64')
        for column in FRAME_COLUMNS[1:]:
            df[column] = pd.to_numeric(df[column], errors='coerce')
        zone = as_timezone(tz)
        df['timestamp'] = pd.to_datetime(df['date_milli'], unit='ms', utc=True).dt.tz_convert(zone)
        return df.set_index('timestamp')


def _payload_key_order(key: str):
    # array-like objects ("0", "1", ..., "10") keep numeric order
    return (0, int(key), '') if str(key).isdigit() else (1, 0, str(key))
