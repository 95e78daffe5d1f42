# substation_backend/alerts.py
import json
import sqlite3
from typing import Any, Dict, List

import pandas as pd
import requests
from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from substation_backend.config import alert_store_url
from substation_backend.database import get_db
from substation_backend.models import Alert

router = APIRouter()

# Columns holding JSON text; everything else is stored as plain text
JSON_COLUMNS = ["stationInfo", "weather", "tools", "parts", "maintenanceSteps"]
ALERT_COLUMNS = ["id", "message", "time", *JSON_COLUMNS, "usedParts"]

REMOTE_TIMEOUT_S = 10


class AlertLoadError(Exception):
    """Alert store could not be read or returned records that do not decode."""


def encode_alert(alert: Alert) -> Dict[str, Any]:
    """Flatten an alert into a store row, nested values as JSON text"""
    data = alert.model_dump(by_alias=True)
    row = {}
    for column in ALERT_COLUMNS:
        value = data[column]
        row[column] = json.dumps(value, ensure_ascii=False) if column in JSON_COLUMNS else value
    return row


def decode_alert(row: Dict[str, Any]) -> Alert:
    """Parse the JSON text columns of a store row back into an Alert"""
    if not isinstance(row, dict):
        raise AlertLoadError(f"Alert record must be an object, got {type(row).__name__}")

    data = dict(row)
    try:
        for column in JSON_COLUMNS:
            value = data.get(column)
            if isinstance(value, str):
                data[column] = json.loads(value)
        if data.get("usedParts") is None:
            data["usedParts"] = ""
        return Alert.model_validate(data)
    except (json.JSONDecodeError, ValidationError, TypeError, ValueError) as e:
        raise AlertLoadError(f"Alert {row.get('id', '?')} could not be decoded: {str(e)}") from e


def read_alert_rows() -> List[Dict[str, Any]]:
    conn = get_db()
    try:
        df = pd.read_sql_query("SELECT * FROM alerts ORDER BY rowid", conn)
    except (sqlite3.Error, pd.errors.DatabaseError) as e:
        raise AlertLoadError(f"Error reading alerts table: {str(e)}") from e
    finally:
        conn.close()

    df = df.astype(object).where(df.notna(), None)
    return df.to_dict(orient="records")


def fetch_remote_alert_rows(base_url: str) -> List[Dict[str, Any]]:
    try:
        response = requests.get(f"{base_url}/alerts", timeout=REMOTE_TIMEOUT_S)
        response.raise_for_status()
        rows = response.json()
    except requests.exceptions.RequestException as e:
        raise AlertLoadError(f"Error fetching alerts: {str(e)}") from e
    except ValueError as e:
        raise AlertLoadError(f"Alert store returned non-JSON response: {str(e)}") from e

    if not isinstance(rows, list):
        raise AlertLoadError("Alert store response must be a list of alerts")
    return rows


def load_alerts() -> List[Alert]:
    """Load and decode every alert, from the remote store when one is configured"""
    base_url = alert_store_url()
    rows = fetch_remote_alert_rows(base_url) if base_url else read_alert_rows()
    return [decode_alert(row) for row in rows]


def replace_alerts(alerts: List[Alert]) -> int:
    """Clear the alerts table and insert the given alerts"""
    df = pd.DataFrame([encode_alert(alert) for alert in alerts], columns=ALERT_COLUMNS)

    conn = get_db()
    try:
        conn.execute("DELETE FROM alerts")
        df.to_sql("alerts", conn, if_exists="append", index=False)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
    return len(df)


# --- List all alerts as stored (nested fields stay JSON text) ---
@router.get("")
def list_alerts():
    try:
        return read_alert_rows()
    except AlertLoadError as e:
        print(f"Error fetching alerts: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch alerts")
