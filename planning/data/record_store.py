"""
Record store client.

The planner's student data lives in a PostgREST-style database. This client
reads the tables that make up a snapshot and appends rows to the simulation
history. It is only used by the CLI/orchestrator; engines never see it.
"""

import logging
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import RECORD_STORE_KEY, RECORD_STORE_TIMEOUT, RECORD_STORE_URL

logger = logging.getLogger(__name__)


class RecordStoreError(RuntimeError):
    """A record store request failed after retries."""

    def __init__(self, table: str, message: str):
        super().__init__(f"{table}: {message}")
        self.table = table


def create_retry_session():
    session = requests.Session()
    retries = Retry(
        total=5,
        backoff_factor=2,  # Wait 2s, 4s, 8s, 16s... on 429 errors
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET", "POST"]
    )
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class RecordStoreClient:
    """
    Reads student snapshots from, and writes simulations to, the record store.

    TABLES READ:
        students              (filtered by id)
        subject_enrollments   (filtered by student_id)
        academic_records
        cca_records
        goals
        student_pathways      (first row, or none)

    Every request carries the project key both as `apikey` and as a bearer
    token, which is what PostgREST behind the store expects.

    Usage:
        client = RecordStoreClient()
        snapshot = SnapshotParser().parse(client.fetch_snapshot(student_id))
    """

    SNAPSHOT_TABLES = ["subject_enrollments", "academic_records", "cca_records", "goals"]

    def __init__(self, base_url: str = RECORD_STORE_URL, api_key: str = RECORD_STORE_KEY,
                 session: Optional[requests.Session] = None, timeout: float = RECORD_STORE_TIMEOUT):
        if not base_url:
            raise ValueError("Record store URL is not configured (set PLANNER_RECORD_STORE_URL)")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or create_retry_session()
        self.session.headers.update({
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    def _url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def select(self, table: str, column: str, value: str) -> List[dict]:
        """All rows of `table` where `column` equals `value`."""
        params = {"select": "*", column: f"eq.{value}"}
        try:
            response = self.session.get(self._url(table), params=params, timeout=self.timeout)
            response.raise_for_status()
            rows = response.json()
        except requests.RequestException as e:
            raise RecordStoreError(table, str(e)) from e
        except ValueError as e:
            raise RecordStoreError(table, f"invalid JSON response ({e})") from e

        if not isinstance(rows, list):
            raise RecordStoreError(table, "expected a list of rows")
        logger.debug("Fetched %d rows from %s", len(rows), table)
        return rows

    def fetch_snapshot(self, student_id: str) -> dict:
        """
        Everything needed for one student, shaped for SnapshotParser.

        Raises:
            RecordStoreError: If any request fails or the student is unknown
        """
        students = self.select("students", "id", student_id)
        if not students:
            raise RecordStoreError("students", f"no student with id {student_id}")

        snapshot = {"student": students[0]}
        for table in self.SNAPSHOT_TABLES:
            snapshot[table] = self.select(table, "student_id", student_id)

        pathways = self.select("student_pathways", "student_id", student_id)
        snapshot["student_pathway"] = pathways[0] if pathways else None
        return snapshot

    def save_simulation(self, record: dict) -> dict:
        """Append a row to the simulation history and return the stored row."""
        table = "simulations"
        try:
            response = self.session.post(
                self._url(table),
                json=record,
                headers={"Prefer": "return=representation"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            stored = response.json() if response.content else []
        except requests.RequestException as e:
            raise RecordStoreError(table, str(e)) from e
        except ValueError as e:
            raise RecordStoreError(table, f"invalid JSON response ({e})") from e

        logger.info("Saved %s simulation for student %s",
                    record.get("simulation_type"), record.get("student_id"))
        if isinstance(stored, list):
            return stored[0] if stored else record
        return stored
