"""
================================================================================
FETCHER.PY - REMOTE TABLE FETCH
================================================================================
PURPOSE: Read the whole source table with one GET against its REST endpoint
         (PostgREST / Supabase style, ``select=*``). No filtering, no paging,
         no retries: a failure is returned to the caller, which aborts the run.
================================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import requests

from core.errors import DecodeError, FetchError
from core.logger import log_msg

Record = Dict[str, Any]


@dataclass
class FetchResult:
    """Either the decoded records or the error that stopped the fetch."""

    records: List[Record] = field(default_factory=list)
    error: Optional[Union[FetchError, DecodeError]] = None

    @classmethod
    def success(cls, records: List[Record]) -> "FetchResult":
        return cls(records=records)

    @classmethod
    def failure(cls, error: Union[FetchError, DecodeError]) -> "FetchResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[Record]:
        """Return the records or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.records


def build_query_url(config) -> str:
    """``<base>/<resource-path>/<table>?select=*``"""
    parts = [
        config.source_url.rstrip("/"),
        config.resource_path.strip("/"),
        config.table_name.strip("/"),
    ]
    return "/".join(p for p in parts if p) + "?select=*"


def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "apikey": api_key,
        "Authorization": f"Bearer {api_key}",
        "Accept": "application/json",
    }


def decode_records(body: str) -> List[Record]:
    """
    PURPOSE: Parse the response body into a list of records.

    RAISES:
      DecodeError: body is not JSON, or not a list of JSON objects
    """
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise DecodeError(f"Response is not valid JSON ({exc})", body) from exc

    if not isinstance(data, list):
        raise DecodeError(f"Expected a JSON list of records, got {type(data).__name__}", body)
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            raise DecodeError(f"Record {idx} is {type(item).__name__}, expected an object", body)
    return data


def fetch_records(config, session: Optional[requests.Session] = None) -> FetchResult:
    """
    PURPOSE: Fetch every row of ``config.table_name``.

    ARGS:
      config (SyncConfig): source URL, key, table, timeout
      session (requests.Session, optional): injected HTTP session

    RETURNS:
      FetchResult: ok with the records (possibly empty), or the error
    """
    url = build_query_url(config)
    http = session or requests.Session()
    log_msg(f"[FETCH] GET {url}")

    try:
        response = http.get(url, headers=build_headers(config.api_key), timeout=config.fetch_timeout)
    except requests.RequestException as exc:
        return FetchResult.failure(FetchError(None, message=f"Request to source failed ({exc})"))
    finally:
        if session is None:
            http.close()

    if not 200 <= response.status_code < 300:
        return FetchResult.failure(FetchError(response.status_code, response.text))

    try:
        records = decode_records(response.text)
    except DecodeError as exc:
        return FetchResult.failure(exc)

    log_msg(f"[FETCH] Received {len(records)} records from '{config.table_name}'")
    return FetchResult.success(records)
