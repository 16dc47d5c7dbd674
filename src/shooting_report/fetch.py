# src/shooting_report/fetch.py
# Retrieval of the raw incident CSV, either over HTTP(S) or from a local file.

import io
from pathlib import Path

import pandas as pd
import requests

from . import config
from .errors import SourceUnavailable


def _is_url(source) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def download_csv(url: str, timeout: float = config.FETCH_TIMEOUT_SECONDS) -> str:
    """Return the body of ``url`` as text. Any network or HTTP failure aborts the run."""
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.Timeout as e:
        raise SourceUnavailable(f"timed out after {timeout}s", url) from e
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise SourceUnavailable("HTTP error", url, {"status": status}) from e
    except requests.RequestException as e:
        raise SourceUnavailable(f"request failed: {e}", url) from e
    return response.text


def load_raw_incidents(source=config.SOURCE_URL, cache_file=None) -> pd.DataFrame:
    """Load the raw table as strings.

    ``source`` is a URL or a local path. When a URL is fetched and
    ``cache_file`` is given, the downloaded text is also written there.
    """
    if _is_url(source):
        text = download_csv(source)
        if cache_file is not None:
            cache_file = Path(cache_file)
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            cache_file.write_text(text, encoding="utf-8")
        buffer = io.StringIO(text)
    else:
        path = Path(source)
        if not path.exists():
            raise SourceUnavailable("file not found", str(path))
        buffer = path

    try:
        df = pd.read_csv(buffer, dtype=str, keep_default_na=False, na_values=[""])
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise SourceUnavailable(f"not a readable CSV: {e}", str(source)) from e

    return df
