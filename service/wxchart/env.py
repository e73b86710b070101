"""Helpers for dealing with environment variables.

Especially relevant for Cloud deployments, where most parameters
will be provided as env vars.
"""

import os
from pydantic import BaseModel


class DataSourceConfig(BaseModel):
    """Where to load the weather CSV files from.

    If base_url is set, files are fetched via HTTP(S) from that URL,
    otherwise they are read from data_dir.
    """

    base_url: str | None = None
    data_dir: str = "."
    timeout: float = 10

    @classmethod
    def from_env(cls):
        timeout = os.getenv("WXCHART_FETCH_TIMEOUT")
        return cls(
            base_url=os.getenv("WXCHART_DATA_URL") or None,
            data_dir=os.getenv("WXCHART_DATA_DIR", "."),
            timeout=float(timeout) if timeout else 10,
        )

    def location(self, filename: str) -> str:
        """Returns the URL or file path of the given resource file."""
        if self.base_url:
            return f"{self.base_url.rstrip('/')}/{filename}"
        return os.path.join(self.data_dir, filename)

    def describe(self) -> str:
        return self.base_url or os.path.abspath(self.data_dir)
