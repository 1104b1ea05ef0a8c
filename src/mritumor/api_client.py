from __future__ import annotations
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

import requests
from gradio_client import Client, handle_file

logger = logging.getLogger(__name__)

class PredictionFailed(RuntimeError):
    """Remote prediction could not be obtained or understood."""

class MRITumorAPI:
    def __init__(self, space_id: str = "yadollahi/mri-tumor-detector", api_name: str = "/predict",
                 hub_url: str = "https://huggingface.co", status_timeout: int = 30):
        self.space_id = space_id
        self.api_name = api_name
        self.hub_url = hub_url.rstrip("/")
        self.status_timeout = status_timeout
        self._client: Client | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, cfg) -> "MRITumorAPI":
        return cls(cfg.space_id, cfg.api_name, hub_url=cfg.hub_url, status_timeout=cfg.status_timeout)

    def connect(self) -> Client:
        with self._lock:
            if self._client is None:
                logger.info("Connecting to Space %s", self.space_id)
                try:
                    self._client = Client(self.space_id, verbose=False)
                except Exception as e:
                    raise PredictionFailed(f"could not connect to {self.space_id}: {e}") from e
            return self._client

    def predict(self, selected_file) -> Any:
        """Send the raw file payload to the Space and return its untouched response."""
        client = self.connect()
        suffix = Path(selected_file.name).suffix or ".png"
        fd, tmp = tempfile.mkstemp(suffix=suffix)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(selected_file.data)
            return client.predict(image=handle_file(tmp), api_name=self.api_name)
        except Exception as e:
            raise PredictionFailed(f"predict call to {self.space_id}{self.api_name} failed: {e}") from e
        finally:
            Path(tmp).unlink(missing_ok=True)

    def status(self) -> dict:
        r = requests.get(f"{self.hub_url}/api/spaces/{self.space_id}/runtime", timeout=self.status_timeout)
        r.raise_for_status()
        return r.json()
