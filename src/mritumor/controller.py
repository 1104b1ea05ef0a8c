"""Upload/preview/predict lifecycle for the MRI tumor form.

The controller holds the whole interaction state: the selected file, its
preview, the in-flight flag, the drop-target highlight and the result text.
UI code (the Streamlit page, the CLI) only forwards user events to it.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
import mimetypes
import numbers
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple

from mritumor.api_client import PredictionFailed
from mritumor.preview import PreviewHandle

logger = logging.getLogger(__name__)

ERROR_TEXT = "Error connecting to model"
SUBMIT_LABEL = "Analyze MRI"
SUBMIT_LABEL_BUSY = "Analyzing..."

@dataclass(frozen=True)
class SelectedFile:
    name: str
    data: bytes
    mime_type: str = "application/octet-stream"

    @classmethod
    def from_upload(cls, up) -> "SelectedFile":
        return cls(up.name, up.getvalue(), up.type or "application/octet-stream")

    @classmethod
    def from_path(cls, path: str | Path) -> "SelectedFile":
        p = Path(path)
        mime, _ = mimetypes.guess_type(p.name)
        return cls(p.name, p.read_bytes(), mime or "application/octet-stream")

def parse_prediction(raw: Any) -> Tuple[str, Any]:
    """Check the remote response is a (label, confidence) pair."""
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise PredictionFailed(f"expected a (label, confidence) pair, got {raw!r}")
    label, confidence = raw
    if not isinstance(label, str):
        raise PredictionFailed(f"label is not a string: {label!r}")
    if isinstance(confidence, bool) or not isinstance(confidence, numbers.Real):
        raise PredictionFailed(f"confidence is not a number: {confidence!r}")
    return label, confidence

def format_result(label: str, confidence: Any) -> str:
    return f"{label} (confidence: {confidence})"

class UploadPredictController:
    def __init__(self, api, preview_max_size: int = 512):
        self.api = api
        self.preview_max_size = preview_max_size
        self.file: Optional[SelectedFile] = None
        self.preview: Optional[PreviewHandle] = None
        self.result: Optional[str] = None
        self.in_flight = False
        self.drag_active = False

    @property
    def can_submit(self) -> bool:
        return self.file is not None and not self.in_flight

    @property
    def submit_label(self) -> str:
        return SUBMIT_LABEL_BUSY if self.in_flight else SUBMIT_LABEL

    def select_file(self, f: Optional[SelectedFile]) -> None:
        self._release_preview()
        self.file = f
        if f is not None:
            logger.debug("Selected %s (%d bytes)", f.name, len(f.data))
            self.preview = PreviewHandle.acquire(f, max_size=self.preview_max_size)
        self.result = None

    def on_file_change(self, up) -> None:
        self.select_file(SelectedFile.from_upload(up) if up is not None else None)

    # drop target events, for front ends that forward raw drag events;
    # st.file_uploader draws its own drop highlight
    def on_drag_over(self) -> None:
        self.drag_active = True

    def on_drag_leave(self) -> None:
        self.drag_active = False

    def on_drop(self, files: Sequence[SelectedFile]) -> None:
        self.drag_active = False
        if files:
            self.select_file(files[0])

    def submit_for_prediction(self) -> Optional[str]:
        """Run one predict round trip for the current file.

        Returns the new result text, or None when the call was skipped because
        no file is selected or another call is still running.
        """
        if not self.can_submit:
            return None
        f = self.file
        self.in_flight = True
        self.result = None
        logger.info("Submitting %s to %s", f.name, getattr(self.api, "space_id", "remote model"))
        try:
            label, confidence = parse_prediction(self.api.predict(f))
            self.result = format_result(label, confidence)
        except Exception:
            logger.exception("Prediction failed for %s", f.name)
            self.result = ERROR_TEXT
        finally:
            self.in_flight = False
        return self.result

    def _release_preview(self) -> None:
        if self.preview is not None:
            self.preview.release()
            self.preview = None

    def close(self) -> None:
        self._release_preview()

    def __enter__(self) -> "UploadPredictController":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
