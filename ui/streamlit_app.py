from __future__ import annotations

import os
from pathlib import Path

import streamlit as st

from mritumor.api_client import MRITumorAPI
from mritumor.config import AppConfig, load_yaml, setup_logging
from mritumor.controller import ERROR_TEXT, UploadPredictController

ROOT = Path(__file__).resolve().parents[1]
CONFIG_PATH = os.getenv("APP_CONFIG", str(ROOT / "configs" / "app.yaml"))

@st.cache_resource(show_spinner=False)
def get_config() -> AppConfig:
    cfg = AppConfig(load_yaml(CONFIG_PATH))
    setup_logging(cfg.log_level)
    return cfg

@st.cache_resource(show_spinner=False)
def get_api() -> MRITumorAPI:
    # one Space connection shared by all sessions
    return MRITumorAPI.from_config(get_config())

def get_controller() -> UploadPredictController:
    if "controller" not in st.session_state:
        st.session_state["controller"] = UploadPredictController(get_api(), preview_max_size=get_config().preview_max_size)
    return st.session_state["controller"]

cfg = get_config()
st.set_page_config(page_title=cfg.title, page_icon="🧠", layout="centered")
ctl = get_controller()

def _on_upload_change():
    ctl.on_file_change(st.session_state.get("upload"))

# -----------------------------
# Sidebar
# -----------------------------
with st.sidebar:
    st.subheader("Connection")
    st.write(f"Model Space: `{get_api().space_id}`")
    if st.button("Ping model", key="ping"):
        try:
            runtime = get_api().status()
            st.success(f"Space stage: {runtime.get('stage', 'unknown')}")
        except Exception as e:
            st.error(f"Could not reach the Hub: {e}")

# -----------------------------
# Upload & Predict
# -----------------------------
st.title(cfg.title)
st.caption("Drag & drop an MRI scan here, or click to choose.")

st.file_uploader(
    "MRI scan",
    type=cfg.accepted_types,
    key="upload",
    on_change=_on_upload_change,
)

if ctl.preview is not None:
    if ctl.preview.image is not None:
        st.image(ctl.preview.image, caption=ctl.preview.name, width="stretch")
    else:
        st.caption(f"No preview available for {ctl.preview.name}")

run = st.button(ctl.submit_label, key="analyze", type="primary", disabled=not ctl.can_submit, width="stretch")
if run:
    with st.spinner("Analyzing..."):
        ctl.submit_for_prediction()

if ctl.result:
    if ctl.result == ERROR_TEXT:
        st.error(ctl.result)
    else:
        st.success(ctl.result)

if cfg.show_debug:
    with st.expander("Session state"):
        st.json({
            "file": ctl.file.name if ctl.file else None,
            "in_flight": ctl.in_flight,
            "result": ctl.result,
        })
