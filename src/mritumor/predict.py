from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from mritumor.api_client import MRITumorAPI
from mritumor.config import AppConfig, DEFAULT_CONFIG, load_yaml, setup_logging
from mritumor.controller import ERROR_TEXT, SelectedFile, UploadPredictController

def main(argv: Optional[Sequence[str]] = None, api=None) -> int:
    ap = argparse.ArgumentParser(description="Send one MRI image to the hosted tumor classifier.")
    ap.add_argument("image_path", type=str)
    ap.add_argument("--config", type=str, default=DEFAULT_CONFIG)
    ap.add_argument("--space", type=str, default=None, help="Override the Space id from the config.")
    ap.add_argument("--json", action="store_true", help="Print a JSON object instead of plain text.")
    args = ap.parse_args(argv)
    if not Path(args.image_path).is_file():
        ap.error(f"image not found: {args.image_path}")

    cfg = AppConfig(load_yaml(args.config))
    setup_logging(cfg.log_level)

    if api is None:
        api = MRITumorAPI.from_config(cfg)
        if args.space:
            api.space_id = args.space

    with UploadPredictController(api, preview_max_size=cfg.preview_max_size) as ctl:
        ctl.select_file(SelectedFile.from_path(args.image_path))
        result = ctl.submit_for_prediction()

    if args.json:
        print(json.dumps({"image": args.image_path, "result": result, "ok": result != ERROR_TEXT}, indent=2))
    else:
        print(result)
    return 1 if result == ERROR_TEXT else 0

if __name__ == "__main__":
    sys.exit(main())
