from __future__ import annotations

import argparse
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from roadmap_ui.timeline import (
    GESTURE_MOVE,
    GestureController,
    ViewState,
    apply_date_mutation,
    compute_layout,
    export_timeline_bundle,
    load_records,
    render_timeline_ascii,
    view_layout_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Roadmap timeline demo: layout, a simulated drag, and exports.")
    parser.add_argument("--records", default=str(REPO_ROOT / "examples" / "data" / "roadmap_records.json"))
    parser.add_argument("--export-dir", default="build/roadmap_timeline_demo")
    parser.add_argument("--drag-id", type=int, default=3)
    parser.add_argument("--drag-px", type=float, default=160.0)
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    state = ViewState()
    config = view_layout_config(state)
    records = load_records(args.records)

    before = compute_layout(records, config)
    print(render_timeline_ascii(before))

    controller = GestureController()
    entry = before.entry_for(args.drag_id)
    if entry is not None and controller.begin(entry, GESTURE_MOVE, pointer_id=1, anchor_x=0.0):
        mutation = controller.move(1, args.drag_px, state.px_per_day)
        controller.finish(1)
        if mutation is not None:
            records = apply_date_mutation(records, mutation)
            print(f"moved {mutation.item_id} to {mutation.start}..{mutation.end}\n")

    bundle = export_timeline_bundle(records, out_dir=args.export_dir, prefix="demo", config=config)
    for key, value in bundle.as_dict().items():
        print(f"- {key}: {value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
