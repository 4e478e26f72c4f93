"""Streamlit UI for managing the ordered location list."""
from __future__ import annotations

from pathlib import Path
import sys

import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from weather_locations.config import load_config
from weather_locations.engine.reorder import MOVE_LABELS
from weather_locations.logging_setup import configure_logging
from weather_locations.models.location import Notice
from weather_locations.persistence.journal import default_journal_root, read_commit_logs
from weather_locations.store.factory import build_store
from weather_locations.sync.controller import ListSyncController


st.set_page_config(page_title="Saved Locations", layout="centered")


def _new_controller(cfg, user_id: str, offline: bool) -> ListSyncController:
    controller = ListSyncController(
        build_store(cfg, offline=offline),
        user_id,
        journal_root=default_journal_root(cfg),
    )
    controller.subscribe_notices(_queue_notice)
    controller.load()
    return controller


def _queue_notice(notice: Notice) -> None:
    st.session_state.pending_notices.append(notice)


def _show_notices() -> None:
    for notice in st.session_state.pending_notices:
        if notice.level == "error":
            st.error(notice.message)
        else:
            st.toast(notice.message)
    st.session_state.pending_notices = []


def _render_rows(controller: ListSyncController) -> None:
    records = controller.records()
    if not records:
        st.info("No saved locations yet.")
        return
    for idx, record in enumerate(records):
        cols = st.columns([4, 1, 1, 1, 1, 1])
        label = record.name
        if record.latitude is not None and record.longitude is not None:
            label += f"  ({record.latitude:.4f}, {record.longitude:.4f})"
        cols[0].write(f"**{idx + 1}.** {label}")
        moves = controller.available_moves(idx)
        for col, intent in zip(cols[1:5], moves):
            if col.button(MOVE_LABELS[intent], key=f"move_{intent.value}_{idx}_{record.name}"):
                controller.request_move(idx, intent)
                st.rerun()
        if cols[5].button("Delete", key=f"delete_{idx}_{record.name}"):
            controller.delete_location(record.name)
            st.rerun()


def _render_drag(controller: ListSyncController) -> None:
    names = controller.current_sequence()
    if len(names) < 2:
        return
    with st.expander("Drag to reorder"):
        source = st.selectbox("Row", range(len(names)), format_func=lambda i: names[i], key="drag_source")
        target = st.slider("Drop at position", 1, len(names), value=source + 1, key="drag_target") - 1
        if st.button("Drop"):
            if controller.begin_drag(source):
                step = 1 if target > source else -1
                for pos in range(source + step, target + step, step):
                    controller.report_drag_over(pos)
                controller.end_drag()
            st.rerun()


def _render_add(controller: ListSyncController) -> None:
    with st.form("add_location", clear_on_submit=True):
        name = st.text_input("Location", placeholder="e.g. Seoul")
        use_coords = st.checkbox("Include coordinates")
        lat = st.number_input("Latitude", value=0.0, format="%.4f")
        lon = st.number_input("Longitude", value=0.0, format="%.4f")
        if st.form_submit_button("Add"):
            if use_coords:
                controller.add_location(name, lat, lon)
            else:
                controller.add_location(name)
            st.rerun()


cfg = load_config(str(PROJECT_ROOT / "configs" / "config.yaml")).resolve_paths(PROJECT_ROOT)
configure_logging(cfg)

if "pending_notices" not in st.session_state:
    st.session_state.pending_notices = []
if "controller" not in st.session_state:
    st.session_state.controller = None

st.title("Saved Locations")

with st.sidebar:
    user_id = st.text_input("User id", value=cfg.session.user_id)
    offline = st.checkbox("Offline (in-memory store)", value=cfg.store.provider == "memory")
    if st.button("Open list") and user_id:
        try:
            st.session_state.controller = _new_controller(cfg, user_id, offline)
        except ValueError as exc:
            st.error(str(exc))
    controller = st.session_state.controller
    if controller is not None:
        if st.button("Reload"):
            controller.load()
        if st.button("Check connection"):
            controller.check_health()

controller = st.session_state.controller
_show_notices()
if controller is None:
    st.write("Enter a user id and open the list.")
else:
    _render_rows(controller)
    _render_drag(controller)
    _render_add(controller)
    journal_root = default_journal_root(cfg)
    if journal_root is not None:
        with st.expander("Recent order saves"):
            for record in reversed(read_commit_logs(controller.user_id, journal_root)[-10:]):
                status = "saved" if record.get("ok") else "failed"
                st.write(f"{record.get('timestamp', '')}: {', '.join(record.get('names', []))} ({status})")
