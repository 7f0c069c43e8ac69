"""Streamlit application for SaltThickness."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pandas as pd
import streamlit as st

from saltthickness.config import (
    ThicknessParameters,
    default_parameters,
    parameter_from_inputs,
)
from saltthickness.data import MalformedRecordError
from saltthickness.maps import figure_png_bytes, render_thickness_map
from saltthickness.output import select_rows, thickness_file_bytes
from saltthickness.pipeline import ThicknessResult, compute_salt_thickness


@dataclass
class WorkingSession:
    parameters: ThicknessParameters = field(default_factory=default_parameters)
    pair_files: List[Tuple[str, bytes, str, bytes]] = field(default_factory=list)
    result: Optional[ThicknessResult] = None
    output_name: str = "salt_thickness.lmk"

    @property
    def data_loaded(self) -> bool:
        return bool(self.pair_files)

    def sources(self) -> List[io.BytesIO]:
        buffers: List[io.BytesIO] = []
        for top_name, top_bytes, bottom_name, bottom_bytes in self.pair_files:
            top = io.BytesIO(top_bytes)
            top.name = top_name
            bottom = io.BytesIO(bottom_bytes)
            bottom.name = bottom_name
            buffers.extend([top, bottom])
        return buffers


SESSION_KEY = "saltthickness_session"
STOP_KEY = "stop_thickness"


def get_working_session() -> WorkingSession:
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = WorkingSession()
    return st.session_state[SESSION_KEY]


def set_working_session(session: WorkingSession) -> None:
    st.session_state[SESSION_KEY] = session


def _stop_requested() -> bool:
    return bool(st.session_state.get(STOP_KEY, False))


def _reset_stop() -> None:
    st.session_state[STOP_KEY] = False


def _run_thickness(session: WorkingSession) -> None:
    status = st.empty()
    progress = st.progress(0.0, text="Starting salt thickness…")

    def update(fraction: float, message: str) -> None:
        progress.progress(min(fraction, 1.0), text=message)

    try:
        session.result = compute_salt_thickness(
            session.sources(),
            session.parameters,
            logger=st.info,
            progress=update,
            should_stop=_stop_requested,
        )
        status.success(f"Salt thickness computed for {session.result.locations} locations.")
    except InterruptedError:
        status.warning("Salt thickness computation stopped by user.")
    except MalformedRecordError as exc:
        status.error(f"Malformed horizon file: {exc}")
    except Exception as exc:
        status.error(f"Failed to compute salt thickness: {exc}")
    finally:
        progress.empty()
        _reset_stop()


def _render_data_loading(session: WorkingSession) -> None:
    st.header("1. Horizon files")
    pair_count = int(st.number_input("Number of top/bottom pairs", value=max(1, len(session.pair_files)), min_value=1, step=1))
    uploads: List[Tuple[Optional[object], Optional[object]]] = []
    for index in range(1, pair_count + 1):
        top_col, bottom_col = st.columns(2)
        top_file = top_col.file_uploader(f"Top T{index}", type=["lmk", "txt", "dat"], key=f"top_{index}")
        bottom_file = bottom_col.file_uploader(f"Bottom B{index}", type=["lmk", "txt", "dat"], key=f"bottom_{index}")
        uploads.append((top_file, bottom_file))

    st.subheader("Output options")
    output_name = st.text_input("Output file name", value=session.output_name)
    skip_zero = st.checkbox("Write only non-zero thickness values", value=session.parameters.skip_zero_thickness)
    precision = st.number_input("Decimals", value=int(session.parameters.precision), min_value=0, max_value=6, step=1)
    field_width = st.number_input("Field width", value=int(session.parameters.field_width), min_value=4, step=1)

    inputs: Dict[str, object] = {
        "PRECISION": precision,
        "FIELD_WIDTH": field_width,
        "SKIP_ZERO_THICKNESS": skip_zero,
        "LARGE_INPUT_RECORDS": session.parameters.large_input_records,
        "HORIZON_SUFFIX": session.parameters.horizon_suffix,
        "OUTPUT_PREFIX": session.parameters.output_prefix,
    }
    parameters = parameter_from_inputs(inputs, logger=st.warning)

    if st.button("Load horizons and compute"):
        missing = [
            f"{'T' if side == 0 else 'B'}{index}"
            for index, pair in enumerate(uploads, start=1)
            for side, upload in enumerate(pair)
            if upload is None
        ]
        if missing:
            st.error(f"Missing horizon files: {', '.join(missing)}.")
            return
        new_session = WorkingSession(
            parameters=parameters,
            pair_files=[
                (top.name, top.getvalue(), bottom.name, bottom.getvalue())
                for top, bottom in uploads
            ],
            output_name=output_name.strip() or "salt_thickness.lmk",
        )
        set_working_session(new_session)
        stop_placeholder = st.empty()
        stop_placeholder.button("Stop", key="stop_btn", on_click=lambda: st.session_state.update({STOP_KEY: True}))
        _run_thickness(new_session)
        stop_placeholder.empty()


def _render_results(session: WorkingSession) -> None:
    st.header("2. Salt thickness")
    if session.result is None:
        st.info("Load horizon files to compute salt thickness.")
        return
    result = session.result
    summary = result.summary
    cols = st.columns(4)
    cols[0].metric("Locations with picks", result.picks_locations)
    cols[1].metric("Locations with thickness", result.locations)
    cols[2].metric("Invalid pairs removed", summary.invalid_removed)
    cols[3].metric("Nested pairs removed", summary.nested_removed)

    frame = result.thickness
    if frame.empty:
        st.warning("No location has a valid top/bottom pair.")
        return
    written = select_rows(frame, session.parameters)
    st.dataframe(written.head(500), width="stretch")
    st.dataframe(frame["net_thickness"].describe().to_frame(), width="stretch")
    st.download_button(
        label="Download thickness file",
        data=thickness_file_bytes(frame, session.parameters),
        file_name=session.output_name,
        mime="text/plain",
    )
    csv_bytes = written.to_csv(index=False).encode("utf-8")
    st.download_button(
        label="Download thickness CSV",
        data=csv_bytes,
        file_name=f"{session.output_name.rsplit('.', 1)[0]}.csv",
        mime="text/csv",
    )


def _render_map(session: WorkingSession) -> None:
    st.header("3. Map")
    if session.result is None or session.result.thickness.empty:
        st.info("Compute salt thickness to enable the map preview.")
        return
    frame: pd.DataFrame = session.result.thickness
    fig = render_thickness_map(frame, title="Net salt thickness")
    png_bytes = figure_png_bytes(fig)
    st.image(png_bytes, caption="Net salt thickness")
    st.download_button(
        label="Download thickness map PNG",
        data=png_bytes,
        file_name="salt_thickness.png",
        mime="image/png",
    )


def main() -> None:
    st.set_page_config(page_title="SaltThickness", layout="wide")
    st.title("SaltThickness")
    st.caption("Net salt thickness from top/bottom horizon picks")
    session = get_working_session()
    _render_data_loading(session)
    session = get_working_session()
    _render_results(session)
    _render_map(session)


if __name__ == "__main__":
    main()
