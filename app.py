"""CaptionCraft Streamlit page.

Run with ``streamlit run app.py``.  Requires GEMINI_API_KEY in the environment
or in a ``.env`` file next to this script.
"""

import asyncio
import json
import logging

import streamlit as st
import streamlit.components.v1 as components

from captioncraft.caption.types import GenerationMode, Variant
from captioncraft.config import AppConfig, load_settings
from captioncraft.errors import ConfigurationError
from captioncraft.logging_utils import create_logger
from captioncraft.media.encoder import UPLOAD_EXTENSIONS
from captioncraft.model.adapter import GeminiClient
from captioncraft.session import GenerationController, ImageSelection, SessionState, copy_caption
from captioncraft.session.state import COPY_REFRESH_SECONDS

logging.basicConfig(level=logging.INFO,
                    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s")
logger = logging.getLogger("captioncraft.app")

VARIANT_BADGES = {
    Variant.SHORT: ("Short", "#065f46", "#d1fae5"),
    Variant.MEDIUM: ("Medium", "#1e40af", "#dbeafe"),
    Variant.LONG: ("Long", "#3730a3", "#e0e7ff"),
}

st.set_page_config(page_title="CaptionCraft", page_icon="✨", layout="wide")


@st.cache_resource(show_spinner=False)
def get_settings() -> AppConfig:
    return load_settings()


@st.cache_resource(show_spinner=False)
def get_controller(_config: AppConfig) -> GenerationController:
    run_logger = create_logger(
        _config.logging.level,
        _config.logging.logfile,
        secrets=[_config.api_key or ""],
    )
    client = GeminiClient(api_key=_config.api_key or "", model=_config.model.name)
    return GenerationController(client, logger=run_logger)


def get_state(config: AppConfig) -> SessionState:
    if "captioncraft" not in st.session_state:
        st.session_state["captioncraft"] = SessionState(
            copy_feedback_seconds=config.ui.copy_feedback_seconds,
        )
    return st.session_state["captioncraft"]


def browser_clipboard_writer(text: str) -> None:
    components.html(
        f"<script>navigator.clipboard.writeText({json.dumps(text)});</script>",
        height=0,
    )


@st.fragment(run_every=COPY_REFRESH_SECONDS)
def render_captions(state: SessionState, mode: GenerationMode) -> None:
    captions = state.captions_for(mode)
    for caption in captions:
        label, fg, bg = VARIANT_BADGES[caption.variant]
        with st.container(border=True):
            st.markdown(
                f"<span style='background:{bg};color:{fg};padding:2px 10px;"
                f"border-radius:999px;font-size:0.8rem;font-weight:600'>{label}</span>",
                unsafe_allow_html=True,
            )
            st.write(caption.text)
            if st.button("Copy", key=f"copy-{caption.id}"):
                copy_caption(state, caption, browser_clipboard_writer)
            if state.is_copied(caption.id):
                st.caption("Copied!")


try:
    config = get_settings()
except ConfigurationError as exc:
    logger.error("Configuration error: %s", exc)
    st.error(f"Configuration error: {exc}")
    st.stop()

controller = get_controller(config)
state = get_state(config)

st.title("✨ CaptionCraft")
st.markdown("AI-powered caption generator")

mode = st.radio(
    "Input",
    [GenerationMode.TEXT, GenerationMode.IMAGE],
    format_func=lambda m: "Text" if m is GenerationMode.TEXT else "Image",
    index=0 if state.active_mode is GenerationMode.TEXT else 1,
    horizontal=True,
)
state.switch_mode(mode)

if mode is GenerationMode.TEXT:
    state.set_text(
        st.text_area(
            "Enter your text:",
            value=state.text_input,
            height=150,
            placeholder="Describe your post, product or moment …",
        )
    )
    if st.button("Generate Captions", type="primary", disabled=not state.can_generate(mode)):
        with st.spinner("Generating captions …"):
            asyncio.run(controller.generate_text(state))
else:
    uploaded_file = st.file_uploader(
        "Upload an image",
        type=list(UPLOAD_EXTENSIONS),
    )
    state.sync_upload(
        uploaded_file.file_id if uploaded_file is not None else None,
        lambda: ImageSelection(
            name=uploaded_file.name,
            data=uploaded_file.getvalue(),
            mime_type=uploaded_file.type,
        ),
    )
    if state.image is not None:
        st.image(state.image.data, caption=state.image.name, use_container_width=True)
    if st.button("Generate Captions", type="primary", disabled=not state.can_generate(mode)):
        with st.spinner("Analysing image …"):
            asyncio.run(controller.generate_image(state))

notice = state.take_notification()
if notice:
    st.error(notice)

render_captions(state, mode)
