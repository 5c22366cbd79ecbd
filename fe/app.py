# fe/app.py
import streamlit as st
from dotenv import load_dotenv

from paleo_doc_utils import settings, utils
from paleo_doc_utils.api_client import call_transcribe, check_health
from paleo_doc_utils.demo import fetch_demo_image
from paleo_doc_utils.errors import UnsupportedFileError
from paleo_doc_utils.session import Session, SessionStatus
from paleo_doc_utils.viewer import ViewMode, ViewState, EXPORT_FILENAME, EXPORT_MIME, export_bytes
from paleo_doc_utils.workflow import check_image_type, fetch_demo, prepare_upload, analyze

load_dotenv()
logger = utils.setup_logging(settings.LOG_LEVEL)

IMAGE_BASE_WIDTH = 600
VIEW_LABELS = {
    ViewMode.SPLIT: "Split View",
    ViewMode.IMAGE_ONLY: "Image Only",
    ViewMode.TEXT_ONLY: "Text Only",
}

# ============================================================
# Page setup
# ============================================================
st.set_page_config(layout="wide", page_title="PaleoAI", page_icon="📜")

st.markdown(
    """
    <style>
    .reportview-container .main .block-container{max-width:100%!important; padding:1rem 2rem;}
    </style>
    """,
    unsafe_allow_html=True,
)

# ============================================================
# Default session_state
# ============================================================
st.session_state.setdefault("session", Session())
st.session_state.setdefault("view", ViewState())
st.session_state.setdefault("pending", None)  # what to run while uploading
st.session_state.setdefault("api_url", settings.API_URL)


def set_session(session: Session):
    st.session_state["session"] = session


def reset():
    set_session(st.session_state["session"].reset())
    st.session_state["view"] = ViewState()
    st.session_state["pending"] = None


def transcribe_via_api(filename: str):
    def _transcribe(image_bytes, mime_type):
        return call_transcribe(image_bytes, filename=filename, content_type=mime_type,
                               api_url=st.session_state["api_url"])
    return _transcribe


# ============================================================
# Header
# ============================================================
st.title("📜 PaleoAI")
st.caption("ARCHIVO DE INDIAS TRANSCRIBER · Powered by Mistral vision models")

# ============================================================
# Sidebar: API connection
# ============================================================
with st.sidebar:
    st.header("Configuration")
    st.text_input("API URL:", key="api_url")
    if st.button("Check API"):
        try:
            health = check_health(st.session_state["api_url"])
            if health.get("configured"):
                st.success(f"API ready · model {health.get('model')}")
            else:
                st.error("API reachable but MISTRAL_API_KEY is not set")
        except Exception as e:
            st.error(f"API unreachable: {e}")

session: Session = st.session_state["session"]

# ============================================================
# Idle: upload zone
# ============================================================
if session.status == SessionStatus.IDLE:
    st.header("Upload Manuscript")
    st.write(
        "Choose an image of your historical document. "
        "Supported formats: JPG, PNG, WEBP."
    )
    uploaded = st.file_uploader("Select Image", type=["jpg", "jpeg", "png", "webp"])

    c1, c2 = st.columns(2)
    with c1:
        if st.button("Transcribe", disabled=uploaded is None, type="primary"):
            try:
                check_image_type(uploaded.type)
            except UnsupportedFileError as e:
                st.warning(e.message)
            else:
                st.session_state["pending"] = {
                    "kind": "upload",
                    "name": uploaded.name,
                    "type": uploaded.type,
                    "raw": uploaded.getvalue(),
                }
                set_session(session.start_upload())
                st.rerun()
    with c2:
        st.caption("OR TRY AN EXAMPLE")
        if st.button('Load "Carta de Indias 1543" Demo'):
            st.session_state["pending"] = {"kind": "demo"}
            set_session(session.start_upload())
            st.rerun()

# ============================================================
# Uploading / analyzing: run the pending attempt
# ============================================================
elif session.is_busy:
    pending = st.session_state["pending"]
    if pending is None:
        # a rerun lost the request; nothing is in flight any more
        set_session(session.fail("The request was interrupted. Please try again."))
        st.rerun()

    result = session
    try:
        if session.status == SessionStatus.UPLOADING:
            with st.spinner("Preparing Image..."):
                if pending["kind"] == "demo":
                    result, raw, mime_type = fetch_demo(session, fetch_demo_image)
                    pending = {"kind": "upload", "name": "demo.jpg", "type": mime_type, "raw": raw}
                if result.status == SessionStatus.UPLOADING:
                    result = prepare_upload(result, pending["raw"], pending["type"])
        else:
            with st.spinner("Deciphering Text..."):
                result = analyze(session, pending["raw"], pending["type"],
                                 transcribe_via_api(pending["name"]))
    finally:
        # keep the image only while the model call is still to come
        st.session_state["pending"] = pending if result.status == SessionStatus.ANALYZING else None

    set_session(result)
    st.rerun()

# ============================================================
# Error
# ============================================================
elif session.status == SessionStatus.ERROR:
    st.error(f"**Transcription Failed**\n\n{session.error_message}")
    st.button("Try Again", on_click=reset)

# ============================================================
# Success: result viewer
# ============================================================
else:
    view: ViewState = st.session_state["view"]
    text = session.result_text

    t1, t2, t3, t4, t5 = st.columns([1, 3, 1, 1, 2])
    with t1:
        st.button("New Upload", on_click=reset)
    with t2:
        mode = st.radio(
            "View", list(ViewMode), index=list(ViewMode).index(view.mode),
            format_func=VIEW_LABELS.get, horizontal=True, label_visibility="collapsed",
        )
        if mode != view.mode:
            view = view.with_mode(mode)
            st.session_state["view"] = view
            st.rerun()
    if view.shows_image:
        with t3:
            if st.button("➖", help="Zoom out"):
                st.session_state["view"] = view.zoom_out()
                st.rerun()
        with t4:
            if st.button("➕", help="Zoom in"):
                st.session_state["view"] = view.zoom_in()
                st.rerun()
        with t5:
            st.markdown(f"`{view.zoom_label}`")

    st.download_button(
        "Download Text", export_bytes(text),
        file_name=EXPORT_FILENAME, mime=EXPORT_MIME, key="download_txt"
    )

    if view.mode == ViewMode.SPLIT:
        image_col, text_col = st.columns(2)
    else:
        image_col = text_col = st.container()

    if view.shows_image:
        with image_col:
            st.image(session.source_image_ref, caption="Manuscript",
                     width=view.image_width(IMAGE_BASE_WIDTH))

    if view.shows_text:
        with text_col:
            st.markdown(text)
            with st.expander("Copy text"):
                # st.code carries a copy-to-clipboard button
                st.code(text, language=None)
            st.caption("END OF TRANSCRIPTION")
