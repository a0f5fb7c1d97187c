"""Cosmos Explorer - Streamlit interface.

Thin client for the Cosmos Explorer API. All provider logic lives in the
FastAPI backend. This file handles:
  - Page navigation (APOD, Mars Rover, NEO Tracker, AstroBot)
  - Chat history kept in st.session_state and sent with each message
  - Optional image upload for AstroBot vision answers
  - Filtering and sorting of the near-Earth object table
"""

import json
import os
from datetime import date, timedelta

import pandas as pd
import requests
import streamlit as st

# Config
API_URL = os.environ.get("API_URL", "http://localhost:8000")
APOD_ENDPOINT = f"{API_URL}/api/apod"
MARS_ENDPOINT = f"{API_URL}/api/mars-rover"
NEO_ENDPOINT = f"{API_URL}/api/neo-tracker"
ASSISTANT_ENDPOINT = f"{API_URL}/api/assistant"
TRANSLATE_ENDPOINT = f"{API_URL}/api/translate"
HEALTH_ENDPOINT = f"{API_URL}/health"

ROVER_CAMERAS = {
    "curiosity": ["FHAZ", "RHAZ", "MAST", "CHEMCAM", "NAVCAM"],
    "perseverance": ["FRONT_HAZCAM_LEFT_A", "NAVCAM_LEFT", "MCZ_RIGHT", "SKYCAM"],
    "opportunity": ["FHAZ", "RHAZ", "NAVCAM", "PANCAM"],
    "spirit": ["FHAZ", "RHAZ", "NAVCAM", "PANCAM"],
}
FIRST_APOD = date(1995, 6, 16)

# Page setup
st.set_page_config(
    page_title="Cosmos Explorer",
    layout="wide",
)

# Custom styles
st.markdown("""
<style>
    .stChatMessage {
        padding: 0.75rem 1rem;
    }
    .status-badge {
        display: inline-block;
        padding: 2px 8px;
        border-radius: 12px;
        font-size: 0.75rem;
        font-weight: 600;
    }
    .status-ok { background: #d4edda; color: #155724; }
    .status-err { background: #f8d7da; color: #721c24; }
    .source-nasa { background: #dbe7ff; color: #0b3d91; }
    .source-ai { background: #efe1ff; color: #5a2ca0; }
</style>
""", unsafe_allow_html=True)


def init_session():
    """Initialize session state on first load."""
    if "messages" not in st.session_state:
        st.session_state.messages = []
    if "translations" not in st.session_state:
        st.session_state.translations = {}
    if "upload_key" not in st.session_state:
        st.session_state.upload_key = 0


def fetch_json(url: str, params: dict | None = None, timeout: int = 15) -> tuple[dict | None, str | None]:
    """GET a backend endpoint. Returns (data, error_message)."""
    try:
        resp = requests.get(url, params=params, timeout=timeout)
    except requests.Timeout:
        return None, "[TIMEOUT] Request timed out. The server may be overloaded."
    except requests.ConnectionError:
        return None, "[DISCONNECT] Cannot connect to the backend. Is the API server running?"

    try:
        data = resp.json()
    except ValueError:
        return None, f"[ERROR] Server error ({resp.status_code}). Please try again."

    if resp.status_code != 200:
        return None, f"[ERROR] {data.get('error') or data.get('detail') or resp.status_code}"
    return data, None


def translate_text(text: str, language: str) -> tuple[str | None, str | None]:
    """POST text to the translate endpoint. Returns (translated, error_message)."""
    try:
        resp = requests.post(TRANSLATE_ENDPOINT, json={"text": text, "language": language}, timeout=30)
        data = resp.json()
    except (requests.RequestException, ValueError):
        return None, "[ERROR] Translation service unreachable."

    if resp.status_code == 200:
        return data.get("translatedText"), None
    if data.get("isRateLimit"):
        return None, f"[RATE LIMIT] {data.get('error')}"
    return None, f"[ERROR] {data.get('error', 'Translation failed.')}"


def render_apod_page():
    st.title("Astronomy Picture of the Day")

    yesterday = date.today() - timedelta(days=1)
    picked = st.date_input("Date", value=yesterday, min_value=FIRST_APOD, max_value=date.today())
    params = None if picked == yesterday else {"date": picked.isoformat()}

    with st.spinner("Contacting NASA..."):
        apod, error = fetch_json(APOD_ENDPOINT, params=params)
    if error:
        st.error(error)
        return

    st.subheader(apod.get("title", "Untitled"))
    st.caption(apod.get("date", ""))
    if apod.get("media_type") == "video":
        st.video(apod["url"])
    elif apod.get("url"):
        st.image(apod.get("hdurl") or apod["url"], use_container_width=True)
    if apod.get("copyright"):
        st.caption(f"Credit: {apod['copyright'].strip()}")

    explanation = apod.get("explanation", "")
    st.markdown(explanation)

    language = st.selectbox("Translate explanation", ["hindi", "nepali"], format_func=str.title)
    key = (apod.get("date"), language)
    if st.button("Translate"):
        translated, error = translate_text(explanation, language)
        if error:
            st.warning(error)
        else:
            st.session_state.translations[key] = translated
    if key in st.session_state.translations:
        st.info(st.session_state.translations[key])


def render_mars_page():
    st.title("Mars Rover Photos")

    col1, col2 = st.columns(2)
    with col1:
        rover = st.selectbox("Rover", list(ROVER_CAMERAS), format_func=str.title)
    with col2:
        camera = st.selectbox("Camera", ROVER_CAMERAS[rover])

    params = None if (rover, camera) == ("curiosity", "FHAZ") else {"rover": rover, "camera": camera}
    with st.spinner("Downloading from the Red Planet..."):
        data, error = fetch_json(MARS_ENDPOINT, params=params)
    if error:
        st.error(error)
        return

    photos = data.get("photos", [])
    st.caption(f"{data.get('total_photos', 0)} photos on the latest sol")
    if not photos:
        st.info("No photos from this camera on the latest sol. Try another camera.")
        return

    columns = st.columns(3)
    for i, photo in enumerate(photos[:24]):
        with columns[i % 3]:
            camera_name = (photo.get("camera") or {}).get("full_name", "")
            st.image(photo["img_src"], caption=f"{photo.get('earth_date', '')} | {camera_name}",
                     use_container_width=True)


def neo_frame(feed: dict) -> pd.DataFrame:
    """Flatten the date -> [NEO] mapping into one row per close approach."""
    rows = []
    for day, objects in feed.get("near_earth_objects", {}).items():
        for neo in objects:
            approach = (neo.get("close_approach_data") or [{}])[0]
            diameter = neo.get("estimated_diameter", {}).get("kilometers", {})
            rows.append({
                "date": day,
                "name": neo.get("name"),
                "hazardous": bool(neo.get("is_potentially_hazardous_asteroid")),
                "diameter_km": float(diameter.get("estimated_diameter_max") or 0),
                "miss_distance_km": float(approach.get("miss_distance", {}).get("kilometers") or 0),
                "velocity_kph": float(approach.get("relative_velocity", {}).get("kilometers_per_hour") or 0),
            })
    return pd.DataFrame(rows)


def render_neo_page():
    st.title("Near-Earth Object Tracker")

    with st.spinner("Scanning the neighbourhood..."):
        feed, error = fetch_json(NEO_ENDPOINT)
    if error:
        st.error(error)
        return

    df = neo_frame(feed)
    total = feed.get("page", {}).get("total_elements", len(df))
    if df.empty:
        st.info("No close approaches in the last week.")
        return

    col1, col2, col3 = st.columns(3)
    col1.metric("Objects this week", total)
    col2.metric("Potentially hazardous", int(df["hazardous"].sum()))
    col3.metric("Closest approach (km)", f"{df['miss_distance_km'].min():,.0f}")

    hazardous_only = st.toggle("Potentially hazardous only")
    sort_by = st.selectbox("Sort by", ["miss_distance_km", "diameter_km", "velocity_kph", "date"])

    if hazardous_only:
        df = df[df["hazardous"]]
    df = df.sort_values(sort_by, ascending=sort_by in ("miss_distance_km", "date"))
    st.dataframe(df, use_container_width=True, hide_index=True)


def render_message(msg: dict):
    """Render a single chat message with its source badge."""
    with st.chat_message(msg["role"]):
        st.markdown(msg["content"])
        if msg.get("source"):
            label = "NASA data" if msg["source"] == "nasa" else "Gemini AI"
            st.markdown(f'<span class="status-badge source-{msg["source"]}">{label}</span>',
                        unsafe_allow_html=True)


def send_message(user_input: str, image=None):
    """POST the message (and optional image) with prior turns as context."""
    history = [{"role": m["role"], "content": m["content"]} for m in st.session_state.messages]

    st.session_state.messages.append({"role": "user", "content": user_input, "source": None})
    with st.chat_message("user"):
        st.markdown(user_input)
        if image is not None:
            st.image(image, width=240)

    with st.chat_message("assistant"):
        with st.spinner("AstroBot is thinking..."):
            try:
                if image is not None:
                    resp = requests.post(
                        ASSISTANT_ENDPOINT,
                        data={"message": user_input, "conversationHistory": json.dumps(history)},
                        files={"image": (image.name, image.getvalue(), image.type or "image/jpeg")},
                        timeout=60,
                    )
                else:
                    resp = requests.post(
                        ASSISTANT_ENDPOINT,
                        json={"message": user_input, "conversationHistory": history},
                        timeout=60,
                    )
            except requests.Timeout:
                st.error("[TIMEOUT] Request timed out. The server may be overloaded.")
                return
            except requests.ConnectionError:
                st.error("[DISCONNECT] Cannot connect to the backend. Is the API server running?")
                return

        if resp.status_code != 200:
            st.error(f"[ERROR] Server error ({resp.status_code}). Please try again.")
            return

        data = resp.json()
        msg = {"role": "assistant", "content": data["response"], "source": data.get("apiSource")}
        st.session_state.messages.append(msg)
        st.markdown(msg["content"])


def render_astrobot_page():
    st.title("AstroBot")
    st.caption("Ask about asteroids, Mars rovers, the picture of the day, or anything in space")

    for msg in st.session_state.messages:
        render_message(msg)

    image = st.file_uploader(
        "Attach an image (optional)",
        type=["png", "jpg", "jpeg", "webp"],
        key=f"astrobot_image_{st.session_state.upload_key}",
    )

    if user_input := st.chat_input("Ask AstroBot..."):
        send_message(user_input, image)
        if image is not None:
            # a fresh key empties the uploader for the next message
            st.session_state.upload_key += 1
            st.rerun()


PAGES = {
    "Picture of the Day": render_apod_page,
    "Mars Rover": render_mars_page,
    "NEO Tracker": render_neo_page,
    "AstroBot": render_astrobot_page,
}


def main():
    """Run the Streamlit application."""
    init_session()

    try:
        health = requests.get(HEALTH_ENDPOINT, timeout=3).json()
        api_status = health.get("status", "unknown")
    except (requests.RequestException, ValueError):
        health = {}
        api_status = "offline"

    with st.sidebar:
        st.markdown("## Cosmos Explorer")
        page = st.radio("Explore", list(PAGES))

        st.divider()
        css = "status-ok" if api_status == "healthy" else "status-err"
        st.markdown(f'<span class="status-badge {css}">* API {api_status.title()}</span>',
                    unsafe_allow_html=True)
        for name, state in health.get("components", {}).items():
            st.caption(f"{name}: {state}")
        if st.button("Check Connection", use_container_width=True):
            st.rerun()

        if page == "AstroBot":
            st.divider()
            if st.button("[DEL] New Conversation", use_container_width=True):
                st.session_state.messages = []
                st.rerun()

    if api_status == "offline":
        st.warning("[WARN] The Cosmos Explorer API is offline. Start it with `uvicorn backend.main:app`.")

    PAGES[page]()


if __name__ == "__main__":
    main()
