import json
from html import escape
import time
from typing import Dict, List, Any

import requests
import streamlit as st
from streamlit.components.v1 import html

# Used when the backend's /languages cannot be reached
FALLBACK_LANGUAGES: List[Dict[str, str]] = [
    {"code": "en", "native": "English", "english": "English"},
    {"code": "hi", "native": "हिंदी", "english": "Hindi"},
]


# ----------------- Helpers -----------------
def language_label(item: Dict[str, Any]) -> str:
    native = item.get("native") or ""
    english = item.get("english") or item.get("code", "")
    if native and native != english:
        return f"{english} ({native}) · {item['code']}"
    return f"{english} · {item['code']}"


def fetch_languages(api_base: str) -> List[Dict[str, Any]]:
    r = requests.get(f"{api_base}/languages", timeout=5)
    r.raise_for_status()
    return r.json().get("languages", []) or []


def copy_to_clipboard_js(text: str, label: str = "Copy translation"):
    safe = json.dumps(text)
    html(
        f"""
        <button id="copybtn" title="Copy the translated text" style="padding:0.4rem 0.7rem; border-radius:8px;">{escape(label)}</button>
        <span id="copied" style="margin-left:8px; color:gray;"></span>
        <script>
          const txt = {safe};
          const btn = document.getElementById('copybtn');
          const info = document.getElementById('copied');
          btn.addEventListener('click', async () => {{
            try {{
              await navigator.clipboard.writeText(txt);
              info.textContent = "Copied!";
              setTimeout(() => info.textContent = "", 1200);
            }} catch(e) {{
              info.textContent = "Copy failed";
            }}
          }});
        </script>
        """,
        height=38,
    )


# ----------------- App -----------------
def main():
    st.set_page_config(page_title="Translation Gateway", page_icon="🌐", layout="wide")
    st.title("Translation Gateway")
    st.caption("Using FastAPI backend `/languages` and `/translate`")

    if "in_text" not in st.session_state:
        st.session_state.in_text = ""

    # Sidebar: backend
    st.sidebar.header("Backend")
    api_base = st.sidebar.text_input("API base URL", value="http://localhost:8080").rstrip("/")

    try:
        languages = fetch_languages(api_base)
    except Exception as e:
        st.sidebar.warning(f"Failed to fetch {api_base}/languages: {e}")
        languages = FALLBACK_LANGUAGES

    if not languages:
        st.warning("Backend returned no languages.")
        st.stop()

    codes = [item["code"] for item in languages]
    labels = {item["code"]: language_label(item) for item in languages}

    col_src, col_tgt = st.columns(2)
    with col_src:
        source_lang = st.selectbox("From", options=codes, index=0, format_func=labels.get)
    with col_tgt:
        target_lang = st.selectbox("To", options=codes, index=min(1, len(codes) - 1), format_func=labels.get)

    st.text_area(
        "Text",
        height=160,
        placeholder="Type the text to translate…",
        key="in_text",  # bound to session_state
    )

    col1, col2, col3 = st.columns([1, 1, 2])
    with col1:
        run_btn = st.button("Translate", type="primary", use_container_width=True)
    with col2:
        clear_btn = st.button("Clear input", use_container_width=True)
    with col3:
        t_label = st.empty()  # latency label

    if clear_btn:
        # Remove the widget state, then rerun so the text_area is recreated empty
        st.session_state.pop("in_text", None)
        st.rerun()

    out_status = st.empty()
    out_text_area = st.empty()

    if run_btn:
        text_to_send = (st.session_state.in_text or "").strip()
        if not text_to_send:
            st.warning("Please enter some text.")
        else:
            body = {"text": text_to_send, "sourceLang": source_lang, "targetLang": target_lang}
            started = time.perf_counter()
            try:
                resp = requests.post(f"{api_base}/translate", json=body, timeout=60)
                elapsed_ms = (time.perf_counter() - started) * 1000.0
                t_label.caption(f"⏱️ {elapsed_ms:.0f} ms")

                resp.raise_for_status()
                output = resp.json().get("translatedText", "")

                out_status.success("Done")
                out_text_area.text_area(f"Translation ({target_lang})", value=output, height=160, disabled=True)
                copy_to_clipboard_js(output, label=f"Copy {labels.get(target_lang, target_lang)}")

            except requests.HTTPError as e:
                try:
                    payload = resp.json()
                    detail = f"{payload.get('error')}: {payload.get('message')}"
                except Exception:
                    detail = str(e)
                st.error(f"HTTP {resp.status_code}: {detail}")
            except Exception as e:
                st.error(f"Request failed: {e}")


if __name__ == "__main__":
    main()
