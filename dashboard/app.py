"""Streamlit dashboard for playing Concierge against the local API."""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd
import requests
import streamlit as st

from concierge.utils.config import get_settings

# ==========================================
# Configuration & Constants
# ==========================================
API_BASE_URL = get_settings().api_base_url

st.set_page_config(
    page_title="Concierge",
    page_icon="🛎️",
    layout="wide",
)


# ==========================================
# API Helper Functions
# ==========================================
def _format_error_detail(response: requests.Response) -> str:
    """Render an API error body as one line, whatever shape it has."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason or str(response.status_code)

    detail = payload.get("detail", payload) if isinstance(payload, dict) else payload
    if isinstance(detail, list):
        # pydantic validation errors: [{"loc": ["body", "field"], "msg": "..."}]
        parts = []
        for item in detail:
            if isinstance(item, dict):
                location = ".".join(str(part) for part in item.get("loc", ())[1:])
                message = item.get("msg", str(item))
                parts.append(f"{location}: {message}" if location else message)
            else:
                parts.append(str(item))
        return "; ".join(parts)
    return str(detail)


def _call(method: str, path: str, payload: Optional[dict[str, Any]] = None) -> Optional[Any]:
    try:
        response = requests.request(
            method,
            f"{API_BASE_URL}{path}",
            json=payload,
            timeout=5,
        )
        response.raise_for_status()
        return response.json()
    except requests.exceptions.HTTPError as e:
        detail = _format_error_detail(e.response) if e.response is not None else str(e)
        st.error(f"Request rejected: {detail}")
        return None
    except requests.exceptions.RequestException as e:
        st.error(f"Could not reach the Concierge API: {e}")
        return None


def fetch_status() -> Optional[dict[str, Any]]:
    return _call("GET", "/status")


def fetch_requests() -> list[dict[str, Any]]:
    return _call("GET", "/requests") or []


def start_game(hotel_name: str, size: str, seed: Optional[int]) -> Optional[dict[str, Any]]:
    payload: dict[str, Any] = {"hotel_name": hotel_name, "size": size}
    if seed is not None:
        payload["seed"] = seed
    return _call("POST", "/games", payload)


def resolve(index: int, decision: str) -> Optional[dict[str, Any]]:
    return _call("POST", f"/requests/{index}/resolve", {"decision": decision})


def advance_day() -> Optional[dict[str, Any]]:
    return _call("POST", "/advance_day")


def fetch_guest(uid: int) -> Optional[dict[str, Any]]:
    return _call("GET", f"/guests/{uid}")


# ==========================================
# UI Page Functions
# ==========================================
def render_setup_page() -> None:
    st.header("🏨 Setup")
    st.markdown("Name your hotel and choose its size.")

    hotel_name = st.text_input("Hotel name", value="Hotel")
    size = st.selectbox("Hotel size", ["small", "medium", "large"], index=1)
    use_seed = st.checkbox("Fixed random seed")
    seed = st.number_input("Seed", min_value=0, value=42) if use_seed else None

    if st.button("Start game", type="primary"):
        result = start_game(hotel_name, size, int(seed) if seed is not None else None)
        if result:
            st.success(f"{result['hotel_name']} is open for business.")


def render_status_panel(status: dict[str, Any]) -> None:
    st.sidebar.subheader(status["hotel_name"])
    st.sidebar.write(f"Day: {status['day']}")
    st.sidebar.progress(
        status["reputation"] / status["reputation_max"],
        text=f"Reputation: {status['reputation']} / {status['reputation_max']}",
    )
    st.sidebar.markdown("**Vacant Rooms**")
    for row in status["rooms"]:
        st.sidebar.write(f"{row['quality']}: {row['vacant']} / {row['total']}")


def render_game_page() -> None:
    st.header("🛎️ Front Desk")

    if st.button("Next day", type="primary"):
        if advance_day():
            st.rerun()

    requests_today = fetch_requests()
    if not requests_today:
        st.info("No requests waiting. Advance to the next day.")
        return

    for row in requests_today:
        with st.container(border=True):
            st.subheader(f"{row['guest_name']} ({row['request_type']})")
            st.write(row["prompt_text"])
            accept_col, decline_col = st.columns(2)
            if accept_col.button(
                row["accept_label"],
                key=f"accept-{row['index']}-{row['guest_uid']}",
                disabled=not row["can_accept"],
            ):
                resolve(row["index"], "accept")
                st.rerun()
            if decline_col.button(
                row["decline_label"],
                key=f"decline-{row['index']}-{row['guest_uid']}",
            ):
                resolve(row["index"], "decline")
                st.rerun()


def render_reservations_page() -> None:
    st.header("📅 Reservations")
    reservations = _call("GET", "/reservations") or []
    if reservations:
        st.dataframe(pd.DataFrame(reservations), use_container_width=True)
    else:
        st.info("No upcoming reservations.")


def render_guest_card(uid: int) -> None:
    guest = fetch_guest(uid)
    if not guest:
        return
    with st.container(border=True):
        st.subheader(guest["name"])
        st.write(f"Membership: {guest['membership_level']}")
        st.write(f"Times stayed: {guest['times_stayed']}")
        if guest["room_number"] is not None:
            st.write(f"Room: {guest['room_number']}")
        reservation = guest["reservation"]
        if reservation:
            st.write(
                f"Reservation: {reservation['room_quality']} room, "
                f"day {reservation['check_in_day']} to {reservation['check_out_day']}"
            )


def render_current_guests_page() -> None:
    st.header("🧳 Current Guests")
    guests = _call("GET", "/guests/current") or []
    if not guests:
        st.info("The hotel is empty.")
        return

    df = pd.DataFrame(guests).drop(columns=["reservation", "is_current_guest"])
    st.dataframe(df, use_container_width=True)

    uid = st.selectbox("Guest", [guest["uid"] for guest in guests])
    render_guest_card(uid)
    if st.button("Evict guest"):
        result = _call("POST", f"/guests/{uid}/evict")
        if result:
            st.warning(f"Guest {uid} evicted. Reputation is now {result['reputation']}.")


# ==========================================
# Main App Router
# ==========================================
def main() -> None:
    st.sidebar.title("Concierge")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigation",
        ["Setup", "Front Desk", "Reservations", "Current Guests"],
    )

    st.sidebar.markdown("---")
    status = fetch_status()
    if status:
        render_status_panel(status)

    if page == "Setup":
        render_setup_page()
    elif page == "Front Desk":
        render_game_page()
    elif page == "Reservations":
        render_reservations_page()
    elif page == "Current Guests":
        render_current_guests_page()


if __name__ == "__main__":
    main()
