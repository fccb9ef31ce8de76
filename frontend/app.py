# frontend/app.py
# Asset Manager – inventory list, stat cards and create/edit forms
#
# Run from repo root: streamlit run frontend/app.py
# Or from frontend folder: streamlit run app.py

from __future__ import annotations

import streamlit as st

# Imports work both as a package and with frontend/ as the script directory
try:
    from frontend.asset_state import (
        close_form,
        dismiss_error,
        init_state,
        open_form,
        refresh_assets_if_needed,
        retry,
        run_operation,
    )
    from frontend.asset_view import assets_to_frame, build_payload, compute_stats, form_values, format_asset_id
    from frontend.config import ENV, IS_LOCAL, get_api_base_url
except ModuleNotFoundError:
    from asset_state import (
        close_form,
        dismiss_error,
        init_state,
        open_form,
        refresh_assets_if_needed,
        retry,
        run_operation,
    )
    from asset_view import assets_to_frame, build_payload, compute_stats, form_values, format_asset_id
    from config import ENV, IS_LOCAL, get_api_base_url

st.set_page_config(page_title="Asset Manager", page_icon="📦", layout="wide")

ss = st.session_state
init_state(ss)


# --------------------------------------------------------------------
# Rendering
# --------------------------------------------------------------------


def render_header() -> None:
    cols = st.columns([6, 1])
    with cols[0]:
        st.caption("ASSET PLATFORM")
        st.title("Asset Manager")
        st.caption("Track named items, their category, and how many you have on hand.")
    with cols[1]:
        if st.button("➕ Add asset", key="open_create_btn", use_container_width=True):
            open_form(ss, "create")
            st.rerun()


def render_sidebar() -> None:
    with st.sidebar:
        st.markdown("### Backend")
        try:
            api_base = get_api_base_url()
            st.caption(f"**API:** {api_base}" if IS_LOCAL else f"**Environment:** {ENV}")
        except (RuntimeError, ValueError) as e:
            st.error(f"⚠️ API config error: {str(e)[:80]}")

        if st.button("🔄 Refresh list", key="refresh_btn", use_container_width=True):
            ss["_refresh_assets"] = True
            st.rerun()


def render_error_banner() -> None:
    error = ss.get("_last_error")
    if not error:
        return

    st.error(f"❌ {error['message']}")
    col_retry, col_dismiss, _ = st.columns([1, 1, 6])
    with col_retry:
        if st.button("Retry", key="retry_btn", use_container_width=True):
            retry(ss)
            st.rerun()
    with col_dismiss:
        if st.button("Dismiss", key="dismiss_btn", use_container_width=True):
            dismiss_error(ss)
            st.rerun()


def render_stats() -> None:
    stats = compute_stats(ss.get("assets") or [])
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total assets", stats["total_assets"])
    c2.metric("Units on hand", stats["total_units"])
    c3.metric("Categories", stats["categories"])
    c4.metric("Uncategorized", stats["uncategorized"])


def render_form() -> None:
    mode = ss.get("form_mode")
    if not mode:
        return

    asset = ss.get("editing_asset") if mode == "edit" else None
    values = form_values(asset)
    title = "Add asset" if mode == "create" else f"Update asset {format_asset_id(asset['id'])}"
    primary_label = "Create asset" if mode == "create" else "Save changes"

    with st.form(key=f"asset_form_{mode}", clear_on_submit=False):
        st.subheader(title)
        st.caption("Give your record a name, optional category, and a quantity for tracking.")
        name = st.text_input("Asset name", value=values["name"], placeholder="e.g. Studio Camera")
        category = st.text_input("Category", value=values["category"], placeholder="e.g. Equipment")
        quantity = st.number_input("Quantity", min_value=1, step=1, value=max(int(values["quantity"]), 1))

        col_submit, col_cancel, _ = st.columns([1, 1, 4])
        submitted = col_submit.form_submit_button(primary_label)
        cancelled = col_cancel.form_submit_button("Cancel")

    if cancelled:
        close_form(ss)
        st.rerun()

    if submitted:
        payload = build_payload(name, category, int(quantity))
        if payload is None:
            st.warning("Asset name is required.")
            return

        if mode == "create":
            op = {"action": "create", "payload": payload}
        else:
            op = {"action": "update", "asset_id": asset["id"], "payload": payload}

        if run_operation(ss, op):
            close_form(ss)
        st.rerun()


def render_table() -> None:
    assets = ss.get("assets")
    if assets is None:
        st.info("Loading the latest assets...")
        return

    if not assets:
        st.markdown("#### No assets yet")
        st.caption("Start by adding your first piece of inventory.")
        return

    st.dataframe(assets_to_frame(assets), hide_index=True, use_container_width=True)

    st.markdown("##### Actions")
    for asset in assets:
        c_label, c_edit, c_delete = st.columns([6, 1, 1])
        c_label.write(f"{format_asset_id(asset['id'])} · {asset['name']}")
        if c_edit.button("Edit", key=f"edit_{asset['id']}", use_container_width=True):
            run_operation(ss, {"action": "load", "asset_id": asset["id"]})
            st.rerun()
        if c_delete.button("Delete", key=f"delete_{asset['id']}", use_container_width=True):
            run_operation(ss, {"action": "delete", "asset_id": asset["id"]})
            st.rerun()


def main() -> None:
    refresh_assets_if_needed(ss)

    render_sidebar()
    render_header()
    render_error_banner()
    render_stats()
    render_form()
    render_table()


if __name__ == "__main__":
    main()
