# app/ui/login.py

import json
import streamlit as st
from app.services.api import login_user, register_user


def auth_page():
    if "is_login" not in st.session_state:
        st.session_state["is_login"] = True
    if "message" not in st.session_state:
        st.session_state["message"] = ""

    is_login = st.session_state["is_login"]
    action = "Login" if is_login else "Register"

    st.title(action)

    with st.form("auth_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button(action, use_container_width=True)

    if submitted:
        submit = login_user if is_login else register_user
        with st.spinner(f"{action}..."):
            result = submit(username, password)
        st.session_state["message"] = json.dumps(result)

    if st.button(f"Switch to {'Register' if is_login else 'Login'}", use_container_width=True):
        st.session_state["is_login"] = not is_login
        st.session_state["message"] = ""
        st.rerun()

    if st.session_state["message"]:
        st.text(st.session_state["message"])
