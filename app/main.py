# app/main.py

import streamlit as st
from dotenv import load_dotenv
from app.ui.login import auth_page


load_dotenv()


st.set_page_config(page_title="Simple Auth", layout="centered")

auth_page()
