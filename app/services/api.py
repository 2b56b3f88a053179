# app/services/api.py

import os
import requests
from dotenv import load_dotenv

load_dotenv()

# Base URL of the auth backend
API_URL = os.getenv("AUTH_API_URL", "http://localhost:3000")


# -------------------------------
# Authentication-related functions
# -------------------------------

def _post_credentials(path, username, password):
    try:
        res = requests.post(
            f"{API_URL}{path}",
            json={"username": username, "password": password},
            timeout=10,
        )
    except requests.RequestException as e:
        return {"message": f"Could not reach the server: {e}"}

    try:
        return res.json()
    except ValueError:
        return {"message": f"Unexpected response ({res.status_code})"}


def register_user(username, password):
    """
    Registers a new user and returns the server's JSON reply.
    """
    return _post_credentials("/register", username, password)


def login_user(username, password):
    """
    Logs in a user and returns the server's JSON reply.
    """
    return _post_credentials("/login", username, password)
