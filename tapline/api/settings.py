from os import environ

from dotenv import load_dotenv

load_dotenv()

UNTAPPD_CLIENT_ID = environ.get("UNTAPPD_ID", "")
UNTAPPD_CLIENT_SECRET = environ.get("UNTAPPD_SECRET", "")
UNTAPPD_ACCESS_TOKEN = environ.get("UNTAPPD_TOKEN", "")

# 8338 looks kinda like "BEER"
UNTAPPD_REDIRECT_URL = environ.get("UNTAPPD_REDIRECT_URL", "http://localhost:8338/auth")
