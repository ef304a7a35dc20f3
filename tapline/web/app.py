from flask import Flask, redirect

from ..api.settings import UNTAPPD_CLIENT_ID, UNTAPPD_CLIENT_SECRET, UNTAPPD_REDIRECT_URL
from ..api.untappd.auth import TokenHandler, authenticate_url, oauth_blueprint


def create_app(
    client_id: str = UNTAPPD_CLIENT_ID,
    client_secret: str = UNTAPPD_CLIENT_SECRET,
    redirect_url: str = UNTAPPD_REDIRECT_URL,
    on_token: TokenHandler | None = None,
) -> Flask:
    app = Flask(__name__)
    app.register_blueprint(oauth_blueprint(client_id, client_secret, redirect_url, on_token=on_token))
    login_url = authenticate_url(client_id, redirect_url)

    @app.route("/")
    @app.route("/login")
    def login():
        return redirect(login_url)

    app.config["UNTAPPD_LOGIN_URL"] = login_url
    return app
