from __future__ import annotations

import time
from datetime import datetime, timezone
from functools import wraps

from flask import Flask, jsonify, redirect, render_template, session, url_for

from ..core.constants import AUTH_API_PREFIX
from ..container import Container


def _logged_in() -> bool:
    return bool(session.get("system_authenticated")) and bool(session.get("user"))


def register(app: Flask, container: Container) -> None:
    started_at = time.monotonic()

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not _logged_in():
                return redirect(url_for("login_page"))
            return view(*args, **kwargs)

        return wrapper

    def guest_only(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if _logged_in():
                return redirect(url_for("dashboard"))
            return view(*args, **kwargs)

        return wrapper

    @app.route("/", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        return render_template("index.html", current_user=session["user"])

    @app.route("/login", methods=["GET"], endpoint="login_page")
    @guest_only
    def login_page():
        return render_template("login.html", auth_api_prefix=AUTH_API_PREFIX)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify(
            {
                "status": "healthy",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "uptime": round(time.monotonic() - started_at, 3),
            }
        )

    @app.route("/api", methods=["GET"], endpoint="api_info")
    def api_info():
        return jsonify(
            {
                "name": "Soldier Sign-Out System API",
                "version": "0.1.0",
                "endpoints": {"auth": AUTH_API_PREFIX},
            }
        )
