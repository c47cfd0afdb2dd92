from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.constants import AUTH_API_PREFIX
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service

    def system_auth_required(message: str):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                if not session.get("system_authenticated"):
                    return jsonify({"error": message}), 401
                return view(*args, **kwargs)

            return wrapper

        return decorator

    @app.route(f"{AUTH_API_PREFIX}/check", methods=["GET"], endpoint="auth_check")
    def auth_check():
        system_ok = bool(session.get("system_authenticated"))
        user = session.get("user")
        if system_ok and user:
            return jsonify({"authenticated": True, "user": user})
        return jsonify({"authenticated": False, "systemAuthenticated": system_ok})

    @app.route(f"{AUTH_API_PREFIX}/system", methods=["POST"], endpoint="auth_system")
    def auth_system():
        payload = request.get_json(silent=True) or {}
        try:
            auth.verify_system_password(payload.get("password") or "")
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except AuthenticationError as e:
            return jsonify({"error": str(e)}), 401
        except Exception:
            logger.exception("System authentication error")
            return jsonify({"error": "System authentication failed"}), 500

        session["system_authenticated"] = True
        return jsonify({"success": True, "message": "System authenticated"})

    @app.route(f"{AUTH_API_PREFIX}/users", methods=["GET"], endpoint="auth_users")
    @system_auth_required("System authentication required")
    def auth_users():
        try:
            users = auth.list_users()
        except Exception:
            logger.exception("Error fetching users")
            return jsonify({"error": "Failed to fetch users"}), 500
        return jsonify([u.to_dict() for u in users])

    @app.route(f"{AUTH_API_PREFIX}/user", methods=["POST"], endpoint="auth_user")
    @system_auth_required("System authentication required first")
    def auth_user():
        payload = request.get_json(silent=True) or {}
        try:
            s_user = auth.verify_user_pin(payload.get("userId"), payload.get("pin") or "")
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except AuthenticationError as e:
            return jsonify({"error": str(e)}), 401
        except Exception:
            logger.exception("User PIN verification error")
            return jsonify({"error": "PIN verification failed"}), 500

        session["user"] = s_user.to_dict()
        logger.info("User %s signed in", s_user.username)
        return jsonify({"success": True, "user": session["user"]})

    @app.route(f"{AUTH_API_PREFIX}/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out successfully"})

    @app.route(f"{AUTH_API_PREFIX}/change-user", methods=["POST"], endpoint="auth_change_user")
    @system_auth_required("System authentication required")
    def auth_change_user():
        session.pop("user", None)
        return jsonify({"success": True, "message": "User session cleared"})
