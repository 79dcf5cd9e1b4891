"""
Account controller.

Log on against the configured user store and log off.
"""

from flask import current_app, flash, redirect, render_template, request

from musicstore.core.security import login_user, logout_user
from musicstore.identity import StoreUnavailable, get_identity_stores
from musicstore.routing import action, action_url, controller


@controller("Account")
class AccountController:
    @action("GET", "POST")
    def logon(self):
        """User log on page."""
        if request.method == "POST":
            username = request.form.get("username", "").strip()
            password = request.form.get("password", "")

            users = get_identity_stores(current_app).users
            try:
                user = users.find_by_username(username)
                authenticated = user is not None and user.check_password(password)
                if authenticated:
                    users.record_login(user.id)
            except StoreUnavailable:
                flash("Log on is temporarily unavailable", "error")
                return render_template("account/logon.html"), 503

            if authenticated:
                login_user(user)
                current_app.logger.info(f"User '{username}' logged on")
                next_page = request.args.get("next")
                if next_page and next_page.startswith("/") and not next_page.startswith("//"):
                    return redirect(next_page)
                return redirect(action_url("Home"))

            current_app.logger.info(f"Failed log on for '{username or 'unknown'}'")
            flash("Invalid username or password", "error")

        return render_template("account/logon.html")

    @action("GET", "POST")
    def logoff(self):
        """User log off."""
        logout_user()
        flash("You have been logged off", "info")
        return redirect(action_url("Home"))
