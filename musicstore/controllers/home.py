"""Home page."""

from flask import render_template

from musicstore.models import Album
from musicstore.routing import action, controller

FEATURED_ALBUM_COUNT = 6


@controller("Home")
class HomeController:
    @action("GET")
    def index(self):
        """Landing page with the most recently added albums."""
        albums = (
            Album.query.order_by(Album.created_at.desc(), Album.id.desc())
            .limit(FEATURED_ALBUM_COUNT)
            .all()
        )
        return render_template("home/index.html", albums=albums)
