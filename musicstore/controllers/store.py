"""
Store browsing controller.

Genre list, albums by genre and album details.
"""

from flask import abort, render_template, request

from musicstore.models import db, Album, Genre
from musicstore.routing import action, controller


@controller("Store")
class StoreController:
    @action("GET")
    def index(self):
        """List all genres."""
        genres = Genre.query.order_by(Genre.name).all()
        return render_template("store/index.html", genres=genres)

    @action("GET")
    def browse(self):
        """List the albums of the genre named in the query string."""
        name = request.args.get("genre", "").strip()
        genre = Genre.query.filter_by(name=name).first() if name else None
        if genre is None:
            abort(404)
        return render_template("store/browse.html", genre=genre, albums=genre.albums)

    @action("GET")
    def details(self):
        """Show a single album."""
        album_id = request.args.get("id", type=int)
        if album_id is None:
            abort(404)
        album = db.session.get(Album, album_id)
        if album is None:
            abort(404)
        return render_template("store/details.html", album=album)
