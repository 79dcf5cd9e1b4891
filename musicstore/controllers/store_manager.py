"""Album management, restricted to administrators."""

from flask import render_template

from musicstore.core.security import require_admin
from musicstore.models import Album, Artist, Genre
from musicstore.routing import action, controller


@controller("StoreManager")
class StoreManagerController:
    @action("GET")
    @require_admin
    def index(self):
        albums = (
            Album.query.join(Genre).join(Artist)
            .order_by(Genre.name, Artist.name, Album.title)
            .all()
        )
        return render_template("storemanager/index.html", albums=albums)
