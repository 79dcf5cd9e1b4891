"""
Catalogue models for the MusicStore.

Genres, artists and the albums sold in the store.
"""

from . import db, utcnow


class Genre(db.Model):
    """Music genre used to browse the store."""

    __tablename__ = "genres"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(120), unique=True, nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)

    albums = db.relationship(
        "Album", back_populates="genre", order_by="Album.title", lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Genre {self.name}>"


class Artist(db.Model):
    """Recording artist."""

    __tablename__ = "artists"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(255), unique=True, nullable=False)

    albums = db.relationship("Album", back_populates="artist")

    def __repr__(self) -> str:
        return f"<Artist {self.name}>"


class Album(db.Model):
    """Album for sale."""

    __tablename__ = "albums"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    title = db.Column(db.String(160), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    album_art_url = db.Column(
        db.String(1024), nullable=False, default="/static/Images/placeholder.svg"
    )
    genre_id = db.Column(
        db.Integer, db.ForeignKey("genres.id", ondelete="CASCADE"), nullable=False
    )
    artist_id = db.Column(
        db.Integer, db.ForeignKey("artists.id", ondelete="CASCADE"), nullable=False
    )
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    genre = db.relationship("Genre", back_populates="albums")
    artist = db.relationship("Artist", back_populates="albums")

    __table_args__ = (
        db.Index("idx_albums_genre_id", "genre_id"),
        db.Index("idx_albums_artist_id", "artist_id"),
    )

    def __repr__(self) -> str:
        return f"<Album {self.title}>"
