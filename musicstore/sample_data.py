"""
Demo catalogue for the MusicStore.

initialize_music_store_database() seeds genres, artists and albums into an
empty catalogue. It is a no-op once any genre exists, so it can run on every
start.
"""

import logging
from decimal import Decimal

from musicstore.models import db, Album, Artist, Genre

logger = logging.getLogger(__name__)

GENRES = [
    ("Rock", "Rock and Roll is a form of rock music developed in the 1950s and 1960s"),
    ("Jazz", "Jazz is a type of music which originated in the United States"),
    ("Metal", "Heavy Metal is a genre of rock music"),
    ("Alternative", "Alternative rock is a genre of rock music"),
    ("Disco", "Disco is a style of dance music"),
    ("Blues", "The blues is a genre of music originating in the Deep South"),
    ("Latin", "Latin American music"),
    ("Reggae", "Reggae is a music genre first developed in Jamaica"),
    ("Pop", "Pop music is a genre of popular music"),
    ("Classical", "Classical music is the art music of Western culture"),
]

# (title, genre, artist, price)
ALBUMS = [
    ("A Copland Celebration, Vol. I", "Classical", "Aaron Copland & London Symphony Orchestra", "8.99"),
    ("Worlds", "Jazz", "Aaron Goldberg", "8.99"),
    ("For Those About To Rock We Salute You", "Rock", "AC/DC", "8.99"),
    ("Let There Be Rock", "Rock", "AC/DC", "8.99"),
    ("Balls to the Wall", "Rock", "Accept", "8.99"),
    ("Restless and Wild", "Rock", "Accept", "8.99"),
    ("Big Ones", "Rock", "Aerosmith", "8.99"),
    ("Jagged Little Pill", "Alternative", "Alanis Morissette", "8.99"),
    ("Facelift", "Rock", "Alice In Chains", "8.99"),
    ("Audioslave", "Rock", "Audioslave", "8.99"),
    ("Master Of Puppets", "Metal", "Metallica", "8.99"),
    ("Ride The Lightning", "Metal", "Metallica", "8.99"),
    ("The Number of The Beast", "Metal", "Iron Maiden", "8.99"),
    ("Kind of Blue", "Jazz", "Miles Davis", "8.99"),
    ("A Love Supreme", "Jazz", "John Coltrane", "8.99"),
    ("Saturday Night Fever", "Disco", "Bee Gees", "8.99"),
    ("Greatest Hits", "Disco", "Donna Summer", "8.99"),
    ("The Best Of Buddy Guy", "Blues", "Buddy Guy", "8.99"),
    ("King of the Blues", "Blues", "B.B. King", "8.99"),
    ("Acústico MTV", "Latin", "Os Paralamas Do Sucesso", "8.99"),
    ("Legend", "Reggae", "Bob Marley", "8.99"),
    ("Thriller", "Pop", "Michael Jackson", "8.99"),
    ("Like a Prayer", "Pop", "Madonna", "8.99"),
    ("The Four Seasons", "Classical", "Antonio Vivaldi", "8.99"),
]


def initialize_music_store_database() -> int:
    """
    Seed the demo catalogue if it is empty.

    Must be called inside an application context with the schema created.

    Returns:
        Number of albums created (0 if the catalogue already had data).
    """
    if db.session.query(Genre.id).first() is not None:
        logger.debug("Catalogue already seeded, skipping")
        return 0

    genres = {name: Genre(name=name, description=description) for name, description in GENRES}
    artists = {}
    for _, _, artist_name, _ in ALBUMS:
        if artist_name not in artists:
            artists[artist_name] = Artist(name=artist_name)

    db.session.add_all(genres.values())
    db.session.add_all(artists.values())

    for title, genre_name, artist_name, price in ALBUMS:
        db.session.add(
            Album(
                title=title,
                genre=genres[genre_name],
                artist=artists[artist_name],
                price=Decimal(price),
            )
        )

    db.session.commit()
    logger.info(f"Seeded catalogue with {len(GENRES)} genres and {len(ALBUMS)} albums")
    return len(ALBUMS)
