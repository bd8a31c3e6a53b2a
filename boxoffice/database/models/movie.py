"""Movie model for collected box-office rows.

One row per (title, source, scrape time): re-scraping a title creates
a new row, so history is kept and rows are never updated.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from boxoffice.database.models.base import Base

MOVIE_UNIQUE_COLUMNS = ("title", "source", "scraped_at")
"""Columns of the insert-or-ignore conflict target."""


class Movie(Base):
    """Box-office figures for a movie, as scraped from one source.

    Attributes:
        id: Primary key.
        rank: Chart position in the source.
        title: Movie title (year suffix removed).
        year: Release year.
        total_gross: Worldwide (or backfilled domestic) gross.
        source: Provenance of the row.
        scraped_at: Time the figures were collected.
    """

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rank: Mapped[int | None] = mapped_column(Integer)
    title: Mapped[str] = mapped_column(String(500), nullable=False, default="Unknown")
    year: Mapped[int | None] = mapped_column(Integer)

    # Gross figures (whole currency units)
    weekend_gross: Mapped[int | None] = mapped_column(BigInteger)
    total_gross: Mapped[int | None] = mapped_column(BigInteger)
    domestic_gross: Mapped[int | None] = mapped_column(BigInteger)
    international_gross: Mapped[int | None] = mapped_column(BigInteger)

    rating: Mapped[Decimal | None] = mapped_column(Numeric(4, 1))
    release_date: Mapped[str | None] = mapped_column(String(100))
    source: Mapped[str] = mapped_column(String(100), nullable=False, default="Unknown")
    url: Mapped[str | None] = mapped_column(Text)

    scraped_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint(*MOVIE_UNIQUE_COLUMNS, name="uq_movies_title_source_scraped"),
        Index("idx_movies_title", "title"),
        Index("idx_movies_source", "source"),
        Index("idx_movies_scraped_at", "scraped_at"),
        Index("idx_movies_rank", "rank"),
        Index("idx_movies_total_gross", "total_gross"),
        Index("idx_movies_year", "year"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Movie(title='{self.title}', source='{self.source}', year={self.year})>"
