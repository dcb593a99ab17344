"""Worship ministry models - teams, songs and setlists."""

from datetime import date, datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Column, Text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlmodel import Field, SQLModel

from src.churchhub.models.base import utc_now


class WorshipTeam(SQLModel, table=True):
    __tablename__ = "worship_teams"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID
    name: str = Field(max_length=255)
    description: str | None = Field(default=None)
    leader_id: UUID
    ministry: str = Field(max_length=100)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class WorshipTeamMember(SQLModel, table=True):
    """Membership of a church member in a worship team."""

    __tablename__ = "worship_team_members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID
    team_id: UUID = Field(foreign_key="worship_teams.id", ondelete="CASCADE")
    member_id: UUID = Field(foreign_key="members.id", ondelete="CASCADE")
    role: str = Field(max_length=100)
    instrument: str | None = Field(default=None, max_length=100)
    skills: list[str] | None = Field(default=None, sa_column=Column(ARRAY(Text), nullable=True))
    availability: dict[str, Any] | None = Field(
        default=None, sa_column=Column(JSONB, nullable=True)
    )
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)


class Song(SQLModel, table=True):
    __tablename__ = "songs"
    __table_args__ = (
        CheckConstraint("difficulty IN ('easy', 'medium', 'hard')", name="ck_songs_difficulty"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(index=True)
    title: str = Field(max_length=255)
    artist: str | None = Field(default=None, max_length=255)
    key: str | None = Field(default=None, max_length=10)
    tempo: int | None = Field(default=None)
    genre: str | None = Field(default=None, max_length=100)
    lyrics: str | None = Field(default=None)
    chords: str | None = Field(default=None)
    ccli_number: str | None = Field(default=None, max_length=50)
    duration: int | None = Field(default=None)  # seconds
    difficulty: str | None = Field(default=None, max_length=20)  # SongDifficulty value
    tags: list[str] | None = Field(default=None, sa_column=Column(ARRAY(Text), nullable=True))
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Setlist(SQLModel, table=True):
    __tablename__ = "setlists"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID
    name: str = Field(max_length=255)
    event_date: date
    event_type: str = Field(max_length=100)
    team_id: UUID = Field(foreign_key="worship_teams.id")
    notes: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class SetlistSong(SQLModel, table=True):
    __tablename__ = "setlist_songs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID
    setlist_id: UUID = Field(foreign_key="setlists.id", ondelete="CASCADE")
    song_id: UUID = Field(foreign_key="songs.id")
    song_order: int
    key: str | None = Field(default=None, max_length=10)
    notes: str | None = Field(default=None)
