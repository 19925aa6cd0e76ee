"""SQLAlchemy table definitions for Dischord.

Column types are kept portable so the same schema runs on PostgreSQL in
production and SQLite in tests. Derived values (vote tallies, member and
post lists) have no columns; they are aggregated at query time.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("username", Text, nullable=False, server_default=""),
    Column("email", Text, nullable=False, server_default=""),
    Column("created_at", DateTime, nullable=False),
)

# ============================================================================
# SERVERS TABLE
# ============================================================================
servers_table = Table(
    "servers",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", Text, nullable=False, server_default=""),
    Column("owner_id", String(64), nullable=False),
    Column("created_at", DateTime, nullable=False),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("server_id", String(64), nullable=False),
    Column("author_id", String(64), nullable=False),
    Column("title", Text, nullable=False, server_default=""),
    Column("body", Text, nullable=False, server_default=""),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

Index("idx_posts_server_id", posts_table.c.server_id)

# ============================================================================
# VOTES TABLE (one row per post/author pair)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column(
        "post_id",
        String(64),
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("author_id", String(64), primary_key=True),
    Column("value", Integer, nullable=False, server_default="0"),
    CheckConstraint("value BETWEEN -1 AND 1", name="vote_value_range"),
)

# ============================================================================
# FRIENDS TABLE (two symmetric rows per friendship)
# ============================================================================
friends_table = Table(
    "friends",
    metadata,
    Column("user_id", String(64), ForeignKey("users.id"), primary_key=True),
    Column("friend_id", String(64), ForeignKey("users.id"), primary_key=True),
)

# ============================================================================
# SERVER MEMBERS TABLE
# ============================================================================
server_members_table = Table(
    "server_members",
    metadata,
    Column("server_id", String(64), ForeignKey("servers.id"), primary_key=True),
    Column("user_id", String(64), ForeignKey("users.id"), primary_key=True),
)

Index("idx_server_members_user_id", server_members_table.c.user_id)

# ============================================================================
# MESSAGES TABLE
# ============================================================================
messages_table = Table(
    "messages",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("server_id", String(64), ForeignKey("servers.id"), nullable=False),
    Column("author_id", String(64), nullable=False),
    Column("content", Text, nullable=False, server_default=""),
    Column("created_at", DateTime, nullable=False),
    # Insertion order, breaks ties between equal timestamps
    Column("seq", Integer, nullable=False, server_default="0"),
)

Index(
    "idx_messages_server_created",
    messages_table.c.server_id,
    messages_table.c.created_at,
    messages_table.c.seq,
)
