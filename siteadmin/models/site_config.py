# siteadmin/models/site_config.py
# Config store (one JSON blob per key) and its append-only history log
from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from sqlalchemy import BigInteger, DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from siteadmin.db.base import Base, JSONType


class HistoryAction(str, Enum):
    UPDATE = "update"
    RESTORE = "restore"


class SiteConfig(Base):
    __tablename__ = "site_configs"

    # human readable key, e.g. "首页", "案例展示", "页面可见性"
    key: Mapped[str] = mapped_column(Text, primary_key=True)
    value: Mapped[dict] = mapped_column(JSONType, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class SiteConfigHistory(Base):
    __tablename__ = "site_config_history"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer(), "sqlite"), primary_key=True, autoincrement=True
    )
    key: Mapped[str] = mapped_column(Text, nullable=False)

    value: Mapped[Any] = mapped_column(JSONType, nullable=False)
    previous_value: Mapped[Optional[Any]] = mapped_column(JSONType, nullable=True)
    # computed once at write time, never recomputed
    diff: Mapped[Optional[list]] = mapped_column(JSONType, nullable=True)

    action: Mapped[str] = mapped_column(String(32), nullable=False, default=HistoryAction.UPDATE.value)

    actor_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    actor_username: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    actor_email: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    actor_role: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    source_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("ix_site_config_history_key_created", "key", "created_at"),
    )
