# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sharelink.shared.config import DatabaseConfig
from sharelink.shared.logging import logger

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class Base(DeclarativeBase):
    pass


def build_engine(config: DatabaseConfig) -> Engine:
    if config.url in _MEMORY_URLS:
        # One shared connection, otherwise every checkout sees an empty database
        return create_engine(
            config.url,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    connect_args: dict[str, object] = {}
    if config.url.startswith("sqlite"):
        connect_args = {
            "check_same_thread": False,
            "timeout": int(config.pool_timeout),
        }

    return create_engine(
        config.url,
        echo=False,
        future=True,
        pool_pre_ping=True,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    # Imported for the side effect of registering the tables on Base.metadata
    from sharelink.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")
