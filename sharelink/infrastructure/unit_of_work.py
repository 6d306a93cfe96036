# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Transaction scope for the SQLAlchemy-backed stores."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from sharelink.domain.exceptions import UnavailableError
from sharelink.shared.logging import logger


@contextmanager
def unit_of_work_scope(factory: Callable[[], Session]) -> Iterator[Session]:
    """Yield a session that commits on clean exit and rolls back otherwise.

    A lost or unreachable database surfaces as ``UnavailableError("database")``;
    every other error propagates unchanged after the rollback.
    """
    session = factory()
    try:
        yield session
        session.commit()
    except (OperationalError, InterfaceError) as exc:
        session.rollback()
        logger.error(f"uow: database unavailable ({type(exc).__name__})")
        raise UnavailableError("database") from exc
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = ["unit_of_work_scope"]
