"""Shared repository plumbing."""

import logging
from typing import Any, ClassVar

from sqlalchemy import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, func, select

from mypod.exceptions import ConstraintError, ValidationError

logger = logging.getLogger(__name__)


def ref_id(ref: Any) -> int | None:
    """Return the id of an entity or pass a bare id through.

    ``None`` resolves to ``None``.
    """
    if ref is None:
        return None
    if isinstance(ref, int):
        return ref
    return ref.id


def required_ref_id(ref: Any, kind: str) -> int | None:
    """Like ref_id, but a missing argument is a validation error.

    An entity whose id is still unset (e.g. an unsaved playlist) yields
    ``None`` so the caller reports it as not found.
    """
    if ref is None:
        raise ValidationError(f"{kind} is required")
    return ref_id(ref)


class Repository:
    """Base for repositories keyed by a single integer id.

    Every public operation opens its own session, which commits on
    success and is rolled back when the session closes after a failure.
    """

    row_type: ClassVar[type[SQLModel]]
    label: ClassVar[str]

    def __init__(self, engine: Engine) -> None:
        """Initialize repository with database engine."""
        self._engine = engine

    def exists_by_id(self, id: int | None) -> bool:
        """Check whether a row with exactly this id is stored."""
        if id is None:
            return False
        with Session(self._engine) as session:
            return session.get(self.row_type, id) is not None

    def count(self) -> int:
        """Count stored rows."""
        with Session(self._engine) as session:
            stmt = select(func.count()).select_from(self.row_type)
            return session.exec(stmt).one()

    def _insert(self, row: Any) -> None:
        """Insert a new row; never updates an existing one.

        Raises:
            ConstraintError: If the id already exists or a foreign key
                does not resolve.
        """
        row_id = row.id
        with Session(self._engine) as session:
            session.add(row)
            try:
                session.commit()
            except IntegrityError as e:
                logger.warning("Rejected %s %s: %s", self.label, row_id, e.orig)
                raise ConstraintError(
                    f"Cannot save {self.label} {row_id}: {e.orig}"
                ) from e
