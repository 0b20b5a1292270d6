"""Shared test fixtures: settings, an in-memory fake session, and import contexts."""

import re
from collections import defaultdict
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError
from sqlalchemy.sql.dml import Insert

from co2_atlas.core.config import Settings
from co2_atlas.lib.geometry import AreaBounds, AreaFilter, CoordinateTransformer
from co2_atlas.lib.importer import DEVELOPMENT_CAPS, SourceLayout
from co2_atlas.services.feature_import import ImportContext

_TRUNCATE = re.compile(r"TRUNCATE TABLE (\w+)")


class FakeSession:
    """Async session stand-in that records inserts per table and honours TRUNCATE.

    ``fail_on`` is called with every statement; returning True makes that
    statement raise an OperationalError, as a lost connection or constraint
    violation would.
    """

    def __init__(self) -> None:
        self.rows: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.statements: list[str] = []
        self.upserts: list[str] = []
        self.commits = 0
        self.rollbacks = 0
        self.fail_on: Callable[[Any], bool] | None = None

    async def execute(self, stmt: Any, params: Any = None) -> MagicMock:
        if self.fail_on is not None and self.fail_on(stmt):
            raise OperationalError(str(stmt), {}, Exception("simulated failure"))
        if isinstance(stmt, Insert):
            compiled = stmt.compile(dialect=postgresql.dialect())
            self.rows[stmt.table.name].append(dict(compiled.params))
            if "ON CONFLICT" in str(compiled):
                self.upserts.append(stmt.table.name)
        else:
            sql = str(stmt)
            self.statements.append(sql)
            match = _TRUNCATE.match(sql)
            if match:
                self.rows.pop(match.group(1), None)
        return MagicMock()

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1

    def count(self, table: str) -> int:
        return len(self.rows.get(table, []))


# Salzburg / Upper Austria study region used across service tests
STUDY_BOUNDS = AreaBounds(12.0, 46.9, 15.0, 48.8)


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        database_url="postgresql+asyncpg://localhost/co2_atlas_test",
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
def fake_session() -> FakeSession:
    """In-memory session recording inserted rows."""
    return FakeSession()


@pytest.fixture
def layout(tmp_path: Path) -> SourceLayout:
    """Source layout rooted in a temporary data directory."""
    return SourceLayout(tmp_path)


@pytest.fixture
def context(fake_session: FakeSession, layout: SourceLayout) -> ImportContext:
    """Import context bounded to the study region with pass-through reprojection."""
    return ImportContext(
        session=fake_session,  # type: ignore[arg-type]
        transformer=CoordinateTransformer(candidates=[]),
        layout=layout,
        area=AreaFilter(STUDY_BOUNDS),
        caps=DEVELOPMENT_CAPS,
        simplify_tolerance=0.001,
    )


@pytest.fixture
def touch() -> Callable[[Path], Path]:
    """Create an empty placeholder file (and its parents) so existence checks pass."""

    def _touch(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")
        return path

    return _touch
