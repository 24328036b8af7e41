import pytest

from fakes import FakePool
from techconnect.domain.announcements.service import build_stores
from techconnect.infra.schema import ensure_schema


@pytest.mark.asyncio
async def test_ensure_schema_creates_users_and_one_table_per_club():
    pool = FakePool()
    await ensure_schema(pool, build_stores(["iet", "acm"]).values())

    statements = pool.db.statements
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS users")
    assert "CHECK (role IN ('user', 'admin', 'iet', 'ieee', 'acm', 'ie', 'iste'))" in statements[0]
    assert statements[1].startswith("CREATE UNIQUE INDEX IF NOT EXISTS users_email_key")
    assert [s.split()[5] for s in statements[2:]] == ["announcements_iet", "announcements_acm"]
