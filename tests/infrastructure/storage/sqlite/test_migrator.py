"""Unit tests for database migrator."""

from pathlib import Path

import aiosqlite
import pytest

from stockflow.infrastructure.storage.sqlite.migrations import migrator
from stockflow.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationInfo,
    create_backup,
    discover_migrations,
    get_applied_migrations,
    get_current_version,
    get_migration_status,
    initialize_database,
    restore_backup,
    verify_schema_integrity,
)


class TestMigrationInfo:
    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v001_initial_schema.sql"
        migration_file.write_text("SELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "001"
        assert info.name == "initial_schema"
        assert len(info.checksum) == 16

    def test_from_file_rejects_bad_name(self, tmp_path: Path):
        bad = tmp_path / "initial.sql"
        bad.write_text("SELECT 1;")

        with pytest.raises(ValueError, match="Invalid migration filename"):
            MigrationInfo.from_file(bad)


class TestDiscoverMigrations:
    def test_finds_initial_schema(self):
        migrations = discover_migrations()
        assert migrations[0].version == "001"
        assert [m.version for m in migrations] == sorted(m.version for m in migrations)


class TestInitializeDatabase:
    async def test_creates_schema(self, temp_db_path: Path):
        results = await initialize_database(temp_db_path, create_backup_before=False)

        assert results
        assert all(r.success for r in results)
        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
            assert {"products", "stock_movements", "notifications"} <= tables
            assert await get_current_version(conn) == discover_migrations()[-1].version

    async def test_second_run_is_noop(self, migrated_db: Path):
        results = await initialize_database(migrated_db, create_backup_before=False)
        assert results == []

    async def test_backup_removed_after_success(self, migrated_db: Path):
        await initialize_database(migrated_db, create_backup_before=True)
        assert list(migrated_db.parent.glob("*.backup_*")) == []

    async def test_records_applied_versions(self, migrated_db: Path):
        async with aiosqlite.connect(migrated_db) as conn:
            applied = await get_applied_migrations(conn)
        assert "001" in applied


class TestSchemaConstraints:
    async def test_negative_quantity_rejected(self, migrated_db: Path):
        async with aiosqlite.connect(migrated_db) as conn:
            with pytest.raises(aiosqlite.IntegrityError):
                await conn.execute(
                    "INSERT INTO products (sku, name, quantity, created_at, updated_at) "
                    "VALUES ('NEG', 'Negative', -1, '2025-01-01', '2025-01-01')"
                )

    async def test_unknown_movement_type_rejected(self, migrated_db: Path):
        async with aiosqlite.connect(migrated_db) as conn:
            await conn.execute(
                "INSERT INTO products (sku, name, created_at, updated_at) "
                "VALUES ('P', 'P', '2025-01-01', '2025-01-01')"
            )
            with pytest.raises(aiosqlite.IntegrityError):
                await conn.execute(
                    "INSERT INTO stock_movements (product_id, movement_type, quantity, created_at) "
                    "VALUES (1, 'refund', 1, '2025-01-01')"
                )


class TestStatusAndVerify:
    async def test_status_for_missing_database(self, temp_db_path: Path):
        status = await get_migration_status(temp_db_path)
        assert status["exists"] is False
        assert "001" in status["pending_migrations"]

    async def test_status_after_migration(self, migrated_db: Path):
        status = await get_migration_status(migrated_db)
        assert status["exists"] is True
        assert status["pending_migrations"] == []

    async def test_verify_passes_on_fresh_schema(self, migrated_db: Path):
        checks = await verify_schema_integrity(migrated_db)
        assert {c["check"] for c in checks} == {
            "foreign_keys",
            "integrity",
            "required_tables",
            "non_negative_quantity",
        }
        assert all(c["status"] == "PASS" for c in checks)

    async def test_verify_reports_missing_tables(self, temp_db_path: Path):
        async with aiosqlite.connect(temp_db_path) as conn:
            await conn.execute("CREATE TABLE unrelated (id INTEGER)")
            await conn.commit()

        checks = {c["check"]: c for c in await verify_schema_integrity(temp_db_path)}
        assert checks["required_tables"]["status"] == "FAIL"
        assert "products" in checks["required_tables"]["missing"]


class TestBackup:
    def test_backup_and_restore(self, tmp_path: Path):
        db_path = tmp_path / "data.db"
        db_path.write_bytes(b"original")

        backup = create_backup(db_path)
        db_path.write_bytes(b"changed")
        restore_backup(db_path, backup)

        assert db_path.read_bytes() == b"original"


class TestFailedMigration:
    async def test_failure_stops_and_restores_backup(
        self, migrated_db: Path, tmp_path: Path, monkeypatch
    ):
        broken = tmp_path / "v999_broken.sql"
        broken.write_text("CREATE TABLE products (id INTEGER PRIMARY KEY);")
        discovered = [*discover_migrations(), MigrationInfo.from_file(broken)]
        monkeypatch.setattr(migrator, "discover_migrations", lambda: discovered)

        results = await initialize_database(migrated_db, create_backup_before=True)

        assert [(r.version, r.success) for r in results] == [("999", False)]
        assert "already exists" in results[0].error
        async with aiosqlite.connect(migrated_db) as conn:
            assert "999" not in await get_applied_migrations(conn)
        checks = await verify_schema_integrity(migrated_db)
        assert all(c["status"] == "PASS" for c in checks)

    async def test_versions_sort_numerically(self, tmp_path: Path):
        for name in ("v010_later.sql", "v002_second.sql", "v001_first.sql", "notes.sql"):
            (tmp_path / name).write_text("SELECT 1;")

        assert [m.version for m in discover_migrations(tmp_path)] == ["001", "002", "010"]
