from groupkit.config import settings
from groupkit.database import engine_options


def test_sqlite_gets_no_pool_sizing():
    options = engine_options("sqlite:///./groupkit.db")

    assert options["connect_args"] == {"check_same_thread": False}
    assert "pool_size" not in options
    assert "max_overflow" not in options


def test_in_memory_sqlite():
    options = engine_options("sqlite:///:memory:")
    assert "pool_size" not in options


def test_server_backend_uses_configured_pool():
    options = engine_options("postgresql://groupkit:secret@db:5432/groupkit")

    assert options["pool_size"] == settings.DB_POOL_SIZE
    assert options["max_overflow"] == settings.DB_MAX_OVERFLOW
    assert options["pool_pre_ping"] is True
    assert "connect_args" not in options
