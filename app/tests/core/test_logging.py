import structlog

from core.logging import bind_correlation_id, get_module_logger


def test_get_module_logger_binds_component():
    logger = get_module_logger()
    context = structlog.get_context(logger)
    assert context["component"] == "test_logging"
    assert context["module_path"].endswith("test_logging")


def test_bind_correlation_id_scoped_to_block():
    assert "correlation_id" not in structlog.contextvars.get_contextvars()

    with bind_correlation_id("corr-1"):
        assert structlog.contextvars.get_contextvars()["correlation_id"] == "corr-1"
        with bind_correlation_id("corr-2"):
            assert structlog.contextvars.get_contextvars()["correlation_id"] == "corr-2"
        assert structlog.contextvars.get_contextvars()["correlation_id"] == "corr-1"

    assert "correlation_id" not in structlog.contextvars.get_contextvars()


def test_bind_correlation_id_reset_on_error():
    try:
        with bind_correlation_id("corr-1"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert "correlation_id" not in structlog.contextvars.get_contextvars()
