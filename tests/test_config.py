from csvshape.config import ShapeConfig


def test_defaults(monkeypatch):
    for var in ("CSVSHAPE_DELIMITER", "CSVSHAPE_ROW_LIMIT", "CSVSHAPE_CLEANUP_COLUMNS"):
        monkeypatch.delenv(var, raising=False)
    cfg = ShapeConfig.from_env()
    assert cfg.delimiter == ","
    assert cfg.row_limit == -1
    assert cfg.cleanup_columns is True


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CSVSHAPE_DELIMITER", "\\t")
    monkeypatch.setenv("CSVSHAPE_ROW_LIMIT", "10")
    monkeypatch.setenv("CSVSHAPE_CLEANUP_COLUMNS", "no")
    cfg = ShapeConfig.from_env()
    assert cfg.delimiter == "\t"
    assert cfg.row_limit == 10
    assert cfg.cleanup_columns is False


def test_invalid_values_keep_defaults(monkeypatch):
    monkeypatch.setenv("CSVSHAPE_DELIMITER", ";;")
    monkeypatch.setenv("CSVSHAPE_ROW_LIMIT", "many")
    cfg = ShapeConfig.from_env()
    assert cfg.delimiter == ","
    assert cfg.row_limit == -1


def test_unknown_log_level_keeps_default(monkeypatch):
    monkeypatch.setenv("CSVSHAPE_LOG_LEVEL", "verbose")
    assert ShapeConfig.from_env().log_level == "WARNING"


def test_known_log_level_is_normalized(monkeypatch):
    monkeypatch.setenv("CSVSHAPE_LOG_LEVEL", "debug")
    assert ShapeConfig.from_env().log_level == "DEBUG"


def test_unusable_delimiters_keep_default(monkeypatch):
    for value in ('"', "\r", "\n"):
        monkeypatch.setenv("CSVSHAPE_DELIMITER", value)
        assert ShapeConfig.from_env().delimiter == ","


def test_bad_max_upload_bytes_is_warned(monkeypatch, caplog):
    monkeypatch.setenv("CSVSHAPE_MAX_UPLOAD_BYTES", "10MB")
    cfg = ShapeConfig.from_env()
    assert cfg.max_upload_bytes == 50_000_000
    assert "CSVSHAPE_MAX_UPLOAD_BYTES" in caplog.text
