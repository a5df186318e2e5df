from postsync.logger import add_file_handler, logger, setup_logger


def test_setup_is_idempotent():
    before = len(logger.handlers)
    assert setup_logger() is logger
    assert len(logger.handlers) == before


def test_file_handler_persists_messages(tmp_path):
    path = tmp_path / "postsync.log"
    handler = add_file_handler(logger, str(path))
    try:
        logger.error("❌ Error in file broken.md")
    finally:
        logger.removeHandler(handler)
        handler.close()

    text = path.read_text(encoding="utf-8")
    assert "ERROR - ❌ Error in file broken.md" in text
