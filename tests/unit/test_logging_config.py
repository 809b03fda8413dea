"""
Tests pour la configuration loguru.
"""

import json
import sys

from loguru import logger

from showsync.logging_config import configure_logging


class TestConfigureLogging:
    """Tests pour configure_logging."""

    def test_file_handler_writes_json_lines(self, tmp_path):
        """Le fichier de log contient un JSON par ligne, avec le niveau."""
        log_file = tmp_path / "logs" / "showsync.log"
        try:
            configure_logging(log_level="INFO", log_file=log_file)
            logger.critical("Erreur lors de la mise a jour des episodes")
        finally:
            logger.remove()
            logger.add(sys.stderr)

        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        levels = [r["record"]["level"]["name"] for r in records]
        assert "CRITICAL" in levels
        assert any(
            r["record"]["message"] == "Erreur lors de la mise a jour des episodes"
            for r in records
        )

    def test_trace_level_reaches_file(self, tmp_path):
        """En TRACE, le detail par episode est ecrit dans le fichier."""
        log_file = tmp_path / "showsync.log"
        try:
            configure_logging(log_level="TRACE", log_file=log_file)
            logger.trace("Mise a jour de [Breaking Bad] - S01E01")
        finally:
            logger.remove()
            logger.add(sys.stderr)

        assert "S01E01" in log_file.read_text()
