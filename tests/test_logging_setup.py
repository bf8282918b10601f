# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# tests/test_logging_setup.py

import yaml
from loguru import logger

from pinman.system.logging_setup import setup_logging


class TestSetupLogging:
    def test_without_local_log(self, tmp_path):
        setup_logging()
        logger.warning("console only")
        assert list(tmp_path.iterdir()) == []

    def test_local_log_writes_file(self, isolated_config_env, tmp_path):
        log_dir = tmp_path / "logs"
        (isolated_config_env / "pinman.yml").write_text(
            yaml.safe_dump({"local_log": str(log_dir)})
        )

        setup_logging()
        logger.info("deleted something")
        logger.remove()

        log_file = log_dir / "pinman.log"
        assert log_file.exists()
        assert "deleted something" in log_file.read_text()

    def test_debug_flag_lowers_console_level(self, capsys):
        setup_logging(debug=True)
        logger.debug("verbose detail")
        assert "verbose detail" in capsys.readouterr().err

    def test_console_default_is_warning(self, capsys):
        setup_logging()
        logger.info("quiet detail")
        logger.warning("loud detail")
        err = capsys.readouterr().err
        assert "quiet detail" not in err
        assert "loud detail" in err

    def test_broken_config_does_not_raise(self, isolated_config_env, capsys):
        (isolated_config_env / "pinman.yml").write_text("port: [unclosed\n")

        setup_logging()

        assert "Failed to setup file logging" in capsys.readouterr().err
