import os
from datetime import datetime
from pathlib import Path

from loguru import logger

from assessment.commons.types import LoggingCfg


def setup_logging(cfg: LoggingCfg):
    """Sink diario en <root>/YYYY/MM/DD/app.log mas consola. LOG_LEVEL pisa el nivel."""
    level = os.getenv("LOG_LEVEL", cfg.level).upper()
    logdir = Path(cfg.root) / datetime.now().strftime("%Y/%m/%d")
    logdir.mkdir(parents=True, exist_ok=True)
    logger.remove()
    logger.add(
        str(logdir / "app.log"),
        rotation="00:00",
        retention=f"{cfg.retention_days} days",
        level=level,
        enqueue=True,
        backtrace=True,
        # Sin valores de variables en trazas: los headers llevan la API key
        diagnose=False,
    )
    logger.add(lambda m: print(m, end=""), level=level, format=cfg.console_format)
    return logger
